"""Side-by-side comparison of accelerators.

Derives per-accelerator metrics, converts them into 0-100 chart scores,
ranks them, and estimates the combined task impact of using several
accelerators together.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence

from src.adoption_engine.config import (
    ADOPTION_THRESHOLD_PERCENT,
    IMPACT_SCORE_SCALE,
    NORMALIZATION_REFERENCES,
    RANKABLE_METRICS,
    ROI_COST_SCALE,
    ROI_SCORE_SCALE,
    SKILLS_SCORE_SCALE,
    SORT_ORDERS,
    SYNERGY_BONUS_RATE,
)
from src.adoption_engine.curve_model import CurveModel
from src.adoption_engine.errors import InvalidParameter
from src.adoption_engine.models import (
    AcceleratorDefinition,
    CombinedTaskImpact,
    DerivedMetrics,
    NormalizedScores,
)

logger = logging.getLogger(__name__)


def _inverted_score(value: float, reference: float) -> float:
    return 100.0 - min(100.0, value / reference * 100.0)


class ComparisonAggregator:
    """Compare accelerators on adoption speed, impact, cost and skills.

    Each accelerator is evaluated independently; the aggregator keeps no
    state between calls.
    """

    def __init__(self, curve_model: Optional[CurveModel] = None):
        self.curve_model = curve_model or CurveModel()

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def compute_derived_metrics(self, accelerator: AcceleratorDefinition) -> DerivedMetrics:
        """Derive comparison metrics for one accelerator.

        * ``time_to_adoption``: first sprint whose interpolated
          effectiveness reaches ``ADOPTION_THRESHOLD_PERCENT``, or the last
          point's sprint if the threshold is never reached.
        * ``avg_task_impact``: mean task impact multiplier (0 if none).
        * ``skills_coverage``: number of distinct applicable skills.
        * ``comparative_roi_score``: impact times final effectiveness per
          ``ROI_COST_SCALE`` of implementation cost.
        """
        curve = sorted(accelerator.adoption_curve, key=lambda p: p.time_point)
        impacts = list(accelerator.task_type_impacts.values())
        avg_task_impact = sum(impacts) / len(impacts) if impacts else 0.0

        final_effectiveness = self.curve_model.final_effectiveness(curve)
        cost = accelerator.implementation_cost
        cost_divisor = cost / ROI_COST_SCALE if cost > 0 else 1.0

        metrics = DerivedMetrics(
            accelerator_id=accelerator.id,
            name=accelerator.name,
            implementation_cost=accelerator.implementation_cost,
            training_overhead=accelerator.training_overhead,
            time_to_adoption=self._time_to_adoption(curve),
            avg_task_impact=avg_task_impact,
            skills_coverage=len(set(accelerator.applicable_skills)),
            comparative_roi_score=avg_task_impact * final_effectiveness / cost_divisor,
        )
        logger.debug(
            "Metrics for %s: adoption=%d impact=%.2f score=%.2f",
            accelerator.id, metrics.time_to_adoption,
            metrics.avg_task_impact, metrics.comparative_roi_score,
        )
        return metrics

    def compute_all(
        self, accelerators: Iterable[AcceleratorDefinition]
    ) -> List[DerivedMetrics]:
        """Derived metrics for every accelerator, in input order."""
        return [self.compute_derived_metrics(acc) for acc in accelerators]

    # ------------------------------------------------------------------
    # Presentation scores and ordering
    # ------------------------------------------------------------------

    def normalize(self, metrics_list: Iterable[DerivedMetrics]) -> List[NormalizedScores]:
        """Scale metrics to 0-100 chart scores where higher is better.

        Cost, training overhead and time to adoption are inverted against
        fixed reference values, so cheaper and faster scores higher.
        """
        return [
            NormalizedScores(
                accelerator_id=m.accelerator_id,
                name=m.name,
                cost=_inverted_score(
                    m.implementation_cost, NORMALIZATION_REFERENCES["cost"]
                ),
                training=_inverted_score(
                    m.training_overhead, NORMALIZATION_REFERENCES["training"]
                ),
                adoption=_inverted_score(
                    m.time_to_adoption, NORMALIZATION_REFERENCES["adoption"]
                ),
                impact=min(100.0, m.avg_task_impact * IMPACT_SCORE_SCALE),
                skills=min(100.0, m.skills_coverage * SKILLS_SCORE_SCALE),
                roi=min(100.0, m.comparative_roi_score * ROI_SCORE_SCALE),
            )
            for m in metrics_list
        ]

    def rank(
        self,
        metrics_list: Sequence[DerivedMetrics],
        key: str,
        order: str = "desc",
    ) -> List[DerivedMetrics]:
        """Sort metrics by *key*; ties keep their original relative order.

        Raises:
            InvalidParameter: For an unknown metric key or sort order.
        """
        if key not in RANKABLE_METRICS:
            raise InvalidParameter(
                f"Invalid metric: {key!r}. Must be one of {', '.join(RANKABLE_METRICS)}."
            )
        if order not in SORT_ORDERS:
            raise InvalidParameter(f"Invalid order: {order!r}. Must be 'asc' or 'desc'.")

        # sorted() is stable in both directions.
        return sorted(
            metrics_list,
            key=lambda m: getattr(m, key),
            reverse=(order == "desc"),
        )

    # ------------------------------------------------------------------
    # Combined impact
    # ------------------------------------------------------------------

    def combined_task_impact(
        self, selected: Iterable[AcceleratorDefinition]
    ) -> List[CombinedTaskImpact]:
        """Combined impact per task type across *selected* accelerators.

        The base impact is the sum of each contributing accelerator's
        multiplier. Task types addressed by more than one accelerator earn
        a ``SYNERGY_BONUS_RATE`` share of the base on top. Task types are
        reported in order of first appearance.
        """
        totals: Dict[str, float] = {}
        counts: Dict[str, int] = {}
        for accelerator in selected:
            for task_type, impact in accelerator.task_type_impacts.items():
                totals[task_type] = totals.get(task_type, 0.0) + impact
                counts[task_type] = counts.get(task_type, 0) + 1

        results = []
        for task_type, base_impact in totals.items():
            count = counts[task_type]
            synergy_bonus = SYNERGY_BONUS_RATE * base_impact if count > 1 else 0.0
            results.append(
                CombinedTaskImpact(
                    task_type=task_type,
                    base_impact=base_impact,
                    synergy_bonus=synergy_bonus,
                    combined_impact=base_impact + synergy_bonus,
                    contributing_accelerator_count=count,
                )
            )
        return results

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _time_to_adoption(self, curve) -> int:
        """First integer sprint from 0 whose interpolated value reaches the threshold.

        Works segment by segment so the cost depends on the number of
        points, not on how far apart they are.
        """
        if not curve:
            return 0

        def reached(sprint: int) -> bool:
            return self.curve_model.interpolate(curve, sprint) >= ADOPTION_THRESHOLD_PERCENT

        if reached(0):
            return 0

        # Every integer sprint in [0, start] is below the threshold here.
        for lower, upper in zip(curve, curve[1:]):
            start = max(lower.time_point, 0)
            end = upper.time_point
            if end <= start:
                continue

            interior = self._first_interior_sprint(lower, upper, start, end, reached)
            if interior is not None:
                return interior
            if reached(end):
                return end

        return curve[-1].time_point

    @staticmethod
    def _first_interior_sprint(lower, upper, start, end, reached) -> Optional[int]:
        """First sprint strictly between *start* and *end* that is reached, if any."""
        if start + 1 >= end:
            return None

        low = lower.effectiveness_percent
        high = upper.effectiveness_percent
        if low >= ADOPTION_THRESHOLD_PERCENT:
            # Falling or flat from above: only the first interior sprint can qualify.
            return start + 1 if reached(start + 1) else None
        if high <= low:
            return None

        crossing = lower.time_point + (
            (ADOPTION_THRESHOLD_PERCENT - low)
            * (upper.time_point - lower.time_point)
            / (high - low)
        )
        sprint = max(start + 1, math.ceil(crossing))
        # Settle float rounding against the interpolated values.
        while sprint > start + 1 and reached(sprint - 1):
            sprint -= 1
        while sprint < end and not reached(sprint):
            sprint += 1
        return sprint if sprint < end else None
