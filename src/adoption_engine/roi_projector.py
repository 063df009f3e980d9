"""Sprint-by-sprint ROI projection for a single accelerator.

Converts an adoption curve into a benefit trajectory. Each sprint's benefit
is a share of the average sprint cost proportional to the accelerator's
effectiveness at that sprint and its mean task impact. Uncertainty bands
widen with distance into the future and narrow as the stated confidence
level rises. The calculation is closed-form and deterministic.
"""

import logging
from typing import Dict, Mapping, Optional

from src.adoption_engine.config import DEFAULT_IMPACT_FACTOR
from src.adoption_engine.curve_model import CurveModel
from src.adoption_engine.errors import DivisionUndefined, InvalidParameter
from src.adoption_engine.models import (
    AcceleratorDefinition,
    ProjectionParameters,
    ROIProjection,
    TrajectoryPoint,
)

logger = logging.getLogger(__name__)


def default_parameters(
    accelerator: AcceleratorDefinition, **overrides
) -> ProjectionParameters:
    """Projection parameters seeded from an accelerator's own cost profile."""
    return ProjectionParameters.for_accelerator(accelerator, **overrides)


def cost_allocation(
    cost_breakdown: Mapping[str, float],
    training_overhead_per_person: float,
    team_size: int,
) -> Dict[str, float]:
    """Cost breakdown lines plus the team's total training cost."""
    allocation = dict(cost_breakdown)
    allocation["training"] = training_overhead_per_person * team_size
    return allocation


def roi_ratio_percent(net_benefit: float, initial_cost: float) -> float:
    """Net benefit as a percentage of initial cost.

    Raises:
        DivisionUndefined: If *initial_cost* is zero.
    """
    if initial_cost == 0:
        raise DivisionUndefined("ROI is undefined for a zero initial cost")
    return net_benefit / initial_cost * 100.0


class ROIProjector:
    """Project the financial return of adopting an accelerator.

    The projector holds no state between calls; every projection is
    computed from scratch.
    """

    def __init__(self, curve_model: Optional[CurveModel] = None):
        self.curve_model = curve_model or CurveModel()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def project(
        self,
        accelerator: AcceleratorDefinition,
        cost_breakdown: Mapping[str, float],
        training_overhead_per_person: float,
        team_size: int,
        average_sprint_cost: float,
        confidence_level_percent: float,
        time_horizon_sprints: int,
    ) -> ROIProjection:
        """Project benefit, cost and break-even over a sprint horizon.

        Args:
            accelerator: Accelerator snapshot to project.
            cost_breakdown: One-off cost lines, e.g.
                ``{"licensing": 8000, "setup": 4000, ...}``.
            training_overhead_per_person: Training cost per team member.
            team_size: Number of people trained.
            average_sprint_cost: Cost of one sprint of delivery work.
            confidence_level_percent: Confidence in the projection,
                strictly between 0 and 100.
            time_horizon_sprints: Last sprint projected (sprint 0 is
                always included), at least 1.

        Returns:
            :class:`ROIProjection` with one trajectory point per sprint
            ``0 .. time_horizon_sprints``.

        Raises:
            InvalidParameter: For a horizon below 1, a confidence level
                outside ``(0, 100)``, or a negative team size.
        """
        self._validate(team_size, confidence_level_percent, time_horizon_sprints)

        avg_impact_factor = self.average_impact_factor(accelerator)
        initial_cost = (
            sum(cost_breakdown.values()) + training_overhead_per_person * team_size
        )
        confidence_factor = confidence_level_percent / 100.0
        curve = sorted(accelerator.adoption_curve, key=lambda p: p.time_point)

        trajectory = []
        cumulative_benefit = 0.0
        break_even_sprint = None

        for sprint in range(time_horizon_sprints + 1):
            effectiveness = self.curve_model.interpolate(curve, sprint)
            sprint_benefit = (
                average_sprint_cost * (effectiveness / 100.0 * avg_impact_factor) / 100.0
            )

            cumulative_benefit += sprint_benefit
            net_benefit = cumulative_benefit - initial_cost

            if break_even_sprint is None and net_benefit >= 0:
                break_even_sprint = sprint

            variability = 1.0 + (sprint / time_horizon_sprints) * (1.0 - confidence_factor)
            trajectory.append(
                TrajectoryPoint(
                    sprint=sprint,
                    benefit=sprint_benefit,
                    cumulative_benefit=cumulative_benefit,
                    net_benefit=net_benefit,
                    lower_bound=sprint_benefit / variability,
                    upper_bound=sprint_benefit * variability,
                )
            )

        total_benefit = cumulative_benefit
        net_benefit = total_benefit - initial_cost
        try:
            roi_percent = roi_ratio_percent(net_benefit, initial_cost)
        except DivisionUndefined:
            logger.debug("ROI undefined for %s: zero initial cost", accelerator.id)
            roi_percent = None

        final_effectiveness = self.curve_model.final_effectiveness(curve)
        monthly_savings = (
            (final_effectiveness / 100.0) * avg_impact_factor * average_sprint_cost / 100.0
        )

        logger.debug(
            "Projected %s over %d sprints: cost=%.2f benefit=%.2f break_even=%s",
            accelerator.id, time_horizon_sprints, initial_cost, total_benefit,
            break_even_sprint if break_even_sprint is not None else "not reached",
        )

        return ROIProjection(
            break_even_sprint=break_even_sprint,
            total_cost=initial_cost,
            total_benefit=total_benefit,
            net_benefit=net_benefit,
            roi_percent=roi_percent,
            confidence_interval=(
                total_benefit * confidence_factor,
                total_benefit / confidence_factor,
            ),
            monthly_savings=monthly_savings,
            trajectory=trajectory,
        )

    def project_with(
        self,
        accelerator: AcceleratorDefinition,
        parameters: ProjectionParameters,
    ) -> ROIProjection:
        """Convenience wrapper taking a :class:`ProjectionParameters`."""
        return self.project(
            accelerator,
            parameters.cost_breakdown,
            parameters.training_overhead_per_person,
            parameters.team_size,
            parameters.average_sprint_cost,
            parameters.confidence_level_percent,
            parameters.time_horizon_sprints,
        )

    @staticmethod
    def average_impact_factor(accelerator: AcceleratorDefinition) -> float:
        """Mean task impact multiplier, or the default when none are set."""
        impacts = list(accelerator.task_type_impacts.values())
        if not impacts:
            return DEFAULT_IMPACT_FACTOR
        return sum(impacts) / len(impacts)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(
        team_size: int,
        confidence_level_percent: float,
        time_horizon_sprints: int,
    ) -> None:
        if time_horizon_sprints < 1:
            raise InvalidParameter(
                f"time_horizon_sprints must be at least 1, got {time_horizon_sprints}"
            )
        if not 0 < confidence_level_percent < 100:
            raise InvalidParameter(
                "confidence_level_percent must be between 0 and 100 "
                f"(exclusive), got {confidence_level_percent}"
            )
        if team_size < 0:
            raise InvalidParameter(f"team_size must be non-negative, got {team_size}")
