"""Adoption curve generation, editing and querying.

A curve maps sprint indexes to expected effectiveness percentages. Curves
coming from interactive editing may be unsorted or hold duplicate time
points; every operation here normalizes its input instead of rejecting it.
"""

import bisect
import logging
import math
from typing import Iterable, List

from src.adoption_engine.config import (
    APPEND_POINT_STEP,
    CURVE_TEMPLATES,
    EXPONENTIAL_GROWTH,
    MAX_EFFECTIVENESS,
    MIN_CURVE_POINTS,
    MIN_EFFECTIVENESS,
    PLATEAU_LEVEL,
    PLATEAU_RAMP_SHARE,
    S_CURVE_STEEPNESS,
    TEMPLATE_SAMPLE_STEP,
)
from src.adoption_engine.errors import InvalidOperation, InvalidParameter
from src.adoption_engine.models import AdoptionCurve, AdoptionPoint

logger = logging.getLogger(__name__)


def clamp_effectiveness(value: float) -> float:
    """Clamp *value* into the 0-100 effectiveness range."""
    return max(MIN_EFFECTIVENESS, min(MAX_EFFECTIVENESS, float(value)))


class CurveModel:
    """Stateless operations over adoption curves.

    Every method returns a new list; input curves are never modified.
    """

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def generate_template(self, template: str, max_time_point: int) -> AdoptionCurve:
        """Generate a curve from a named template.

        Points are sampled every ``TEMPLATE_SAMPLE_STEP`` sprints from 0 up
        to *max_time_point*. When that yields a single point (a horizon of
        one sprint) the endpoint is added so the curve stays usable.

        Raises:
            InvalidParameter: If *max_time_point* is not positive or the
                template name is unknown.
        """
        if template not in CURVE_TEMPLATES:
            raise InvalidParameter(
                f"Invalid template: {template!r}. "
                f"Must be one of {', '.join(CURVE_TEMPLATES)}."
            )
        if max_time_point <= 0:
            raise InvalidParameter(
                f"max_time_point must be positive, got {max_time_point}"
            )

        shape = getattr(self, "_" + template.replace("-", "_"))
        sample_points = list(range(0, max_time_point + 1, TEMPLATE_SAMPLE_STEP))
        if len(sample_points) < MIN_CURVE_POINTS:
            sample_points.append(max_time_point)

        curve = [
            AdoptionPoint(i, clamp_effectiveness(shape(i / max_time_point)))
            for i in sample_points
        ]
        logger.debug(
            "Generated %s curve with %d points (max_time_point=%d)",
            template, len(curve), max_time_point,
        )
        return curve

    @staticmethod
    def _linear(progress: float) -> float:
        return min(MAX_EFFECTIVENESS, progress * 100.0)

    @staticmethod
    def _s_curve(progress: float) -> float:
        return 100.0 / (1.0 + math.exp(-S_CURVE_STEEPNESS * (progress - 0.5)))

    @staticmethod
    def _exponential(progress: float) -> float:
        return (
            100.0
            * (math.exp(EXPONENTIAL_GROWTH * progress) - 1.0)
            / (math.exp(EXPONENTIAL_GROWTH) - 1.0)
        )

    @staticmethod
    def _plateau(progress: float) -> float:
        if progress < PLATEAU_RAMP_SHARE:
            value = (progress / PLATEAU_RAMP_SHARE) * PLATEAU_LEVEL
        else:
            value = PLATEAU_LEVEL + (
                (progress - PLATEAU_RAMP_SHARE)
                * (MAX_EFFECTIVENESS - PLATEAU_LEVEL)
                / (1.0 - PLATEAU_RAMP_SHARE)
            )
        return min(MAX_EFFECTIVENESS, value)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def interpolate(self, curve: Iterable[AdoptionPoint], sprint: float) -> float:
        """Effectiveness at *sprint*, linearly interpolated between points.

        Sprints at or before the first point return the first value and
        sprints at or after the last point return the last value. When
        several points share the queried time point the later one wins.
        An empty curve has zero effectiveness.
        """
        points = sorted(curve, key=lambda p: p.time_point)
        if not points:
            return MIN_EFFECTIVENESS

        if sprint <= points[0].time_point:
            return points[0].effectiveness_percent
        if sprint >= points[-1].time_point:
            return points[-1].effectiveness_percent

        time_points = [p.time_point for p in points]
        idx = bisect.bisect_right(time_points, sprint)
        lower = points[idx - 1]
        if lower.time_point == sprint:
            return lower.effectiveness_percent

        upper = points[idx]
        span = upper.time_point - lower.time_point
        if span == 0:
            return upper.effectiveness_percent

        fraction = (sprint - lower.time_point) / span
        return lower.effectiveness_percent + fraction * (
            upper.effectiveness_percent - lower.effectiveness_percent
        )

    def final_effectiveness(self, curve: Iterable[AdoptionPoint]) -> float:
        """Value of the last point in time order (0 for an empty curve)."""
        points = sorted(curve, key=lambda p: p.time_point)
        if not points:
            return MIN_EFFECTIVENESS
        return points[-1].effectiveness_percent

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def normalize_curve(self, curve: Iterable[AdoptionPoint]) -> AdoptionCurve:
        """Sort by time point, clamp values and collapse duplicates.

        For duplicate time points the point appearing last in *curve* is
        kept.
        """
        by_time = {}
        for point in curve:
            by_time[int(point.time_point)] = clamp_effectiveness(
                point.effectiveness_percent
            )
        return [AdoptionPoint(tp, value) for tp, value in sorted(by_time.items())]

    def upsert_point(
        self,
        curve: Iterable[AdoptionPoint],
        time_point: int,
        effectiveness_percent: float,
    ) -> AdoptionCurve:
        """Insert a point, or replace the one at *time_point*.

        Raises:
            InvalidParameter: If *time_point* is negative.
        """
        if time_point < 0:
            raise InvalidParameter(
                f"time_point must be non-negative, got {time_point}"
            )
        points = [p for p in curve if p.time_point != time_point]
        points.append(AdoptionPoint(time_point, effectiveness_percent))
        return self.normalize_curve(points)

    def remove_point(
        self, curve: Iterable[AdoptionPoint], time_point: int
    ) -> AdoptionCurve:
        """Remove the point at *time_point*.

        Raises:
            InvalidOperation: If fewer than two points would remain.
        """
        points = self.normalize_curve(curve)
        remaining = [p for p in points if p.time_point != time_point]

        if len(remaining) < MIN_CURVE_POINTS:
            raise InvalidOperation(
                f"Cannot remove point at sprint {time_point}: a curve needs "
                f"at least {MIN_CURVE_POINTS} points"
            )
        if len(remaining) == len(points):
            logger.debug("No point at sprint %d to remove", time_point)
        return remaining

    def append_point(
        self,
        curve: Iterable[AdoptionPoint],
        max_time_point: int,
        step: int = APPEND_POINT_STEP,
    ) -> AdoptionCurve:
        """Extend the curve by *step* sprints, holding the last value.

        An empty curve gets a point at sprint 0. The curve is returned
        unchanged if the new point would lie beyond *max_time_point*.
        """
        points = self.normalize_curve(curve)
        if points:
            last = points[-1]
            new_point = AdoptionPoint(last.time_point + step, last.effectiveness_percent)
        else:
            new_point = AdoptionPoint(0, MIN_EFFECTIVENESS)

        if new_point.time_point > max_time_point:
            logger.debug(
                "Not appending point at sprint %d (beyond max %d)",
                new_point.time_point, max_time_point,
            )
            return points

        points.append(new_point)
        return points


def curve_from_pairs(pairs: Iterable) -> List[AdoptionPoint]:
    """Build a normalized curve from ``(time_point, effectiveness)`` pairs."""
    return CurveModel().normalize_curve(AdoptionPoint(int(t), v) for t, v in pairs)
