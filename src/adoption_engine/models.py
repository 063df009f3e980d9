"""Data models for the adoption engine."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from src.adoption_engine.config import (
    DEFAULT_CONFIDENCE_LEVEL,
    DEFAULT_COST_SHARES,
    DEFAULT_SPRINT_COST,
    DEFAULT_TEAM_SIZE,
    DEFAULT_TIME_HORIZON,
)


@dataclass(frozen=True)
class AdoptionPoint:
    """Expected effectiveness (0-100) of an accelerator at a sprint index."""

    time_point: int
    effectiveness_percent: float


# Ordered by time_point, unique time points, at least two points.
AdoptionCurve = List[AdoptionPoint]


def default_cost_breakdown(implementation_cost: float) -> Dict[str, float]:
    """Split an implementation cost into the standard breakdown lines."""
    return {
        line: implementation_cost * share
        for line, share in DEFAULT_COST_SHARES.items()
    }


@dataclass
class AcceleratorDefinition:
    """A productivity tool or practice with an adoption curve and cost profile.

    Owned by the catalog; the engine only reads it. Edits go through
    ``dataclasses.replace`` so that a definition handed to the engine is
    never changed underneath a calculation.
    """

    id: str
    name: str
    task_type_impacts: Dict[str, float] = field(default_factory=dict)
    applicable_skills: List[str] = field(default_factory=list)
    adoption_curve: AdoptionCurve = field(default_factory=list)
    implementation_cost: float = 0.0
    training_overhead: float = 0.0  # Per person
    description: str = ""
    tags: List[str] = field(default_factory=list)
    ai_capabilities: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class TrajectoryPoint:
    """Financial position of an accelerator at the end of one sprint."""

    sprint: int
    benefit: float
    cumulative_benefit: float
    net_benefit: float
    lower_bound: float
    upper_bound: float


@dataclass(frozen=True)
class ROIProjection:
    """Currency-based return projection for a single accelerator.

    ``break_even_sprint`` is ``None`` when cumulative benefit never covers
    the initial cost within the horizon. ``roi_percent`` is ``None`` when
    the initial cost is zero.
    """

    break_even_sprint: Optional[int]
    total_cost: float
    total_benefit: float
    net_benefit: float
    roi_percent: Optional[float]
    confidence_interval: Tuple[float, float]
    monthly_savings: float
    trajectory: List[TrajectoryPoint] = field(default_factory=list)

    @property
    def break_even_reached(self) -> bool:
        return self.break_even_sprint is not None


@dataclass
class ProjectionParameters:
    """Caller-side inputs for one ROI projection."""

    cost_breakdown: Dict[str, float] = field(default_factory=dict)
    training_overhead_per_person: float = 0.0
    team_size: int = DEFAULT_TEAM_SIZE
    average_sprint_cost: float = DEFAULT_SPRINT_COST
    confidence_level_percent: float = DEFAULT_CONFIDENCE_LEVEL
    time_horizon_sprints: int = DEFAULT_TIME_HORIZON

    @classmethod
    def for_accelerator(
        cls, accelerator: AcceleratorDefinition, **overrides
    ) -> "ProjectionParameters":
        """Parameters seeded from an accelerator's own cost profile.

        The implementation cost is split with :func:`default_cost_breakdown`
        and the per-person training overhead is taken as is. Any field can
        be overridden by keyword.
        """
        values = {
            "cost_breakdown": default_cost_breakdown(accelerator.implementation_cost),
            "training_overhead_per_person": accelerator.training_overhead,
        }
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class DerivedMetrics:
    """Per-accelerator comparison metrics.

    ``comparative_roi_score`` is a unitless ranking heuristic and is not
    comparable with :attr:`ROIProjection.roi_percent`.
    """

    accelerator_id: str
    name: str
    implementation_cost: float
    training_overhead: float
    time_to_adoption: int
    avg_task_impact: float
    skills_coverage: int
    comparative_roi_score: float


@dataclass(frozen=True)
class NormalizedScores:
    """0-100 chart scores for one accelerator (higher is better)."""

    accelerator_id: str
    name: str
    cost: float
    training: float
    adoption: float
    impact: float
    skills: float
    roi: float


@dataclass(frozen=True)
class CombinedTaskImpact:
    """Impact on one task type when several accelerators are used together."""

    task_type: str
    base_impact: float
    synergy_bonus: float
    combined_impact: float
    contributing_accelerator_count: int
