from src.adoption_engine.comparison import ComparisonAggregator
from src.adoption_engine.curve_model import CurveModel
from src.adoption_engine.errors import (
    DivisionUndefined,
    EngineError,
    InvalidOperation,
    InvalidParameter,
)
from src.adoption_engine.models import (
    AcceleratorDefinition,
    AdoptionCurve,
    AdoptionPoint,
    CombinedTaskImpact,
    DerivedMetrics,
    NormalizedScores,
    ProjectionParameters,
    ROIProjection,
    TrajectoryPoint,
)
from src.adoption_engine.roi_projector import ROIProjector

__all__ = [
    "AcceleratorDefinition",
    "AdoptionCurve",
    "AdoptionPoint",
    "CombinedTaskImpact",
    "ComparisonAggregator",
    "CurveModel",
    "DerivedMetrics",
    "DivisionUndefined",
    "EngineError",
    "InvalidOperation",
    "InvalidParameter",
    "NormalizedScores",
    "ProjectionParameters",
    "ROIProjection",
    "ROIProjector",
    "TrajectoryPoint",
]
