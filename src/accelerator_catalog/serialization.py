"""Convert accelerator definitions to and from their JSON representation.

The JSON shape uses camelCase keys so catalogs exported by the dashboard
load unchanged::

    {"id": "...", "name": "...", "taskTypeImpacts": {"Testing": 1.5},
     "applicableSkills": [...], "adoptionCurve": [{"timePoint": 0,
     "effectivenessPercent": 0}, ...], "implementationCost": 20000,
     "trainingOverhead": 500}
"""

import json
import logging
from pathlib import Path
from typing import Dict, List

from src.adoption_engine.curve_model import CurveModel
from src.adoption_engine.models import AcceleratorDefinition, AdoptionPoint

logger = logging.getLogger(__name__)


def accelerator_to_dict(accelerator: AcceleratorDefinition) -> Dict:
    """Convert an AcceleratorDefinition to a JSON-serializable dict."""
    return {
        "id": accelerator.id,
        "name": accelerator.name,
        "description": accelerator.description,
        "applicableSkills": list(accelerator.applicable_skills),
        "taskTypeImpacts": dict(accelerator.task_type_impacts),
        "adoptionCurve": [
            {
                "timePoint": point.time_point,
                "effectivenessPercent": point.effectiveness_percent,
            }
            for point in accelerator.adoption_curve
        ],
        "implementationCost": accelerator.implementation_cost,
        "trainingOverhead": accelerator.training_overhead,
        "tags": list(accelerator.tags),
        "aiCapabilities": list(accelerator.ai_capabilities),
    }


def accelerator_from_dict(data: Dict) -> AcceleratorDefinition:
    """Reconstruct an AcceleratorDefinition from a dict.

    The adoption curve is normalized (sorted, clamped, de-duplicated) on
    the way in.

    Raises:
        KeyError: If ``id`` or ``name`` is missing.
    """
    curve = CurveModel().normalize_curve(
        AdoptionPoint(
            int(point["timePoint"]), float(point["effectivenessPercent"])
        )
        for point in data.get("adoptionCurve", [])
    )
    return AcceleratorDefinition(
        id=data["id"],
        name=data["name"],
        description=data.get("description", ""),
        applicable_skills=list(data.get("applicableSkills", [])),
        task_type_impacts={
            task: float(impact)
            for task, impact in data.get("taskTypeImpacts", {}).items()
        },
        adoption_curve=curve,
        implementation_cost=float(data.get("implementationCost", 0.0)),
        training_overhead=float(data.get("trainingOverhead", 0.0)),
        tags=list(data.get("tags", [])),
        ai_capabilities=list(data.get("aiCapabilities", [])),
    )


def load_catalog_file(path: Path) -> List[AcceleratorDefinition]:
    """Load a JSON array of accelerators (or ``{"accelerators": [...]}``).

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file is not valid JSON or has the wrong shape.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Catalog file {path} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("accelerators")
    if not isinstance(data, list):
        raise ValueError(f"Catalog file {path} must contain a list of accelerators")

    accelerators = [accelerator_from_dict(item) for item in data]
    logger.info("Loaded %d accelerators from %s", len(accelerators), path)
    return accelerators


def save_catalog_file(accelerators: List[AcceleratorDefinition], path: Path) -> Path:
    """Write *accelerators* to *path* as a JSON array."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([accelerator_to_dict(acc) for acc in accelerators], f, indent=2)
    logger.info("Saved %d accelerators to %s", len(accelerators), path)
    return path
