"""Accelerator creation and field-level edits.

Edits never modify the accelerator passed in; each helper returns a new
definition.
"""

import dataclasses
import logging
import uuid
from typing import Optional

from src.accelerator_catalog.config import DEFAULT_ACCELERATOR_NAME, DEFAULT_ADOPTION_CURVE
from src.adoption_engine.curve_model import curve_from_pairs
from src.adoption_engine.errors import InvalidParameter
from src.adoption_engine.models import AcceleratorDefinition

logger = logging.getLogger(__name__)


def create_new_accelerator(
    name: str = DEFAULT_ACCELERATOR_NAME,
    accelerator_id: Optional[str] = None,
) -> AcceleratorDefinition:
    """Create an accelerator with the default adoption curve and no costs."""
    return AcceleratorDefinition(
        id=accelerator_id or str(uuid.uuid4()),
        name=name,
        adoption_curve=curve_from_pairs(DEFAULT_ADOPTION_CURVE),
    )


def with_task_impact(
    accelerator: AcceleratorDefinition, task_type: str, impact: float
) -> AcceleratorDefinition:
    """Add or replace the impact multiplier for *task_type*.

    Raises:
        InvalidParameter: If *task_type* is blank or *impact* is not positive.
    """
    task_type = task_type.strip()
    if not task_type:
        raise InvalidParameter("task_type cannot be empty")
    if impact <= 0:
        raise InvalidParameter(
            f"Impact for {task_type!r} must be positive, got {impact}"
        )

    impacts = dict(accelerator.task_type_impacts)
    impacts[task_type] = float(impact)
    return dataclasses.replace(accelerator, task_type_impacts=impacts)


def without_task_impact(
    accelerator: AcceleratorDefinition, task_type: str
) -> AcceleratorDefinition:
    impacts = {
        task: impact
        for task, impact in accelerator.task_type_impacts.items()
        if task != task_type
    }
    return dataclasses.replace(accelerator, task_type_impacts=impacts)


def with_skill(accelerator: AcceleratorDefinition, skill: str) -> AcceleratorDefinition:
    """Add *skill* (trimmed). Blank or already-listed skills are ignored."""
    skill = skill.strip()
    if not skill or skill in accelerator.applicable_skills:
        logger.debug("Ignoring skill %r for %s", skill, accelerator.id)
        return accelerator
    return dataclasses.replace(
        accelerator, applicable_skills=[*accelerator.applicable_skills, skill]
    )


def without_skill(accelerator: AcceleratorDefinition, skill: str) -> AcceleratorDefinition:
    return dataclasses.replace(
        accelerator,
        applicable_skills=[s for s in accelerator.applicable_skills if s != skill],
    )
