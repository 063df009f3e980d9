"""Tests for accelerator creation and field edits."""

import pytest

from src.accelerator_catalog.accelerator_factory import (
    create_new_accelerator,
    with_skill,
    with_task_impact,
    without_skill,
    without_task_impact,
)
from src.adoption_engine.errors import InvalidParameter
from src.adoption_engine.models import AdoptionPoint


class TestCreateNewAccelerator:
    def test_defaults(self):
        accelerator = create_new_accelerator()
        assert accelerator.name == "New AI Accelerator"
        assert accelerator.implementation_cost == 0.0
        assert accelerator.training_overhead == 0.0
        assert accelerator.task_type_impacts == {}
        assert accelerator.applicable_skills == []

    def test_default_curve(self):
        accelerator = create_new_accelerator()
        assert accelerator.adoption_curve == [
            AdoptionPoint(0, 0.0),
            AdoptionPoint(4, 30.0),
            AdoptionPoint(8, 70.0),
            AdoptionPoint(12, 90.0),
        ]

    def test_unique_ids(self):
        assert create_new_accelerator().id != create_new_accelerator().id

    def test_explicit_id_and_name(self):
        accelerator = create_new_accelerator("Copilot", accelerator_id="copilot")
        assert accelerator.id == "copilot"
        assert accelerator.name == "Copilot"


class TestTaskImpactEdits:
    def test_add_impact(self):
        accelerator = with_task_impact(create_new_accelerator(), "  Testing ", 1.5)
        assert accelerator.task_type_impacts == {"Testing": 1.5}

    def test_replace_impact(self):
        accelerator = with_task_impact(create_new_accelerator(), "Testing", 1.5)
        accelerator = with_task_impact(accelerator, "Testing", 2.0)
        assert accelerator.task_type_impacts == {"Testing": 2.0}

    def test_original_untouched(self):
        original = create_new_accelerator()
        with_task_impact(original, "Testing", 1.5)
        assert original.task_type_impacts == {}

    @pytest.mark.parametrize("impact", [0, -1.0])
    def test_non_positive_impact_raises(self, impact):
        with pytest.raises(InvalidParameter, match="must be positive"):
            with_task_impact(create_new_accelerator(), "Testing", impact)

    def test_blank_task_type_raises(self):
        with pytest.raises(InvalidParameter, match="task_type"):
            with_task_impact(create_new_accelerator(), "   ", 1.5)

    def test_remove_impact(self):
        accelerator = with_task_impact(create_new_accelerator(), "Testing", 1.5)
        accelerator = with_task_impact(accelerator, "Design", 1.1)
        assert without_task_impact(accelerator, "Testing").task_type_impacts == {"Design": 1.1}


class TestSkillEdits:
    def test_add_skill_trimmed(self):
        accelerator = with_skill(create_new_accelerator(), " Python ")
        assert accelerator.applicable_skills == ["Python"]

    def test_duplicate_skill_ignored(self):
        accelerator = with_skill(create_new_accelerator(), "Python")
        assert with_skill(accelerator, "Python").applicable_skills == ["Python"]

    def test_blank_skill_ignored(self):
        accelerator = create_new_accelerator()
        assert with_skill(accelerator, "  ") is accelerator

    def test_remove_skill(self):
        accelerator = with_skill(with_skill(create_new_accelerator(), "Python"), "Go")
        assert without_skill(accelerator, "Python").applicable_skills == ["Go"]
