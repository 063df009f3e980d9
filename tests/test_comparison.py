"""Tests for accelerator comparison metrics, scores, ranking and synergy."""

import pytest

from src.adoption_engine.curve_model import curve_from_pairs
from src.adoption_engine.errors import InvalidParameter
from src.adoption_engine.models import AcceleratorDefinition, DerivedMetrics


# ── Helpers ──────────────────────────────────────────────────────────


def _make_accelerator(acc_id="acc-1", **overrides):
    defaults = {
        "id": acc_id,
        "name": f"Accelerator {acc_id}",
        "task_type_impacts": {"Testing": 1.5, "Code Review": 1.0},
        "applicable_skills": ["Python", "Java", "QA"],
        "adoption_curve": curve_from_pairs([(0, 0), (4, 30), (8, 70), (12, 90)]),
        "implementation_cost": 20000.0,
        "training_overhead": 500.0,
    }
    defaults.update(overrides)
    return AcceleratorDefinition(**defaults)


def _make_metrics(acc_id, **overrides):
    defaults = {
        "accelerator_id": acc_id,
        "name": f"Accelerator {acc_id}",
        "implementation_cost": 0.0,
        "training_overhead": 0.0,
        "time_to_adoption": 0,
        "avg_task_impact": 0.0,
        "skills_coverage": 0,
        "comparative_roi_score": 0.0,
    }
    defaults.update(overrides)
    return DerivedMetrics(**defaults)


def _ids(metrics_list):
    return [m.accelerator_id for m in metrics_list]


# ── Derived metrics ──────────────────────────────────────────────────


class TestComputeDerivedMetrics:
    def test_time_to_adoption_first_sprint_at_threshold(self, aggregator):
        metrics = aggregator.compute_derived_metrics(_make_accelerator())
        # Sprint 7 interpolates to 60%, sprint 8 is the 70% point.
        assert metrics.time_to_adoption == 8

    def test_time_to_adoption_between_points(self, aggregator):
        accelerator = _make_accelerator(
            adoption_curve=curve_from_pairs([(0, 0), (4, 40), (8, 80)])
        )
        assert aggregator.compute_derived_metrics(accelerator).time_to_adoption == 7

    def test_time_to_adoption_never_reached(self, aggregator):
        accelerator = _make_accelerator(
            adoption_curve=curve_from_pairs([(0, 0), (10, 50)])
        )
        assert aggregator.compute_derived_metrics(accelerator).time_to_adoption == 10

    def test_time_to_adoption_immediate(self, aggregator):
        accelerator = _make_accelerator(
            adoption_curve=curve_from_pairs([(0, 75), (6, 95)])
        )
        assert aggregator.compute_derived_metrics(accelerator).time_to_adoption == 0

    def test_time_to_adoption_far_time_points(self, aggregator):
        accelerator = _make_accelerator(
            adoption_curve=curve_from_pairs([(0, 60), (10**6, 80), (10**7, 90)])
        )
        assert aggregator.compute_derived_metrics(accelerator).time_to_adoption == 500000

    def test_time_to_adoption_reached_only_at_distant_last_point(self, aggregator):
        accelerator = _make_accelerator(
            adoption_curve=curve_from_pairs([(0, 0), (10**7, 70)])
        )
        assert aggregator.compute_derived_metrics(accelerator).time_to_adoption == 10**7

    @pytest.mark.parametrize(
        "pairs",
        [
            [(0, 0), (3, 100)],
            [(0, 0), (7, 71), (9, 10)],
            [(2, 80), (5, 20), (11, 95)],
            [(0, 10), (5, 69.9), (6, 69.95), (13, 100)],
            [(0, 90), (4, 20), (9, 20), (10, 70)],
            [(5, 50)],
        ],
    )
    def test_time_to_adoption_matches_sprint_scan(self, aggregator, pairs):
        curve = curve_from_pairs(pairs)
        expected = next(
            (
                sprint for sprint in range(curve[-1].time_point + 1)
                if aggregator.curve_model.interpolate(curve, sprint) >= 70
            ),
            curve[-1].time_point,
        )
        accelerator = _make_accelerator(adoption_curve=curve)
        assert aggregator.compute_derived_metrics(accelerator).time_to_adoption == expected

    def test_avg_task_impact(self, aggregator):
        metrics = aggregator.compute_derived_metrics(_make_accelerator())
        assert metrics.avg_task_impact == pytest.approx(1.25)

    def test_avg_task_impact_empty(self, aggregator):
        metrics = aggregator.compute_derived_metrics(_make_accelerator(task_type_impacts={}))
        assert metrics.avg_task_impact == 0.0
        assert metrics.comparative_roi_score == 0.0

    def test_skills_coverage_counts_distinct(self, aggregator):
        accelerator = _make_accelerator(applicable_skills=["Python", "Python", "Go"])
        assert aggregator.compute_derived_metrics(accelerator).skills_coverage == 2

    def test_comparative_roi_score_scales_by_cost(self, aggregator):
        metrics = aggregator.compute_derived_metrics(_make_accelerator())
        # 1.25 * 90 / (20000 / 10000)
        assert metrics.comparative_roi_score == pytest.approx(56.25)

    def test_comparative_roi_score_free_accelerator(self, aggregator):
        accelerator = _make_accelerator(implementation_cost=0.0)
        metrics = aggregator.compute_derived_metrics(accelerator)
        assert metrics.comparative_roi_score == pytest.approx(112.5)

    def test_copies_identity_and_costs(self, aggregator):
        metrics = aggregator.compute_derived_metrics(_make_accelerator("x"))
        assert metrics.accelerator_id == "x"
        assert metrics.name == "Accelerator x"
        assert metrics.implementation_cost == 20000.0
        assert metrics.training_overhead == 500.0

    def test_compute_all_preserves_order(self, aggregator):
        accelerators = [_make_accelerator(i) for i in ("c", "a", "b")]
        assert _ids(aggregator.compute_all(accelerators)) == ["c", "a", "b"]


# ── Normalization ────────────────────────────────────────────────────


class TestNormalize:
    def test_mid_range_scores(self, aggregator):
        metrics = _make_metrics(
            "a",
            implementation_cost=25000.0,
            training_overhead=2500.0,
            time_to_adoption=10,
            avg_task_impact=1.5,
            skills_coverage=3,
            comparative_roi_score=5.0,
        )
        [scores] = aggregator.normalize([metrics])
        assert scores.accelerator_id == "a"
        assert scores.cost == pytest.approx(50.0)
        assert scores.training == pytest.approx(50.0)
        assert scores.adoption == pytest.approx(50.0)
        assert scores.impact == pytest.approx(75.0)
        assert scores.skills == pytest.approx(60.0)
        assert scores.roi == pytest.approx(50.0)

    def test_scores_are_capped(self, aggregator):
        metrics = _make_metrics(
            "a",
            implementation_cost=100000.0,
            training_overhead=9000.0,
            time_to_adoption=30,
            avg_task_impact=3.0,
            skills_coverage=10,
            comparative_roi_score=50.0,
        )
        [scores] = aggregator.normalize([metrics])
        assert scores.cost == 0.0
        assert scores.training == 0.0
        assert scores.adoption == 0.0
        assert scores.impact == 100.0
        assert scores.skills == 100.0
        assert scores.roi == 100.0

    def test_free_and_instant_scores_full_marks(self, aggregator):
        [scores] = aggregator.normalize([_make_metrics("a")])
        assert scores.cost == 100.0
        assert scores.training == 100.0
        assert scores.adoption == 100.0

    def test_preserves_order(self, aggregator):
        metrics = [_make_metrics(i) for i in ("b", "a")]
        assert [s.accelerator_id for s in aggregator.normalize(metrics)] == ["b", "a"]


# ── Ranking ──────────────────────────────────────────────────────────


class TestRank:
    def test_descending(self, aggregator):
        metrics = [
            _make_metrics("a", comparative_roi_score=1.0),
            _make_metrics("b", comparative_roi_score=3.0),
            _make_metrics("c", comparative_roi_score=2.0),
        ]
        assert _ids(aggregator.rank(metrics, "comparative_roi_score", "desc")) == ["b", "c", "a"]

    def test_ascending(self, aggregator):
        metrics = [
            _make_metrics("a", implementation_cost=300.0),
            _make_metrics("b", implementation_cost=100.0),
            _make_metrics("c", implementation_cost=200.0),
        ]
        assert _ids(aggregator.rank(metrics, "implementation_cost", "asc")) == ["b", "c", "a"]

    @pytest.mark.parametrize("order", ["asc", "desc"])
    def test_ties_keep_input_order(self, aggregator, order):
        metrics = [
            _make_metrics("first", time_to_adoption=4),
            _make_metrics("low", time_to_adoption=2),
            _make_metrics("second", time_to_adoption=4),
            _make_metrics("third", time_to_adoption=4),
        ]
        ranked = _ids(aggregator.rank(metrics, "time_to_adoption", order))
        tied = [i for i in ranked if i != "low"]
        assert tied == ["first", "second", "third"]

    def test_does_not_modify_input(self, aggregator):
        metrics = [_make_metrics("a", skills_coverage=1), _make_metrics("b", skills_coverage=2)]
        aggregator.rank(metrics, "skills_coverage", "desc")
        assert _ids(metrics) == ["a", "b"]

    def test_unknown_metric_raises(self, aggregator):
        with pytest.raises(InvalidParameter, match="Invalid metric"):
            aggregator.rank([], "roi", "desc")

    def test_unknown_order_raises(self, aggregator):
        with pytest.raises(InvalidParameter, match="Invalid order"):
            aggregator.rank([], "skills_coverage", "up")


# ── Combined impact ──────────────────────────────────────────────────


class TestCombinedTaskImpact:
    def test_synergy_for_shared_task(self, aggregator):
        a = _make_accelerator("a", task_type_impacts={"Testing": 1.5})
        b = _make_accelerator("b", task_type_impacts={"Testing": 1.2})
        [testing] = aggregator.combined_task_impact([a, b])
        assert testing.task_type == "Testing"
        assert testing.base_impact == pytest.approx(2.7)
        assert testing.synergy_bonus == pytest.approx(0.54)
        assert testing.combined_impact == pytest.approx(3.24)
        assert testing.contributing_accelerator_count == 2

    def test_single_contributor_has_no_bonus(self, aggregator):
        a = _make_accelerator("a", task_type_impacts={"Testing": 1.5, "Design": 1.1})
        b = _make_accelerator("b", task_type_impacts={"Testing": 1.2})
        results = {r.task_type: r for r in aggregator.combined_task_impact([a, b])}
        design = results["Design"]
        assert design.synergy_bonus == 0.0
        assert design.combined_impact == design.base_impact == pytest.approx(1.1)
        assert design.contributing_accelerator_count == 1

    def test_three_contributors(self, aggregator):
        accelerators = [
            _make_accelerator(i, task_type_impacts={"Debugging": 1.0}) for i in "abc"
        ]
        [debugging] = aggregator.combined_task_impact(accelerators)
        assert debugging.combined_impact == pytest.approx(3.0 * 1.2)
        assert debugging.contributing_accelerator_count == 3

    def test_task_types_in_first_appearance_order(self, aggregator):
        a = _make_accelerator("a", task_type_impacts={"Testing": 1.0, "Design": 1.0})
        b = _make_accelerator("b", task_type_impacts={"Research": 1.0, "Testing": 1.0})
        results = aggregator.combined_task_impact([a, b])
        assert [r.task_type for r in results] == ["Testing", "Design", "Research"]

    def test_empty_selection(self, aggregator):
        assert aggregator.combined_task_impact([]) == []
