"""Accelerator workspace - coordinates the catalog with the adoption engine."""

import dataclasses
import logging
from typing import List, Optional

from src.accelerator_catalog.accelerator_factory import create_new_accelerator
from src.accelerator_catalog.config import DEFAULT_ACCELERATOR_NAME, DEFAULT_MAX_SPRINTS
from src.accelerator_catalog.repository import AcceleratorRepository
from src.adoption_engine.comparison import ComparisonAggregator
from src.adoption_engine.curve_model import CurveModel
from src.adoption_engine.errors import InvalidOperation
from src.adoption_engine.models import (
    AcceleratorDefinition,
    CombinedTaskImpact,
    DerivedMetrics,
    NormalizedScores,
    ProjectionParameters,
    ROIProjection,
)
from src.adoption_engine.roi_projector import ROIProjector

logger = logging.getLogger(__name__)


class AcceleratorWorkspace:
    """Entry point for presentation code working with accelerators.

    Reads and writes definitions through the injected repository and hands
    snapshots to the engine components. Holds only the current comparison
    selection; all projections are recomputed on request.
    """

    def __init__(
        self,
        repository: AcceleratorRepository,
        curve_model: Optional[CurveModel] = None,
    ):
        self.repository = repository
        self.curve_model = curve_model or CurveModel()
        self.projector = ROIProjector(self.curve_model)
        self.aggregator = ComparisonAggregator(self.curve_model)
        self.selected_ids: List[str] = []

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def create_accelerator(self, name: str = DEFAULT_ACCELERATOR_NAME) -> AcceleratorDefinition:
        """Create, store and return a new accelerator."""
        accelerator = create_new_accelerator(name)
        self.repository.put(accelerator)
        logger.info("Created accelerator %s (%s)", accelerator.id, name)
        return accelerator

    def save_accelerator(self, accelerator: AcceleratorDefinition) -> AcceleratorDefinition:
        """Store *accelerator* with its curve normalized.

        Returns:
            The definition as stored.
        """
        stored = dataclasses.replace(
            accelerator,
            adoption_curve=self.curve_model.normalize_curve(accelerator.adoption_curve),
        )
        self.repository.put(stored)
        return stored

    def get_accelerator(self, accelerator_id: str) -> AcceleratorDefinition:
        """Fetch an accelerator.

        Raises:
            KeyError: If no accelerator has *accelerator_id*.
        """
        accelerator = self.repository.get(accelerator_id)
        if accelerator is None:
            raise KeyError(f"Accelerator {accelerator_id} not found")
        return accelerator

    def list_accelerators(self) -> List[AcceleratorDefinition]:
        return self.repository.list()

    def delete_accelerator(self, accelerator_id: str) -> bool:
        """Delete an accelerator and drop it from the selection."""
        self.deselect(accelerator_id)
        return self.repository.delete(accelerator_id)

    # ------------------------------------------------------------------
    # Adoption curve edits
    # ------------------------------------------------------------------

    def apply_curve_template(
        self,
        accelerator_id: str,
        template: str,
        max_sprints: int = DEFAULT_MAX_SPRINTS,
    ) -> AcceleratorDefinition:
        """Replace an accelerator's curve with a generated template."""
        accelerator = self.get_accelerator(accelerator_id)
        curve = self.curve_model.generate_template(template, max_sprints)
        return self.save_accelerator(dataclasses.replace(accelerator, adoption_curve=curve))

    def update_curve_point(
        self,
        accelerator_id: str,
        time_point: int,
        effectiveness_percent: float,
    ) -> AcceleratorDefinition:
        accelerator = self.get_accelerator(accelerator_id)
        curve = self.curve_model.upsert_point(
            accelerator.adoption_curve, time_point, effectiveness_percent
        )
        return self.save_accelerator(dataclasses.replace(accelerator, adoption_curve=curve))

    def append_curve_point(
        self,
        accelerator_id: str,
        max_sprints: int = DEFAULT_MAX_SPRINTS,
    ) -> AcceleratorDefinition:
        accelerator = self.get_accelerator(accelerator_id)
        curve = self.curve_model.append_point(accelerator.adoption_curve, max_sprints)
        return self.save_accelerator(dataclasses.replace(accelerator, adoption_curve=curve))

    def remove_curve_point(self, accelerator_id: str, time_point: int) -> AcceleratorDefinition:
        """Remove a curve point.

        Raises:
            InvalidOperation: If the curve would drop below two points.
        """
        accelerator = self.get_accelerator(accelerator_id)
        try:
            curve = self.curve_model.remove_point(accelerator.adoption_curve, time_point)
        except InvalidOperation as e:
            logger.warning("Rejected curve edit for %s: %s", accelerator_id, e)
            raise
        return self.save_accelerator(dataclasses.replace(accelerator, adoption_curve=curve))

    # ------------------------------------------------------------------
    # ROI projection
    # ------------------------------------------------------------------

    def default_parameters(self, accelerator_id: str, **overrides) -> ProjectionParameters:
        """Projection parameters seeded from the accelerator's cost profile."""
        return ProjectionParameters.for_accelerator(
            self.get_accelerator(accelerator_id), **overrides
        )

    def project_roi(
        self,
        accelerator_id: str,
        parameters: Optional[ProjectionParameters] = None,
    ) -> ROIProjection:
        accelerator = self.get_accelerator(accelerator_id)
        if parameters is None:
            parameters = ProjectionParameters.for_accelerator(accelerator)
        return self.projector.project_with(accelerator, parameters)

    # ------------------------------------------------------------------
    # Selection and comparison
    # ------------------------------------------------------------------

    def select(self, accelerator_id: str) -> None:
        """Add an accelerator to the comparison selection.

        Raises:
            KeyError: If no accelerator has *accelerator_id*.
        """
        self.get_accelerator(accelerator_id)
        if accelerator_id not in self.selected_ids:
            self.selected_ids.append(accelerator_id)

    def deselect(self, accelerator_id: str) -> None:
        if accelerator_id in self.selected_ids:
            self.selected_ids.remove(accelerator_id)

    def toggle(self, accelerator_id: str) -> None:
        if accelerator_id in self.selected_ids:
            self.deselect(accelerator_id)
        else:
            self.select(accelerator_id)

    def select_all(self) -> None:
        self.selected_ids = [acc.id for acc in self.repository.list()]

    def clear_selection(self) -> None:
        self.selected_ids = []

    def selected_accelerators(self) -> List[AcceleratorDefinition]:
        """Accelerators in the selection, or every accelerator if none is selected.

        Ids that no longer resolve are skipped.
        """
        if not self.selected_ids:
            return self.repository.list()

        selected = []
        for accelerator_id in self.selected_ids:
            accelerator = self.repository.get(accelerator_id)
            if accelerator is None:
                logger.warning("Selected accelerator %s no longer exists", accelerator_id)
                continue
            selected.append(accelerator)
        return selected

    def compare(
        self,
        metric: str = "comparative_roi_score",
        order: str = "desc",
    ) -> List[DerivedMetrics]:
        """Derived metrics for the selection, ranked by *metric*."""
        metrics = self.aggregator.compute_all(self.selected_accelerators())
        return self.aggregator.rank(metrics, metric, order)

    def normalized_scores(
        self,
        metric: str = "comparative_roi_score",
        order: str = "desc",
    ) -> List[NormalizedScores]:
        """Chart scores for the selection, in ranked order."""
        return self.aggregator.normalize(self.compare(metric, order))

    def combined_impact(self) -> List[CombinedTaskImpact]:
        return self.aggregator.combined_task_impact(self.selected_accelerators())
