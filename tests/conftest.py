"""Shared fixtures for the adoption engine test suite."""

import pytest

from src.adoption_engine.comparison import ComparisonAggregator
from src.adoption_engine.curve_model import CurveModel, curve_from_pairs
from src.adoption_engine.roi_projector import ROIProjector


# ------------------------------------------------------------------
# Engine components - stateless, shared across a module
# ------------------------------------------------------------------

@pytest.fixture(scope="module")
def curve_model():
    return CurveModel()


@pytest.fixture(scope="module")
def projector():
    return ROIProjector()


@pytest.fixture(scope="module")
def aggregator():
    return ComparisonAggregator()


# ------------------------------------------------------------------
# Curves
# ------------------------------------------------------------------

@pytest.fixture
def default_curve():
    """The curve every new accelerator starts with."""
    return curve_from_pairs([(0, 0.0), (4, 30.0), (8, 70.0), (12, 90.0)])
