"""Tabular views of projections and comparison metrics for charting/export."""

import dataclasses
from typing import Iterable, Optional

import pandas as pd

from src.adoption_engine.models import DerivedMetrics, NormalizedScores, ROIProjection

TRAJECTORY_COLUMNS = [
    "sprint",
    "benefit",
    "cumulative_benefit",
    "net_benefit",
    "lower_bound",
    "upper_bound",
]

_SCORE_COLUMNS = ["cost", "training", "adoption", "impact", "skills", "roi"]


def trajectory_frame(
    projection: ROIProjection, accelerator_id: Optional[str] = None
) -> pd.DataFrame:
    """One row per sprint of *projection*.

    When *accelerator_id* is given it is added as the first column so frames
    for several accelerators can be concatenated.
    """
    df = pd.DataFrame(
        [dataclasses.asdict(point) for point in projection.trajectory],
        columns=TRAJECTORY_COLUMNS,
    )
    if accelerator_id is not None:
        df.insert(0, "accelerator_id", accelerator_id)
    return df


def metrics_frame(
    metrics: Iterable[DerivedMetrics],
    scores: Optional[Iterable[NormalizedScores]] = None,
) -> pd.DataFrame:
    """Derived metrics per accelerator, optionally joined with chart scores.

    Score columns are prefixed ``score_``. Row order follows *metrics*.
    """
    df = pd.DataFrame([dataclasses.asdict(m) for m in metrics])
    if scores is None or df.empty:
        return df

    score_df = pd.DataFrame(
        [dataclasses.asdict(s) for s in scores],
        columns=["accelerator_id", "name"] + _SCORE_COLUMNS,
    ).drop(columns=["name"])
    score_df = score_df.rename(columns={c: f"score_{c}" for c in _SCORE_COLUMNS})
    return df.merge(score_df, on="accelerator_id", how="left")
