"""Project ROI for every accelerator in a catalog file.

Usage:
    python -m src.reporting.run_projection <catalog.json> [horizon] [output_dir]

Examples:
    python -m src.reporting.run_projection data/accelerators.json
    python -m src.reporting.run_projection data/accelerators.json 36 /tmp/reports
"""

import dataclasses
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import pandas as pd

from src.accelerator_catalog.serialization import load_catalog_file
from src.adoption_engine.comparison import ComparisonAggregator
from src.adoption_engine.config import DEFAULT_TIME_HORIZON
from src.adoption_engine.curve_model import CurveModel
from src.adoption_engine.roi_projector import ROIProjector, cost_allocation, default_parameters
from src.logging_config import setup_logging
from src.reporting.config import (
    REPORT_FILENAME,
    REPORT_RANK_METRIC,
    REPORTS_DIR,
    TRAJECTORIES_FILENAME,
)
from src.reporting.frames import TRAJECTORY_COLUMNS, trajectory_frame

logger = logging.getLogger(__name__)


def _projection_summary(accelerator, parameters, projection) -> dict:
    """Summary block for one accelerator in the report."""
    return {
        "accelerator_id": accelerator.id,
        "name": accelerator.name,
        "break_even_sprint": projection.break_even_sprint,
        "break_even_reached": projection.break_even_reached,
        "total_cost": projection.total_cost,
        "total_benefit": projection.total_benefit,
        "net_benefit": projection.net_benefit,
        "roi_percent": projection.roi_percent,
        "confidence_interval": list(projection.confidence_interval),
        "monthly_savings": projection.monthly_savings,
        "cost_allocation": cost_allocation(
            parameters.cost_breakdown,
            parameters.training_overhead_per_person,
            parameters.team_size,
        ),
    }


def run_projection(
    catalog_path: Path,
    time_horizon_sprints: int = DEFAULT_TIME_HORIZON,
    output_dir: Optional[Path] = None,
) -> Path:
    """Project every accelerator in a catalog and write a report.

    Args:
        catalog_path: JSON file holding the accelerator catalog.
        time_horizon_sprints: Sprints to project for each accelerator.
        output_dir: Directory for report output.
            Defaults to ``data/reports/``.

    Returns:
        Path to the generated JSON report. A CSV of every trajectory is
        written next to it.

    Raises:
        FileNotFoundError: If the catalog file doesn't exist.
    """
    catalog_path = Path(catalog_path)
    if output_dir is None:
        output_dir = REPORTS_DIR

    if not catalog_path.is_file():
        raise FileNotFoundError(f"Catalog file not found: {catalog_path}")

    logger.info(
        "Starting projection of %s (horizon: %d sprints)",
        catalog_path, time_horizon_sprints,
    )

    # 1. Load
    logger.info("Step 1/4: Loading catalog...")
    accelerators = load_catalog_file(catalog_path)

    curve_model = CurveModel()
    projector = ROIProjector(curve_model)
    aggregator = ComparisonAggregator(curve_model)

    # 2. Project
    logger.info("Step 2/4: Projecting ROI for %d accelerators...", len(accelerators))
    summaries = []
    frames = []
    for accelerator in accelerators:
        parameters = default_parameters(
            accelerator, time_horizon_sprints=time_horizon_sprints
        )
        projection = projector.project_with(accelerator, parameters)
        summaries.append(_projection_summary(accelerator, parameters, projection))
        frames.append(trajectory_frame(projection, accelerator_id=accelerator.id))

    # 3. Compare
    logger.info("Step 3/4: Comparing accelerators...")
    ranked = aggregator.rank(
        aggregator.compute_all(accelerators), REPORT_RANK_METRIC, "desc"
    )
    scores = aggregator.normalize(ranked)
    combined = aggregator.combined_task_impact(accelerators)

    # 4. Output
    logger.info("Step 4/4: Writing report...")
    output_dir.mkdir(parents=True, exist_ok=True)

    if frames:
        trajectories = pd.concat(frames, ignore_index=True)
    else:
        trajectories = pd.DataFrame(columns=["accelerator_id"] + TRAJECTORY_COLUMNS)
    trajectories_file = output_dir / TRAJECTORIES_FILENAME
    trajectories.to_csv(trajectories_file, index=False)

    report = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "catalog": str(catalog_path),
            "time_horizon_sprints": time_horizon_sprints,
            "total_accelerators": len(accelerators),
            "rank_metric": REPORT_RANK_METRIC,
        },
        "projections": summaries,
        "comparison": [dataclasses.asdict(m) for m in ranked],
        "scores": [dataclasses.asdict(s) for s in scores],
        "combined_impact": [dataclasses.asdict(c) for c in combined],
    }

    report_file = output_dir / REPORT_FILENAME
    with open(report_file, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)

    reached = sum(1 for s in summaries if s["break_even_reached"])
    logger.info("Projection complete! Output: %s", report_file)
    logger.info("  Break-even reached: %d of %d", reached, len(summaries))

    return report_file


if __name__ == "__main__":
    setup_logging()

    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)

    catalog = Path(sys.argv[1])
    horizon = int(sys.argv[2]) if len(sys.argv) > 2 else DEFAULT_TIME_HORIZON
    out_dir = Path(sys.argv[3]) if len(sys.argv) > 3 else None

    try:
        output = run_projection(catalog, horizon, out_dir)
        print(f"Projection complete: {output}")
    except Exception:
        logger.exception("Projection failed")
        sys.exit(1)
