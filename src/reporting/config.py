from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Output directory for projection reports
REPORTS_DIR = PROJECT_ROOT / "data" / "reports"

REPORT_FILENAME = "projection_report.json"
TRAJECTORIES_FILENAME = "trajectories.csv"

# Metric used to order the comparison section of a report
REPORT_RANK_METRIC = "comparative_roi_score"
