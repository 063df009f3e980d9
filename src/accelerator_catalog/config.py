from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Storage directories
ACCELERATORS_DIR = PROJECT_ROOT / "data" / "accelerators"

# Defaults for a newly created accelerator
DEFAULT_ACCELERATOR_NAME = "New AI Accelerator"
DEFAULT_ADOPTION_CURVE = [
    (0, 0.0),
    (4, 30.0),
    (8, 70.0),
    (12, 90.0),
]

# Curve editor horizon used when none is given
DEFAULT_MAX_SPRINTS = 24
