# Curve template parameters
CURVE_TEMPLATES = ("linear", "s-curve", "exponential", "plateau")
TEMPLATE_SAMPLE_STEP = 2  # Sprints between generated points
APPEND_POINT_STEP = 4  # Sprints added by append_point

S_CURVE_STEEPNESS = 10.0
EXPONENTIAL_GROWTH = 3.0
PLATEAU_RAMP_SHARE = 0.3  # Fraction of the horizon spent ramping up
PLATEAU_LEVEL = 80.0

MIN_EFFECTIVENESS = 0.0
MAX_EFFECTIVENESS = 100.0
MIN_CURVE_POINTS = 2

# ROI projection parameters
DEFAULT_IMPACT_FACTOR = 1.2  # Used when an accelerator lists no task impacts

DEFAULT_TEAM_SIZE = 8
DEFAULT_SPRINT_COST = 50000.0
DEFAULT_CONFIDENCE_LEVEL = 80.0
DEFAULT_TIME_HORIZON = 24

# Share of implementation cost assigned to each breakdown line
DEFAULT_COST_SHARES = {
    "licensing": 0.4,
    "setup": 0.2,
    "integration": 0.3,
    "maintenance": 0.1,
}

# Comparison heuristics
ADOPTION_THRESHOLD_PERCENT = 70.0
ROI_COST_SCALE = 10000.0
SYNERGY_BONUS_RATE = 0.2

# Reference denominators for 0-100 chart scores
NORMALIZATION_REFERENCES = {
    "cost": 50000.0,
    "training": 5000.0,
    "adoption": 20.0,
}
IMPACT_SCORE_SCALE = 50.0
SKILLS_SCORE_SCALE = 20.0
ROI_SCORE_SCALE = 10.0

RANKABLE_METRICS = (
    "implementation_cost",
    "training_overhead",
    "time_to_adoption",
    "avg_task_impact",
    "skills_coverage",
    "comparative_roi_score",
)
SORT_ORDERS = ("asc", "desc")
