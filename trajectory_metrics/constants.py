# trajectory_metrics/constants.py
"""
Constants for the trajectory metrics library.
Includes metric names, engine defaults, storage schema prefixes and
the precision grading thresholds used when evaluating soll/ist comparisons.
"""

# Metric names
METRIC_EUCLIDEAN = "euclidean"
METRIC_DTW = "dtw"
METRIC_DTW_JOHNEN = "dtw_johnen"
METRIC_DFD = "dfd"
METRIC_LCSS = "lcss"

ALL_METRICS = (
    METRIC_EUCLIDEAN,
    METRIC_DTW,
    METRIC_DTW_JOHNEN,
    METRIC_DFD,
    METRIC_LCSS,
)

# Trajectory roles
ROLE_SOLL = "soll"  # planned / commanded
ROLE_IST = "ist"    # measured / actual

# Engine defaults
DEFAULT_JOHNEN_WINDOW = 10      # samples around the scaled diagonal
DEFAULT_LCSS_THRESHOLD = 1.0    # same unit as the coordinates (mm for robot poses)

# Column prefixes of the flattened storage schema, per metric
STORAGE_PREFIXES = {
    METRIC_EUCLIDEAN: "euclidean",
    METRIC_DTW: "dtw",
    METRIC_DTW_JOHNEN: "sidtw",
    METRIC_DFD: "dfd",
    METRIC_LCSS: "lcss",
}

# Same prefixes as they appear in the camelCase application schema
APPLICATION_PREFIXES = {
    "euclidean": "EA",
    "dtw": "DTW",
    "sidtw": "SIDTW",
    "dfd": "DFD",
    "lcss": "LCSS",
}

COORDINATE_AXES = ("x", "y", "z")

# Precision grades, checked in order of quality (distances in mm)
GRADE_EXCELLENT = "EXCELLENT"
GRADE_GOOD = "GOOD"
GRADE_FAIR = "FAIR"
GRADE_POOR = "POOR"

PRECISION_THRESHOLDS = {
    GRADE_EXCELLENT: {"average": 0.1, "max": 0.5},
    GRADE_GOOD: {"average": 0.5, "max": 2.0},
    GRADE_FAIR: {"average": 1.0, "max": 5.0},
    GRADE_POOR: {"average": float('inf'), "max": float('inf')},
}

# LCSS is graded on its similarity score (minimum score per grade)
LCSS_SCORE_THRESHOLDS = {
    GRADE_EXCELLENT: 0.95,
    GRADE_GOOD: 0.8,
    GRADE_FAIR: 0.5,
    GRADE_POOR: 0.0,
}

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
