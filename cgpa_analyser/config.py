import logging
import os

# ------------------------
# Grade scale
# ------------------------
MAX_GP = 4.0

# ------------------------
# Course inputs
# ------------------------
CREDIT_INPUT_MIN = 0.5
CREDIT_INPUT_MAX = 10.0  # shown on the input only, never enforced on edit
CREDIT_INPUT_STEP = 0.5
GRADE_POINT_STEP = 0.01

# ------------------------
# Dashboard
# ------------------------
MAX_CRED_BAR = 150  # credits that fill the progress bar

# Rows shown on a fresh page
DEMO_COURSES = [
    {"name": "Calculus I", "credit_hours": 3, "grade_point": 3.70},
    {"name": "Physics I", "credit_hours": 3, "grade_point": 3.30},
    {"name": "English Comp.", "credit_hours": 2, "grade_point": 4.00},
]

# ------------------------
# Logging
# ------------------------
LOG_LEVEL = logging.getLevelName(
    os.environ.get("CGPA_ANALYSER_LOG_LEVEL", "WARNING").upper()
)
if not isinstance(LOG_LEVEL, int):
    LOG_LEVEL = logging.WARNING
