from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

import numpy as np

from cgpa_analyser.config import MAX_CRED_BAR, MAX_GP


# ------------------------
# Numeric input helpers
# ------------------------
def parse_optional_number(value: Any) -> Optional[float]:
    """
    Parse a value that may or may not hold a number.

    None, blank strings, unparseable strings, NaN and infinities all come back
    as None; anything else numeric comes back as a float.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not np.isfinite(number):
        return None
    return number


def parse_optional_int(value: Any) -> Optional[int]:
    """Same as parse_optional_number, truncated toward zero ("8.7" -> 8)."""
    number = parse_optional_number(value)
    if number is None:
        return None
    return int(number)


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def clamp_grade_point(grade_point: float) -> float:
    return clamp(grade_point, 0.0, MAX_GP)


def format_credits(credits: float) -> str:
    """Whole credit counts print without decimals, anything else with one."""
    if float(credits).is_integer():
        return str(int(credits))
    return f"{credits:.1f}"


# ------------------------
# Grade scale
# ------------------------
GRADE_BANDS: List[Tuple[float, str]] = [
    (4.00, "A+"),
    (3.67, "A"),
    (3.33, "A−"),
    (3.00, "B+"),
    (2.67, "B"),
    (2.33, "B−"),
    (2.00, "C+"),
    (1.67, "C"),
    (1.00, "D"),
]
LOWEST_LETTER = "F"


def letter_grade(grade_point: float) -> str:
    for lower_bound, letter in GRADE_BANDS:
        if grade_point >= lower_bound:
            return letter
    return LOWEST_LETTER


# ------------------------
# Aggregation
# ------------------------
@dataclass(frozen=True)
class AggregateTotals:
    total_credits: float
    total_quality_points: float
    cumulative_average: float

    @property
    def has_credits(self) -> bool:
        return self.total_credits > 0


def _entry_values(entry: Any) -> Tuple[Any, Any]:
    """Pull (credit_hours, grade_point) out of an entry, a mapping or a pair."""
    if hasattr(entry, "credit_hours"):
        return entry.credit_hours, entry.grade_point
    if isinstance(entry, dict):
        credit_hours = entry.get("credit_hours", entry.get("cr"))
        grade_point = entry.get("grade_point", entry.get("gp"))
        return credit_hours, grade_point
    credit_hours, grade_point = entry
    return credit_hours, grade_point


def valid_rows(entries: Iterable[Any]) -> np.ndarray:
    """
    entries: course entries, mappings or (credit_hours, grade_point) pairs
    returns: Nx2 numpy array -> [grade_point, credit_hours] for the rows that count

    A row counts only when both values parse and the credit hours are positive;
    half-filled rows are skipped.
    """
    rows = []
    for entry in entries:
        raw_credits, raw_grade = _entry_values(entry)
        credit_hours = parse_optional_number(raw_credits)
        grade_point = parse_optional_number(raw_grade)
        if credit_hours is None or grade_point is None or credit_hours <= 0:
            continue
        rows.append((grade_point, credit_hours))

    if not rows:
        return np.zeros((0, 2), dtype=float)
    return np.array(rows, dtype=float)


def aggregate(entries: Iterable[Any]) -> AggregateTotals:
    gc = valid_rows(entries)
    if gc.size == 0:
        return AggregateTotals(0.0, 0.0, 0.0)

    grades = gc[:, 0]
    credits = gc[:, 1]
    total_credits = float(credits.sum())
    total_quality_points = float(np.dot(grades, credits))
    cumulative_average = total_quality_points / total_credits if total_credits > 0 else 0.0
    return AggregateTotals(total_credits, total_quality_points, cumulative_average)


def dashboard_summary(totals: AggregateTotals) -> dict:
    """Display strings and progress-bar fractions for the overview cards."""
    cgpa = totals.cumulative_average
    return {
        "credits": format_credits(totals.total_credits),
        "quality_points": f"{totals.total_quality_points:.2f}",
        "cgpa": f"{cgpa:.2f}",
        "letter": letter_grade(cgpa) if totals.has_credits else "—",
        "credits_fraction": min(totals.total_credits / MAX_CRED_BAR, 1.0),
        "quality_points_fraction": min(
            totals.total_quality_points / (MAX_CRED_BAR * MAX_GP), 1.0
        ),
        "cgpa_fraction": clamp(cgpa / MAX_GP, 0.0, 1.0),
    }


# ------------------------
# Planner results
# ------------------------
class Outcome(Enum):
    """
    UNSET: inputs missing or unusable, nothing to show yet
    NO_REMAINING_PERIODS: every semester is already completed
    NOT_ACHIEVABLE: the required average is above MAX_GP
    ALREADY_ACHIEVED: the required average is zero or below
    ACHIEVABLE: a normal required average
    """
    UNSET = "unset"
    NO_REMAINING_PERIODS = "no_remaining_periods"
    NOT_ACHIEVABLE = "not_achievable"
    ALREADY_ACHIEVED = "already_achieved"
    ACHIEVABLE = "achievable"


BADGES = {
    Outcome.NOT_ACHIEVABLE: "✗ Not Achievable",
    Outcome.ALREADY_ACHIEVED: "✓ Already Achieved",
    Outcome.ACHIEVABLE: "✓ Achievable",
}

# the semester planner labels its already-met target differently
SEMESTER_PLAN_BADGES = dict(BADGES)
SEMESTER_PLAN_BADGES[Outcome.ALREADY_ACHIEVED] = "✓ Already Done"


@dataclass(frozen=True)
class RequirementResult:
    outcome: Outcome
    message: str
    required_average: Optional[float] = None
    over_remaining_semesters: bool = False

    @property
    def display(self) -> str:
        if self.required_average is None:
            return "—"
        if self.outcome is Outcome.ALREADY_ACHIEVED:
            return "≤ 0.00"
        return f"{self.required_average:.2f}"

    @property
    def badge(self) -> Optional[str]:
        if self.over_remaining_semesters:
            return SEMESTER_PLAN_BADGES.get(self.outcome)
        return BADGES.get(self.outcome)


class ProjectionStatus(Enum):
    UNSET = "unset"
    FINAL = "final"
    PROJECTED = "projected"


@dataclass(frozen=True)
class ProjectionResult:
    status: ProjectionStatus
    message: str
    projected_average: Optional[float] = None

    @property
    def display(self) -> str:
        if self.projected_average is None:
            return "—"
        return f"{self.projected_average:.2f}"

    @property
    def letter(self) -> Optional[str]:
        if self.projected_average is None:
            return None
        return letter_grade(self.projected_average)


@dataclass(frozen=True)
class SemesterPlan:
    remaining_periods: int
    remaining_credits: float
    projection: ProjectionResult
    requirement: RequirementResult


def _classify(required: float) -> Outcome:
    if required > MAX_GP:
        return Outcome.NOT_ACHIEVABLE
    if required <= 0:
        return Outcome.ALREADY_ACHIEVED
    return Outcome.ACHIEVABLE


def _semesters(count: int) -> str:
    return "semester" if count == 1 else "semesters"


def needed_average(target_average: float,
                   credits_completed: float,
                   quality_points: float,
                   credits_outstanding: float) -> float:
    Ca = credits_completed
    Cr = credits_outstanding
    Qa = quality_points

    x = (target_average * (Ca + Cr) - Qa) / Cr
    return x


# ------------------------
# Single next semester
# ------------------------
def required_average(current_credits: float,
                     current_quality_points: float,
                     goal_average: Any,
                     next_period_credits: Any) -> RequirementResult:
    """
    Average needed in the next semester alone to bring the cumulative average
    up (or down) to goal_average.

    Required GPA = (goal × (current credits + next credits) − current QP) ÷ next credits
    """
    goal = parse_optional_number(goal_average)
    next_credits = parse_optional_number(next_period_credits)

    if goal is None or next_credits is None or next_credits <= 0:
        return RequirementResult(Outcome.UNSET, "Enter goal CGPA & next semester credits above")

    required = needed_average(goal, current_credits, current_quality_points, next_credits)
    outcome = _classify(required)

    if outcome is Outcome.NOT_ACHIEVABLE:
        message = f"Needs {required:.2f} — exceeds max {MAX_GP}"
    elif outcome is Outcome.ALREADY_ACHIEVED:
        message = "You have already surpassed your goal!"
    else:
        message = f"Need {required:.2f} GPA in the next {next_credits:g} credits"

    return RequirementResult(outcome, message, required)


# ------------------------
# Multi-semester planner
# ------------------------
def plan(current_credits: float,
         current_quality_points: float,
         current_average: float,
         total_periods: Any,
         completed_periods: Any,
         credits_per_period: Any,
         assumed_average: Any = None,
         target_average: Any = None) -> Optional[SemesterPlan]:
    """
    Projection and target calculator over the remaining semesters.

    Two independent modes share the remaining semester count:

    Projection, given an assumed GPA for every remaining semester:
        final = (QP + remaining × credits/sem × assumed) / (credits + remaining credits)

    Requirement, given a target CGPA:
        required = (target × (credits + remaining credits) − QP) / remaining credits

    Returns None when the semester count or credits per semester are missing
    or below one, in which case nothing should be shown at all.
    """
    total = parse_optional_int(total_periods)
    completed = parse_optional_int(completed_periods)
    per_period = parse_optional_number(credits_per_period)
    assumed = parse_optional_number(assumed_average)
    target = parse_optional_number(target_average)

    if total is None or per_period is None or total < 1 or per_period < 1:
        return None

    completed = 0 if completed is None else clamp(completed, 0, total)
    remaining = max(0, total - completed)
    remaining_credits = remaining * per_period

    return SemesterPlan(
        remaining_periods=remaining,
        remaining_credits=remaining_credits,
        projection=_projection(current_credits, current_quality_points, current_average,
                               remaining, per_period, assumed),
        requirement=_requirement(current_credits, current_quality_points,
                                 remaining, remaining_credits, target),
    )


def _projection(current_credits, current_quality_points, current_average,
                remaining, per_period, assumed) -> ProjectionResult:
    if assumed is not None and remaining > 0:
        projected_qp = current_quality_points + remaining * per_period * assumed
        projected_credits = current_credits + remaining * per_period
        projected = projected_qp / projected_credits if projected_credits > 0 else 0.0
        message = (
            f"If you maintain {assumed:.2f} GPA each remaining semester → "
            f"Final CGPA: {projected:.2f} ({letter_grade(projected)})"
        )
        return ProjectionResult(ProjectionStatus.PROJECTED, message, projected)

    if remaining == 0:
        return ProjectionResult(
            ProjectionStatus.FINAL,
            "No remaining semesters — this is your final CGPA.",
            current_average,
        )

    return ProjectionResult(ProjectionStatus.UNSET, "Enter an assumed GPA to see projection.")


def _requirement(current_credits, current_quality_points,
                 remaining, remaining_credits, target) -> RequirementResult:
    if target is not None and remaining > 0 and remaining_credits > 0:
        required = needed_average(target, current_credits, current_quality_points,
                                  remaining_credits)
        outcome = _classify(required)
        semesters = _semesters(remaining)

        if outcome is Outcome.NOT_ACHIEVABLE:
            message = (
                f"Needs {required:.2f}/sem — exceeds max {MAX_GP} "
                f"even over {remaining} {semesters}"
            )
        elif outcome is Outcome.ALREADY_ACHIEVED:
            message = "Your current CGPA already exceeds the target!"
        else:
            message = (
                f"Earn {required:.2f} GPA avg over {remaining} remaining {semesters} "
                f"({remaining_credits:g} credits) to hit {target:.2f} CGPA"
            )
        return RequirementResult(outcome, message, required, over_remaining_semesters=True)

    if remaining == 0:
        return RequirementResult(Outcome.NO_REMAINING_PERIODS, "No remaining semesters left.")

    return RequirementResult(Outcome.UNSET, "Enter your target CGPA above.")
