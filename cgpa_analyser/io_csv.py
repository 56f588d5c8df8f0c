import logging

import pandas as pd

from cgpa_analyser.course_book import (
    COURSE_COLUMN,
    CREDITS_COLUMN,
    GRADE_POINT_COLUMN,
    CourseBook,
)

logger = logging.getLogger(__name__)

# ------------------------
# CSV helpers (UI-side)
# ------------------------

COLUMN_ALIASES = {
    "course": COURSE_COLUMN,
    "name": COURSE_COLUMN,
    "course / semester": COURSE_COLUMN,
    "credits": CREDITS_COLUMN,
    "credit": CREDITS_COLUMN,
    "credit hours": CREDITS_COLUMN,
    "grade point": GRADE_POINT_COLUMN,
    "grade points": GRADE_POINT_COLUMN,
    "gp": GRADE_POINT_COLUMN,
    "grade": GRADE_POINT_COLUMN,
}


def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    matches = {}
    for col in df.columns:
        target = COLUMN_ALIASES.get(str(col).strip().lower())
        if target is not None:
            matches.setdefault(target, []).append(col)

    # one column per target: the exact header if present, else the first alias
    renamed = {}
    dropped = []
    for target, cols in matches.items():
        exact = [c for c in cols if str(c).strip().lower() == target.lower()]
        chosen = exact[0] if exact else cols[0]
        renamed[chosen] = target
        dropped.extend(c for c in cols if c != chosen)
    return df.drop(columns=dropped).rename(columns=renamed)


def read_csv_upload(uploaded_file) -> pd.DataFrame:
    df = pd.read_csv(uploaded_file)
    return _normalise_cols(df)


def validate_courses_csv(df: pd.DataFrame) -> pd.DataFrame:
    required = {CREDITS_COLUMN, GRADE_POINT_COLUMN}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(
            f"Missing columns: {sorted(missing)}. Expected: Course, Credits, Grade Point."
        )
    out = df.copy()
    if COURSE_COLUMN not in out.columns:
        out[COURSE_COLUMN] = ""
    out = out[[COURSE_COLUMN, CREDITS_COLUMN, GRADE_POINT_COLUMN]]
    # blank cells come through as NaN; the book treats None as an empty cell
    return out.astype(object).where(out.notna(), None)


def read_courses_csv(uploaded_file) -> CourseBook:
    """
    Build a fresh CourseBook from a CSV path or an uploaded file.

    Grade points are clamped and negative credits raised to zero on the way
    in, exactly as when the rows are typed by hand.
    """
    df = validate_courses_csv(read_csv_upload(uploaded_file))
    logger.info(f"Read {len(df)} rows from course CSV")
    return CourseBook.from_frame(df)


def write_courses_csv(book: CourseBook) -> str:
    return book.to_frame(include_quality_points=True).to_csv(index=False)
