"""
Course list owned by one edit session.

The book is the source of truth for the rows on the page: the UI renders
`rows()` and sends edits back through `add`, `update` and `remove`.
"""
import itertools
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

import pandas as pd

from cgpa_analyser.backend_logic import (
    AggregateTotals,
    aggregate,
    clamp_grade_point,
    parse_optional_number,
)
from cgpa_analyser.config import DEMO_COURSES

logger = logging.getLogger(__name__)

COURSE_COLUMN = "Course"
CREDITS_COLUMN = "Credits"
GRADE_POINT_COLUMN = "Grade Point"
QUALITY_POINTS_COLUMN = "Quality Points"

_UNCHANGED: Any = object()


@dataclass
class CourseEntry:
    entry_id: int
    name: str = ""
    credit_hours: Optional[float] = None
    grade_point: Optional[float] = None

    @property
    def quality_points(self) -> Optional[float]:
        if self.credit_hours is None or self.grade_point is None:
            return None
        if self.credit_hours <= 0:
            return None
        return self.credit_hours * self.grade_point


def _clean_credits(value: Any) -> Optional[float]:
    credit_hours = parse_optional_number(value)
    # Negative credits become zero; the input maximum is not enforced here
    if credit_hours is not None and credit_hours < 0:
        credit_hours = 0.0
    return credit_hours


def _clean_grade_point(value: Any) -> Optional[float]:
    grade_point = parse_optional_number(value)
    if grade_point is not None:
        grade_point = clamp_grade_point(grade_point)
    return grade_point


def _clean_name(value: Any) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value)


class CourseBook:
    def __init__(self):
        self._entries: Dict[int, CourseEntry] = {}
        self._ids = itertools.count(1)

    def __iter__(self) -> Iterator[CourseEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def add(self, name: Any = "", credit_hours: Any = None, grade_point: Any = None) -> CourseEntry:
        entry = CourseEntry(
            entry_id=next(self._ids),
            name=_clean_name(name),
            credit_hours=_clean_credits(credit_hours),
            grade_point=_clean_grade_point(grade_point),
        )
        self._entries[entry.entry_id] = entry
        logger.debug(f"Added course row {entry.entry_id} ({entry.name or 'unnamed'})")
        return entry

    def get(self, entry_id: int) -> CourseEntry:
        try:
            return self._entries[entry_id]
        except KeyError:
            raise KeyError(f"No course row with id {entry_id}") from None

    def update(self, entry_id: int, *, name: Any = _UNCHANGED,
               credit_hours: Any = _UNCHANGED, grade_point: Any = _UNCHANGED) -> CourseEntry:
        """Edit a row in place; the grade point is clamped to the scale on every edit."""
        entry = self.get(entry_id)
        if name is not _UNCHANGED:
            entry.name = _clean_name(name)
        if credit_hours is not _UNCHANGED:
            entry.credit_hours = _clean_credits(credit_hours)
        if grade_point is not _UNCHANGED:
            entry.grade_point = _clean_grade_point(grade_point)
        return entry

    def remove(self, entry_id: int) -> CourseEntry:
        entry = self.get(entry_id)
        del self._entries[entry_id]
        logger.debug(f"Removed course row {entry_id}")
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def load_demo(self) -> None:
        for course in DEMO_COURSES:
            self.add(**course)

    def totals(self) -> AggregateTotals:
        return aggregate(self)

    # ------------------------
    # Projections for the UI and CSV export
    # ------------------------
    def rows(self) -> List[dict]:
        rows = []
        for entry in self:
            qp = entry.quality_points
            rows.append({
                "id": entry.entry_id,
                "name": entry.name,
                "credit_hours": entry.credit_hours,
                "grade_point": entry.grade_point,
                "quality_points": "—" if qp is None else f"{qp:.2f}",
            })
        return rows

    def to_frame(self, include_quality_points: bool = False) -> pd.DataFrame:
        records = []
        for entry in self:
            record = {
                COURSE_COLUMN: entry.name,
                CREDITS_COLUMN: entry.credit_hours,
                GRADE_POINT_COLUMN: entry.grade_point,
            }
            if include_quality_points:
                record[QUALITY_POINTS_COLUMN] = entry.quality_points
            records.append(record)

        columns = [COURSE_COLUMN, CREDITS_COLUMN, GRADE_POINT_COLUMN]
        if include_quality_points:
            columns.append(QUALITY_POINTS_COLUMN)
        return pd.DataFrame(records, columns=columns)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "CourseBook":
        book = cls()
        for _, row in df.iterrows():
            book.add(
                name=row.get(COURSE_COLUMN, ""),
                credit_hours=row.get(CREDITS_COLUMN),
                grade_point=row.get(GRADE_POINT_COLUMN),
            )
        logger.info(f"Loaded {len(book)} course rows")
        return book
