import io
import unittest

import pandas as pd

from cgpa_analyser.course_book import CourseBook
from cgpa_analyser.io_csv import read_courses_csv, validate_courses_csv, write_courses_csv


class ReadCoursesCsvTests(unittest.TestCase):
    def test_reads_rows_with_aliased_headers(self):
        text = " Name ,CREDIT HOURS,gp\nCalculus I,3,3.7\nPhysics I,3,5\n"
        book = read_courses_csv(io.StringIO(text))
        rows = [(e.name, e.credit_hours, e.grade_point) for e in book]
        self.assertEqual(rows, [("Calculus I", 3.0, 3.7), ("Physics I", 3.0, 4.0)])

    def test_blank_cells_become_missing(self):
        text = "Course,Credits,Grade Point\n,3,\nLab,,3.0\n"
        book = read_courses_csv(io.StringIO(text))
        rows = [(e.name, e.credit_hours, e.grade_point) for e in book]
        self.assertEqual(rows, [("", 3.0, None), ("Lab", None, 3.0)])
        self.assertEqual(book.totals().total_credits, 0.0)

    def test_course_name_is_optional(self):
        book = read_courses_csv(io.StringIO("credits,grade point\n2,4.0\n"))
        entry = next(iter(book))
        self.assertEqual(entry.name, "")
        self.assertEqual(book.totals().total_quality_points, 8.0)

    def test_missing_columns(self):
        with self.assertRaises(ValueError) as ctx:
            read_courses_csv(io.StringIO("Course,Credits\nArt,3\n"))
        self.assertIn("Grade Point", str(ctx.exception))

    def test_exact_header_wins_over_alias_in_either_order(self):
        for text in ("Course,credit,Credits,gp\nA,2,3,4.0\n",
                     "Course,Credits,credit,gp\nA,3,2,4.0\n"):
            entry = next(iter(read_courses_csv(io.StringIO(text))))
            self.assertEqual((entry.credit_hours, entry.grade_point), (3.0, 4.0), text)

    def test_grade_point_header_wins_over_grade_alias(self):
        for text in ("Course,Credits,Grade,Grade Point\nA,3,1.0,3.5\n",
                     "Course,Credits,Grade Point,Grade\nA,3,3.5,1.0\n"):
            entry = next(iter(read_courses_csv(io.StringIO(text))))
            self.assertEqual((entry.credit_hours, entry.grade_point), (3.0, 3.5), text)

    def test_first_alias_used_when_no_exact_header(self):
        entry = next(iter(read_courses_csv(io.StringIO("course,credit,credit hours,gp\nA,2,3,4.0\n"))))
        self.assertEqual(entry.credit_hours, 2.0)

    def test_validate_keeps_known_columns_only(self):
        df = pd.DataFrame([{"Course": "A", "Credits": 3, "Grade Point": 3.0, "Notes": "x"}])
        out = validate_courses_csv(df)
        self.assertEqual(list(out.columns), ["Course", "Credits", "Grade Point"])


class WriteCoursesCsvTests(unittest.TestCase):
    def test_writes_quality_points(self):
        book = CourseBook()
        book.add("Calculus I", 3, 4.0)
        book.add("Half filled", 2, None)
        text = write_courses_csv(book)
        lines = text.strip().splitlines()
        self.assertEqual(lines[0], "Course,Credits,Grade Point,Quality Points")
        self.assertEqual(lines[1], "Calculus I,3.0,4.0,12.0")
        self.assertEqual(lines[2], "Half filled,2.0,,")

    def test_written_file_reads_back(self):
        book = CourseBook()
        book.load_demo()
        copy = read_courses_csv(io.StringIO(write_courses_csv(book)))
        self.assertEqual(copy.totals(), book.totals())


if __name__ == "__main__":
    unittest.main()
