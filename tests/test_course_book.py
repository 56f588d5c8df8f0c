import unittest

import pandas as pd

from cgpa_analyser.course_book import CourseBook


class CourseBookTests(unittest.TestCase):
    def setUp(self):
        self.book = CourseBook()

    def test_ids_are_never_reused(self):
        first = self.book.add("Math 101", 3, 3.7)
        second = self.book.add("Physics", 3, 3.3)
        self.book.remove(second.entry_id)
        third = self.book.add()
        self.assertEqual([first.entry_id, second.entry_id, third.entry_id], [1, 2, 3])
        self.assertEqual([e.entry_id for e in self.book], [1, 3])

    def test_grade_point_is_clamped_on_add_and_update(self):
        entry = self.book.add("Chem", 3, 5.2)
        self.assertEqual(entry.grade_point, 4.0)
        self.book.update(entry.entry_id, grade_point=-1)
        self.assertEqual(entry.grade_point, 0.0)
        self.book.update(entry.entry_id, grade_point="3.25")
        self.assertEqual(entry.grade_point, 3.25)

    def test_credits_only_lose_their_sign(self):
        entry = self.book.add("Lab", -2, 3.0)
        self.assertEqual(entry.credit_hours, 0.0)
        self.book.update(entry.entry_id, credit_hours=12)
        self.assertEqual(entry.credit_hours, 12.0)

    def test_update_leaves_other_fields(self):
        entry = self.book.add("Art", 2, 3.0)
        self.book.update(entry.entry_id, name="Art History")
        self.assertEqual((entry.name, entry.credit_hours, entry.grade_point), ("Art History", 2.0, 3.0))
        self.book.update(entry.entry_id, credit_hours="")
        self.assertIsNone(entry.credit_hours)

    def test_unknown_ids(self):
        with self.assertRaises(KeyError):
            self.book.update(42, grade_point=3.0)
        with self.assertRaises(KeyError):
            self.book.remove(42)

    def test_quality_points(self):
        full = self.book.add("A", 3, 4.0)
        zero = self.book.add("B", 0, 3.0)
        partial = self.book.add("C", 2, None)
        self.assertEqual(full.quality_points, 12.0)
        self.assertIsNone(zero.quality_points)
        self.assertIsNone(partial.quality_points)
        self.assertEqual([row["quality_points"] for row in self.book.rows()], ["12.00", "—", "—"])

    def test_totals_skip_half_filled_rows(self):
        self.book.add("A", 3, 4.0)
        self.book.add("B", 0, 3.0)
        self.book.add("C", 2, None)
        totals = self.book.totals()
        self.assertEqual(totals.total_credits, 3.0)
        self.assertAlmostEqual(totals.cumulative_average, 4.0)

    def test_demo_rows(self):
        self.book.load_demo()
        self.assertEqual(len(self.book), 3)
        self.assertEqual(self.book.totals().total_credits, 8.0)
        self.assertAlmostEqual(self.book.totals().total_quality_points, 29.0)

    def test_empty_book(self):
        self.assertTrue(self.book.is_empty)
        self.assertEqual(self.book.totals().cumulative_average, 0.0)
        self.book.add()
        self.assertFalse(self.book.is_empty)
        self.book.clear()
        self.assertTrue(self.book.is_empty)

    def test_frame_round_trip(self):
        self.book.add("Calculus I", 3, 3.7)
        self.book.add("", None, 2.0)
        df = self.book.to_frame()
        self.assertEqual(list(df.columns), ["Course", "Credits", "Grade Point"])

        copy = CourseBook.from_frame(df)
        self.assertEqual(
            [(e.name, e.credit_hours, e.grade_point) for e in copy],
            [("Calculus I", 3.0, 3.7), ("", None, 2.0)],
        )

    def test_from_frame_clamps(self):
        df = pd.DataFrame([{"Course": "X", "Credits": -1.0, "Grade Point": 9.0}])
        entry = next(iter(CourseBook.from_frame(df)))
        self.assertEqual((entry.credit_hours, entry.grade_point), (0.0, 4.0))


if __name__ == "__main__":
    unittest.main()
