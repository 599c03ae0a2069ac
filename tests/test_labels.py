import unittest

from graphwidgets.errors import LabelSelectionError
from graphwidgets.labels import HORIZONTAL, VERTICAL, abbreviate_month, select_axis_labels


class TestSelectAxisLabels(unittest.TestCase):

    def test_length_mismatch_raises(self):
        with self.assertRaises(LabelSelectionError):
            select_axis_labels(["a", "b"], [0.0], 100)

    def test_all_labels_fit(self):
        labels = ["0", "5", "10"]
        self.assertEqual(select_axis_labels(labels, [0, 50, 100], 300), {0, 1, 2})

    def test_crowded_horizontal_axis_keeps_every_step_th_label(self):
        labels = ["100"] * 20
        positions = [i * 10.0 for i in range(20)]
        # 3 chars * 7px + 10px gap = 31px per label, 6 fit in 200px, step ceil(20 / 6) = 4
        self.assertEqual(select_axis_labels(labels, positions, 200, HORIZONTAL), {0, 4, 8, 12, 16})

    def test_first_label_survives_on_a_tiny_axis(self):
        labels = ["100"] * 20
        self.assertEqual(select_axis_labels(labels, list(range(20)), 5, HORIZONTAL), {0})

    def test_empty_labels_are_never_selected(self):
        selected = select_axis_labels(["", "a", "", "b"], [0, 1, 2, 3], 1000)
        self.assertEqual(selected, {1, 3})
        self.assertEqual(select_axis_labels(["", ""], [0, 1], 1000), set())

    def test_vertical_axis_uses_font_height(self):
        labels = [str(i) for i in range(10)]
        positions = [i * 8.0 for i in range(10)]
        # 12px font + 4px gap = 16px per label, 5 fit in 80px
        selected = select_axis_labels(labels, positions, 80, VERTICAL, font_px=12, min_gap_px=4)
        self.assertEqual(selected, {0, 2, 4, 6, 8})

    def test_unknown_orientation_raises(self):
        with self.assertRaises(LabelSelectionError):
            select_axis_labels(["a"], [0], 100, "diagonal")


class TestAbbreviateMonth(unittest.TestCase):

    def test_keeps_casing_style(self):
        self.assertEqual(abbreviate_month("January"), "Jan")
        self.assertEqual(abbreviate_month("MARCH"), "MAR")
        self.assertEqual(abbreviate_month("june"), "jun")

    def test_leaves_other_text_alone(self):
        self.assertEqual(abbreviate_month("Week 1"), "Week 1")
        self.assertEqual(abbreviate_month("Jan"), "Jan")
        self.assertEqual(abbreviate_month(""), "")


if __name__ == '__main__':
    unittest.main()
