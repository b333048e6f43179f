import unittest

from app.photocollage.errors import InvalidConfiguration
from app.photocollage.layout.search import choose_search_window, ideal_search_width


class TestIdealSearchWidth(unittest.TestCase):
    def test_scales_with_container_to_height_ratio(self):
        # 1000/300 = 3.33 -> /1.5 = 2.2 -> 2 + 8
        self.assertEqual(
            ideal_search_width(container_width=1000, target_row_height=300), 10
        )
        # 1200/300 = 4 -> /1.5 = 2.67 -> 3 + 8
        self.assertEqual(
            ideal_search_width(container_width=1200, target_row_height=300), 11
        )

    def test_clamped_to_max(self):
        self.assertEqual(
            ideal_search_width(container_width=100000, target_row_height=10), 24
        )
        self.assertEqual(
            ideal_search_width(container_width=1000, target_row_height=300, max_search=5), 5
        )

    def test_invalid_inputs(self):
        with self.assertRaises(InvalidConfiguration):
            ideal_search_width(container_width=0, target_row_height=300)
        with self.assertRaises(InvalidConfiguration):
            ideal_search_width(container_width=1000, target_row_height=0)
        with self.assertRaises(ValueError):
            ideal_search_width(container_width=1000, target_row_height=300, max_search=1)


class TestChooseSearchWindow(unittest.TestCase):
    def test_explicit_columns_win(self):
        self.assertEqual(
            choose_search_window(container_width=300, target_row_height=300, columns_count=5), 5
        )
        self.assertEqual(
            choose_search_window(container_width=1000, target_row_height=300, columns_count=3), 3
        )

    def test_narrow_container_uses_minimal_window(self):
        self.assertEqual(choose_search_window(container_width=449, target_row_height=300), 2)

    def test_wide_container_uses_ideal_width(self):
        self.assertEqual(choose_search_window(container_width=1000, target_row_height=300), 10)

    def test_negative_columns_rejected(self):
        with self.assertRaises(InvalidConfiguration):
            choose_search_window(container_width=1000, target_row_height=300, columns_count=-1)


if __name__ == "__main__":
    unittest.main()
