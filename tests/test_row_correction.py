import unittest

from app.photocollage.errors import InvalidConfiguration
from app.photocollage.layout.rows import correct_rows, widen_lone_trailing
from app.photocollage.models import Thumbnail


def thumb(width, height=10, name="t"):
    return Thumbnail(name, width, height)


class TestCorrectRows(unittest.TestCase):
    def test_rounded_width_that_fits_stays_in_one_row(self):
        # 50 + 50 = 100, not over the container
        rows = correct_rows([thumb(50.4), thumb(50.4)], 100)
        self.assertEqual([len(r) for r in rows], [2])

    def test_rounding_overflow_starts_new_row(self):
        first, second = thumb(50.6, name="a"), thumb(50.6, name="b")
        rows = correct_rows([first, second], 100)
        # 51 + 51 = 102 > 100
        self.assertEqual([[t.image for t in r] for r in rows], [["a"], ["b"]])

    def test_height_change_closes_row(self):
        rows = correct_rows([thumb(30, 10), thumb(30, 10), thumb(30, 20)], 1000)
        self.assertEqual([len(r) for r in rows], [2, 1])
        self.assertTrue(all(len({t.height for t in r}) == 1 for r in rows))

    def test_packer_row_boundary_kept_at_equal_heights(self):
        first = [Thumbnail("a", 300, 300, row=0), Thumbnail("b", 300, 300, row=0)]
        second = [Thumbnail("c", 40, 300, row=1), Thumbnail("d", 300, 300, row=1)]
        rows = correct_rows(first + second, 1000)
        self.assertEqual([[t.image for t in r] for r in rows], [["a", "b"], ["c", "d"]])

    def test_width_check_splits_inside_a_packer_row(self):
        rows = correct_rows([Thumbnail(n, 600, 10, row=0) for n in "ab"], 1000)
        self.assertEqual([len(r) for r in rows], [1, 1])

    def test_lone_trailing_thumbnail_is_widened_by_spacing(self):
        last = thumb(50.6, name="b")
        rows = correct_rows([thumb(50.6, name="a"), last], 100, spacing=5)
        self.assertAlmostEqual(rows[-1][0].width, 55.6)
        # Earlier rows and the input thumbnail are untouched.
        self.assertAlmostEqual(rows[0][0].width, 50.6)
        self.assertAlmostEqual(last.width, 50.6)

    def test_trailing_row_with_several_thumbnails_is_not_widened(self):
        rows = correct_rows([thumb(40), thumb(40)], 100, spacing=5)
        self.assertEqual([t.width for t in rows[0]], [40, 40])

    def test_single_oversized_thumbnail_forms_its_own_row(self):
        rows = correct_rows([thumb(120)], 100)
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0][0].width, 120)

    def test_empty_and_invalid(self):
        self.assertEqual(correct_rows([], 100), [])
        with self.assertRaises(InvalidConfiguration):
            correct_rows([thumb(10)], 0)


class TestWidenLoneTrailing(unittest.TestCase):
    def test_no_spacing_is_a_no_op(self):
        rows = [(thumb(10),)]
        self.assertEqual(widen_lone_trailing(rows, 0), rows)

    def test_returns_new_list(self):
        rows = [(thumb(10), thumb(10)), (thumb(20, 30),)]
        widened = widen_lone_trailing(rows, 4)
        self.assertIsNot(widened, rows)
        self.assertEqual(widened[-1][0].width, 24)
        self.assertEqual(rows[-1][0].width, 20)


if __name__ == "__main__":
    unittest.main()
