from __future__ import annotations

import unittest

from multiline_chart.style import DASH_PATTERNS, POINT_SHAPES, SERIES_COLORS, series_style


class SeriesStyleTests(unittest.TestCase):
    def test_first_cycle_is_solid_with_baseline_width(self) -> None:
        style = series_style(0)
        self.assertEqual(style.color, "#3366CC")
        self.assertEqual(style.fill_tint, "#3366CC33")
        self.assertEqual(style.dash, ())
        self.assertTrue(style.solid)
        self.assertEqual(style.point_shape, "circle")
        self.assertEqual(style.line_width, 2.0)
        self.assertEqual(style.point_radius, 3.0)
        self.assertEqual(style.point_hover_radius, 5.0)

    def test_repeated_calls_are_identical(self) -> None:
        for i in (0, 5, 6, 17, 250):
            self.assertEqual(series_style(i), series_style(i))

    def test_palette_colors_are_distinct_within_first_cycle(self) -> None:
        colors = [series_style(i).color for i in range(len(SERIES_COLORS))]
        self.assertEqual(len(set(colors)), len(SERIES_COLORS))

    def test_second_cycle_reuses_colors_with_dash_shape_and_wider_line(self) -> None:
        style = series_style(len(SERIES_COLORS))
        self.assertEqual(style.color, SERIES_COLORS[0])
        self.assertEqual(style.dash, DASH_PATTERNS[0])
        self.assertEqual(style.point_shape, POINT_SHAPES[0])
        self.assertEqual(style.line_width, 3.0)
        self.assertEqual(style.point_radius, 4.0)

    def test_width_alternates_by_cycle_parity(self) -> None:
        p = len(SERIES_COLORS)
        self.assertEqual(series_style(2 * p).line_width, 2.0)
        self.assertEqual(series_style(2 * p).dash, DASH_PATTERNS[1])
        self.assertEqual(series_style(3 * p + 4).line_width, 3.0)

    def test_dash_and_shape_tables_wrap(self) -> None:
        p = len(SERIES_COLORS)
        cycle = len(DASH_PATTERNS) + 1
        style = series_style(cycle * p)
        self.assertEqual(style.dash, DASH_PATTERNS[0])
        self.assertEqual(style.point_shape, POINT_SHAPES[len(DASH_PATTERNS) % len(POINT_SHAPES)])

    def test_color_dash_shape_combination_is_unique_for_five_cycles(self) -> None:
        combos = {(s.color, s.dash, s.point_shape) for s in (series_style(i) for i in range(5 * len(SERIES_COLORS)))}
        self.assertEqual(len(combos), 5 * len(SERIES_COLORS))

    def test_large_index_is_supported(self) -> None:
        style = series_style(10_000)
        self.assertIn(style.color, SERIES_COLORS)

    def test_negative_index_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            series_style(-1)


if __name__ == "__main__":
    unittest.main()
