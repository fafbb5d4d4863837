from __future__ import annotations

import unittest

import numpy as np

from graphview.scales import (
    DataBounds,
    PixelRect,
    bounds_of,
    build_transform,
    clip_segment,
    format_tick,
    generate_nice_ticks,
    map_point,
    map_to_pixels,
    tick_step,
    unmap_point,
)


RECT = PixelRect(left=10.0, top=20.0, width=200.0, height=100.0)


class ScalesTests(unittest.TestCase):
    def test_transform_maps_bounds_corners_with_inverted_y(self) -> None:
        t = build_transform(DataBounds(min_x=0.0, max_x=10.0, min_y=0.0, max_y=100.0), RECT)
        self.assertEqual(map_point(0.0, 0.0, t), (10.0, 120.0))
        self.assertEqual(map_point(10.0, 100.0, t), (210.0, 20.0))
        px, py = map_to_pixels(np.asarray([5.0]), np.asarray([50.0]), t)
        self.assertAlmostEqual(float(px[0]), 110.0)
        self.assertAlmostEqual(float(py[0]), 70.0)

    def test_degenerate_span_collapses_to_rect_centre(self) -> None:
        t = build_transform(DataBounds(min_x=5.0, max_x=5.0, min_y=3.0, max_y=3.0), RECT)
        self.assertEqual(map_point(5.0, 3.0, t), (110.0, 70.0))
        self.assertEqual(map_point(1e6, -1e6, t), (110.0, 70.0))

    def test_non_finite_span_does_not_raise(self) -> None:
        t = build_transform(DataBounds(min_x=0.0, max_x=float("inf"), min_y=0.0, max_y=1.0), RECT)
        x, _ = map_point(3.0, 0.5, t)
        self.assertEqual(x, 110.0)

    def test_unmap_point_inverts_mapping(self) -> None:
        bounds = DataBounds(min_x=0.0, max_x=10.0, min_y=0.0, max_y=100.0)
        self.assertEqual(unmap_point(110.0, 70.0, bounds, RECT), (5.0, 50.0))
        flat = DataBounds(min_x=2.0, max_x=2.0, min_y=7.0, max_y=7.0)
        self.assertEqual(unmap_point(150.0, 30.0, flat, RECT), (2.0, 7.0))

    def test_bounds_of_ignores_non_finite_points(self) -> None:
        x = np.asarray([0.0, 1.0, np.nan, 3.0])
        y = np.asarray([5.0, np.inf, 9.0, -1.0])
        self.assertEqual(bounds_of(x, y), DataBounds(min_x=0.0, max_x=3.0, min_y=-1.0, max_y=5.0))
        self.assertIsNone(bounds_of(np.asarray([np.nan]), np.asarray([1.0])))

    def test_bounds_union(self) -> None:
        a = DataBounds(min_x=0.0, max_x=1.0, min_y=-2.0, max_y=2.0)
        b = DataBounds(min_x=-1.0, max_x=0.5, min_y=0.0, max_y=5.0)
        self.assertEqual(a.union(b), DataBounds(min_x=-1.0, max_x=1.0, min_y=-2.0, max_y=5.0))

    def test_nice_ticks(self) -> None:
        np.testing.assert_allclose(generate_nice_ticks(0.0, 2.0, 5), [0.0, 0.5, 1.0, 1.5, 2.0])
        np.testing.assert_allclose(generate_nice_ticks(0.0, 100.0, 5), [0.0, 20.0, 40.0, 60.0, 80.0, 100.0])
        np.testing.assert_allclose(generate_nice_ticks(4.0, 4.0, 5), [4.0])
        self.assertEqual(generate_nice_ticks(0.0, float("nan"), 5).size, 0)
        with self.assertRaises(ValueError):
            generate_nice_ticks(0.0, 1.0, 0)

    def test_ticks_stay_inside_range(self) -> None:
        ticks = generate_nice_ticks(-0.3, 7.7, 5)
        self.assertGreaterEqual(float(ticks[0]), -0.3)
        self.assertLessEqual(float(ticks[-1]), 7.7)
        self.assertEqual(tick_step(ticks), 2.0)

    def test_format_tick(self) -> None:
        self.assertEqual(format_tick(2.0), "2")
        self.assertEqual(format_tick(0.5, step=0.5), "0.5")
        self.assertEqual(format_tick(40.0, step=20.0), "40")
        self.assertEqual(format_tick(-0.0), "0")
        self.assertEqual(format_tick(1e10), "1.0000e+10")

    def test_clip_segment(self) -> None:
        rect = PixelRect(left=0.0, top=0.0, width=100.0, height=100.0)
        np.testing.assert_allclose(clip_segment(-10.0, 50.0, 300.0, 50.0, rect), (0.0, 50.0, 100.0, 50.0), atol=1e-9)
        self.assertIsNone(clip_segment(-10.0, -10.0, -5.0, -1.0, rect))
        self.assertEqual(clip_segment(10.0, 10.0, 20.0, 20.0, rect), (10.0, 10.0, 20.0, 20.0))


if __name__ == "__main__":
    unittest.main()
