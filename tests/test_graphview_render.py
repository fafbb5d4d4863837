from __future__ import annotations

import unittest

import numpy as np

from graphview import (
    BarGraphSeries,
    DataPoint,
    GraphView,
    GridLabelRenderer,
    LineGraphSeries,
    PointerEvent,
    RasterCanvas,
)
from graphview.raster.draw_text import text_size as raster_text_size

from graphview_support import RecordingCanvas, fixed_text_size, make_graph


RED = (255, 0, 0, 255)


class RasterCanvasTests(unittest.TestCase):
    def test_lines_and_rects(self) -> None:
        canvas = RasterCanvas(40, 30, background=(0, 0, 0, 255))
        canvas.draw_line(2, 5, 30, 5, RED)
        canvas.draw_rect(10, 10, 12, 12, (0, 255, 0, 255))
        canvas.draw_rect(20, 15, 30, 25, (0, 0, 255, 255), fill=False)
        rgba = canvas.to_rgba()
        self.assertEqual(tuple(rgba[5, 16]), RED)
        self.assertEqual(tuple(rgba[11, 11]), (0, 255, 0, 255))
        self.assertEqual(tuple(rgba[15, 25]), (0, 0, 255, 255))
        self.assertEqual(tuple(rgba[20, 25]), (0, 0, 0, 255))

    def test_alpha_blending(self) -> None:
        canvas = RasterCanvas(4, 4, background=(0, 0, 0, 255))
        canvas.draw_rect(0, 0, 3, 3, (255, 255, 255, 128))
        value = int(canvas.to_rgba()[1, 1, 0])
        self.assertGreater(value, 100)
        self.assertLess(value, 160)

    def test_non_finite_coordinates_are_skipped(self) -> None:
        canvas = RasterCanvas(10, 10)
        before = canvas.to_rgba()
        canvas.draw_line(float("nan"), 0, 5, 5, RED)
        canvas.draw_rect(0, 0, float("inf"), 5, RED)
        np.testing.assert_array_equal(canvas.to_rgba(), before)

    def test_text(self) -> None:
        canvas = RasterCanvas(120, 40, background=(0, 0, 0, 255))
        w, h = canvas.text_size("100", font_size_px=14.0)
        self.assertGreater(w, 0)
        self.assertGreater(h, 0)
        rw, rh = canvas.text_size("100", font_size_px=14.0, rotate_deg=90)
        self.assertEqual((rw, rh), (h, w))
        canvas.draw_text(60, 10, "100", (255, 255, 255, 255), font_size_px=14.0, align="center")
        self.assertTrue(np.any(canvas.to_rgba()[:, :, 0] > 0))

    def test_to_rgba_returns_a_copy(self) -> None:
        canvas = RasterCanvas(3, 3)
        out = canvas.to_rgba()
        out[:, :] = 255
        self.assertEqual(int(canvas.to_rgba()[0, 0, 0]), 0)


class GraphRenderTests(unittest.TestCase):
    def test_line_series_is_drawn_inside_content_rect(self) -> None:
        graph = GraphView(320, 240, title="Samples")
        graph.add_series(LineGraphSeries([(0, 1), (5, 8), (10, 3)], color=RED, thickness=3))
        canvas = RasterCanvas(graph.width, graph.height)
        graph.draw(canvas)
        rect = graph.graph_content_rect()
        rgba = canvas.to_rgba()
        inner = rgba[int(rect.top) + 1 : int(rect.bottom), int(rect.left) + 1 : int(rect.right), :3]
        self.assertTrue(np.any(np.all(inner == np.asarray(RED[:3], dtype=np.uint8), axis=-1)))
        outside = rgba[: int(rect.top) - 1, :, :3]
        self.assertFalse(np.any(np.all(outside == np.asarray(RED[:3], dtype=np.uint8), axis=-1)))

    def test_bar_series_fills_pixels(self) -> None:
        graph = GraphView(200, 160)
        graph.add_series(BarGraphSeries([(0, 2), (1, 4), (2, 6)], color=(0, 200, 0, 255)))
        canvas = RasterCanvas(graph.width, graph.height)
        graph.draw(canvas)
        green = np.all(canvas.to_rgba()[:, :, :3] == np.asarray([0, 200, 0], dtype=np.uint8), axis=-1)
        self.assertGreater(int(np.count_nonzero(green)), 50)

    def test_draw_order(self) -> None:
        graph = make_graph(title="T")
        graph.add_series(LineGraphSeries([(0, 0), (1, 1)], color=RED))
        canvas = RecordingCanvas()
        graph.draw(canvas)
        self.assertEqual(canvas.texts[0], "T")
        self.assertEqual(canvas.rects[0][:4], (0, 0, 320, 240))
        border = canvas.rects[-1]
        self.assertFalse(border[5])

    def test_set_size_and_title_change_layout(self) -> None:
        graph = make_graph()
        graph.add_series(LineGraphSeries([(0, 0), (1, 1)]))
        rect = graph.graph_content_rect()
        graph.set_title("Title")
        self.assertEqual(graph.graph_content_rect().top, rect.top + 10 + 4)
        graph.set_size(400, 300)
        self.assertGreater(graph.graph_content_rect().width, rect.width)
        with self.assertRaises(ValueError):
            graph.set_size(0, 10)


class GridLabelRendererTests(unittest.TestCase):
    def test_label_sizes_are_cached_until_invalidated(self) -> None:
        graph = make_graph()
        s = LineGraphSeries([(0, 0), (1, 5)])
        graph.add_series(s)
        grid = graph.grid_label_renderer
        self.assertEqual(grid.label_vertical_width(graph), 6)
        s.reset_data([(0, 0), (1, 5000)])
        self.assertEqual(grid.label_vertical_width(graph), 6)
        graph.on_data_changed(keep_label_sizes=False, keep_viewport=False)
        self.assertEqual(grid.label_vertical_width(graph), 24)

    def test_custom_formatter(self) -> None:
        graph = make_graph()
        graph.add_series(LineGraphSeries([(0, 0), (4, 4)]))
        grid = graph.grid_label_renderer
        grid.set_label_formatter(lambda v, is_x: f"{'x' if is_x else 'y'}{v:g}")
        self.assertEqual([t for _, t in grid.horizontal_labels(graph.viewport.bounds)], ["x0", "x1", "x2", "x3", "x4"])
        self.assertEqual([t for _, t in grid.vertical_labels(graph.viewport.bounds)][-1], "y4")

    def test_hidden_labels_take_no_space(self) -> None:
        graph = make_graph()
        graph.add_series(LineGraphSeries([(0, 0), (4, 4)]))
        grid = graph.grid_label_renderer
        grid.set_styles(vertical_labels_visible=False, horizontal_labels_visible=False)
        rect = graph.graph_content_rect()
        self.assertEqual((rect.left, rect.top, rect.width, rect.height), (8.0, 8.0, 304.0, 224.0))
        canvas = RecordingCanvas()
        graph.draw(canvas)
        self.assertEqual(canvas.texts, [])

    def test_axis_titles_are_measured_and_drawn(self) -> None:
        graph = make_graph()
        graph.add_series(LineGraphSeries([(0, 0), (4, 4)]))
        before = graph.graph_content_rect()
        graph.grid_label_renderer.set_styles(vertical_axis_title="volts", horizontal_axis_title="time")
        after = graph.graph_content_rect()
        self.assertEqual(after.left, before.left + 10 + 4)
        self.assertEqual(after.height, before.height - 10 - 4)
        canvas = RecordingCanvas()
        graph.draw(canvas)
        self.assertIn("volts", canvas.texts)
        self.assertIn("time", canvas.texts)

    def test_default_measurer_is_the_raster_one(self) -> None:
        grid = GridLabelRenderer()
        self.assertEqual(grid.vertical_axis_title_width(), 0)
        grid.set_styles(horizontal_axis_title="x")
        self.assertEqual(grid.horizontal_axis_title_height(), raster_text_size("x")[1] + 4)


class SecondScaleTests(unittest.TestCase):
    def test_second_scale_has_own_y_range_and_column(self) -> None:
        graph = make_graph()
        graph.add_series(LineGraphSeries([(0, 0), (10, 1)]))
        width_before = graph.graph_content_rect().width
        second = graph.get_second_scale()
        self.assertIs(graph.get_second_scale(), second)
        right = LineGraphSeries([(0, 100), (10, 300)], color=(0, 0, 255, 255))
        second.add_series(right)
        self.assertEqual((second.min_y, second.max_y), (100.0, 300.0))
        self.assertEqual(graph.bounds_for(True).min_x, graph.viewport.get_min_x())
        self.assertEqual(graph.bounds_for(True).max_y, 300.0)
        self.assertEqual(graph.bounds_for(False).max_y, 1.0)
        self.assertLess(graph.graph_content_rect().width, width_before)

        canvas = RecordingCanvas()
        graph.draw(canvas)
        self.assertIn("300", canvas.texts)
        self.assertTrue(any(line[4] == (0, 0, 255, 255) for line in canvas.lines))

    def test_manual_second_scale_bounds_and_clear(self) -> None:
        graph = make_graph()
        second = graph.get_second_scale()
        right = LineGraphSeries([(0, 100), (10, 300)])
        second.add_series(right)
        second.set_manual_y_axis_bounds(True, 0.0, 1000.0)
        graph.on_data_changed(keep_label_sizes=False, keep_viewport=False)
        self.assertEqual((second.min_y, second.max_y), (0.0, 1000.0))
        second.set_manual_y_axis_bounds(False)
        self.assertEqual((second.min_y, second.max_y), (100.0, 300.0))
        graph.clear_second_scale()
        self.assertIsNone(graph.second_scale)
        self.assertEqual(second.series, ())
        self.assertEqual(graph.bounds_for(True), graph.viewport.bounds)


class CursorModeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.graph = make_graph()
        self.a = LineGraphSeries([(0, 0), (1, 10), (2, 20), (3, 30)], title="a")
        self.b = LineGraphSeries([(0, 5), (2, 7)])
        self.graph.add_series(self.a)
        self.graph.add_series(self.b)

    def test_cursor_selects_nearest_points_and_draws_box(self) -> None:
        self.graph.set_cursor_mode(True)
        self.assertTrue(self.graph.is_cursor_mode())
        rect = self.graph.graph_content_rect()
        px, py = self.graph.viewport.map_data_to_pixel(DataPoint(2.0, 15.0), rect)
        self.assertTrue(self.graph.on_touch_event(PointerEvent("pointer_down", 0.0, px, py)))
        self.assertEqual(self.a.cursor_point, DataPoint(2.0, 20.0))
        self.assertEqual(self.b.cursor_point, DataPoint(2.0, 7.0))

        canvas = RecordingCanvas()
        self.graph.draw(canvas)
        self.assertIn("a: 20", canvas.texts)
        self.assertIn("series 2: 7", canvas.texts)
        self.assertTrue(any(line[0] == line[2] == px for line in canvas.lines))

    def test_cursor_position_is_clamped_and_viewport_does_not_pan(self) -> None:
        self.graph.set_cursor_mode(True)
        rect = self.graph.graph_content_rect()
        before = self.graph.viewport.bounds
        self.graph.on_touch_event(PointerEvent("pointer_down", 0.0, -50.0, 10000.0))
        self.graph.on_touch_event(PointerEvent("pointer_move", 0.1, 5000.0, 10000.0))
        self.assertEqual(self.graph.cursor_mode.position, (rect.right, rect.bottom))
        self.assertEqual(self.graph.viewport.bounds, before)
        self.assertEqual(self.a.cursor_point, DataPoint(3.0, 30.0))

    def test_disabling_cursor_clears_caches(self) -> None:
        self.graph.set_cursor_mode(True)
        self.a.select_cursor_point(1.0)
        self.graph.set_cursor_mode(False)
        self.assertIsNone(self.graph.cursor_mode)
        self.assertIsNone(self.a.cursor_point)


if __name__ == "__main__":
    unittest.main()
