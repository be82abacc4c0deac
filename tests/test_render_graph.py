#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
import unittest

from logdeck.core.graph import Graph
from logdeck.ui.dashboard import Dashboard
from logdeck.ui.render import column_heights, column_shade, column_style, group_runs
from logdeck.ui.state import RedrawFlags, View

from tests import FakeClock, FakeSurface, TINY_LOGO


class GraphMathTests(unittest.TestCase):
    def test_heights_are_clamped_to_page_height(self):
        divisions = 3
        heights = column_heights([20 * divisions], 1, divisions, 10)
        self.assertEqual(heights, [10])

    def test_short_series_hugs_right_edge(self):
        self.assertEqual(column_heights([5, 7], 5, 1, 10), [0, 0, 0, 5, 7])

    def test_long_series_keeps_most_recent_samples(self):
        data = list(range(1, 11))
        self.assertEqual(column_heights(data, 3, 1, 10), [8, 9, 10])

    def test_values_are_divided_and_floored(self):
        self.assertEqual(column_heights([9, 10, 11.9], 3, 5, 10), [1, 2, 2])

    def test_negative_samples_plot_as_empty(self):
        self.assertEqual(column_heights([-4], 1, 1, 10), [0])

    def test_zero_width_plot(self):
        self.assertEqual(column_heights([1, 2, 3], 0, 1, 10), [])

    def test_non_finite_samples_plot_as_empty(self):
        samples = [float("nan"), float("inf"), float("-inf"), 4]
        self.assertEqual(column_heights(samples, 4, 1, 10), [0, 0, 0, 4])

    def test_color_brackets(self):
        styles = [column_style(height, 10) for height in range(11)]
        self.assertEqual(styles[:3], ["graph.low"] * 3)
        self.assertEqual(styles[3:5], ["graph.mid_low"] * 2)
        self.assertEqual(styles[5], "graph.mid_high")
        self.assertEqual(styles[6:], ["graph.high"] * 5)

    def test_shading_gets_denser_to_the_right(self):
        shades = [column_shade(column, 12) for column in range(12)]
        self.assertEqual(shades[:4], ["░"] * 4)
        self.assertEqual(shades[4], "▒")
        self.assertEqual(shades[5:7], ["▓"] * 2)
        self.assertEqual(shades[7:], ["█"] * 5)

    def test_group_runs(self):
        cells = [("a", "x"), ("b", "x"), (" ", None), ("c", "y")]
        self.assertEqual(group_runs(cells), [(0, "ab", "x"), (2, " ", None), (3, "c", "y")])
        self.assertEqual(group_runs([]), [])


class GraphViewTests(unittest.TestCase):
    def setUp(self):
        # Height 15 gives a page of ten rows starting at row 3
        self.surface = FakeSurface(width=40, height=15)
        self.dashboard = Dashboard(surface=self.surface, logo=TINY_LOGO, clock=FakeClock())
        self.dashboard.mark_ready(dispatcher=None)

    def test_placeholder_without_graph(self):
        self.dashboard.show_graph(["nothing"])
        self.dashboard.tick()
        self.assertEqual(self.surface.row(3), "No graph data available for 'nothing'.")
        for y in range(4, 13):
            self.assertEqual(self.surface.row(y), "")

    def test_axis_labels_and_bar(self):
        self.dashboard.set_channel_graph("load", Graph([55]))
        self.dashboard.show_graph(["load"])
        self.dashboard.tick()

        # divisions = int(55 / 11) = 5, labels padded to len("55")
        self.assertTrue(self.surface.row(3).startswith("50|"))
        self.assertTrue(self.surface.row(12).startswith("5 |"))
        self.assertEqual(self.surface.style_at(0, 3), "graph.axis")

        # Single sample lands in the rightmost plotted column (x = 3 + 35)
        for y in range(3, 13):
            self.assertEqual(self.surface.cells[y][38], "█")
            self.assertEqual(self.surface.cells[y][37], " ")
        self.assertEqual(self.surface.style_at(38, 3), "graph.high")
        self.assertEqual(self.surface.cells[3][39], " ")

    def test_partial_bar_fills_from_bottom(self):
        self.dashboard.set_channel_graph("load", Graph([100, 30]))
        self.dashboard.show_graph(["load"])
        self.dashboard.tick()

        # divisions = 9, so 30 plots three rows high in the last column
        filled = [y for y in range(3, 13) if self.surface.cells[y][38] != " "]
        self.assertEqual(filled, [10, 11, 12])
        self.assertEqual(self.surface.style_at(38, 12), "graph.mid_low")

    def test_custom_formatter_widens_axis(self):
        graph = Graph([80], formatter=lambda value: f"{value:.0f}%")
        self.dashboard.set_channel_graph("cpu", graph)
        self.dashboard.show_graph(["cpu"])
        self.dashboard.tick()
        self.assertTrue(self.surface.row(3).startswith("70%|"))

    def test_non_finite_samples_do_not_stop_rendering(self):
        for bad in (float("nan"), float("inf")):
            self.dashboard.set_channel_graph("load", Graph([5, bad]))
            self.dashboard.show_graph(["load"])
            self.dashboard.tick()
            self.assertTrue(self.surface.row(3).startswith("1|"))
            self.assertEqual(self.surface.cells[12][37], "█")
            self.assertEqual(self.surface.cells[12][38], " ")

    def test_graph_stays_live(self):
        self.dashboard.set_channel_graph("load", Graph([1]))
        self.dashboard.show_graph(["load"])
        self.dashboard.tick()
        self.assertTrue(self.dashboard.state.dirty & RedrawFlags.CONTENT)

    def test_new_samples_show_on_next_tick(self):
        graph = Graph([10])
        self.dashboard.set_channel_graph("load", graph)
        self.dashboard.show_graph(["load"])
        self.dashboard.tick()
        graph.add(10)
        self.dashboard.tick()
        self.assertEqual(self.surface.cells[12][37], "█")

    def test_escape_returns_to_log_view(self):
        self.dashboard.show_graph(["load"])
        self.assertIs(self.dashboard.state.current_view, View.GRAPH)
        self.dashboard.handle_key("escape")
        self.assertIs(self.dashboard.state.current_view, View.LOG)
        self.assertEqual(self.dashboard.state.current_channel, "load")


if __name__ == '__main__':
    unittest.main()
