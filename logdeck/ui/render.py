#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
"""Dirty-region render pipeline for the dashboard."""

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from .. import (
    UI_BOOTING,
    UI_GRAPH_HINT,
    UI_NO_GRAPH,
    UI_PROMPT_CARET,
    UI_PROMPT_CURSOR,
    UI_SEPARATOR_FILL,
)
from ..core.graph import GraphStore
from ..core.store import LogStore, printable
from ..utils.colors import style_for_kind, style_for_logo_pixel
from .logo import DEFAULT_LOGO, Logo
from .state import RedrawFlags, SessionState, View

# Shading glyphs from sparse to dense, picked by horizontal position
GRAPH_SHADES = ("░", "▒", "▓", "█")

LOGO_TOP_GLYPH = "▄"
LOGO_BOTTOM_GLYPH = "▀"
LOGO_FULL_GLYPH = "█"

Run = Tuple[int, str, Optional[str]]


def group_runs(cells: Iterable[Tuple[str, Optional[str]]]) -> List[Run]:
    """Collapse ``(char, style)`` cells into ``(offset, text, style)`` runs."""
    runs: List[Run] = []
    start = 0
    chars: List[str] = []
    current: Optional[str] = None
    for index, (char, style) in enumerate(cells):
        if chars and style != current:
            runs.append((start, "".join(chars), current))
            chars = []
        if not chars:
            start = index
            current = style
        chars.append(char)
    if chars:
        runs.append((start, "".join(chars), current))
    return runs


class RenderEngine:
    """Repaint the logo, prompt and content regions whose dirty bit is set.

    A region's bit is cleared right before it is painted, so any mark that
    lands while painting survives and is handled on the next pass.
    """

    def __init__(
        self,
        surface,
        state: SessionState,
        logs: LogStore,
        graphs: GraphStore,
        logo: Logo = DEFAULT_LOGO,
    ):
        self.surface = surface
        self.state = state
        self.logs = logs
        self.graphs = graphs
        self.logo = logo
        self.width, self.height = surface.size
        self.views = {
            View.LOG: LogView(self),
            View.GRAPH: GraphView(self),
        }

    @property
    def line_width(self) -> int:
        return max(0, self.width - 1)

    def redraw(self) -> None:
        if not self.state.is_dirty():
            return

        self.width, self.height = self.surface.size
        with self.surface.batch():
            self.surface.hide_cursor()
            if self.state.take(RedrawFlags.LOGO):
                self.paint_logo()
            if self.state.take(RedrawFlags.PROMPT):
                self.paint_prompt()
            if self.state.take(RedrawFlags.CONTENT):
                self.paint_content()

    def write(self, x: int, y: int, text: str, style: Optional[str] = None) -> None:
        """Write clipped to the visible area."""
        if y < 0 or y >= self.height or x >= self.line_width:
            return
        text = printable(text)
        if x < 0:
            text = text[-x:]
            x = 0
        self.surface.write(x, y, text[:self.line_width - x], style)

    def fill_line(self, y: int, text: str, style: Optional[str] = None, fill: str = " ") -> None:
        """Write ``text`` at column 0 and pad the rest of the row with ``fill``."""
        self.write(0, y, text[:self.line_width].ljust(self.line_width, fill), style)

    def paint_logo(self) -> None:
        logo = self.logo
        left = self.width // 2 - logo.width // 2
        for y in range(min(logo.height, self.height)):
            if y == logo.height - 1:
                glyph = LOGO_BOTTOM_GLYPH
            elif y == 0:
                glyph = LOGO_TOP_GLYPH
            else:
                glyph = LOGO_FULL_GLYPH

            cells = []
            for x in range(logo.width):
                pixel = logo.pixel(x, y)
                cells.append((glyph, pixel))
            for offset, text, pixel in group_runs(cells):
                if pixel == 0:
                    continue
                self.write(left + offset, y, text, style_for_logo_pixel(pixel))

    def prompt_text(self) -> str:
        state = self.state
        if state.initializing:
            return UI_BOOTING + "." * (state.animation_tick % 4)
        if state.current_view is View.GRAPH:
            return UI_GRAPH_HINT
        text = UI_PROMPT_CARET + state.prompt
        if state.animation_tick % 2 == 0:
            text += UI_PROMPT_CURSOR
        return text

    def paint_prompt(self) -> None:
        self.fill_line(self.height - 2, self.prompt_text(), "prompt")

    def content_geometry(self) -> Tuple[int, int]:
        """Return ``(first_row, row_count)`` of the content area."""
        top = self.logo.height + 1
        rows = (self.height - 1) - (top + 1)
        return top, max(0, rows)

    def paint_content(self) -> None:
        self.fill_line(self.logo.height, "", "separator", fill=UI_SEPARATOR_FILL)
        top, rows = self.content_geometry()
        self.views[self.state.current_view].paint(top, rows)


class LogView:
    """Scrolling log of the current channel with live-tail auto-advance."""

    def __init__(self, engine: RenderEngine):
        self.engine = engine

    def paint(self, top: int, rows: int) -> None:
        engine = self.engine
        state = engine.state
        channel = state.current_channel

        max_index = max(0, engine.logs.count_for(channel) - rows)
        state.scroll_offset = min(max(0, state.scroll_offset), max_index)

        window = engine.logs.window_for(channel, state.scroll_offset, rows)
        for row, entry in enumerate(window):
            engine.fill_line(top + row, entry.text, style_for_kind(entry.kind))

        if state.scroll_offset < max_index:
            state.scroll_offset += 1
            state.mark(RedrawFlags.CONTENT)

            # The first time the tail is reached after startup the boot log
            # has fully played; repaint everything once.
            if state.scroll_offset == max_index and state.ready:
                state.initializing = False
                state.ready = False
                state.mark(RedrawFlags.ALL)


def column_heights(data: Sequence[float], plot_width: int, divisions: int, rows: int) -> List[int]:
    """Map the newest ``plot_width`` samples to bar heights, right aligned."""
    count = len(data)
    first = max(0, count - plot_width)
    offset = plot_width - count if plot_width > count else 0

    heights = []
    for column in range(plot_width):
        index = column + first - offset
        sample = data[index] if 0 <= index < count else 0
        value = int(sample) if math.isfinite(sample) else 0
        heights.append(max(0, min(rows, value // divisions)))
    return heights


def column_style(height: int, rows: int) -> str:
    if height < rows // 3:
        return "graph.low"
    if height < rows // 2:
        return "graph.mid_low"
    if height < (rows // 3) * 2:
        return "graph.mid_high"
    return "graph.high"


def column_shade(column: int, plot_width: int) -> str:
    if column > plot_width // 2:
        return GRAPH_SHADES[3]
    if column > plot_width // 3:
        return GRAPH_SHADES[2]
    if column > plot_width // 4:
        return GRAPH_SHADES[1]
    return GRAPH_SHADES[0]


class GraphView:
    """ASCII bar chart of the current channel's graph."""

    def __init__(self, engine: RenderEngine):
        self.engine = engine

    def paint(self, top: int, rows: int) -> None:
        engine = self.engine
        state = engine.state
        if rows <= 0:
            return

        graph = engine.graphs.get(state.current_channel)
        if graph is None:
            engine.fill_line(top, UI_NO_GRAPH.format(channel=state.current_channel))
            for row in range(1, rows):
                engine.fill_line(top + row, "")
            return

        data = graph.data_points
        peak = graph.max_point if math.isfinite(graph.max_point) else 0
        pad_left = len(graph.formatter(peak)) + 1
        plot_width = max(0, engine.width - (pad_left + 1))
        divisions = max(1, int(peak / (rows + 1)))
        heights = column_heights(data, plot_width, divisions, rows)
        styles = [column_style(height, rows) for height in heights]
        shades = [column_shade(column, plot_width) for column in range(plot_width)]

        for row in range(rows):
            level = rows - row
            label = graph.formatter(level * divisions)[:pad_left - 1]
            engine.write(0, top + row, label.ljust(pad_left - 1) + "|", "graph.axis")

            cells = []
            for column in range(plot_width):
                if heights[column] >= level:
                    cells.append((shades[column], styles[column]))
                else:
                    cells.append((" ", None))
            for offset, text, style in group_runs(cells):
                engine.write(pad_left + offset, top + row, text, style)

        # Graphs are live; keep repainting.
        state.mark(RedrawFlags.CONTENT)
