#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
"""Cursor-addressed drawing surface backed by a Rich console."""

from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from rich.console import Console
from rich.control import Control
from rich.text import Text

from ..utils.colors import get_theme

FALLBACK_SIZE = (80, 24)


class RichTerminal:
    """Paint text at absolute positions on the real terminal.

    Every operation is best-effort; terminal errors never reach the render
    pass. ``line_width`` is one less than the column count so nothing is ever
    written to the last column, which would make most terminals auto-wrap.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(theme=get_theme(), highlight=False)

    @property
    def size(self) -> Tuple[int, int]:
        try:
            size = self.console.size
            width, height = size.width, size.height
        except Exception:
            return FALLBACK_SIZE
        if width <= 0 or height <= 0:
            return FALLBACK_SIZE
        return width, height

    @property
    def line_width(self) -> int:
        return max(0, self.size[0] - 1)

    def write(self, x: int, y: int, text: str, style: Optional[str] = None) -> None:
        if not text or x < 0 or y < 0:
            return
        try:
            self.console.control(Control.move_to(x, y))
            self.console.print(
                Text(text, style=style or ""),
                end="",
                soft_wrap=True,
                overflow="ignore",
                crop=False,
            )
        except Exception:
            pass

    def hide_cursor(self) -> None:
        try:
            self.console.show_cursor(False)
        except Exception:
            pass

    def show_cursor(self) -> None:
        try:
            self.console.show_cursor(True)
        except Exception:
            pass

    def clear(self) -> None:
        try:
            self.console.clear()
        except Exception:
            pass

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Group all writes of one render pass into a single flush."""
        with self.console:
            yield
