#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
"""Test helpers for LogDeck."""

from collections import deque
from contextlib import contextmanager

from logdeck.ui.logo import Logo

# Two-row logo keeps the content area easy to reason about:
# separator on row 2, content from row 3, prompt on height - 2.
TINY_LOGO = Logo.from_rows(["1.2", "333"])


class FakeSurface:
    """In-memory terminal grid that records every write."""

    def __init__(self, width=40, height=12):
        self.cursor_visible = True
        self.batches = 0
        self.writes = []
        self.resize(width, height)

    def resize(self, width, height):
        self.width = width
        self.height = height
        self.cells = [[" "] * width for _ in range(height)]
        self.styles = [[None] * width for _ in range(height)]

    @property
    def size(self):
        return self.width, self.height

    @property
    def line_width(self):
        return max(0, self.width - 1)

    def write(self, x, y, text, style=None):
        self.writes.append((x, y, text, style))
        for offset, char in enumerate(text):
            column = x + offset
            if 0 <= y < self.height and 0 <= column < self.width:
                self.cells[y][column] = char
                self.styles[y][column] = style

    def row(self, y):
        return "".join(self.cells[y]).rstrip()

    def style_at(self, x, y):
        return self.styles[y][x]

    def hide_cursor(self):
        self.cursor_visible = False

    def show_cursor(self):
        self.cursor_visible = True

    def clear(self):
        self.resize(self.width, self.height)

    @contextmanager
    def batch(self):
        self.batches += 1
        yield


class FakeKeys:
    """Scripted key source with the same ``poll`` contract as the keyboard."""

    def __init__(self, keys=()):
        self.pending = deque(keys)

    def feed(self, *keys):
        self.pending.extend(keys)

    def poll(self):
        if not self.pending:
            return None
        return self.pending.popleft()


class FakeClock:
    def __init__(self, start=100.0):
        self.now = start

    def advance(self, seconds):
        self.now += seconds

    def __call__(self):
        return self.now
