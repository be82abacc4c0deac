#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
"""Indexed-color logo bitmap.

Pixel ``0`` is transparent, ``1``-``3`` pick the logo colors of the theme.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

LOGO_ROWS = (
    "..1111.....222222.....11111....2222..",
    ".11..11...22....22...11...11..22..22.",
    ".11.......22....22...11.......22.....",
    ".11..333..22....22...11..333..22..333",
    ".11...11..22....22...11...11..22...22",
    "..1111.....222222.....11111....22222.",
)


@dataclass(frozen=True)
class Logo:
    width: int
    height: int
    pixels: Tuple[int, ...]

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Logo":
        width = max((len(row) for row in rows), default=0)
        pixels = []
        for row in rows:
            padded = row.ljust(width, ".")
            pixels.extend(0 if ch == "." else int(ch) for ch in padded)
        return cls(width=width, height=len(rows), pixels=tuple(pixels))

    def pixel(self, x: int, y: int) -> int:
        return self.pixels[x + y * self.width]


DEFAULT_LOGO = Logo.from_rows(LOGO_ROWS)
