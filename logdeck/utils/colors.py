#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
"""Shared color theme helpers for LogDeck."""

from typing import Dict, Tuple

from rich.theme import Theme

from ..core.store import LogKind
from ..debug import log_error

# Semantic role -> Rich style
THEME_STYLES: Dict[str, str] = {
    "logo.1": "cyan",
    "logo.2": "bright_cyan",
    "logo.3": "bright_yellow",
    "log.message": "white",
    "log.warning": "bright_yellow",
    "log.error": "bright_red",
    "log.success": "bright_green",
    "log.debug": "bright_cyan",
    "prompt": "bright_black",
    "separator": "bright_black",
    "graph.axis": "bright_black",
    "graph.low": "blue",
    "graph.mid_low": "bright_blue",
    "graph.mid_high": "cyan",
    "graph.high": "bright_cyan",
}

LOG_KIND_STYLES: Dict[LogKind, str] = {
    LogKind.ERROR: "log.error",
    LogKind.WARNING: "log.warning",
    LogKind.SUCCESS: "log.success",
    LogKind.DEBUG: "log.debug",
}

# ANSI palette slot -> RGB, softer tones for the colors the theme leans on
PALETTE_OVERRIDES: Dict[int, Tuple[int, int, int]] = {
    4: (88, 69, 99),        # blue: dusk purple
    6: (52, 133, 157),      # cyan: deep teal
    9: (210, 100, 103),     # bright red: muted coral
    10: (192, 199, 65),     # bright green: olive
    11: (245, 237, 186),    # bright yellow: parchment
    12: (140, 143, 174),    # bright blue: slate
    14: (126, 196, 193),    # bright cyan: sea glass
}


def get_theme() -> Theme:
    """Return the Rich theme mapping LogDeck roles to terminal colors."""
    return Theme(THEME_STYLES)


def style_for_kind(kind: LogKind) -> str:
    return LOG_KIND_STYLES.get(kind, "log.message")


def style_for_logo_pixel(pixel: int) -> str:
    return f"logo.{pixel}"


def _osc_set_color(index: int, rgb: Tuple[int, int, int]) -> str:
    r, g, b = rgb
    return f"\x1b]4;{index};rgb:{r:02x}/{g:02x}/{b:02x}\x07"


def apply_palette(console) -> bool:
    """Remap ANSI palette slots on terminals that honour OSC 4.

    Purely cosmetic: any failure is swallowed and reported as ``False``.
    """
    try:
        if not console.is_terminal:
            return False
        sequence = "".join(
            _osc_set_color(index, rgb) for index, rgb in PALETTE_OVERRIDES.items()
        )
        console.file.write(sequence)
        console.file.flush()
        return True
    except Exception as exc:
        log_error("PALETTE", "colors", str(exc))
        return False


def reset_palette(console) -> None:
    try:
        if console.is_terminal:
            console.file.write("\x1b]104\x07")
            console.file.flush()
    except Exception:
        pass
