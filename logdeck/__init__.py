#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#

__version__ = "0.3"
__author__ = "Martynas Jocius"
__license__ = "MIT"

VERSION = __version__

DEFAULT_CHANNEL = "main"
DEBUG_CHANNEL = "debug"

ANIMATION_INTERVAL = 1.0  # Seconds between prompt animation frames
TICK_INTERVAL = 0.05  # Main loop cadence
SAMPLE_INTERVAL = 1.0  # System sampler cadence

UI_APP_NAME = "LogDeck"
UI_BOOTING = f"Booting {UI_APP_NAME}"
UI_GRAPH_HINT = "Press ESC to close graph..."
UI_NO_GRAPH = "No graph data available for '{channel}'."
UI_PROMPT_CARET = ">"
UI_PROMPT_CURSOR = "_"
UI_SEPARATOR_FILL = "."
