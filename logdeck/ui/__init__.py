#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#

import importlib
from typing import Any

__all__ = ["Dashboard", "RichTerminal"]

_MODULES = {
    "Dashboard": "logdeck.ui.dashboard",
    "RichTerminal": "logdeck.ui.terminal",
}


def __getattr__(name: str) -> Any:
    if name in __all__:
        module = importlib.import_module(_MODULES[name])
        value = getattr(module, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'logdeck.ui' has no attribute {name!r}")
