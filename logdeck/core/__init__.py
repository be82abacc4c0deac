#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
"""Channel-tagged log and graph storage for LogDeck."""

import importlib
from typing import Any

_EXPORTS = {
    'LogKind': 'logdeck.core.store',
    'LogEntry': 'logdeck.core.store',
    'LogStore': 'logdeck.core.store',
    'Graph': 'logdeck.core.graph',
    'GraphStore': 'logdeck.core.graph',
}

__all__ = list(_EXPORTS)


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module = importlib.import_module(_EXPORTS[name])
        value = getattr(module, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'logdeck.core' has no attribute {name!r}")
