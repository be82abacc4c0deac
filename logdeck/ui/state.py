#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
"""Mutable session state shared by the dashboard and the render engine."""

import enum
import threading
from dataclasses import dataclass, field

from .. import DEFAULT_CHANNEL


class RedrawFlags(enum.IntFlag):
    NONE = 0
    LOGO = 0x1
    PROMPT = 0x2
    CONTENT = 0x4
    ALL = LOGO | PROMPT | CONTENT


class View(enum.Enum):
    LOG = "log"
    GRAPH = "graph"


@dataclass
class SessionState:
    current_channel: str = DEFAULT_CHANNEL
    current_view: View = View.LOG
    dirty: RedrawFlags = RedrawFlags.NONE
    scroll_offset: int = 0
    prompt: str = ""
    animation_tick: int = 0
    ready: bool = False
    initializing: bool = True
    _flag_lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def mark(self, flags: RedrawFlags) -> None:
        """Schedule ``flags`` for repaint. Marks are only ever added here."""
        with self._flag_lock:
            self.dirty |= flags

    def take(self, flag: RedrawFlags) -> bool:
        """Clear ``flag`` and report whether it was set."""
        with self._flag_lock:
            if not self.dirty & flag:
                return False
            self.dirty &= ~flag
            return True

    def is_dirty(self) -> bool:
        return self.dirty != RedrawFlags.NONE
