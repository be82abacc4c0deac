#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
"""Append-only, channel-tagged log buffer."""

import enum
import threading
import unicodedata
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional

from .. import DEFAULT_CHANNEL


class LogKind(enum.Enum):
    MESSAGE = "message"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"
    DEBUG = "debug"


@dataclass(frozen=True)
class LogEntry:
    channel: str
    kind: LogKind
    text: str


def blank_entry() -> LogEntry:
    return LogEntry(DEFAULT_CHANNEL, LogKind.MESSAGE, "")


def printable(line: str) -> str:
    """Expand tabs and drop control characters so one char paints one cell."""
    return "".join(ch for ch in line.expandtabs() if unicodedata.category(ch) != "Cc")


def split_lines(text: str, width: int) -> List[str]:
    """Split ``text`` on newlines and cut each line into ``width``-sized chunks.

    No word wrapping is attempted. An empty line stays a single empty chunk so
    blank lines in the source survive as blank rows.
    """
    width = max(1, width)
    chunks = []
    for line in text.split("\n"):
        line = printable(line)
        if len(line) <= width:
            chunks.append(line)
            continue
        for start in range(0, len(line), width):
            chunks.append(line[start:start + width])
    return chunks


class LogStore:
    """Thread-safe store of :class:`LogEntry` rows.

    ``width`` is a callable returning the current wrap width; it is sampled
    once per write so later terminal resizes never rewrap stored rows.
    ``on_append`` runs under the store lock after every batch, which lets the
    owner mark its content region dirty atomically with the append.
    """

    def __init__(
        self,
        width: Callable[[], int],
        on_append: Optional[Callable[[str], None]] = None,
    ):
        self._entries: List[LogEntry] = []
        self._counts: Dict[str, int] = {}
        self._width = width
        self._on_append = on_append
        self.lock = threading.RLock()

    def write(self, kind: LogKind, text: str) -> None:
        self.write_to_channel(DEFAULT_CHANNEL, kind, text)

    def write_to_channel(self, channel: str, kind: LogKind, text: str) -> None:
        text = str(text)
        with self.lock:
            for chunk in split_lines(text, self._width()):
                self._entries.append(LogEntry(channel, kind, chunk))
                self._counts[channel] = self._counts.get(channel, 0) + 1
            if self._on_append is not None:
                self._on_append(channel)

    def count_for(self, channel: str) -> int:
        with self.lock:
            return self._counts.get(channel, 0)

    def channels(self) -> Dict[str, int]:
        """Return a snapshot of entry counts keyed by channel."""
        with self.lock:
            return dict(self._counts)

    def window_for(self, channel: str, start: int, count: int) -> Iterator[LogEntry]:
        """Yield exactly ``count`` entries of ``channel`` starting at ``start``.

        ``start`` counts only entries of ``channel``. Missing rows are padded
        with blank default-channel entries. The matching rows are taken under
        :attr:`lock` on the first step, so later appends never show up in a
        window that is already being read.
        """
        with self.lock:
            matching = [entry for entry in self._entries if entry.channel == channel]
            rows = matching[max(0, start):max(0, start) + max(0, count)]

        produced = 0
        for entry in rows:
            produced += 1
            yield entry

        while produced < count:
            produced += 1
            yield blank_entry()

    def __len__(self) -> int:
        with self.lock:
            return len(self._entries)
