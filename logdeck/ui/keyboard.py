#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
"""Non-blocking keystroke source for the dashboard."""

import os
import queue
import select
import sys
import threading
from typing import Optional

from ..debug import debug_log, log_error

KEY_ESCAPE = "escape"
KEY_ENTER = "enter"
KEY_BACKSPACE = "backspace"

ESCAPE_SEQUENCE_TIMEOUT = 0.02


def translate_char(char: str) -> Optional[str]:
    """Map a raw character to a key name, a printable char, or ``None``."""
    if char in ("\r", "\n"):
        return KEY_ENTER
    if char in ("\x7f", "\x08"):
        return KEY_BACKSPACE
    if char == "\x1b":
        return KEY_ESCAPE
    if char.isprintable():
        return char
    return None


class KeyboardInput:
    """Read stdin in cbreak mode on a daemon thread and queue keys.

    :meth:`poll` never blocks. A lone ``ESC`` is reported as ``escape``;
    multi-byte escape sequences (arrow keys and friends) are dropped.
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self._keys: "queue.Queue[str]" = queue.Queue()
        self._stop = threading.Event()
        self._thread = None
        self._original_settings = None

    def start(self) -> bool:
        try:
            import termios
            import tty

            fd = self.stream.fileno()
            self._original_settings = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        except Exception as exc:
            log_error("KEYBOARD_SETUP", "keyboard", str(exc))
            return False

        self._thread = threading.Thread(target=self._read_loop, daemon=True)
        self._thread.start()
        debug_log("KEYBOARD_STARTED", "Keyboard reader active")
        return True

    def _read_loop(self) -> None:
        fd = self.stream.fileno()
        while not self._stop.is_set():
            try:
                ready, _, _ = select.select([fd], [], [], 0.1)
                if not ready:
                    continue
                data = os.read(fd, 1)
            except OSError as exc:
                log_error("KEYBOARD_READ", "keyboard", str(exc))
                break
            if not data:
                break

            char = data.decode("latin-1")
            if char == "\x1b" and self._drain_sequence(fd):
                continue
            key = translate_char(char)
            if key is not None:
                self._keys.put(key)

    @staticmethod
    def _readable(fd: int) -> bool:
        ready, _, _ = select.select([fd], [], [], ESCAPE_SEQUENCE_TIMEOUT)
        return bool(ready)

    def _drain_sequence(self, fd: int) -> bool:
        """Consume the rest of an escape sequence; report whether one was found."""
        if not self._readable(fd):
            return False
        introducer = os.read(fd, 1)
        if not introducer:
            return False
        if introducer in (b"[", b"O"):
            # CSI/SS3 parameters run until a final byte in 0x40-0x7E
            while self._readable(fd):
                final = os.read(fd, 1)
                if not final or 0x40 <= final[0] <= 0x7E:
                    break
        return True

    def poll(self) -> Optional[str]:
        try:
            return self._keys.get_nowait()
        except queue.Empty:
            return None

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None

        if self._original_settings is not None:
            try:
                import termios

                termios.tcsetattr(
                    self.stream.fileno(), termios.TCSADRAIN, self._original_settings
                )
            except Exception as exc:
                log_error("KEYBOARD_RESTORE", "keyboard", str(exc))
            finally:
                self._original_settings = None
