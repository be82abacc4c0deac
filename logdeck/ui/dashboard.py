#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
"""Session controller and input loop of the LogDeck dashboard."""

import time
import traceback
from typing import Callable, List

from .. import ANIMATION_INTERVAL, DEBUG_CHANNEL, DEFAULT_CHANNEL
from ..commands import BadCommand
from ..core.graph import Graph, GraphStore
from ..core.store import LogKind, LogStore
from ..debug import debug_log, log_error, log_operation, set_debug_sink
from .keyboard import KEY_BACKSPACE, KEY_ENTER, KEY_ESCAPE
from .logo import DEFAULT_LOGO, Logo
from .render import RenderEngine
from .state import RedrawFlags, SessionState, View
from .terminal import RichTerminal

# Upper bound on keys handled by one tick
MAX_KEYS_PER_TICK = 64


class Dashboard:
    """Live console with per-channel logs, graphs and a command prompt.

    Call :meth:`tick` from one thread at whatever cadence suits the caller.
    :meth:`write` and :meth:`write_to_channel` are safe from any thread.
    """

    def __init__(
        self,
        surface=None,
        keys=None,
        logo: Logo = DEFAULT_LOGO,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.surface = surface if surface is not None else RichTerminal()
        self.keys = keys
        self.dispatcher = None
        self.state = SessionState()
        self.state.mark(RedrawFlags.LOGO | RedrawFlags.PROMPT)
        self.logs = LogStore(
            width=lambda: self.surface.line_width,
            on_append=self._on_append,
        )
        self.graphs = GraphStore()
        self.engine = RenderEngine(self.surface, self.state, self.logs, self.graphs, logo)
        self._clock = clock
        self._last_animation = clock()

    def _on_append(self, channel: str) -> None:
        self.state.mark(RedrawFlags.CONTENT)

    # Producers

    def write(self, kind: LogKind, text: str) -> None:
        self.logs.write(kind, text)

    def write_to_channel(self, channel: str, kind: LogKind, text: str) -> None:
        self.logs.write_to_channel(channel, kind, text)

    def set_channel_graph(self, channel: str, graph: Graph) -> None:
        self.graphs.set_channel_graph(channel, graph)
        if channel == self.state.current_channel:
            self.state.mark(RedrawFlags.CONTENT)

    def attach_debug_channel(self) -> None:
        """Send debug records to the debug channel instead of stdout."""
        set_debug_sink(lambda line: self.write_to_channel(DEBUG_CHANNEL, LogKind.DEBUG, line))

    # Lifecycle

    def start(self) -> None:
        self.surface.clear()
        self.surface.hide_cursor()
        self.state.mark(RedrawFlags.ALL)

    def close(self) -> None:
        set_debug_sink(None)
        self.surface.clear()
        self.surface.show_cursor()

    def mark_ready(self, dispatcher) -> None:
        self.dispatcher = dispatcher
        self.state.ready = True
        self.state.initializing = False
        self.state.mark(RedrawFlags.ALL)
        log_operation("ready", "dashboard")

    def switch_channel(self, channel: str, view: View) -> None:
        state = self.state
        if state.current_channel == channel and state.current_view is view:
            return

        if state.current_view is not view:
            state.current_view = view
            state.mark(RedrawFlags.PROMPT)

        if state.current_channel != channel:
            state.current_channel = channel
            state.mark(RedrawFlags.CONTENT)

        debug_log("CHANNEL_SWITCH", f"{channel} ({view.value})")

    def _switch_from_args(self, args: List[str], view: View) -> None:
        channel = args[0] if args else DEFAULT_CHANNEL
        self.switch_channel(channel, view)

    def show_log(self, args: List[str]) -> None:
        self._switch_from_args(args, View.LOG)

    def show_graph(self, args: List[str]) -> None:
        self._switch_from_args(args, View.GRAPH)

    # Input

    def check_keys(self) -> bool:
        """Handle one pending key; return False when none was waiting."""
        key = self.keys.poll() if self.keys is not None else None
        if key is None:
            return False
        self.handle_key(key)
        return True

    def handle_key(self, key: str) -> None:
        state = self.state

        if state.current_view is View.GRAPH:
            if key == KEY_ESCAPE:
                self.switch_channel(state.current_channel, View.LOG)
                state.mark(RedrawFlags.PROMPT | RedrawFlags.CONTENT)
            return

        if len(key) == 1 and 32 <= ord(key) < 127:
            state.prompt += key
            state.mark(RedrawFlags.PROMPT)
        elif key == KEY_BACKSPACE:
            if state.prompt:
                state.prompt = state.prompt[:-1]
                state.mark(RedrawFlags.PROMPT)
        elif key == KEY_ENTER:
            if state.prompt:
                self._submit(state.prompt)
                state.prompt = ""
                state.mark(RedrawFlags.PROMPT)

    def _submit(self, line: str) -> None:
        self.write_to_channel(self.state.current_channel, LogKind.MESSAGE, line)
        if self.dispatcher is None:
            return

        try:
            self.dispatcher.execute(line)
        except BadCommand as exc:
            self.write_to_channel(self.state.current_channel, LogKind.WARNING, str(exc))
        except Exception as exc:
            log_error("COMMAND_FAILED", "dispatcher", str(exc), {"line": line})
            self.write_to_channel(self.state.current_channel, LogKind.ERROR, traceback.format_exc().rstrip())

    # Main loop step

    def tick(self) -> None:
        state = self.state
        if not state.initializing:
            for _ in range(MAX_KEYS_PER_TICK):
                if not self.check_keys():
                    break

        now = self._clock()
        if now - self._last_animation >= ANIMATION_INTERVAL:
            self._last_animation = now
            state.animation_tick += 1
            state.mark(RedrawFlags.PROMPT)

        if state.is_dirty():
            with self.logs.lock:
                self.engine.redraw()

