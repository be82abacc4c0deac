#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
"""Command dispatcher driven by the dashboard prompt."""

import shlex
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .core.store import LogKind
from .debug import log_operation

__all__ = ["BadCommand", "Command", "CommandDispatcher", "register_builtins"]


class BadCommand(Exception):
    """User-correctable command error, shown as a warning."""


@dataclass
class Command:
    name: str
    handler: Callable[[List[str]], None]
    description: str = ""
    usage: str = ""


class CommandDispatcher:
    """Parse prompt lines and route them to registered handlers.

    The first shell-style word picks the command (case-insensitive); the
    remaining words are passed to the handler as a list.
    """

    def __init__(self):
        self._commands: Dict[str, Command] = {}

    def register(self, name: str, handler: Callable[[List[str]], None], description: str = "", usage: str = "") -> None:
        self._commands[name.lower()] = Command(name.lower(), handler, description, usage)

    def register_module(self, prefix: str, handlers: Dict[str, Callable[[List[str]], None]], descriptions: Optional[Dict[str, str]] = None) -> None:
        """Register ``handlers`` as ``prefix.name`` commands."""
        descriptions = descriptions or {}
        for name, handler in handlers.items():
            self.register(f"{prefix}.{name}", handler, descriptions.get(name, ""))

    @property
    def commands(self) -> List[Command]:
        return [self._commands[name] for name in sorted(self._commands)]

    def execute(self, line: str) -> None:
        try:
            words = shlex.split(line)
        except ValueError as exc:
            raise BadCommand(f"Could not parse command: {exc}") from exc
        if not words:
            return

        name, args = words[0].lower(), words[1:]
        command = self._commands.get(name)
        if command is None:
            raise BadCommand(f"Unknown command: {name}")

        log_operation("execute", "dispatcher", {"command": name, "args": args})
        command.handler(args)


def _require_at_most(args: List[str], count: int, usage: str) -> None:
    if len(args) > count:
        raise BadCommand(f"Usage: {usage}")


def register_builtins(dispatcher: CommandDispatcher, dashboard, quit_requested: threading.Event) -> None:
    """Register the commands every dashboard session offers."""

    def show_help(args):
        _require_at_most(args, 0, "help")
        for command in dispatcher.commands:
            label = command.usage or command.name
            dashboard.write_to_channel(
                dashboard.state.current_channel,
                LogKind.MESSAGE,
                f"  {label:<24} {command.description}",
            )

    def show_log(args):
        _require_at_most(args, 1, "log [channel]")
        dashboard.show_log(args)

    def show_graph(args):
        _require_at_most(args, 1, "graph [channel]")
        dashboard.show_graph(args)

    def list_channels(args):
        _require_at_most(args, 0, "channels")
        counts = dashboard.logs.channels()
        names = sorted(set(counts) | set(dashboard.graphs.channels()))
        for name in names:
            graph_note = " +graph" if dashboard.graphs.get(name) is not None else ""
            dashboard.write_to_channel(
                dashboard.state.current_channel,
                LogKind.MESSAGE,
                f"  {name:<16} {counts.get(name, 0):>6} lines{graph_note}",
            )

    def quit_session(args):
        quit_requested.set()

    dispatcher.register("help", show_help, "List available commands")
    dispatcher.register("log", show_log, "Show the log of a channel", "log [channel]")
    dispatcher.register("graph", show_graph, "Show the graph of a channel", "graph [channel]")
    dispatcher.register("channels", list_channels, "List known channels")
    dispatcher.register("quit", quit_session, "Close LogDeck")
    dispatcher.register("exit", quit_session, "Close LogDeck")
