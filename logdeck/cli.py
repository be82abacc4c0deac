#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#

import argparse
import platform
import sys
import threading
import time
from typing import Optional

import psutil

from logdeck import DEFAULT_CHANNEL, SAMPLE_INTERVAL, TICK_INTERVAL, UI_APP_NAME, VERSION
from logdeck.commands import CommandDispatcher, register_builtins
from logdeck.core.graph import Graph
from logdeck.core.store import LogKind
from logdeck.debug import debug_log, set_debug_mode
from logdeck.script import ScriptModule, Toolchain
from logdeck.ui.dashboard import Dashboard
from logdeck.ui.keyboard import KeyboardInput
from logdeck.ui.state import View
from logdeck.ui.terminal import RichTerminal
from logdeck.utils.colors import apply_palette, reset_palette

__all__ = [
    "SystemSampler",
    "build_parser",
    "boot_messages",
    "build_dispatcher",
    "main",
]

GRAPH_HISTORY = 600


def percent(value: float) -> str:
    return f"{value:.0f}%"


class SystemSampler:
    """Feed ``cpu`` and ``memory`` graphs from psutil on a daemon thread."""

    def __init__(self, dashboard: Dashboard, interval: float = SAMPLE_INTERVAL):
        self.dashboard = dashboard
        self.interval = interval
        self.cpu = Graph(formatter=percent, capacity=GRAPH_HISTORY)
        self.memory = Graph(formatter=percent, capacity=GRAPH_HISTORY)
        self._stop = threading.Event()
        self._thread = None

    def sample(self) -> None:
        self.cpu.add(psutil.cpu_percent(interval=None))
        self.memory.add(psutil.virtual_memory().percent)

    def start(self) -> None:
        self.dashboard.set_channel_graph("cpu", self.cpu)
        self.dashboard.set_channel_graph("memory", self.memory)
        psutil.cpu_percent(interval=None)  # Prime the first measurement
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.sample()
            except Exception as exc:
                self.dashboard.write_to_channel("system", LogKind.ERROR, f"Sampler failed: {exc}")
                return

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"{UI_APP_NAME} - live multi-channel terminal console"
    )
    parser.add_argument(
        "--channel",
        default=DEFAULT_CHANNEL,
        help=f"Channel shown at startup (default: {DEFAULT_CHANNEL})",
    )
    parser.add_argument(
        "--graph",
        action="store_true",
        help="Start in graph view instead of the log view",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=TICK_INTERVAL,
        help=f"Seconds between dashboard ticks (default: {TICK_INTERVAL})",
    )
    parser.add_argument(
        "--no-palette",
        action="store_true",
        help="Keep the terminal's own color palette",
    )
    parser.add_argument(
        "--no-sysmon",
        action="store_true",
        help="Disable the cpu/memory graphs",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to the 'debug' channel",
    )
    parser.add_argument(
        "--version", action="version", version=f"{UI_APP_NAME} {VERSION}"
    )
    return parser


def boot_messages(dashboard: Dashboard) -> None:
    dashboard.write(LogKind.MESSAGE, f"{UI_APP_NAME} {VERSION}")
    dashboard.write(LogKind.DEBUG, f"Python {platform.python_version()} on {platform.system()}")
    try:
        dashboard.write(
            LogKind.DEBUG,
            f"{psutil.cpu_count()} CPUs, {psutil.virtual_memory().total // (1024 * 1024)} MiB memory",
        )
    except Exception as exc:
        dashboard.write(LogKind.WARNING, f"System information unavailable: {exc}")
    dashboard.write(LogKind.SUCCESS, "Console ready. Type 'help' for commands.")


def build_dispatcher(dashboard: Dashboard, quit_requested: threading.Event, toolchain: Optional[Toolchain] = None) -> CommandDispatcher:
    dispatcher = CommandDispatcher()
    register_builtins(dispatcher, dashboard, quit_requested)
    script = ScriptModule(toolchain or Toolchain(), dashboard.write)
    script.register(dispatcher)
    return dispatcher


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.interval <= 0:
        parser.error("--interval must be positive")

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        print("Non-interactive terminal detected; LogDeck needs a TTY")
        return 1

    if args.debug:
        set_debug_mode(True)

    surface = RichTerminal()
    keyboard = KeyboardInput()
    dashboard = Dashboard(surface=surface, keys=keyboard)
    if args.debug:
        dashboard.attach_debug_channel()
        debug_log("STARTUP", f"{UI_APP_NAME} starting", {"version": VERSION, "channel": args.channel})

    quit_requested = threading.Event()
    sampler = None if args.no_sysmon else SystemSampler(dashboard)

    if not args.no_palette:
        apply_palette(surface.console)

    try:
        dashboard.start()
        dashboard.tick()
        boot_messages(dashboard)

        if not keyboard.start():
            dashboard.write(LogKind.WARNING, "Keyboard input unavailable; use Ctrl+C to quit")
        if sampler is not None:
            sampler.start()

        dashboard.switch_channel(args.channel, View.GRAPH if args.graph else View.LOG)
        dashboard.mark_ready(build_dispatcher(dashboard, quit_requested))

        while not quit_requested.is_set():
            dashboard.tick()
            time.sleep(args.interval)
    except KeyboardInterrupt:
        debug_log("SHUTDOWN", "Interrupted by user (Ctrl+C)")
    finally:
        if sampler is not None:
            sampler.stop()
        keyboard.stop()
        if not args.no_palette:
            reset_palette(surface.console)
        dashboard.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
