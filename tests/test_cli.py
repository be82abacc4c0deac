#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
import io
import threading
import unittest
from contextlib import redirect_stdout
from unittest import mock

from logdeck import DEFAULT_CHANNEL, TICK_INTERVAL
from logdeck.cli import SystemSampler, boot_messages, build_dispatcher, build_parser, main, percent
from logdeck.core.store import LogKind
from logdeck.ui.dashboard import Dashboard

from tests import FakeClock, FakeSurface, TINY_LOGO


class ParserTests(unittest.TestCase):
    def test_defaults(self):
        args = build_parser().parse_args([])
        self.assertEqual(args.channel, DEFAULT_CHANNEL)
        self.assertEqual(args.interval, TICK_INTERVAL)
        self.assertFalse(args.graph)
        self.assertFalse(args.no_palette)
        self.assertFalse(args.no_sysmon)
        self.assertFalse(args.debug)

    def test_flags(self):
        args = build_parser().parse_args(["--channel", "cpu", "--graph", "--interval", "0.2", "--no-sysmon"])
        self.assertEqual(args.channel, "cpu")
        self.assertTrue(args.graph)
        self.assertEqual(args.interval, 0.2)
        self.assertTrue(args.no_sysmon)


class MainTests(unittest.TestCase):
    def test_refuses_non_interactive_terminal(self):
        buffer = io.StringIO()
        with mock.patch("logdeck.cli.sys.stdin") as stdin, redirect_stdout(buffer):
            stdin.isatty.return_value = False
            exit_code = main([])
        self.assertEqual(exit_code, 1)
        self.assertIn("Non-interactive terminal", buffer.getvalue())

    def test_rejects_non_positive_interval(self):
        with self.assertRaises(SystemExit), redirect_stdout(io.StringIO()), mock.patch("sys.stderr", io.StringIO()):
            main(["--interval", "0"])


class SessionWiringTests(unittest.TestCase):
    def setUp(self):
        self.dashboard = Dashboard(surface=FakeSurface(width=100), logo=TINY_LOGO, clock=FakeClock())

    def test_percent_formatter(self):
        self.assertEqual(percent(42.4), "42%")

    @mock.patch("logdeck.cli.psutil")
    def test_sampler_feeds_graphs(self, psutil_mock):
        psutil_mock.cpu_percent.return_value = 37.0
        psutil_mock.virtual_memory.return_value = mock.Mock(percent=61.5)
        sampler = SystemSampler(self.dashboard)
        sampler.sample()
        self.assertEqual(sampler.cpu.data_points, [37.0])
        self.assertEqual(sampler.memory.data_points, [61.5])

    @mock.patch("logdeck.cli.psutil")
    def test_sampler_registers_graphs(self, psutil_mock):
        sampler = SystemSampler(self.dashboard, interval=60)
        sampler.start()
        self.addCleanup(sampler.stop)
        self.assertIs(self.dashboard.graphs.get("cpu"), sampler.cpu)
        self.assertIs(self.dashboard.graphs.get("memory"), sampler.memory)

    @mock.patch("logdeck.cli.psutil")
    def test_boot_messages(self, psutil_mock):
        psutil_mock.cpu_count.return_value = 4
        psutil_mock.virtual_memory.return_value = mock.Mock(total=8 * 1024 * 1024 * 1024)
        boot_messages(self.dashboard)
        logs = self.dashboard.logs
        entries = list(logs.window_for(DEFAULT_CHANNEL, 0, logs.count_for(DEFAULT_CHANNEL)))
        self.assertIn("4 CPUs, 8192 MiB memory", [entry.text for entry in entries])
        self.assertIs(entries[-1].kind, LogKind.SUCCESS)

    def test_dispatcher_has_builtins_and_script_commands(self):
        dispatcher = build_dispatcher(self.dashboard, threading.Event())
        names = {command.name for command in dispatcher.commands}
        self.assertTrue({"help", "log", "graph", "channels", "quit", "script.compile"} <= names)


if __name__ == '__main__':
    unittest.main()
