#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
"""Debug utilities for LogDeck."""

import time
from typing import Any, Callable, Dict, List, Optional


class DebugManager:
    """Structured debug records with an optional line sink."""

    def __init__(self):
        self.enabled = False
        self.start_time = time.time()
        self.records: List[Dict[str, Any]] = []
        self.sink: Optional[Callable[[str], None]] = None

    def enable(self):
        self.enabled = True
        self.debug_log("DEBUG_MODE_ENABLED", "Debug mode activated")

    def disable(self):
        if self.enabled:
            self.debug_log("DEBUG_MODE_DISABLED", "Debug mode deactivated")
        self.enabled = False

    def _emit(self, line: str) -> None:
        if self.sink is not None:
            self.sink(line)
        else:
            print(line)

    def debug_log(self, event_type: str, message: str, data: Optional[Dict[str, Any]] = None):
        """Record a debug event and emit it as one line per field."""
        if not self.enabled:
            return

        timestamp = time.time()
        runtime = timestamp - self.start_time

        entry = {
            "timestamp": timestamp,
            "runtime_seconds": round(runtime, 3),
            "event_type": event_type,
            "message": message,
        }
        if data:
            entry["data"] = data
        self.records.append(entry)

        self._emit(f"[DEBUG:{runtime:7.3f}s] {event_type}: {message}")
        if data:
            for key, value in data.items():
                self._emit(f"[DEBUG:{runtime:7.3f}s]   {key}: {value}")

    def log_operation(self, operation: str, component: str, details: Dict[str, Any] = None):
        if not self.enabled:
            return

        self.debug_log("OPERATION", f"{component}: {operation}", details or {})

    def log_error(self, error_type: str, component: str, error_msg: str, details: Dict[str, Any] = None):
        if not self.enabled:
            return

        error_data = {
            "component": component,
            "error_message": error_msg,
        }
        if details:
            error_data.update(details)

        self.debug_log("ERROR", f"{component}: {error_type} - {error_msg}", error_data)


# Global debug manager instance
debug_manager = DebugManager()


def set_debug_mode(enabled: bool):
    if enabled:
        debug_manager.enable()
    else:
        debug_manager.disable()


def debug_log(event_type: str, message: str, data: Optional[Dict[str, Any]] = None):
    debug_manager.debug_log(event_type, message, data)


def log_operation(operation: str, component: str, details: Dict[str, Any] = None):
    debug_manager.log_operation(operation, component, details)


def log_error(error_type: str, component: str, error_msg: str, details: Dict[str, Any] = None):
    debug_manager.log_error(error_type, component, error_msg, details)
