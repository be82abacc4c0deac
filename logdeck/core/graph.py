#!/usr/bin/env python3
#
# LogDeck
# Copyright (c) 2025 Martynas Jocius
#
"""Per-channel numeric series shown by the graph view."""

import math
import threading
from collections import deque
from typing import Callable, Dict, Iterable, List, Optional


def default_formatter(value: float) -> str:
    return str(int(value))


class Graph:
    """Ordered samples with a running maximum used to size the Y axis."""

    def __init__(
        self,
        data_points: Iterable[float] = (),
        formatter: Callable[[float], str] = default_formatter,
        capacity: Optional[int] = None,
    ):
        self.formatter = formatter
        self.capacity = capacity
        self.max_point = 0.0
        self._data = deque(maxlen=capacity)
        for value in data_points:
            self.add(value)

    def add(self, value: float) -> None:
        # max_point is a finite high-water mark; dropping old samples never lowers it
        self._data.append(value)
        if math.isfinite(value) and value > self.max_point:
            self.max_point = value

    @property
    def data_points(self) -> List[float]:
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)


class GraphStore:
    def __init__(self):
        self._graphs: Dict[str, Graph] = {}
        self._lock = threading.Lock()

    def set_channel_graph(self, channel: str, graph: Graph) -> None:
        with self._lock:
            self._graphs[channel] = graph

    def get(self, channel: str) -> Optional[Graph]:
        with self._lock:
            return self._graphs.get(channel)

    def channels(self) -> List[str]:
        with self._lock:
            return sorted(self._graphs)
