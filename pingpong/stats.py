"""Ping result records and rolling statistics."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from enum import Enum


class PingOutcome(Enum):
    """What happened to a single ping."""

    SUCCESS = "success"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass(frozen=True)
class PingResult:
    """One ping attempt; times are in seconds."""

    outcome: PingOutcome
    sequence: int
    timestamp: float
    rtt: float | None = None
    error: str | None = None

    @classmethod
    def success(cls, rtt: float, sequence: int, timestamp: float) -> PingResult:
        return cls(PingOutcome.SUCCESS, sequence, timestamp, rtt=rtt)

    @classmethod
    def timeout(cls, sequence: int, timestamp: float) -> PingResult:
        return cls(PingOutcome.TIMEOUT, sequence, timestamp)

    @classmethod
    def failure(cls, error: str, sequence: int, timestamp: float) -> PingResult:
        return cls(PingOutcome.ERROR, sequence, timestamp, error=error)

    def is_success(self) -> bool:
        return self.outcome is PingOutcome.SUCCESS


@dataclass(frozen=True)
class RttStats:
    """Round-trip time summary in seconds."""

    min: float = 0.0
    max: float = 0.0
    avg: float = 0.0
    median: float = 0.0
    jitter: float = 0.0


class ConnectionQuality(Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    def color(self) -> str:
        return {"good": "green", "fair": "yellow", "poor": "red"}[self.value]

    def symbol(self) -> str:
        return {"good": "●", "fair": "◐", "poor": "○"}[self.value]


class PingStats:
    """Bounded history of ping results with running counters."""

    def __init__(self, max_history: int) -> None:
        self.max_history = max_history
        self.history: deque[PingResult] = deque()
        self.total_pings = 0
        self.successful_pings = 0
        self.timeouts = 0
        self.errors = 0

    def add_result(self, result: PingResult) -> None:
        if len(self.history) >= self.max_history and self.history:
            self.history.popleft()
        self.history.append(result)

        self.total_pings += 1
        if result.outcome is PingOutcome.SUCCESS:
            self.successful_pings += 1
        elif result.outcome is PingOutcome.TIMEOUT:
            self.timeouts += 1
        else:
            self.errors += 1

    def packet_loss_percent(self) -> float:
        if self.total_pings == 0:
            return 0.0
        return (self.total_pings - self.successful_pings) / self.total_pings * 100.0

    def packet_loss_percent_recent(self, window_size: int) -> float:
        recent = self.recent_results(window_size)
        if not recent:
            return 0.0
        failed = sum(1 for r in recent if not r.is_success())
        return failed / len(recent) * 100.0

    def rtt_stats(self) -> RttStats:
        rtts = [r.rtt for r in self.history if r.rtt is not None]
        if not rtts:
            return RttStats()
        ordered = sorted(rtts)
        avg = sum(rtts) / len(rtts)
        mid = len(ordered) // 2
        if len(ordered) % 2 == 0:
            median = (ordered[mid - 1] + ordered[mid]) / 2
        else:
            median = ordered[mid]
        variance = sum((rtt - avg) ** 2 for rtt in rtts) / len(rtts)
        return RttStats(
            min=ordered[0],
            max=ordered[-1],
            avg=avg,
            median=median,
            jitter=math.sqrt(variance),
        )

    def connection_quality(self) -> ConnectionQuality:
        loss = self.packet_loss_percent_recent(20)
        avg = self.rtt_stats().avg
        if loss > 10.0 or avg > 0.5:
            return ConnectionQuality.POOR
        if loss > 2.0 or avg > 0.1:
            return ConnectionQuality.FAIR
        return ConnectionQuality.GOOD

    def recent_results(self, count: int) -> list[PingResult]:
        """Return up to ``count`` results, newest first."""
        if count <= 0:
            return []
        return list(reversed(self.history))[:count]

    def rtt_history_for_graph(self, points: int) -> list[float | None]:
        """Sample the history into ``points`` RTT values in milliseconds."""
        total = len(self.history)
        if total == 0:
            return [None] * points
        step = 1 if total <= points else total // points
        sampled = [
            None if r.rtt is None else r.rtt * 1000.0
            for r in list(self.history)[::step][:points]
        ]
        sampled.extend([None] * (points - len(sampled)))
        return sampled