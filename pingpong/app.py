"""Application loop tying the ping engine to the terminal display."""

from __future__ import annotations

import asyncio
import contextlib
import sys
from collections.abc import Sequence
from typing import Any

from pingpong.config import Config
from pingpong.ping import PingEngine, PingEvent
from pingpong.stats import PingStats
from pingpong.tui import AnimationType, TuiApp


async def _run_engine(engine: PingEngine) -> None:
    try:
        await engine.start()
    except asyncio.CancelledError:
        raise
    except Exception as exc:  # reported, the display keeps running
        print(f"Ping engine error: {exc}", file=sys.stderr)


class App:
    """Collects ping events into statistics and redraws the display on a timer."""

    def __init__(
        self,
        config: Config,
        tui: Any,
        events: asyncio.Queue[PingEvent],
        host_info: Sequence[tuple[str, str]],
        engine_task: asyncio.Task[None] | None = None,
    ) -> None:
        self.config = config
        self.tui = tui
        self.events = events
        self.host_info = list(host_info)
        self.engine_task = engine_task
        self.stats: dict[str, PingStats] = {}

    @classmethod
    async def create(
        cls, config: Config, animation_type: AnimationType | None = None
    ) -> App:
        """Resolve the hosts, open the display and start pinging in the background."""
        events: asyncio.Queue[PingEvent] = asyncio.Queue()
        engine = await PingEngine.create(config.enabled_hosts(), config.ping, events)
        host_info = engine.get_host_info()

        tui = TuiApp(animation_type)
        tui.set_host_info(host_info)

        task = asyncio.create_task(_run_engine(engine))
        return cls(config, tui, events, host_info, task)

    def handle_ping_event(self, event: PingEvent) -> None:
        """Record one ping result in the statistics of its host."""
        stats = self.stats.get(event.host_id)
        if stats is None:
            stats = PingStats(self.config.ping.history_size)
            self.stats[event.host_id] = stats
        stats.add_result(event.result)

    async def run(self) -> None:
        """Process events and redraw until the user quits or drawing fails."""
        loop = asyncio.get_running_loop()
        interval = self.config.ui.refresh_rate / 1000.0
        next_tick = loop.time()
        try:
            while True:
                delay = next_tick - loop.time()
                if delay > 0:
                    try:
                        event = await asyncio.wait_for(self.events.get(), delay)
                    except TimeoutError:
                        pass
                    else:
                        self.handle_ping_event(event)
                        continue

                next_tick += interval
                now = loop.time()
                if next_tick < now - interval:
                    next_tick = now

                try:
                    await self.tui.draw(self.stats)
                except Exception as exc:
                    print(f"TUI error: {exc}", file=sys.stderr)
                    break

                try:
                    should_quit = await self.tui.handle_events()
                except Exception:
                    should_quit = False
                if should_quit:
                    break
        finally:
            self.tui.close()
            if self.engine_task is not None:
                self.engine_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await self.engine_task