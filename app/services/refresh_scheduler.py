from __future__ import annotations

import asyncio

from app.services.dashboard_state import DashboardController

IDLE = "IDLE"
REFRESHING = "REFRESHING"


class RefreshScheduler:
    """Periodic + on-demand watchlist refresh driver.

    Only the timer is owned here. Refresh tasks it spawns run to completion
    even after ``stop()``; teardown waits for them up to a timeout instead of
    cancelling them.
    """

    def __init__(self, controller: DashboardController, *, interval_sec: float = 30.0) -> None:
        self.controller = controller
        self.interval_sec = interval_sec
        self.running = False
        self._timer: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()
        self.ticks = 0
        self.triggers: dict[str, int] = {}

    @property
    def state(self) -> str:
        return REFRESHING if self._in_flight else IDLE

    def trigger(self, reason: str = "manual") -> asyncio.Task:
        self.triggers[reason] = self.triggers.get(reason, 0) + 1
        task = asyncio.create_task(self.controller.refresh(), name=f"refresh-{reason}")
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def _run_timer(self) -> None:
        while self.running:
            await asyncio.sleep(self.interval_sec)
            self.ticks += 1
            print(f"[SCHED][tick] n={self.ticks}", flush=True)
            self.trigger("timer")

    def _start_timer(self) -> None:
        self._timer = asyncio.create_task(self._run_timer(), name="refresh-timer")

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def start(self) -> asyncio.Task:
        self.running = True
        print(f"[SCHED][scheduler_start] interval_sec={self.interval_sec}", flush=True)
        task = self.trigger("mount")
        self._start_timer()
        return task

    def reschedule(self, reason: str = "watchlist_change") -> asyncio.Task:
        self._cancel_timer()
        print(f"[SCHED][reschedule] reason={reason}", flush=True)
        task = self.trigger(reason)
        if self.running:
            self._start_timer()
        return task

    async def stop(self, drain_timeout_sec: float | None = None) -> None:
        self.running = False
        timer = self._timer
        self._cancel_timer()
        if timer is not None:
            try:
                await timer
            except asyncio.CancelledError:
                pass

        pending = set(self._in_flight)
        if pending and (drain_timeout_sec is None or drain_timeout_sec > 0):
            await asyncio.wait(pending, timeout=drain_timeout_sec)
        print(
            f"[SCHED][scheduler_stop] ticks={self.ticks} undrained={len(self._in_flight)}",
            flush=True,
        )

    def metrics(self) -> dict:
        return {
            "scheduler_running": self.running,
            "scheduler_state": self.state,
            "interval_sec": self.interval_sec,
            "ticks": self.ticks,
            "triggers": dict(self.triggers),
        }
