"""Live update feed - periodically nudges one record's credit score"""

import asyncio
import logging
from typing import Optional

from credit_monitor.infrastructure.observability.metrics import feed_tick_counter
from credit_monitor.infrastructure.store.session import MonitorSession


class LiveUpdateFeed:
    """
    Simulated market feed driving MonitorSession.perturb_one on a fixed interval.

    The task belongs to whoever calls start(); stop() cancels it and waits for
    it to finish so no timer outlives the session. A failing tick is logged and
    the next one fires on schedule.
    """

    def __init__(self, session: MonitorSession, interval_seconds: float = 5.0):
        if interval_seconds <= 0:
            raise ValueError(f"Feed interval must be positive, got {interval_seconds}")
        self.session = session
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the feed on the running event loop (idempotent)"""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="live-update-feed")
        logging.info("Live feed started", extra={"step": "feed_start", "interval_seconds": self.interval_seconds})

    async def stop(self) -> None:
        """Cancel the feed and wait for it to exit (idempotent)"""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logging.info("Live feed stopped", extra={"step": "feed_stop"})

    def tick(self) -> None:
        """Run a single feed update"""
        try:
            updated = self.session.perturb_one()
        except Exception:
            feed_tick_counter.labels(outcome="failed").inc()
            logging.exception("Live feed tick failed", extra={"step": "feed_tick"})
            return
        feed_tick_counter.labels(outcome="updated" if updated is not None else "empty").inc()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            self.tick()
