"""
Periodic job cache refresh, run as a task on the server's event loop.
"""

import asyncio
import logging
from contextlib import suppress
from datetime import timedelta
from typing import Optional

from jobfeed.config import REFRESH_INTERVAL
from jobfeed.storage.job_cache import JobCache

logger = logging.getLogger(__name__)


class BackgroundRefresher:
    def __init__(self, job_cache: JobCache, interval: timedelta = REFRESH_INTERVAL):
        self._job_cache = job_cache
        self._interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="job-cache-refresh")

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def _run(self):
        seconds = self._interval.total_seconds()
        while True:
            await asyncio.sleep(seconds)
            logger.info("Refreshing job cache...")
            try:
                await self._job_cache.refresh()
            except Exception:
                # A failed tick must not stop the next one
                logger.exception("Background job cache refresh failed")
