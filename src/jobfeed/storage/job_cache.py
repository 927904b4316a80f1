import logging
from datetime import datetime, timedelta
from typing import Callable

from jobfeed.common.data import JobCacheState, JobRecord
from jobfeed.config import CACHE_TTL
from jobfeed.errors import FetchError
from jobfeed.extract.ceipal_api import CeipalAsyncClient
from jobfeed.storage.token_cache import TokenCache

logger = logging.getLogger(__name__)


class JobCache:
    """In-memory snapshot of every job posting, refreshed lazily on read.

    There is no lock around the state: concurrent misses each run a full
    refresh and the last one to finish wins.
    """

    def __init__(
            self,
            client: CeipalAsyncClient,
            token_cache: TokenCache,
            ttl: timedelta = CACHE_TTL,
            clock: Callable[[], datetime] = datetime.now,
    ):
        self._client = client
        self._token_cache = token_cache
        self._ttl = ttl
        self._clock = clock
        self._state = JobCacheState()

    @property
    def state(self) -> JobCacheState:
        return self._state

    def is_fresh(self) -> bool:
        state = self._state
        if not state.jobs or state.fetched_at is None:
            return False
        return self._clock() - state.fetched_at < self._ttl

    async def get_jobs(self) -> list[JobRecord]:
        """Return the cached jobs, or refresh them when stale or empty"""
        if self.is_fresh():
            logger.info("Serving jobs from cache...")
            return self._state.jobs
        return await self.refresh()

    async def refresh(self) -> list[JobRecord]:
        """Fetch every page upstream and replace the cache, whatever its age.

        Returns an empty list without touching the cache when no token can
        be obtained. A failed page ends pagination early and the jobs
        collected so far still replace the cache.
        """
        token = await self._token_cache.get_token()
        if token is None:
            return []

        jobs = await self._fetch_all_pages(token)
        self._state = JobCacheState(jobs=jobs, fetched_at=self._clock())
        logger.info(f"Total Jobs Fetched: {len(jobs)}")
        return jobs

    async def _fetch_all_pages(self, token: str) -> list[JobRecord]:
        jobs: list[JobRecord] = []
        page = 1
        while True:
            logger.info(f"Fetching page {page}...")
            try:
                result = await self._client.fetch_page(token, page)
            except FetchError as e:
                logger.error(f"Job fetching error on page {e.page}: {e}")
                break

            jobs.extend(result.results)
            if not result.has_next:
                break
            page += 1
        return jobs
