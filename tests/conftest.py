import asyncio
from datetime import datetime, timedelta

import pytest

from jobfeed.common.data import Credentials, JobPage
from jobfeed.config import Settings
from jobfeed.errors import AuthenticationError, FetchError


class FakeClock:
    def __init__(self, start: datetime = datetime(2025, 3, 1, 9, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeCeipalClient:
    """Stands in for CeipalAsyncClient and records every call"""

    def __init__(self):
        self.auth_calls = 0
        self.page_requests = []
        self.token = "token-1"
        self.auth_error = None
        self.pages = {}

    def set_pages(self, *sizes, fail_on=None):
        self.pages = {}
        offset = 0
        for number, size in enumerate(sizes, start=1):
            results = [{"job_code": f"JOB-{offset + i}"} for i in range(size)]
            offset += size
            is_last = number == len(sizes)
            self.pages[number] = JobPage(results=results, next=None if is_last else f"?page={number + 1}")
        if fail_on is not None:
            self.pages[fail_on] = FetchError("HTTP 500: upstream down", fail_on)

    async def authenticate(self, credentials):
        self.auth_calls += 1
        if self.auth_error is not None:
            raise self.auth_error
        return self.token

    async def fetch_page(self, token, page):
        self.page_requests.append((token, page))
        # yield to the loop like a real network call
        await asyncio.sleep(0)
        result = self.pages.get(page)
        if result is None:
            raise FetchError("HTTP 404: no such page", page)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_client():
    return FakeCeipalClient()


@pytest.fixture
def failing_auth_client(fake_client):
    fake_client.auth_error = AuthenticationError("HTTP 401: invalid credentials")
    return fake_client


@pytest.fixture
def credentials():
    return Credentials(email="recruiter@example.com", password="secret", api_key="key-123")


@pytest.fixture
def settings(credentials):
    return Settings(credentials=credentials)
