import asyncio
import logging

import aiohttp
from pydantic import ValidationError

from jobfeed.common.data import Credentials, JobPage
from jobfeed.config import Settings
from jobfeed.errors import AuthenticationError, FetchError
from jobfeed.extract.async_client import AsyncHttpClientBase

logger = logging.getLogger(__name__)

# Failures that mean "this request did not produce a usable body".
_REQUEST_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ValueError)


class CeipalAsyncClient(AsyncHttpClientBase):
    """Client for the Ceipal token and job posting endpoints"""

    def __init__(self, settings: Settings):
        super().__init__()
        self.auth_url = settings.auth_url
        self.jobs_url = settings.jobs_url

    async def authenticate(self, credentials: Credentials) -> str:
        """POST the credentials and return the access token.

        Raises:
            AuthenticationError: on network errors, non-2xx responses, or a
                body without an ``access_token``.
        """
        session = await self._ensure_session()
        try:
            async with session.post(
                    self.auth_url,
                    json=credentials.model_dump(),
                    headers={"Content-Type": "application/json"},
            ) as response:
                if response.status >= 400:
                    body = await response.text()
                    raise AuthenticationError(f"HTTP {response.status}: {body}")
                data = await response.json(content_type=None)
        except _REQUEST_ERRORS as e:
            raise AuthenticationError(str(e) or type(e).__name__) from e

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token or not isinstance(token, str):
            raise AuthenticationError(f"Response carried no access_token: {data}")
        return token

    async def fetch_page(self, token: str, page: int) -> JobPage:
        """Fetch a single page (1-based) of job postings.

        Raises:
            FetchError: on network errors, non-2xx responses, or a body that
                is not a job page.
        """
        session = await self._ensure_session()
        try:
            async with session.get(
                    self.jobs_url,
                    params={"page": page},
                    headers={"Authorization": f"Bearer {token}"},
            ) as response:
                if response.status >= 400:
                    body = await response.text()
                    raise FetchError(f"HTTP {response.status}: {body}", page)
                data = await response.json(content_type=None)
            return JobPage.model_validate(data)
        except ValidationError as e:
            raise FetchError(f"Unexpected page body: {e}", page) from e
        except _REQUEST_ERRORS as e:
            raise FetchError(str(e) or type(e).__name__, page) from e
