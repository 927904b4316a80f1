import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from jobfeed.common.data import AuthToken, Credentials
from jobfeed.config import TOKEN_TTL
from jobfeed.errors import AuthenticationError
from jobfeed.extract.ceipal_api import CeipalAsyncClient

logger = logging.getLogger(__name__)


class TokenCache:
    """Bearer token held in memory until a fixed TTL runs out.

    The TTL starts when the token is received; any expiry the server reports
    is ignored.
    """

    def __init__(
            self,
            client: CeipalAsyncClient,
            credentials: Credentials,
            ttl: timedelta = TOKEN_TTL,
            clock: Callable[[], datetime] = datetime.now,
    ):
        self._client = client
        self._credentials = credentials
        self._ttl = ttl
        self._clock = clock
        self._token: Optional[AuthToken] = None

    @property
    def token(self) -> Optional[AuthToken]:
        return self._token

    async def get_token(self) -> Optional[str]:
        """Return a valid token, authenticating if needed. None on failure."""
        if self._token is not None and self._token.is_valid(self._clock()):
            logger.info("Using cached token")
            return self._token.value

        try:
            value = await self._client.authenticate(self._credentials)
        except AuthenticationError as e:
            logger.error(f"Authentication error: {e}")
            return None

        self._token = AuthToken(value=value, expires_at=self._clock() + self._ttl)
        logger.info("Authenticated successfully!")
        return value

    def invalidate(self):
        self._token = None
