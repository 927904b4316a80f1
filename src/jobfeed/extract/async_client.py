import asyncio
import logging
from typing import Optional

import aiohttp

logger = logging.getLogger(__name__)


async def on_request_start(session, trace_config_ctx, params):
    logger.debug(f"Starting request {params.method} {params.url}")
    trace_config_ctx.start = asyncio.get_running_loop().time()


async def on_request_end(session, trace_config_ctx, params):
    elapsed = asyncio.get_running_loop().time() - trace_config_ctx.start
    logger.info(f"Request {params.method} {params.url} completed in {elapsed:.3f} seconds "
                f"(status {params.response.status})")


async def on_request_exception(session, trace_config_ctx, params):
    logger.error(f"Request error: {params.method} {params.url}: {params.exception!r}")


def request_trace_config() -> aiohttp.TraceConfig:
    trace_config = aiohttp.TraceConfig()
    trace_config.on_request_start.append(on_request_start)
    trace_config.on_request_end.append(on_request_end)
    trace_config.on_request_exception.append(on_request_exception)
    return trace_config


class AsyncHttpClientBase:
    def __init__(self, headers: Optional[dict] = None):
        self._headers = headers or {}
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session exists"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self._headers,
                trace_configs=[request_trace_config()],
            )
        return self._session

    async def close(self):
        """Close the aiohttp session"""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
