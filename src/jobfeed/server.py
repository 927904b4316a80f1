import logging
from collections.abc import Iterable
from typing import Optional

from aiohttp import web

from jobfeed.config import Settings
from jobfeed.errors import OriginRejectedError
from jobfeed.extract.ceipal_api import CeipalAsyncClient
from jobfeed.refresh import BackgroundRefresher
from jobfeed.storage.job_cache import JobCache
from jobfeed.storage.token_cache import TokenCache

logger = logging.getLogger(__name__)

SETTINGS_KEY = web.AppKey("settings", Settings)
JOB_CACHE_KEY = web.AppKey("job_cache", JobCache)

routes = web.RouteTableDef()


def check_origin(origin: Optional[str], allowed_origins: Iterable[str]):
    """Raise OriginRejectedError unless the origin is absent or allow-listed"""
    if origin is not None and origin not in allowed_origins:
        raise OriginRejectedError(origin)


@web.middleware
async def origin_middleware(request: web.Request, handler):
    try:
        check_origin(request.headers.get("Origin"), request.app[SETTINGS_KEY].allowed_origins)
    except OriginRejectedError as e:
        logger.warning(f"Rejected {request.method} {request.path}: {e}")
        return web.json_response({"error": "Access denied"}, status=403)
    return await handler(request)


@routes.get("/getJobs")
async def get_jobs(request: web.Request) -> web.Response:
    jobs = await request.app[JOB_CACHE_KEY].get_jobs()
    return web.json_response(jobs)


def create_app(settings: Settings, job_cache: Optional[JobCache] = None) -> web.Application:
    """Build the web application.

    Without an explicit ``job_cache`` the Ceipal client and both caches are
    created from ``settings``; the client session is closed on shutdown.
    """
    client: Optional[CeipalAsyncClient] = None
    if job_cache is None:
        client = CeipalAsyncClient(settings)
        token_cache = TokenCache(client, settings.credentials, ttl=settings.token_ttl)
        job_cache = JobCache(client, token_cache, ttl=settings.cache_ttl)

    app = web.Application(middlewares=[origin_middleware])
    app[SETTINGS_KEY] = settings
    app[JOB_CACHE_KEY] = job_cache
    app.add_routes(routes)

    async def background_refresh(app: web.Application):
        refresher = BackgroundRefresher(app[JOB_CACHE_KEY], settings.refresh_interval)
        refresher.start()
        yield
        await refresher.stop()
        if client is not None:
            await client.close()

    app.cleanup_ctx.append(background_refresh)
    return app
