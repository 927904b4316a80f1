import logging

from aiohttp import web

from jobfeed.config import Settings
from jobfeed.server import create_app

logger = logging.getLogger(__name__)


def main():
    settings = Settings.from_env()

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger.info(f"Server running on http://localhost:{settings.port}")
    web.run_app(create_app(settings), host=settings.host, port=settings.port, print=None)


if __name__ == "__main__":
    main()
