import os
from datetime import timedelta

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel

from jobfeed.common.data import Credentials

CEIPAL_AUTH_URL = "https://api.ceipal.com/v1/createAuthtoken/"
CEIPAL_JOB_URL = (
    "https://api.ceipal.com/getCustomJobPostingDetails/"
    "Z3RkUkt2OXZJVld2MjFpOVRSTXoxZz09/b8a3f0d4a99e444dc4752c7bdc986766"
)
ALLOWED_ORIGINS = ("https://sstalent.us/job.html",)

TOKEN_TTL = timedelta(hours=1)
CACHE_TTL = timedelta(minutes=30)
REFRESH_INTERVAL = timedelta(minutes=30)


class Settings(BaseModel):
    credentials: Credentials
    auth_url: str = CEIPAL_AUTH_URL
    jobs_url: str = CEIPAL_JOB_URL
    allowed_origins: tuple[str, ...] = ALLOWED_ORIGINS
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    token_ttl: timedelta = TOKEN_TTL
    cache_ttl: timedelta = CACHE_TTL
    refresh_interval: timedelta = REFRESH_INTERVAL

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment (and a .env file, if any)"""
        load_dotenv(find_dotenv(usecwd=True))

        origins = os.getenv("ALLOWED_ORIGINS")
        if origins is not None:
            allowed_origins = tuple(o.strip() for o in origins.split(",") if o.strip())
        else:
            allowed_origins = ALLOWED_ORIGINS

        return cls(
            credentials=Credentials(
                email=os.getenv("CEIPAL_EMAIL", "your_email"),
                password=os.getenv("CEIPAL_PASSWORD", "your_password"),
                api_key=os.getenv("CEIPAL_API_KEY", "your_api_key"),
            ),
            auth_url=os.getenv("CEIPAL_AUTH_URL", CEIPAL_AUTH_URL),
            jobs_url=os.getenv("CEIPAL_JOB_URL", CEIPAL_JOB_URL),
            allowed_origins=allowed_origins,
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
