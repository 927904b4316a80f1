from typing import Optional


class JobFeedError(Exception):
    """Base class for job feed errors"""


class AuthenticationError(JobFeedError):
    """Token request failed (network, HTTP status or response body)"""


class FetchError(JobFeedError):
    """A job-listing page request failed"""

    def __init__(self, message: str, page: int):
        super().__init__(message)
        self.page = page


class OriginRejectedError(JobFeedError):
    def __init__(self, origin: Optional[str]):
        super().__init__(f"Origin not allowed: {origin}")
        self.origin = origin
