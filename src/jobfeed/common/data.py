from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Upstream job records are passed through untouched.
JobRecord = dict[str, Any]


class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str
    password: str
    api_key: str


class AuthToken(BaseModel):
    value: str
    expires_at: datetime

    def is_valid(self, now: datetime) -> bool:
        return now < self.expires_at


class JobPage(BaseModel):
    """One page of the job-listing response"""
    model_config = ConfigDict(populate_by_name=True)

    results: list[JobRecord] = Field(default_factory=list)
    next_page: Optional[Any] = Field(default=None, alias="next")

    @field_validator("results", mode="before")
    @classmethod
    def null_results_as_empty(cls, value):
        return [] if value is None else value

    @property
    def has_next(self) -> bool:
        return self.next_page is not None


class JobCacheState(BaseModel):
    jobs: list[JobRecord] = Field(default_factory=list)
    fetched_at: Optional[datetime] = None
