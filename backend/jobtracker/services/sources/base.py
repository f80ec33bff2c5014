from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence
import httpx
from jobtracker.config import get_settings
from jobtracker.services.dates import parse_date

settings = get_settings()


class JobSource(str, Enum):
    """Upstream feeds a job can come from."""

    REMOTIVE = "remotive"
    JOBICY = "jobicy"


@dataclass
class CanonicalJob:
    """A feed record mapped onto the fields the tracker cares about."""

    title: str
    company: str
    url: str
    source: JobSource
    description: str = ""
    tags: List[str] = field(default_factory=list)
    posted_at: Optional[datetime] = None


class SourceError(Exception):
    """Raised when a feed cannot be fetched."""


def first_present(record: Dict[str, Any], keys: Sequence[str]) -> Any:
    """Return the value of the first key that is present and not None."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def text_field(record: Dict[str, Any], *keys: str) -> str:
    value = first_present(record, keys)
    return value if isinstance(value, str) else ""


def tags_field(record: Dict[str, Any], *keys: str) -> List[str]:
    value = first_present(record, keys)
    if not isinstance(value, list):
        return []
    return [tag for tag in value if isinstance(tag, str)]


def first_date(record: Dict[str, Any], *keys: str) -> Optional[datetime]:
    """Return the first of ``keys`` that parses to a real timestamp."""
    for key in keys:
        parsed = parse_date(record.get(key))
        if parsed is not None:
            return parsed
    return None


class BaseSource(ABC):
    """Base class for job feeds"""

    source: JobSource

    def __init__(self, url: str):
        self.url = url

    @property
    def name(self) -> str:
        return self.source.value

    async def fetch_payload(self, client: httpx.AsyncClient) -> Any:
        """GET the feed and return its decoded JSON body."""
        response = await client.get(
            self.url,
            headers={
                "User-Agent": settings.fetch_user_agent,
                "Cache-Control": "no-store",
            },
        )
        if not response.is_success:
            raise SourceError(f"HTTP {response.status_code} for {self.url}")
        return response.json()

    @abstractmethod
    def normalize(self, payload: Any) -> List[CanonicalJob]:
        """Map a raw payload onto canonical jobs. Must not raise."""
        pass

    async def fetch_jobs(self, client: httpx.AsyncClient) -> List[CanonicalJob]:
        payload = await self.fetch_payload(client)
        return self.normalize(payload)
