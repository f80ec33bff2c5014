"""
Jobicy feed adapter.

Docs: https://jobicy.com/jobs-rss-feed

The feed has shipped several shapes over time: either a bare list of records
or ``{"jobs": [...]}``, with field names that vary between versions
(``jobTitle``/``title``, ``companyName``/``company``, ``url``/``jobUrl``/
``applyUrl``). Posting time may be an ISO string or a unix timestamp under
``jobPosted``, ``published_at``, ``created_at`` or ``date``.
"""

from typing import Any, List, Optional
from jobtracker.config import get_settings
from jobtracker.services.sources.base import (
    BaseSource,
    CanonicalJob,
    JobSource,
    first_date,
    tags_field,
    text_field,
)

settings = get_settings()

TITLE_KEYS = ("jobTitle", "title")
COMPANY_KEYS = ("companyName", "company")
URL_KEYS = ("url", "jobUrl", "applyUrl")
DESCRIPTION_KEYS = ("jobDescription", "description")
# Checked in order; the first one that parses wins
POSTED_KEYS = ("jobPosted", "published_at", "created_at", "date")


def extract_records(payload: Any) -> List[Any]:
    """Return the record list from either supported payload shape."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        jobs = payload.get("jobs")
        if isinstance(jobs, list):
            return jobs
    return []


class JobicySource(BaseSource):
    source = JobSource.JOBICY

    def __init__(self, url: Optional[str] = None):
        super().__init__(url or settings.jobicy_url)

    def normalize(self, payload: Any) -> List[CanonicalJob]:
        return [
            self._parse_job(record)
            for record in extract_records(payload)
            if isinstance(record, dict)
        ]

    def _parse_job(self, data: dict) -> CanonicalJob:
        return CanonicalJob(
            title=text_field(data, *TITLE_KEYS),
            company=text_field(data, *COMPANY_KEYS),
            url=text_field(data, *URL_KEYS),
            source=self.source,
            description=text_field(data, *DESCRIPTION_KEYS),
            tags=tags_field(data, "tags"),
            posted_at=first_date(data, *POSTED_KEYS),
        )
