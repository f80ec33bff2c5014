"""
Remotive feed adapter.

Docs: https://remotive.com/api/remote-jobs

Payload shape: ``{"jobs": [{"title", "company_name", "url", "description",
"tags", "publication_date", ...}]}``. ``publication_date`` is an ISO string
such as ``"2025-09-02T12:34:56"``.
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


class RemotiveSource(BaseSource):
    source = JobSource.REMOTIVE

    def __init__(self, url: Optional[str] = None):
        super().__init__(url or settings.remotive_url)

    def normalize(self, payload: Any) -> List[CanonicalJob]:
        jobs = payload.get("jobs") if isinstance(payload, dict) else None
        if not isinstance(jobs, list):
            return []

        return [self._parse_job(record) for record in jobs if isinstance(record, dict)]

    def _parse_job(self, data: dict) -> CanonicalJob:
        return CanonicalJob(
            title=text_field(data, "title"),
            company=text_field(data, "company_name"),
            url=text_field(data, "url"),
            source=self.source,
            description=text_field(data, "description"),
            tags=tags_field(data, "tags"),
            posted_at=first_date(data, "publication_date"),
        )
