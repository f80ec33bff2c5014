from typing import List
from jobtracker.services.sources.base import BaseSource, CanonicalJob, JobSource, SourceError
from jobtracker.services.sources.remotive import RemotiveSource
from jobtracker.services.sources.jobicy import JobicySource


def default_sources() -> List[BaseSource]:
    """Configured feeds in processing order; earlier feeds win URL ties."""
    return [RemotiveSource(), JobicySource()]


__all__ = [
    "BaseSource",
    "CanonicalJob",
    "JobSource",
    "SourceError",
    "RemotiveSource",
    "JobicySource",
    "default_sources",
]
