from typing import Iterable, List

from jobtracker.services.sources.base import CanonicalJob


def url_key(url: str) -> str:
    """Identity key for a listing URL."""
    return url.strip().lower()


def dedupe_by_url(jobs: Iterable[CanonicalJob]) -> List[CanonicalJob]:
    """Drop later jobs whose URL key was already seen, preserving first-seen order."""
    seen = set()
    out: List[CanonicalJob] = []
    for job in jobs:
        key = url_key(job.url)
        if key in seen:
            continue
        seen.add(key)
        out.append(job)
    return out
