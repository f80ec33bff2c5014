"""
Job Aggregation Pipeline - fetch, normalize, filter, dedupe and persist

Runs once per /api/fetch request for the signed-in user.

Processing Pipeline:
    1. Fetch every configured feed concurrently (one shared httpx client)
    2. Per feed: normalize → keep jobs posted at or after the cutoff →
       keep jobs matching the role/visa criteria. A failing feed yields
       no jobs and an error message; it never stops the other feeds.
    3. Merge in feed order (Remotive before Jobicy)
    4. Deduplicate by normalized URL, first occurrence wins
    5. Drop jobs missing a title, URL or posting date
    6. Sort newest first
    7. Upsert rows for the user (conflict target: user_id + url)
    8. Summarize counts, window and errors

No retries are attempted; re-running the fetch is idempotent because of the
upsert.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence
import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from jobtracker.config import get_settings
from jobtracker.middleware.metrics import record_jobs_upserted, record_source_fetch
from jobtracker.schemas.fetch import FetchSummary
from jobtracker.services.dedup import dedupe_by_url
from jobtracker.services.job_store import build_rows, upsert_jobs
from jobtracker.services.relevance import matches_criteria
from jobtracker.services.sources import BaseSource, CanonicalJob, default_sources

logger = logging.getLogger(__name__)
settings = get_settings()

MIN_DAYS = 1


@dataclass
class SourceResult:
    """Outcome of one feed branch: surviving jobs or the reason there are none."""

    source: str
    jobs: List[CanonicalJob] = field(default_factory=list)
    error: Optional[str] = None


def resolve_require_visa(wide: Optional[str]) -> bool:
    """Visa sponsorship is required unless ``wide`` is exactly "1"."""
    return wide != "1"


def resolve_days(raw: Optional[str]) -> int:
    """Parse the ``days`` window, defaulting when missing or not a number."""
    if raw is None or not raw.strip():
        days = settings.default_fetch_days
    else:
        try:
            days = int(raw.strip())
        except ValueError:
            days = settings.default_fetch_days
    return max(MIN_DAYS, days)


def compute_cutoff(now: datetime, days: int) -> datetime:
    return now - timedelta(days=days)


def is_recent(job: CanonicalJob, cutoff: datetime) -> bool:
    return job.posted_at is not None and job.posted_at >= cutoff


def is_complete(job: CanonicalJob) -> bool:
    return bool(job.title and job.url and job.posted_at)


def _error_message(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


async def collect_source(
    source: BaseSource,
    client: httpx.AsyncClient,
    cutoff: datetime,
    require_visa: bool,
) -> SourceResult:
    """Fetch and filter one feed, converting any failure into an error result."""
    start_time = time.perf_counter()
    try:
        jobs = await source.fetch_jobs(client)
        kept = [
            job
            for job in jobs
            if is_recent(job, cutoff) and matches_criteria(job, require_visa)
        ]
    except Exception as e:
        record_source_fetch(source.name, "error", time.perf_counter() - start_time)
        logger.warning(f"Fetching {source.name} failed: {e}")
        return SourceResult(source=source.name, error=_error_message(e))

    record_source_fetch(source.name, "success", time.perf_counter() - start_time)
    logger.info(f"{source.name}: {len(kept)} of {len(jobs)} jobs matched")
    return SourceResult(source=source.name, jobs=kept)


async def collect_all(
    sources: Sequence[BaseSource],
    client: httpx.AsyncClient,
    cutoff: datetime,
    require_visa: bool,
) -> List[SourceResult]:
    """Run every feed branch concurrently; results keep the order of ``sources``."""
    return list(
        await asyncio.gather(
            *(collect_source(source, client, cutoff, require_visa) for source in sources)
        )
    )


def merge_results(results: Sequence[SourceResult]) -> List[CanonicalJob]:
    """Dedupe, validate and order the jobs of all branches, newest first."""
    merged = [job for result in results for job in result.jobs]
    complete = [job for job in dedupe_by_url(merged) if is_complete(job)]
    # sort is stable, so ties keep feed order
    complete.sort(key=lambda job: job.posted_at, reverse=True)
    return complete


async def run_aggregation(
    db: AsyncSession,
    user_id: str,
    *,
    require_visa: bool = True,
    days: int = 10,
    sources: Optional[Sequence[BaseSource]] = None,
    client: Optional[httpx.AsyncClient] = None,
    now: Optional[datetime] = None,
) -> FetchSummary:
    """
    Run one full aggregation cycle for ``user_id``.

    Args:
        db: Session used for the upsert
        user_id: Owner of the written rows
        require_visa: Only keep jobs that mention visa sponsorship
        days: Recency window in days (floored at 1)
        sources: Feeds in processing order (defaults to Remotive, Jobicy)
        client: HTTP client to reuse; one is created when omitted
        now: Reference time for the cutoff (defaults to current UTC time)

    Returns:
        FetchSummary describing what was found and written
    """
    days = max(MIN_DAYS, days)
    sources = list(sources) if sources is not None else default_sources()
    now = now or datetime.now(timezone.utc)
    cutoff = compute_cutoff(now, days)

    logger.info(
        f"Starting fetch for user {user_id}: days={days}, visa_required={require_visa}, "
        f"sources={[source.name for source in sources]}"
    )

    if client is None:
        async with httpx.AsyncClient(
            timeout=settings.fetch_timeout_seconds,
            follow_redirects=True,
        ) as owned_client:
            results = await collect_all(sources, owned_client, cutoff, require_visa)
    else:
        results = await collect_all(sources, client, cutoff, require_visa)

    jobs = merge_results(results)
    rows = build_rows(user_id, jobs)

    try:
        inserted = await upsert_jobs(db, rows)
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(f"Saving {len(rows)} jobs for user {user_id} failed")
        inserted = 0
    record_jobs_upserted(inserted)

    errors = {result.source: result.error for result in results if result.error}
    logger.info(f"Fetch finished for user {user_id}: found {len(jobs)}, inserted {inserted}")

    return FetchSummary(
        success=True,
        inserted=inserted,
        found=len(jobs),
        per_source={result.source: len(result.jobs) for result in results},
        visa_required=require_visa,
        days=days,
        cutoff=cutoff,
        errors=errors or None,
    )
