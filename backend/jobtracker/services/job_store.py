"""
Job persistence helpers.

Writes go through a dialect-native ``INSERT ... ON CONFLICT (user_id, url)
DO UPDATE`` so that repeated fetches refresh existing rows; reads are the
per-user browse and stats queries used by the API.
"""

import uuid
from typing import Dict, List, Optional, Sequence, Tuple
from sqlalchemy import func, or_, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import CompileError
from sqlalchemy.ext.asyncio import AsyncSession
from jobtracker.models import Job
from jobtracker.services.sources.base import CanonicalJob

UPSERT_CONFLICT_TARGET = ["user_id", "url"]
UPSERT_UPDATE_COLUMNS = ("title", "company", "source", "posted_at")


def build_rows(user_id: str, jobs: Sequence[CanonicalJob]) -> List[dict]:
    """Map canonical jobs onto ``jobs`` table rows owned by ``user_id``."""
    return [
        {
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            "title": job.title,
            "company": job.company,
            "url": job.url,
            "source": job.source.value,
            "posted_at": job.posted_at,
        }
        for job in jobs
    ]


def _insert_for(db: AsyncSession):
    dialect = db.get_bind().dialect.name
    if dialect == "sqlite":
        return sqlite.insert
    if dialect == "postgresql":
        return postgresql.insert
    raise CompileError(f"Upsert is not supported for dialect {dialect!r}")


async def upsert_jobs(db: AsyncSession, rows: List[dict]) -> int:
    """
    Insert rows, updating the existing row on a (user_id, url) conflict.

    Returns:
        Number of rows written. Raises SQLAlchemyError on failure; the
        caller owns the transaction outcome.
    """
    if not rows:
        return 0

    insert = _insert_for(db)
    stmt = insert(Job).values(rows)
    stmt = stmt.on_conflict_do_update(
        index_elements=UPSERT_CONFLICT_TARGET,
        set_={column: stmt.excluded[column] for column in UPSERT_UPDATE_COLUMNS},
    )
    await db.execute(stmt)
    await db.commit()
    return len(rows)


async def list_jobs(
    db: AsyncSession,
    user_id: str,
    search: Optional[str] = None,
    page: int = 1,
    per_page: int = 10,
) -> Tuple[List[Job], int]:
    """Return one page of a user's jobs plus the total match count."""
    query = select(Job).where(Job.user_id == user_id)
    count_query = select(func.count(Job.id)).where(Job.user_id == user_id)

    if search:
        pattern = f"%{search}%"
        search_filter = or_(
            Job.title.ilike(pattern),
            Job.company.ilike(pattern),
            Job.source.ilike(pattern),
        )
        query = query.where(search_filter)
        count_query = count_query.where(search_filter)

    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    # Newest posting first, undated rows last, then newest insert
    query = query.order_by(Job.posted_at.desc().nulls_last(), Job.created_at.desc())
    query = query.offset((page - 1) * per_page).limit(per_page)

    result = await db.execute(query)
    return list(result.scalars().all()), total


async def job_stats(db: AsyncSession, user_id: str) -> Dict:
    total_result = await db.execute(select(func.count(Job.id)).where(Job.user_id == user_id))
    total_jobs = total_result.scalar() or 0

    source_query = (
        select(Job.source, func.count(Job.id))
        .where(Job.user_id == user_id)
        .group_by(Job.source)
    )
    source_result = await db.execute(source_query)
    jobs_by_source = {row[0]: row[1] for row in source_result.all()}

    latest_result = await db.execute(select(func.max(Job.posted_at)).where(Job.user_id == user_id))

    return {
        "total_jobs": total_jobs,
        "jobs_by_source": jobs_by_source,
        "latest_posted_at": latest_result.scalar(),
    }
