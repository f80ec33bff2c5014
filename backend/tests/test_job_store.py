"""
Tests for job persistence against an in-memory SQLite database

Tests cover:
- Upsert on (user_id, url) conflict
- Per-user scoping
- Browse search, ordering and pagination
- Stats aggregation
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from jobtracker.database import Base
from jobtracker.models import Job, User
from jobtracker.services.job_store import build_rows, job_stats, list_jobs, upsert_jobs
from jobtracker.services.sources import JobSource

BASE_TIME = datetime(2025, 9, 1, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def db():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        session.add_all(
            [
                User(id="alice", email="alice@example.com", password_hash="x"),
                User(id="bob", email="bob@example.com", password_hash="x"),
            ]
        )
        await session.commit()
        yield session

    await engine.dispose()


async def count_jobs(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Job.id)))
    return result.scalar()


class TestBuildRows:
    def test_row_shape(self, make_job):
        job = make_job(url="https://a.test/1", source=JobSource.JOBICY, posted_at=BASE_TIME)

        (row,) = build_rows("alice", [job])

        assert row["user_id"] == "alice"
        assert row["source"] == "jobicy"
        assert row["posted_at"] == BASE_TIME
        assert row["url"] == "https://a.test/1"
        assert row["id"]


class TestUpsertJobs:
    """INSERT ... ON CONFLICT (user_id, url) DO UPDATE."""

    @pytest.mark.asyncio
    async def test_inserts_rows(self, db, make_job):
        rows = build_rows("alice", [make_job(url="https://a.test/1"), make_job(url="https://a.test/2")])

        inserted = await upsert_jobs(db, rows)

        assert inserted == 2
        assert await count_jobs(db) == 2

    @pytest.mark.asyncio
    async def test_unsupported_dialect_raises_sqlalchemy_error(self, make_job):
        session = MagicMock()
        session.get_bind.return_value.dialect.name = "mysql"

        with pytest.raises(SQLAlchemyError, match="mysql"):
            await upsert_jobs(session, build_rows("alice", [make_job(url="https://a.test/1")]))

    @pytest.mark.asyncio
    async def test_empty_rows(self, db):
        assert await upsert_jobs(db, []) == 0
        assert await count_jobs(db) == 0

    @pytest.mark.asyncio
    async def test_repeated_fetch_updates_instead_of_duplicating(self, db, make_job):
        await upsert_jobs(db, build_rows("alice", [make_job(url="https://a.test/1", title="Old title")]))
        await upsert_jobs(db, build_rows("alice", [make_job(url="https://a.test/1", title="New title")]))

        assert await count_jobs(db) == 1
        result = await db.execute(select(Job.title))
        assert result.scalar_one() == "New title"

    @pytest.mark.asyncio
    async def test_same_url_for_different_users(self, db, make_job):
        job = make_job(url="https://a.test/1")
        await upsert_jobs(db, build_rows("alice", [job]))
        await upsert_jobs(db, build_rows("bob", [job]))

        assert await count_jobs(db) == 2


class TestListJobs:
    """Browse queries."""

    @pytest.fixture
    def seed(self, db, make_job):
        async def _seed():
            jobs = [
                make_job(title="Virtual Assistant", company="Acme", url="https://a.test/1",
                         posted_at=BASE_TIME - timedelta(days=2)),
                make_job(title="Data Entry Clerk", company="Globex", url="https://a.test/2",
                         source=JobSource.JOBICY, posted_at=BASE_TIME),
                make_job(title="Office Assistant", company="Initech", url="https://a.test/3",
                         posted_at=None),
                make_job(title="Admin Support", company="Acme", url="https://a.test/4",
                         posted_at=BASE_TIME - timedelta(days=1)),
            ]
            await upsert_jobs(db, build_rows("alice", jobs))
            await upsert_jobs(db, build_rows("bob", [make_job(title="Bob's job", url="https://b.test/1")]))

        return _seed

    @pytest.mark.asyncio
    async def test_only_own_jobs_newest_first_undated_last(self, db, seed):
        await seed()

        jobs, total = await list_jobs(db, "alice")

        assert total == 4
        assert [job.url for job in jobs] == [
            "https://a.test/2",
            "https://a.test/4",
            "https://a.test/1",
            "https://a.test/3",
        ]

    @pytest.mark.asyncio
    async def test_search_title_company_source(self, db, seed):
        await seed()

        by_title, _ = await list_jobs(db, "alice", search="assistant")
        by_company, _ = await list_jobs(db, "alice", search="ACME")
        by_source, total = await list_jobs(db, "alice", search="jobicy")

        assert {job.url for job in by_title} == {"https://a.test/1", "https://a.test/3"}
        assert {job.url for job in by_company} == {"https://a.test/1", "https://a.test/4"}
        assert [job.url for job in by_source] == ["https://a.test/2"]
        assert total == 1

    @pytest.mark.asyncio
    async def test_pagination(self, db, seed):
        await seed()

        first, total = await list_jobs(db, "alice", page=1, per_page=3)
        second, _ = await list_jobs(db, "alice", page=2, per_page=3)

        assert total == 4
        assert len(first) == 3
        assert [job.url for job in second] == ["https://a.test/3"]


class TestJobStats:
    @pytest.mark.asyncio
    async def test_counts_by_source(self, db, make_job):
        await upsert_jobs(
            db,
            build_rows(
                "alice",
                [
                    make_job(url="https://a.test/1", posted_at=BASE_TIME),
                    make_job(url="https://a.test/2", source=JobSource.JOBICY,
                             posted_at=BASE_TIME - timedelta(days=3)),
                    make_job(url="https://a.test/3", source=JobSource.JOBICY, posted_at=None),
                ],
            ),
        )

        stats = await job_stats(db, "alice")

        assert stats["total_jobs"] == 3
        assert stats["jobs_by_source"] == {"remotive": 1, "jobicy": 2}
        assert stats["latest_posted_at"].replace(tzinfo=timezone.utc) == BASE_TIME

    @pytest.mark.asyncio
    async def test_no_jobs(self, db):
        stats = await job_stats(db, "bob")
        assert stats == {"total_jobs": 0, "jobs_by_source": {}, "latest_posted_at": None}
