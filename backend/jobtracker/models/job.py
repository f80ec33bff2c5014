"""
Job Model - SQLAlchemy ORM model for saved job postings

Stores listings collected by the aggregation pipeline. Every row belongs to
exactly one user; a repeated fetch refreshes the row sharing the same
(user_id, url) pair instead of inserting a duplicate.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from jobtracker.database import Base
import uuid


class Job(Base):
    """
    Saved job posting.

    Attributes:
        id: UUID primary key
        user_id: Owning user (FK users.id)
        title: Job title (max 500 chars)
        company: Company name (nullable)
        url: Original job posting URL, unique per user
        source: Feed the row came from (e.g., "remotive")
        posted_at: Posting time reported by the feed (nullable)
        created_at: Set by the database on first insert
    """

    __tablename__ = "jobs"
    __table_args__ = (UniqueConstraint("user_id", "url", name="uq_jobs_user_url"),)

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    company = Column(String(500), nullable=True)
    url = Column(String(2000), nullable=False)
    source = Column(String(50), nullable=False)
    posted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
