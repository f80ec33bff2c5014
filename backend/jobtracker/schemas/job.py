from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class JobBase(BaseModel):
    title: str
    company: Optional[str] = None
    url: str
    source: str
    posted_at: Optional[datetime] = None


class JobResponse(JobBase):
    id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class JobListResponse(BaseModel):
    jobs: list[JobResponse]
    total: int
    page: int
    per_page: int
    total_pages: int


class StatsResponse(BaseModel):
    total_jobs: int
    jobs_by_source: dict[str, int]
    latest_posted_at: Optional[datetime] = None
