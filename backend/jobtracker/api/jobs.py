import math
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from jobtracker.database import get_db
from jobtracker.models import User
from jobtracker.schemas import JobResponse, JobListResponse
from jobtracker.services.job_store import list_jobs
from jobtracker.auth import get_current_user

router = APIRouter()

PAGE_SIZE = 10


@router.get("", response_model=JobListResponse)
async def browse_jobs(
    q: Optional[str] = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    per_page: int = Query(PAGE_SIZE, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    search = (q or "").strip()
    jobs, total = await list_jobs(db, user.id, search=search or None, page=page, per_page=per_page)

    return JobListResponse(
        jobs=[JobResponse.model_validate(job) for job in jobs],
        total=total,
        page=page,
        per_page=per_page,
        total_pages=max(1, math.ceil(total / per_page)),
    )
