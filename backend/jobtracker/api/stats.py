from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from jobtracker.database import get_db
from jobtracker.models import User
from jobtracker.schemas import StatsResponse
from jobtracker.services.job_store import job_stats
from jobtracker.auth import get_current_user

router = APIRouter()


@router.get("", response_model=StatsResponse)
async def get_stats(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return StatsResponse(**await job_stats(db, user.id))
