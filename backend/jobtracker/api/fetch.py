from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from jobtracker.auth import get_optional_user
from jobtracker.database import get_db
from jobtracker.models import User
from jobtracker.schemas import FetchUnauthorized
from jobtracker.services.aggregator import resolve_days, resolve_require_visa, run_aggregation
from jobtracker.services.sources import BaseSource, default_sources

router = APIRouter()

SIGN_IN_REQUIRED = "Please sign in, then call /api/fetch again."


def get_sources() -> List[BaseSource]:
    return default_sources()


@router.get("/fetch")
async def fetch_jobs(
    wide: Optional[str] = Query(None),
    days: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
    sources: List[BaseSource] = Depends(get_sources),
):
    if user is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=FetchUnauthorized(error=SIGN_IN_REQUIRED).model_dump(),
        )

    summary = await run_aggregation(
        db,
        user.id,
        require_visa=resolve_require_visa(wide),
        days=resolve_days(days),
        sources=sources,
    )
    return JSONResponse(content=summary.to_response(), headers={"Cache-Control": "no-store"})
