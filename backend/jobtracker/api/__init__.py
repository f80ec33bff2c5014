from fastapi import APIRouter
from jobtracker.api import auth, cv, fetch, jobs, stats

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(fetch.router, tags=["fetch"])
api_router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
api_router.include_router(cv.router, tags=["cv"])
