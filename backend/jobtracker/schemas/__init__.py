from jobtracker.schemas.job import JobResponse, JobListResponse, StatsResponse
from jobtracker.schemas.fetch import FetchSummary, FetchUnauthorized
from jobtracker.schemas.auth import SignUpRequest, SignInRequest, AuthResponse

__all__ = [
    "JobResponse",
    "JobListResponse",
    "StatsResponse",
    "FetchSummary",
    "FetchUnauthorized",
    "SignUpRequest",
    "SignInRequest",
    "AuthResponse",
]
