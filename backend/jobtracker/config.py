from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/jobs.db"
    secret_key: str = "dev-secret-key-change-in-production"
    session_expire_days: int = 30
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # Upstream feeds
    remotive_url: str = "https://remotive.com/api/remote-jobs"
    jobicy_url: str = "https://jobicy.com/api/v2/remote-jobs"
    fetch_user_agent: str = "JobTrackerPro/1.0"
    # None means the transport default (no timeout)
    fetch_timeout_seconds: Optional[float] = None
    default_fetch_days: int = 10

    # CV storage
    storage_dir: str = "./data/storage"
    public_base_url: str = "http://localhost:8000"
    max_cv_bytes: int = 5 * 1024 * 1024

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
