from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field


class FetchSummary(BaseModel):
    """Outcome of one aggregation run, serialized with camelCase keys."""

    success: bool = True
    inserted: int
    found: int
    per_source: Dict[str, int] = Field(alias="perSource")
    visa_required: bool = Field(alias="visaRequired")
    days: int
    cutoff: datetime
    errors: Optional[Dict[str, str]] = None

    class Config:
        populate_by_name = True

    def to_response(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FetchUnauthorized(BaseModel):
    success: bool = False
    error: str
