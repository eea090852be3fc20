"""
WOD cycle schemas.

GET /wod/today          → WODInfoResponse
GET /wod/date/{day}     → WODInfoResponse
GET /wod/schedule       → list[WODInfoResponse]
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class WODInfoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: str
    day_in_cycle: int = Field(description="Position in the 28-day cycle. Range: 1–28.")
    cycle_number: int
    category: str
    difficulty: Optional[str] = None
    difficulty_stars: Optional[tuple[int, int]] = None
    formats: list[str]
    is_recovery_day: bool
