"""
Shared response envelope models.
"""

from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Optional


class BaseResponse(BaseModel):
    """
    Base response model for action endpoints (join, etc.).
    """
    success: bool = True
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class JoinMissionResponse(BaseResponse):
    mission_id: str
    registration_id: str
