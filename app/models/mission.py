"""
Cleanup mission models.
"""

from pydantic import BaseModel, Field
from datetime import date
from typing import Optional


class MissionResponse(BaseModel):
    id: str
    title: str
    date: date
    location: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    trees_planted: int = 0


class MissionJoinRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=200, pattern=r"^[^@\s]+@[^@\s]+$")
    phone: Optional[str] = Field(None, max_length=30)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Asha Naik",
                "email": "asha@example.com",
                "phone": "+91 98220 00000",
            }
        }


class MissionCreate(BaseModel):
    """Admin-side mission creation (scripts/manage_mission.py)."""
    title: str = Field(..., min_length=1, max_length=200)
    date: date
    location: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    image: Optional[str] = Field(None, max_length=1000)
    trees_planted: int = Field(0, ge=0, description="Saplings planted, counted on the leaderboard")
