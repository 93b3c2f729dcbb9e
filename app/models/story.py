"""
Eco-story models: before/after cleanup posts and the paged feed.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional


class StoryCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    mission_id: Optional[str] = Field(None, description="Mission this cleanup belonged to, if any")
    before_image: Optional[str] = Field(None, max_length=1000)
    after_image: Optional[str] = Field(None, max_length=1000)
    author_name: Optional[str] = Field(None, max_length=100)
    author_email: Optional[str] = Field(None, max_length=200)

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Calangute after the Sunday sweep",
                "description": "Forty volunteers, sixty bags of plastic.",
                "mission_id": "mission-calangute-cleanup",
                "author_name": "Asha Naik",
            }
        }


class StoryResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    mission_id: Optional[str] = None
    before_image: Optional[str] = None
    after_image: Optional[str] = None
    author_name: Optional[str] = None
    likes_count: int = 0
    created_at: datetime


class StoryPage(BaseModel):
    stories: List[StoryResponse]
    total: int
    page: int
    total_pages: int


class StoryLikeResponse(BaseModel):
    success: bool = True
    likes_count: int
