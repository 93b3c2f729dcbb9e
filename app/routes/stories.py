"""
Eco-story endpoints - paged feed, posting and likes.
"""

import asyncio
from functools import partial
from typing import Optional

from fastapi import APIRouter, Query, status

from app.models.story import StoryCreate, StoryLikeResponse, StoryPage, StoryResponse
from app.services.story_service import get_story_service

router = APIRouter(prefix="/api/stories", tags=["Stories"])


@router.get("", response_model=StoryPage)
async def list_stories(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, description="Page size (default 10, capped at 50)"),
):
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(get_story_service().list_stories, page=page, limit=limit))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=StoryResponse)
async def create_story(story: StoryCreate):
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(get_story_service().create_story, story))


@router.post("/{story_id}/like", response_model=StoryLikeResponse)
async def like_story(story_id: str):
    loop = asyncio.get_running_loop()
    likes = await loop.run_in_executor(None, partial(get_story_service().like_story, story_id))
    return StoryLikeResponse(likes_count=likes)
