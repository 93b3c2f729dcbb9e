"""
Leaderboard endpoint - community totals and top volunteers.
"""

import asyncio

from fastapi import APIRouter

from app.models.leaderboard import LeaderboardResponse
from app.services.leaderboard_service import get_leaderboard

router = APIRouter(prefix="/api", tags=["Leaderboard"])


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def leaderboard():
    """
    Totals for the impact counters plus ranked volunteers.
    The first three are returned separately for the podium.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, get_leaderboard)
