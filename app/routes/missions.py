"""
Mission endpoints - list cleanup missions and sign up for one.
"""

import asyncio
from functools import partial
from typing import List

from fastapi import APIRouter, status

from app.models.base import JoinMissionResponse
from app.models.mission import MissionJoinRequest, MissionResponse
from app.services.mission_service import get_mission_service

router = APIRouter(prefix="/api/missions", tags=["Missions"])


@router.get("", response_model=List[MissionResponse])
async def list_missions():
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, get_mission_service().list_missions)


@router.post("/{mission_id}/join", status_code=status.HTTP_201_CREATED, response_model=JoinMissionResponse)
async def join_mission(mission_id: str, request: MissionJoinRequest):
    """
    Register for a mission. Participants receive reminders in the days
    leading up to it.
    """
    loop = asyncio.get_running_loop()
    registration = await loop.run_in_executor(
        None,
        partial(get_mission_service().join_mission, mission_id, request.name, request.email, request.phone),
    )
    return JoinMissionResponse(
        message="You have successfully joined the mission!",
        mission_id=mission_id,
        registration_id=registration["id"],
    )
