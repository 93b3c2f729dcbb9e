"""
Sighting endpoints - wildlife sightings shown as a layer on the heatmap.
"""

import asyncio
import logging
from functools import partial
from typing import List

from fastapi import APIRouter, status

from app.models.sighting import SightingCreate, SightingResponse
from app.services.sighting_service import get_sighting_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sightings", tags=["Sightings"])


@router.get("", response_model=List[SightingResponse])
async def list_sightings():
    """All sightings, newest first."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, get_sighting_service().list_sightings)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SightingResponse)
async def submit_sighting(sighting: SightingCreate):
    """
    Report a wildlife sighting. Species name and coordinates are required;
    missing ones are rejected as invalid_input.
    """
    logger.info(f"🦎 POST /api/sightings - species={sighting.species_name!r}")
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(get_sighting_service().create_sighting, sighting))
