"""
Wildlife sighting models (biodiversity map layer).
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class SightingCreate(BaseModel):
    """
    Incoming sighting. Species and coordinates are required; presence of
    each is checked by the sighting service so it surfaces as invalid_input.
    """
    species_name: Optional[str] = Field(None, max_length=200, description="e.g. 'Olive Ridley Turtle'")
    description: Optional[str] = Field(None, max_length=2000)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    location: Optional[str] = Field(None, max_length=200, description="Place label, e.g. 'Morjim Beach'")
    image_url: Optional[str] = Field(None, max_length=1000)
    reporter_name: Optional[str] = Field(None, max_length=100)
    reporter_email: Optional[str] = Field(None, max_length=200)

    class Config:
        json_schema_extra = {
            "example": {
                "species_name": "Olive Ridley Turtle",
                "description": "Nesting female above the high-tide line",
                "latitude": 15.6167,
                "longitude": 73.7333,
                "location": "Morjim Beach",
                "reporter_name": "Asha Naik",
                "reporter_email": "asha@example.com",
            }
        }
        extra = "ignore"


class SightingResponse(BaseModel):
    id: str
    species_name: str
    description: Optional[str] = None
    latitude: float
    longitude: float
    location: Optional[str] = None
    image_url: Optional[str] = None
    reporter_name: Optional[str] = None
    created_at: datetime
