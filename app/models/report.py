"""
Pydantic models for citizen eco reports.
These models handle validation for report submission and responses.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional, Dict
from enum import Enum

from app.services.severity import normalize_severity


class ReportStatus(str, Enum):
    """
    Moderation status. Set by administrators, never derived.
    """
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReportCreate(BaseModel):
    """
    Model for creating a new report (incoming POST request).

    Coordinates and description are checked for presence by the report
    service so that missing values surface as `invalid_input`.
    """
    location: Optional[str] = Field(None, max_length=200, description="Human place label, e.g. 'Calangute Beach'")
    latitude: Optional[float] = Field(None, ge=-90, le=90, description="Latitude in degrees")
    longitude: Optional[float] = Field(None, ge=-180, le=180, description="Longitude in degrees")
    description: Optional[str] = Field(None, max_length=2000, description="What the citizen observed")
    severity: Optional[str] = Field(None, max_length=100, description="Free-text severity, normalized on submit")
    image: Optional[str] = Field(None, max_length=1000, description="Public URL of an uploaded photo")

    class Config:
        json_schema_extra = {
            "example": {
                "location": "Calangute Beach",
                "latitude": 15.5439,
                "longitude": 73.7553,
                "description": "Plastic waste washed up along the tide line",
                "severity": "moderate",
                "image": "https://example.com/eco-images/reports/1718000000000.jpg",
            }
        }
        extra = "ignore"


class ReportResponse(BaseModel):
    """
    Model for report responses (what API returns).
    Includes system-generated fields like ID and timestamps.
    """
    id: str = Field(..., description="Firestore document ID")
    location: Optional[str] = None
    latitude: float
    longitude: float
    description: str
    severity: str = Field(default="low", description="low | medium | high | critical")
    status: str = Field(default=ReportStatus.PENDING.value, description="pending | approved | rejected")
    image: Optional[str] = None
    created_at: datetime
    deleted_at: Optional[datetime] = Field(default=None, description="Soft-delete marker")

    @field_validator("severity", mode="before")
    @classmethod
    def canonical_severity(cls, value):
        # Records written before normalization may hold null or free text
        return normalize_severity(value)

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value):
        return value or ReportStatus.PENDING.value

    class Config:
        json_schema_extra = {
            "example": {
                "id": "Xq3s9LkP2v",
                "location": "Calangute Beach",
                "latitude": 15.5439,
                "longitude": 73.7553,
                "description": "Plastic waste washed up along the tide line",
                "severity": "medium",
                "status": "pending",
                "image": None,
                "created_at": "2026-10-19T08:30:00Z",
                "deleted_at": None,
            }
        }


class ReportStats(BaseModel):
    total: int
    by_status: Dict[str, int]
    by_severity: Dict[str, int]
