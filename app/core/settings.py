"""
Core settings and environment variables for Goa Eco-Guard.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "Goa Eco-Guard"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS - Frontend URLs allowed to access this API (comma-separated)
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173"

    # Firebase/Firestore
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None  # Path to service account JSON

    # Mock DB mode for local development without Firebase credentials
    USE_MOCK_DB: bool = False
    MOCK_DB_PATH: Optional[str] = "./mock_db.json"

    # Collections
    REPORTS_COLLECTION: str = "eco_reports"
    MISSIONS_COLLECTION: str = "missions"
    REGISTRATIONS_COLLECTION: str = "mission_registrations"
    NOTIFICATIONS_COLLECTION: str = "notifications"
    SIGHTINGS_COLLECTION: str = "eco_sightings"
    STORIES_COLLECTION: str = "eco_stories"

    # Eco-stories feed paging
    STORIES_PAGE_SIZE: int = 10
    STORIES_MAX_PAGE_SIZE: int = 50

    # Proximity alerts
    ALERT_RADIUS_KM: float = 5.0
    ALERT_WINDOW_HOURS: float = 24.0

    # Heatmap grouping. None keeps exact coordinate keys; an int rounds
    # coordinates to that many decimals before grouping (4 ~= 11 m).
    HOTSPOT_COORDINATE_PRECISION: Optional[int] = None

    # Mission reminders
    REMINDER_LOOKAHEAD_DAYS: int = 3
    NOTIFICATION_SENDER_NAME: str = "Goa Eco-Guard"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"


# Global settings instance
settings = Settings()
