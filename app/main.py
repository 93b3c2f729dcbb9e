"""
Goa Eco-Guard - FastAPI Application Entry Point

Citizen environmental reporting for Goa: geolocated pollution and wildlife
reports, a pollution heatmap, nearby-issue alerts and cleanup missions.

DESIGN PRINCIPLES:
- Reports are raw citizen observations; moderation status is set by admins
- Hotspots and alerts are derived on every request, never stored
- Exact duplicates are rejected up front with a distinct error kind
"""

import logging
import traceback
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.errors import EcoGuardError
from app.core.settings import settings
from app.config.firebase import initialize_firestore
from app.routes import health, leaderboard, map, missions, reports, sightings, stories

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Citizen environmental reporting, pollution heatmap and cleanup missions",
    debug=settings.DEBUG
)


@app.exception_handler(EcoGuardError)
async def eco_guard_exception_handler(request: Request, exc: EcoGuardError):
    """Render domain errors as {"error": kind, "detail": message, ...}."""
    logger.info(f"{request.method} {request.url.path} -> {exc.kind}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Pydantic validation errors are reported as invalid_input."""
    logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"error": "invalid_input", "detail": jsonable_errors(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and log them with full traceback."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}\n"
        f"{''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "server_error", "detail": f"Internal server error: {str(exc)}"}
    )


def jsonable_errors(exc: RequestValidationError):
    # ctx may hold exception instances and input may hold NaN/Infinity,
    # neither of which JSONResponse can render
    return jsonable_encoder(
        [{k: v for k, v in err.items() if k not in ("ctx", "input")} for err in exc.errors()]
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """
    Initialize services on application startup.
    Currently: Firestore connection
    """
    print(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    try:
        initialize_firestore()
    except Exception as e:
        print(f"Warning: Firestore initialization failed: {e}")
        print("   The app will start but database operations may fail.")


@app.on_event("shutdown")
async def shutdown_event():
    print(f"Shutting down {settings.APP_NAME}")


# Include routers
app.include_router(health.router)
app.include_router(reports.router)
app.include_router(map.router)
app.include_router(missions.router)
app.include_router(sightings.router)
app.include_router(stories.router)
app.include_router(leaderboard.router)


# Root endpoint
@app.get("/")
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "hotspots": "/api/hotspots",
        "nearby_alerts": "/api/alerts/nearby?lat={lat}&lng={lng}",
        "leaderboard": "/api/leaderboard"
    }
