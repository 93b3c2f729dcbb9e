"""
Report endpoints - citizen report submission and retrieval.

Error kinds (see app.core.errors):
- invalid_input (400): coordinates or description missing
- duplicate_report (409): identical report already filed at the same spot;
  body carries existing_report_id
- store_unavailable (503): Firestore could not be read/written
"""

import asyncio
import logging
from functools import partial
from typing import List

from fastapi import APIRouter, status

from app.models.report import ReportCreate, ReportResponse, ReportStats
from app.services.report_service import create_report, get_active_reports, get_report, get_report_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Reports"])


@router.post("/reports", status_code=status.HTTP_201_CREATED, response_model=ReportResponse)
async def submit_report(report: ReportCreate):
    """
    Submit a new eco report.

    1. Validates required fields
    2. Rejects exact duplicates (same coordinates, same description)
    3. Stores it with a normalized severity and pending status
    """
    logger.info(f"📝 POST /api/reports - location={report.location!r}")
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(create_report, report))


@router.get("/reports", response_model=List[ReportResponse])
async def list_reports():
    """All active (not soft-deleted) reports, newest first."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, get_active_reports)


@router.get("/reports/{report_id}", response_model=ReportResponse)
async def read_report(report_id: str):
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(get_report, report_id))


@router.get("/report-stats", response_model=ReportStats)
async def report_stats():
    """Counts of active reports by moderation status and severity."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, get_report_stats)
