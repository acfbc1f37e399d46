"""Enquiry router and the admin dashboard totals."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import RequiredAuth, get_db
from ..schemas.auth import MessageResponse
from ..schemas.enquiry import CreateEnquiryRequest, Enquiry, MonthlyEnquiries, Stats
from ..services.enquiry_service import EnquiryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/query", tags=["enquiries"])
stats_router = APIRouter(prefix="/api/admin", tags=["stats"], dependencies=[RequiredAuth])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def submit_enquiry(request: CreateEnquiryRequest, db: AsyncSession = Depends(get_db)):
    """Public contact form submission."""
    await EnquiryService(db).create_enquiry(request)
    return MessageResponse(message="Query submitted successfully!")


@router.get("", response_model=list[Enquiry], dependencies=[RequiredAuth])
async def list_enquiries(db: AsyncSession = Depends(get_db)):
    """All enquiries, newest first."""
    return await EnquiryService(db).list_enquiries()


@router.get("/monthly", response_model=list[MonthlyEnquiries], dependencies=[RequiredAuth])
async def monthly_enquiries(db: AsyncSession = Depends(get_db)):
    """Enquiry counts per calendar month across all years."""
    return await EnquiryService(db).monthly_counts()


@stats_router.get("/stats", response_model=Stats)
async def dashboard_stats(db: AsyncSession = Depends(get_db)):
    """Totals per collection for the dashboard."""
    return await EnquiryService(db).stats()
