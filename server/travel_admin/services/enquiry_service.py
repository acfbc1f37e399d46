"""Enquiry service: public contact requests and their dashboard aggregates."""

import calendar
import logging

from sqlalchemy import extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Enquiry, Flight, Hotel, Package, Visa
from ..schemas.enquiry import CreateEnquiryRequest, MonthlyEnquiries, Stats

logger = logging.getLogger(__name__)


class EnquiryService:
    """Service for enquiries and read-only summaries over all collections."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_enquiry(self, request: CreateEnquiryRequest) -> Enquiry:
        enquiry = Enquiry(**request.model_dump())
        self.db.add(enquiry)
        await self.db.commit()
        await self.db.refresh(enquiry)

        logger.info("Enquiry submitted", extra={"enquiry_id": str(enquiry.id)})
        return enquiry

    async def list_enquiries(self) -> list[Enquiry]:
        """All enquiries, newest first."""
        result = await self.db.execute(select(Enquiry).order_by(Enquiry.date.desc()))
        return list(result.scalars().all())

    async def monthly_counts(self) -> list[MonthlyEnquiries]:
        """
        Enquiry counts per calendar month, ordered January to December.

        Years are not separated: every March lands in the same bucket.
        Months without enquiries are left out.
        """
        month = extract("month", Enquiry.date)
        stmt = select(month.label("month"), func.count(Enquiry.id)).group_by(month).order_by(month)
        result = await self.db.execute(stmt)
        return [
            MonthlyEnquiries(month=calendar.month_name[int(number)], enquiries=total)
            for number, total in result.all()
        ]

    async def stats(self) -> Stats:
        """Document totals per collection."""
        totals = {}
        for name, model in (
            ("packages", Package),
            ("hotels", Hotel),
            ("visas", Visa),
            ("flights", Flight),
            ("enquiries", Enquiry),
        ):
            totals[name] = await self.db.scalar(select(func.count()).select_from(model))
        return Stats(**totals)
