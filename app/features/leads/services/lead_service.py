from typing import List, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.leads.models.lead_model import Lead
from app.features.leads.schemas.lead_schema import LeadData
from app.platform.logger import get_logger

logger = get_logger(__name__)


class LeadService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_external_id(self, data: LeadData) -> Lead | None:
        result = await self.db.execute(
            select(Lead).where(Lead.source == data.source, Lead.external_id == data.external_id)
        )
        return result.scalars().first()

    async def create_lead(self, data: LeadData) -> Tuple[Lead, bool]:
        """
        Persist a lead.

        Returns (lead, created). When the lead carries an external id that was
        already stored for the same source, the existing row is returned with
        created=False instead of inserting a duplicate.
        """
        if data.external_id:
            existing = await self.get_by_external_id(data)
            if existing:
                logger.info(f"Lead {data.source.value}:{data.external_id} already stored as {existing.id}")
                return existing, False

        lead = Lead(
            lead_text=data.lead_text,
            status=data.status,
            contact_name=data.contact_name,
            contact_email=data.contact_email,
            contact_phone=data.contact_phone or "",
            user_id=data.user_id,
            source=data.source,
            external_id=data.external_id,
        )
        self.db.add(lead)
        try:
            await self.db.commit()
        except IntegrityError:
            # Concurrent delivery of the same event won the insert
            await self.db.rollback()
            if not data.external_id:
                raise
            existing = await self.get_by_external_id(data)
            if existing is None:
                raise
            logger.info(f"Lead {data.source.value}:{data.external_id} inserted concurrently as {existing.id}")
            return existing, False

        await self.db.refresh(lead)
        logger.info(f"Lead {lead.id} saved for user {lead.user_id} from {lead.source.value}")
        return lead, True

    async def list_leads_for_user(self, user_id: str) -> List[Lead]:
        result = await self.db.execute(
            select(Lead).where(Lead.user_id == user_id).order_by(Lead.created_at.desc(), Lead.id.desc())
        )
        return list(result.scalars().all())
