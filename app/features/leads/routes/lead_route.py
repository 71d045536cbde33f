from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.auth.dependencies.auth import get_current_user_id, require_user_id
from app.features.leads.models.lead_model import LeadSource
from app.features.leads.schemas.lead_schema import LeadCreate, LeadData, LeadOut
from app.features.leads.services.lead_service import LeadService
from app.platform.db.session import get_db
from app.platform.response import api_response

router = APIRouter(prefix="/leads", tags=["Leads"])


@router.get(
    "",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="List leads",
    description="Retrieve every lead owned by the authenticated account, newest first",
)
async def list_leads(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    user_id = require_user_id(user_id)

    leads = await LeadService(db).list_leads_for_user(user_id)

    return api_response(
        data=[LeadOut.model_validate(lead) for lead in leads],
        message="Leads retrieved successfully",
        status_code=status.HTTP_200_OK,
    )


@router.post(
    "",
    response_model=dict,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a lead",
    description="Record a manually captured lead for the authenticated account",
)
async def create_lead(
    payload: LeadCreate,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    user_id = require_user_id(user_id)

    lead, _ = await LeadService(db).create_lead(
        LeadData(
            lead_text=payload.lead_text,
            status=payload.status,
            contact_name=payload.contact_name,
            contact_email=payload.contact_email,
            contact_phone=payload.contact_phone or "",
            user_id=user_id,
            source=LeadSource.manual,
        )
    )

    return api_response(
        data=LeadOut.model_validate(lead),
        message="Lead created successfully",
        status_code=status.HTTP_201_CREATED,
    )
