from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.features.leads.models.lead_model import LeadSource, LeadStatus


class LeadData(BaseModel):
    """Normalized lead attributes, ready to persist."""
    lead_text: str = ""
    status: LeadStatus = LeadStatus.new
    contact_name: str = ""
    contact_email: str = ""
    contact_phone: str = ""
    user_id: str
    source: LeadSource
    external_id: Optional[str] = None


class LeadCreate(BaseModel):
    """Direct (manual) lead submission"""
    lead_text: str = Field("", max_length=5000)
    contact_name: str = Field(..., min_length=1, max_length=255)
    contact_email: EmailStr
    contact_phone: Optional[str] = Field(None, max_length=50)
    status: LeadStatus = LeadStatus.new


class LeadOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    lead_text: str
    status: LeadStatus
    contact_name: str
    contact_email: str
    contact_phone: str
    user_id: str
    source: LeadSource
    external_id: Optional[str]
    created_at: datetime
