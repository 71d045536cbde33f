import enum

from sqlalchemy import Column, Enum, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.platform.db.base import BaseModel


class LeadStatus(enum.Enum):
    new = "new"
    contacted = "contacted"
    qualified = "qualified"
    converted = "converted"
    lost = "lost"


class LeadSource(enum.Enum):
    """Channel a lead originated from"""
    facebook_lead_ad = "facebook_lead_ad"
    messenger = "messenger"
    manual = "manual"


class Lead(BaseModel):
    """
    A captured prospect. Rows are append-only: there is no update or delete path.

    Webhook-created leads carry the platform's id (leadgen id or message id) in
    `external_id`; the (source, external_id) pair is unique so a redelivered
    webhook cannot produce a second row. Manual leads leave it NULL.
    """
    __tablename__ = "leads"

    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    source = Column(Enum(LeadSource), nullable=False)
    external_id = Column(String(255), nullable=True)

    lead_text = Column(Text, nullable=False, default="")
    status = Column(Enum(LeadStatus), default=LeadStatus.new, nullable=False)
    contact_name = Column(String(255), nullable=False, default="")
    contact_email = Column(String(255), nullable=False, default="")
    contact_phone = Column(String(50), nullable=False, default="")

    user = relationship("User")

    __table_args__ = (
        UniqueConstraint("source", "external_id", name="uq_lead_source_external_id"),
        Index("ix_leads_user_id_created_at", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Lead(id='{self.id}', source='{self.source}', external_id='{self.external_id}')>"
