import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.platform.db.base import BaseModel


class SocialMediaType(enum.Enum):
    facebook = "facebook"
    instagram = "instagram"
    whatsapp = "whatsapp"


class SocialMediaConnection(BaseModel):
    """
    One account's authorization for one channel (the stored OAuth grant).

    Created by the connect flow; absence means the account never authorized
    that channel.
    """
    __tablename__ = "social_media_connections"

    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    social_media = Column(Enum(SocialMediaType), nullable=False)
    user_access_token = Column(Text, nullable=True)
    profile_id = Column(String(255), nullable=True)

    user = relationship("User", back_populates="social_media_connections")
    page_links = relationship("PageLink", back_populates="connection", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("user_id", "social_media", name="uq_user_social_media"),
    )

    def __repr__(self):
        return f"<SocialMediaConnection(user_id={self.user_id}, social_media={self.social_media})>"


class PageLink(BaseModel):
    """
    Maps a platform page to the account that connected it, with the page's
    own access token. `page_token_expires_at` is stored, not enforced.
    """
    __tablename__ = "page_links"

    page_id = Column(String(100), nullable=False, unique=True, index=True)
    page_access_token = Column(Text, nullable=False)
    page_name = Column(String(255), nullable=True)
    page_token_expires_at = Column(DateTime(timezone=True), nullable=True)

    connection_id = Column(
        String, ForeignKey("social_media_connections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    connection = relationship("SocialMediaConnection", back_populates="page_links")
    user = relationship("User", back_populates="page_links")

    def __repr__(self):
        return f"<PageLink(page_id={self.page_id}, user_id={self.user_id})>"
