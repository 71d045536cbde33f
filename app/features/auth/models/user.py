from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import relationship

from app.platform.db.base import BaseModel


class User(BaseModel):
    """An account holder. Owns social-media connections, page links and leads."""
    __tablename__ = "users"
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)

    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    company = Column(String(255), nullable=True)

    is_email_verified = Column(Boolean, default=False)
    email_verified_at = Column(DateTime, nullable=True)
    is_deleted = Column(Boolean, default=False, nullable=False)

    social_media_connections = relationship(
        "SocialMediaConnection", back_populates="user", cascade="all, delete-orphan"
    )
    page_links = relationship("PageLink", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, username={self.username})>"
