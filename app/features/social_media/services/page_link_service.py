from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.features.auth.models.user import User
from app.features.social_media.models.social_media import (
    PageLink,
    SocialMediaConnection,
    SocialMediaType,
)
from app.features.social_media.schemas.meta import PageData
from app.platform.logger import get_logger

logger = get_logger(__name__)


class PageLinkService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_active_user(self, user_id: str) -> Optional[User]:
        """The account, if it exists, is not deleted and has a verified email."""
        result = await self.db.execute(
            select(User).where(
                User.id == user_id,
                User.is_deleted.is_(False),
                User.is_email_verified.is_(True),
            )
        )
        return result.scalars().first()

    async def get_connection(
        self, user_id: str, social_media: SocialMediaType = SocialMediaType.facebook
    ) -> Optional[SocialMediaConnection]:
        result = await self.db.execute(
            select(SocialMediaConnection).where(
                SocialMediaConnection.user_id == user_id,
                SocialMediaConnection.social_media == social_media,
            )
        )
        return result.scalars().first()

    async def get_by_page_id(self, page_id: str) -> Optional[PageLink]:
        """Page link with its connection and owning account loaded."""
        result = await self.db.execute(
            select(PageLink)
            .options(joinedload(PageLink.connection), joinedload(PageLink.user))
            .where(PageLink.page_id == page_id)
        )
        return result.scalars().first()

    async def create_page_link(
        self,
        page: PageData,
        connection_id: str,
        user_id: str,
        token_ttl_minutes: int,
    ) -> Optional[PageLink]:
        """
        Insert a link for a page not yet known to the system.

        Returns None when the page is already linked, including when a
        concurrent request inserted it between the check and the insert.
        """
        existing = await self.db.execute(select(PageLink.id).where(PageLink.page_id == page.id))
        if existing.scalars().first():
            return None

        page_link = PageLink(
            page_id=page.id,
            page_access_token=page.access_token,
            page_name=page.name,
            page_token_expires_at=datetime.now(timezone.utc) + timedelta(minutes=token_ttl_minutes),
            connection_id=connection_id,
            user_id=user_id,
        )
        self.db.add(page_link)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Page {page.id} was linked concurrently; keeping the existing link")
            return None

        await self.db.refresh(page_link)
        return page_link
