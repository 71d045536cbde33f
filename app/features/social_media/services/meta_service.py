from typing import Any, Dict, List

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.social_media.models.social_media import SocialMediaType
from app.features.social_media.schemas.meta import PageData, PageSelectionResult
from app.features.social_media.services.meta_client import MetaGraphClient, MetaGraphError
from app.features.social_media.services.page_link_service import PageLinkService
from app.platform.config import Settings
from app.platform.logger import get_logger

logger = get_logger(__name__)


class MetaService:
    def __init__(self, db: AsyncSession, client: MetaGraphClient, settings: Settings):
        self.db = db
        self.client = client
        self.settings = settings
        self.page_links = PageLinkService(db)

    async def fetch_pages(self, user_id: str) -> List[Dict[str, Any]]:
        connection = await self.page_links.get_connection(user_id, SocialMediaType.facebook)
        if not connection or not connection.user_access_token:
            logger.warning(f"User {user_id} not authenticated to fetch facebook pages")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User not authenticated to fetch facebook pages!",
            )

        try:
            return await self.client.fetch_pages(connection.user_access_token)
        except MetaGraphError as e:
            logger.error(f"Fetching facebook pages for user {user_id} failed: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal server error",
            )

    async def choose_pages(self, user_id: str, pages: List[PageData]) -> PageSelectionResult:
        """
        Link the selected pages to the account and install the app on them.

        Pages already linked (to anyone) are left untouched. Install failures
        are reported in the result and do not undo the links.
        """
        if not pages:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Page data not found!",
            )

        user = await self.page_links.get_active_user(user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Subscriber not found!",
            )

        connection = await self.page_links.get_connection(user_id, SocialMediaType.facebook)
        if not connection:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Subscriber not authenticated to fetch facebook pages!",
            )

        # Plain ids: a rollback inside create_page_link expires loaded instances
        connection_id, owner_id = connection.id, connection.user_id

        result = PageSelectionResult()
        for page in pages:
            page_link = await self.page_links.create_page_link(
                page, connection_id, owner_id, self.settings.PAGE_TOKEN_TTL_MINUTES
            )
            if page_link:
                result.linked.append(page.id)
            else:
                result.already_linked.append(page.id)

        for page in pages:
            try:
                installed = await self.client.install_app(page.id, page.access_token)
            except MetaGraphError:
                installed = False
            if installed:
                result.installed.append(page.id)
            else:
                logger.error(f"Installing the app on page {page.id} failed")
                result.install_failed.append(page.id)

        logger.info(
            f"Pages linked for user {user_id}: linked={result.linked} already_linked={result.already_linked}"
        )
        return result

    async def is_connected(self, user_id: str) -> bool:
        user = await self.page_links.get_active_user(user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Subscriber not found!",
            )
        connection = await self.page_links.get_connection(user_id, SocialMediaType.facebook)
        return bool(connection and connection.user_access_token)
