from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.auth.dependencies.auth import get_current_user_id, require_user_id
from app.features.social_media.dependencies import get_meta_client
from app.features.social_media.schemas.meta import PageSelectionRequest
from app.features.social_media.services.meta_client import MetaGraphClient
from app.features.social_media.services.meta_service import MetaService
from app.platform.config import Settings, get_settings
from app.platform.db.session import get_db
from app.platform.response import api_response

router = APIRouter(prefix="/meta", tags=["Meta"])


@router.get(
    "/pages",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="List facebook pages",
    description="Fetch the facebook pages the connected account manages",
)
async def fetch_pages(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    client: MetaGraphClient = Depends(get_meta_client),
    settings: Settings = Depends(get_settings),
):
    user_id = require_user_id(user_id)
    pages = await MetaService(db, client, settings).fetch_pages(user_id)
    return api_response(data=pages, message="Pages retrieved successfully")


@router.post(
    "/pages",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="Connect facebook pages",
    description="Link the selected pages to the account and install the app on them",
)
async def choose_pages(
    request: PageSelectionRequest,
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    client: MetaGraphClient = Depends(get_meta_client),
    settings: Settings = Depends(get_settings),
):
    user_id = require_user_id(user_id)
    result = await MetaService(db, client, settings).choose_pages(user_id, request.pages)
    return api_response(data=result, message="Pages added successfully!")


@router.get(
    "/status",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="Facebook connection status",
    description="Whether the account has a stored facebook access token",
)
async def check_facebook_status(
    user_id: Optional[str] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    client: MetaGraphClient = Depends(get_meta_client),
    settings: Settings = Depends(get_settings),
):
    user_id = require_user_id(user_id)
    connected = await MetaService(db, client, settings).is_connected(user_id)
    return api_response(data=connected, message="Facebook connection status")
