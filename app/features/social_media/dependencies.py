from fastapi import Depends

from app.features.social_media.services.meta_client import MetaGraphClient
from app.features.social_media.services.webhook_service import WebhookProcessor
from app.platform.config import Settings, get_settings
from app.platform.db.session import get_session_factory


def get_meta_client(settings: Settings = Depends(get_settings)) -> MetaGraphClient:
    return MetaGraphClient(settings)


def get_webhook_processor(
    session_factory=Depends(get_session_factory),
    client: MetaGraphClient = Depends(get_meta_client),
) -> WebhookProcessor:
    return WebhookProcessor(session_factory, client)
