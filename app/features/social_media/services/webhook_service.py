import enum
from typing import Any, Dict, List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.features.leads.services.lead_service import LeadService
from app.features.social_media.schemas.meta import LeadgenChange, LeadgenValue, MessagingEvent
from app.features.social_media.services.event_classifier import (
    EventKind,
    HandlingMode,
    WebhookEvent,
    classify_envelope,
)
from app.features.social_media.services.meta_client import MetaGraphClient
from app.features.social_media.services.page_link_service import PageLinkService
from app.features.social_media.utils.lead_parser import parse_lead_data, parse_message_data
from app.platform.logger import get_logger

logger = get_logger(__name__)


class EventOutcome(str, enum.Enum):
    """How a single webhook event ended, for every expected path."""
    created = "created"
    duplicate = "duplicate"
    ignored = "ignored"  # payload lacks the ids needed to act on it
    unknown_page = "unknown_page"
    no_data = "no_data"
    observed = "observed"  # log-only channel
    failed = "failed"  # unexpected error, logged


class WebhookProcessor:
    """
    Handles a verified webhook delivery after it has been acknowledged.

    Each event runs in its own session. Expected conditions (unknown page,
    missing ids, empty upstream data) come back as an EventOutcome; anything
    else raises out of the handler and is logged as a failure for that event
    only, since the HTTP response has already been sent.
    """

    def __init__(self, session_factory: async_sessionmaker, client: MetaGraphClient):
        self.session_factory = session_factory
        self.client = client

    async def process(self, envelope: Dict[str, Any]) -> List[Tuple[WebhookEvent, EventOutcome]]:
        results = []
        for event in classify_envelope(envelope):
            logger.info(f"{event.channel.value} {event.kind.value} event received (entry {event.entry_id})")
            try:
                outcome = await self.dispatch(event)
            except Exception:
                logger.exception(
                    f"Error while handling {event.channel.value} {event.kind.value} event: {event.payload}"
                )
                outcome = EventOutcome.failed
            results.append((event, outcome))
        return results

    async def dispatch(self, event: WebhookEvent) -> EventOutcome:
        if event.handling is HandlingMode.log_only:
            logger.info(f"{event.channel.value} {event.kind.value} event observed: {event.payload}")
            return EventOutcome.observed

        async with self.session_factory() as db:
            if event.kind is EventKind.leadgen:
                return await self.handle_leadgen_event(db, event.payload)
            if event.kind is EventKind.messages:
                return await self.handle_messaging_event(db, event.payload)

        logger.warning(f"No pipeline handler for {event.channel.value} {event.kind.value}")
        return EventOutcome.observed

    async def handle_leadgen_event(self, db: AsyncSession, payload: Dict[str, Any]) -> EventOutcome:
        change = LeadgenChange.model_validate(payload)
        value = change.value or LeadgenValue()
        leadgen_id = value.leadgen_id
        page_id = value.page_id
        if not leadgen_id or not page_id:
            logger.warning(f"Leadgen event without leadgen_id/page_id: {payload}")
            return EventOutcome.ignored

        page_link = await PageLinkService(db).get_by_page_id(page_id)
        if page_link is None:
            logger.warning(f"No page link found for the page with ID {page_id}")
            return EventOutcome.unknown_page

        lead_fields = await self.client.fetch_lead_details(leadgen_id, page_link.page_access_token)
        if not lead_fields:
            logger.warning(f"No lead data found for the leadgen with ID {leadgen_id}")
            return EventOutcome.no_data

        lead_data = parse_lead_data(lead_fields, user_id=page_link.user_id, external_id=leadgen_id)
        _, created = await LeadService(db).create_lead(lead_data)
        return EventOutcome.created if created else EventOutcome.duplicate

    async def handle_messaging_event(self, db: AsyncSession, payload: Dict[str, Any]) -> EventOutcome:
        event = MessagingEvent.model_validate(payload)
        page_id = event.recipient.id if event.recipient else None
        message_id = event.message.mid if event.message else None

        if not page_id or not message_id:
            logger.warning(f"Messaging event without recipient/page id or message id: {payload}")
            return EventOutcome.ignored
        if event.message.is_echo:
            return EventOutcome.ignored

        page_link = await PageLinkService(db).get_by_page_id(page_id)
        if page_link is None:
            logger.warning(f"No page link found for the page with ID {page_id}")
            return EventOutcome.unknown_page

        message = await self.client.fetch_message_details(message_id, page_link.page_access_token)
        if not message:
            logger.warning(f"No message details found for message {message_id}")
            return EventOutcome.no_data

        lead_data = parse_message_data(message, user_id=page_link.user_id, external_id=message_id)
        _, created = await LeadService(db).create_lead(lead_data)
        return EventOutcome.created if created else EventOutcome.duplicate
