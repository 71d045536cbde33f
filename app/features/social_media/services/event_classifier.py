"""
Turns a webhook envelope into the individual events to dispatch.

Meta does not tag entries with an event type; the kind is read from the
entry's shape:

- a non-empty `changes` list whose first element has the channel's change
  field (`leadgen` for pages, `comments` for Instagram, `messages` for
  WhatsApp) → every change carrying that field is an event
- otherwise a non-empty `messaging` list → every item is a `messages` event
- otherwise the entry is unrecognized and skipped
"""
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from app.platform.logger import get_logger

logger = get_logger(__name__)


class Channel(str, enum.Enum):
    page = "page"
    instagram = "instagram"
    whatsapp = "whatsapp_business_account"


class EventKind(str, enum.Enum):
    leadgen = "leadgen"
    comments = "comments"
    messages = "messages"


class HandlingMode(str, enum.Enum):
    pipeline = "pipeline"  # resolve page, fetch details, persist a lead
    log_only = "log_only"  # observed and logged, nothing persisted


# `changes[].field` that marks a change-based entry, per channel
CHANGE_FIELDS: Dict[Channel, EventKind] = {
    Channel.page: EventKind.leadgen,
    Channel.instagram: EventKind.comments,
    Channel.whatsapp: EventKind.messages,
}

# How each (channel, kind) pair is handled. Pairs not listed are logged only.
EVENT_HANDLING: Dict[tuple, HandlingMode] = {
    (Channel.page, EventKind.leadgen): HandlingMode.pipeline,
    (Channel.page, EventKind.messages): HandlingMode.pipeline,
    (Channel.instagram, EventKind.comments): HandlingMode.log_only,
    (Channel.instagram, EventKind.messages): HandlingMode.log_only,
    (Channel.whatsapp, EventKind.messages): HandlingMode.log_only,
}


@dataclass(frozen=True)
class WebhookEvent:
    channel: Channel
    kind: EventKind
    entry_id: Optional[str]
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def handling(self) -> HandlingMode:
        return EVENT_HANDLING.get((self.channel, self.kind), HandlingMode.log_only)


def resolve_channel(object_type: Any) -> Optional[Channel]:
    try:
        return Channel(object_type)
    except ValueError:
        return None


def classify_entry(channel: Channel, entry: Dict[str, Any]) -> Iterator[WebhookEvent]:
    entry_id = entry.get("id")
    changes = entry.get("changes")
    messaging = entry.get("messaging")
    change_field = CHANGE_FIELDS[channel]

    if (
        isinstance(changes, list)
        and changes
        and isinstance(changes[0], dict)
        and changes[0].get("field") == change_field.value
    ):
        for change in changes:
            if isinstance(change, dict) and change.get("field") == change_field.value:
                yield WebhookEvent(channel, change_field, entry_id, change)
        return

    if isinstance(messaging, list) and messaging:
        for item in messaging:
            if isinstance(item, dict):
                yield WebhookEvent(channel, EventKind.messages, entry_id, item)
        return

    logger.warning(f"Unhandled {channel.value} webhook entry {entry_id}: no recognized event field")


def classify_envelope(envelope: Dict[str, Any]) -> List[WebhookEvent]:
    """
    Flatten a webhook body into dispatchable events.

    Unknown `object` values yield nothing (Meta adds new object types over
    time); malformed entries are skipped.
    """
    channel = resolve_channel(envelope.get("object"))
    if channel is None:
        logger.info(f"Ignoring webhook for unsupported object {envelope.get('object')!r}")
        return []

    entries = envelope.get("entry")
    if not isinstance(entries, list):
        logger.warning(f"{channel.value} webhook without an entry list")
        return []

    events: List[WebhookEvent] = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.warning(f"Skipping malformed {channel.value} webhook entry: {entry!r}")
            continue
        events.extend(classify_entry(channel, entry))
    return events
