from typing import Any, Dict, Iterable, Optional

from app.features.leads.models.lead_model import LeadSource, LeadStatus
from app.features.leads.schemas.lead_schema import LeadData

# Lead-form field names, in priority order, for each normalized attribute
NAME_FIELDS = ("full_name", "name")
FIRST_NAME_FIELDS = ("first_name",)
LAST_NAME_FIELDS = ("last_name",)
EMAIL_FIELDS = ("email", "work_email")
PHONE_FIELDS = ("phone_number", "phone", "work_phone_number")

MAPPED_FIELDS = frozenset(
    NAME_FIELDS + FIRST_NAME_FIELDS + LAST_NAME_FIELDS + EMAIL_FIELDS + PHONE_FIELDS
)


def _first(fields: Dict[str, Any], names: Iterable[str]) -> str:
    for name in names:
        value = fields.get(name)
        if value is not None and str(value).strip():
            return str(value).strip()
    return ""


def _lead_text(fields: Dict[str, Any]) -> str:
    """Every unmapped answer as `question: answer` lines, in submission order."""
    lines = []
    for name, value in fields.items():
        if name in MAPPED_FIELDS or value is None or not str(value).strip():
            continue
        lines.append(f"{name}: {str(value).strip()}")
    return "\n".join(lines)


def parse_lead_data(
    fields: Dict[str, Any],
    user_id: str,
    external_id: Optional[str] = None,
) -> LeadData:
    """
    Map a flattened lead-form submission onto the lead attributes.
    Missing attributes are empty strings, never None.
    """
    contact_name = _first(fields, NAME_FIELDS)
    if not contact_name:
        contact_name = " ".join(
            part for part in (_first(fields, FIRST_NAME_FIELDS), _first(fields, LAST_NAME_FIELDS)) if part
        )

    return LeadData(
        lead_text=_lead_text(fields),
        status=LeadStatus.new,
        contact_name=contact_name,
        contact_email=_first(fields, EMAIL_FIELDS),
        contact_phone=_first(fields, PHONE_FIELDS),
        user_id=user_id,
        source=LeadSource.facebook_lead_ad,
        external_id=external_id,
    )


def parse_message_data(
    message: Dict[str, Any],
    user_id: str,
    external_id: Optional[str] = None,
) -> LeadData:
    """Map a Messenger message (Graph `/{mid}`) onto the lead attributes."""
    sender = message.get("from") or {}
    return LeadData(
        lead_text=str(message.get("message") or ""),
        status=LeadStatus.new,
        contact_name=str(sender.get("name") or ""),
        contact_email=str(sender.get("email") or ""),
        contact_phone="",
        user_id=user_id,
        source=LeadSource.messenger,
        external_id=external_id,
    )
