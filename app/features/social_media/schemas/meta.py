from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class PageData(BaseModel):
    """A page as returned by Graph `/me/accounts` and echoed back by the client."""
    id: str = Field(..., min_length=1)
    access_token: str = Field(..., min_length=1)
    name: Optional[str] = None
    category: Optional[str] = None


class PageSelectionRequest(BaseModel):
    pages: List[PageData]


class PageSelectionResult(BaseModel):
    linked: List[str] = []
    already_linked: List[str] = []
    installed: List[str] = []
    install_failed: List[str] = []


# ── Per-event payloads ──────────────────────────

class LeadgenValue(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    leadgen_id: Optional[str] = None
    page_id: Optional[str] = None
    form_id: Optional[str] = None
    ad_id: Optional[str] = None
    created_time: Optional[Union[int, str]] = None


class LeadgenChange(BaseModel):
    field: str
    value: Optional[LeadgenValue] = None


class MessagingParty(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: Optional[str] = None


class MessagingMessage(BaseModel):
    mid: Optional[str] = None
    text: Optional[str] = None
    is_echo: bool = False


class MessagingEvent(BaseModel):
    sender: Optional[MessagingParty] = None
    recipient: Optional[MessagingParty] = None
    timestamp: Optional[int] = None
    message: Optional[MessagingMessage] = None
