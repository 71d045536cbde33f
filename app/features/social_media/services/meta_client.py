from typing import Any, Dict, List, Optional

import httpx

from app.platform.config import Settings
from app.platform.logger import get_logger

logger = get_logger(__name__)


class MetaGraphError(Exception):
    """A Graph API call failed. The upstream body is logged, never shown to clients."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MetaGraphClient:
    """Thin async wrapper around the Graph API endpoints this service uses."""

    def __init__(self, settings: Settings):
        self.base_url = settings.meta_graph_base_url
        self.timeout = settings.META_API_TIMEOUT
        self.subscribed_fields = settings.META_PAGE_SUBSCRIBED_FIELDS

    async def _request(
        self,
        method: str,
        path: str,
        access_token: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}/{path.lstrip('/')}"
        query = {**(params or {}), "access_token": access_token}

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.request(method, url, params=query)
            except httpx.RequestError as e:
                logger.error(f"Graph API {method} {path} failed: {e}")
                raise MetaGraphError(f"Graph API request failed: {e.__class__.__name__}") from e

        if response.status_code >= 400:
            logger.error(f"Graph API {method} {path} returned {response.status_code}: {response.text}")
            raise MetaGraphError("Graph API returned an error", status_code=response.status_code)

        try:
            return response.json() or {}
        except ValueError as e:
            logger.error(f"Graph API {method} {path} returned a non-JSON body")
            raise MetaGraphError("Graph API returned an invalid body") from e

    async def fetch_pages(self, user_access_token: str) -> List[Dict[str, Any]]:
        """Pages the user manages, each with its own page access token."""
        data = await self._request(
            "GET",
            "me/accounts",
            user_access_token,
            params={"fields": "id,name,access_token,category"},
        )
        return data.get("data", [])

    async def fetch_lead_details(self, leadgen_id: str, page_access_token: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a lead-form submission and flatten its field list.

        Meta returns `field_data: [{"name": "email", "values": ["..."]}, ...]`;
        this becomes `{"email": "...", ...}` (first value of each field).
        Returns None when the lead has no data.
        """
        data = await self._request("GET", leadgen_id, page_access_token)
        field_data = data.get("field_data") or []
        if not field_data:
            return None

        flat_data: Dict[str, Any] = {}
        for item in field_data:
            name = item.get("name")
            values = item.get("values") or []
            if name and values:
                flat_data[name] = values[0]
        return flat_data or None

    async def fetch_message_details(self, message_id: str, page_access_token: str) -> Optional[Dict[str, Any]]:
        data = await self._request(
            "GET",
            message_id,
            page_access_token,
            params={"fields": "id,message,from,created_time"},
        )
        return data or None

    async def install_app(self, page_id: str, page_access_token: str) -> bool:
        """Subscribe this app to the page's webhook fields."""
        data = await self._request(
            "POST",
            f"{page_id}/subscribed_apps",
            page_access_token,
            params={"subscribed_fields": self.subscribed_fields},
        )
        return bool(data.get("success"))
