from unittest.mock import patch

import httpx
import pytest

from app.features.social_media.services.meta_client import MetaGraphClient, MetaGraphError
from app.platform.config import Settings

RealAsyncClient = httpx.AsyncClient


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite+aiosqlite://",
        META_GRAPH_API_URL="https://graph.test",
        META_GRAPH_API_VERSION="v19.0",
        META_API_TIMEOUT=3.0,
    )


def mock_graph(handler):
    """Route the client's httpx calls through a MockTransport."""

    def factory(*args, **kwargs):
        return RealAsyncClient(*args, transport=httpx.MockTransport(handler), **kwargs)

    return patch("app.features.social_media.services.meta_client.httpx.AsyncClient", side_effect=factory)


async def test_fetch_lead_details_flattens_field_data(settings):
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        seen["token"] = request.url.params["access_token"]
        return httpx.Response(
            200,
            json={
                "id": "L1",
                "created_time": "2026-10-19T09:00:00+0000",
                "field_data": [
                    {"name": "full_name", "values": ["Jane Doe"]},
                    {"name": "email", "values": ["jane@x.com", "other@x.com"]},
                    {"name": "empty", "values": []},
                ],
            },
        )

    with mock_graph(handler):
        data = await MetaGraphClient(settings).fetch_lead_details("L1", "page-token")

    assert data == {"full_name": "Jane Doe", "email": "jane@x.com"}
    assert seen == {"url": "https://graph.test/v19.0/L1", "token": "page-token"}


async def test_fetch_lead_details_without_fields_is_none(settings):
    with mock_graph(lambda request: httpx.Response(200, json={"id": "L1"})):
        assert await MetaGraphClient(settings).fetch_lead_details("L1", "page-token") is None


async def test_error_status_raises_meta_graph_error(settings):
    with mock_graph(lambda request: httpx.Response(400, json={"error": {"message": "bad token"}})):
        with pytest.raises(MetaGraphError) as exc_info:
            await MetaGraphClient(settings).fetch_lead_details("L1", "page-token")

    assert exc_info.value.status_code == 400
    assert "bad token" not in str(exc_info.value)


async def test_transport_error_raises_meta_graph_error(settings):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with mock_graph(handler):
        with pytest.raises(MetaGraphError):
            await MetaGraphClient(settings).fetch_pages("user-token")


async def test_install_app_posts_subscribed_fields(settings):
    seen = {}

    def handler(request: httpx.Request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["fields"] = request.url.params["subscribed_fields"]
        return httpx.Response(200, json={"success": True})

    with mock_graph(handler):
        assert await MetaGraphClient(settings).install_app("P1", "page-token") is True

    assert seen == {"method": "POST", "path": "/v19.0/P1/subscribed_apps", "fields": "leadgen,messages"}


async def test_fetch_pages_returns_data_list(settings):
    pages = [{"id": "P1", "name": "Bakery", "access_token": "t", "category": "Food"}]

    with mock_graph(lambda request: httpx.Response(200, json={"data": pages})):
        assert await MetaGraphClient(settings).fetch_pages("user-token") == pages
