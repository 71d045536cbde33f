import json

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from fastapi.responses import PlainTextResponse

from app.features.social_media.dependencies import get_webhook_processor
from app.features.social_media.services.signature import SIGNATURE_HEADER, SIGNATURE_PREFIX, verify_signature
from app.features.social_media.services.webhook_service import WebhookProcessor
from app.platform.config import Settings, get_settings
from app.platform.logger import get_logger
from app.platform.response import api_response

logger = get_logger(__name__)

router = APIRouter(prefix="/webhooks/meta", tags=["Meta Webhooks"])

EVENT_RECEIVED = "EVENT_RECEIVED"


@router.get(
    "",
    summary="Webhook verification",
    description="Answer Meta's subscription handshake with the challenge when the verify token matches",
)
async def verify_webhook(request: Request, settings: Settings = Depends(get_settings)):
    mode = request.query_params.get("hub.mode")
    token = request.query_params.get("hub.verify_token")
    challenge = request.query_params.get("hub.challenge", "")

    if mode == "subscribe" and settings.META_APP_VERIFY_TOKEN and token == settings.META_APP_VERIFY_TOKEN:
        logger.info("WEBHOOK:: Verified webhook")
        return PlainTextResponse(challenge, status_code=status.HTTP_200_OK)

    logger.warning(f"WEBHOOK:: Verification rejected (mode={mode!r})")
    return PlainTextResponse("Forbidden", status_code=status.HTTP_403_FORBIDDEN)


@router.post(
    "",
    summary="Webhook event notification",
    description="""
    Receive a webhook delivery from Meta.

    The X-Hub-Signature-256 header is checked against the raw body. Valid
    deliveries are acknowledged with `EVENT_RECEIVED` immediately and their
    events are processed after the response is sent.
    """,
)
async def handle_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    processor: WebhookProcessor = Depends(get_webhook_processor),
):
    signature = request.headers.get(SIGNATURE_HEADER)
    raw_body = await request.body()

    if not signature or not signature.startswith(SIGNATURE_PREFIX):
        logger.error("X-Hub-Signature-256 is not in request header")
        return api_response(
            message="X-Hub-Signature-256 is not in request header",
            status_code=status.HTTP_403_FORBIDDEN,
        )

    if not settings.META_APP_SECRET:
        logger.error("META_APP_SECRET is not defined")
        return api_response(
            message="Webhook signature cannot be verified",
            status_code=status.HTTP_403_FORBIDDEN,
        )

    if not verify_signature(signature, raw_body, settings.META_APP_SECRET):
        logger.error("Invalid webhook signature")
        return api_response(message="Invalid signature", status_code=status.HTTP_403_FORBIDDEN)

    logger.info("Request header X-Hub-Signature-256 validated")

    try:
        envelope = json.loads(raw_body)
    except ValueError:
        logger.error("Webhook body is not valid JSON")
        return api_response(message="Invalid JSON payload", status_code=status.HTTP_400_BAD_REQUEST)

    if not isinstance(envelope, dict):
        logger.error("Webhook body is not a JSON object")
        return api_response(message="Invalid JSON payload", status_code=status.HTTP_400_BAD_REQUEST)

    background_tasks.add_task(processor.process, envelope)
    return PlainTextResponse(EVENT_RECEIVED, status_code=status.HTTP_200_OK)
