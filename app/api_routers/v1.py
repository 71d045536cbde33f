from fastapi import APIRouter

from app.features.leads.routes.lead_route import router as leads_router
from app.features.social_media.routes.meta import router as meta_router
from app.features.social_media.routes.webhook import router as webhook_router

api_router = APIRouter()

# Register all feature routes
api_router.include_router(webhook_router)
api_router.include_router(meta_router)
api_router.include_router(leads_router)
