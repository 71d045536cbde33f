import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api_routers.v1 import api_router
from app.features.health.routes.health import router as health_router
from app.platform.config import settings
from app.platform.exceptions import add_exception_handlers
from app.platform.logger import LOG_FORMAT

# Root logging for third-party libraries (uvicorn, sqlalchemy)
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT
)

app = FastAPI(
    title=settings.APP_NAME,
    description="Lead capture from Meta webhooks (Facebook pages, Instagram, WhatsApp)",
    version="1.0.0",
    debug=settings.DEBUG,
)


# Root endpoint for basic info
@app.get("/", tags=["Info"])
def root():
    return {
        "app_name": settings.APP_NAME,
        "description": "Captures leads from Meta lead ads and page messages.",
        "version": "1.0.0",
        "docs_url": "/docs",
        "api_base": "/api/v1",
    }


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_exception_handlers(app)

app.include_router(health_router)
app.include_router(api_router, prefix="/api/v1")
