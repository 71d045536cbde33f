# Import every model so Base.metadata is complete (alembic, test fixtures).
from app.features.auth.models.user import User  # noqa: F401
from app.features.leads.models.lead_model import Lead  # noqa: F401
from app.features.social_media.models.social_media import (  # noqa: F401
    PageLink,
    SocialMediaConnection,
)
