"""Collection of API routers."""

from app.api.routes.ai import router as ai_router
from app.api.routes.air_quality import router as air_quality_router
from app.api.routes.tenders import router as tenders_router

__all__ = ["ai_router", "air_quality_router", "tenders_router"]
