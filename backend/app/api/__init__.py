from fastapi import APIRouter

from app.api.routes import ai_router, air_quality_router, tenders_router

router = APIRouter()
router.include_router(air_quality_router, tags=["Air quality"])
router.include_router(ai_router, tags=["AI"])
router.include_router(tenders_router, tags=["Tenders"])

__all__ = ["router"]
