from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import router
from app.api.response_builder import error_response
from app.api.routes.air_quality import build_health
from app.core import get_logger, settings
from app.schemas import HealthResponse
from app.services.container import get_container

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting VKO monitor [{settings.app_env}] for {settings.city_name}")
    if not settings.ai_enabled:
        logger.warning("GROQ_API_KEY not set, tender narratives will use the local summary")
    yield
    await get_container().aclose()
    logger.info("Shutting down VKO monitor")


app = FastAPI(
    title="VKO Air Quality & Tender Monitor",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    logger.warning(f"Rejected request to {request.url.path}: {location} {message}")
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        f"{location}: {message}" if location else message,
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error"},
    )


# Routes
app.include_router(router, prefix="/api")


@app.get("/health", response_model=HealthResponse)
async def health_check():
    return build_health(get_container())
