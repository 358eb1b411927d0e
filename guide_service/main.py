from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from guide_service.config import settings, setup_logging
from guide_service.dependencies import init_app_services, refresh_guide

from guide_service.routers import main_router


setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    logger.info("Starting Guide Service...")

    init_app_services(app)

    if settings.guide_refresh_on_startup and settings.guide_source:
        result = await refresh_guide(app)
        if result.get("status") == "error":
            # /guide reports the outage until a later refresh succeeds
            logger.warning(f"Initial guide load failed: {result['error']}")

    app.state.guide_scheduler.start(
        settings.guide_refresh_cron,
        settings.guide_refresh_misfire_grace_sec,
    )
    logger.info("Guide Service started")

    yield

    app.state.guide_scheduler.shutdown()
    logger.info("Guide Service stopped")


app = FastAPI(
    title="Guide Service",
    version="0.1.0",
    lifespan=lifespan
)

app.include_router(main_router)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log validation errors with details"""
    logger.error(f"Validation error for {request.method} {request.url.path}")
    logger.error(f"Validation details: {exc.errors()}")

    # Create a properly serializable error response
    errors = []
    for error in exc.errors():
        error_dict = {
            "type": error.get("type"),
            "loc": error.get("loc"),
            "msg": error.get("msg"),
            "input": str(error.get("input", ""))[:100]
        }
        errors.append(error_dict)

    return JSONResponse(
        status_code=422,
        content={
            "detail": errors
        }
    )
