"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings, settings
from app.feedback.errors import StorageError, ValidationError
from app.feedback.factory import create_store
from app.feedback.store import utc_now
from app.feedback.time_window import get_report_timezone
from app.feedback.validation import field_errors
from app.logging_config import configure_logging
from app.routes.feedback import router as feedback_router
from app.routes.health import router as health_router

logger = logging.getLogger(__name__)


def create_app(config: Settings = settings) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(config.log_level)
        app.state.report_tz = get_report_timezone(config.report_timezone)
        app.state.clock = utc_now
        app.state.feedback_store = create_store(config)
        yield
        app.state.feedback_store.close()
        logger.info("Feedback store closed")

    app = FastAPI(
        title="Campus Feedback Radar",
        version="0.1.0",
        description="Event feedback collection with sentiment and trend analytics",
        lifespan=lifespan,
    )

    origins = config.cors_origin_list()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject "*" with credentials
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": exc.errors})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = field_errors([tuple(err["loc"]) for err in exc.errors()])
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": errors})

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    app.include_router(health_router)
    app.include_router(feedback_router, prefix="/api/feedback")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
