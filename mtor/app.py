"""
MTOR Evolution - FastAPI Application Factory

Importing this module builds nothing; create_app() does. Endpoints:
- /api/v1/clientes     client records
- /api/v1/avaliacoes   physical assessments, comparisons, evolution, reports
- /api/v1/exames       lab exams, catalogs, history, comparisons, attachments
- /api/v1/protocolos   training protocols
- / and /health        liveness
"""
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from mtor.api import api_router
from mtor.api.schemas import HealthResponse
from mtor.config import Settings, settings as default_settings
from mtor.services import build_services
from mtor.utils import CoachingError, get_logger, setup_logging

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application and its service container.

    The container is built here, not in a lifespan hook.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.app_name,
        description="Coaching backend: clients, physical assessments, lab exams and training protocols",
        version=settings.version,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.services = build_services(settings)
    app.state.started_at = datetime.now()

    @app.exception_handler(CoachingError)
    async def coaching_error_handler(request: Request, exc: CoachingError):
        logger.warning(
            f"{request.method} {request.url.path} -> {exc.message}",
            extra={"status": exc.http_status, "code": exc.code},
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_dict())

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        # Raised when a partial update merges into an invalid record
        logger.warning(
            f"{request.method} {request.url.path} -> invalid record",
            extra={"status": 422, "errors": exc.error_count()},
        )
        return JSONResponse(
            status_code=422,
            content={
                "error": "VALIDATION_ERROR",
                "message": "Resulting record is not valid",
                "details": {"errors": exc.errors(
                    include_url=False, include_context=False, include_input=False
                )},
            },
        )

    def _health() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            version=settings.version,
            timestamp=datetime.now().isoformat(),
            uptime_seconds=(datetime.now() - app.state.started_at).total_seconds(),
        )

    @app.get("/", response_model=HealthResponse, tags=["Health"])
    async def root():
        """API root - health check."""
        return _health()

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return _health()

    app.include_router(api_router)

    logger.info(f"{settings.app_name} v{settings.version} ready")
    return app
