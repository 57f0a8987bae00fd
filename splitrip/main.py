"""
FastAPI entrypoint for Splitrip backend application.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from splitrip.api.router import api_router
from splitrip.core.config import Settings
from splitrip.core.exceptions import SplitripError, ValidationError
from splitrip.db.session import build_engine, build_session_factory, init_db
from splitrip.services.fx_service import ExchangeRateClient

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    rate_client: Optional[ExchangeRateClient] = None
) -> FastAPI:
    """Build the application around one settings object."""
    settings = settings or Settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Backend API for trip expense splitting",
        version="1.0.0"
    )

    engine = build_engine(settings)
    init_db(engine)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.rate_client = rate_client or ExchangeRateClient(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SplitripError)
    async def handle_domain_error(request: Request, exc: SplitripError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        messages = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
        error = ValidationError("; ".join(messages) or "Invalid request")
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"message": f"{settings.APP_NAME} API is running"}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
