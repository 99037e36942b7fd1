"""
SMS Transaction Extractor FastAPI Application
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sms_extractor.api.v1.router import api_router
from sms_extractor.config import Settings, settings as default_settings
from sms_extractor.core.errors import register_error_handlers
from sms_extractor.core.logging import setup_logging
from sms_extractor.core.vocabulary import load_vocabulary
from sms_extractor.ml.inference.model_loader import BackendLoader, ModelStatus
from sms_extractor.services.pipeline import TransactionExtractor
from sms_extractor.services.sms_analyzer import SMSAnalyzer

logger = structlog.get_logger()


def create_app(
    settings: Optional[Settings] = None,
    backend_loader: Optional[BackendLoader] = None
) -> FastAPI:
    """Build the API; a prepared backend loader may be supplied instead of settings-driven loading"""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize on startup, release the backend on shutdown"""
        setup_logging(
            log_level=settings.LOG_LEVEL,
            json_output=settings.LOG_JSON,
            service=settings.PROJECT_NAME
        )
        logger.info("app_starting", project=settings.PROJECT_NAME, version=settings.VERSION)

        vocabulary = load_vocabulary(settings.VOCABULARY_PATH)
        loader = backend_loader or BackendLoader.from_settings(settings)
        extractor = TransactionExtractor.from_settings(settings, vocabulary, backend_loader=loader)

        app.state.backend_loader = loader
        app.state.analyzer = SMSAnalyzer(extractor, backend_loader=loader)

        # Load the backend in the background; requests are rejected until it is ready
        loader.on_status(
            lambda status: logger.info("backend_status", status=status.name.lower())
        )
        loader.start()

        yield

        logger.info("app_stopping")
        loader.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Structured transaction extraction from bank and UPI SMS",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "docs": "/docs",
            "health": "/health"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        loader: BackendLoader = app.state.backend_loader
        return {
            "status": "healthy",
            "backend": {
                "ready": loader.is_ready,
                "available": loader.status == ModelStatus.AVAILABLE,
                "status": loader.status.name.lower()
            }
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "sms_extractor.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
