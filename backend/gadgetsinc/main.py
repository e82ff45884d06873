import logging
import traceback
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gadgetsinc.api import chat
from gadgetsinc.core.config import Settings, settings as default_settings
from gadgetsinc.core.logging_config import RequestLoggingMiddleware, setup_logging
from gadgetsinc.core.version import get_full_version
from gadgetsinc.schemas.chat import ErrorResponse, HealthResponse
from gadgetsinc.services.ai.llm_config import build_completion_service
from gadgetsinc.services.chat_orchestrator import ChatOrchestrator
from gadgetsinc.services.tools.registry import ToolRegistry
from gadgetsinc.services.tools.toolsets import build_api_registry

SERVICE_NAME = "gadgetsinc-api"

# Configure structured logging (JSON in production, colored in development)
setup_logging(SERVICE_NAME)
logger = logging.getLogger("gadgetsinc")


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[ToolRegistry] = None,
    orchestrator: Optional[ChatOrchestrator] = None,
) -> FastAPI:
    """
    Assemble the chat API service.

    The tool registry and the completion backend are built here, before
    the first request, so a ConfigurationError stops startup.
    """
    settings = settings or default_settings

    if registry is None:
        registry = build_api_registry()
    if orchestrator is None:
        orchestrator = ChatOrchestrator(
            completion_service=build_completion_service(settings, registry),
            system_prompt=settings.CHAT_SYSTEM_PROMPT,
            simple_system_prompt=settings.SIMPLE_CHAT_SYSTEM_PROMPT,
            registry=registry,
        )

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="GadgetsInc customer-service chat API",
        version=get_full_version(),
        docs_url="/docs" if settings.DEBUG else None,  # Disable docs in production
        redoc_url="/redoc" if settings.DEBUG else None,
    )
    app.state.settings = settings
    app.state.tool_registry = registry
    app.state.orchestrator = orchestrator

    cors_origins = settings.ALLOWED_ORIGINS

    # Global exception handler - catches all unhandled exceptions
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Global exception handler that returns consistent error responses.
        In production, sensitive details are hidden to prevent information leakage.
        """
        error_id = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")

        logger.error(
            f"Unhandled exception [{error_id}]: {exc}\n"
            f"Path: {request.url.path}\n"
            f"Method: {request.method}\n"
            f"Traceback: {traceback.format_exc()}"
        )

        if settings.ENVIRONMENT.lower() == "production":
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ErrorResponse(
                    error="Internal server error",
                    detail=f"An unexpected error occurred. Reference ID: {error_id}",
                    timestamp=datetime.now(timezone.utc).isoformat(),
                    path=request.url.path,
                ).model_dump(),
            )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error=exc.__class__.__name__,
                detail=str(exc),
                timestamp=datetime.now(timezone.utc).isoformat(),
                path=request.url.path,
            ).model_dump(),
        )

    # Browsers reject credentials with a wildcard origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(chat.router, tags=["chat"])

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        backend = settings.effective_chat_backend
        return HealthResponse(
            status="healthy",
            service=SERVICE_NAME,
            version=get_full_version(),
            environment=settings.ENVIRONMENT,
            checks={"tools": len(registry) > 0},
            backend=backend,
        )

    @app.get("/")
    async def root():
        return {"message": "Welcome to the GadgetsInc Chat API"}

    logger.info(
        f"{SERVICE_NAME} ready: backend={settings.effective_chat_backend}, tools={len(registry)}"
    )
    return app


def run() -> None:
    """Console entry point: serve the chat API with uvicorn."""
    import uvicorn

    uvicorn.run("gadgetsinc.main:app", host="0.0.0.0", port=8000)


app = create_app()
