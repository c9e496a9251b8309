import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from oked_assistant.api.dependencies import (
    CatalogueHandlerDep,
    ChatHandlerDep,
    HealthHandlerDep,
    build_context,
    lifespan,
)
from oked_assistant.api.middleware import (
    BodySizeLimitMiddleware,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
    UnhandledErrorMiddleware,
)
from oked_assistant.config import Settings, configure_logging, settings as default_settings
from oked_assistant.dto import ErrorResponse, HealthCheckResponse
from oked_assistant.errors import OkedAssistantError, ProviderError
from oked_assistant.protocols import CompletionProvider, ResponseCache

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "https://oked-catalogue-assistant.vercel.app",
    "https://oked-catalogue-assistant-a7uohyna6-kazdatahelps-projects.vercel.app",
]

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_app_error(request: Request, exc: OkedAssistantError) -> JSONResponse:
    """Render domain errors as ``{"error": ...}`` with their status."""
    if isinstance(exc, ProviderError):
        logger.error("Claude API error: %s", exc.message, exc_info=exc)
    return _error(exc.status_code, exc.client_message)


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes and methods are reported as missing endpoints."""
    if exc.status_code in (404, 405):
        return _error(404, "Endpoint not found")
    return _error(exc.status_code, str(exc.detail))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Server error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error(500, "Internal server error")


def create_app(
    settings: Settings | None = None,
    provider: CompletionProvider | None = None,
    cache: ResponseCache | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Application settings. Defaults to the environment.
        provider: LLM provider override (tests inject a fake).
        cache: Cache backend override.

    Returns:
        A ready FastAPI app with its AppContext in ``app.state.context``
    """
    settings = settings or default_settings
    context = build_context(settings, provider=provider, cache=cache)

    app = FastAPI(
        title="OKED Assistant API",
        description="OKED classification assistant backed by Anthropic with an offline fallback",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.context = context

    # Last added runs first: security headers -> CORS -> rate limit -> body size -> error guard.
    app.add_middleware(UnhandledErrorMiddleware)  # type: ignore[arg-type]
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)  # type: ignore[arg-type]
    app.add_middleware(RateLimitMiddleware, limiter=context.rate_limiter)  # type: ignore[arg-type]
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=ALLOWED_ORIGINS + ([settings.frontend_url] if settings.frontend_url else []),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "x-requested-with"],
    )
    app.add_middleware(SecurityHeadersMiddleware)  # type: ignore[arg-type]

    app.add_exception_handler(OkedAssistantError, handle_app_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, handle_http_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HealthHandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.post("/api/claude", responses=ERROR_RESPONSES)
    async def claude(request: Request, handler: ChatHandlerDep) -> dict[str, Any]:
        """
        Answer an OKED question.

        Body: ``{"messages": [{"role": ..., "content": ...}], "model": ...}``.
        Returns a provider completion, or an offline answer when no
        provider is configured.
        """
        return await handler.create_completion(request)

    @app.get(
        "/api/statistics/{oked_code}",
        responses={400: {"model": ErrorResponse}, 501: {"model": ErrorResponse}},
    )
    async def statistics(oked_code: str, handler: CatalogueHandlerDep) -> dict[str, Any]:
        """Statistics for an OKED section letter or numeric code."""
        return await handler.get_statistics(oked_code)

    @app.get("/api/oked/sections")
    async def sections(handler: CatalogueHandlerDep) -> dict[str, Any]:
        """List the top-level OKED sections."""
        return await handler.list_sections()

    return app


configure_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "oked_assistant.api.app:app",
        host=default_settings.api_host,
        port=default_settings.api_port,
        reload=default_settings.api_reload,
    )
