"""BrainyBot tutor API: FastAPI application entry point."""

from fastapi import FastAPI

from brainybot.auth.routes import router as auth_router
from brainybot.chat.routes import router as chat_router
from brainybot.config.cors import SecurityHeadersMiddleware, configure_cors
from brainybot.config.log_config import configure_logging
from brainybot.config.settings import get_settings
from brainybot.conversations.routes import router as conversations_router
from brainybot.messages.routes import router as messages_router
from brainybot.middleware.error_handler import register_error_handlers
from brainybot.middleware.request_id import RequestIDMiddleware
from brainybot.profiles.routes import router as profiles_router
from brainybot.services import Services, build_services


def create_app(services: Services) -> FastAPI:
    """Build the application around explicitly constructed services."""
    configure_logging(services.settings.LOG_LEVEL)

    app = FastAPI(
        title="BrainyBot Tutor API",
        description=(
            "AI study companion: subject-aware tutoring chat with streaming replies.\n\n"
            "## Features\n"
            "- Supabase authentication and per-user conversations\n"
            "- Subject-specific tutor prompts adapted to the student's age and grade\n"
            "- Real-time token-by-token streaming via SSE\n"
            "- Text, voice and image questions\n\n"
            "## Authentication\n"
            "All endpoints (except `/health`, `/docs`, `/api/v1/auth/*`) require "
            "`Authorization: Bearer <supabase access token>`."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "Health", "description": "Health check endpoints"},
            {"name": "Auth", "description": "Authentication: register, login, token refresh"},
            {"name": "Profile", "description": "Student age and education level"},
            {"name": "Chat", "description": "Streaming completion proxy and speech transcription"},
            {"name": "Conversations", "description": "CRUD operations for conversations"},
            {"name": "Messages", "description": "List messages, send with streamed reply"},
        ],
    )
    app.state.services = services

    # --- Middleware (last added runs outermost) ---
    configure_cors(app, services.settings.allowed_origins_list)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # --- Error handlers ---
    register_error_handlers(app)

    # --- Routes ---
    app.include_router(auth_router)
    app.include_router(profiles_router)
    app.include_router(chat_router)
    app.include_router(conversations_router)
    app.include_router(messages_router)

    @app.get("/health", tags=["Health"], summary="Health check", description="Returns OK if the service is running.")
    async def health_check():
        return {"status": "ok"}

    return app


def build_app() -> FastAPI:
    """Factory for `uvicorn brainybot.main:build_app --factory`."""
    return create_app(build_services(get_settings()))
