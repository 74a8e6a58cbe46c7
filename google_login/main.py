"""
google-login - example web application

FastAPI application entry point. Run with:
    uvicorn google_login.main:app
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

# Import observability modules
from google_login.config import Settings, settings
from google_login.logging_config import configure_logging
from google_login.sentry_config import configure_sentry
from google_login.middleware.logging import LoggingMiddleware

# Import route modules
from google_login.routes.auth import router as auth_router


def create_app(config: Settings = None) -> FastAPI:
    """Build the FastAPI app around the given settings (defaults to the environment)."""
    config = config or settings

    app = FastAPI(
        title=config.APP_NAME,
        version=config.APP_VERSION,
        description="Sign in with Google over the OAuth 2.0 authorization code flow",
    )
    app.state.settings = config

    # Request logging
    app.add_middleware(LoggingMiddleware)

    # Session cookie carries the OAuth state between login and callback
    app.add_middleware(
        SessionMiddleware,
        secret_key=config.SESSION_SECRET_KEY,
        same_site="lax",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {
            "name": config.APP_NAME,
            "version": config.APP_VERSION,
            "status": "running"
        }

    @app.get("/health")
    async def health():
        """Detailed health check."""
        return {
            "status": "healthy",
            "google_configured": bool(
                config.GOOGLE_CLIENT_ID
                and config.GOOGLE_CLIENT_SECRET
                and config.GOOGLE_REDIRECT_URI
            ),
        }

    return app


# Initialize logging first
configure_logging()

# Initialize Sentry (if SENTRY_DSN is set)
configure_sentry()

app = create_app()
