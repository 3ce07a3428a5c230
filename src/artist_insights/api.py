"""FastAPI web server for the artist insights dashboard."""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from artist_insights.config import configure_logging
from artist_insights.dependencies import get_settings
from artist_insights.errors import ConfigurationError, TokenExpiredError, UpstreamError
from artist_insights.routes import auth_router, dashboard_router, export_router, platforms_router


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Artist Insights")

    # Enable CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TokenExpiredError)
    def _token_expired(request: Request, exc: TokenExpiredError):
        return JSONResponse({"detail": str(exc)}, status_code=401)

    @app.exception_handler(UpstreamError)
    def _upstream_failed(request: Request, exc: UpstreamError):
        return JSONResponse({"detail": f"{exc.platform} request failed"}, status_code=502)

    @app.exception_handler(ConfigurationError)
    def _misconfigured(request: Request, exc: ConfigurationError):
        return JSONResponse({"detail": str(exc)}, status_code=500)

    @app.get("/")
    def index():
        return {
            "message": "Artist Insights API is running. Connect Spotify via /api/auth/spotify.",
            "featured_artist": settings.featured_artist,
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(platforms_router)
    app.include_router(export_router)
    return app


app = create_app()
