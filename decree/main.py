"""FastAPI main application."""

import logging
import sys

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from decree import __version__
from decree.api.routes import game_error_handler, router
from decree.config import settings
from decree.models.errors import GameError
from decree.services.match_service import MatchService

# Configure logging for the app (must be after imports but before app usage)
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stdout,
)
logging.getLogger("decree").setLevel(settings.log_level.upper())
logger = logging.getLogger(__name__)


def create_app(match_service: MatchService | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        match_service: Service holding the matches; a fresh one is created if omitted

    Returns:
        Configured application

    """
    app = FastAPI(
        title="Decree Duel API",
        description="Two-player trick-taking card game with bot AI",
        version=__version__,
    )
    app.state.match_service = match_service or MatchService()

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url, "http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(GameError, game_error_handler)
    app.include_router(router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    logger.debug("Application created (environment=%s)", settings.environment)
    return app


app = create_app()


def main() -> None:
    """Run the application."""
    uvicorn.run(
        "decree.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
