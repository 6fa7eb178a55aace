"""
PlaceMate FastAPI Application

Main entry point for the PlaceMate API.
"""

from placemate.config import Settings
from placemate.logging_config import configure_logging
from placemate.main import create_app


settings = Settings()
configure_logging(settings.LOG_LEVEL)

app = create_app(settings)


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
