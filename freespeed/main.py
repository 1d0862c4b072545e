"""
Free Speed Calibration API

FastAPI application serving evaluations to an external tuner.
"""

import logging
import sys

from fastapi import FastAPI

from freespeed import __version__
from freespeed.api.v1.router import api_router
from freespeed.calibration.service import CalibrationService
from freespeed.config import settings


def setup_logging(level: str = settings.log_level) -> None:
    """Configure root logging once for CLI and server."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )


def create_app(service: CalibrationService) -> FastAPI:
    """
    Create the interactive endpoint around a loaded service.

    The tuner posts to ``/`` (evaluate) and ``/save`` (evaluate and save).
    """
    app = FastAPI(
        title="Free Speed Calibration API",
        description="Evaluate speed factor parameters against measured travel times",
        version=__version__,
    )
    app.state.service = service

    # === Routes ===
    app.include_router(api_router)

    # === Health Check ===
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
