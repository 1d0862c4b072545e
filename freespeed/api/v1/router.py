"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from freespeed.api.v1.routes import calibration

api_router = APIRouter()

api_router.include_router(calibration.router, tags=["Calibration"])
