"""
Calibration Routes

Endpoints for evaluating candidate parameter sets.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from freespeed.calibration.service import CalibrationService
from freespeed.errors import CalibrationError, InvalidRequestError
from freespeed.schemas.calibration import CalibrationRequest, CalibrationResult

logger = logging.getLogger(__name__)

router = APIRouter()


def get_service(request: Request) -> CalibrationService:
    """Calibration service attached to the running app."""
    return request.app.state.service


def _run(fn, payload: CalibrationRequest) -> CalibrationResult:
    try:
        return fn(payload)
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CalibrationError as e:
        logger.error(f"Evaluation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/", response_model=CalibrationResult)
def evaluate(
    payload: CalibrationRequest,
    service: CalibrationService = Depends(get_service)
):
    """
    Evaluate a parameter set.

    Applies the request to the network and returns error metrics plus
    per-link diagnostics. Nothing is persisted.
    """
    return _run(service.evaluate, payload)


@router.post("/save", response_model=CalibrationResult)
def evaluate_and_save(
    payload: CalibrationRequest,
    service: CalibrationService = Depends(get_service)
):
    """
    Evaluate a parameter set and persist it.

    Writes the parameters, the evaluation CSV and the mutated network.
    """
    return _run(service.evaluate_and_save, payload)
