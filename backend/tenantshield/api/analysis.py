import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from tenantshield.api.deps import get_analysis_gateway
from tenantshield.api.errors import validation_details
from tenantshield.schemas.analysis import AnalysisRequest, AnalyzeResponse
from tenantshield.services.analysis.gateway import AnalysisGateway
from tenantshield.services.errors import GatewayError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(
    payload: Optional[Dict[str, Any]] = Body(None),
    gateway: AnalysisGateway = Depends(get_analysis_gateway),
):
    """Analyze tenant photos and return a tenant-rights report."""
    logger.info("Received analyze request")

    try:
        gateway.ensure_configured()
    except GatewayError as e:
        return JSONResponse(status_code=e.status_code, content=e.to_dict())

    try:
        request = AnalysisRequest.model_validate(payload or {})
    except ValidationError as e:
        logger.info(f"Invalid analyze request: {e.error_count()} error(s)")
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid analysis request", "details": validation_details(e.errors())},
        )

    try:
        summary, report = gateway.analyze(request)
    except GatewayError as e:
        return JSONResponse(status_code=e.status_code, content=e.to_dict())

    return AnalyzeResponse(summary=summary, report=report)
