import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from tenantshield.api.errors import validation_details
from tenantshield.api.deps import get_places_gateway
from tenantshield.schemas.clinics import ClinicsRequest, ClinicsResponse
from tenantshield.services.errors import GatewayError
from tenantshield.services.places import PlacesGateway

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_COORDINATES_ERROR = "Request body must include numeric lat and lng"


@router.post("/clinics", response_model=ClinicsResponse)
def find_clinics(
    payload: Optional[Dict[str, Any]] = Body(None),
    gateway: PlacesGateway = Depends(get_places_gateway),
):
    """Nearby legal aid and government offices, closest first."""
    try:
        gateway.ensure_configured()
    except GatewayError as e:
        return JSONResponse(status_code=e.status_code, content={"ok": False, **e.to_dict()})

    try:
        request = ClinicsRequest.model_validate(payload or {})
    except ValidationError as e:
        return JSONResponse(
            status_code=400,
            content={"ok": False, "error": INVALID_COORDINATES_ERROR, "details": validation_details(e.errors())},
        )

    try:
        clinics = gateway.find_clinics(request)
    except GatewayError as e:
        return JSONResponse(status_code=e.status_code, content={"ok": False, **e.to_dict()})

    return ClinicsResponse(ok=True, clinics=clinics)
