from typing import Any, Dict

from fastapi import APIRouter, Depends

from tenantshield.api.deps import get_app_settings
from tenantshield.config import Settings

router = APIRouter()


@router.get("/")
def root() -> Dict[str, Any]:
    """Liveness probe."""
    return {"status": "ok", "message": "TenantShield API is running"}


@router.get("/api")
def api_root() -> Dict[str, Any]:
    return {"message": "Welcome to the API"}


@router.get("/api/health")
def health_check(settings: Settings = Depends(get_app_settings)) -> Dict[str, Any]:
    """Report which upstream keys are configured (never their values) and the active model."""
    return {
        "status": "ok",
        "hasGeminiKey": settings.has_gemini_key,
        "hasPlacesKey": settings.has_places_key,
        "model": settings.gemini_model,
    }
