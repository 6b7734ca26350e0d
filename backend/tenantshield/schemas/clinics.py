from pydantic import BaseModel, Field
from typing import Optional, List

from tenantshield.schemas.analysis import CamelModel


class ClinicsRequest(BaseModel):
    """Search centre. Strings and booleans are rejected, not coerced."""
    lat: float = Field(strict=True, ge=-90, le=90)
    lng: float = Field(strict=True, ge=-180, le=180)


class ClinicLocation(BaseModel):
    latitude: float
    longitude: float


class Clinic(CamelModel):
    display_name: str = ""
    formatted_address: str = ""
    location: ClinicLocation
    rating: Optional[float] = None


class ClinicsResponse(BaseModel):
    ok: bool = True
    clinics: List[Clinic] = []
