"""
Places Gateway.
Looks up legal clinics near a coordinate and reshapes the Places reply,
which can arrive in several shapes, into a flat clinic list.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from tenantshield.config import Settings
from tenantshield.schemas.clinics import Clinic, ClinicLocation, ClinicsRequest
from tenantshield.services.errors import GatewayError
from tenantshield.services.external.google_places import GooglePlacesClient, PlacesAPIError

logger = logging.getLogger(__name__)

MAX_CLINICS = 10
MISSING_KEY_ERROR = "Missing GOOGLE_PLACES_API_KEY on server"
UPSTREAM_ERROR = "Places API error"
INTERNAL_ERROR = "Internal server error"

# Coordinate encodings, tried in order: (container key, lat path, lng path)
COORDINATE_RULES = (
    ("location", ("latitude",), ("longitude",)),
    ("geometry", ("lat",), ("lng",)),
    ("location", ("latLng", "latitude"), ("latLng", "longitude")),
    ("location", ("lat",), ("lng",)),
    ("geometry", ("location", "lat"), ("location", "lng")),
)


def _dig(obj: Any, path: Tuple[str, ...]) -> Any:
    for key in path:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def resolve_coordinates(place: Dict[str, Any]) -> Optional[ClinicLocation]:
    """First rule that yields both a latitude and a longitude."""
    for container, lat_path, lng_path in COORDINATE_RULES:
        source = place.get(container)
        lat = _as_number(_dig(source, lat_path))
        lng = _as_number(_dig(source, lng_path))
        if lat is not None and lng is not None:
            return ClinicLocation(latitude=lat, longitude=lng)
    return None


def _display_name(place: Dict[str, Any]) -> str:
    name = place.get("displayName")
    if isinstance(name, dict):
        name = name.get("text")
    if not name:
        name = place.get("name")
    return name if isinstance(name, str) else ""


def to_clinic(entry: Any) -> Optional[Clinic]:
    """One upstream entry (with or without a "place" wrapper) -> Clinic, or None."""
    if not isinstance(entry, dict):
        return None
    place = entry.get("place") if isinstance(entry.get("place"), dict) else entry
    location = resolve_coordinates(place)
    if location is None:
        return None
    address = place.get("formattedAddress") or place.get("formatted_address") or ""
    return Clinic(
        display_name=_display_name(place),
        formatted_address=address if isinstance(address, str) else "",
        location=location,
        rating=_as_number(place.get("rating")),
    )


def normalize_clinics(payload: Any, limit: int = MAX_CLINICS) -> List[Clinic]:
    """Reshape a searchNearby reply; entries without coordinates are dropped."""
    if not isinstance(payload, dict):
        return []
    entries = payload.get("results") or payload.get("places") or []
    if not isinstance(entries, list):
        logger.warning(f"Unexpected Places container: {type(entries).__name__}")
        return []
    clinics = []
    for entry in entries:
        clinic = to_clinic(entry)
        if clinic is None:
            logger.debug(f"Dropping place without coordinates: {entry!r:.200}")
            continue
        clinics.append(clinic)
        if len(clinics) >= limit:
            break
    return clinics


class PlacesGateway:
    """Turns one ClinicsRequest into at most ten clinics (or a GatewayError)."""

    def __init__(self, settings: Settings, client: Optional[GooglePlacesClient] = None):
        self.settings = settings
        self.client = client or GooglePlacesClient(settings)

    def ensure_configured(self) -> None:
        if not self.client.enabled:
            logger.error("Missing GOOGLE_PLACES_API_KEY environment variable")
            raise GatewayError(500, MISSING_KEY_ERROR)

    def find_clinics(self, request: ClinicsRequest) -> List[Clinic]:
        self.ensure_configured()

        try:
            data = self.client.search_nearby(request.lat, request.lng)
        except PlacesAPIError as e:
            raise GatewayError(502, UPSTREAM_ERROR, e.body)
        except ValueError as e:
            logger.error(f"Places response was not JSON: {e}")
            raise GatewayError(502, UPSTREAM_ERROR, str(e))
        except requests.RequestException as e:
            logger.error(f"Error calling Places searchNearby: {e}")
            raise GatewayError(500, INTERNAL_ERROR, str(e))

        clinics = normalize_clinics(data, limit=min(MAX_CLINICS, self.settings.places_max_results))
        logger.info(f"Found {len(clinics)} clinic(s)")
        return clinics
