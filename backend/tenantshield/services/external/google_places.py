"""
Google Places (New) nearby-search client.
Used to find legal aid offices and local government offices near the tenant.
"""

import logging
from typing import Any, Dict

import requests

from tenantshield.config import Settings

logger = logging.getLogger(__name__)

FIELD_MASK = "places.displayName,places.formattedAddress,places.location,places.rating"
INCLUDED_TYPES = ["lawyer", "local_government_office"]


class PlacesAPIError(Exception):
    """Non-2xx reply from the Places endpoint."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Places API error {status_code}")
        self.status_code = status_code
        self.body = body


class GooglePlacesClient:
    """Client for Places searchNearby."""

    def __init__(self, settings: Settings):
        self.api_key = settings.google_places_api_key
        self.url = settings.places_search_url
        self.radius = settings.places_radius_meters
        self.max_results = settings.places_max_results
        self.timeout = settings.places_timeout_seconds
        self.enabled = bool(self.api_key)

    def build_body(self, lat: float, lng: float) -> Dict[str, Any]:
        return {
            "includedTypes": INCLUDED_TYPES,
            "locationRestriction": {
                "circle": {
                    "center": {"latitude": lat, "longitude": lng},
                    "radius": self.radius,
                },
            },
            "rankPreference": "DISTANCE",
            "maxResultCount": self.max_results,
        }

    def search_nearby(self, lat: float, lng: float) -> Dict[str, Any]:
        """
        One nearby search around (lat, lng), ranked by distance.

        Raises:
            PlacesAPIError: upstream answered with a non-2xx status.
            requests.RequestException: the endpoint could not be reached.
        """
        logger.info(f"Places searchNearby at ({lat}, {lng}) radius={self.radius}")
        resp = requests.post(
            self.url,
            params={"key": self.api_key},
            headers={
                "Content-Type": "application/json",
                "X-Goog-FieldMask": FIELD_MASK,
            },
            json=self.build_body(lat, lng),
            timeout=self.timeout,
        )
        if not resp.ok:
            logger.error("Places searchNearby error: %s %s", resp.status_code, resp.text)
            raise PlacesAPIError(resp.status_code, resp.text)
        return resp.json()
