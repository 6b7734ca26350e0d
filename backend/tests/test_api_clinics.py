"""POST /clinics: coordinate validation, upstream handling, response shape."""

from unittest.mock import patch

import pytest
import requests

from tests.conftest import fake_response

PLACES_POST = "tenantshield.services.external.google_places.requests.post"


def _place(i: int) -> dict:
    return {
        "displayName": {"text": f"Legal Aid {i}", "languageCode": "en"},
        "formattedAddress": f"{i} Main St",
        "location": {"latitude": 37.5, "longitude": -122.0 + i},
        "rating": 4.5,
    }


def test_clinics_success(client):
    with patch(PLACES_POST, return_value=fake_response(200, {"places": [_place(1)]})) as post:
        resp = client.post("/clinics", json={"lat": 37.8, "lng": -122.27})

    assert resp.status_code == 200
    assert resp.json() == {
        "ok": True,
        "clinics": [
            {
                "displayName": "Legal Aid 1",
                "formattedAddress": "1 Main St",
                "location": {"latitude": 37.5, "longitude": -121.0},
                "rating": 4.5,
            }
        ],
    }
    assert post.call_count == 1


def test_clinics_request_shape(client):
    with patch(PLACES_POST, return_value=fake_response(200, {"places": []})) as post:
        client.post("/clinics", json={"lat": 37.8, "lng": -122})

    args, kwargs = post.call_args
    assert args[0] == "https://places.googleapis.com/v1/places:searchNearby"
    assert kwargs["params"] == {"key": "test-places-key"}
    assert kwargs["headers"]["X-Goog-FieldMask"] == (
        "places.displayName,places.formattedAddress,places.location,places.rating"
    )
    body = kwargs["json"]
    assert body["includedTypes"] == ["lawyer", "local_government_office"]
    assert body["locationRestriction"]["circle"] == {
        "center": {"latitude": 37.8, "longitude": -122},
        "radius": 5000,
    }
    assert body["rankPreference"] == "DISTANCE"
    assert kwargs["timeout"] == 10


def test_clinics_truncates_to_ten(client):
    with patch(PLACES_POST, return_value=fake_response(200, {"places": [_place(i) for i in range(15)]})):
        resp = client.post("/clinics", json={"lat": 37.8, "lng": -122.27})
    assert resp.status_code == 200
    clinics = resp.json()["clinics"]
    assert len(clinics) == 10
    assert clinics[0]["displayName"] == "Legal Aid 0"
    assert clinics[-1]["displayName"] == "Legal Aid 9"


def test_clinics_with_no_results(client):
    with patch(PLACES_POST, return_value=fake_response(200, {})):
        resp = client.post("/clinics", json={"lat": 0, "lng": 0})
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "clinics": []}


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"lat": "37.8", "lng": -122.27},
        {"lat": 37.8},
        {"lat": True, "lng": -122.27},
        {"lat": None, "lng": None},
        {"lat": 91, "lng": 0},
        {"lat": 0, "lng": 181},
    ],
)
def test_clinics_rejects_non_numeric_coordinates(client, body):
    with patch(PLACES_POST) as post:
        resp = client.post("/clinics", json=body)
    assert resp.status_code == 400
    assert resp.json()["ok"] is False
    assert resp.json()["error"] == "Request body must include numeric lat and lng"
    post.assert_not_called()


def test_clinics_non_object_body_returns_400(client):
    resp = client.post("/clinics", json=[1, 2])
    assert resp.status_code == 400
    assert resp.json()["ok"] is False


def test_clinics_missing_key_returns_500_before_network(make_client):
    client = make_client(google_places_api_key=None)
    with patch(PLACES_POST) as post:
        resp = client.post("/clinics", json={"lat": 37.8, "lng": -122.27})
    assert resp.status_code == 500
    assert resp.json() == {"ok": False, "error": "Missing GOOGLE_PLACES_API_KEY on server"}
    post.assert_not_called()
    assert client.get("/api/health").json()["hasPlacesKey"] is False


def test_clinics_upstream_error_returns_502_with_details(client):
    error_body = '{"error": {"code": 403, "message": "Places API (New) has not been used"}}'
    with patch(PLACES_POST, return_value=fake_response(403, text=error_body)):
        resp = client.post("/clinics", json={"lat": 37.8, "lng": -122.27})
    assert resp.status_code == 502
    assert resp.json() == {"ok": False, "error": "Places API error", "details": error_body}


def test_clinics_network_failure_returns_500(client):
    with patch(PLACES_POST, side_effect=requests.Timeout("read timed out")):
        resp = client.post("/clinics", json={"lat": 37.8, "lng": -122.27})
    assert resp.status_code == 500
    assert resp.json() == {"ok": False, "error": "Internal server error", "details": "read timed out"}


@pytest.mark.parametrize("body", [{"lat": "x", "lng": 1}, {}])
def test_clinics_missing_key_outranks_invalid_body(make_client, body):
    client = make_client(google_places_api_key=None)
    with patch(PLACES_POST) as post:
        resp = client.post("/clinics", json=body)
    assert resp.status_code == 500
    assert resp.json() == {"ok": False, "error": "Missing GOOGLE_PLACES_API_KEY on server"}
    post.assert_not_called()


@pytest.mark.parametrize("payload", [{"places": 5}, {"results": {"a": 1}}, {"places": "abc"}])
def test_clinics_unexpected_container_yields_empty_list(client, payload):
    with patch(PLACES_POST, return_value=fake_response(200, payload)):
        resp = client.post("/clinics", json={"lat": 37.8, "lng": -122.27})
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "clinics": []}
