"""Static endpoints, health reporting and settings wiring."""

from tenantshield.config import DEFAULT_GEMINI_MODEL
from tests.conftest import make_settings


def test_root_liveness(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "message": "TenantShield API is running"}


def test_api_welcome(client):
    assert client.get("/api").json() == {"message": "Welcome to the API"}


def test_health_reports_keys_and_model(client):
    assert client.get("/api/health").json() == {
        "status": "ok",
        "hasGeminiKey": True,
        "hasPlacesKey": True,
        "model": DEFAULT_GEMINI_MODEL,
    }


def test_health_reports_missing_keys(make_client):
    client = make_client(gemini_api_key=None, google_places_api_key="", gemini_model="gemini-1.5-pro")
    body = client.get("/api/health").json()
    assert body["hasGeminiKey"] is False
    assert body["hasPlacesKey"] is False
    assert body["model"] == "gemini-1.5-pro"


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-flash")
    monkeypatch.setenv("PORT", "8080")
    from tenantshield.config import Settings

    settings = Settings(_env_file=None)
    assert settings.gemini_api_key == "env-key"
    assert settings.gemini_model == "gemini-2.5-flash"
    assert settings.port == 8080
    assert settings.max_image_payload_chars == 12_000_000


def test_cors_allows_configured_client(make_client):
    client = make_client(client_url="https://tenantshield.example")
    resp = client.options(
        "/api/analyze",
        headers={"Origin": "https://tenantshield.example", "Access-Control-Request-Method": "POST"},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "https://tenantshield.example"


def test_cors_echoes_any_origin_when_unconfigured(make_client):
    client = make_client(client_url=None)
    resp = client.get("/", headers={"Origin": "https://preview.example"})
    assert resp.headers["access-control-allow-origin"] == "https://preview.example"
    assert resp.headers["access-control-allow-credentials"] == "true"


def test_make_settings_ignores_env_keys(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    assert make_settings(gemini_api_key=None).gemini_api_key is None
