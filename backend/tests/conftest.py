"""Pytest fixtures: apps built from explicit Settings, fake upstream responses."""

import json
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from tenantshield.config import DEFAULT_GEMINI_MODEL, Settings
from tenantshield.main import create_app


def make_settings(**overrides: Any) -> Settings:
    """Settings that ignore the real environment's keys unless overridden."""
    values = {
        "gemini_api_key": "test-gemini-key",
        "google_places_api_key": "test-places-key",
        "gemini_model": DEFAULT_GEMINI_MODEL,
        "client_url": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def fake_response(status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> MagicMock:
    """Stand-in for requests.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.text = text if text is not None else json.dumps(payload)
    if payload is not None:
        resp.json.return_value = payload
    else:
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    return resp


def gemini_payload(*texts: str, finish_reason: str = "STOP") -> dict:
    """Minimal generateContent reply with one candidate."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": t} for t in texts]},
                "finishReason": finish_reason,
            }
        ]
    }


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def client(settings: Settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture
def make_client():
    """Build a TestClient around custom settings."""

    def _make(**overrides: Any) -> TestClient:
        return TestClient(create_app(make_settings(**overrides)))

    return _make
