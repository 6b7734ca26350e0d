"""
Gemini generateContent REST client.
Sends one text prompt plus inline base64 images and asks for JSON output.
"""

import json
import logging
from typing import Any, Dict, List

import requests

from tenantshield.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Gemini request failed"


class GeminiAPIError(Exception):
    """Non-2xx reply from the Gemini endpoint."""

    def __init__(self, status_code: int, message: str, body: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.body = body


def error_message_from_body(text: str) -> str:
    """
    Pull a readable message out of a Gemini error body.
    JSON bodies yield error.message; anything else yields the first 200 chars.
    """
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return (text or "")[:200]
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return DEFAULT_ERROR_MESSAGE


def inline_image_part(data: str, mime_type: str) -> Dict[str, Any]:
    return {"inline_data": {"mime_type": mime_type, "data": data}}


class GeminiClient:
    """Client for the Gemini multimodal generateContent endpoint."""

    def __init__(self, settings: Settings):
        self.api_key = settings.gemini_api_key
        self.model = settings.gemini_model
        self.api_base = settings.gemini_api_base.rstrip("/")
        self.temperature = settings.gemini_temperature
        self.timeout = settings.gemini_timeout_seconds
        self.enabled = bool(self.api_key)

    @property
    def url(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def build_body(self, prompt: str, image_parts: List[Dict[str, Any]]) -> Dict[str, Any]:
        return {
            "contents": [
                {
                    "parts": [{"text": prompt}, *image_parts],
                }
            ],
            "generationConfig": {
                "response_mime_type": "application/json",
                "temperature": self.temperature,
            },
        }

    def generate_content(self, prompt: str, image_parts: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Run one generateContent call and return the decoded response.

        Raises:
            GeminiAPIError: upstream answered with a non-2xx status.
            requests.RequestException: the endpoint could not be reached.
            ValueError: a 2xx reply whose body is not JSON.
        """
        logger.info(f"Calling Gemini API with model: {self.model} ({len(image_parts)} image(s))")
        resp = requests.post(
            self.url,
            params={"key": self.api_key},
            headers={"Content-Type": "application/json"},
            json=self.build_body(prompt, image_parts),
            timeout=self.timeout,
        )

        if not resp.ok:
            body = resp.text
            logger.error("Gemini API error: %s %s", resp.status_code, body)
            raise GeminiAPIError(resp.status_code, error_message_from_body(body), body)

        data = resp.json()
        logger.info("Gemini API response received")
        return data
