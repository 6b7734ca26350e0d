"""
Analysis Gateway.
Validates an AnalysisRequest, relays prompt + photos to Gemini in a single call
and normalizes whatever comes back into a Report.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from tenantshield.config import Settings
from tenantshield.schemas.analysis import AnalysisRequest, ImagePart, Report
from tenantshield.services.analysis.normalize import (
    block_reason,
    derive_summary,
    extract_text,
    finish_reason,
    normalize_report,
    parse_model_json,
)
from tenantshield.services.analysis.prompt import build_prompt
from tenantshield.services.errors import GatewayError
from tenantshield.services.external.gemini import GeminiAPIError, GeminiClient, inline_image_part
from tenantshield.services.intake import DEFAULT_MIME_TYPE, split_data_uri

logger = logging.getLogger(__name__)

MISSING_KEY_ERROR = "Missing Gemini API key on server. Please set GEMINI_API_KEY environment variable."
NO_IMAGES_ERROR = "No images were provided for analysis"
NO_VALID_IMAGES_ERROR = "No valid images were provided"
TOO_LARGE_ERROR = "Images too large. Please reduce image size or quantity."
SAFETY_BLOCK_ERROR = "The image was blocked by safety filters. Please try a different image."
NO_ANALYSIS_ERROR = "Gemini did not return any analysis. Please try again."
UNREADABLE_RESPONSE_ERROR = "Gemini returned an unreadable response"
REQUEST_FAILED_ERROR = "Failed to analyze the image(s)"


def serialized_images_size(images: List[Optional[ImagePart]]) -> int:
    """
    Character length of the compact JSON encoding of the images array.
    Approximates payload bytes; multi-byte text counts as one char.
    """
    encoded = [img.model_dump(by_alias=True, exclude_none=True) if img is not None else None for img in images]
    return len(json.dumps(encoded, separators=(",", ":"), ensure_ascii=False))


def to_image_parts(images: List[Optional[ImagePart]]) -> List[Dict[str, Any]]:
    """Inline-data parts for every image that carries data; the rest are dropped."""
    parts = []
    for img in images:
        if img is None or not img.data:
            continue
        uri_mime, data = split_data_uri(img.data)
        if not data:
            continue
        mime_type = img.mime_type or uri_mime or DEFAULT_MIME_TYPE
        parts.append(inline_image_part(data, mime_type))
    return parts


class AnalysisGateway:
    """Turns one AnalysisRequest into one Report (or a GatewayError)."""

    def __init__(self, settings: Settings, client: Optional[GeminiClient] = None):
        self.settings = settings
        self.client = client or GeminiClient(settings)

    def ensure_configured(self) -> None:
        """Misconfiguration outranks any problem with the request itself."""
        if not self.client.enabled:
            logger.error("Missing GEMINI_API_KEY environment variable")
            raise GatewayError(500, MISSING_KEY_ERROR)

    def validate(self, request: AnalysisRequest) -> List[Dict[str, Any]]:
        """Run every pre-flight check; return the image parts to send."""
        self.ensure_configured()

        if not request.images:
            raise GatewayError(400, NO_IMAGES_ERROR)

        size = serialized_images_size(request.images)
        if size > self.settings.max_image_payload_chars:
            logger.warning(f"Rejecting analysis request: images payload {size} chars")
            raise GatewayError(413, TOO_LARGE_ERROR)

        image_parts = to_image_parts(request.images)
        if not image_parts:
            raise GatewayError(400, NO_VALID_IMAGES_ERROR)
        if len(image_parts) < len(request.images):
            logger.info(f"Dropped {len(request.images) - len(image_parts)} image(s) without data")
        return image_parts

    def analyze(self, request: AnalysisRequest) -> Tuple[str, Report]:
        image_parts = self.validate(request)
        prompt = build_prompt(request.location or "", request.details or "")

        try:
            data = self.client.generate_content(prompt, image_parts)
        except GeminiAPIError as e:
            raise GatewayError(502, e.message, e.body)
        except ValueError as e:
            # 2xx with a non-JSON body
            logger.error(f"Gemini response was not JSON: {e}")
            raise GatewayError(502, UNREADABLE_RESPONSE_ERROR, str(e))
        except requests.RequestException as e:
            logger.error(f"Gemini analysis failed: {e}")
            raise GatewayError(500, REQUEST_FAILED_ERROR, str(e))

        return self.build_report(data)

    def build_report(self, data: Any) -> Tuple[str, Report]:
        """Normalize a decoded generateContent response."""
        raw_content = extract_text(data)

        parsed = parse_model_json(raw_content)
        if raw_content and parsed is None:
            logger.error("Gemini JSON parse error; falling back to raw text")
            logger.error("Raw content: %s", raw_content[:500])

        summary = derive_summary(parsed, raw_content, data)
        if not summary:
            if finish_reason(data) == "SAFETY" or block_reason(data):
                logger.warning("Gemini blocked the request on safety grounds")
                raise GatewayError(400, SAFETY_BLOCK_ERROR)
            raise GatewayError(500, NO_ANALYSIS_ERROR)

        report = normalize_report(parsed, raw_content, summary=summary)
        logger.info("Analysis complete")
        return summary, report
