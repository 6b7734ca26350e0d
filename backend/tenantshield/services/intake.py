"""
Photo intake and encoding.
Turns local image files into base64 ImageParts and assembles an AnalysisRequest,
applying the same "can run scan" rule as the web form.
"""

import base64
import logging
import mimetypes
import re
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from tenantshield.schemas.analysis import AnalysisRequest, ImagePart

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[^,]*)?;base64,(?P<data>.*)$", re.DOTALL)


def encode_image_bytes(data: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> ImagePart:
    return ImagePart(data=base64.b64encode(data).decode("ascii"), mime_type=mime_type)


def encode_image_file(path: Union[str, Path]) -> ImagePart:
    """Read an image from disk. Non-image files raise ValueError."""
    path = Path(path)
    mime_type, _ = mimetypes.guess_type(path.name)
    if not mime_type or not mime_type.startswith("image/"):
        raise ValueError(f"Not an image file: {path}")
    return encode_image_bytes(path.read_bytes(), mime_type)


def to_data_uri(part: ImagePart) -> str:
    return f"data:{part.mime_type or DEFAULT_MIME_TYPE};base64,{part.data or ''}"


def split_data_uri(value: str) -> Tuple[Optional[str], str]:
    """
    Split "data:image/png;base64,AAAA" into ("image/png", "AAAA").
    Plain base64 comes back unchanged with no mime type.
    """
    match = _DATA_URI_RE.match(value.strip()) if value else None
    if not match:
        return None, value
    return match.group("mime"), match.group("data")


def build_analysis_request(
    paths: Iterable[Union[str, Path]],
    details: str,
    location: str,
) -> AnalysisRequest:
    """
    Encode photos and wrap them with the tenant's notes.
    Requires at least one photo, non-empty details and a location.
    """
    images = [encode_image_file(p) for p in paths]
    if not images:
        raise ValueError("Please upload at least one photo")
    if not (details or "").strip():
        raise ValueError("Please describe the issue")
    if not (location or "").strip():
        raise ValueError("Please provide a location")
    logger.debug(f"Encoded {len(images)} image(s) for analysis")
    return AnalysisRequest(images=images, details=details.strip(), location=location.strip())
