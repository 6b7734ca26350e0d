from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Optional, List


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ImagePart(CamelModel):
    """One encoded photo. `data` is raw base64 or a full data URI."""
    data: Optional[str] = None
    mime_type: Optional[str] = None


class AnalysisRequest(BaseModel):
    images: List[Optional[ImagePart]] = []
    details: Optional[str] = ""
    location: Optional[str] = ""

    @field_validator("images", mode="before")
    @classmethod
    def blank_out_non_objects(cls, v: Any) -> Any:
        """Entries that are not objects (null, numbers, strings) carry no image; keep the slot empty."""
        if isinstance(v, list):
            return [item if isinstance(item, (dict, ImagePart)) else None for item in v]
        return v


class ClinicLink(BaseModel):
    name: str = ""
    link: str = ""


class Report(CamelModel):
    """Canonical report built from whatever shape the model returned."""
    summary: str = ""
    rights_summary: str = ""
    applicable_laws: List[str] = []
    actions: List[str] = []
    landlord_message: str = ""
    documentation: str = ""
    evidence_checklist: List[str] = []
    clinic_links: List[ClinicLink] = []
    raw: str = ""  # Unparsed model text, kept for diagnostics


class AnalyzeResponse(BaseModel):
    summary: str
    report: Report
