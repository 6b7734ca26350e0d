"""
Report normalization.

The model's JSON shape is not guaranteed: field names drift between snake_case,
camelCase and shorter synonyms, and values sometimes arrive as the wrong type.
Each report field therefore has an ordered list of keys; the first key holding a
non-empty value wins, otherwise the field gets its typed default.
"""

import json
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from tenantshield.schemas.analysis import ClinicLink, Report

logger = logging.getLogger(__name__)

_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


# ---------- Upstream response helpers ----------

def _first_candidate(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        return {}
    candidates = payload.get("candidates") or []
    if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict):
        return candidates[0]
    return {}


def extract_text(payload: Any, sep: str = "") -> str:
    """Join the text of every non-empty part of the first candidate."""
    content = _first_candidate(payload).get("content") or {}
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        parts = []
    texts = []
    for part in parts:
        text = part.get("text") if isinstance(part, dict) else None
        if text:
            texts.append(str(text))
    return sep.join(texts).strip()


def finish_reason(payload: Any) -> Optional[str]:
    return _first_candidate(payload).get("finishReason")


def block_reason(payload: Any) -> Optional[str]:
    """Prompt-level block (no candidates at all), e.g. "SAFETY"."""
    if not isinstance(payload, dict):
        return None
    feedback = payload.get("promptFeedback") or {}
    return feedback.get("blockReason") if isinstance(feedback, dict) else None


def parse_model_json(text: str) -> Optional[Dict[str, Any]]:
    """
    Parse the model's reply into a dict. Handles markdown code fences,
    trailing commas and a one-element top-level list. Returns None when
    nothing usable is found.
    """
    if not text or not text.strip():
        return None
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = re.sub(r"^```(?:json)?\s*\n?", "", cleaned)
        cleaned = re.sub(r"```\s*$", "", cleaned)
        cleaned = cleaned.strip()

    candidates = [cleaned]
    start = cleaned.find("{")
    end = cleaned.rfind("}") + 1
    if start >= 0 and end > start:
        raw = cleaned[start:end]
        candidates.extend([raw, re.sub(r",\s*([}\]])", r"\1", raw)])

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, list) and parsed and isinstance(parsed[0], dict):
            parsed = parsed[0]
        if isinstance(parsed, dict):
            return parsed
    return None


# ---------- Value coercion ----------

def _as_text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        return "\n".join(t for t in (_as_text(v) for v in value) if t)
    if isinstance(value, dict):
        return "; ".join(
            f"{k}: {t}" for k, t in ((k, _as_text(v)) for k, v in value.items()) if t
        )
    return str(value).strip()


def _as_text_list(value: Any) -> List[str]:
    if value is None:
        return []
    items = value if isinstance(value, list) else [value]
    return [t for t in (_as_text(item) for item in items) if t]


def _as_clinic_links(value: Any) -> List[ClinicLink]:
    if value is None:
        return []
    items = value if isinstance(value, list) else [value]
    links = []
    for item in items:
        if isinstance(item, dict):
            name = _as_text(item.get("name") or item.get("title"))
            link = _as_text(item.get("link") or item.get("url"))
        elif isinstance(item, str) and item.strip():
            text = item.strip()
            name, link = ("", text) if _URL_RE.match(text) else (text, "")
        else:
            continue
        if name or link:
            links.append(ClinicLink(name=name, link=link))
    return links


# ---------- Extraction rules ----------

# (report field, keys tried in order, coercion)
FIELD_RULES: Sequence[Tuple[str, Sequence[str], Callable[[Any], Any]]] = (
    ("rights_summary", ("rights_summary", "rightsSummary"), _as_text),
    ("applicable_laws", ("applicable_laws", "applicableLaws", "laws"), _as_text_list),
    ("actions", ("actions", "steps"), _as_text_list),
    ("landlord_message", ("landlord_message", "landlordMessage"), _as_text),
    ("documentation", ("documentation",), _as_text),
    ("evidence_checklist", ("evidence_checklist", "evidenceChecklist", "checklist"), _as_text_list),
    ("clinic_links", ("clinic_links", "clinicLinks", "clinics"), _as_clinic_links),
)


def extract_field(parsed: Optional[Dict[str, Any]], keys: Sequence[str], coerce: Callable[[Any], Any]) -> Any:
    """First key whose coerced value is non-empty; else the coerced default."""
    for key in keys:
        if parsed and key in parsed:
            value = coerce(parsed[key])
            if value:
                return value
    return coerce(None)


def derive_summary(parsed: Optional[Dict[str, Any]], raw: str, payload: Any = None) -> str:
    """parsed summary -> raw text -> newline-joined parts -> empty."""
    summary = extract_field(parsed, ("summary",), _as_text)
    if summary:
        return summary
    if raw and raw.strip():
        return raw.strip()
    return extract_text(payload, sep="\n")


def normalize_report(parsed: Optional[Dict[str, Any]], raw: str, summary: Optional[str] = None) -> Report:
    """Map an untrusted model reply onto the canonical Report."""
    if summary is None:
        summary = derive_summary(parsed, raw)
    fields = {name: extract_field(parsed, keys, coerce) for name, keys, coerce in FIELD_RULES}
    return Report(summary=summary, raw=raw or "", **fields)
