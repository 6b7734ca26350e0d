from tenantshield.services.analysis.gateway import AnalysisGateway
from tenantshield.services.analysis.normalize import normalize_report, parse_model_json
from tenantshield.services.analysis.prompt import build_prompt

__all__ = [
    "AnalysisGateway",
    "normalize_report",
    "parse_model_json",
    "build_prompt",
]
