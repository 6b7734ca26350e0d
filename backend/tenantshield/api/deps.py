from fastapi import Request

from tenantshield.config import Settings
from tenantshield.services.analysis.gateway import AnalysisGateway
from tenantshield.services.places import PlacesGateway


def get_app_settings(request: Request) -> Settings:
    """Settings the app was built with."""
    return request.app.state.settings


def get_analysis_gateway(request: Request) -> AnalysisGateway:
    return request.app.state.analysis_gateway


def get_places_gateway(request: Request) -> PlacesGateway:
    return request.app.state.places_gateway
