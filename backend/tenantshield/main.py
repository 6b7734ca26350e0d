import logging
import sys
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from tenantshield.config import Settings, get_settings
from tenantshield.api import analysis, clinics, health
from tenantshield.api.errors import request_validation_handler
from tenantshield.services.analysis.gateway import AnalysisGateway
from tenantshield.services.places import PlacesGateway

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Send all loggers to the console at the configured level."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("tenantshield").setLevel(level)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API around one Settings instance.
    Both gateways get the same settings object; handlers never read the environment.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="TenantShield",
        description="Tenant-rights photo analysis and legal clinic lookup",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.analysis_gateway = AnalysisGateway(settings)
    app.state.places_gateway = PlacesGateway(settings)

    # CORS: the configured client, or any origin (echoed back so credentials work)
    cors_origins = {"allow_origins": [settings.client_url]} if settings.client_url else {"allow_origin_regex": ".*"}
    app.add_middleware(
        CORSMiddleware,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        **cors_origins,
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(health.router, tags=["Health"])
    app.include_router(analysis.router, prefix="/api", tags=["Analysis"])
    app.include_router(clinics.router, tags=["Clinics"])

    @app.on_event("startup")
    async def startup_event():
        """Log which upstream keys are configured (never their values)."""
        logger.info(f"Gemini API Key: {'set' if settings.has_gemini_key else 'NOT SET'}")
        logger.info(f"Gemini Model: {settings.gemini_model}")
        logger.info(f"Places API Key: {'set' if settings.has_places_key else 'NOT SET'}")

    return app


configure_logging(get_settings())
app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn on the configured port."""
    import uvicorn

    settings = get_settings()
    logger.info(f"Server is running on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
