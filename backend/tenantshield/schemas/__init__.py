from tenantshield.schemas.analysis import (
    ImagePart,
    AnalysisRequest,
    ClinicLink,
    Report,
    AnalyzeResponse,
)
from tenantshield.schemas.clinics import (
    ClinicsRequest,
    ClinicLocation,
    Clinic,
    ClinicsResponse,
)
