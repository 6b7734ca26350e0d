from typing import Any, Dict, Iterable

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


def validation_details(errors: Iterable[Dict[str, Any]]) -> str:
    """One line per schema violation: "images.0.data: Input should be a valid string"."""
    return "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ())) or 'body'}: {err.get('msg', '')}" for err in errors
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors (400) in each route's own error shape."""
    content: Dict[str, Any] = {"error": "Invalid request body", "details": validation_details(exc.errors())}
    if request.url.path.startswith("/clinics"):
        content = {"ok": False, **content}
    return JSONResponse(status_code=400, content=content)
