"""Client-visible gateway failures."""

from typing import Any, Dict, Optional


class GatewayError(Exception):
    """
    A failure the API layer reports to the caller as-is.

    status_code follows the taxonomy: 400 bad input, 413 payload too large,
    500 misconfiguration or empty result, 502 upstream failure.
    """

    def __init__(self, status_code: int, error: str, details: Optional[str] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body
