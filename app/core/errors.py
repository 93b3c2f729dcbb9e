"""
Application error taxonomy.

Each error carries a stable `kind` string that clients switch on
(e.g. to render a specific message for `duplicate_report`) and the HTTP
status the API layer answers with. The global handler in app.main turns
these into JSON bodies of the form {"error": kind, "detail": message, ...}.
"""

from typing import Any, Dict


class EcoGuardError(Exception):
    kind = "server_error"
    status_code = 500

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.kind, "detail": self.message}
        body.update(self.extra)
        return body


class InvalidInputError(EcoGuardError):
    """Required submission fields are missing or malformed."""
    kind = "invalid_input"
    status_code = 400


class DuplicateReportError(EcoGuardError):
    """Duplicate Guard rejection. Carries the id of the report already on file."""
    kind = "duplicate_report"
    status_code = 409

    def __init__(self, existing_report_id: str):
        super().__init__(
            "An identical report already exists at this location.",
            existing_report_id=existing_report_id,
        )
        self.existing_report_id = existing_report_id


class StoreUnavailableError(EcoGuardError):
    kind = "store_unavailable"
    status_code = 503


class NotFoundError(EcoGuardError):
    kind = "not_found"
    status_code = 404
