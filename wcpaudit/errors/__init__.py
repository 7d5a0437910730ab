"""
WCP Audit — Error Taxonomy

  WCPError          base class, carries code + HTTP status for the API layer
  ValidationError   malformed request body (400)
  NotFoundError     unknown resource (404)
  ExtractionError   malformed / missing / out-of-range input fields (client fault)
  ProviderError     explanation backend failure (absorbed by template fallback)
  InternalError     anything else; message is generic, cause is chained
"""


class WCPError(Exception):
    code = "WCP_ERROR"
    status_code = 500

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        return {"error": {
            "name": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "statusCode": self.status_code,
            "details": self.details,
        }}


class ExtractionError(WCPError):
    code = "EXTRACTION_ERROR"
    status_code = 400

    def __init__(self, message: str, field: str = None, value=None):
        details = {}
        if field is not None:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class ProviderError(WCPError):
    code = "PROVIDER_ERROR"
    status_code = 502

    def __init__(self, message: str, provider: str = None):
        super().__init__(message, {"provider": provider} if provider else None)
        self.provider = provider


class InternalError(WCPError):
    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str = "Internal error while evaluating payroll entry"):
        super().__init__(message)


class ValidationError(WCPError):
    """Malformed request body at the API boundary."""
    code = "VALIDATION_ERROR"
    status_code = 400


class NotFoundError(WCPError):
    code = "NOT_FOUND"
    status_code = 404
