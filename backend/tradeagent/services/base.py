"""
Service Errors

Exception hierarchy shared by all services. The API layer maps each
class to an HTTP status code.
"""

from enum import Enum


class ServiceError(Exception):
    """Base exception for service errors."""

    status_code: int = 500

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ValidationError(ServiceError):
    """Unknown action or missing required parameter."""

    status_code = 400


class UpstreamUnavailableError(ServiceError):
    """Provider returned a non-2xx status or a malformed payload."""

    status_code = 502

    def __init__(
        self,
        service_name: str,
        message: str,
        details: dict = None,
        status_code: int = 502,
    ):
        super().__init__(service_name, message, details)
        self.status_code = status_code


class GatewayErrorKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    QUOTA_EXHAUSTED = "quota_exhausted"
    UNAVAILABLE = "unavailable"


GATEWAY_STATUS = {
    GatewayErrorKind.RATE_LIMITED: 429,
    GatewayErrorKind.QUOTA_EXHAUSTED: 402,
    GatewayErrorKind.UNAVAILABLE: 500,
}


class GatewayError(ServiceError):
    """Language-model gateway failure, classified for the caller."""

    def __init__(self, kind: GatewayErrorKind, message: str, details: dict = None):
        super().__init__("StreamingRelay", message, details)
        self.kind = kind
        self.status_code = GATEWAY_STATUS[kind]
