"""Custom exception hierarchy for the Bybit proxy."""


class ProxyError(Exception):
    """Base exception for all proxy errors."""


class ConfigurationError(ProxyError):
    """Raised when configuration is missing or invalid."""


class UpstreamError(ProxyError):
    """Raised when an upstream request cannot be completed."""


class UpstreamTimeoutError(UpstreamError):
    """Raised when an upstream request times out."""


class UpstreamConnectionError(UpstreamError):
    """Raised when unable to reach an upstream."""


class RequestTooLarge(ProxyError):
    """Request body exceeds size limit."""


class InvalidJSON(ProxyError):
    """Request body is not valid JSON."""


def error_message(exc: BaseException) -> str:
    """Human-readable message of ``exc``, or its type name when it has none."""
    return str(exc) or type(exc).__name__
