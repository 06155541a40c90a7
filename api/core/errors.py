"""
Service error taxonomy.

Each error carries a stable `kind`, the HTTP status it maps to, and a public
message that is safe to return to clients. Backend detail stays in the
exception chain (`raise ... from exc`) and in the logs.
"""

from __future__ import annotations


class ServiceError(RuntimeError):
    kind = "ServiceError"
    status_code = 500
    default_message = "Internal error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidIdentifier(ServiceError):
    kind = "InvalidIdentifier"
    status_code = 400
    default_message = "Identifier is not a valid UUID."


class ValidationError(ServiceError):
    kind = "ValidationError"
    status_code = 400
    default_message = "Request is invalid."


class NotFound(ServiceError):
    kind = "NotFound"
    status_code = 404
    default_message = "Resource not found."


class StoreError(ServiceError):
    kind = "StoreError"
    status_code = 502
    default_message = "Storage backend failed."


class PoolExhausted(ServiceError):
    kind = "PoolExhausted"
    status_code = 503
    default_message = "No database connection available."
