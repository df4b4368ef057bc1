"""Error Hierarchy — typed, categorized exceptions for all horoscope failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400/404) are recoverable; store errors (500) are critical
    - to_response() produces the REST envelope
    - No backend/driver details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with HoroscopeError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    sign_id: int | None = None
    kind: str | None = None
    period: str | None = None


class HoroscopeError(Exception):
    """Base exception for all horoscope service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "sign_id": self.context.sign_id,
                    "kind": self.context.kind,
                    "period": self.context.period,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class InputValidationError(HoroscopeError):
    """Missing or malformed request input."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class RecordNotFoundError(HoroscopeError):
    """No record stored under the resolved key."""
    def __init__(self, kind: str, sign_id: int, period: str):
        super().__init__(
            f"No {kind} horoscope for sign {sign_id} on {period}",
            "RECORD_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR,
            ErrorContext(sign_id=sign_id, kind=kind, period=period),
            404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(HoroscopeError):
    """Persistence operation failed."""
    def __init__(
        self, message: str, operation: str,
        context: ErrorContext | None = None, code: str = "STORE_ERROR",
    ):
        super().__init__(
            f"Store {operation} failed: {message}",
            code, ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class PartialWriteError(StoreError):
    """Submit wrote some record kinds and failed others."""
    def __init__(self, failed: list[str], results: dict):
        super().__init__(
            f"{', '.join(failed)} horoscope could not be saved",
            "upsert", code="PARTIAL_WRITE",
        )
        self.failed = failed
        self.results = results

    def to_response(self) -> dict:
        response = super().to_response()
        response["results"] = self.results
        return response
