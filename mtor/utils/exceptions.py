"""
Custom Exception Hierarchy

Every failure the domain layer can report is a CoachingError subclass
carrying a stable error code, structured details and the HTTP status the
API layer answers with.
"""
from typing import Optional, Dict, Any


class CoachingError(Exception):
    """Base exception for all coaching domain errors."""

    http_status: int = 500

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class NotFoundError(CoachingError):
    """Id lookup miss in a repository."""

    http_status = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            message=f"{entity} {entity_id} not found",
            code="NOT_FOUND",
            details={"entity": entity, "id": entity_id}
        )
        self.entity = entity
        self.entity_id = entity_id


class InvalidMeasurementError(CoachingError):
    """Non-positive height/weight or otherwise impossible measurement."""

    http_status = 422

    def __init__(
        self,
        message: str,
        field: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="INVALID_MEASUREMENT",
            details={"field": field, **(details or {})}
        )
        self.field = field


class InvalidComparisonError(CoachingError):
    """Records belong to different subjects or are not ordered in time."""

    http_status = 422

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            code="INVALID_COMPARISON",
            details=details
        )


class IncompatibleRecordsError(CoachingError):
    """Two records being compared do not share the same measurement keys."""

    http_status = 422

    def __init__(
        self,
        message: str,
        only_current: Optional[list] = None,
        only_previous: Optional[list] = None
    ):
        super().__init__(
            message=message,
            code="INCOMPATIBLE_RECORDS",
            details={
                "only_current": sorted(only_current or []),
                "only_previous": sorted(only_previous or []),
            }
        )


class DuplicateIdentityError(CoachingError):
    """A unique identity (e.g. e-mail) is already registered."""

    http_status = 409

    def __init__(self, field: str, value: str):
        super().__init__(
            message=f"{field} '{value}' is already in use",
            code="DUPLICATE_IDENTITY",
            details={"field": field, "value": value}
        )


class InvalidStatusTransitionError(CoachingError):
    """Exam status change not allowed by the status machine."""

    http_status = 409

    def __init__(self, current: str, requested: str):
        super().__init__(
            message=f"Cannot move exam status from {current} to {requested}",
            code="INVALID_STATUS_TRANSITION",
            details={"current": current, "requested": requested}
        )


class ConcurrencyConflictError(CoachingError):
    """Conditional update issued against a stale version."""

    http_status = 409

    def __init__(self, entity: str, entity_id: str, expected: int, actual: int):
        super().__init__(
            message=f"{entity} {entity_id} was modified (expected version {expected}, found {actual})",
            code="CONCURRENCY_CONFLICT",
            details={"entity": entity, "id": entity_id, "expected": expected, "actual": actual}
        )


class InvalidPageRequestError(CoachingError):
    """Negative page index or non-positive page size."""

    http_status = 400

    def __init__(self, page: int, page_size: int):
        super().__init__(
            message=f"Invalid page request (page={page}, page_size={page_size})",
            code="INVALID_PAGE_REQUEST",
            details={"page": page, "page_size": page_size}
        )


class UnknownMetricError(CoachingError):
    """Time-series requested for a metric that is not tracked."""

    http_status = 400

    def __init__(self, metric: str, available: Optional[list] = None):
        super().__init__(
            message=f"Unknown metric: {metric}",
            code="UNKNOWN_METRIC",
            details={"metric": metric, "available": available or []}
        )


class InvalidValueError(CoachingError):
    """Value outside the allowed set of an enumerated field."""

    http_status = 422

    def __init__(self, field: str, value: Any, allowed: Optional[list] = None):
        super().__init__(
            message=f"Invalid {field}: {value!r}",
            code="INVALID_VALUE",
            details={"field": field, "value": value, "allowed": allowed or []}
        )
        self.field = field
