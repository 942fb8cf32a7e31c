"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    CoachingError,
    NotFoundError,
    InvalidMeasurementError,
    InvalidComparisonError,
    IncompatibleRecordsError,
    DuplicateIdentityError,
    InvalidStatusTransitionError,
    ConcurrencyConflictError,
    InvalidPageRequestError,
    UnknownMetricError,
    InvalidValueError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "CoachingError",
    "NotFoundError",
    "InvalidMeasurementError",
    "InvalidComparisonError",
    "IncompatibleRecordsError",
    "DuplicateIdentityError",
    "InvalidStatusTransitionError",
    "ConcurrencyConflictError",
    "InvalidPageRequestError",
    "UnknownMetricError",
    "InvalidValueError",
]
