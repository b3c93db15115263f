"""
Domain exceptions package.
"""

from .authorization_error import PermissionDeniedError
from .conflict_error import (
    ConflictError,
    InvalidTransitionError,
    OptimizationExclusivityError,
)
from .not_found_error import (
    JobNotFoundError,
    NotFoundError,
    OptimizationNotFoundError,
    SuggestionNotFoundError,
)
from .notification_error import NotificationError
from .store_error import StoreError
from .validation_error import (
    InvalidFormatError,
    InvalidTimeSlotError,
    RequiredFieldError,
    ValidationError,
)

__all__ = [
    "ConflictError",
    "InvalidFormatError",
    "InvalidTimeSlotError",
    "InvalidTransitionError",
    "JobNotFoundError",
    "NotFoundError",
    "NotificationError",
    "OptimizationExclusivityError",
    "OptimizationNotFoundError",
    "PermissionDeniedError",
    "RequiredFieldError",
    "StoreError",
    "SuggestionNotFoundError",
    "ValidationError",
]
