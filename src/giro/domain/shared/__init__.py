"""Shared domain components.

This module exports exceptions and utilities used across domain boundaries.
"""

from giro.domain.shared.exceptions import (
    BusinessRuleViolation,
    DomainException,
    ErrorCode,
    ValidationError,
)
from giro.domain.shared.time import today_local

__all__ = [
    # Error codes
    "ErrorCode",
    # Base exception
    "DomainException",
    # Exception categories
    "ValidationError",
    "BusinessRuleViolation",
    # Utilities
    "today_local",
]
