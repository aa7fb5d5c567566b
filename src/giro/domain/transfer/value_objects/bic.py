"""BIC (SWIFT code) validation."""

from __future__ import annotations

import re

# Bank (4) + country (2) + location (2) + optional branch (3)
BIC_PATTERN = re.compile(r"^[A-Z]{6}[A-Z0-9]{2}([A-Z0-9]{3})?$")

BIC_MIN_LENGTH = 8
BIC_MAX_LENGTH = 11


def normalize_bic(value: str) -> str:
    return "".join(value.split()).upper()


def is_valid_bic(value: str) -> bool:
    """Check the BIC pattern: 8 or 11 upper-case alphanumerics.

    The input is not upper-cased here; BIC input is upper-cased on entry.
    """
    return BIC_PATTERN.match(value) is not None
