"""IBAN normalization and checksum validation."""

from __future__ import annotations

import re

# Country code (2) + check digits (2) + BBAN (max 30)
IBAN_STRUCTURE = re.compile(r"^[A-Z]{2}\d{2}[A-Z0-9]{1,30}$")

DOMESTIC_COUNTRY_CODE = "DE"
DOMESTIC_IBAN_LENGTH = 22
IBAN_MAX_LENGTH = 34


def normalize_iban(value: str) -> str:
    """Normalize an IBAN for validation and display.

    - Removes all whitespace
    - Uppercases
    """
    return "".join(value.split()).upper()


def is_valid_iban(value: str) -> bool:
    """Validate an IBAN using the ISO 7064 mod-97 algorithm.

    Steps:
      1) Strip whitespace and uppercase.
      2) Check the structure, and the exact length for German IBANs.
      3) Move the first 4 chars to the end.
      4) Replace letters A..Z with 10..35.
      5) Interpret the result as an integer; a valid IBAN yields remainder 1.
    """
    iban = normalize_iban(value)

    if not IBAN_STRUCTURE.match(iban):
        return False

    if iban.startswith(DOMESTIC_COUNTRY_CODE) and len(iban) != DOMESTIC_IBAN_LENGTH:
        return False

    rearranged = iban[4:] + iban[:4]

    digits = []
    for ch in rearranged:
        if "0" <= ch <= "9":
            digits.append(ch)
        elif "A" <= ch <= "Z":
            digits.append(str(ord(ch) - 55))  # ord('A') == 65 -> 10
        else:
            return False

    # Python ints are arbitrary precision, no chunking needed
    return int("".join(digits)) % 97 == 1
