"""Monetary amount value object with German parsing and formatting."""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from giro.domain.transfer.exceptions import InvalidAmountError

DEFAULT_CURRENCY = "EUR"
CURRENCY_SYMBOL = "€"
# German locale puts a no-break space before the symbol
CURRENCY_SEPARATOR = "\u00a0"

# Display precision; stored amounts keep every digit the user typed
CENT = Decimal("0.01")

# Digits with a single comma or dot as decimal separator, e.g. "12,50" or "12."
AMOUNT_PATTERN = re.compile(r"^[+-]?(\d+([.,]\d*)?|[.,]\d+)$")


class Money(BaseModel):
    """Value object representing a monetary amount in euro."""

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    model_config = ConfigDict(frozen=True)

    def __init__(self, amount: Decimal | str | None = None, **data: Any):
        super().__init__(amount=amount, **data)

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Decimal:
        if not isinstance(v, Decimal):
            v = Decimal(str(v))

        decimal_places = v.as_tuple().exponent
        if not isinstance(decimal_places, int):
            msg = "Money amount must have a valid decimal exponent"
            raise ValueError(msg)

        return v

    def __str__(self) -> str:
        return format_decimal(self.amount)

    def is_positive(self) -> bool:
        return self.amount > Decimal(0)


def _to_decimal(text: str) -> Optional[Decimal]:
    candidate = text.strip()
    if not AMOUNT_PATTERN.match(candidate):
        return None
    try:
        return Decimal(candidate.replace(",", "."))
    except InvalidOperation:
        return None


def parse_money(text: str) -> Money:
    """Parse user-entered amount text into a positive Money value.

    Accepts comma or dot as decimal separator. Any number of decimal places
    is kept as entered; rounding to cents happens only for display.

    Raises
    ------
    InvalidAmountError
        If the text is not numeric or not positive.
    """
    value = _to_decimal(text or "")
    if value is None:
        raise InvalidAmountError(text, "not a number")

    if value <= 0:
        raise InvalidAmountError(text, "amount must be positive")

    return Money(value)


def format_decimal(value: Decimal) -> str:
    """Format a decimal as German currency text, e.g. ``1.234,56 €``."""
    rounded = value.quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    grouped = f"{abs(rounded):,.2f}"
    # Swap separators: 1,234.56 -> 1.234,56
    german = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{german}{CURRENCY_SEPARATOR}{CURRENCY_SYMBOL}"


def format_money(text: str) -> str:
    """Format amount text for display. Never raises; unparsable gives zero."""
    value = _to_decimal(text or "")
    if value is None:
        value = Decimal(0)
    return format_decimal(value)
