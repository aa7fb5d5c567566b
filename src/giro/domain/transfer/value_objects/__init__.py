"""Value objects and field formatters for the transfer domain."""

from giro.domain.transfer.value_objects.bic import (
    BIC_MAX_LENGTH,
    BIC_MIN_LENGTH,
    is_valid_bic,
    normalize_bic,
)
from giro.domain.transfer.value_objects.dates import (
    is_future_or_today,
    iso_to_local_display,
    iso_today,
    local_display_to_iso,
)
from giro.domain.transfer.value_objects.iban import (
    IBAN_MAX_LENGTH,
    is_valid_iban,
    normalize_iban,
)
from giro.domain.transfer.value_objects.money import (
    Money,
    format_money,
    parse_money,
)
from giro.domain.transfer.value_objects.text import normalize_diacritics
from giro.domain.transfer.value_objects.transfer_field import TransferField
from giro.domain.transfer.value_objects.transfer_kind import TransferKind

__all__ = [
    "BIC_MAX_LENGTH",
    "BIC_MIN_LENGTH",
    "IBAN_MAX_LENGTH",
    "Money",
    "TransferField",
    "TransferKind",
    "format_money",
    "is_future_or_today",
    "is_valid_bic",
    "is_valid_iban",
    "iso_to_local_display",
    "iso_today",
    "local_display_to_iso",
    "normalize_bic",
    "normalize_diacritics",
    "normalize_iban",
    "parse_money",
]
