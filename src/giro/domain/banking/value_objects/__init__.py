"""Value objects for banking domain."""

from giro.domain.banking.value_objects.bank_info import BankInfo

__all__ = [
    "BankInfo",
]
