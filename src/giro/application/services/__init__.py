"""Application services."""

from giro.application.services.bank_lookup_gateway import (
    BankLookupGateway,
    PendingLookup,
    is_lookup_eligible,
)

__all__ = [
    "BankLookupGateway",
    "PendingLookup",
    "is_lookup_eligible",
]
