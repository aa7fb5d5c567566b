"""Port interfaces for banking operations.

These interfaces define what the domain needs from external bank data
sources. Implementations (adapters) are provided in the infrastructure layer.
"""

from giro.domain.banking.ports.bank_lookup_port import BankLookupPort

__all__ = [
    "BankLookupPort",
]
