"""Bank lookup port interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from giro.domain.banking.value_objects import BankInfo


class BankLookupPort(ABC):
    """
    Interface for resolving a BIC to the bank behind it.

    Implementations live in the infrastructure layer (institute directory,
    LLM lookup, ...).
    """

    @abstractmethod
    async def lookup(self, bic: str) -> Optional[BankInfo]:
        """
        Resolve bank name and city for a BIC.

        Implementations should handle errors gracefully and return None
        if the code is unknown, the provider is unavailable, or its answer
        cannot be parsed.

        Parameters
        ----------
        bic
            Upper-case BIC with 8 or 11 characters

        Returns
        -------
        BankInfo if the bank could be identified, None otherwise.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Short identifier of the lookup backend, used in logs."""
