"""Bank lookup that never finds anything."""

from typing import Optional

from giro.domain.banking.ports import BankLookupPort
from giro.domain.banking.value_objects import BankInfo


class NullBankLookup(BankLookupPort):
    """Used when bank lookup is switched off."""

    @property
    def provider_name(self) -> str:
        return "none"

    async def lookup(self, bic: str) -> Optional[BankInfo]:
        return None
