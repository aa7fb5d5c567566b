"""Transfer kind value object."""

from enum import Enum


class TransferKind(str, Enum):
    """Kind of transfer; selects which fields are mandatory."""

    STANDARD = "Standardüberweisung"
    SCHEDULED = "Terminüberweisung"
    INSTANT = "Sofortüberweisung"

    @property
    def label(self) -> str:
        return self.value

    @property
    def requires_execution_date(self) -> bool:
        return self is TransferKind.SCHEDULED
