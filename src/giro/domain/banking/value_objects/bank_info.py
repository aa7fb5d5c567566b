"""Bank info value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BankInfo:
    """Name and city of the bank behind a BIC."""

    bank_name: str
    city: str

    def __str__(self) -> str:
        if self.city:
            return f"{self.bank_name}, {self.city}"
        return self.bank_name
