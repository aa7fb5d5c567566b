"""Banking domain exceptions.

These exceptions represent failures of external bank data sources. Lookup
providers catch them and report "no bank info" instead of propagating.
"""

from giro.domain.shared.exceptions import DomainException, ErrorCode


class BankingDomainError(DomainException):
    """Base exception for banking domain errors."""


class BankLookupError(BankingDomainError):
    """Raised when a bank lookup provider returns an unusable answer."""

    def __init__(
        self,
        message: str = "Bank lookup failed",
        bic: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.BANK_LOOKUP_FAILED,
            details={"bic": bic} if bic else None,
        )
