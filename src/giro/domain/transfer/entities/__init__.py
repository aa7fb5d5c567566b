"""Entities for the transfer domain."""

from giro.domain.transfer.entities.transfer_draft import (
    PURPOSE_MAX_LENGTH,
    TransferDraft,
    TransferSnapshot,
)

__all__ = [
    "PURPOSE_MAX_LENGTH",
    "TransferDraft",
    "TransferSnapshot",
]
