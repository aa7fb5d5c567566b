"""Shared fixtures for application layer tests."""

from __future__ import annotations

import asyncio
from typing import Optional

import pytest

from giro.application.services import BankLookupGateway
from giro.domain.banking.ports import BankLookupPort
from giro.domain.banking.value_objects import BankInfo

FAST_DEBOUNCE = 0.01


class FakeBankLookup(BankLookupPort):
    """In-memory lookup port that records calls.

    ``hold(bic)`` returns an event the lookup for that BIC waits on, so a
    test can keep a request in flight while it edits the draft.
    """

    def __init__(self, banks: Optional[dict[str, BankInfo]] = None):
        self.banks = dict(banks or {})
        self.errors: dict[str, Exception] = {}
        self.calls: list[str] = []
        self._gates: dict[str, asyncio.Event] = {}

    @property
    def provider_name(self) -> str:
        return "fake"

    def hold(self, bic: str) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[bic] = gate
        return gate

    async def lookup(self, bic: str) -> Optional[BankInfo]:
        self.calls.append(bic)
        gate = self._gates.get(bic)
        if gate is not None:
            await gate.wait()
        if bic in self.errors:
            raise self.errors[bic]
        return self.banks.get(bic)


@pytest.fixture
def fake_lookup() -> FakeBankLookup:
    return FakeBankLookup(
        {
            "AAAADEFF": BankInfo("Alpha Bank", "Berlin"),
            "BBBBDEFF": BankInfo("Beta Bank", "Hamburg"),
            "COBADEFFXXX": BankInfo("Commerzbank", "Frankfurt am Main"),
            "NOCIDEFF": BankInfo("Stadtsparkasse", ""),
        },
    )


@pytest.fixture
def gateway(fake_lookup: FakeBankLookup) -> BankLookupGateway:
    return BankLookupGateway(fake_lookup, debounce_seconds=FAST_DEBOUNCE)
