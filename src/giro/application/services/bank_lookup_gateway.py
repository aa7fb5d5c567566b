"""Debounced bank lookup triggered by BIC entry."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional, Set

from giro.domain.transfer.value_objects import BIC_MIN_LENGTH, is_valid_bic

if TYPE_CHECKING:
    from giro.domain.banking.ports import BankLookupPort
    from giro.domain.banking.value_objects import BankInfo

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.8


@dataclass(eq=False)
class PendingLookup:
    """A scheduled lookup, keyed by the BIC that triggered it.

    ``fired`` turns True once the quiet period elapsed and the provider
    call is in flight; from then on the task is no longer cancelled.
    Compared by identity: two lookups for the same BIC are distinct.
    """

    bic: str
    task: Optional[asyncio.Task] = field(default=None, repr=False)
    fired: bool = False

    @property
    def is_done(self) -> bool:
        return self.task is not None and self.task.done()


LookupStartedCallback = Callable[[PendingLookup], None]
LookupResolvedCallback = Callable[[PendingLookup, Optional["BankInfo"]], None]


def is_lookup_eligible(bic: str) -> bool:
    return len(bic) >= BIC_MIN_LENGTH and is_valid_bic(bic)


class BankLookupGateway:
    """Wraps a BankLookupPort with a quiet-period timer.

    The gateway does not decide whether a result is still wanted. It hands
    back the PendingLookup it was started with, and the caller compares
    that key against its current state when the result arrives.
    """

    def __init__(
        self,
        lookup_port: BankLookupPort,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ):
        self._lookup_port = lookup_port
        self._debounce_seconds = debounce_seconds
        self._tasks: Set[asyncio.Task] = set()

    @property
    def debounce_seconds(self) -> float:
        return self._debounce_seconds

    @property
    def provider_name(self) -> str:
        return self._lookup_port.provider_name

    @property
    def is_idle(self) -> bool:
        return not self._tasks

    def schedule(
        self,
        bic: str,
        on_started: LookupStartedCallback,
        on_resolved: LookupResolvedCallback,
    ) -> Optional[PendingLookup]:
        """Start the quiet-period timer for a BIC.

        Returns the pending lookup, or None when the BIC is not complete
        enough to be looked up. Must be called from a running event loop.
        """
        if not is_lookup_eligible(bic):
            return None

        pending = PendingLookup(bic=bic)
        task = asyncio.create_task(self._run(pending, on_started, on_resolved))
        pending.task = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug("Bank lookup for %s scheduled", bic)
        return pending

    def cancel(self, pending: Optional[PendingLookup]) -> None:
        """Cancel a lookup that has not fired yet.

        A lookup already in flight is left running; its result is
        suppressed by the caller on arrival.
        """
        if pending is None or pending.task is None:
            return
        if not pending.fired:
            pending.task.cancel()
            logger.debug("Bank lookup for %s cancelled before firing", pending.bic)
        else:
            logger.debug("Bank lookup for %s superseded while in flight", pending.bic)

    async def resolve(self, bic: str) -> Optional[BankInfo]:
        """Call the provider once; any failure counts as "no bank info"."""
        try:
            return await self._lookup_port.lookup(bic)
        except Exception as e:
            logger.warning(
                "Bank lookup via %s failed for %s: %s",
                self._lookup_port.provider_name,
                bic,
                e,
            )
            return None

    async def wait_idle(self) -> None:
        """Wait until no scheduled or in-flight lookup remains."""
        while self._tasks:
            await asyncio.wait(set(self._tasks))

    async def aclose(self) -> None:
        """Cancel every outstanding lookup, including in-flight ones."""
        tasks = set(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.wait(tasks)

    async def _run(
        self,
        pending: PendingLookup,
        on_started: LookupStartedCallback,
        on_resolved: LookupResolvedCallback,
    ) -> None:
        await asyncio.sleep(self._debounce_seconds)
        pending.fired = True

        try:
            on_started(pending)
            info = await self.resolve(pending.bic)
            on_resolved(pending, info)
        except Exception as e:
            logger.warning("Bank lookup handling failed for %s: %s", pending.bic, e)
