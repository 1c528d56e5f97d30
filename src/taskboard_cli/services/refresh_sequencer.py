"""Refresh sequencer.

Every full-board refresh goes through this object. It owns two independent
pieces of state:

* an epoch counter, raised once per issued refresh. A fetch result is only
  applied if no newer refresh was issued while it was in flight, so a slow
  early response can never overwrite a newer one (last requester wins).
* a suppress flag, set while a bulk operation runs so that the refreshes its
  individual steps would trigger become no-ops. The caller issues exactly one
  refresh after the bulk operation ends.

Superseded fetches are not cancelled; their results are dropped on arrival.
"""

from __future__ import annotations

import enum
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from taskboard_cli.models import BoardSnapshot
from taskboard_cli.repositories import TaskStore
from taskboard_cli.utils.logger import get_logger

logger = get_logger(__name__)


class RefreshOutcome(enum.Enum):
    """What happened to a refresh request."""

    SUPPRESSED = "suppressed"
    APPLIED = "applied"
    STALE = "stale"


class RefreshSequencer:
    """Epoch-gated refresh of the locally mirrored board snapshot."""

    def __init__(
        self,
        store: TaskStore,
        on_snapshot: Callable[[BoardSnapshot], None] | None = None,
    ):
        """Initialize the sequencer.

        Args:
            store: Task store to fetch from
            on_snapshot: Called with every accepted snapshot
        """
        self.store = store
        self.on_snapshot = on_snapshot
        self.epoch = 0
        self.suppressed = False
        self.snapshot: BoardSnapshot | None = None

    def _is_current(self, seq: int) -> bool:
        if seq != self.epoch:
            logger.debug("discarding refresh %d, epoch is now %d", seq, self.epoch)
            return False
        return True

    async def request_refresh(self) -> RefreshOutcome:
        """Fetch the board and apply it if still the latest request.

        Returns:
            SUPPRESSED if a bulk operation holds refreshes back, STALE if a
            newer refresh was issued while this one was in flight, APPLIED
            otherwise

        Raises:
            StoreError: If the store fails; the displayed snapshot is kept
        """
        if self.suppressed:
            return RefreshOutcome.SUPPRESSED

        self.epoch += 1
        seq = self.epoch

        index = await self.store.get_index()
        if not self._is_current(seq):
            return RefreshOutcome.STALE

        tasks = await self.store.load_all_tasks(index)
        if not self._is_current(seq):
            return RefreshOutcome.STALE

        self.snapshot = BoardSnapshot.from_index(index, tasks)
        logger.debug("applied refresh %d (%d tasks)", seq, len(tasks))
        if self.on_snapshot is not None:
            self.on_snapshot(self.snapshot)
        return RefreshOutcome.APPLIED

    def begin_suppressed(self) -> None:
        self.suppressed = True

    def end_suppressed(self) -> None:
        self.suppressed = False

    @asynccontextmanager
    async def suppressed_updates(self) -> AsyncIterator[None]:
        """Hold refreshes back for the duration of the block."""
        self.begin_suppressed()
        try:
            yield
        finally:
            self.end_suppressed()
