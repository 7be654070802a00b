"""Shared transaction store and the worker-to-UI fetch channel.

The store is the ordered list of fetched transactions plus the
fetch-in-progress flag. Every operation holds the store lock; readers on
the UI thread pass ``blocking=False`` and get ``None`` when the lock is
busy, so a frame never stalls behind the worker.

The channel carries fetch events from the worker thread to the UI thread.
The UI drains it once per frame and applies the events to the store.
"""

import queue
import threading
from dataclasses import dataclass, field
from enum import Enum

import structlog

from soltools.services.helius.models import Transaction

log = structlog.get_logger(__name__)


class TransactionStore:
    """Mutex-guarded ordered sequence of transactions and the FetchStatus flag."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._transactions: list[Transaction] = []
        self._fetching = False
        self._revision = 0

    @property
    def revision(self) -> int:
        """Counter bumped by every write to the transaction list."""
        return self._revision

    def _acquire(self, blocking: bool) -> bool:
        return self._lock.acquire(blocking=blocking)

    def append(self, page: list[Transaction]) -> None:
        """Append a page to the end of the store."""
        with self._lock:
            self._transactions.extend(page)
            self._revision += 1

    def replace_with(self, page: list[Transaction]) -> None:
        """Replace the whole store content with page (first page of a fetch)."""
        with self._lock:
            self._transactions = list(page)
            self._revision += 1

    def clear(self) -> None:
        """Remove every transaction."""
        with self._lock:
            self._transactions = []
            self._revision += 1

    def snapshot_length(self, blocking: bool = True) -> int | None:
        """Number of stored transactions, or None if the lock is busy and blocking=False."""
        if not self._acquire(blocking):
            return None
        try:
            return len(self._transactions)
        finally:
            self._lock.release()

    def iterate(self, blocking: bool = True) -> list[Transaction] | None:
        """Copy of the stored transactions for read-only traversal.

        Returns None if the lock is busy and blocking=False.
        """
        if not self._acquire(blocking):
            return None
        try:
            return list(self._transactions)
        finally:
            self._lock.release()

    def set_fetching(self, fetching: bool) -> None:
        """Set the fetch-in-progress flag."""
        with self._lock:
            self._fetching = fetching

    def is_fetching(self, blocking: bool = True) -> bool | None:
        """Fetch-in-progress flag, or None if the lock is busy and blocking=False."""
        if not self._acquire(blocking):
            return None
        try:
            return self._fetching
        finally:
            self._lock.release()


class FetchOutcome(Enum):
    """How a fetch session ended."""

    COMPLETED = "completed"  # History exhausted (empty page)
    PARTIALLY_COMPLETED = "partially_completed"  # A later page failed
    FAILED = "failed"  # The first page failed, nothing published


@dataclass(frozen=True)
class FetchResult:
    """Summary of a finished fetch session.

    Attributes:
        outcome: How the session ended.
        pages: Number of pages published (including an empty first page).
        transactions: Number of transactions published.
        reason: Error text when outcome is not COMPLETED.
    """

    outcome: FetchOutcome
    pages: int = 0
    transactions: int = 0
    reason: str | None = None

    def describe(self) -> str:
        """One-line status text for the UI."""
        if self.outcome is FetchOutcome.COMPLETED:
            return f"Completed: {self.transactions} transactions in {self.pages} pages"
        if self.outcome is FetchOutcome.PARTIALLY_COMPLETED:
            return (
                f"Stopped early after {self.transactions} transactions "
                f"({self.pages} pages): {self.reason}"
            )
        return f"Failed: {self.reason}"


@dataclass(frozen=True)
class FetchStarted:
    """A fetch session has begun."""

    address: str


@dataclass(frozen=True)
class PageFetched:
    """A page of transactions, in fetch order.

    Attributes:
        transactions: The page content.
        replace: True for the first page of a session (replaces the store).
    """

    transactions: list[Transaction] = field(default_factory=list)
    replace: bool = False


@dataclass(frozen=True)
class FetchFinished:
    """A fetch session has ended."""

    result: FetchResult


FetchEvent = FetchStarted | PageFetched | FetchFinished


class FetchChannel:
    """Thread-safe handoff of fetch events from the worker to the UI.

    Example:
        channel = FetchChannel()
        channel.send(PageFetched(page, replace=True))  # worker thread
        result = channel.drain_into(store)  # UI thread, once per frame
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[FetchEvent] = queue.SimpleQueue()
        # Held across take-and-apply so concurrent drains keep page order
        self._drain_lock = threading.Lock()

    def send(self, event: FetchEvent) -> None:
        """Publish an event (never blocks)."""
        self._queue.put(event)

    def drain_into(self, store: TransactionStore) -> FetchResult | None:
        """Apply every pending event to the store.

        Args:
            store: Store to update.

        Returns:
            The result of the last FetchFinished drained, if any.
        """
        with self._drain_lock:
            return self._drain(store)

    def _drain(self, store: TransactionStore) -> FetchResult | None:
        result: FetchResult | None = None
        while True:
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                return result

            if isinstance(event, FetchStarted):
                store.set_fetching(True)
            elif isinstance(event, PageFetched):
                if event.replace:
                    store.replace_with(event.transactions)
                else:
                    store.append(event.transactions)
            elif isinstance(event, FetchFinished):
                store.set_fetching(False)
                result = event.result
                log.debug("fetch_result_drained", outcome=event.result.outcome.value)
