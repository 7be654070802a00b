"""Background transaction-history fetch worker.

Workflow:
    User clicks "Get Transactions"
    → TransactionFetchWorker.start() schedules fetch_history on the runtime
    → first page published with replace=True
    → pages before the last seen signature published until an empty page
    → FetchFinished carries the FetchResult
    → UI drains the channel once per frame into the TransactionStore

The worker:
- Runs on the AsyncRuntime thread, never on the UI thread
- Publishes each page as soon as it arrives (partial progress is visible)
- Never raises to the UI: failures end the session with a distinct outcome
- Refuses a second fetch while one is in flight
"""

from collections.abc import Callable
from concurrent.futures import Future
from datetime import UTC, datetime

import structlog

from soltools.core.exceptions import SolToolsError
from soltools.core.store import (
    FetchChannel,
    FetchEvent,
    FetchFinished,
    FetchOutcome,
    FetchResult,
    FetchStarted,
    PageFetched,
)
from soltools.core.utils import truncate_address
from soltools.services.helius.client import HeliusClient
from soltools.workers.runtime import AsyncRuntime

log = structlog.get_logger(__name__)


async def fetch_history(
    client: HeliusClient,
    address: str,
    api_key: str,
    publish: Callable[[FetchEvent], None],
) -> FetchResult:
    """Fetch the complete history of address, publishing page by page.

    Uses the signature of the last transaction of each page as the cursor
    for the next request, until the provider returns an empty page.

    Args:
        client: Helius client (anything with an async list_transactions).
        address: Address whose history to fetch.
        api_key: Helius API key.
        publish: Callback receiving FetchStarted, PageFetched and FetchFinished.

    Returns:
        FetchResult describing how the session ended. Also published.
    """
    short_address = truncate_address(address)
    publish(FetchStarted(address=address))
    log.info("fetch_started", address=short_address)

    try:
        page = await client.list_transactions(address, api_key)
    except SolToolsError as e:
        log.warning("fetch_first_page_failed", address=short_address, error=str(e))
        result = FetchResult(outcome=FetchOutcome.FAILED, reason=str(e))
        publish(FetchFinished(result=result))
        return result

    publish(PageFetched(transactions=page, replace=True))
    pages = 1
    total = len(page)
    outcome = FetchOutcome.COMPLETED
    reason = None

    while page:
        cursor = page[-1].signature
        try:
            page = await client.list_transactions(address, api_key, before=cursor)
        except SolToolsError as e:
            log.warning(
                "fetch_page_failed",
                address=short_address,
                before=truncate_address(cursor),
                pages=pages,
                error=str(e),
            )
            outcome = FetchOutcome.PARTIALLY_COMPLETED
            reason = str(e)
            break

        if not page:
            break

        publish(PageFetched(transactions=page))
        pages += 1
        total += len(page)
        log.debug("fetch_page_received", address=short_address, page=pages, size=len(page))

    result = FetchResult(outcome=outcome, pages=pages, transactions=total, reason=reason)
    publish(FetchFinished(result=result))
    log.info(
        "fetch_finished",
        address=short_address,
        outcome=outcome.value,
        pages=pages,
        transactions=total,
    )
    return result


class TransactionFetchWorker:
    """Runs one fetch_history session at a time on the async runtime.

    Attributes:
        client: Shared Helius client (lives on the runtime loop).
        runtime: Event loop thread the fetch runs on.
        channel: Channel the UI drains into its TransactionStore.
    """

    def __init__(
        self,
        client: HeliusClient,
        runtime: AsyncRuntime,
        channel: FetchChannel,
    ) -> None:
        self.client = client
        self.runtime = runtime
        self.channel = channel

        self._future: Future[FetchResult] | None = None
        self._last_run: datetime | None = None
        self._last_result: FetchResult | None = None
        self._current_state: str = "idle"  # idle | fetching

    @property
    def running(self) -> bool:
        """True while a fetch session is in flight."""
        return self._future is not None and not self._future.done()

    def start(self, address: str, api_key: str) -> bool:
        """Start fetching address history in the background.

        Args:
            address: Address whose history to fetch.
            api_key: Helius API key.

        Returns:
            True if a session was started, False if one is already running.
        """
        if self.running:
            log.info("fetch_already_running", address=truncate_address(address))
            return False

        self._current_state = "fetching"
        self._last_run = datetime.now(UTC)
        self._future = self.runtime.submit(
            fetch_history(self.client, address, api_key, self.channel.send)
        )
        self._future.add_done_callback(self._on_done)
        return True

    def _on_done(self, future: Future[FetchResult]) -> None:
        exc = future.exception()
        if exc is None:
            self._last_result = future.result()
        else:
            # Every session ends with FetchFinished, even on unexpected errors
            log.error("fetch_crashed", error=str(exc), exc_info=exc)
            self._last_result = FetchResult(
                outcome=FetchOutcome.FAILED, reason=f"Unexpected error: {exc}"
            )
            self.channel.send(FetchFinished(result=self._last_result))
        self._current_state = "idle"

    def wait(self, timeout: float | None = None) -> FetchResult | None:
        """Block until the current session ends (used at shutdown and in tests)."""
        if self._future is None:
            return None
        try:
            return self._future.result(timeout=timeout)
        except TimeoutError:
            return None
        except Exception:  # reported by _on_done
            return self._last_result

    def get_status(self) -> dict:
        """Get worker status for monitoring.

        Returns:
            Status dict with:
                - running: Fetch in flight
                - last_run: Start time of the last session (or None)
                - last_outcome: Outcome of the last finished session (or None)
                - current_state: 'idle' | 'fetching'
        """
        return {
            "running": self.running,
            "last_run": self._last_run,
            "last_outcome": self._last_result.outcome.value if self._last_result else None,
            "current_state": self._current_state,
        }
