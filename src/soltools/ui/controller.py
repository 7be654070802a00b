"""UI controller: application state and the actions behind the four views.

The Gradio layer in soltools.ui.app and soltools.ui.pages only wires
widgets to these methods, so everything here runs without a browser.
"""

from dataclasses import dataclass, field
from enum import Enum

import structlog

from soltools.config import get_settings
from soltools.core.connections import find_connections_in_store
from soltools.core.exceptions import SolToolsError
from soltools.core.store import FetchChannel, FetchResult, TransactionStore
from soltools.core.utils import format_sol, truncate_address
from soltools.services.helius.client import HeliusClient
from soltools.services.helius.models import Transaction
from soltools.workers.fetch_worker import TransactionFetchWorker
from soltools.workers.runtime import AsyncRuntime

log = structlog.get_logger(__name__)


class View(Enum):
    """Mutually exclusive views. Values double as Gradio tab ids."""

    FETCH = "fetch"
    SEARCH = "search"
    DETAIL = "detail"
    CONNECTIONS = "connections"


@dataclass
class AppState:
    """Everything the views read and write, owned by the UI thread.

    Attributes:
        api_key: Helius API key field.
        address: Address whose history is fetched.
        second_address: Address searched for in the fetched history.
        search_signature: Signature field of the Search view.
        view: Active view.
        selected: Transaction shown in the Detail view.
        connections: Last Connection Finder result.
        visible_transactions: Rows last rendered in the Fetch view.
        transactions_len: Last known store length (kept when the lock is busy).
        fetching: Last known FetchStatus (kept when the lock is busy).
        fetch_message: Status text of the Fetch view.
        search_message: Status text of the Search view.
    """

    api_key: str = ""
    address: str = ""
    second_address: str = ""
    search_signature: str = ""
    view: View = View.FETCH
    selected: Transaction | None = None
    connections: list[Transaction] = field(default_factory=list)
    visible_transactions: list[Transaction] = field(default_factory=list)
    transactions_len: int = 0
    fetching: bool = False
    fetch_message: str = ""
    search_message: str = ""


@dataclass(frozen=True)
class FrameStatus:
    """What the Fetch view shows on a given frame."""

    transactions_len: int
    fetching: bool
    message: str

    @property
    def label(self) -> str:
        return f"Retrieved {self.transactions_len} Transactions"


@dataclass(frozen=True)
class TransactionDetail:
    """Display data of the Detail view.

    Attributes:
        signature: Transaction signature.
        signer_change: Signer SOL balance change, formatted.
        accounts: (address, formatted SOL change) pairs in provider order.
        type: Transaction type.
        source: Program source.
        fee: Fee, formatted.
        timestamp: UTC time, formatted.
        description: Helius summary.
    """

    signature: str
    signer_change: str
    accounts: list[tuple[str, str]]
    type: str
    source: str
    fee: str
    timestamp: str
    description: str


class AppController:
    """Owns AppState, the store, the fetch channel and the worker.

    Example:
        controller = AppController.create()
        controller.start_fetch(api_key, address)
        status = controller.poll()  # once per UI frame
    """

    def __init__(
        self,
        client: HeliusClient,
        runtime: AsyncRuntime,
        store: TransactionStore | None = None,
        channel: FetchChannel | None = None,
        request_timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self.client = client
        self.runtime = runtime
        self.store = store or TransactionStore()
        self.channel = channel or FetchChannel()
        self.worker = TransactionFetchWorker(client, runtime, self.channel)
        self.request_timeout = (
            request_timeout if request_timeout is not None else settings.request_timeout
        )
        self.state = AppState(api_key=settings.helius_api_key.get_secret_value())
        self.last_result: FetchResult | None = None
        self._rendered_revision = -1

    @classmethod
    def create(cls) -> "AppController":
        """Build a controller with a started runtime and a fresh Helius client."""
        runtime = AsyncRuntime()
        runtime.start()
        return cls(client=HeliusClient(), runtime=runtime)

    def shutdown(self) -> None:
        """Close the HTTP client and stop the runtime thread."""
        if not self.runtime.running:
            return
        try:
            self.runtime.run(self.client.close(), timeout=5.0)
        except (TimeoutError, RuntimeError) as e:
            log.warning("client_close_failed", error=str(e))
        self.runtime.stop()

    # =========================================================================
    # Fetch view
    # =========================================================================

    def start_fetch(self, api_key: str, address: str) -> bool:
        """Spawn the fetch worker for address.

        Returns:
            True if a fetch started, False if input is missing or one is running.
        """
        self.state.api_key = api_key.strip()
        self.state.address = address.strip()

        if not self.state.api_key or not self.state.address:
            self.state.fetch_message = "Enter a Helius API key and an address"
            return False

        if not self.worker.start(self.state.address, self.state.api_key):
            self.state.fetch_message = "A fetch is already running"
            return False

        self.state.fetching = True
        self.state.fetch_message = f"Fetching {truncate_address(self.state.address)}..."
        return True

    def poll(self) -> FrameStatus:
        """Drain the fetch channel and read the store without blocking."""
        result = self.channel.drain_into(self.store)
        if result is not None:
            self.last_result = result
            self.state.fetch_message = result.describe()

        length = self.store.snapshot_length(blocking=False)
        if length is not None:
            self.state.transactions_len = length

        fetching = self.store.is_fetching(blocking=False)
        if fetching is not None:
            # The worker may not have published FetchStarted yet
            self.state.fetching = fetching or self.worker.running

        return FrameStatus(
            transactions_len=self.state.transactions_len,
            fetching=self.state.fetching,
            message=self.state.fetch_message,
        )

    def rows_changed(self) -> bool:
        """True if the store was written since the table was last rendered."""
        return self.store.revision != self._rendered_revision

    def transaction_rows(self) -> list[list[str]]:
        """Rows of the Fetch view table; keeps the previous rows if the store is busy."""
        revision = self.store.revision
        transactions = self.store.iterate(blocking=False)
        if transactions is not None:
            self.state.visible_transactions = transactions
            self._rendered_revision = revision
        return [_row(tx) for tx in self.state.visible_transactions]

    def select_fetched(self, index: int) -> bool:
        """Select a row of the Fetch view table and switch to Detail."""
        return self._select(self.state.visible_transactions, index)

    # =========================================================================
    # Search view
    # =========================================================================

    def search(self, api_key: str, signature: str) -> bool:
        """Look up signature synchronously and show it in the Detail view.

        Returns:
            True on success. On failure the view stays on Search.
        """
        self.state.api_key = api_key.strip()
        self.state.search_signature = signature.strip()

        if not self.state.api_key or not self.state.search_signature:
            self.state.search_message = "Enter a Helius API key and a signature"
            return False

        try:
            tx = self.runtime.run(
                self.client.lookup_transaction(self.state.search_signature, self.state.api_key),
                timeout=self.request_timeout,
            )
        except (SolToolsError, TimeoutError) as e:
            log.warning(
                "search_failed",
                signature=truncate_address(self.state.search_signature),
                error=str(e),
            )
            self.state.search_message = "Transaction not found"
            return False

        self.state.search_message = ""
        self.state.selected = tx
        self.state.view = View.DETAIL
        return True

    # =========================================================================
    # Connections view
    # =========================================================================

    def find_connections(self, second_address: str) -> list[Transaction]:
        """Recompute the fetched transactions touching second_address."""
        self.state.second_address = second_address.strip()
        if not self.state.second_address:
            self.state.connections = []
            return []

        self.state.connections = find_connections_in_store(self.store, self.state.second_address)
        return self.state.connections

    def connection_rows(self) -> list[list[str]]:
        return [_row(tx) for tx in self.state.connections]

    def select_connection(self, index: int) -> bool:
        """Select a row of the Connections table and switch to Detail."""
        return self._select(self.state.connections, index)

    # =========================================================================
    # Detail view
    # =========================================================================

    def detail(self) -> TransactionDetail | None:
        """Display data of the selected transaction, if any."""
        tx = self.state.selected
        if tx is None:
            return None

        signer_change = tx.signer_balance_change
        return TransactionDetail(
            signature=tx.signature,
            signer_change=format_sol(signer_change) if signer_change is not None else "N/A",
            accounts=[
                (entry.account, format_sol(entry.native_balance_change))
                for entry in tx.account_data
            ],
            type=tx.type,
            source=tx.source or "N/A",
            fee=format_sol(tx.fee) if tx.fee is not None else "N/A",
            timestamp=(
                tx.datetime_utc.strftime("%Y-%m-%d %H:%M:%S UTC") if tx.datetime_utc else "N/A"
            ),
            description=tx.description or "",
        )

    def _select(self, transactions: list[Transaction], index: int) -> bool:
        if not 0 <= index < len(transactions):
            return False
        self.state.selected = transactions[index]
        self.state.view = View.DETAIL
        log.debug("transaction_selected", signature=truncate_address(self.state.selected.signature))
        return True


def _row(tx: Transaction) -> list[str]:
    """Table row: [Signature, Type, Signer Change, Time]."""
    signer_change = tx.signer_balance_change
    return [
        tx.signature,
        tx.type,
        format_sol(signer_change) if signer_change is not None else "N/A",
        tx.datetime_utc.strftime("%Y-%m-%d %H:%M") if tx.datetime_utc else "N/A",
    ]
