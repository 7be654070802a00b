"""Connection finder: fetched transactions that also touch a second address."""

from collections.abc import Iterable

import structlog

from soltools.core.exceptions import MissingFieldError
from soltools.core.store import TransactionStore
from soltools.core.utils import truncate_address
from soltools.services.helius.models import Transaction

log = structlog.get_logger(__name__)


def find_connections(transactions: Iterable[Transaction], address: str) -> list[Transaction]:
    """Collect the transactions whose account data contains address.

    Linear scan, no indexing. Store order is preserved and each matching
    transaction appears once, however many of its entries match.

    Args:
        transactions: Transactions to scan, in store order.
        address: Address to look for.

    Returns:
        Matching transactions in input order.

    Raises:
        MissingFieldError: If a record carries no account data attribute.
    """
    connections = []
    for tx in transactions:
        if getattr(tx, "account_data", None) is None:
            raise MissingFieldError(
                f"Transaction {getattr(tx, 'signature', '?')} has no accountData",
                field="accountData",
            )
        if tx.touches(address):
            connections.append(tx)
    return connections


def find_connections_in_store(store: TransactionStore, address: str) -> list[Transaction]:
    """Run find_connections over a blocking snapshot of the store."""
    transactions = store.iterate(blocking=True) or []
    connections = find_connections(transactions, address)
    log.info(
        "connections_found",
        address=truncate_address(address),
        scanned=len(transactions),
        matches=len(connections),
    )
    return connections
