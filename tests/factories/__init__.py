"""Test data factories using factory_boy.

These factories generate realistic Helius payloads for SOL Tools tests.
"""

from tests.factories.transaction import (
    AccountDataFactory,
    TransactionPayloadFactory,
    make_history,
    make_transaction,
)

__all__ = [
    "AccountDataFactory",
    "TransactionPayloadFactory",
    "make_history",
    "make_transaction",
]
