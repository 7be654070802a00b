"""Pydantic models for Helius API responses.

This module defines type-safe models for the parts of the Helius Enhanced
Transactions API the tool consumes: the transaction signature and the
per-account native balance changes. Every other provider field is kept on
the model untouched so the detail view can show it.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from soltools.core.exceptions import DecodeError, MissingFieldError


class AccountData(BaseModel):
    """Balance changes of a single account touched by a transaction."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    account: str
    native_balance_change: int = Field(..., alias="nativeBalanceChange")  # lamports
    token_balance_changes: list[dict[str, Any]] = Field(
        default_factory=list, alias="tokenBalanceChanges"
    )


class Transaction(BaseModel):
    """Helius Enhanced Transaction model.

    Attributes:
        signature: Transaction signature (unique ID, pagination cursor).
        account_data: Accounts touched by the transaction with their deltas.
            The first entry is the signer / fee payer.
        timestamp: Unix timestamp (seconds since epoch), if provided.
        type: Transaction type (SWAP, TRANSFER, etc.).
        source: Program source (SYSTEM_PROGRAM, JUPITER, etc.).
        fee: Fee in lamports.
        fee_payer: Fee payer address.
        description: Human-readable summary from Helius.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    signature: str
    account_data: list[AccountData] = Field(..., alias="accountData")
    timestamp: int | None = None
    type: str = Field(default="UNKNOWN")
    source: str | None = None
    fee: int | None = None
    fee_payer: str | None = Field(default=None, alias="feePayer")
    description: str | None = None

    @property
    def accounts(self) -> list[str]:
        """Addresses of every account touched, in provider order."""
        return [entry.account for entry in self.account_data]

    @property
    def signer_balance_change(self) -> int | None:
        """Native balance change of the first account (the signer), in lamports."""
        if not self.account_data:
            return None
        return self.account_data[0].native_balance_change

    @property
    def datetime_utc(self) -> datetime | None:
        """Get transaction datetime in UTC."""
        if self.timestamp is None:
            return None
        return datetime.fromtimestamp(self.timestamp, tz=UTC)

    def touches(self, address: str) -> bool:
        """Check if any account-data entry belongs to address."""
        return any(entry.account == address for entry in self.account_data)


def _decode_error(e: ValidationError, index: int | None = None) -> DecodeError:
    """Map a pydantic ValidationError onto the decode error taxonomy."""
    prefix = f"[{index}]." if index is not None else ""
    for error in e.errors():
        if error["type"] == "missing":
            location = prefix + ".".join(str(part) for part in error["loc"])
            return MissingFieldError(
                f"Transaction record is missing '{location}'",
                field=location,
            )
    return DecodeError(f"Unexpected transaction shape: {e}")


def parse_transaction(data: Any, index: int | None = None) -> Transaction:
    """Validate a single raw transaction object.

    Args:
        data: Decoded JSON object.
        index: Position in the enclosing array, used in error locations.

    Raises:
        MissingFieldError: If signature or accountData (or an entry field) is absent.
        DecodeError: If the object has the wrong shape or types.
    """
    if not isinstance(data, dict):
        message = f"Expected a JSON object, got {type(data).__name__}"
        if index is not None:
            message = f"[{index}]: {message}"
        raise DecodeError(message)
    try:
        return Transaction.model_validate(data)
    except ValidationError as e:
        raise _decode_error(e, index) from e


def parse_transactions(payload: Any) -> list[Transaction]:
    """Validate a JSON array of raw transaction objects.

    Args:
        payload: Decoded JSON body from Helius.

    Returns:
        List of Transaction models in provider order.

    Raises:
        DecodeError: If payload is not a list or a record has the wrong shape.
        MissingFieldError: If a record lacks a required field.
    """
    if not isinstance(payload, list):
        raise DecodeError(f"Expected a JSON array, got {type(payload).__name__}")

    return [parse_transaction(item, index) for index, item in enumerate(payload)]
