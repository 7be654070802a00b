"""Helius API client for Solana transaction history.

This module provides an async client for the two Helius endpoints the tool
uses: the paginated address history and the single-transaction lookup.
"""

import httpx
import structlog

from soltools.config import get_settings
from soltools.core.exceptions import DecodeError
from soltools.core.utils import truncate_address
from soltools.services.base import BaseAPIClient
from soltools.services.helius.models import Transaction, parse_transactions

log = structlog.get_logger(__name__)


class HeliusClient(BaseAPIClient):
    """Async client for Helius API.

    The API key is passed per call because the user edits it in the UI;
    the underlying connection pool is shared across calls.

    Example:
        client = HeliusClient()
        page = await client.list_transactions(
            address="9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin",
            api_key="...",
        )
        await client.close()
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize HeliusClient.

        Args:
            base_url: Helius base URL (default: settings.helius_api_url).
            timeout: Request timeout in seconds (default: settings.request_timeout).
            transport: Optional httpx transport for tests.
        """
        settings = get_settings()
        base_url = base_url or settings.helius_api_url

        super().__init__(
            base_url=base_url,
            timeout=timeout if timeout is not None else settings.request_timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

        log.info("helius_client_initialized", base_url=base_url)

    async def list_transactions(
        self,
        address: str,
        api_key: str,
        before: str | None = None,
    ) -> list[Transaction]:
        """Get one page of transaction history for an address.

        Args:
            address: Solana address to fetch transactions for.
            api_key: Helius API key.
            before: Only return transactions before this signature (cursor).

        Returns:
            List of transactions, newest first. Empty when history is exhausted.

        Raises:
            NetworkError: If the request fails or returns a non-2xx status.
            DecodeError: If the body is not a JSON array of transactions.
            MissingFieldError: If a record lacks signature or accountData.
        """
        params = {"api-key": api_key}
        if before:
            params["before"] = before

        path = f"/v0/addresses/{address}/transactions"

        log.debug(
            "fetching_address_transactions",
            address=truncate_address(address),
            before=truncate_address(before) if before else None,
        )

        response = await self.get(path, params=params)
        transactions = parse_transactions(self._decode(response))

        log.debug(
            "address_transactions_fetched",
            address=truncate_address(address),
            transaction_count=len(transactions),
        )
        return transactions

    async def lookup_transaction(self, signature: str, api_key: str) -> Transaction:
        """Look up a single transaction by signature.

        Args:
            signature: Transaction signature.
            api_key: Helius API key.

        Returns:
            The parsed transaction.

        Raises:
            NetworkError: If the request fails or returns a non-2xx status.
            DecodeError: If the body is malformed or holds no transaction.
            MissingFieldError: If the record lacks signature or accountData.
        """
        log.info("looking_up_transaction", signature=truncate_address(signature))

        response = await self.post(
            "/v0/transactions/",
            params={"api-key": api_key},
            json={"transactions": [signature]},
        )
        transactions = parse_transactions(self._decode(response))

        if not transactions:
            raise DecodeError(f"No transaction returned for {truncate_address(signature)}")

        return transactions[0]

    @staticmethod
    def _decode(response: httpx.Response) -> object:
        try:
            return response.json()
        except ValueError as e:
            log.warning("helius_response_not_json", status_code=response.status_code)
            raise DecodeError(f"Response body is not valid JSON: {e}") from e
