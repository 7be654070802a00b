"""Shared pytest fixtures for SOL Tools tests.

This module provides fixtures for:
- Test environment variables and a fresh settings cache
- Sample Helius payloads and parsed transactions
- A started AsyncRuntime and a fake paged Helius provider

Usage:
    @pytest.mark.unit
    def test_something(transaction_factory):
        payload = transaction_factory()
        assert "signature" in payload
"""

import os
from collections.abc import Generator
from typing import Any

import pytest

from soltools.config import get_settings
from soltools.workers.runtime import AsyncRuntime
from tests.factories.transaction import TransactionPayloadFactory, make_history
from tests.fixtures.helius_fake import FakePagedHelius

# =============================================================================
# Environment Configuration
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """Set up test environment variables.

    Loads .env file first, then pins the values tests depend on.
    """
    from dotenv import load_dotenv

    original_env = os.environ.copy()

    # Load .env file if it exists (won't override existing env vars)
    load_dotenv()

    os.environ["HELIUS_API_URL"] = "https://api.helius.xyz"
    os.environ["HELIUS_API_KEY"] = ""
    os.environ["REQUEST_TIMEOUT"] = "5"
    os.environ.setdefault("LOG_LEVEL", "INFO")

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Drop the cached Settings around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def transaction_factory() -> type[TransactionPayloadFactory]:
    """Provide factory for raw Helius transaction payloads."""
    return TransactionPayloadFactory


@pytest.fixture
def valid_solana_address() -> str:
    """Provide a valid Solana address for testing."""
    return "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"


@pytest.fixture
def sample_transaction_payload() -> dict[str, Any]:
    """Provide a sample Helius enhanced transaction."""
    return {
        "description": "7xKX...gAsU transferred 1 SOL to DezX...B263.",
        "type": "TRANSFER",
        "source": "SYSTEM_PROGRAM",
        "fee": 5000,
        "feePayer": "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU",
        "signature": "5wHu1qwD7q5ifaN5nwdcDqNFo53GJqa7nLp2BeeEpcHCusb4GzARz4GjgzsEHMkBMgCJMGa6GSQ1VG96Exv8kt2W",
        "slot": 123456789,
        "timestamp": 1705320000,
        "nativeTransfers": [
            {
                "fromUserAccount": "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU",
                "toUserAccount": "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
                "amount": 1000000000,
            }
        ],
        "tokenTransfers": [],
        "accountData": [
            {
                "account": "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU",
                "nativeBalanceChange": -1000005000,
                "tokenBalanceChanges": [],
            },
            {
                "account": "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
                "nativeBalanceChange": 1000000000,
                "tokenBalanceChanges": [],
            },
            {
                "account": "11111111111111111111111111111111",
                "nativeBalanceChange": 0,
                "tokenBalanceChanges": [],
            },
        ],
    }


# =============================================================================
# Runtime and Fakes
# =============================================================================


@pytest.fixture
def runtime() -> Generator[AsyncRuntime, None, None]:
    """Provide a started AsyncRuntime, stopped after the test."""
    rt = AsyncRuntime(name="test-runtime")
    rt.start()
    yield rt
    rt.stop()


@pytest.fixture
def fake_helius() -> FakePagedHelius:
    """Provide a fake provider with 250 transactions in pages of 100."""
    return FakePagedHelius(make_history(250), page_size=100)


# =============================================================================
# Markers for Test Selection
# =============================================================================

# Usage:
# pytest -m unit          # Run only unit tests
