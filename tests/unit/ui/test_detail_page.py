"""Tests for the Detail view Markdown and the Dataframe select helper."""

from types import SimpleNamespace

import pytest

from soltools.ui.controller import TransactionDetail
from soltools.ui.pages import selected_row
from soltools.ui.pages.detail import EMPTY_DETAIL, format_detail_markdown


def _detail(**overrides) -> TransactionDetail:
    values = {
        "signature": "5wHu1qwD7q5ifaN5nwdc",
        "signer_change": "-1.000005000 SOL",
        "accounts": [
            ("7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU", "-1.000005000 SOL"),
            ("DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263", "+1.000000000 SOL"),
        ],
        "type": "TRANSFER",
        "source": "SYSTEM_PROGRAM",
        "fee": "+0.000005000 SOL",
        "timestamp": "2024-01-15 12:00:00 UTC",
        "description": "7xKX...gAsU transferred 1 SOL to DezX...B263.",
    }
    values.update(overrides)
    return TransactionDetail(**values)


@pytest.mark.unit
def test_nothing_selected() -> None:
    assert format_detail_markdown(None) == EMPTY_DETAIL


@pytest.mark.unit
def test_shows_signature_and_signer_change() -> None:
    markdown = format_detail_markdown(_detail())

    assert "| **Signature** | `5wHu1qwD7q5ifaN5nwdc` |" in markdown
    assert "| **Signer SOL Balance Change** | -1.000005000 SOL |" in markdown


@pytest.mark.unit
def test_lists_every_account_in_order() -> None:
    markdown = format_detail_markdown(_detail())

    first = markdown.index("`7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU`")
    second = markdown.index("`DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263`")
    assert first < second
    assert "| +1.000000000 SOL |" in markdown


@pytest.mark.unit
def test_no_accounts() -> None:
    markdown = format_detail_markdown(_detail(accounts=[], signer_change="N/A"))

    assert "| *none* | |" in markdown
    assert "| **Signer SOL Balance Change** | N/A |" in markdown


@pytest.mark.unit
def test_description_quoted_when_present() -> None:
    assert "> 7xKX...gAsU transferred" in format_detail_markdown(_detail())
    assert ">" not in format_detail_markdown(_detail(description=""))


@pytest.mark.unit
@pytest.mark.parametrize(("index", "expected"), [([3, 1], 3), ((0, 2), 0), (7, 7), (None, None)])
def test_selected_row(index, expected) -> None:
    assert selected_row(SimpleNamespace(index=index)) == expected
