"""Transaction detail view.

Shows the selected transaction: signature, signer SOL balance change and
every touched account with its native balance change.
"""

import gradio as gr

from soltools.ui.controller import AppController, TransactionDetail

EMPTY_DETAIL = "*Select a transaction from Get Transactions, Search or Find Connections*"


def format_detail_markdown(detail: TransactionDetail | None) -> str:
    """Render TransactionDetail as Markdown.

    Args:
        detail: Detail data, or None when nothing is selected.

    Returns:
        Markdown string for the detail panel.
    """
    if detail is None:
        return EMPTY_DETAIL

    account_rows = "\n".join(
        f"| `{account}` | {change} |" for account, change in detail.accounts
    )
    if not account_rows:
        account_rows = "| *none* | |"

    description = f"\n> {detail.description}\n" if detail.description else ""

    return f"""
### Transaction Info

| Field | Value |
|-------|-------|
| **Signature** | `{detail.signature}` |
| **Signer SOL Balance Change** | {detail.signer_change} |
| **Type** | {detail.type} |
| **Source** | {detail.source} |
| **Fee** | {detail.fee} |
| **Time** | {detail.timestamp} |
{description}
### Accounts

| Account | SOL Change |
|---------|------------|
{account_rows}
"""


def create(controller: AppController) -> gr.Markdown:
    """Create the detail panel unrendered so other views can target it.

    Call .render() on the result inside the Transaction tab.
    """
    return gr.Markdown(value=format_detail_markdown(controller.detail()), render=False)


def refresh(controller: AppController) -> str:
    """Current detail Markdown."""
    return format_detail_markdown(controller.detail())
