"""Get Transactions view.

Starts the background fetch and shows its progress: transaction count,
busy indicator, outcome and the list of fetched signatures. A gr.Timer
drives one refresh per frame.
"""

import gradio as gr
import structlog

from soltools.config import get_settings
from soltools.ui.controller import AppController, View
from soltools.ui.pages import detail, selected_row

log = structlog.get_logger(__name__)

HEADERS = ["Signature", "Type", "Signer Change", "Time"]


def render(
    controller: AppController,
    api_key: gr.Textbox,
    tabs: gr.Tabs,
    detail_view: gr.Markdown,
) -> None:
    """Render the Get Transactions view.

    Args:
        controller: Application controller.
        api_key: Shared API key field.
        tabs: Tabs container, switched to Detail on row select.
        detail_view: Detail panel updated on row select.
    """
    settings = get_settings()

    with gr.Column():
        address = gr.Textbox(
            label="Solana Address",
            value=controller.state.address,
            placeholder="9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin",
        )

        with gr.Row():
            get_btn = gr.Button("Get Transactions", variant="primary")
            busy = gr.Markdown("", elem_id="fetch-busy")

        status = gr.Markdown(controller.state.fetch_message)
        count = gr.Markdown(f"Retrieved {controller.state.transactions_len} Transactions")

        with gr.Accordion("Transactions", open=False):
            table = gr.Dataframe(
                value=controller.transaction_rows(),
                headers=HEADERS,
                datatype=["str", "str", "str", "str"],
                interactive=False,
                wrap=True,
            )

    def _on_get(key: str, addr: str) -> tuple[str, str]:
        controller.start_fetch(key, addr)
        frame = controller.poll()
        return _busy_text(frame.fetching), frame.message

    def _on_tick() -> tuple[str, str, str, dict]:
        frame = controller.poll()
        if controller.rows_changed():
            rows = gr.update(value=controller.transaction_rows())
        else:
            rows = gr.update()
        return _busy_text(frame.fetching), frame.message, frame.label, rows

    def _on_select(evt: gr.SelectData) -> tuple:
        row_idx = selected_row(evt)
        if row_idx is None or not controller.select_fetched(row_idx):
            return gr.update(), gr.update()
        return gr.Tabs(selected=View.DETAIL.value), detail.refresh(controller)

    get_btn.click(fn=_on_get, inputs=[api_key, address], outputs=[busy, status])

    timer = gr.Timer(value=settings.ui_refresh_seconds)
    timer.tick(fn=_on_tick, outputs=[busy, status, count, table])

    table.select(fn=_on_select, outputs=[tabs, detail_view])


def _busy_text(fetching: bool) -> str:
    return "⏳ *Fetching...*" if fetching else ""
