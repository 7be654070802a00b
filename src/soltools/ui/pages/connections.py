"""Find Connections view: fetched transactions that touch a second address."""

import gradio as gr

from soltools.ui.controller import AppController, View
from soltools.ui.pages import detail, selected_row
from soltools.ui.pages.fetch import HEADERS


def render(
    controller: AppController,
    tabs: gr.Tabs,
    detail_view: gr.Markdown,
) -> None:
    """Render the Find Connections view."""
    with gr.Column():
        second_address = gr.Textbox(
            label="Second Address",
            value=controller.state.second_address,
        )
        find_btn = gr.Button("Find Connections", variant="primary")
        summary = gr.Markdown("")
        table = gr.Dataframe(
            value=controller.connection_rows(),
            headers=HEADERS,
            datatype=["str", "str", "str", "str"],
            interactive=False,
            wrap=True,
        )

    def _on_find(addr: str) -> tuple[str, list[list[str]]]:
        connections = controller.find_connections(addr)
        if not controller.state.second_address:
            return "*Enter a second address*", []
        return f"### Connections\n\n{len(connections)} transactions", controller.connection_rows()

    def _on_select(evt: gr.SelectData) -> tuple:
        row_idx = selected_row(evt)
        if row_idx is None or not controller.select_connection(row_idx):
            return gr.update(), gr.update()
        return gr.Tabs(selected=View.DETAIL.value), detail.refresh(controller)

    find_btn.click(fn=_on_find, inputs=[second_address], outputs=[summary, table])
    table.select(fn=_on_select, outputs=[tabs, detail_view])
