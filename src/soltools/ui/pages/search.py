"""Search view: look up a single transaction by signature."""

import gradio as gr

from soltools.ui.controller import AppController, View
from soltools.ui.pages import detail


def render(
    controller: AppController,
    api_key: gr.Textbox,
    tabs: gr.Tabs,
    detail_view: gr.Markdown,
) -> None:
    """Render the Search view.

    On success the Detail view opens; on failure the view stays here and
    shows a short message.
    """
    with gr.Column():
        signature = gr.Textbox(label="Signature", value=controller.state.search_signature)
        search_btn = gr.Button("Get Transaction", variant="primary")
        message = gr.Markdown("")

    def _on_search(key: str, sig: str) -> tuple:
        if not controller.search(key, sig):
            return gr.update(), gr.update(), f"⚠️ {controller.state.search_message}"
        return gr.Tabs(selected=View.DETAIL.value), detail.refresh(controller), ""

    search_btn.click(
        fn=_on_search,
        inputs=[api_key, signature],
        outputs=[tabs, detail_view, message],
    )
