"""Main Gradio dashboard application.

Creates the SOL Tools window with its four views as tabs.
"""

from functools import partial

import gradio as gr
import structlog

from soltools.ui.controller import AppController, View
from soltools.ui.pages import connections, detail, fetch, search

log = structlog.get_logger(__name__)


def create_dashboard(controller: AppController) -> gr.Blocks:
    """Create the SOL Tools dashboard.

    Args:
        controller: Application controller shared by every view.

    Returns:
        Gradio Blocks application.
    """
    with gr.Blocks(title="SOL Tools") as app:
        pass

    # Theme as a property (Gradio 6.0 pattern)
    app.theme = gr.themes.Soft()

    with app:
        gr.Markdown("# SOL Tools")

        api_key = gr.Textbox(
            label="Helius API Key",
            value=controller.state.api_key,
            type="password",
        )

        detail_view = detail.create(controller)

        with gr.Tabs(selected=controller.state.view.value) as tabs:
            with gr.Tab("Get Transactions", id=View.FETCH.value) as fetch_tab:
                fetch.render(controller, api_key, tabs, detail_view)

            with gr.Tab("Search", id=View.SEARCH.value) as search_tab:
                search.render(controller, api_key, tabs, detail_view)

            with gr.Tab("Transaction", id=View.DETAIL.value) as detail_tab:
                detail_view.render()

            with gr.Tab("Find Connections", id=View.CONNECTIONS.value) as connections_tab:
                connections.render(controller, tabs, detail_view)

        for tab, view in (
            (fetch_tab, View.FETCH),
            (search_tab, View.SEARCH),
            (detail_tab, View.DETAIL),
            (connections_tab, View.CONNECTIONS),
        ):
            tab.select(fn=partial(_set_view, controller, view))

    log.info("dashboard_created", views=[view.value for view in View])

    return app


def _set_view(controller: AppController, view: View) -> None:
    controller.state.view = view
