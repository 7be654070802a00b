"""Dashboard views package."""

import gradio as gr


def selected_row(evt: gr.SelectData) -> int | None:
    """Row index of a Dataframe select event, or None."""
    if evt.index is None:
        return None
    if isinstance(evt.index, list | tuple):
        return int(evt.index[0])
    return int(evt.index)
