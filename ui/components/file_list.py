"""File queue display component."""
from __future__ import annotations
from typing import Callable, List
import streamlit as st

from core.utils import human_size
from models.schema import BatchState, FileData


def file_status(index: int, state: BatchState) -> str:
    """Label for one queued file given the current batch progress."""
    if not state.is_running:
        return "queued"
    if index < state.processed_count:
        return "done"
    if index == state.current_index:
        return "in progress"
    return "waiting"


_STATUS_ICONS = {
    "queued": "📄",
    "done": "✅",
    "in progress": "⏳",
    "waiting": "🕒",
}


def render_file_list(
    queue: List[FileData],
    state: BatchState,
    on_remove: Callable[[int], None],
    on_clear: Callable[[], None],
) -> None:
    """
    Display the queued documents with per-file remove and a clear-all action.

    Args:
        queue: Documents waiting to be processed
        state: Batch state, used for per-file progress labels
        on_remove: Called with the index of the file to drop
        on_clear: Called to empty the queue
    """
    if not queue:
        return

    col1, col2 = st.columns([4, 1])
    with col1:
        st.subheader(f"📁 Queue ({len(queue)})")
    with col2:
        st.button(
            "Clear all",
            on_click=on_clear,
            disabled=state.is_running,
            use_container_width=True,
        )

    for idx, data in enumerate(queue):
        status = file_status(idx, state)
        col1, col2, col3 = st.columns([5, 2, 1])
        with col1:
            st.markdown(f"{_STATUS_ICONS[status]} **{data.name}**")
        with col2:
            st.caption(f"{human_size(data.size_bytes)} · {status}")
        with col3:
            st.button(
                "✕",
                key=f"remove_{idx}_{data.name}",
                on_click=on_remove,
                args=(idx,),
                disabled=state.is_running,
                help="Remove from batch",
            )
