"""Dashboard page - scoped summary, transaction table and CSV export."""
from __future__ import annotations
import streamlit as st

from analytics import export_filename, filter_by_scope, source_files, summarize, to_csv_bytes
from core.logger import get_logger
from ui.services import SessionManager
from ui.components import render_sidebar, render_summary_view

log = get_logger("ui/views/dashboard_page")


def render() -> None:
    """Render the dashboard page for the current batch results."""
    SessionManager.init_session()
    state = SessionManager.get_batch_state()

    scope = render_sidebar(source_files(state.transactions), state.selected_view)
    if scope != state.selected_view:
        SessionManager.set_selected_view(scope)
        log.debug(f"Scope changed: {scope or 'all'}")

    scoped = filter_by_scope(state.transactions, scope)
    summary = summarize(scoped)

    col1, col2, col3 = st.columns([3, 2, 1])
    with col1:
        st.header("📊 Batch Overview" if scope is None else f"📄 {scope}")
        st.caption(f"{state.total} document(s) analyzed")
    with col2:
        payload = to_csv_bytes(scoped)
        st.download_button(
            f"⬇️ Export {'Batch' if scope is None else 'File'} CSV",
            data=payload or b"",
            file_name=export_filename(scope),
            mime="text/csv",
            disabled=payload is None,
            use_container_width=True,
        )
    with col3:
        st.button("New batch", on_click=SessionManager.reset, use_container_width=True)

    render_summary_view(summary, scoped)
