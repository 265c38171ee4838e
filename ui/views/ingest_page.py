"""Ingest page - orchestrates file upload and batch extraction."""
from __future__ import annotations
import streamlit as st

from core.logger import get_logger
from models.schema import BatchState
from ui.services import BatchService, SessionManager, UploadService
from ui.components import render_file_list, render_upload_form

log = get_logger("ui/views/ingest_page")


def render() -> None:
    """Render the ingest page."""
    SessionManager.init_session()
    state = SessionManager.get_batch_state()

    st.header("📥 Upload Statements")
    st.caption("Add one or more statements (PDF or images). Each document is analyzed in turn.")

    if state.error:
        st.error(f"❌ {state.error}")

    files, submitted = render_upload_form()
    if submitted and files:
        _handle_upload(files)

    queue = SessionManager.get_file_queue()
    render_file_list(
        queue,
        state,
        on_remove=SessionManager.remove_file,
        on_clear=SessionManager.clear_files,
    )

    if queue and st.button(
        f"Process {len(queue)} statement{'s' if len(queue) != 1 else ''} ➜",
        type="primary",
        disabled=state.is_running,
        use_container_width=True,
    ):
        _handle_process(state)


def _handle_upload(files) -> None:
    """Validate uploads and append them to the session queue."""
    queue = SessionManager.get_file_queue()

    is_valid, error_msg = UploadService.validate_files(files, queue)
    if not is_valid:
        st.error(error_msg)
        log.warning(f"Upload validation failed: {error_msg}")
        return

    new_entries, skipped = UploadService.process_uploads(files, queue)
    if skipped:
        st.warning(f"Skipped files already in the batch: {', '.join(skipped)}")
    if new_entries:
        SessionManager.add_files(new_entries)


def _handle_process(state: BatchState) -> None:
    """Run the batch with a live progress bar."""
    is_valid, error_msg = BatchService.validate_config()
    if not is_valid:
        st.error(error_msg)
        return

    queue = SessionManager.get_file_queue()
    progress = st.progress(0.0, text="Starting analysis...")

    def _on_progress(s: BatchState) -> None:
        if s.current_index is not None:
            label = f"Analyzing {queue[s.current_index].name} ({s.processed_count}/{s.total} done)"
        else:
            label = f"{s.processed_count}/{s.total} documents analyzed"
        progress.progress(s.progress, text=label)

    with st.status("Extracting transactions with Gemini...", expanded=False) as status:
        error = BatchService.process(queue, state, on_progress=_on_progress)
        if error:
            status.update(label="Extraction failed", state="error")
        else:
            status.update(
                label=f"✅ Extracted {len(state.transactions)} transaction(s) from {state.total} document(s).",
                state="complete",
            )

    st.rerun()
