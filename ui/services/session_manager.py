"""Session state management service."""
from __future__ import annotations
import uuid
from typing import List, Optional
import streamlit as st

from core.logger import get_logger
from models.schema import BatchState, FileData

log = get_logger("ui/services/session_manager")


class SessionManager:
    """Centralized session state management."""

    @staticmethod
    def init_session() -> None:
        """Initialize session-specific state."""
        if "session_id" not in st.session_state:
            st.session_state["session_id"] = uuid.uuid4().hex
            log.info(f"Session started: {st.session_state['session_id']}")

        if "file_queue" not in st.session_state:
            st.session_state["file_queue"] = []

        if "batch_state" not in st.session_state:
            st.session_state["batch_state"] = BatchState()

    @staticmethod
    def get_file_queue() -> List[FileData]:
        """Get documents waiting to be processed."""
        SessionManager.init_session()
        return st.session_state["file_queue"]

    @staticmethod
    def add_files(files: List[FileData]) -> None:
        """Append newly uploaded documents to the queue."""
        SessionManager.init_session()
        st.session_state["file_queue"] = [*st.session_state["file_queue"], *files]
        log.info(f"Queued {len(files)} file(s); queue size={len(st.session_state['file_queue'])}")

    @staticmethod
    def remove_file(index: int) -> None:
        """Drop one document from the queue by position."""
        queue = SessionManager.get_file_queue()
        if 0 <= index < len(queue):
            removed = queue[index]
            st.session_state["file_queue"] = [f for i, f in enumerate(queue) if i != index]
            log.debug(f"Removed from queue: {removed.name}")

    @staticmethod
    def clear_files() -> None:
        """Empty the queue and dismiss any error message."""
        SessionManager.init_session()
        st.session_state["file_queue"] = []
        st.session_state["batch_state"].error = None
        log.debug("Cleared file queue")

    @staticmethod
    def get_batch_state() -> BatchState:
        """Get the session's batch state (progress, results, scope)."""
        SessionManager.init_session()
        return st.session_state["batch_state"]

    @staticmethod
    def get_selected_view() -> Optional[str]:
        """Current dashboard scope: None for all documents, otherwise a file name."""
        return SessionManager.get_batch_state().selected_view

    @staticmethod
    def set_selected_view(view: Optional[str]) -> None:
        SessionManager.get_batch_state().selected_view = view

    @staticmethod
    def reset() -> None:
        """Discard queue and results to start a new batch."""
        SessionManager.init_session()
        st.session_state["file_queue"] = []
        st.session_state["batch_state"].reset()
        log.info("Session batch reset")
