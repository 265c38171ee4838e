"""Sidebar component."""
from __future__ import annotations
from typing import List, Optional
import streamlit as st

ALL_DOCUMENTS_LABEL = "📊 All documents"


def render_sidebar(documents: List[str], selected: Optional[str]) -> Optional[str]:
    """
    Render the scope navigation.

    Args:
        documents: Source document names in submission order
        selected: Current scope (None for all documents)

    Returns:
        The scope chosen by the user
    """
    with st.sidebar:
        st.subheader("Views")
        options: List[Optional[str]] = [None, *documents]
        index = options.index(selected) if selected in options else 0
        choice = st.radio(
            "Scope",
            options,
            index=index,
            format_func=lambda v: ALL_DOCUMENTS_LABEL if v is None else f"📄 {v}",
            label_visibility="collapsed",
        )

        st.divider()
        st.caption("**StatementLens** — Statement Batch Analyzer")
        st.caption("Upload statements, extract transactions with Gemini, and export CSV.")

    return choice
