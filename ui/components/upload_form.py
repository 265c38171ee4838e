"""Upload form component."""
from __future__ import annotations
from typing import Optional, Tuple, List
from streamlit.runtime.uploaded_file_manager import UploadedFile
import streamlit as st

from core.config import config


def render_upload_form() -> Tuple[Optional[List[UploadedFile]], bool]:
    """
    Render the file upload form.

    Returns:
        (files, submitted)
    """
    with st.form("upload_form", clear_on_submit=True):
        files = st.file_uploader(
            "Upload statements",
            type=list(config.allowed_ext),
            accept_multiple_files=True,
            help="PDF statements or photos/scans of statement pages. Each file is analyzed on its own.",
        )
        submitted = st.form_submit_button("Add to batch ➜")

    return files or None, submitted
