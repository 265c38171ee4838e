"""UI components module."""
from .upload_form import render_upload_form
from .file_list import render_file_list
from .sidebar import render_sidebar
from .summary_view import render as render_summary_view

__all__ = [
    "render_upload_form",
    "render_file_list",
    "render_sidebar",
    "render_summary_view",
]
