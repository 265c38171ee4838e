"""UI views module."""
from .ingest_page import render as render_ingest_page
from .dashboard_page import render as render_dashboard_page

__all__ = ["render_ingest_page", "render_dashboard_page"]
