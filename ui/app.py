"""StatementLens - Main Streamlit application entry point."""
from __future__ import annotations
from pathlib import Path
import sys
import streamlit as st

# Ensure project root is on sys.path for absolute imports
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from core.logger import get_logger
from models.schema import ProcessingStatus
from ui.config import setup_page
from ui.views import render_dashboard_page, render_ingest_page
from ui.services import SessionManager

log = get_logger("ui")

# Configure page
setup_page()

state = SessionManager.get_batch_state()
if state.status == ProcessingStatus.SUCCESS:
    render_dashboard_page()
else:
    render_ingest_page()
