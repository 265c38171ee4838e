"""UI services module."""
from .session_manager import SessionManager
from .upload_service import UploadService
from .batch_service import BatchService

__all__ = ["SessionManager", "UploadService", "BatchService"]
