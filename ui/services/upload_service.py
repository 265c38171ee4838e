"""Upload business logic service."""
from __future__ import annotations
import mimetypes
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
from streamlit.runtime.uploaded_file_manager import UploadedFile

from core.config import config
from core.logger import get_logger
from core.utils import human_size, sha256_bytes
from models.schema import FileData

log = get_logger("ui/services/upload_service")

MIME_BY_EXT = {
    "pdf": "application/pdf",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
}


class UploadService:
    """Handles file upload business logic."""

    @staticmethod
    def validate_files(files: Sequence[UploadedFile], queued: Sequence[FileData] = ()) -> Tuple[bool, Optional[str]]:
        """
        Validate uploaded files against the upload policy, counting what is already queued.

        Returns:
            (is_valid, error_message)
        """
        if not files:
            return False, "Please upload at least one file."

        if len(files) + len(queued) > config.max_files:
            return False, f"Too many files. Max allowed: {config.max_files}."

        total_size = sum(f.size for f in files) + sum(f.size_bytes for f in queued)
        if total_size > config.max_total_bytes:
            return False, f"Total upload size exceeds {config.max_total_mb} MB."

        for f in files:
            ext = Path(f.name).suffix.lower().lstrip(".")
            if ext not in config.allowed_ext:
                return False, f"Unsupported file type: {Path(f.name).name}"

        return True, None

    @staticmethod
    def resolve_mime_type(name: str, declared: Optional[str] = None) -> str:
        """Prefer the browser-declared type, falling back to the extension."""
        if declared:
            return declared
        ext = Path(name).suffix.lower().lstrip(".")
        return MIME_BY_EXT.get(ext) or mimetypes.guess_type(name)[0] or "application/octet-stream"

    @staticmethod
    def to_file_data(file: UploadedFile) -> FileData:
        """Read an uploaded file into a queue entry."""
        name = Path(file.name).name
        content = file.getvalue()
        data = FileData(
            name=name,
            mime_type=UploadService.resolve_mime_type(name, getattr(file, "type", None)),
            content=content,
            size_bytes=len(content),
        )
        log.info(
            f"Read upload: name={data.name} type={data.mime_type} "
            f"size={human_size(data.size_bytes)} sha256={sha256_bytes(content)[:16]}"
        )
        return data

    @staticmethod
    def process_uploads(files: Sequence[UploadedFile], queued: Sequence[FileData] = ()) -> Tuple[List[FileData], List[str]]:
        """
        Convert uploads into queue entries.

        A document whose content or name is already queued is skipped: the
        name is the scope key of the dashboard and must stay unique.

        Returns:
            (new_entries, skipped_names)
        """
        known_hashes = {sha256_bytes(f.content) for f in queued}
        known_names = {f.name for f in queued}
        new_entries: List[FileData] = []
        skipped: List[str] = []

        for f in files:
            data = UploadService.to_file_data(f)
            digest = sha256_bytes(data.content)
            if digest in known_hashes or data.name in known_names:
                log.warning(f"Duplicate upload skipped: {data.name}")
                skipped.append(data.name)
                continue
            known_hashes.add(digest)
            known_names.add(data.name)
            new_entries.append(data)

        return new_entries, skipped
