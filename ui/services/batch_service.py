"""Batch processing business logic service."""
from __future__ import annotations
from typing import Optional, Tuple

from core.config import config
from core.logger import get_logger
from ingestion.batch import BatchExtractionError, BatchOrchestrator, Extractor, ProgressCallback
from models.schema import BatchState, FileData

log = get_logger("ui/services/batch_service")


class BatchService:
    """Connects the session queue to the batch orchestrator."""

    @staticmethod
    def validate_config() -> Tuple[bool, Optional[str]]:
        """
        Validate that Vertex AI is configured.

        Returns:
            (is_valid, error_message)
        """
        if not config.gcp_project_id:
            return False, "GCP project is not configured. Set GCP_PROJECT_ID."
        return True, None

    @staticmethod
    def default_extractor() -> Extractor:
        # Imported lazily so the dashboard renders without Vertex AI initialised
        from ingestion.extractor_vertex import make_extractor

        return make_extractor(
            gcp_project=config.gcp_project_id,
            gcp_location=config.gcp_location,
            vertex_model=config.vertex_model,
        )

    @staticmethod
    def process(
        files: list[FileData],
        state: BatchState,
        on_progress: Optional[ProgressCallback] = None,
        extract: Optional[Extractor] = None,
    ) -> Optional[str]:
        """
        Run one batch over the queue.

        Returns:
            None on success (or when the queue is empty), otherwise the
            error message to show.
        """
        orchestrator = BatchOrchestrator(extract or BatchService.default_extractor())
        try:
            orchestrator.run(files, state, on_progress=on_progress)
        except BatchExtractionError as e:
            log.warning(f"Batch failed on {e.file_name}: {e.message}")
            return e.message
        return None
