"""Sequential batch extraction over the uploaded document queue."""
from __future__ import annotations
import time
from typing import Callable, List, Optional, Sequence

from core.logger import get_logger
from core.utils import make_transaction_id, new_batch_id
from models.schema import BatchState, ExtractedTransaction, FileData, ProcessingStatus, Transaction

log = get_logger("ingestion/batch")

DEFAULT_ERROR_MESSAGE = "Failed to extract data. Please ensure the files are valid PDFs or images."

Extractor = Callable[[FileData], Sequence[ExtractedTransaction]]
ProgressCallback = Callable[[BatchState], None]


class BatchExtractionError(RuntimeError):
    """A document failed to extract; the whole batch was abandoned."""

    def __init__(self, message: str, file_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.file_name = file_name


class BatchOrchestrator:
    """
    Runs the extraction collaborator over a queue of documents, one at a time.

    The batch is all-or-nothing: the consolidated list only reaches
    `state.transactions` once every document has been extracted. The first
    failure clears it and raises `BatchExtractionError`.
    """

    def __init__(self, extract: Extractor) -> None:
        self._extract = extract

    def run(
        self,
        files: Sequence[FileData],
        state: BatchState,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[Transaction]:
        """
        Extract every document in submission order into one tagged list.

        Args:
            files: Queued documents
            state: Session batch state, updated in place for progress display
            on_progress: Called with `state` after every progress change

        Returns:
            The consolidated transactions, or [] when `files` is empty

        Raises:
            BatchExtractionError: On the first document that fails
        """
        if not files:
            log.warning("Batch start refused: no documents queued")
            return []

        def _notify() -> None:
            if on_progress is not None:
                on_progress(state)

        batch_id = new_batch_id()
        state.status = ProcessingStatus.ANALYZING
        state.error = None
        state.processed_count = 0
        state.current_index = None
        state.total = len(files)
        state.transactions = []
        _notify()

        start_time = time.time()
        log.info(f"Batch {batch_id} started: documents={len(files)}")
        consolidated: List[Transaction] = []

        for i, file in enumerate(files):
            state.current_index = i
            _notify()
            log.debug(f"Batch {batch_id}: extracting {i + 1}/{len(files)} name={file.name}")

            try:
                records = self._extract(file)
            except Exception as e:
                message = str(e) or DEFAULT_ERROR_MESSAGE
                log.error(
                    f"Batch {batch_id} aborted on {file.name} ({i + 1}/{len(files)}): "
                    f"error={type(e).__name__}: {e}"
                )
                state.transactions = []
                state.current_index = None
                state.status = ProcessingStatus.ERROR
                state.error = message
                _notify()
                raise BatchExtractionError(message, file_name=file.name) from e

            consolidated.extend(
                Transaction.from_extracted(
                    record,
                    id=make_transaction_id(batch_id, i, j),
                    source_file=file.name,
                )
                for j, record in enumerate(records)
            )
            state.processed_count = i + 1
            log.info(f"Batch {batch_id}: {file.name} yielded {len(records)} transaction(s)")
            _notify()

        state.transactions = consolidated
        state.status = ProcessingStatus.SUCCESS
        state.current_index = None
        state.selected_view = None
        _notify()

        elapsed = time.time() - start_time
        log.info(
            f"Batch {batch_id} complete: documents={len(files)} "
            f"transactions={len(consolidated)} elapsed={elapsed:.2f}s"
        )
        return consolidated
