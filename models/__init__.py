from .schema import (
    UNCATEGORIZED,
    BatchState,
    CategorySummary,
    ExtractedTransaction,
    ExtractionResponse,
    FileData,
    ProcessingStatus,
    Transaction,
    TransactionSummary,
)
