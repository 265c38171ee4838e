from __future__ import annotations
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator

UNCATEGORIZED = "Uncategorized"


class ProcessingStatus(str, Enum):
    IDLE = "IDLE"
    UPLOADING = "UPLOADING"
    ANALYZING = "ANALYZING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class ExtractedTransaction(BaseModel):
    """One record as returned by the extraction model, before batch tagging."""
    date: str
    description: str = Field(default="")
    amount: float
    category: str = Field(default=UNCATEGORIZED)
    notes: str = Field(default="")

    model_config = {
        "extra": "ignore",
    }

    @field_validator("date", "description", mode="before")
    @classmethod
    def _strip_text(cls, value) -> str:
        return str(value).strip() if value is not None else ""

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value) -> str:
        if value is None:
            return UNCATEGORIZED
        s = str(value).strip()
        return s or UNCATEGORIZED

    @field_validator("notes", mode="before")
    @classmethod
    def _strip_notes(cls, value) -> str:
        if value is None:
            return ""
        return str(value).strip()


class Transaction(ExtractedTransaction):
    id: str
    sourceFile: str = Field(min_length=1)

    model_config = {
        "extra": "forbid",
        "frozen": True,
    }

    @classmethod
    def from_extracted(cls, record: ExtractedTransaction, *, id: str, source_file: str) -> "Transaction":
        return cls(**record.model_dump(), id=id, sourceFile=source_file)


class ExtractionResponse(BaseModel):
    transactions: list[ExtractedTransaction] = Field(default_factory=list)

    @field_validator("transactions", mode="before")
    @classmethod
    def _ensure_list(cls, value):
        if value is None:
            return []
        return value


class FileData(BaseModel):
    """An uploaded document waiting in the batch queue."""
    name: str = Field(min_length=1)
    mime_type: str
    content: bytes = Field(repr=False)
    size_bytes: int = Field(ge=0)


class CategorySummary(BaseModel):
    name: str
    value: float
    percentage: float
    color: str


class TransactionSummary(BaseModel):
    count: int = 0
    income: float = 0.0
    expenses: float = 0.0
    net: float = 0.0
    categoryData: list[CategorySummary] = Field(default_factory=list)


class BatchState(BaseModel):
    """
    Per-session batch progress and results.

    `selected_view` is the dashboard scope: None means all documents,
    otherwise the name of exactly one uploaded document.
    """
    status: ProcessingStatus = ProcessingStatus.IDLE
    processed_count: int = 0
    current_index: Optional[int] = None
    total: int = 0
    transactions: list[Transaction] = Field(default_factory=list)
    error: Optional[str] = None
    selected_view: Optional[str] = None

    @property
    def progress(self) -> float:
        """Completed share of the batch in the 0..1 range."""
        if self.total <= 0:
            return 0.0
        return self.processed_count / self.total

    @property
    def is_running(self) -> bool:
        return self.status == ProcessingStatus.ANALYZING

    def reset(self) -> None:
        self.status = ProcessingStatus.IDLE
        self.processed_count = 0
        self.current_index = None
        self.total = 0
        self.transactions = []
        self.error = None
        self.selected_view = None
