from .batch import BatchExtractionError, BatchOrchestrator
