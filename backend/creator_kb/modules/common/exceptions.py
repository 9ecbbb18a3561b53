"""Domain exception classes for business logic errors.

Every error carries a stable ``kind`` string that is returned to API callers
next to the human-readable message, so clients can branch on the failure
without parsing text.
"""


class DomainError(Exception):
    """Base class for all domain-specific errors."""

    kind = "domain_error"


class ResourceNotFoundError(DomainError):
    """Raised when a requested resource cannot be found."""

    kind = "not_found"


class ValidationError(DomainError):
    """Raised when request data fails validation (missing title, empty upload)."""

    kind = "validation_error"


class FileTooLargeError(ValidationError):
    """Raised when an upload exceeds the configured byte limit."""

    kind = "file_too_large"

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"File is too large ({size} bytes). Max allowed is {limit} bytes")


class IngestionError(DomainError):
    """Base class for failures of the ingestion pipeline."""

    kind = "ingestion_error"


class UnsupportedMediaTypeError(IngestionError):
    """Raised when no extractor handles the uploaded media type."""

    kind = "unsupported_media_type"

    def __init__(self, message: str = "Unable to extract text from document. Only PDF and UTF-8 text files are supported."):
        super().__init__(message)


class EmptyExtractionError(IngestionError):
    """Raised when extraction ran but produced no usable text."""

    kind = "empty_extraction"

    def __init__(self, message: str = "Document did not contain extractable text after processing."):
        super().__init__(message)


class ChunkingProducedNothingError(IngestionError):
    """Raised when normalized text is non-empty but yields zero chunks."""

    kind = "chunking_produced_nothing"

    def __init__(self, message: str = "Document could not be chunked"):
        super().__init__(message)


class TooManyChunksError(IngestionError):
    """Raised when a document needs more chunks than the configured ceiling."""

    kind = "too_many_chunks"

    def __init__(self, required: int, limit: int):
        self.required = required
        self.limit = limit
        super().__init__(
            f"Document produced {required} chunks which exceeds the limit of {limit}. "
            "Try uploading a shorter document or adjust chunking configuration."
        )


class EmbeddingError(IngestionError):
    """Raised when an embedding call fails or returns an empty vector."""

    kind = "embedding_error"


class StoreInconsistencyError(IngestionError):
    """Raised when chunk and embedding counts diverge before the commit point."""

    kind = "store_inconsistency"


class SourceNotConfiguredError(ResourceNotFoundError):
    """Raised when the canonical advice document has not been ingested."""

    kind = "source_not_configured"

    def __init__(self, message: str = "Advice document not available"):
        super().__init__(message)


class AdviceExhaustedError(ResourceNotFoundError):
    """Raised when every non-empty advice chunk is in the caller's exclusion set."""

    kind = "advice_exhausted"

    def __init__(self, message: str = "No additional advice available"):
        super().__init__(message)
