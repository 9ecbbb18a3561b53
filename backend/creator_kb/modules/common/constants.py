"""Common constants used across the application."""

from typing import Callable, Dict, Type

from fastapi import HTTPException, status

from .exceptions import (
    ChunkingProducedNothingError,
    DomainError,
    EmbeddingError,
    EmptyExtractionError,
    FileTooLargeError,
    ResourceNotFoundError,
    StoreInconsistencyError,
    TooManyChunksError,
    UnsupportedMediaTypeError,
    ValidationError,
)

# Checked in order with isinstance, so subclasses must precede their bases.
EXCEPTION_MAPPING: Dict[Type[DomainError], Callable[[str], HTTPException]] = {
    FileTooLargeError: lambda message: HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=message),
    ValidationError: lambda message: HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message),
    UnsupportedMediaTypeError: lambda message: HTTPException(
        status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=message
    ),
    EmptyExtractionError: lambda message: HTTPException(status_code=422, detail=message),
    ChunkingProducedNothingError: lambda message: HTTPException(status_code=422, detail=message),
    TooManyChunksError: lambda message: HTTPException(status_code=422, detail=message),
    EmbeddingError: lambda message: HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=message),
    StoreInconsistencyError: lambda message: HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message
    ),
    ResourceNotFoundError: lambda message: HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message),
}
