"""Domain layer - wire models, errors and the client protocol, with no I/O."""

from .errors import (
    Cancelled,
    DecodingError,
    FileError,
    InvalidParameters,
    InvalidResponse,
    ModelNotFound,
    NetworkError,
    OllamaError,
    ServerError,
    UnexpectedStatusCode,
)

__all__ = [
    "Cancelled",
    "DecodingError",
    "FileError",
    "InvalidParameters",
    "InvalidResponse",
    "ModelNotFound",
    "NetworkError",
    "OllamaError",
    "ServerError",
    "UnexpectedStatusCode",
]
