"""
Error taxonomy for the Ollama client.

Every failure surfaced by the library is an OllamaError subclass so callers
can catch the whole family with one clause, or single out a specific kind.
"""

from __future__ import annotations
from typing import Optional


class OllamaError(Exception):
    """Base exception for all Ollama client errors."""

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(description)


class InvalidResponse(OllamaError):
    """The server returned something that is not an HTTP response."""

    def __init__(self) -> None:
        super().__init__("The server returned an invalid response")


class DecodingError(OllamaError):
    """A well-formed success response could not be decoded."""

    def __init__(self, underlying: BaseException) -> None:
        self.underlying = underlying
        super().__init__(f"Failed to decode response: {underlying}")


class ServerError(OllamaError):
    """5xx response from the server."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Server error: {message}")


class ModelNotFound(OllamaError):
    """404 response from the server."""

    def __init__(self) -> None:
        super().__init__("The requested model was not found")


class Cancelled(OllamaError):
    """The operation was cancelled by the caller."""

    def __init__(self) -> None:
        super().__init__("The operation was cancelled")


class NetworkError(OllamaError):
    """Transport failure, raised once retries are exhausted."""

    def __init__(self, underlying: BaseException) -> None:
        self.underlying = underlying
        super().__init__(f"Network error: {underlying}")


class UnexpectedStatusCode(OllamaError):
    """Any HTTP status outside the explicitly handled set."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Unexpected status code: {status_code}")


class InvalidParameters(OllamaError):
    """400 response from the server, or a request that could not be encoded."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Invalid parameters: {message}")


class FileError(OllamaError):
    """Local file I/O problem in a collaborator (never raised by the transport)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"File error: {message}")


def classify_status(status_code: int, body: bytes) -> Optional[OllamaError]:
    """Map an HTTP status and body to an error, or None for 2xx."""
    if 200 <= status_code <= 299:
        return None
    if status_code == 404:
        return ModelNotFound()
    if status_code == 400:
        return InvalidParameters(_body_text(body, "Unknown error"))
    if 500 <= status_code <= 599:
        return ServerError(_body_text(body, "Unknown server error"))
    return UnexpectedStatusCode(status_code)


def _body_text(body: bytes, fallback: str) -> str:
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        return fallback


__all__ = [
    "OllamaError",
    "InvalidResponse",
    "DecodingError",
    "ServerError",
    "ModelNotFound",
    "Cancelled",
    "NetworkError",
    "UnexpectedStatusCode",
    "InvalidParameters",
    "FileError",
    "classify_status",
]
