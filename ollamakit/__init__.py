"""
ollamakit - A typed client library and CLI for the Ollama HTTP API.
"""

__version__ = "1.0.0"
__author__ = "ollamakit Team"

__all__ = [
    "OllamaClient",
    "OllamaSettings",
    "OllamaModelName",
    "OllamaError",
]

# Lazy attribute access to avoid importing httpx and pydantic at package import time.
def __getattr__(name: str):  # pragma: no cover - simple lazy loader
    if name == "OllamaClient":
        from .infrastructure.ollama import OllamaClient as _C
        return _C
    if name == "OllamaSettings":
        from .infrastructure.config import OllamaSettings as _S
        return _S
    if name == "OllamaModelName":
        from .domain.models import OllamaModelName as _N
        return _N
    if name == "OllamaError":
        from .domain.errors import OllamaError as _E
        return _E
    raise AttributeError(f"module 'ollamakit' has no attribute {name!r}")
