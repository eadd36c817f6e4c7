"""Domain interfaces package."""

from .ollama_api import OllamaAPI

__all__ = ["OllamaAPI"]
