"""
Ollama API protocol interface.
Defines the contract the CLI commands depend on.
"""

from __future__ import annotations
from typing import Iterator, List, Optional, Protocol, Sequence

from ..models import (
    ChatMessage,
    ChatOptions,
    ChatResponse,
    EmbeddingInput,
    EmbeddingOptions,
    EmbeddingResponse,
    GenerateResponse,
    GenerationOptions,
    ModelInformation,
    ModelListEntry,
    OllamaModelName,
    OperationProgress,
    PullOptions,
    PushOptions,
    RunningModelInfo,
)


class OllamaAPI(Protocol):
    """Protocol for Ollama API client implementations."""

    def list_models(self) -> List[ModelListEntry]:
        """List models available locally."""
        ...

    def show_model(self, name: OllamaModelName) -> ModelInformation:
        """Show details about one model."""
        ...

    def pull_model(self, name: OllamaModelName, options: Optional[PullOptions] = None) -> Iterator[OperationProgress]:
        """Pull a model from the registry, yielding progress records."""
        ...

    def push_model(self, name: OllamaModelName, options: Optional[PushOptions] = None) -> Iterator[OperationProgress]:
        """Push a namespaced model to the registry, yielding progress records."""
        ...

    def copy_model(self, source: OllamaModelName, destination: OllamaModelName) -> None:
        ...

    def delete_model(self, name: OllamaModelName) -> None:
        ...

    def list_running_models(self) -> List[RunningModelInfo]:
        """List models currently loaded in memory."""
        ...

    def generate_text(
        self,
        prompt: str,
        model: OllamaModelName,
        options: Optional[GenerationOptions] = None,
    ) -> Iterator[GenerateResponse]:
        """Stream a completion for a prompt."""
        ...

    def chat(
        self,
        messages: Sequence[ChatMessage],
        model: OllamaModelName,
        options: Optional[ChatOptions] = None,
    ) -> Iterator[ChatResponse]:
        """Stream a chat completion."""
        ...

    def generate_embeddings(
        self,
        input: EmbeddingInput,
        model: OllamaModelName,
        options: Optional[EmbeddingOptions] = None,
    ) -> EmbeddingResponse:
        """Embed one text or a batch of texts."""
        ...
