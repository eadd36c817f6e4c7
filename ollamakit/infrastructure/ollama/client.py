"""
Ollama client - Infrastructure implementation of the OllamaAPI protocol.
Maps each endpoint onto the transport's single-shot or streaming call shape.
"""

from __future__ import annotations
import logging
import threading
from typing import Iterator, List, Optional, Sequence

import httpx

from ...domain.errors import InvalidParameters
from ...domain.interfaces.ollama_api import OllamaAPI
from ...domain.models import (
    ChatMessage,
    ChatOptions,
    ChatRequest,
    ChatResponse,
    CopyModelRequest,
    DeleteModelRequest,
    EmbeddingInput,
    EmbeddingOptions,
    EmbeddingRequest,
    EmbeddingResponse,
    GenerateRequest,
    GenerateResponse,
    GenerationOptions,
    ModelInformation,
    ModelListEntry,
    ModelsResponse,
    OllamaModelName,
    OperationProgress,
    PullModelRequest,
    PullOptions,
    PushModelRequest,
    PushOptions,
    RunningModelInfo,
    RunningModelsResponse,
    ShowModelRequest,
)
from ...transport.codec import decode, encode
from ...transport.http import TransportHttpClient
from ...transport.policy import RetryPolicy
from ..config.settings import OllamaSettings, get_settings


class OllamaClient(OllamaAPI):
    """Client for a running Ollama server."""

    def __init__(
        self,
        settings: Optional[OllamaSettings] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        transport: Optional[TransportHttpClient] = None,
        cancel_event: Optional[threading.Event] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.settings = settings or get_settings()
        self._logger = logger or logging.getLogger(__name__)
        self._cancel_event = cancel_event
        self._transport = transport or TransportHttpClient(
            self.settings.host,
            api_prefix=self.settings.api_prefix,
            timeout_s=self.settings.timeout,
            verify=self.settings.verify_tls,
            retry_policy=RetryPolicy(
                max_retries=self.settings.max_retries,
                retry_delay_s=self.settings.retry_delay,
            ),
            http_client=http_client,
            logger=self._logger,
        )
        self._logger.debug(f"Ollama client initialized - Host: {self.settings.host}")

    def _keep_alive(self, value):
        return value if value is not None else self.settings.default_keep_alive

    def _request(self, endpoint: str, method: str = "GET", body: Optional[bytes] = None) -> bytes:
        return self._transport.request(endpoint, method, body, cancel_event=self._cancel_event)

    def _stream(self, endpoint: str, body: bytes, record_type):
        return self._transport.stream(endpoint, body, record_type, cancel_event=self._cancel_event)

    # ---------------- Generation ----------------
    def generate_text(
        self,
        prompt: str,
        model: OllamaModelName,
        options: Optional[GenerationOptions] = None,
    ) -> Iterator[GenerateResponse]:
        """Stream a completion for `prompt`.

        Example:
            for part in client.generate_text("Tell me a story", OllamaModelName.parse("llama2")):
                print(part.response, end="")
        """
        options = options or GenerationOptions()
        request = GenerateRequest(
            model=model.full_name,
            prompt=prompt,
            suffix=options.suffix,
            images=options.images,
            format=options.format,
            options=options.model_options,
            system=options.system_prompt,
            template=options.template,
            context=options.context,
            stream=True,
            raw=options.raw,
            keep_alive=self._keep_alive(options.keep_alive),
        )
        return self._stream("generate", encode(request), GenerateResponse)

    def chat(
        self,
        messages: Sequence[ChatMessage],
        model: OllamaModelName,
        options: Optional[ChatOptions] = None,
    ) -> Iterator[ChatResponse]:
        """Stream a chat completion; the final record has done=True."""
        options = options or ChatOptions()
        request = ChatRequest(
            model=model.full_name,
            messages=list(messages),
            tools=options.tools,
            format=options.format,
            options=options.model_options,
            stream=True,
            keep_alive=self._keep_alive(options.keep_alive),
        )
        return self._stream("chat", encode(request), ChatResponse)

    def generate_embeddings(
        self,
        input: EmbeddingInput,
        model: OllamaModelName,
        options: Optional[EmbeddingOptions] = None,
    ) -> EmbeddingResponse:
        options = options or EmbeddingOptions()
        request = EmbeddingRequest(
            model=model.full_name,
            input=input,
            truncate=options.truncate,
            options=options.model_options,
            keep_alive=self._keep_alive(options.keep_alive),
        )
        data = self._request("embed", "POST", encode(request))
        return decode(data, EmbeddingResponse)

    # ---------------- Model management ----------------
    def list_models(self) -> List[ModelListEntry]:
        data = self._request("tags")
        return decode(data, ModelsResponse).models

    def show_model(self, name: OllamaModelName) -> ModelInformation:
        data = self._request("show", "POST", encode(ShowModelRequest(name=name.full_name)))
        return decode(data, ModelInformation)

    def pull_model(self, name: OllamaModelName, options: Optional[PullOptions] = None) -> Iterator[OperationProgress]:
        options = options or PullOptions(allow_insecure=self.settings.allow_insecure)
        request = PullModelRequest(name=name.full_name, insecure=options.allow_insecure, stream=True)
        return self._stream("pull", encode(request), OperationProgress)

    def push_model(self, name: OllamaModelName, options: Optional[PushOptions] = None) -> Iterator[OperationProgress]:
        if not name.namespace:
            raise InvalidParameters("Model name must include namespace for pushing")
        options = options or PushOptions(allow_insecure=self.settings.allow_insecure)
        request = PushModelRequest(name=name.full_name, insecure=options.allow_insecure, stream=True)
        return self._stream("push", encode(request), OperationProgress)

    def copy_model(self, source: OllamaModelName, destination: OllamaModelName) -> None:
        request = CopyModelRequest(source=source.full_name, destination=destination.full_name)
        self._request("copy", "POST", encode(request))

    def delete_model(self, name: OllamaModelName) -> None:
        self._request("delete", "DELETE", encode(DeleteModelRequest(name=name.full_name)))

    def list_running_models(self) -> List[RunningModelInfo]:
        data = self._request("ps")
        return decode(data, RunningModelsResponse).models

    # ---------------- Lifecycle ----------------
    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> OllamaClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
