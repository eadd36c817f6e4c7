"""
Sampling/runtime options sent to the server, plus per-call option bundles.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from .base import WireModel
from .tool import ToolDefinition


class ResponseFormat(str, Enum):
    """Structured output format accepted by generate/chat."""
    JSON = "json"


class ModelOptions(WireModel):
    """Model parameters forwarded verbatim in the `options` field."""

    num_keep: Optional[int] = None
    seed: Optional[int] = None
    num_predict: Optional[int] = None
    top_k: Optional[int] = None
    top_p: Optional[float] = None
    min_p: Optional[float] = None
    tfs_z: Optional[float] = None
    typical_p: Optional[float] = None
    repeat_last_n: Optional[int] = None
    temperature: Optional[float] = None
    repeat_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    mirostat: Optional[int] = None
    mirostat_tau: Optional[float] = None
    mirostat_eta: Optional[float] = None
    penalize_newline: Optional[bool] = None
    stop: Optional[List[str]] = None
    numa: Optional[bool] = None
    num_ctx: Optional[int] = None
    num_batch: Optional[int] = None
    num_gpu: Optional[int] = None
    main_gpu: Optional[int] = None
    low_vram: Optional[bool] = None
    f16_kv: Optional[bool] = None
    vocab_only: Optional[bool] = None
    use_mmap: Optional[bool] = None
    use_mlock: Optional[bool] = None
    num_thread: Optional[int] = None


KeepAlive = Union[float, str]


@dataclass(frozen=True)
class GenerationOptions:
    """Optional knobs for `generate`; unset keep_alive falls back to the configured default."""
    suffix: Optional[str] = None
    images: Optional[List[str]] = None
    format: Optional[ResponseFormat] = None
    model_options: Optional[ModelOptions] = None
    system_prompt: Optional[str] = None
    template: Optional[str] = None
    context: Optional[List[int]] = None
    raw: Optional[bool] = None
    keep_alive: Optional[KeepAlive] = None


@dataclass(frozen=True)
class ChatOptions:
    """Optional knobs for `chat`."""
    tools: Optional[List[ToolDefinition]] = None
    format: Optional[ResponseFormat] = None
    model_options: Optional[ModelOptions] = None
    keep_alive: Optional[KeepAlive] = None


@dataclass(frozen=True)
class EmbeddingOptions:
    truncate: Optional[bool] = True
    model_options: Optional[ModelOptions] = None
    keep_alive: Optional[KeepAlive] = None


@dataclass(frozen=True)
class PullOptions:
    allow_insecure: bool = False


@dataclass(frozen=True)
class PushOptions:
    allow_insecure: bool = False
