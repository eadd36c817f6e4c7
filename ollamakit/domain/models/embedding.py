"""
Embedding request/response models.
"""

from __future__ import annotations
from typing import List, Optional, Union

from .base import WireModel
from .options import KeepAlive, ModelOptions

# A single text or a batch of texts.
EmbeddingInput = Union[str, List[str]]


class EmbeddingRequest(WireModel):
    model: str
    input: EmbeddingInput
    truncate: Optional[bool] = None
    options: Optional[ModelOptions] = None
    keep_alive: Optional[KeepAlive] = None


class EmbeddingResponse(WireModel):
    model: str
    embeddings: List[List[float]]
    total_duration: Optional[int] = None
    load_duration: Optional[int] = None
    prompt_eval_count: Optional[int] = None
