"""
Text generation request/response models.
"""

from __future__ import annotations
from typing import List, Optional

from .base import Timestamp, WireModel
from .options import KeepAlive, ModelOptions, ResponseFormat


class GenerateRequest(WireModel):
    model: str
    prompt: str
    suffix: Optional[str] = None
    images: Optional[List[str]] = None
    format: Optional[ResponseFormat] = None
    options: Optional[ModelOptions] = None
    system: Optional[str] = None
    template: Optional[str] = None
    context: Optional[List[int]] = None
    stream: Optional[bool] = None
    raw: Optional[bool] = None
    keep_alive: Optional[KeepAlive] = None


class GenerateResponse(WireModel):
    model: str
    created_at: Timestamp
    response: str
    done: bool
    done_reason: Optional[str] = None
    context: Optional[List[int]] = None
    total_duration: Optional[int] = None
    load_duration: Optional[int] = None
    prompt_eval_count: Optional[int] = None
    prompt_eval_duration: Optional[int] = None
    eval_count: Optional[int] = None
    eval_duration: Optional[int] = None
