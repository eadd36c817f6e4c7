"""
Chat request/response models.
"""

from __future__ import annotations
from enum import Enum
from typing import List, Optional

from .base import Timestamp, WireModel
from .options import KeepAlive, ModelOptions, ResponseFormat
from .tool import ToolCall, ToolDefinition


class MessageRole(str, Enum):
    """Message roles in conversation."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class ChatMessage(WireModel):
    role: MessageRole
    content: str = ""
    images: Optional[List[str]] = None
    tool_calls: Optional[List[ToolCall]] = None


class ChatRequest(WireModel):
    model: str
    messages: List[ChatMessage]
    tools: Optional[List[ToolDefinition]] = None
    format: Optional[ResponseFormat] = None
    options: Optional[ModelOptions] = None
    stream: Optional[bool] = None
    keep_alive: Optional[KeepAlive] = None


class ChatResponse(WireModel):
    """One streamed chat record; the last one has done=True and the timings."""
    model: str
    created_at: Timestamp
    message: ChatMessage
    done: bool
    done_reason: Optional[str] = None
    total_duration: Optional[int] = None
    load_duration: Optional[int] = None
    prompt_eval_count: Optional[int] = None
    prompt_eval_duration: Optional[int] = None
    eval_count: Optional[int] = None
    eval_duration: Optional[int] = None
