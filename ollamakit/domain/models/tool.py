"""
Tool (function-calling) definitions and the calls a model emits.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from .base import WireModel


class PropertyDefinition(WireModel):
    type: str
    description: str
    enum_values: Optional[List[str]] = Field(default=None, alias="enum")


class Parameters(WireModel):
    type: str = "object"
    properties: Dict[str, PropertyDefinition] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)


class FunctionDefinition(WireModel):
    name: str
    description: str
    parameters: Parameters


class ToolDefinition(WireModel):
    """A function the model may call, in the server's `tools` array shape."""
    type: str = "function"
    function: FunctionDefinition


class FunctionCall(WireModel):
    name: str
    # Servers send an object; older ones sent a JSON-encoded string.
    arguments: Union[Dict[str, Any], str] = Field(default_factory=dict)


class ToolCall(WireModel):
    function: FunctionCall
