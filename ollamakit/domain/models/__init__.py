"""Wire models package."""

from .catalog import (
    CopyModelRequest,
    DeleteModelRequest,
    ModelDetails,
    ModelFamily,
    ModelFormat,
    ModelInformation,
    ModelListEntry,
    ModelsResponse,
    PullModelRequest,
    PushModelRequest,
    QuantizationLevel,
    RunningModelInfo,
    RunningModelsResponse,
    ShowModelRequest,
)
from .chat import ChatMessage, ChatRequest, ChatResponse, MessageRole
from .embedding import EmbeddingInput, EmbeddingRequest, EmbeddingResponse
from .generate import GenerateRequest, GenerateResponse
from .model_name import OllamaModelName
from .options import (
    ChatOptions,
    EmbeddingOptions,
    GenerationOptions,
    ModelOptions,
    PullOptions,
    PushOptions,
    ResponseFormat,
)
from .progress import OperationProgress
from .tool import (
    FunctionCall,
    FunctionDefinition,
    Parameters,
    PropertyDefinition,
    ToolCall,
    ToolDefinition,
)

__all__ = [
    "ChatMessage",
    "ChatOptions",
    "ChatRequest",
    "ChatResponse",
    "CopyModelRequest",
    "DeleteModelRequest",
    "EmbeddingInput",
    "EmbeddingOptions",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "FunctionCall",
    "FunctionDefinition",
    "GenerateRequest",
    "GenerateResponse",
    "GenerationOptions",
    "MessageRole",
    "ModelDetails",
    "ModelFamily",
    "ModelFormat",
    "ModelInformation",
    "ModelListEntry",
    "ModelOptions",
    "ModelsResponse",
    "OllamaModelName",
    "OperationProgress",
    "Parameters",
    "PropertyDefinition",
    "PullModelRequest",
    "PullOptions",
    "PushModelRequest",
    "PushOptions",
    "QuantizationLevel",
    "ResponseFormat",
    "RunningModelInfo",
    "RunningModelsResponse",
    "ShowModelRequest",
    "ToolCall",
    "ToolDefinition",
]
