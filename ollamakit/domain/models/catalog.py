"""
Local model catalog: tags, show, ps responses and model-management bodies.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import Timestamp, WireModel


class ModelFamily(str, Enum):
    LLAMA = "llama"
    MISTRAL = "mistral"
    VICUNA = "vicuna"
    CODELLAMA = "codellama"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value: object) -> "ModelFamily":
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return cls.OTHER


class ModelFormat(str, Enum):
    GGUF = "gguf"
    SAFETENSORS = "safetensors"
    PYTORCH = "pytorch"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "ModelFormat":
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return cls.UNKNOWN


class QuantizationLevel(str, Enum):
    Q4_0 = "Q4_0"
    Q4_1 = "Q4_1"
    Q5_0 = "Q5_0"
    Q5_1 = "Q5_1"
    Q8_0 = "Q8_0"
    Q8_1 = "Q8_1"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "QuantizationLevel":
        return cls.UNKNOWN


class ModelDetails(WireModel):
    parent_model: str = ""
    format: str = ""
    family: str = ""
    families: Optional[List[str]] = None
    parameter_size: str = ""
    quantization_level: str = ""

    @property
    def family_kind(self) -> ModelFamily:
        return ModelFamily(self.family)

    @property
    def format_kind(self) -> ModelFormat:
        return ModelFormat(self.format)

    @property
    def quantization(self) -> QuantizationLevel:
        return QuantizationLevel(self.quantization_level)


class ModelListEntry(WireModel):
    """One entry of `GET /api/tags`."""
    name: str
    model: str
    modified_at: Timestamp
    size: int
    digest: str
    details: ModelDetails


class ModelsResponse(WireModel):
    models: List[ModelListEntry] = Field(default_factory=list)


class ModelInformation(WireModel):
    """Body of `POST /api/show`."""
    modelfile: str = ""
    parameters: Optional[str] = None
    template: str = ""
    details: ModelDetails
    license: Optional[str] = None
    system: Optional[str] = None
    model_info: Optional[Dict[str, Any]] = None


class RunningModelInfo(WireModel):
    """One entry of `GET /api/ps`."""
    name: str
    model: str
    size: int
    digest: str
    details: ModelDetails
    expires_at: Timestamp
    size_vram: int


class RunningModelsResponse(WireModel):
    models: List[RunningModelInfo] = Field(default_factory=list)


class ShowModelRequest(WireModel):
    name: str


class PullModelRequest(WireModel):
    name: str
    insecure: bool = False
    stream: bool = True


class PushModelRequest(WireModel):
    name: str
    insecure: bool = False
    stream: bool = True


class CopyModelRequest(WireModel):
    source: str
    destination: str


class DeleteModelRequest(WireModel):
    name: str
