import json

import pytest

from ollamakit.domain.models import (
    ChatResponse,
    FunctionCall,
    ModelDetails,
    ModelFamily,
    ModelFormat,
    ModelInformation,
    OllamaModelName,
    PropertyDefinition,
    QuantizationLevel,
    RunningModelInfo,
)
from ollamakit.transport.codec import decode, encode


# ---------------- Model names ----------------

@pytest.mark.parametrize(
    "text, expected",
    [
        ("llama2", OllamaModelName(name="llama2")),
        ("llama2:13b", OllamaModelName(name="llama2", tag="13b")),
        ("user/llama2:13b", OllamaModelName(name="llama2", tag="13b", namespace="user")),
        ("user/llama2", OllamaModelName(name="llama2", namespace="user")),
        ("llama2:", OllamaModelName(name="llama2")),
    ],
)
def test_model_name_parse(text, expected):
    assert OllamaModelName.parse(text) == expected


@pytest.mark.parametrize("text", ["", "a/b/c", ":13b", "user/:tag"])
def test_model_name_parse_invalid(text):
    assert OllamaModelName.parse(text) is None


def test_model_name_full_name():
    assert OllamaModelName.parse("llama2").full_name == "llama2:latest"
    assert str(OllamaModelName.parse("me/mistral:7b")) == "me/mistral:7b"


# ---------------- Timestamps ----------------

def test_nanosecond_timestamps_decode():
    body = {
        "model": "llama2",
        "created_at": "2024-06-14T12:34:56.123456789-07:00",
        "message": {"role": "assistant", "content": "Hi"},
        "done": False,
    }
    res = decode(json.dumps(body).encode(), ChatResponse)
    assert res.created_at.microsecond == 123456
    assert res.created_at.utcoffset().total_seconds() == -7 * 3600


def test_running_model_expiry_with_zulu_nanos():
    body = {
        "name": "llama2:latest",
        "model": "llama2:latest",
        "size": 5,
        "digest": "sha256:x",
        "details": {"family": "llama"},
        "expires_at": "2024-06-14T12:39:56.000000001Z",
        "size_vram": 3,
    }
    info = decode(json.dumps(body).encode(), RunningModelInfo)
    assert info.expires_at.year == 2024
    assert info.details.format == ""


# ---------------- Enum helpers ----------------

def test_model_details_enum_helpers():
    details = ModelDetails(family="LLaMA", format="GGUF", quantization_level="Q4_0")
    assert details.family_kind is ModelFamily.LLAMA
    assert details.format_kind is ModelFormat.GGUF
    assert details.quantization is QuantizationLevel.Q4_0


def test_enum_helpers_fall_back():
    details = ModelDetails(family="phi3", format="onnx", quantization_level="q4_0")
    assert details.family_kind is ModelFamily.OTHER
    assert details.format_kind is ModelFormat.UNKNOWN
    assert details.quantization is QuantizationLevel.UNKNOWN


# ---------------- Wire names ----------------

def test_property_definition_uses_enum_wire_name():
    prop = PropertyDefinition(type="string", description="unit", enum_values=["c", "f"])
    assert json.loads(encode(prop)) == {"type": "string", "description": "unit", "enum": ["c", "f"]}
    back = decode(b'{"type":"string","description":"unit","enum":["k"]}', PropertyDefinition)
    assert back.enum_values == ["k"]


def test_function_call_arguments_accept_object_or_string():
    assert decode(b'{"name":"f","arguments":{"x":1}}', FunctionCall).arguments == {"x": 1}
    assert decode(b'{"name":"f","arguments":"{\\"x\\":1}"}', FunctionCall).arguments == '{"x":1}'


def test_show_response_keeps_model_info():
    body = {
        "modelfile": "FROM llama2",
        "template": "{{ .Prompt }}",
        "details": {"family": "llama", "families": ["llama", "clip"]},
        "model_info": {"general.architecture": "llama"},
        "unknown_extra": True,
    }
    info = decode(json.dumps(body).encode(), ModelInformation)
    assert info.model_info == {"general.architecture": "llama"}
    assert info.details.families == ["llama", "clip"]
    assert info.license is None
