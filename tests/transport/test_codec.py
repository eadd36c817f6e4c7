from __future__ import annotations

import json
from datetime import datetime
from typing import List

import pytest

from ollamakit.domain.errors import DecodingError, InvalidParameters
from ollamakit.domain.models import (
    ChatMessage,
    ChatRequest,
    EmbeddingRequest,
    GenerateRequest,
    MessageRole,
    ModelOptions,
    ModelsResponse,
    ResponseFormat,
    ShowModelRequest,
)
from ollamakit.transport.codec import decode, encode


def test_encode_uses_wire_names_and_omits_none():
    data = json.loads(encode(ChatMessage(role=MessageRole.USER, content="hi")))
    assert data == {"role": "user", "content": "hi"}


def test_encode_unserializable_value_is_invalid_parameters():
    with pytest.raises(InvalidParameters) as ei:
        encode({"handle": object()})
    assert ei.value.message.startswith("Failed to encode request:")


def test_decode_model():
    req = decode(b'{"name": "llama2:latest"}', ShowModelRequest)
    assert req == ShowModelRequest(name="llama2:latest")


def test_decode_container_type():
    assert decode(b"[1, 2, 3]", List[int]) == [1, 2, 3]


def test_decode_invalid_json_is_decoding_error():
    with pytest.raises(DecodingError) as ei:
        decode(b"not json", ModelsResponse)
    assert ei.value.underlying is not None


def test_decode_wrong_shape_is_decoding_error():
    with pytest.raises(DecodingError):
        decode(b'{"models": [{"name": 1}]}', ModelsResponse)


def test_decode_timestamp_field():
    body = {
        "models": [{
            "name": "llama2:latest",
            "model": "llama2:latest",
            "modified_at": "2024-01-01T00:00:00Z",
            "size": 1,
            "digest": "sha256:abc",
            "details": {},
        }]
    }
    res = decode(json.dumps(body).encode(), ModelsResponse)
    assert isinstance(res.models[0].modified_at, datetime)


@pytest.mark.parametrize(
    "request_obj",
    [
        ChatRequest(
            model="llama2:latest",
            messages=[
                ChatMessage(role=MessageRole.SYSTEM, content="be terse"),
                ChatMessage(role=MessageRole.USER, content="hi", images=["aGk="]),
            ],
            stream=True,
            keep_alive=300.0,
        ),
        GenerateRequest(model="llama2:latest", prompt="hi", system="sys", stream=True, keep_alive=120.0),
        GenerateRequest(
            model="llama2:latest",
            prompt="hi",
            format=ResponseFormat.JSON,
            options=ModelOptions(temperature=0.2, num_predict=64),
            keep_alive="5m",
        ),
        EmbeddingRequest(model="all-minilm:latest", input="one"),
        EmbeddingRequest(model="all-minilm:latest", input=["one", "two"], truncate=False, keep_alive=-1.0),
    ],
    ids=["chat", "generate-numeric-keep-alive", "generate-string-keep-alive", "embed-str", "embed-list"],
)
def test_request_encodes_and_decodes_to_equal_value(request_obj):
    assert decode(encode(request_obj), type(request_obj)) == request_obj
