"""
Transport layer: HTTP dispatch, retry policy, NDJSON stream decoding and JSON codec.

This package exposes:
- http: TransportHttpClient with single-shot (retrying) and streaming calls
- policy: fixed-delay retry policy with transport-failure classification
- stream: NDJSONDecoder turning byte chunks into typed records
- codec: encode/decode helpers raising the client error taxonomy
"""

from .codec import decode, encode
from .http import TransportHttpClient
from .policy import RetryPolicy
from .stream import NDJSONDecoder

__all__ = ["NDJSONDecoder", "RetryPolicy", "TransportHttpClient", "decode", "encode"]
