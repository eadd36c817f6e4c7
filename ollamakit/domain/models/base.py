"""
Shared pieces for wire models: base config and timestamp parsing.
"""

from __future__ import annotations
import re
from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict

# Go's RFC3339Nano emits up to nine fractional digits; datetime holds six.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def _trim_fraction(value: Any) -> Any:
    if isinstance(value, str):
        return _FRACTION_RE.sub(r"\1", value, count=1)
    return value


Timestamp = Annotated[datetime, BeforeValidator(_trim_fraction)]


class WireModel(BaseModel):
    """Base for every JSON body exchanged with the server."""

    # `model_info` is a real wire field, so the `model_` namespace stays open.
    model_config = ConfigDict(populate_by_name=True, extra="ignore", protected_namespaces=())
