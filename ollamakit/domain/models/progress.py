"""
Progress records streamed by pull/push.
"""

from __future__ import annotations
from typing import Optional

from .base import WireModel


class OperationProgress(WireModel):
    status: str
    digest: Optional[str] = None
    total: Optional[int] = None
    completed: Optional[int] = None
