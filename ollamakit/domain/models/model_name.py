"""
Model name parsing: `[namespace/]name[:tag]`.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class OllamaModelName:
    """A parsed model reference such as `library/llama2:13b`."""
    name: str
    tag: str = "latest"
    namespace: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> Optional[OllamaModelName]:
        """Parse a model reference; returns None when the format is invalid."""
        components = [c for c in text.strip().split("/") if c]
        if len(components) == 1:
            namespace, rest = None, components[0]
        elif len(components) == 2:
            namespace, rest = components
        else:
            return None

        name, _, tag = rest.partition(":")
        if not name:
            return None
        return cls(name=name, tag=tag or "latest", namespace=namespace)

    @property
    def full_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}/{self.name}:{self.tag}"
        return f"{self.name}:{self.tag}"

    def __str__(self) -> str:
        return self.full_name
