"""Downloadable resource reference value object."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ResourceKind(str, Enum):
    """Kinds of gated downloadable resources."""

    TOOL = "tool"
    ARTICLE = "article"


@dataclass(frozen=True)
class ResourceRef:
    """Reference to exactly one downloadable tool or article."""

    kind: ResourceKind
    resource_id: str

    def __post_init__(self) -> None:
        """Validate and normalize the reference."""
        try:
            kind = ResourceKind(self.kind)
        except ValueError as err:
            raise ValueError(f"Unknown resource kind: {self.kind!r}") from err
        resource_id = (self.resource_id or "").strip()
        if not resource_id:
            raise ValueError("Resource id is required")
        # Frozen dataclass: normalized values are written through object.__setattr__
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "resource_id", resource_id)

    @property
    def tool_id(self) -> Optional[str]:
        """Tool id, or None for articles."""
        return self.resource_id if self.kind is ResourceKind.TOOL else None

    @property
    def article_id(self) -> Optional[str]:
        """Article id, or None for tools."""
        return self.resource_id if self.kind is ResourceKind.ARTICLE else None

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.resource_id}"
