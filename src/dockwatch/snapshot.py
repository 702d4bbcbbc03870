"""
Inventory snapshot taken from the container runtime in one tick.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Snapshot:
    """
    Containers, images and networks as listed by the runtime.

    Records are passed through exactly as the engine API returned them. The
    three sequences are fetched independently and only grouped for transmission.
    """

    containers: tuple[dict[str, Any], ...] = field(default_factory=tuple)
    images: tuple[dict[str, Any], ...] = field(default_factory=tuple)
    networks: tuple[dict[str, Any], ...] = field(default_factory=tuple)

    @classmethod
    def from_lists(
        cls,
        containers: list[dict[str, Any]] | None,
        images: list[dict[str, Any]] | None,
        networks: list[dict[str, Any]] | None,
    ) -> Snapshot:
        """Build a snapshot from the raw list responses (None counts as empty)."""
        return cls(
            containers=tuple(containers or ()),
            images=tuple(images or ()),
            networks=tuple(networks or ()),
        )

    def counts(self) -> dict[str, int]:
        """Number of records in each sequence."""
        return {
            "containers": len(self.containers),
            "images": len(self.images),
            "networks": len(self.networks),
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert snapshot to the report payload."""
        return {
            "containers": list(self.containers),
            "images": list(self.images),
            "networks": list(self.networks),
        }

    def to_json(self, indent: int | None = None) -> str:
        """Serialize snapshot to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)
