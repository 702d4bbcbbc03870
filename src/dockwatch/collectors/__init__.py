"""
Snapshot sources for Dockwatch.

Each collector produces the data reported in one tick.
"""

from __future__ import annotations

from dockwatch.collectors.base import BaseCollector
from dockwatch.collectors.endpoint import EndpointCollector
from dockwatch.collectors.runtime import DockerCollector

__all__ = [
    "BaseCollector",
    "DockerCollector",
    "EndpointCollector",
]
