"""
Base collector class that all collectors inherit from.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any


class BaseCollector(ABC):
    """
    Abstract base class for snapshot sources.

    Subclasses must implement the `collect` method. Failures are raised to
    the caller; deciding whether a failed tick is fatal is not the
    collector's job.
    """

    name: str = "base"
    description: str = "Base collector"

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.name}")

    @abstractmethod
    def collect(self) -> Any:
        """
        Collect and return data for one tick.

        Returns:
            Collected data. Type depends on collector.
        """
        pass
