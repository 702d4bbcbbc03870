"""
Status reporter for Dockwatch.

Delivers inventory snapshots to the remote status endpoint.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import requests

from dockwatch import __version__

if TYPE_CHECKING:
    from dockwatch.config import Config
    from dockwatch.snapshot import Snapshot

logger = logging.getLogger(__name__)

TOKEN_HEADER = "x-agent-token"


@dataclass
class ReportResult:
    """Result of a report operation."""

    success: bool
    status_code: int | None = None
    body: str | None = None
    error: str | None = None
    duration_ms: float = 0.0


class Reporter:
    """
    Sends snapshots to the status endpoint.

    A single POST per snapshot, authenticated by a static token header.
    Delivery failures are logged and returned, never raised; there is no
    retry, the next tick simply sends a fresher snapshot.
    """

    def __init__(self, config: Config):
        self.config = config
        self.session = requests.Session()

        if config.status_token:
            self.session.headers[TOKEN_HEADER] = config.status_token

        self.session.headers.update(
            {
                "User-Agent": f"dockwatch/{__version__}",
                "Content-Type": "application/json",
            }
        )

    def send(self, snapshot: Snapshot, endpoint: str | None = None) -> ReportResult:
        """
        Send a snapshot to the status endpoint.

        Args:
            snapshot: The Snapshot to deliver.
            endpoint: Optional override for the status URL.

        Returns:
            ReportResult describing the outcome.
        """
        url = endpoint or self.config.status_url
        start_time = time.perf_counter()

        try:
            response = self.session.post(
                url,
                data=snapshot.to_json().encode("utf-8"),
                timeout=self.config.status_timeout,
            )
            duration = (time.perf_counter() - start_time) * 1000
            body = response.text
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {e}")
            return ReportResult(
                success=False,
                error=str(e),
                duration_ms=(time.perf_counter() - start_time) * 1000,
            )

        if not response.ok:
            error = f"HTTP {response.status_code}: {body[:200]}"
            logger.error(f"Status report rejected: {error}")
            return ReportResult(
                success=False,
                status_code=response.status_code,
                body=body,
                error=error,
                duration_ms=duration,
            )

        logger.info(f"Received response: {body}")
        self._log_actions(response)

        return ReportResult(
            success=True,
            status_code=response.status_code,
            body=body,
            duration_ms=duration,
        )

    def _log_actions(self, response: requests.Response) -> None:
        """Log how many actions the control plane queued for this agent."""
        try:
            data = response.json()
        except ValueError:
            return

        if isinstance(data, dict) and isinstance(data.get("actions"), list):
            logger.debug(f"Control plane returned {len(data['actions'])} action(s)")
