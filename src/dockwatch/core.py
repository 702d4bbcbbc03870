"""
Core orchestration module for Dockwatch.

Wires snapshot sources, the reporter and the loop supervisor into the two
agents: the status agent (runtime inventory -> status endpoint) and the
endpoint probe (GET a URL, log the body).
"""

from __future__ import annotations

import logging

import requests
from docker.errors import DockerException

from dockwatch import supervisor
from dockwatch.collectors import DockerCollector, EndpointCollector
from dockwatch.config import Config
from dockwatch.reporter import Reporter, ReportResult
from dockwatch.snapshot import Snapshot

logger = logging.getLogger(__name__)

# Errors that end a single tick but never the loop
COLLECTION_ERRORS = (DockerException, requests.exceptions.RequestException)


class StatusAgent:
    """
    Reports the container runtime inventory on a fixed interval.

    Each tick fetches a fresh snapshot and reports exactly that snapshot.
    A failed fetch or a failed delivery is logged and the tick ends; the
    next tick runs after the usual delay.
    """

    def __init__(
        self,
        config: Config | None = None,
        collector: DockerCollector | None = None,
        reporter: Reporter | None = None,
    ):
        self.config = config or Config()
        self.collector = collector or DockerCollector(
            socket=self.config.docker_socket,
            timeout=self.config.docker_timeout,
            api_version=self.config.docker_api_version,
        )
        self.reporter = reporter or Reporter(self.config)

    def collect(self) -> Snapshot:
        """Fetch the current inventory. Errors propagate."""
        return self.collector.collect()

    def report(self, snapshot: Snapshot) -> ReportResult:
        """Deliver a snapshot. Never raises for delivery failures."""
        return self.reporter.send(snapshot)

    def tick(self) -> ReportResult | None:
        """
        Run one fetch-then-report cycle.

        Returns:
            The report result, or None if the snapshot could not be taken.
        """
        try:
            snapshot = self.collect()
        except COLLECTION_ERRORS as e:
            logger.error(f"Snapshot failed: {e}")
            return None

        counts = snapshot.counts()
        logger.debug(
            f"Reporting {counts['containers']} containers, {counts['images']} images, "
            f"{counts['networks']} networks"
        )
        return self.report(snapshot)

    def run(self, once: bool = False) -> bool:
        """
        Run the agent until interrupted.

        Args:
            once: Run a single tick and return instead of looping.

        Returns:
            True if the run ended normally (single tick or shutdown request).
        """
        try:
            if once:
                self.tick()
                return True

            logger.info(
                f"Reporting inventory of {self.config.docker_socket} to "
                f"{self.config.status_url} every {self.config.status_interval:g}s"
            )
            return supervisor.run(self.tick, self.config.status_interval)
        finally:
            self.collector.close()


class ProbeAgent:
    """Fetches a URL on a fixed interval and logs the response body."""

    def __init__(
        self,
        config: Config | None = None,
        collector: EndpointCollector | None = None,
    ):
        self.config = config or Config()
        self.collector = collector or EndpointCollector(
            self.config.probe_url,
            timeout=self.config.probe_timeout,
        )

    def tick(self) -> str | None:
        """
        Run one probe.

        Returns:
            The response body, or None if the request failed.
        """
        try:
            body = self.collector.collect()
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {e}")
            return None

        logger.info(f"Received response: {body}")
        return body

    def run(self, once: bool = False) -> bool:
        """Run the probe until interrupted, or a single tick if `once`."""
        if once:
            self.tick()
            return True

        logger.info(f"Probing {self.collector.url} every {self.config.probe_interval:g}s")
        return supervisor.run(self.tick, self.config.probe_interval)
