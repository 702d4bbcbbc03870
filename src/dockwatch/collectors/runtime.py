"""
Container runtime collector.

Lists containers, images and networks from the Docker engine over its
control socket.
"""

from __future__ import annotations

import docker
import requests
from docker.errors import DockerException

from dockwatch.collectors.base import BaseCollector
from dockwatch.snapshot import Snapshot

DEFAULT_SOCKET = "/var/run/docker.sock"


def socket_url(socket: str) -> str:
    """Turn a socket path into an engine base URL; URLs pass through unchanged."""
    if "://" in socket:
        return socket
    return f"unix://{socket}"


class DockerCollector(BaseCollector):
    """Snapshot of the local container runtime inventory."""

    name = "docker"
    description = "Containers, images and networks from the Docker engine"

    def __init__(
        self,
        socket: str = DEFAULT_SOCKET,
        timeout: int = 120,
        api_version: str = "auto",
        client: docker.APIClient | None = None,
    ):
        super().__init__()
        self.socket = socket
        self.timeout = timeout
        self.api_version = api_version
        self._client = client

    @property
    def client(self) -> docker.APIClient:
        """Engine API handle, created on first use and reused afterwards."""
        if self._client is None:
            self.logger.debug(f"Connecting to container runtime at {self.socket}")
            # With api_version "auto" the constructor talks to the engine, so
            # an unreachable socket fails here and is retried next call.
            self._client = docker.APIClient(
                base_url=socket_url(self.socket),
                version=self.api_version,
                timeout=self.timeout,
            )
        return self._client

    def collect(self) -> Snapshot:
        """
        List all containers (including stopped), all images and all networks.

        Raises:
            DockerException: If the engine rejects a query or cannot be reached.
            requests.RequestException: On transport or decode failures.
        """
        api = self.client
        containers = api.containers(all=True)
        images = api.images(all=True)
        networks = api.networks()

        snapshot = Snapshot.from_lists(containers, images, networks)
        counts = snapshot.counts()
        self.logger.debug(
            f"Collected {counts['containers']} containers, {counts['images']} images, "
            f"{counts['networks']} networks"
        )
        return snapshot

    def ping(self) -> bool:
        """
        Check whether the container runtime answers.

        Returns:
            True if the engine is reachable, False otherwise.
        """
        try:
            return bool(self.client.ping())
        except (DockerException, requests.exceptions.RequestException) as e:
            self.logger.debug(f"Container runtime not reachable: {e}")
            return False

    def close(self) -> None:
        """Release the engine connection pool."""
        if self._client is not None:
            self._client.close()
            self._client = None
