"""
Pytest fixtures and configuration for Dockwatch tests.

Provides engine API records, a fake engine client, and HTTP response mocks
shared across the test suite.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from dockwatch.config import Config
from dockwatch.snapshot import Snapshot


# Test Data Fixtures - Engine API records
@pytest.fixture
def sample_containers():
    """Two containers as returned by GET /containers/json?all=1."""
    return [
        {
            "Id": "8dfafdbc3a40",
            "Names": ["/web"],
            "Image": "nginx:1.25",
            "ImageID": "sha256:a8758716bb6a",
            "Command": "nginx -g 'daemon off;'",
            "Created": 1704067200,
            "State": "running",
            "Status": "Up 2 hours",
            "Ports": [{"PrivatePort": 80, "PublicPort": 8080, "Type": "tcp"}],
            "Labels": {"com.example.service": "web"},
        },
        {
            "Id": "9cd87474be90",
            "Names": ["/migrate"],
            "Image": "postgres:16",
            "ImageID": "sha256:d2f1d3a1c8e2",
            "Command": "docker-entrypoint.sh postgres",
            "Created": 1704063600,
            "State": "exited",
            "Status": "Exited (0) 3 hours ago",
            "Ports": [],
            "Labels": {},
        },
    ]


@pytest.fixture
def sample_images():
    """One image as returned by GET /images/json?all=1."""
    return [
        {
            "Id": "sha256:a8758716bb6a",
            "ParentId": "",
            "RepoTags": ["nginx:1.25"],
            "RepoDigests": ["nginx@sha256:4c0fdaa8b634"],
            "Created": 1703980800,
            "Size": 187000000,
            "Containers": -1,
            "Labels": None,
        }
    ]


@pytest.fixture
def sample_networks():
    """Networks as returned by GET /networks."""
    return [
        {
            "Name": "bridge",
            "Id": "f2de39df4171",
            "Scope": "local",
            "Driver": "bridge",
            "IPAM": {"Driver": "default", "Config": [{"Subnet": "172.17.0.0/16"}]},
            "Containers": {},
            "Options": {},
            "Labels": {},
        }
    ]


@pytest.fixture
def fake_engine(sample_containers, sample_images):
    """Engine API client exposing 2 containers, 1 image and 0 networks."""
    client = MagicMock()
    client.containers.return_value = sample_containers
    client.images.return_value = sample_images
    client.networks.return_value = []
    client.ping.return_value = True
    return client


@pytest.fixture
def sample_snapshot(sample_containers, sample_images, sample_networks):
    """Snapshot with one record of each kind plus a stopped container."""
    return Snapshot.from_lists(sample_containers, sample_images, sample_networks)


# HTTP Response Fixtures
@pytest.fixture
def mock_status_server_success():
    """Mock status endpoint that accepts reports."""
    def mock_post(*args, **kwargs):
        response = MagicMock()
        response.status_code = 200
        response.text = '{"ok": true, "actions": []}'
        response.ok = True
        response.json.return_value = {"ok": True, "actions": []}
        return response

    return mock_post


@pytest.fixture
def mock_status_server_unauthorized():
    """Mock status endpoint that rejects the agent token."""
    def mock_post(*args, **kwargs):
        response = MagicMock()
        response.status_code = 401
        response.text = '{"error": "Unauthorized"}'
        response.ok = False
        return response

    return mock_post


@pytest.fixture
def mock_status_server_error():
    """Mock status endpoint that returns server errors."""
    def mock_post(*args, **kwargs):
        response = MagicMock()
        response.status_code = 500
        response.text = '{"error": "Internal server error"}'
        response.ok = False
        return response

    return mock_post


@pytest.fixture
def mock_status_server_connection_error():
    """Mock status endpoint that cannot be reached."""
    import requests

    def mock_post(*args, **kwargs):
        raise requests.exceptions.ConnectionError("Connection refused")

    return mock_post


# Utility Fixtures
@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary sectioned config file."""
    config_file = tmp_path / "dockwatch.yaml"
    config_content = """
docker:
  socket: /run/user/1000/docker.sock
status:
  url: "https://control.example.com/api/v1/agent/status"
  token: "test-token-123"
  interval: 30
log:
  level: DEBUG
"""

    config_file.write_text(config_content)
    return config_file


@pytest.fixture
def sample_config():
    """Sample configuration for testing."""
    return Config(
        docker_socket="/tmp/test-docker.sock",
        status_url="https://control.example.com/api/v1/agent/status",
        status_token="10dbcfc6-9e9b-478f-be81-bbd8b1df176e",
        status_interval=15,
        probe_url="https://probe.example.com/api",
        probe_interval=5,
    )


# Pytest Configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "cli: marks tests as command-line interface tests")
