"""
Configuration management for Dockwatch.

Supports configuration via YAML files, environment variables, and programmatic access.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_PATHS = [
    Path("/etc/dockwatch/config.yaml"),
    Path.home() / ".config" / "dockwatch" / "config.yaml",
    Path("dockwatch.yaml"),
]

DEFAULT_STATUS_URL = "http://localhost:3000/api/v1/agent/status"
DEFAULT_PROBE_URL = "https://example.com/api"


@dataclass
class Config:
    """
    Configuration container for Dockwatch.

    Priority (highest to lowest):
    1. Programmatic values passed to __init__
    2. Environment variables (prefixed with DOCKWATCH_)
    3. Config file values
    4. Default values
    """

    # Container runtime
    docker_socket: str = "/var/run/docker.sock"
    docker_timeout: int = 120
    docker_api_version: str = "auto"

    # Status reporting
    status_url: str = DEFAULT_STATUS_URL
    status_token: str | None = None
    status_interval: float = 15.0
    status_timeout: float | None = None

    # Endpoint probe
    probe_url: str = DEFAULT_PROBE_URL
    probe_interval: float = 5.0
    probe_timeout: float | None = None

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Create config from a dictionary."""
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}

        # Flatten nested structure if present; ``status: {url: ...}`` maps
        # to ``status_url``
        flat = {}
        for key, value in data.items():
            if isinstance(value, dict):
                for subkey, subvalue in value.items():
                    prefixed = f"{key}_{subkey}"
                    flat[prefixed if prefixed in known_fields else subkey] = subvalue
            else:
                flat[key] = value

        # Filter to only known fields
        filtered = {k: v for k, v in flat.items() if k in known_fields}

        return cls(**filtered)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> Config:
        """
        Load configuration with full resolution order.

        Args:
            config_path: Explicit path to config file. If None, searches
                        default locations.

        Returns:
            Fully resolved Config instance.
        """
        base_config: dict[str, Any] = {}

        if config_path:
            path = Path(config_path)
            if path.exists():
                with open(path) as f:
                    base_config = yaml.safe_load(f) or {}
        else:
            for path in DEFAULT_CONFIG_PATHS:
                if path.exists():
                    with open(path) as f:
                        base_config = yaml.safe_load(f) or {}
                    break

        config = cls.from_dict(base_config) if base_config else cls()
        config._apply_env_overrides()

        return config

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        for f in fields(self):
            value = os.environ.get(f"DOCKWATCH_{f.name.upper()}")
            if value is None:
                continue

            # Empty clears optional settings and leaves required ones alone
            if value == "":
                if "None" in f.type:
                    setattr(self, f.name, None)
                continue

            # Type coercion by declared type, so "2.5" works for a float
            # field even when the file gave an int
            if "int" in f.type:
                setattr(self, f.name, int(value))
            elif "float" in f.type:
                setattr(self, f.name, float(value))
            else:
                setattr(self, f.name, value)

    def to_dict(self, redact: bool = True) -> dict[str, Any]:
        """Convert config to a sectioned dictionary."""
        token = self.status_token
        if redact and token:
            token = "***"

        return {
            "docker": {
                "socket": self.docker_socket,
                "timeout": self.docker_timeout,
                "api_version": self.docker_api_version,
            },
            "status": {
                "url": self.status_url,
                "token": token,
                "interval": self.status_interval,
                "timeout": self.status_timeout,
            },
            "probe": {
                "url": self.probe_url,
                "interval": self.probe_interval,
                "timeout": self.probe_timeout,
            },
            "log": {
                "level": self.log_level,
                "file": self.log_file,
            },
        }

    def save(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.to_dict(redact=False), f, default_flow_style=False, sort_keys=False)
