"""Global configuration — XDG paths, YAML file, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_SCAN_ENDPOINT = "/scan/file"
DEFAULT_TIMEOUT = 300.0


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "artiscan"
    return Path.home() / ".config" / "artiscan"


@dataclass
class ArtiscanConfig:
    """Application-wide configuration."""

    config_dir: Path = field(default_factory=_default_config_dir)
    api_url: str = DEFAULT_API_URL
    scan_endpoint: str = DEFAULT_SCAN_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT

    @property
    def config_file(self) -> Path:
        return self.config_dir / "config.yaml"

    @classmethod
    def load(cls, path: str | Path | None = None) -> ArtiscanConfig:
        """Load config from a YAML file and environment variables.

        Precedence, lowest first: built-in defaults, the YAML file
        (``path`` or ``<config_dir>/config.yaml``), then ``ARTISCAN_*``
        environment variables.
        """
        config = cls()

        config_path = Path(path) if path else config.config_file
        if config_path.is_file():
            config._apply_file(config_path)

        env_url = os.environ.get("ARTISCAN_API_URL")
        if env_url:
            config.api_url = env_url

        env_timeout = os.environ.get("ARTISCAN_TIMEOUT")
        if env_timeout:
            config.timeout = float(env_timeout)

        return config

    def _apply_file(self, path: Path) -> None:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        if data is None:
            return
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must be a mapping")

        if "api_url" in data:
            self.api_url = str(data["api_url"])
        if "scan_endpoint" in data:
            self.scan_endpoint = str(data["scan_endpoint"])
        if "timeout" in data:
            self.timeout = float(data["timeout"])
