"""Global configuration — XDG paths, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _default_data_dir() -> Path:
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "scriptwatch"
    return Path.home() / ".local" / "share" / "scriptwatch"


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "scriptwatch"
    return Path.home() / ".config" / "scriptwatch"


@dataclass
class ScriptWatchConfig:
    """Application-wide configuration."""

    data_dir: Path = field(default_factory=_default_data_dir)
    config_dir: Path = field(default_factory=_default_config_dir)
    output_dir: Path | None = None
    scan_wait_ms: int = 5000  # Mutation observation window after load
    nav_timeout_ms: int = 60000
    headless: bool = True
    verbose: bool = False

    @property
    def scans_dir(self) -> Path:
        return self.output_dir or self.data_dir / "scans"

    @property
    def pages_file(self) -> Path:
        return self.config_dir / "pages.yaml"

    @classmethod
    def load(cls) -> ScriptWatchConfig:
        """Load config from environment variables with XDG defaults."""
        config = cls()

        env_output = os.environ.get("SCRIPTWATCH_OUTPUT_DIR")
        if env_output:
            config.output_dir = Path(env_output)

        env_wait = os.environ.get("SCRIPTWATCH_SCAN_WAIT_MS")
        if env_wait:
            config.scan_wait_ms = int(env_wait)

        env_timeout = os.environ.get("SCRIPTWATCH_NAV_TIMEOUT_MS")
        if env_timeout:
            config.nav_timeout_ms = int(env_timeout)

        env_headless = os.environ.get("SCRIPTWATCH_HEADLESS")
        if env_headless:
            config.headless = env_headless.strip().lower() not in ("0", "false", "no")

        return config
