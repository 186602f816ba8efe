"""
Configuration file support for lan-party-tools.

Loads settings from ``~/.config/lan-party-tools/config.yaml`` (or
``$XDG_CONFIG_HOME/lan-party-tools/config.yaml``) and exposes them as a typed
dataclass that the CLI merges with command-line flags and environment
variables.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from lanparty_py.steam.transfer import DEFAULT_BUFFER_SIZE

logger = logging.getLogger("lanparty.config")

ENV_STEAMAPPS = "LANPARTY_STEAMAPPS"
ENV_DESTINATION = "LANPARTY_DESTINATION"
ENV_SOURCE = "LANPARTY_SOURCE"


def default_config_path() -> Path:
    """Return the default configuration file path.

    Uses ``$XDG_CONFIG_HOME/lan-party-tools/config.yaml`` when set, otherwise
    falls back to ``~/.config/lan-party-tools/config.yaml``.
    """
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "lan-party-tools" / "config.yaml"
    return Path.home() / ".config" / "lan-party-tools" / "config.yaml"


def _optional_path(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(Path(str(value)).expanduser())


@dataclass
class LanPartyConfig:
    """Top-level configuration loaded from the YAML file."""

    steamapps: Optional[str] = None
    destination: Optional[str] = None
    source: Optional[str] = None
    buffer_size: int = DEFAULT_BUFFER_SIZE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LanPartyConfig":
        """Construct a ``LanPartyConfig`` from a parsed YAML dictionary."""
        if not isinstance(data, dict):
            return cls()

        buffer_size = data.get("buffer_size", DEFAULT_BUFFER_SIZE)
        if not isinstance(buffer_size, int) or buffer_size <= 0:
            logger.warning("Ignoring invalid buffer_size: %s", buffer_size)
            buffer_size = DEFAULT_BUFFER_SIZE

        return cls(
            steamapps=_optional_path(data.get("steamapps")),
            destination=_optional_path(data.get("destination")),
            source=_optional_path(data.get("source")),
            buffer_size=buffer_size,
        )

    @classmethod
    def from_file(cls, path: Path) -> "LanPartyConfig":
        """Read a YAML file and return a ``LanPartyConfig``.

        Returns an empty default config on any error.
        """
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f.read())
            if data is None:
                return cls()
            return cls.from_dict(data)
        except (IOError, yaml.YAMLError) as e:
            logger.error("Failed to load config from %s: %s", path, e)
            return cls()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "LanPartyConfig":
        """Load config from *config_path* or the default location.

        Returns an empty config if the file does not exist.
        """
        path = config_path or default_config_path()
        if not path.exists():
            return cls()
        return cls.from_file(path)


def resolve_location(
    flag: Optional[str], env_var: str, configured: Optional[str]
) -> Optional[str]:
    """
    Pick a library location.

    The order of precedence is:
    1. Command-line argument
    2. Environment variable
    3. Configuration file

    Returns None when none is set, meaning the platform default applies.
    """
    return flag or os.environ.get(env_var) or configured
