"""Launcher configuration.

Configuration is read from a ``launchpad.toml`` file and handed to the
components that need it. Nothing here is a process-wide singleton.

Example::

    changelog_address = "https://example.com/changelog.html"
    protocol = "http"
    game_name = "MyGame"
"""

import logging
import os
import sys
from pathlib import Path
from typing import Final

import tomli
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME: Final = "launchpad.toml"


class ConfigError(Exception):
    """Raised when a configuration file cannot be parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration in {path}: {reason}")


class LaunchpadConfig(BaseModel):
    """Settings consumed by the launcher core."""

    changelog_address: str = ""
    protocol: str = "http"
    game_name: str = "LaunchpadExample"
    local_dir: Path | None = None
    request_timeout: float = 10.0


def load_config(path: str | Path | None = None) -> LaunchpadConfig:
    """Load configuration from a TOML file.

    Args:
        path: Config file to read. Defaults to ``launchpad.toml`` next to
            the launcher.

    Returns:
        The parsed configuration, or defaults if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not valid.
    """
    config_path = Path(path) if path else Path(get_local_launcher_directory()) / DEFAULT_CONFIG_FILENAME

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return LaunchpadConfig()

    try:
        data = tomli.loads(config_path.read_text(encoding="utf-8"))
        return LaunchpadConfig.model_validate(data)
    except tomli.TOMLDecodeError as e:
        raise ConfigError(config_path, str(e)) from e
    except ValidationError as e:
        raise ConfigError(config_path, str(e)) from e


def get_launcher_entry_point() -> Path:
    """Get the file that started the launcher.

    Frozen builds are their own executable; otherwise this is the script
    or console entry point in ``sys.argv[0]``.
    """
    if getattr(sys, "frozen", False) or not sys.argv or not sys.argv[0]:
        return Path(sys.executable).resolve()
    return Path(sys.argv[0]).resolve()


def get_local_launcher_directory(config: LaunchpadConfig | None = None) -> str:
    """Get the directory the launcher is installed in, with a trailing separator.

    A configured ``local_dir`` wins; otherwise it is the directory of the
    launcher entry point.
    """
    if config is not None and config.local_dir is not None:
        directory = config.local_dir
    else:
        directory = get_launcher_entry_point().parent

    return os.path.join(str(directory), "")


def get_launcher_executable_name() -> str:
    """Get the file name (not path) of the running launcher."""
    return get_launcher_entry_point().name
