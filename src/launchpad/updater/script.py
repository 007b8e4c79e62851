"""Replace-and-relaunch script synthesis.

A running launcher cannot overwrite its own executable on most platforms.
Instead it writes a small script to the temp directory, spawns it and
exits; the script copies the staged update over the installation and
starts the launcher again.

The script is rendered from a bundled template with three variables:

- ``%temp%``: the temp directory, with a trailing separator
- ``%localDir%``: the launcher install directory, with a trailing separator
- ``%launchpadExecutable%``: file name of the running launcher
"""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from importlib import resources
from pathlib import Path
from typing import Final

from launchpad.config import (
    LaunchpadConfig,
    get_launcher_executable_name,
    get_local_launcher_directory,
)
from launchpad.domain.models import UpdateScriptDescriptor

logger = logging.getLogger(__name__)

TEMP_DIRECTORY_VARIABLE: Final = "%temp%"
LOCAL_INSTALL_DIRECTORY_VARIABLE: Final = "%localDir%"
LOCAL_EXECUTABLE_NAME: Final = "%launchpadExecutable%"

UNIX_SCRIPT_NAME: Final = "launchpad_update.sh"
WINDOWS_SCRIPT_NAME: Final = "launchpad_update.bat"

RESOURCE_PACKAGE: Final = "launchpad.updater.resources"


def is_running_on_unix() -> bool:
    """Check if the current platform runs shell scripts rather than batch files."""
    return os.name == "posix"


def get_temp_directory() -> str:
    """Get the system temp directory with a trailing separator."""
    return os.path.join(tempfile.gettempdir(), "")


class TemplateStore(ABC):
    """Read-only lookup of script templates by name."""

    @abstractmethod
    def get_template(self, name: str) -> str | None:
        """Get the template text, or None if there is no such template."""
        ...


class PackageTemplateStore(TemplateStore):
    """Templates bundled as package data."""

    def __init__(self, package: str = RESOURCE_PACKAGE):
        self.package = package

    def get_template(self, name: str) -> str | None:
        resource = resources.files(self.package).joinpath(name)
        try:
            # Bytes keep the template's own line endings intact
            return resource.read_bytes().decode("utf-8")
        except (FileNotFoundError, IsADirectoryError):
            return None


class DictTemplateStore(TemplateStore):
    """Templates held in memory."""

    def __init__(self, templates: Mapping[str, str]):
        self.templates = dict(templates)

    def get_template(self, name: str) -> str | None:
        return self.templates.get(name)


class UpdateScriptSynthesizer:
    """Renders and writes the update script for the current platform."""

    def __init__(
        self,
        config: LaunchpadConfig | None = None,
        templates: TemplateStore | None = None,
        is_unix: Callable[[], bool] = is_running_on_unix,
        temp_directory: Callable[[], str] = get_temp_directory,
        executable_name: Callable[[], str] = get_launcher_executable_name,
    ):
        self.config = config or LaunchpadConfig()
        self.templates = templates or PackageTemplateStore()
        self._is_unix = is_unix
        self._temp_directory = temp_directory
        self._executable_name = executable_name

    def get_update_script_name(self) -> str:
        """Get the template name, which is also the output file name."""
        return UNIX_SCRIPT_NAME if self._is_unix() else WINDOWS_SCRIPT_NAME

    def get_update_script_path(self) -> Path:
        """Get where the update script is written."""
        return Path(self._temp_directory()) / self.get_update_script_name()

    def get_update_script_source(self) -> str:
        """Load the bundled template and fill in its variables.

        A missing template gives an empty script rather than an error.
        """
        name = self.get_update_script_name()
        script_source = self.templates.get_template(name)

        if script_source is None:
            logger.warning("Update script template %s not found, using an empty script", name)
            script_source = ""

        return self.render(script_source)

    def render(self, script_source: str) -> str:
        """Substitute the script variables, in order, across the whole text."""
        rendered = script_source
        rendered = rendered.replace(TEMP_DIRECTORY_VARIABLE, self._temp_directory())
        rendered = rendered.replace(LOCAL_INSTALL_DIRECTORY_VARIABLE, get_local_launcher_directory(self.config))
        rendered = rendered.replace(LOCAL_EXECUTABLE_NAME, self._executable_name())
        return rendered

    def create_update_script(self) -> UpdateScriptDescriptor | None:
        """Write the update script to disk.

        Returns:
            A descriptor for spawning the script, or None if it could not
            be written. A partially written file is left as it is.
        """
        try:
            update_script_path = self.get_update_script_path()
            update_script_source = self.get_update_script_source()

            update_script_path.write_text(update_script_source, encoding="utf-8", newline="")

            if self._is_unix():
                update_script_path.chmod(0o755)

            logger.info("Wrote update script to %s", update_script_path)

            return UpdateScriptDescriptor(
                executable_path=update_script_path,
                use_shell_execute=False,
                redirect_stdout=False,
                hide_window=True,
            )
        except OSError as e:
            logger.warning("Failed to create update script (%s): %s", type(e).__name__, e)
            return None
