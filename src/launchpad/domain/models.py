"""Core domain models for Launchpad.

These are the payloads that travel between the patch protocol, the
launcher orchestrator and whatever UI subscribes to its events.
"""

import subprocess
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from launchpad.domain.enums import Module, ProgressKind


class ChangelogResult(BaseModel):
    """Changelog content and the address it is associated with."""

    model_config = ConfigDict(frozen=True)

    html: str = ""
    url: str = ""

    @property
    def is_empty(self) -> bool:
        """Check if no changelog was retrieved."""
        return not self.html


class ModuleProgress(BaseModel):
    """Progress report raised by a patch protocol while updating a module."""

    module: Module
    kind: ProgressKind = ProgressKind.DOWNLOAD
    progress_fraction: float = Field(default=0.0, ge=0.0, le=1.0)
    indicator_label: str = ""


class ModuleInstallationFinished(BaseModel):
    """Raised once a patch protocol is done with a module."""

    module: Module
    result: bool = True


class UpdateScriptDescriptor(BaseModel):
    """How to spawn a generated replace-and-relaunch script."""

    executable_path: Path
    use_shell_execute: bool = False
    hide_window: bool = True
    redirect_stdout: bool = False

    def popen_args(self) -> dict[str, Any]:
        """Build keyword arguments for subprocess.Popen."""
        kwargs: dict[str, Any] = {
            "args": [str(self.executable_path)],
            "shell": self.use_shell_execute,
        }

        if self.redirect_stdout:
            kwargs["stdout"] = subprocess.PIPE

        if self.hide_window and sys.platform == "win32":
            startupinfo = subprocess.STARTUPINFO()
            startupinfo.dwFlags |= subprocess.STARTF_USESHOWWINDOW
            startupinfo.wShowWindow = subprocess.SW_HIDE
            kwargs["startupinfo"] = startupinfo

        return kwargs
