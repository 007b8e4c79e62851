"""Self-updating launcher for Launchpad.

This module provides the pieces the launcher needs to update itself:
- Drive a patch protocol to update the launcher module in the background
- Check the standard changelog and fall back to the protocol's changelog
- Write the script that replaces the running launcher and restarts it
"""

from launchpad.updater.launcher import LauncherHandler
from launchpad.updater.script import (
    DictTemplateStore,
    PackageTemplateStore,
    TemplateStore,
    UpdateScriptSynthesizer,
    get_temp_directory,
    is_running_on_unix,
)

__all__ = [
    "LauncherHandler",
    "UpdateScriptSynthesizer",
    "TemplateStore",
    "PackageTemplateStore",
    "DictTemplateStore",
    "get_temp_directory",
    "is_running_on_unix",
]
