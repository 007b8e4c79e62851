"""Domain models for Launchpad."""

from launchpad.domain.enums import Module, ProgressKind, SystemTarget
from launchpad.domain.models import (
    ChangelogResult,
    ModuleInstallationFinished,
    ModuleProgress,
    UpdateScriptDescriptor,
)

__all__ = [
    "ChangelogResult",
    "Module",
    "ModuleInstallationFinished",
    "ModuleProgress",
    "ProgressKind",
    "SystemTarget",
    "UpdateScriptDescriptor",
]
