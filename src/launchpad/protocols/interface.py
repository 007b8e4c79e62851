"""Patch protocol interface.

A patch protocol performs the actual network transfer and byte-level
installation of modules. The launcher core only drives it through this
interface and listens to its progress and completion hooks.
"""

import logging
from abc import ABC, abstractmethod

from launchpad.config import LaunchpadConfig
from launchpad.domain.enums import Module
from launchpad.domain.models import ModuleInstallationFinished, ModuleProgress
from launchpad.events import EventHook, EventType

logger = logging.getLogger(__name__)


class PatchProtocolHandler(ABC):
    """Abstract interface for patch protocols."""

    def __init__(self, config: LaunchpadConfig | None = None) -> None:
        self.config = config or LaunchpadConfig()
        self.module_download_progress_changed = EventHook(EventType.MODULE_PROGRESS_CHANGED)
        self.module_installation_finished = EventHook(EventType.MODULE_INSTALLATION_FINISHED)

    @property
    def name(self) -> str:
        """Protocol name used in log messages."""
        return type(self).__name__

    @abstractmethod
    def update_module(self, module: Module) -> None:
        """Download and install the latest version of a module.

        Blocks until the module is done. Implementations raise progress
        events while working and exactly one installation-finished event.
        """
        ...

    @abstractmethod
    def can_provide_changelog(self) -> bool:
        """Check if this protocol can serve a changelog."""
        ...

    @abstractmethod
    def get_changelog_source(self) -> str:
        """Get the changelog markup served by this protocol."""
        ...

    def on_module_download_progress_changed(self, args: ModuleProgress) -> None:
        """Raise the progress hook."""
        self.module_download_progress_changed.emit(self, args)

    def on_module_installation_finished(self, args: ModuleInstallationFinished) -> None:
        """Raise the installation-finished hook."""
        logger.debug("Module %s finished (result=%s)", args.module.value, args.result)
        self.module_installation_finished.emit(self, args)
