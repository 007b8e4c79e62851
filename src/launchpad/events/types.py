"""Event type definitions for launcher hooks."""

from enum import Enum


class EventType(str, Enum):
    """Types of events raised by the launcher core."""

    # Module events
    MODULE_PROGRESS_CHANGED = "module.progress_changed"
    MODULE_INSTALLATION_FINISHED = "module.installation_finished"

    # Launcher events
    LAUNCHER_DOWNLOAD_PROGRESS_CHANGED = "launcher.download_progress_changed"
    LAUNCHER_DOWNLOAD_FINISHED = "launcher.download_finished"

    # Changelog events
    CHANGELOG_DOWNLOAD_FINISHED = "changelog.download_finished"
