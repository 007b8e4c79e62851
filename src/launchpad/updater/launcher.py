"""Launcher update orchestration.

Handles updating the launcher itself and loading the changelog. The
background work runs on daemon threads that are never joined, so nothing
in this module may touch UI code: results only leave through event hooks,
and those are raised on the worker thread.

The flow for a launcher update is:
1. ``update_launcher()`` asks the patch protocol to update the launcher module
2. Progress and completion from the protocol are relayed to subscribers
3. The UI calls ``create_update_script()``, spawns the script and exits
4. The script replaces the launcher files and starts the new launcher
"""

import logging
import threading
from collections.abc import Callable
from typing import Any
from urllib.parse import urlsplit

import httpx

from launchpad.config import LaunchpadConfig
from launchpad.domain.enums import Module
from launchpad.domain.models import ChangelogResult, UpdateScriptDescriptor
from launchpad.events import EventHook, EventType
from launchpad.protocols import PatchProtocolHandler, PatchProtocolProvider
from launchpad.updater.script import UpdateScriptSynthesizer

logger = logging.getLogger(__name__)

ALLOWED_CHANGELOG_SCHEMES = ("http", "https")


class LauncherHandler:
    """Updates the launcher and loads the changelog in the background.

    Events:
        launcher_download_progress_changed: relayed protocol progress
        launcher_download_finished: relayed protocol completion
        changelog_download_finished: raised once per load_fallback_changelog()
    """

    def __init__(
        self,
        config: LaunchpadConfig,
        protocol: PatchProtocolHandler | None = None,
        synthesizer: UpdateScriptSynthesizer | None = None,
        http_client_factory: Callable[[], httpx.Client] | None = None,
    ):
        self.config = config
        self.patch = protocol or PatchProtocolProvider.get_handler(config)
        self.synthesizer = synthesizer or UpdateScriptSynthesizer(config)
        self._http_client_factory = http_client_factory or self._default_http_client

        self.launcher_download_progress_changed = EventHook(EventType.LAUNCHER_DOWNLOAD_PROGRESS_CHANGED)
        self.launcher_download_finished = EventHook(EventType.LAUNCHER_DOWNLOAD_FINISHED)
        self.changelog_download_finished = EventHook(EventType.CHANGELOG_DOWNLOAD_FINISHED)

        self.changelog = ChangelogResult()

        self.patch.module_download_progress_changed.add_callback(self._on_launcher_download_progress_changed)
        self.patch.module_installation_finished.add_callback(self._on_launcher_download_finished)

    def _default_http_client(self) -> httpx.Client:
        return httpx.Client(timeout=self.config.request_timeout, follow_redirects=True)

    def update_launcher(self) -> None:
        """Update the launcher in the background. Returns immediately."""
        try:
            logger.info('Starting update of launcher files using protocol "%s"', self.patch.name)

            thread = threading.Thread(
                target=self._update_launcher_implementation,
                name="UpdateLauncher",
                daemon=True,
            )
            thread.start()
        except (OSError, RuntimeError) as e:
            logger.warning("The launcher update failed (%s): %s", type(e).__name__, e)

    def _update_launcher_implementation(self) -> None:
        try:
            self.patch.update_module(Module.LAUNCHER)
        except Exception as e:
            logger.error("Patch protocol failed to update the launcher: %s: %s", type(e).__name__, e)

    def can_access_standard_changelog(self) -> bool:
        """Check if the standard HTTP changelog can be reached.

        Only http and https addresses are tried. Redirects are followed and
        the final response must be a 200. Malformed addresses and transport
        failures count as unreachable.
        """
        address = self.config.changelog_address
        if not address:
            return False

        try:
            scheme = urlsplit(address).scheme.lower()
        except ValueError as e:
            logger.warning("Malformed changelog address %r: %s", address, e)
            return False

        if scheme not in ALLOWED_CHANGELOG_SCHEMES:
            logger.debug("Skipping changelog check for unsupported scheme: %s", address)
            return False

        try:
            with self._http_client_factory() as client:
                response = client.head(address)
                return response.status_code == httpx.codes.OK
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Could not access standard changelog (%s): %s", type(e).__name__, e)
            return False

    def load_fallback_changelog(self) -> None:
        """Load the changelog through the patch protocol in the background.

        changelog_download_finished is raised exactly once when done, with
        an empty result if the protocol has no changelog.
        """
        try:
            thread = threading.Thread(
                target=self._load_fallback_changelog_implementation,
                name="LoadFallbackChangelog",
                daemon=True,
            )
            thread.start()
        except (OSError, RuntimeError) as e:
            logger.warning("Loading the fallback changelog failed (%s): %s", type(e).__name__, e)
            self.changelog = ChangelogResult()
            self._on_changelog_download_finished()

    def _load_fallback_changelog_implementation(self) -> None:
        result = ChangelogResult()
        try:
            if self.patch.can_provide_changelog():
                result = ChangelogResult(
                    html=self.patch.get_changelog_source(),
                    url=self.config.changelog_address,
                )
        except Exception as e:
            logger.error("Patch protocol failed to provide a changelog: %s: %s", type(e).__name__, e)

        self.changelog = result
        self._on_changelog_download_finished()

    def create_update_script(self) -> UpdateScriptDescriptor | None:
        """Write the replace-and-relaunch script. None if it could not be written."""
        return self.synthesizer.create_update_script()

    def _on_changelog_download_finished(self) -> None:
        self.changelog_download_finished.emit(self, self.changelog)

    def _on_launcher_download_progress_changed(self, sender: Any, args: Any) -> None:
        self.launcher_download_progress_changed.emit(sender, args)

    def _on_launcher_download_finished(self, sender: Any, args: Any) -> None:
        self.launcher_download_finished.emit(sender, args)
