"""Pytest configuration and fixtures."""

import threading
from collections.abc import Iterator

import pytest

from launchpad.config import LaunchpadConfig
from launchpad.domain import (
    Module,
    ModuleInstallationFinished,
    ModuleProgress,
)
from launchpad.protocols import PatchProtocolHandler, PatchProtocolProvider


class FakeProtocol(PatchProtocolHandler):
    """In-memory patch protocol that replays scripted progress."""

    def __init__(self, config: LaunchpadConfig | None = None) -> None:
        super().__init__(config)
        self.progress_steps = [0.10, 0.55, 1.0]
        self.changelog_source: str | None = "<h1>Release notes</h1>"
        self.install_result = True
        self.updated_modules: list[Module] = []
        self.update_threads: list[str] = []

    def update_module(self, module: Module) -> None:
        self.updated_modules.append(module)
        self.update_threads.append(threading.current_thread().name)
        for fraction in self.progress_steps:
            self.on_module_download_progress_changed(
                ModuleProgress(module=module, progress_fraction=fraction),
            )
        self.on_module_installation_finished(
            ModuleInstallationFinished(module=module, result=self.install_result),
        )

    def can_provide_changelog(self) -> bool:
        return self.changelog_source is not None

    def get_changelog_source(self) -> str:
        return self.changelog_source or ""


@pytest.fixture
def config() -> LaunchpadConfig:
    """Configuration pointing at a fake changelog."""
    return LaunchpadConfig(
        changelog_address="https://example.com/changelog",
        protocol="fake",
    )


@pytest.fixture
def fake_protocol(config: LaunchpadConfig) -> FakeProtocol:
    """A fresh fake patch protocol."""
    return FakeProtocol(config)


@pytest.fixture
def registered_fake_protocol() -> Iterator[type[FakeProtocol]]:
    """Register FakeProtocol as 'fake' for the duration of a test."""
    PatchProtocolProvider.register("fake")(FakeProtocol)
    yield FakeProtocol
    PatchProtocolProvider.unregister("fake")
