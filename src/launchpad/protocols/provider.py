"""Registry of available patch protocols.

Protocols are registered in-process with ``PatchProtocolProvider.register``
or by third-party packages through the ``launchpad.protocols`` entry
point group.
"""

import logging
from collections.abc import Callable
from importlib.metadata import entry_points
from typing import Final, TypeVar

from launchpad.config import LaunchpadConfig
from launchpad.protocols.interface import PatchProtocolHandler

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP: Final = "launchpad.protocols"

H = TypeVar("H", bound=type[PatchProtocolHandler])


class ProtocolNotFoundError(Exception):
    """Raised when the configured protocol is not registered."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        known = ", ".join(available) or "none"
        super().__init__(f"No patch protocol named '{name}' (available: {known})")


class PatchProtocolProvider:
    """Looks up patch protocol handlers by name."""

    _registry: dict[str, type[PatchProtocolHandler]] = {}
    _entry_points_loaded = False

    @classmethod
    def register(cls, name: str) -> Callable[[H], H]:
        """Class decorator registering a protocol under a name."""

        def decorator(handler_cls: H) -> H:
            cls._registry[name.lower()] = handler_cls
            logger.debug("Registered patch protocol %s -> %s", name, handler_cls.__name__)
            return handler_cls

        return decorator

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove a protocol from the registry."""
        cls._registry.pop(name.lower(), None)

    @classmethod
    def _load_entry_points(cls) -> None:
        if cls._entry_points_loaded:
            return
        cls._entry_points_loaded = True

        for entry_point in entry_points(group=ENTRY_POINT_GROUP):
            try:
                cls._registry.setdefault(entry_point.name.lower(), entry_point.load())
            except Exception as e:
                logger.warning("Failed to load patch protocol %s: %s: %s", entry_point.name, type(e).__name__, e)

    @classmethod
    def available(cls) -> list[str]:
        """Names of all registered protocols."""
        cls._load_entry_points()
        return sorted(cls._registry)

    @classmethod
    def get_handler(cls, config: LaunchpadConfig) -> PatchProtocolHandler:
        """Instantiate the protocol named in the configuration.

        Raises:
            ProtocolNotFoundError: If no protocol with that name is registered.
        """
        cls._load_entry_points()

        handler_cls = cls._registry.get(config.protocol.lower())
        if handler_cls is None:
            raise ProtocolNotFoundError(config.protocol, cls.available())

        return handler_cls(config)
