"""Observer hooks for relaying launcher events to subscribers."""

from launchpad.events.hook import EventHook
from launchpad.events.types import EventType

__all__ = ["EventHook", "EventType"]
