"""Patch protocol abstraction.

Concrete protocols (HTTP, FTP, BitTorrent, ...) live outside this package
and register themselves with the PatchProtocolProvider.
"""

from launchpad.protocols.interface import PatchProtocolHandler
from launchpad.protocols.provider import PatchProtocolProvider, ProtocolNotFoundError

__all__ = ["PatchProtocolHandler", "PatchProtocolProvider", "ProtocolNotFoundError"]
