"""Enumerations for domain models."""

from enum import Enum


class Module(str, Enum):
    """Logical units of distributable content that can be updated."""

    LAUNCHER = "launcher"
    GAME = "game"


class ProgressKind(str, Enum):
    """What a progress report is measuring."""

    DOWNLOAD = "download"
    VERIFY = "verify"
    INSTALL = "install"


class SystemTarget(str, Enum):
    """Platforms a game build can be published for."""

    INVALID = "Invalid"
    WIN64 = "Win64"
    WIN32 = "Win32"
    LINUX = "Linux"
    MAC = "Mac"
