"""Text helpers for data coming back from servers."""

import logging

from launchpad.domain.enums import SystemTarget

logger = logging.getLogger(__name__)

_CONTROL_CHARACTERS = str.maketrans("", "", "\n\r\0")


def clean(text: str) -> str:
    """Strip line feeds, carriage returns and NUL characters."""
    return text.translate(_CONTROL_CHARACTERS)


def parse_system_target(text: str | None) -> SystemTarget:
    """Parse a platform name such as ``Win64`` into a SystemTarget.

    Unknown or missing values map to SystemTarget.INVALID.
    """
    if text is None:
        logger.warning("Cannot parse system target from None")
        return SystemTarget.INVALID

    value = clean(text).strip()
    for target in SystemTarget:
        if target.value == value or target.name == value:
            return target

    logger.warning("Unknown system target: %r", text)
    return SystemTarget.INVALID
