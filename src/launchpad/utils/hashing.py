"""MD5 content hashing used to check downloaded files.

Protocol implementations compare these digests against the manifest the
server publishes. An empty or ``None`` result means the hash could not be
computed and the file must not be trusted.
"""

import hashlib
import logging
from pathlib import Path
from typing import BinaryIO, Final

logger = logging.getLogger(__name__)

CHUNK_SIZE: Final = 8192


def get_file_hash(stream: BinaryIO | None) -> str:
    """Hash the remaining content of a binary stream.

    The stream is read to the end and closed, whatever the outcome.

    Args:
        stream: Readable binary stream, or None.

    Returns:
        Uppercase hex MD5 digest (32 characters), or an empty string if the
        stream is None or could not be read.
    """
    if stream is None:
        return ""

    try:
        md5 = hashlib.md5()
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            md5.update(chunk)
        return md5.hexdigest().upper()
    except OSError as e:
        logger.warning("Failed to hash stream (%s): %s", type(e).__name__, e)
        return ""
    finally:
        stream.close()


def hash_file(path: str | Path) -> str | None:
    """Hash a file on disk.

    Returns None when the file cannot be opened or read.
    """
    try:
        stream = Path(path).open("rb")
    except OSError as e:
        logger.warning("Failed to open %s for hashing: %s", path, e)
        return None

    digest = get_file_hash(stream)
    return digest or None


def verify_file_hash(path: str | Path, expected: str | None) -> bool:
    """Check a file against a manifest digest. Fails closed."""
    if not expected:
        return False

    digest = hash_file(path)
    if digest is None:
        return False

    return digest == expected.strip().upper()
