"""Integrity and text utilities."""

from launchpad.utils.hashing import get_file_hash, hash_file, verify_file_hash
from launchpad.utils.text import clean, parse_system_target

__all__ = [
    "clean",
    "get_file_hash",
    "hash_file",
    "parse_system_target",
    "verify_file_hash",
]
