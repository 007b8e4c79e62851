"""Launchpad - self-updating launcher core."""

__version__ = "0.1.0"
