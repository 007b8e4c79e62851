"""Bundled replace-and-relaunch script templates."""
