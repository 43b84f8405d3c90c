# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Helpers shared by the models and the document loader.

Nothing in here knows about specific monitoring resources.
"""
from pathlib import Path


def normalized(value: str) -> str:
    """Return `value` trimmed of surrounding whitespace and lower-cased."""
    return value.strip().lower()


def file_contents(path: Path) -> str | None:
    """Return the content of a file at path `path`."""
    if not path.exists():
        return None
    return path.read_text()
