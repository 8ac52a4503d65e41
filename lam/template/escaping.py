"""
Escaping of substituted values for markup-bearing text.
"""

from __future__ import annotations

# Ampersand must go first so the other entities are not re-escaped
_ENTITIES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape(value: str) -> str:
    """
    Replace the five markup-sensitive characters with entities.

    Applied once, to substituted answer text only; template text and
    directive syntax are never passed through here.
    """
    for char, entity in _ENTITIES:
        value = value.replace(char, entity)
    return value


__all__ = ["escape"]
