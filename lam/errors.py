"""
User-facing errors.

Problems a template author or answer-file writer can fix derive from
LAMUserError: malformed directive nesting, unreadable answer files and
missing templates. The CLI prints them as a single line on stderr and
exits with `exit_code`; any other exception is a bug and keeps its traceback.
"""

from __future__ import annotations


class LAMUserError(Exception):
    """A problem in the user's template, answers or invocation."""

    exit_code = 2


__all__ = ["LAMUserError"]
