"""
Shared test infrastructure for Legal Automator.

Modules:
- file_utils: Utilities for creating template, answer and markup files
- cli_utils: Utilities for running the CLI in a subprocess
"""

from .file_utils import write, run, document_xml
from .cli_utils import run_cli, jload

__all__ = [
    "write",
    "run",
    "document_xml",
    "run_cli",
    "jload",
]
