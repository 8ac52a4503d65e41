from __future__ import annotations

from dataclasses import dataclass


# -----------------------------
@dataclass(frozen=True)
class RunOptions:
    # Join text runs split by formatting before scanning for directives
    coalesce_runs: bool = False
    # Validate the whole template through the tokenizer before rendering
    validate: bool = True
    # Render by walking the parsed tree instead of the raw text
    via_tree: bool = False


__all__ = ["RunOptions"]
