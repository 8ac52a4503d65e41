"""
Run coalescing for WordprocessingML.

Word splits a paragraph into runs (<w:r>) whenever formatting, spell
checking or revision tracking changes, and a directive typed in one go can
end up spread over several runs:

    <w:r><w:t>{{client_</w:t></w:r><w:r><w:rPr><w:b/></w:rPr><w:t>name}}</w:t></w:r>

Removing the boundary between two adjacent text runs puts the whole
directive back into a single text node. Only boundaries made of nothing but
the closing tags, the next run's start tag, an optional run-properties
block and the next text node's start tag are removed.

When an absorbed text node was marked xml:space="preserve", the surviving
node gets the same mark, otherwise leading and trailing spaces carried
over from the absorbed run would stop being significant.
"""

from __future__ import annotations

import logging
import re
from typing import Tuple

logger = logging.getLogger(__name__)

_TEXT_OPEN = r'<w:t(?:\s[^>]*)?>'

_RUN_BOUNDARY = re.compile(
    r'</w:t>\s*</w:r>\s*'            # end of the previous text run
    r'<w:r(?:\s[^>]*)?>\s*'           # start of the next run
    r'(?:<w:rPr>(?:(?!</w:rPr>).)*</w:rPr>\s*)?'  # its formatting, if any
    + _TEXT_OPEN,                     # its text node
    re.DOTALL,
)

# A text node followed by one or more absorbable runs
_TEXT_CHAIN = re.compile(
    r'(?P<head>' + _TEXT_OPEN + r')'
    r'(?P<rest>[^<]*(?:' + _RUN_BOUNDARY.pattern + r'[^<]*)+</w:t>)',
    re.DOTALL,
)

_PRESERVE = re.compile(r'''\sxml:space\s*=\s*["']preserve["']''')


def coalesce_count(markup: str) -> Tuple[str, int]:
    """
    Join adjacent text runs.

    Returns:
        Tuple of (coalesced markup, number of boundaries removed)
    """
    count = 0

    def join(m: re.Match) -> str:
        nonlocal count
        head, rest = m.group("head"), m.group("rest")
        absorbed = _RUN_BOUNDARY.findall(rest)
        count += len(absorbed)
        if not _PRESERVE.search(head) and any(_PRESERVE.search(b) for b in absorbed):
            head = head[:-1] + ' xml:space="preserve">'
        return head + _RUN_BOUNDARY.sub("", rest)

    result = _TEXT_CHAIN.sub(join, markup)
    if count:
        logger.debug(f"coalesced {count} run boundaries")
    return result, count


def coalesce(markup: str) -> str:
    """
    Join adjacent text runs so that no directive is split by run markup.

    The transform is idempotent and does not look at directive syntax.
    """
    result, _ = coalesce_count(markup)
    return result


__all__ = ["coalesce", "coalesce_count"]
