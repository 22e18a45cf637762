"""Display-name tokenizer.

Names split on runs of spaces, underscores, hyphens and dots.  A chunk is
split further only at lowercase-to-uppercase transitions, so all-caps runs
such as ``SAT`` in ``SATtemp`` stay glued to their neighbours.
"""

from __future__ import annotations

import re

_DELIMITER_RE = re.compile(r"[\s_\-.]+")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z])(?=[A-Z])")


def tokenize_point_name(name: str) -> list[str]:
    """Split a point display name into tokens.

    >>> tokenize_point_name("ROOM TEMP 4")
    ['ROOM', 'TEMP', '4']
    >>> tokenize_point_name("zoneTemp_SP")
    ['zone', 'Temp', 'SP']
    """
    tokens: list[str] = []
    for chunk in _DELIMITER_RE.split(name.strip()):
        if not chunk:
            continue
        tokens.extend(part for part in _CAMEL_BOUNDARY_RE.split(chunk) if part)
    return tokens
