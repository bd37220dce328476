"""
URI pattern compilation.

Patterns are regular expressions searched anywhere inside the requested path
(``re.search``, never ``re.fullmatch``). Anchor a pattern with ``^`` or ``$``
to pin it to the start or end of the path.
"""

import re
from functools import lru_cache
from typing import Pattern

from shared.errors import PatternError


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> Pattern:
    """Compile ``pattern``, raising PatternError when it is not a valid regex."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e


def pattern_matches(pattern: str, path: str) -> bool:
    """Unanchored search of ``pattern`` within ``path``."""
    return compile_pattern(pattern).search(path) is not None
