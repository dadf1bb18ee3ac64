"""
Character name normalization.

Two names refer to the same speaker when their normalized keys match; the
display form is only ever used for presentation.

Examples:
    >>> normalize("JASON (V.O.)")
    'jason'
    >>> normalize("Mrs. Kline (60s)")
    'mrs. kline'
    >>> display("JASON CALACANIS")
    'Jason Calacanis'
"""

import re

from showrunner.core.constants import AGE_PARENTHETICAL_PATTERN, DELIVERY_SUFFIX_PATTERNS

_DELIVERY_RES = [re.compile(p, re.IGNORECASE) for p in DELIVERY_SUFFIX_PATTERNS]
_AGE_RE = re.compile(AGE_PARENTHETICAL_PATTERN, re.IGNORECASE)


def strip_annotations(raw: str) -> str:
    """
    Remove delivery and age annotations, keeping the name's casing.

    Strips (V.O.), (O.S.), (CONT'D) and age parentheticals, drops anything
    from the first remaining '(' and collapses whitespace.
    """
    name = raw.strip()
    for pattern in _DELIVERY_RES:
        name = pattern.sub('', name)
    name = _AGE_RE.sub('', name)
    name = name.split('(', 1)[0]
    return ' '.join(name.split())


def normalize(raw: str) -> str:
    """Comparable key for a raw character name. Idempotent."""
    return strip_annotations(raw).lower()


def display(raw: str) -> str:
    """Presentation form: mixed case is kept, all-upper or all-lower becomes title case."""
    name = raw.strip()
    if name != name.upper() and name != name.lower():
        return name
    return ' '.join(word[:1].upper() + word[1:] for word in name.lower().split(' '))
