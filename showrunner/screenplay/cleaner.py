"""
Text cleaner for generated screenplay text.

Strips the markup artifacts generation services wrap around screenplay lines
(HTML tags, markdown emphasis, blockquote markers, quoted transitions) so the
assembler only ever sees plain screenplay lines.
"""

import re

from showrunner.core.constants import TRANSITION_KEYWORDS
from showrunner.utils.unicode_utils import clean_unicode, normalize_text, smart_quotes_to_ascii

_TAG_RE = re.compile(r'<[^>\n]+>')
_BLOCKQUOTE_RE = re.compile(r'^[ \t]*(?:>[ \t]*)+', re.MULTILINE)
_BOLD_RE = re.compile(r'\*\*([^*\n]+)\*\*')
_ITALIC_RE = re.compile(r'\*([^*\n]+)\*')

_TRANSITION_WORDS = '|'.join(re.escape(k.rstrip(':.')) for k in TRANSITION_KEYWORDS)
_QUOTED_TRANSITION_RE = re.compile(
    rf'^[ \t]*"((?:{_TRANSITION_WORDS})[^"\n]*)"[ \t]*$',
    re.MULTILINE | re.IGNORECASE
)


def _clean_once(text: str) -> str:
    text = smart_quotes_to_ascii(clean_unicode(normalize_text(text)))
    text = _TAG_RE.sub('', text)
    text = _BLOCKQUOTE_RE.sub('', text)
    text = _BOLD_RE.sub(r'\1', text)
    text = _ITALIC_RE.sub(r'\1', text)
    return _QUOTED_TRANSITION_RE.sub(r'\1', text)


def clean(text: str) -> str:
    """
    Remove markup artifacts from generated text.

    Total and idempotent: clean(clean(x)) == clean(x). Every pass only removes
    characters or swaps them for ASCII, so repeating until nothing changes
    terminates and absorbs nested markup such as ``***bold italic***``.
    """
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    while True:
        cleaned = _clean_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned
