"""
Streaming JSON structure scanner.

A small state machine that follows bracket nesting and string/escape state
one character at a time, without parsing values. The response decoder uses
it to count unclosed brackets, find structural commas and cut top-level
objects out of damaged JSON text.

Usage:
    scanner = JsonScanner()
    scanner.feed_text('{"cast": [{"a": "}"}')
    scanner.closers()   # ']}'
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

_PAIRS = {'{': '}', '[': ']'}
_LEADING_FENCE_RE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_TRAILING_FENCE_RE = re.compile(r"\n?[ \t]*```$")


@dataclass
class JsonScanner:
    """
    Tracks nesting depth and string state over a stream of characters.

    Positions recorded by feed() are offsets of the characters fed so far,
    counted from the first character fed.
    """
    stack: List[str] = field(default_factory=list)
    in_string: bool = False
    escape: bool = False
    position: int = 0
    last_comma: int = -1
    last_close: int = -1

    @property
    def depth(self) -> int:
        return len(self.stack)

    @property
    def balanced(self) -> bool:
        return not self.stack and not self.in_string

    def feed(self, ch: str) -> None:
        index = self.position
        self.position += 1

        if self.in_string:
            if self.escape:
                self.escape = False
            elif ch == '\\':
                self.escape = True
            elif ch == '"':
                self.in_string = False
            return

        if ch == '"':
            self.in_string = True
        elif ch in _PAIRS:
            self.stack.append(ch)
        elif ch in '}]':
            if self.stack:
                self.stack.pop()
            self.last_close = index
        elif ch == ',':
            self.last_comma = index

    def feed_text(self, text: str) -> 'JsonScanner':
        for ch in text:
            self.feed(ch)
        return self

    def closers(self) -> str:
        """Closing brackets that would balance everything still open, innermost first."""
        return ''.join(_PAIRS[opener] for opener in reversed(self.stack))


def scan(text: str) -> JsonScanner:
    """Scan a whole string and return the final scanner state."""
    return JsonScanner().feed_text(text)


def strip_code_fences(text: str) -> str:
    """Remove a markdown code fence (```json ... ```) wrapped around the whole text."""
    text = _LEADING_FENCE_RE.sub("", text.strip())
    return _TRAILING_FENCE_RE.sub("", text).strip()


def strip_comments(text: str) -> str:
    """Remove // line and /* block */ comments that sit outside strings."""
    out: List[str] = []
    scanner = JsonScanner()
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        if not scanner.in_string and ch == '/' and i + 1 < n:
            nxt = text[i + 1]
            if nxt == '/':
                end = text.find('\n', i)
                i = n if end == -1 else end
                continue
            if nxt == '*':
                end = text.find('*/', i + 2)
                i = n if end == -1 else end + 2
                continue
        scanner.feed(ch)
        out.append(ch)
        i += 1
    return ''.join(out)


def strip_trailing_commas(text: str) -> str:
    """Drop commas outside strings that are followed only by whitespace and a closer (or the end)."""
    out: List[str] = []
    scanner = JsonScanner()
    n = len(text)
    for i, ch in enumerate(text):
        if ch == ',' and not scanner.in_string:
            j = i + 1
            while j < n and text[j].isspace():
                j += 1
            if j == n or text[j] in '}]':
                scanner.feed(ch)
                continue
        scanner.feed(ch)
        out.append(ch)
    return ''.join(out)


def sanitize(text: str) -> str:
    """Code fences, comments and trailing commas removed; leading prose skipped."""
    cleaned = strip_trailing_commas(strip_comments(strip_code_fences(text)))
    starts = [i for i in (cleaned.find('{'), cleaned.find('[')) if i != -1]
    return cleaned[min(starts):].strip() if starts else cleaned.strip()


def try_parse(text: str) -> Tuple[bool, Any]:
    """Parse the first JSON value in text, ignoring anything after it."""
    try:
        value, _ = json.JSONDecoder().raw_decode(text.strip())
    except ValueError:
        return False, None
    return True, value


def close_partial(text: str) -> str:
    """
    Balance a truncated JSON fragment.

    Whitespace and dangling commas are trimmed from the end, then the exact
    closers for every open bracket are appended.
    """
    trimmed = text.rstrip().rstrip(',').rstrip()
    return strip_trailing_commas(trimmed + scan(trimmed).closers())


def cut_at_last_comma(text: str) -> Optional[str]:
    """
    Drop a trailing incomplete member.

    Cuts at the last structural comma that follows the last structural
    closer, or returns None when there is no such comma.
    """
    scanner = scan(text)
    if scanner.last_comma > scanner.last_close:
        return text[:scanner.last_comma]
    return None


def object_spans(text: str, start: int = 0) -> Tuple[List[str], Optional[str]]:
    """
    Cut top-level objects out of text, beginning at start.

    A span opens on '{' at depth zero and closes when depth returns to zero.
    Scanning stops at a ']' at depth zero (the end of the enclosing array).

    Returns:
        Tuple of (complete object spans, trailing incomplete object or None)
    """
    spans: List[str] = []
    scanner = JsonScanner()
    span_start: Optional[int] = None

    for i in range(start, len(text)):
        ch = text[i]
        if scanner.depth == 0 and not scanner.in_string:
            if ch == ']':
                break
            if ch == '{':
                span_start = i
            elif span_start is None:
                continue
        scanner.feed(ch)
        if span_start is not None and scanner.depth == 0 and not scanner.in_string:
            spans.append(text[span_start:i + 1])
            span_start = None

    trailing = text[span_start:] if span_start is not None else None
    return spans, trailing
