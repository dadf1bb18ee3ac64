"""
Showrunner Resilient Response Decoder

Recovers per-character records from generation responses that are nominally
{"cast": [...]} JSON but often arrive fenced, commented or cut off mid-object.

Three tiers run in order, each only when the previous one fails:
1. DIRECT   - sanitize and parse
2. REPAIRED - drop a trailing incomplete member and close open brackets
3. SALVAGED - cut complete objects out one by one, plus one trailing
              incomplete object that already names its character

A tier succeeds only when every record it yields carries the identity field.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from showrunner.core.constants import CAST_ARRAY_KEY, IDENTITY_FIELD
from showrunner.core.exceptions import NoRecoverableRecordsError
from showrunner.core.logging_config import get_logger
from showrunner.llm.json_scanner import (
    close_partial,
    cut_at_last_comma,
    object_spans,
    sanitize,
    scan,
    strip_trailing_commas,
    try_parse,
)

PREVIEW_LENGTH = 200

Record = Dict[str, Any]


class DecodeTier(Enum):
    """Which recovery tier produced a decode result."""
    DIRECT = "direct"
    REPAIRED = "repaired"
    SALVAGED = "salvaged"


@dataclass
class DecodeResult:
    """Decoded records plus the tier that produced them."""
    records: List[Record]
    tier: DecodeTier
    attempts: List[DecodeTier] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "records": self.records,
            "tier": self.tier.value,
            "attempts": [t.value for t in self.attempts],
            "failures": self.failures,
        }


def looks_truncated(text: str) -> bool:
    """
    Heuristic check for a response cut off by the token limit.

    True when the text ends with a comma, does not end with a closing
    bracket, or leaves brackets or a string open.
    """
    stripped = text.strip()
    if not stripped:
        return True
    if stripped.endswith(','):
        return True
    if stripped.endswith('```'):
        stripped = stripped[:-3].rstrip()
    if not stripped.endswith(('}', ']')):
        return True
    return not scan(stripped).balanced


class ResilientResponseDecoder:
    """
    Decodes batched generation responses into records keyed by an identity field.

    Args:
        id_field: Field every record must carry (e.g. characterName)
        array_key: Key of the record array in the response object
        logger: Optional logger override
    """

    def __init__(
        self,
        id_field: str = IDENTITY_FIELD,
        array_key: str = CAST_ARRAY_KEY,
        logger: Optional[logging.Logger] = None
    ):
        self.id_field = id_field
        self.array_key = array_key
        self.logger = logger or get_logger("llm.response_decoder")
        self._array_start_re = re.compile(r'"' + re.escape(array_key) + r'"\s*:\s*\[')

    def decode(self, raw_text: str) -> List[Record]:
        """Decode a response into records; see decode_with_report."""
        return self.decode_with_report(raw_text).records

    def decode_with_report(self, raw_text: str) -> DecodeResult:
        """
        Decode a response, reporting which tier succeeded.

        Raises:
            NoRecoverableRecordsError: If no tier yields a single valid record
        """
        text = sanitize(raw_text or "")
        tiers = (
            (DecodeTier.DIRECT, self._direct),
            (DecodeTier.REPAIRED, self._repair),
            (DecodeTier.SALVAGED, self._salvage),
        )

        attempts: List[DecodeTier] = []
        failures: Dict[str, str] = {}
        for tier, handler in tiers:
            attempts.append(tier)
            records, reason = handler(text)
            if records:
                if tier is DecodeTier.SALVAGED:
                    self.logger.warning(f"Salvaged {len(records)} record(s) from damaged response")
                elif tier is DecodeTier.REPAIRED:
                    self.logger.warning(f"Repaired truncated response, recovered {len(records)} record(s)")
                return DecodeResult(records=records, tier=tier, attempts=attempts, failures=failures)
            failures[tier.value] = reason
            self.logger.warning(f"Decode tier '{tier.value}' failed: {reason}")

        preview = (raw_text or "")[:PREVIEW_LENGTH]
        self.logger.error(f"No recoverable records in response: {preview!r}")
        raise NoRecoverableRecordsError([t.value for t in attempts], preview=preview, reasons=failures)

    # =========================================================================
    # TIERS
    # =========================================================================

    def _direct(self, text: str):
        ok, value = try_parse(text)
        if not ok:
            return None, "not valid JSON"
        return self._validated(value)

    def _repair(self, text: str):
        scanner = scan(text)
        if scanner.balanced:
            return None, "brackets already balanced"

        if scanner.last_comma > scanner.last_close:
            text = cut_at_last_comma(text)
            scanner = scan(text)
        if scanner.in_string:
            return None, "truncated inside a string"

        ok, value = try_parse(strip_trailing_commas(text.rstrip() + scanner.closers()))
        if not ok:
            return None, "repaired text still not valid JSON"
        return self._validated(value)

    def _salvage(self, text: str):
        match = self._array_start_re.search(text)
        if match:
            start = match.end()
        elif text.startswith('['):
            start = 1
        else:
            start = 0

        spans, trailing = object_spans(text, start)
        records: List[Record] = []
        for span in spans:
            ok, value = try_parse(strip_trailing_commas(span))
            if ok and self._has_identity(value):
                records.append(value)

        if trailing is not None and f'"{self.id_field}"' in trailing:
            record = self._close_trailing(trailing)
            if record is not None:
                records.append(record)

        if not records:
            return None, f"no object carrying '{self.id_field}' could be salvaged"
        return records, ""

    def _close_trailing(self, fragment: str) -> Optional[Record]:
        ok, value = try_parse(close_partial(fragment))
        if ok and self._has_identity(value):
            return value

        cut = cut_at_last_comma(fragment)
        if cut is None:
            return None
        ok, value = try_parse(close_partial(cut))
        return value if ok and self._has_identity(value) else None

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def _has_identity(self, value: Any) -> bool:
        return isinstance(value, dict) and bool(value.get(self.id_field))

    def _validated(self, value: Any):
        if isinstance(value, dict) and isinstance(value.get(self.array_key), list):
            records = value[self.array_key]
        elif isinstance(value, list):
            records = value
        elif self._has_identity(value):
            records = [value]
        else:
            return None, f"no '{self.array_key}' array in response"

        if not records:
            return None, "empty record array"
        if not all(self._has_identity(r) for r in records):
            return None, f"record missing '{self.id_field}'"
        return records, ""


def decode(raw_text: str, id_field: str = IDENTITY_FIELD, array_key: str = CAST_ARRAY_KEY) -> List[Record]:
    """Decode a generation response into records."""
    return ResilientResponseDecoder(id_field, array_key).decode(raw_text)
