"""
Showrunner LLM Module

Decoding of generation-service responses.
"""

from .json_scanner import JsonScanner, scan, sanitize, object_spans
from .response_decoder import (
    DecodeTier,
    DecodeResult,
    ResilientResponseDecoder,
    decode,
    looks_truncated,
)

__all__ = [
    'JsonScanner',
    'scan',
    'sanitize',
    'object_spans',
    'DecodeTier',
    'DecodeResult',
    'ResilientResponseDecoder',
    'decode',
    'looks_truncated',
]
