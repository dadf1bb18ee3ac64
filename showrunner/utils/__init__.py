"""
Showrunner Utilities Module

Common utility functions and helpers used throughout the application.
"""

from .file_utils import read_json, read_text
from .unicode_utils import normalize_text, clean_unicode, smart_quotes_to_ascii

__all__ = [
    'read_json',
    'read_text',
    'normalize_text',
    'clean_unicode',
    'smart_quotes_to_ascii',
]
