"""
Showrunner Unicode Utilities

Text normalization and Unicode handling for generated text.
"""

import re
import unicodedata


def normalize_text(text: str, form: str = 'NFC') -> str:
    """Normalize Unicode text to a standard form."""
    return unicodedata.normalize(form, text)


def clean_unicode(text: str) -> str:
    """
    Clean problematic Unicode characters from text.

    Removes:
    - Zero-width characters
    - Control characters (except newlines and tabs)
    - Replacement characters
    """
    text = re.sub(r'[\u200b\u200c\u200d\ufeff]', '', text)
    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', text)
    return text.replace('\ufffd', '')


def smart_quotes_to_ascii(text: str) -> str:
    """Convert smart quotes and a few typographic characters to ASCII."""
    replacements = {
        '\u2018': "'",  # Left single quote
        '\u2019': "'",  # Right single quote
        '\u201c': '"',  # Left double quote
        '\u201d': '"',  # Right double quote
        '\u00a0': ' ',  # Non-breaking space
    }

    for char, replacement in replacements.items():
        text = text.replace(char, replacement)

    return text
