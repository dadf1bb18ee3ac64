"""
Showrunner File Utilities

Common file operations with error handling and encoding support.
"""

import json
from pathlib import Path
from typing import Any, Union

from showrunner.core.exceptions import ShowrunnerError


def read_json(path: Union[str, Path], encoding: str = 'utf-8') -> Any:
    """
    Read and parse a JSON file.

    Args:
        path: Path to JSON file
        encoding: File encoding (default: utf-8)

    Returns:
        Parsed JSON data

    Raises:
        ShowrunnerError: If file cannot be read or parsed
    """
    path = Path(path)
    if not path.exists():
        raise ShowrunnerError(f"File not found: {path}")

    try:
        with open(path, 'r', encoding=encoding) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ShowrunnerError(f"Invalid JSON in {path}: {e}")
    except OSError as e:
        raise ShowrunnerError(f"Failed to read {path}: {e}")


def read_text(path: Union[str, Path], encoding: str = 'utf-8') -> str:
    """
    Read a text file.

    Args:
        path: Path to text file
        encoding: File encoding (default: utf-8)

    Returns:
        File contents as string
    """
    path = Path(path)
    if not path.exists():
        raise ShowrunnerError(f"File not found: {path}")

    try:
        with open(path, 'r', encoding=encoding) as f:
            return f.read()
    except OSError as e:
        raise ShowrunnerError(f"Failed to read {path}: {e}")

