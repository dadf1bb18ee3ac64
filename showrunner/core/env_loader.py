"""
Centralized environment variable loading for Showrunner.

This module ensures .env is loaded once and consistently across the entire application.

Usage:
    from showrunner.core.env_loader import ensure_env_loaded
    ensure_env_loaded()
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

CONFIG_PATH_ENV = "SHOWRUNNER_CONFIG"

_env_loaded = False


def get_project_root() -> Path:
    """Get the project root directory (where .env is located)."""
    # This file is at showrunner/core/env_loader.py
    return Path(__file__).parent.parent.parent


def ensure_env_loaded(override: bool = False) -> bool:
    """
    Ensure environment variables from .env are loaded.

    Args:
        override: If True, .env values replace variables already set

    Returns:
        True if .env was loaded, False if already loaded or file not found
    """
    global _env_loaded

    if _env_loaded:
        return False

    env_path = get_project_root() / ".env"

    if not env_path.exists():
        return False

    load_dotenv(env_path, override=override)
    _env_loaded = True
    return True


def get_env(key_name: str, fallback_keys: Optional[list[str]] = None) -> Optional[str]:
    """
    Get a value from the environment, with fallback options.

    Args:
        key_name: Primary environment variable name
        fallback_keys: List of fallback variable names to try

    Returns:
        Value or None if not found
    """
    ensure_env_loaded()

    value = os.getenv(key_name)
    if value:
        return value

    for fallback in fallback_keys or []:
        value = os.getenv(fallback)
        if value:
            return value

    return None


def get_config_path() -> Optional[Path]:
    """Config file path from SHOWRUNNER_CONFIG, if set."""
    value = get_env(CONFIG_PATH_ENV)
    return Path(value) if value else None
