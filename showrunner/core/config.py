"""
Showrunner Configuration Management

Centralized configuration system with JSON loading and validation.
Configuration objects are passed explicitly to the components that need them.
"""

import json
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Union

from .exceptions import ConfigurationError, InvalidConfigError
from .env_loader import get_config_path
from .constants import (
    PROJECT_NAME,
    VERSION,
    PAGE_ELEMENT_LIMIT,
    MAX_CUE_LENGTH,
    CUE_LOOKAHEAD_LINES,
    DEFAULT_BATCH_SIZE,
    TOKENS_PER_CHARACTER,
    MIN_BATCH_TOKENS,
    MAX_BATCH_TOKENS,
    IDENTITY_FIELD,
    CAST_ARRAY_KEY,
)

DEFAULT_CONFIG_PATH = Path("config/showrunner_config.json")


@dataclass
class ScreenplayConfig:
    """Screenplay assembly settings."""
    page_element_limit: int = PAGE_ELEMENT_LIMIT
    max_cue_length: int = MAX_CUE_LENGTH
    cue_lookahead: int = CUE_LOOKAHEAD_LINES

    @classmethod
    def from_dict(cls, data: dict) -> 'ScreenplayConfig':
        return cls(
            page_element_limit=_positive_int(data, 'page_element_limit', PAGE_ELEMENT_LIMIT),
            max_cue_length=_positive_int(data, 'max_cue_length', MAX_CUE_LENGTH),
            cue_lookahead=_positive_int(data, 'cue_lookahead', CUE_LOOKAHEAD_LINES),
        )


@dataclass
class ResolutionConfig:
    """
    Identity merge guards.

    Both guards are off by default, which keeps plain string containment as
    the merge rule. Turning them on trades missed merges for fewer false ones.
    """
    min_merge_key_length: int = 0
    require_word_boundary: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> 'ResolutionConfig':
        min_len = data.get('min_merge_key_length', 0)
        if not isinstance(min_len, int) or min_len < 0:
            raise InvalidConfigError(
                "min_merge_key_length must be a non-negative integer",
                {"value": min_len}
            )
        return cls(
            min_merge_key_length=min_len,
            require_word_boundary=bool(data.get('require_word_boundary', False)),
        )


@dataclass
class CastingConfig:
    """Casting batch and decode settings."""
    batch_size: int = DEFAULT_BATCH_SIZE
    tokens_per_character: int = TOKENS_PER_CHARACTER
    min_batch_tokens: int = MIN_BATCH_TOKENS
    max_batch_tokens: int = MAX_BATCH_TOKENS
    identity_field: str = IDENTITY_FIELD
    array_key: str = CAST_ARRAY_KEY

    @classmethod
    def from_dict(cls, data: dict) -> 'CastingConfig':
        config = cls(
            batch_size=_positive_int(data, 'batch_size', DEFAULT_BATCH_SIZE),
            tokens_per_character=_positive_int(data, 'tokens_per_character', TOKENS_PER_CHARACTER),
            min_batch_tokens=_positive_int(data, 'min_batch_tokens', MIN_BATCH_TOKENS),
            max_batch_tokens=_positive_int(data, 'max_batch_tokens', MAX_BATCH_TOKENS),
            identity_field=data.get('identity_field', IDENTITY_FIELD),
            array_key=data.get('array_key', CAST_ARRAY_KEY),
        )
        if config.min_batch_tokens > config.max_batch_tokens:
            raise InvalidConfigError(
                "min_batch_tokens exceeds max_batch_tokens",
                {"min": config.min_batch_tokens, "max": config.max_batch_tokens}
            )
        return config


@dataclass
class ShowrunnerConfig:
    """Main configuration class for Showrunner."""

    app_name: str = PROJECT_NAME
    version: str = VERSION

    logs_dir: Path = field(default_factory=lambda: Path("logs"))
    verbose_logging: bool = False

    screenplay: ScreenplayConfig = field(default_factory=ScreenplayConfig)
    resolution: ResolutionConfig = field(default_factory=ResolutionConfig)
    casting: CastingConfig = field(default_factory=CastingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> 'ShowrunnerConfig':
        """Create ShowrunnerConfig from dictionary."""
        if not isinstance(data, dict):
            raise InvalidConfigError("Configuration root must be a JSON object")

        config = cls()
        config.app_name = data.get('app_name', config.app_name)
        config.version = data.get('version', config.version)
        config.verbose_logging = data.get('verbose_logging', config.verbose_logging)

        if 'logs_dir' in data:
            config.logs_dir = Path(data['logs_dir'])

        if 'screenplay' in data:
            config.screenplay = ScreenplayConfig.from_dict(data['screenplay'])
        if 'resolution' in data:
            config.resolution = ResolutionConfig.from_dict(data['resolution'])
        if 'casting' in data:
            config.casting = CastingConfig.from_dict(data['casting'])

        return config

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['logs_dir'] = str(self.logs_dir)
        return data


def _positive_int(data: dict, key: str, default: int) -> int:
    value = data.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise InvalidConfigError(f"{key} must be a positive integer", {"value": value})
    return value


def get_default_config() -> ShowrunnerConfig:
    """Get a configuration with every value at its default."""
    return ShowrunnerConfig()


def load_config(config_path: Union[str, Path, None] = None) -> ShowrunnerConfig:
    """
    Load configuration from JSON file.

    Args:
        config_path: Path to configuration file. If None, uses SHOWRUNNER_CONFIG
            or the default location.

    Returns:
        Loaded ShowrunnerConfig instance
    """
    if config_path is None:
        config_path = get_config_path() or DEFAULT_CONFIG_PATH
    config_path = Path(config_path)

    if not config_path.exists():
        return get_default_config()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidConfigError(f"Invalid JSON in config file: {e}", {"path": str(config_path)})
    except OSError as e:
        raise ConfigurationError(f"Failed to load config: {e}", {"path": str(config_path)})

    return ShowrunnerConfig.from_dict(data)


def save_config(config: ShowrunnerConfig, config_path: Union[str, Path]) -> Path:
    """Write configuration to a JSON file, creating parent directories."""
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config.to_dict(), f, indent=2)
    return config_path
