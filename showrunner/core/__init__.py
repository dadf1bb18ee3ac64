"""
Showrunner Core Module

Contains core systems including configuration, constants, exceptions, and logging.
"""

from .config import (
    ShowrunnerConfig,
    ScreenplayConfig,
    ResolutionConfig,
    CastingConfig,
    load_config,
    save_config,
    get_default_config,
)
from .constants import ElementType, ImportanceTier
from .exceptions import (
    ShowrunnerError,
    ConfigurationError,
    InvalidConfigError,
    LLMError,
    LLMResponseError,
    NoRecoverableRecordsError,
    CastingError,
    EmptyRegistryError,
    PipelineError,
    PipelineStageError,
)
from .logging_config import setup_logging, get_logger, LogLevel

__all__ = [
    'ShowrunnerConfig',
    'ScreenplayConfig',
    'ResolutionConfig',
    'CastingConfig',
    'load_config',
    'save_config',
    'get_default_config',
    'ElementType',
    'ImportanceTier',
    'ShowrunnerError',
    'ConfigurationError',
    'InvalidConfigError',
    'LLMError',
    'LLMResponseError',
    'NoRecoverableRecordsError',
    'CastingError',
    'EmptyRegistryError',
    'PipelineError',
    'PipelineStageError',
    'setup_logging',
    'get_logger',
    'LogLevel',
]
