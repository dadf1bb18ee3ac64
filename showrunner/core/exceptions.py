"""
Showrunner Custom Exceptions

Custom exception classes for error handling throughout the Showrunner system.
"""


class ShowrunnerError(Exception):
    """Base exception for all Showrunner errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(ShowrunnerError):
    """Raised when there's an issue with configuration."""
    pass


class InvalidConfigError(ConfigurationError):
    """Raised when a configuration value is invalid."""
    pass


# =============================================================================
# LLM ERRORS
# =============================================================================

class LLMError(ShowrunnerError):
    """Base exception for generation-service errors."""
    pass


class LLMResponseError(LLMError):
    """Raised when a generation response is invalid or unexpected."""
    pass


class NoRecoverableRecordsError(LLMResponseError):
    """Raised when every decode tier fails to produce a single valid record."""

    def __init__(self, tiers_attempted: list, preview: str = "", reasons: dict = None):
        message = f"No recoverable records after {len(tiers_attempted)} decode tier(s)"
        details = {"tiers_attempted": tiers_attempted}
        if preview:
            details["preview"] = preview
        if reasons:
            details["reasons"] = reasons
        super().__init__(message, details)
        self.tiers_attempted = tiers_attempted
        self.preview = preview


# =============================================================================
# CASTING ERRORS
# =============================================================================

class CastingError(ShowrunnerError):
    """Base exception for casting errors."""
    pass


class EmptyRegistryError(CastingError):
    """Raised when there are no characters to cast."""

    def __init__(self):
        super().__init__(
            "No characters found. Add characters to the story bible or generate a breakdown."
        )


# =============================================================================
# PIPELINE ERRORS
# =============================================================================

class PipelineError(ShowrunnerError):
    """Base exception for pipeline errors."""
    pass


class PipelineStageError(PipelineError):
    """Raised when a specific pipeline stage fails."""

    def __init__(self, stage_name: str, reason: str):
        message = f"Pipeline stage '{stage_name}' failed: {reason}"
        super().__init__(message, {"stage": stage_name, "reason": reason})
