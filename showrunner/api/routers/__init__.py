"""API routers for Showrunner."""

from showrunner.api.routers import screenplay, characters, casting

__all__ = ["screenplay", "characters", "casting"]
