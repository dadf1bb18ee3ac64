"""Showrunner HTTP API."""

from showrunner.api.main import app, start_server

__all__ = ["app", "start_server"]
