"""Shared rate limiter for the Showrunner API."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from showrunner.api.settings import get_settings

limiter = Limiter(key_func=get_remote_address)

# Limit string applied to every route
RATE_LIMIT = get_settings().rate_limit
