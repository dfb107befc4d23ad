"""
siteguard/core/rate_limiter.py — slowapi request throttling configuration
Per-IP throttling of the HTTP endpoints. Per-identifier login attempt
limiting lives in siteguard.services.auth_rate_limit.
"""
from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from siteguard.config import get_settings

# Single shared limiter instance — imported by main.py and routers
limiter = Limiter(key_func=get_remote_address)

# Used as decorators on individual route handlers
RATE_LIMITS = get_settings().rate_limits
