"""
siteguard/services/auth_rate_limit.py — Per-identifier auth attempt limiter
Sliding-checkpoint window: at most `max_attempts` counted attempts per
identifier; the window restarts entirely on the first check made more than
`window_seconds` after the last counted attempt. Successful logins reset.

State machine per identifier:
    absent -> active(1, now)
    active(n, t), now - t > window -> active(1, now)
    active(n, t), n >= max        -> blocked (no mutation)
    active(n, t), n < max         -> active(n + 1, now)
    reset                         -> absent
"""
from __future__ import annotations

import threading
import time
from typing import Callable, Optional, Protocol

from siteguard.config import get_settings
from siteguard.core import logging as app_logging
from siteguard.models import RateLimitDecision, RateLimitEntry

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_WINDOW_SECONDS = 15 * 60.0

Clock = Callable[[], float]


# ──────────────────────────────────────────────────────────────────────────────
# Ledger storage
# ──────────────────────────────────────────────────────────────────────────────

class RateLimitStore(Protocol):
    """Identifier -> entry mapping. A distributed cache can implement this."""

    def get(self, identifier: str) -> Optional[RateLimitEntry]:
        ...

    def set(self, identifier: str, entry: RateLimitEntry) -> None:
        ...

    def delete(self, identifier: str) -> bool:
        """Remove the entry. Returns True if one existed."""
        ...


class InMemoryRateLimitStore:
    """Process-local ledger. No eviction: entries live until reset or clear()."""

    def __init__(self) -> None:
        self._entries: dict[str, RateLimitEntry] = {}

    def get(self, identifier: str) -> Optional[RateLimitEntry]:
        return self._entries.get(identifier)

    def set(self, identifier: str, entry: RateLimitEntry) -> None:
        self._entries[identifier] = entry

    def delete(self, identifier: str) -> bool:
        return self._entries.pop(identifier, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


# ──────────────────────────────────────────────────────────────────────────────
# Limiter
# ──────────────────────────────────────────────────────────────────────────────

class AuthRateLimiter:
    """
    Limits authentication attempts per identifier (user, email, IP).

    Example:
        >>> limiter = AuthRateLimiter()
        >>> limiter.check("user@example.com").remaining_attempts
        4
        >>> limiter.reset("user@example.com")  # after a successful login
    """

    def __init__(
        self,
        store: Optional[RateLimitStore] = None,
        clock: Clock = time.time,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        self.store: RateLimitStore = store if store is not None else InMemoryRateLimitStore()
        self.clock = clock
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        # Guards the read-check-write so concurrent attempts can't both pass the cap
        self._lock = threading.Lock()

    def check(self, identifier: str) -> RateLimitDecision:
        """Count an attempt for `identifier` and decide whether it may proceed."""
        with self._lock:
            now = self.clock()
            entry = self.store.get(identifier)

            if entry is None or now - entry.last_attempt > self.window_seconds:
                entry = RateLimitEntry(count=1, last_attempt=now)
                self.store.set(identifier, entry)
                decision = RateLimitDecision(
                    allowed=True, remaining_attempts=self.max_attempts - 1
                )
            elif entry.count >= self.max_attempts:
                # Blocked checks neither extend the window nor increment
                decision = RateLimitDecision(allowed=False)
            else:
                entry = RateLimitEntry(count=entry.count + 1, last_attempt=now)
                self.store.set(identifier, entry)
                decision = RateLimitDecision(
                    allowed=True, remaining_attempts=self.max_attempts - entry.count
                )

        app_logging.log_auth_attempt(
            identifier=identifier,
            allowed=decision.allowed,
            attempts=entry.count,
            remaining_attempts=decision.remaining_attempts,
        )
        return decision

    def reset(self, identifier: str) -> None:
        """Forget `identifier`. Call after a successful authentication."""
        with self._lock:
            had_entry = self.store.delete(identifier)
        app_logging.log_auth_reset(identifier, had_entry)

    def peek(self, identifier: str) -> Optional[RateLimitEntry]:
        """Current entry without counting an attempt. Expired entries read as None."""
        with self._lock:
            entry = self.store.get(identifier)
            if entry is None or self.clock() - entry.last_attempt > self.window_seconds:
                return None
            return entry.model_copy()

    def is_locked(self, identifier: str) -> bool:
        entry = self.peek(identifier)
        return entry is not None and entry.count >= self.max_attempts


# ──────────────────────────────────────────────────────────────────────────────
# Process-default limiter
# ──────────────────────────────────────────────────────────────────────────────

_default_limiter: Optional[AuthRateLimiter] = None
_default_lock = threading.Lock()


def get_auth_rate_limiter() -> AuthRateLimiter:
    """Lazily built limiter configured from Settings. Shared by the whole process."""
    global _default_limiter
    with _default_lock:
        if _default_limiter is None:
            settings = get_settings()
            _default_limiter = AuthRateLimiter(
                max_attempts=settings.auth_rate_limit_max_attempts,
                window_seconds=settings.auth_rate_limit_window_seconds,
            )
        return _default_limiter


def set_auth_rate_limiter(limiter: Optional[AuthRateLimiter]) -> None:
    """Replace the process-default limiter (None rebuilds it from Settings on next use)."""
    global _default_limiter
    with _default_lock:
        _default_limiter = limiter


def check_auth_rate_limit(identifier: str) -> RateLimitDecision:
    return get_auth_rate_limiter().check(identifier)


def reset_auth_rate_limit(identifier: str) -> None:
    get_auth_rate_limiter().reset(identifier)
