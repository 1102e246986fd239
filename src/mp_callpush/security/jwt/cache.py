"""Security – TokenCache: time-based reuse of signed provider tokens."""
from __future__ import annotations

import threading
from datetime import datetime, timedelta

from mp_callpush.kernel.errors import BaseError
from mp_callpush.kernel.time import Clock, SystemClock
from mp_callpush.observability.logging import get_logger
from mp_callpush.security.jwt.signer import CredentialSigner, SignedCredential

__all__ = [
    "DEFAULT_MAX_AGE",
    "DEFAULT_REFRESH_AFTER",
    "TokenCache",
]

DEFAULT_REFRESH_AFTER = timedelta(minutes=50)
DEFAULT_MAX_AGE = timedelta(minutes=60)

logger = get_logger(__name__)


def _waiter_copy(error: BaseError) -> BaseError:
    """Per-caller copy of a shared signing failure with its own ``detail``."""
    clone = type(error).__new__(type(error), *error.args)
    clone.__dict__.update(error.__dict__)
    clone.detail = dict(error.detail)
    return clone


class TokenCache:
    """Holds at most one :class:`SignedCredential` and re-signs it when stale.

    A credential older than ``refresh_after`` is replaced on the next call.
    If that re-sign fails, a credential younger than ``max_age`` is still
    returned; otherwise the signer's error propagates unchanged.

    Signing is single-flight across threads and tasks: callers that queued
    behind an in-flight signing receive its outcome instead of signing again.
    """

    def __init__(
        self,
        signer: CredentialSigner,
        clock: Clock | None = None,
        refresh_after: timedelta = DEFAULT_REFRESH_AFTER,
        max_age: timedelta = DEFAULT_MAX_AGE,
    ) -> None:
        if refresh_after <= timedelta(0):
            raise ValueError("refresh_after must be positive")
        if max_age < refresh_after:
            raise ValueError("max_age must not be shorter than refresh_after")
        self._signer = signer
        self._clock = clock or SystemClock()
        self._refresh_after = refresh_after
        self._max_age = max_age
        self._lock = threading.Lock()
        self._cached: SignedCredential | None = None
        # Bumped after every signing attempt; lets waiters detect a flight
        # that completed while they were blocked on the lock.
        self._generation = 0
        self._last_error: BaseError | None = None

    @property
    def cached(self) -> SignedCredential | None:
        return self._cached

    def _is_fresh(self, credential: SignedCredential | None, now: datetime) -> bool:
        return credential is not None and credential.age(now) < self._refresh_after

    def _is_usable(self, credential: SignedCredential | None, now: datetime) -> bool:
        return credential is not None and credential.age(now) < self._max_age

    def current(self, now: datetime | None = None) -> SignedCredential:
        """Return a valid credential, signing a new one only when needed."""
        now = now or self._clock.now()
        cached = self._cached
        if self._is_fresh(cached, now):
            return cached  # type: ignore[return-value]

        generation = self._generation
        with self._lock:
            cached = self._cached
            if self._is_fresh(cached, now):
                return cached  # type: ignore[return-value]
            if self._generation != generation and self._last_error is not None:
                # The flight we queued behind failed; share its outcome.
                return self._fallback_or_raise(self._last_error, now, waiter=True)
            self._last_error = None
            try:
                fresh = self._signer.sign(now)
            except BaseError as exc:
                self._last_error = exc
                return self._fallback_or_raise(exc, now)
            finally:
                self._generation += 1
            self._cached = fresh
            logger.info(
                "provider_token_refreshed",
                key_id=self._signer.key_id,
                issued_at=fresh.issued_at.isoformat(),
                replaced=cached is not None,
            )
            return fresh

    def _fallback_or_raise(self, error: BaseError, now: datetime, *, waiter: bool = False) -> SignedCredential:
        cached = self._cached
        if self._is_usable(cached, now):
            logger.warning(
                "provider_token_refresh_failed_using_cached",
                error_code=error.code,
                age_seconds=int(cached.age(now).total_seconds()),  # type: ignore[union-attr]
            )
            return cached  # type: ignore[return-value]
        logger.error("provider_token_unavailable", error_code=error.code, error=error.message)
        if waiter:
            raise _waiter_copy(error) from error
        raise error

    def invalidate(self) -> None:
        """Drop the cached credential so the next call signs a new one."""
        with self._lock:
            self._cached = None
        logger.info("provider_token_invalidated", key_id=self._signer.key_id)
