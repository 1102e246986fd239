"""Unit tests for TokenCache – reuse, expiry and single-flight signing."""
from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta

import pytest

from mp_callpush.kernel.errors import ConfigurationError, SigningError
from mp_callpush.kernel.time import FrozenClock
from mp_callpush.security.jwt import CredentialSigner, ProviderCredentialConfig, SignedCredential, TokenCache

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
TTL = timedelta(minutes=50)


class CountingSigner:
    """Signer double: numbered tokens, optional delay and failure."""

    key_id = "ABC123DEFG"

    def __init__(self, delay: float = 0.0, error: Exception | None = None) -> None:
        self.calls = 0
        self.delay = delay
        self.error = error
        self._lock = threading.Lock()

    def sign(self, now: datetime) -> SignedCredential:
        with self._lock:
            self.calls += 1
            n = self.calls
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return SignedCredential(token=f"h.c.s{n}", issued_at=now)


class TestReuse:
    def test_first_call_signs(self) -> None:
        signer = CountingSigner()
        cache = TokenCache(signer)  # type: ignore[arg-type]
        credential = cache.current(T0)
        assert signer.calls == 1
        assert credential.issued_at == T0
        assert cache.cached is credential

    @pytest.mark.parametrize("elapsed", [timedelta(0), timedelta(minutes=1), TTL - timedelta(seconds=1)])
    def test_fresh_credential_reused(self, elapsed: timedelta) -> None:
        signer = CountingSigner()
        cache = TokenCache(signer, refresh_after=TTL)  # type: ignore[arg-type]
        first = cache.current(T0)
        second = cache.current(T0 + elapsed)
        assert second.token == first.token
        assert signer.calls == 1

    @pytest.mark.parametrize("elapsed", [TTL, TTL + timedelta(minutes=5)])
    def test_stale_credential_resigned(self, elapsed: timedelta) -> None:
        signer = CountingSigner()
        cache = TokenCache(signer, refresh_after=TTL, max_age=timedelta(hours=1))  # type: ignore[arg-type]
        first = cache.current(T0)
        second = cache.current(T0 + elapsed)
        assert second.token != first.token
        assert second.issued_at == T0 + elapsed
        assert signer.calls == 2

    def test_uses_clock_when_now_omitted(self) -> None:
        clock = FrozenClock(T0)
        signer = CountingSigner()
        cache = TokenCache(signer, clock=clock)  # type: ignore[arg-type]
        assert cache.current().issued_at == T0
        clock.advance(minutes=49)
        assert signer.calls == 1 and cache.current().issued_at == T0
        clock.advance(minutes=1)
        assert cache.current().issued_at == T0 + TTL
        assert signer.calls == 2

    def test_invalidate_forces_resign(self) -> None:
        signer = CountingSigner()
        cache = TokenCache(signer)  # type: ignore[arg-type]
        cache.current(T0)
        cache.invalidate()
        assert cache.cached is None
        cache.current(T0 + timedelta(seconds=1))
        assert signer.calls == 2

    def test_rejects_inconsistent_windows(self) -> None:
        with pytest.raises(ValueError):
            TokenCache(CountingSigner(), refresh_after=timedelta(hours=2))  # type: ignore[arg-type]
        with pytest.raises(ValueError):
            TokenCache(CountingSigner(), refresh_after=timedelta(0))  # type: ignore[arg-type]


class TestFailures:
    def test_error_propagates_without_cached_value(self) -> None:
        error = SigningError("bad key")
        cache = TokenCache(CountingSigner(error=error))  # type: ignore[arg-type]
        with pytest.raises(SigningError) as exc_info:
            cache.current(T0)
        assert exc_info.value is error

    def test_still_valid_credential_survives_failed_refresh(self) -> None:
        signer = CountingSigner()
        cache = TokenCache(signer, refresh_after=TTL, max_age=timedelta(hours=1))  # type: ignore[arg-type]
        first = cache.current(T0)
        signer.error = SigningError("hsm unavailable")
        fallback = cache.current(T0 + timedelta(minutes=55))
        assert fallback is first
        assert cache.cached is first

    def test_expired_credential_not_served_after_failed_refresh(self) -> None:
        signer = CountingSigner()
        cache = TokenCache(signer, refresh_after=TTL, max_age=timedelta(hours=1))  # type: ignore[arg-type]
        cache.current(T0)
        signer.error = ConfigurationError("revoked")
        with pytest.raises(ConfigurationError):
            cache.current(T0 + timedelta(minutes=60))

    def test_recovers_after_failure(self) -> None:
        signer = CountingSigner(error=SigningError("transient"))
        cache = TokenCache(signer)  # type: ignore[arg-type]
        with pytest.raises(SigningError):
            cache.current(T0)
        signer.error = None
        assert cache.current(T0 + timedelta(seconds=1)).issued_at == T0 + timedelta(seconds=1)


class TestSingleFlight:
    N = 8

    def _race(self, cache: TokenCache, now: datetime) -> list:
        barrier = threading.Barrier(self.N)

        def _call():
            barrier.wait()
            try:
                return cache.current(now)
            except Exception as exc:  # noqa: BLE001
                return exc

        with ThreadPoolExecutor(max_workers=self.N) as pool:
            return list(pool.map(lambda _: _call(), range(self.N)))

    def test_concurrent_first_use_signs_once(self) -> None:
        signer = CountingSigner(delay=0.2)
        cache = TokenCache(signer)  # type: ignore[arg-type]
        results = self._race(cache, T0)
        assert signer.calls == 1
        assert {r.token for r in results} == {"h.c.s1"}

    def test_concurrent_expiry_signs_once(self) -> None:
        signer = CountingSigner()
        cache = TokenCache(signer, refresh_after=TTL, max_age=timedelta(hours=1))  # type: ignore[arg-type]
        cache.current(T0)
        signer.delay = 0.2
        results = self._race(cache, T0 + TTL)
        assert signer.calls == 2
        assert all(r.issued_at == T0 + TTL for r in results)

    def test_waiters_share_failure(self) -> None:
        signer = CountingSigner(delay=0.2, error=SigningError("bad key"))
        cache = TokenCache(signer)  # type: ignore[arg-type]
        results = self._race(cache, T0)
        assert signer.calls == 1
        assert all(isinstance(r, SigningError) for r in results)

    def test_waiters_receive_their_own_error(self) -> None:
        original = SigningError("bad key", detail={"key_id": "ABC123DEFG"})
        signer = CountingSigner(delay=0.2, error=original)
        cache = TokenCache(signer)  # type: ignore[arg-type]
        results = self._race(cache, T0)

        assert signer.calls == 1
        assert len({id(r) for r in results}) == self.N
        waiters = [r for r in results if r is not original]
        assert len(waiters) == self.N - 1
        for err in waiters:
            assert type(err) is SigningError
            assert err.__cause__ is original
            assert err.message == "bad key"
            assert err.detail == {"key_id": "ABC123DEFG"}

        waiters[0].annotate(stage="credential")
        assert "stage" not in original.detail
        assert "stage" not in waiters[1].detail


def test_real_signer_round_trip(credential_config: ProviderCredentialConfig) -> None:
    cache = TokenCache(CredentialSigner(credential_config), clock=FrozenClock(T0))
    first = cache.current()
    assert first.token.count(".") == 2
    assert cache.current(T0 + timedelta(minutes=10)).token == first.token
