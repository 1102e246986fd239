"""Testing fakes – in-memory doubles for kernel and notification ports."""
from mp_callpush.kernel.time import FrozenClock
from mp_callpush.testing.fakes.clock import FAKE_EPOCH, FakeClock
from mp_callpush.testing.fakes.push import (
    InMemoryDeviceStore,
    InMemoryOrdinaryPushSender,
    InMemoryRealtimePushSender,
    RealtimePush,
)

__all__ = [
    "FAKE_EPOCH",
    "FakeClock",
    "FrozenClock",
    "InMemoryDeviceStore",
    "InMemoryOrdinaryPushSender",
    "InMemoryRealtimePushSender",
    "RealtimePush",
]
