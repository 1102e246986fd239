"""Application notifications – ports to the store and the push senders."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from mp_callpush.application.notifications.models import (
    CallMetadata,
    DeviceRecord,
    NotificationRequest,
)

__all__ = [
    "DeviceStore",
    "OrdinaryPushSender",
    "RealtimePushSender",
]


@runtime_checkable
class DeviceStore(Protocol):
    """Port: device records keyed by recipient id. Returns ``None`` when absent."""

    async def lookup(self, recipient_id: str) -> DeviceRecord | None: ...


@runtime_checkable
class OrdinaryPushSender(Protocol):
    """Port: the standard (non-call) push flow."""

    async def send_ordinary(self, request: NotificationRequest) -> None: ...


@runtime_checkable
class RealtimePushSender(Protocol):
    """Port: deliver a real-time call push.

    Raises :class:`~mp_callpush.kernel.errors.DispatchError` on failure.
    """

    async def send_realtime(
        self,
        auth_token: str,
        recipient_token: str,
        metadata: CallMetadata,
    ) -> None: ...
