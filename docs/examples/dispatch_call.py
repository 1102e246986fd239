"""Send one VoIP call push end to end.

Reads ``APNS_*`` settings from ``.env`` (see ``ApnsSettings``), signs a
provider token and posts a VoIP push to the device token given on the
command line.

Run with::

    pip install -e .
    python docs/examples/dispatch_call.py <recipient-id> <64-hex-voip-token>

The ordinary path is stubbed: non-call notifications are only logged.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from mp_callpush.adapters.apns import ApnsVoipPushSender
from mp_callpush.application.notifications import (
    NotificationKind,
    NotificationRequest,
    TargetPlatform,
    build_notification_router,
)
from mp_callpush.config.apns import ApnsSettings
from mp_callpush.config.settings import DotenvSettingsLoader
from mp_callpush.observability.logging import JsonLoggerFactory, get_logger
from mp_callpush.testing.fakes import InMemoryDeviceStore

logger = get_logger("dispatch_call")


class LoggingOrdinarySender:
    async def send_ordinary(self, request: NotificationRequest) -> None:
        logger.info("ordinary_push_skipped", recipient_id=request.recipient_id)


async def main(recipient_id: str, voip_token: str) -> None:
    settings = DotenvSettingsLoader().load(ApnsSettings)
    store = InMemoryDeviceStore()
    store.register(recipient_id, TargetPlatform.IOS, voip_token)

    async with ApnsVoipPushSender(settings) as sender:
        router = build_notification_router(settings, store, LoggingOrdinarySender(), realtime_sender=sender)
        request = NotificationRequest(
            recipient_id=recipient_id,
            kind=NotificationKind.from_type_key("VOICE_CALL"),
            target_platform=TargetPlatform.from_device_type("2"),
            payload_fields={"name": "Example Caller", "roomId": "room-example", "mobile_no": "+10000000000"},
        )
        outcome = await router.dispatch(request)
        logger.info("example_done", path=outcome.path.value)


if __name__ == "__main__":
    JsonLoggerFactory.configure(level=logging.DEBUG)
    asyncio.run(main(sys.argv[1], sys.argv[2]))
