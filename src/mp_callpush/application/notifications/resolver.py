"""Application notifications – RecipientTokenResolver."""
from __future__ import annotations

import re

from mp_callpush.application.notifications.ports import DeviceStore
from mp_callpush.kernel.errors import InvalidFormatError, MissingTokenError, NotFoundError
from mp_callpush.observability.logging import get_logger, token_prefix
from mp_callpush.resilience.deadline import Deadline, deadline_aware

__all__ = ["REALTIME_TOKEN_PATTERN", "RecipientTokenResolver"]

REALTIME_TOKEN_PATTERN = re.compile(r"[0-9a-fA-F]{64}")

logger = get_logger(__name__)


class RecipientTokenResolver:
    """Looks up a recipient's real-time push token and checks its format."""

    def __init__(self, store: DeviceStore) -> None:
        self._store = store

    async def resolve(self, recipient_id: str, *, deadline: Deadline | None = None) -> str:
        """Return the stored token unchanged.

        Raises ``NotFoundError``, ``MissingTokenError`` or ``InvalidFormatError``.
        """
        record = await deadline_aware(self._store.lookup(recipient_id), deadline, operation="device_lookup")
        if record is None:
            logger.warning("recipient_not_found", recipient_id=recipient_id)
            raise NotFoundError(recipient_id)

        token = record.realtime_push_token
        if not token:
            logger.warning(
                "recipient_token_missing",
                recipient_id=recipient_id,
                platform=record.platform.name,
            )
            raise MissingTokenError(recipient_id)

        if REALTIME_TOKEN_PATTERN.fullmatch(token) is None:
            logger.warning(
                "recipient_token_invalid_format",
                recipient_id=recipient_id,
                token_length=len(token),
                token_preview=token_prefix(token),
            )
            raise InvalidFormatError(recipient_id, token)

        logger.debug("recipient_token_resolved", recipient_id=recipient_id, token_preview=token_prefix(token))
        return token
