"""Application notifications – NotificationRouter.

Picks the delivery path for each request and drives the call path:
resolve the recipient's VoIP token, obtain a provider credential, hand both
to the real-time sender. Any failure aborts the notification; a call is
never downgraded to an ordinary push.
"""
from __future__ import annotations

import contextlib
import enum
from typing import Any, Iterator

from mp_callpush.application.notifications.models import (
    CallMetadata,
    DeliveryPath,
    DispatchOutcome,
    NotificationRequest,
    RoutingDecision,
    TargetPlatform,
)
from mp_callpush.application.notifications.ports import OrdinaryPushSender, RealtimePushSender
from mp_callpush.application.notifications.resolver import RecipientTokenResolver
from mp_callpush.kernel.errors import BaseError, DispatchError
from mp_callpush.observability.logging import get_logger
from mp_callpush.resilience.deadline import Deadline, DeadlineContext, deadline_aware
from mp_callpush.security.jwt import TokenCache

__all__ = ["DispatchStage", "NotificationRouter", "classify"]

logger = get_logger(__name__)

# APNs reasons meaning the provider token itself was refused.
_PROVIDER_TOKEN_REJECTIONS = frozenset({"ExpiredProviderToken", "InvalidProviderToken"})


class DispatchStage(str, enum.Enum):
    RESOLUTION = "resolution"
    CREDENTIAL = "credential"
    DISPATCH = "dispatch"
    ORDINARY = "ordinary"


def classify(request: NotificationRequest) -> RoutingDecision:
    """Calls to non-Android recipients go real-time; everything else is ordinary."""
    if request.kind.is_call and request.target_platform is not TargetPlatform.ANDROID:
        return RoutingDecision(path=DeliveryPath.REALTIME_CALL)
    return RoutingDecision(path=DeliveryPath.ORDINARY)


@contextlib.contextmanager
def _failure_stage(stage: DispatchStage, log: Any) -> Iterator[None]:
    try:
        yield
    except BaseError as exc:
        exc.annotate(stage=stage.value)
        log.warning("notification_aborted", stage=stage.value, **exc.to_dict())
        raise
    except Exception as exc:
        log.error("notification_aborted", stage=stage.value, error=repr(exc))
        raise


class NotificationRouter:
    """Routes notifications to the ordinary or realtime call path.

    With ``owns_realtime_sender`` set, :meth:`aclose` (or leaving ``async
    with``) also closes the realtime sender and its connection pool.
    """

    def __init__(
        self,
        resolver: RecipientTokenResolver,
        token_cache: TokenCache,
        realtime_sender: RealtimePushSender,
        ordinary_sender: OrdinaryPushSender,
        *,
        owns_realtime_sender: bool = False,
    ) -> None:
        self._resolver = resolver
        self._tokens = token_cache
        self._realtime = realtime_sender
        self._ordinary = ordinary_sender
        self._owns_realtime = owns_realtime_sender

    async def __aenter__(self) -> "NotificationRouter":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        close = getattr(self._realtime, "aclose", None)
        if self._owns_realtime and close is not None:
            await close()

    async def dispatch(
        self,
        request: NotificationRequest,
        *,
        deadline: Deadline | None = None,
    ) -> DispatchOutcome:
        """Deliver *request* on the path chosen by :func:`classify`.

        Errors from any stage propagate with ``detail["stage"]`` set.
        """
        deadline = DeadlineContext.effective(deadline)
        decision = classify(request)
        log = logger.bind(
            recipient_id=request.recipient_id,
            kind=request.kind.value,
            platform=request.target_platform.name,
            path=decision.path.value,
        )
        log.debug("notification_classified")

        if decision.path is DeliveryPath.ORDINARY:
            with _failure_stage(DispatchStage.ORDINARY, log):
                await deadline_aware(self._ordinary.send_ordinary(request), deadline, operation="ordinary_send")
            log.info("notification_dispatched")
            return DispatchOutcome(path=DeliveryPath.ORDINARY, recipient_id=request.recipient_id)

        with _failure_stage(DispatchStage.RESOLUTION, log):
            recipient_token = await self._resolver.resolve(request.recipient_id, deadline=deadline)

        with _failure_stage(DispatchStage.CREDENTIAL, log):
            DeadlineContext.raise_if_exceeded(deadline, operation="credential")
            credential = self._tokens.current()

        metadata = CallMetadata.from_request(request)
        with _failure_stage(DispatchStage.DISPATCH, log):
            try:
                await deadline_aware(
                    self._realtime.send_realtime(credential.token, recipient_token, metadata),
                    deadline,
                    operation="realtime_send",
                )
            except DispatchError as exc:
                if exc.reason in _PROVIDER_TOKEN_REJECTIONS:
                    self._tokens.invalidate()
                raise

        log.info("notification_dispatched", room_id=metadata.room_id)
        return DispatchOutcome(path=DeliveryPath.REALTIME_CALL, recipient_id=request.recipient_id)
