"""Application notifications – call-push routing, ports and models."""
from mp_callpush.application.notifications.factory import build_notification_router
from mp_callpush.application.notifications.models import (
    CallMetadata,
    DeliveryPath,
    DeviceRecord,
    DispatchOutcome,
    NotificationKind,
    NotificationRequest,
    RoutingDecision,
    TargetPlatform,
)
from mp_callpush.application.notifications.ports import (
    DeviceStore,
    OrdinaryPushSender,
    RealtimePushSender,
)
from mp_callpush.application.notifications.resolver import REALTIME_TOKEN_PATTERN, RecipientTokenResolver
from mp_callpush.application.notifications.router import DispatchStage, NotificationRouter, classify

__all__ = [
    "CallMetadata",
    "DeliveryPath",
    "DeviceRecord",
    "DeviceStore",
    "DispatchOutcome",
    "DispatchStage",
    "NotificationKind",
    "NotificationRequest",
    "NotificationRouter",
    "OrdinaryPushSender",
    "REALTIME_TOKEN_PATTERN",
    "RealtimePushSender",
    "RecipientTokenResolver",
    "RoutingDecision",
    "TargetPlatform",
    "build_notification_router",
    "classify",
]
