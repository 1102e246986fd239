"""Application notifications – request, routing and outcome models."""
from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

__all__ = [
    "CallMetadata",
    "DeliveryPath",
    "DeviceRecord",
    "DispatchOutcome",
    "NotificationKind",
    "NotificationRequest",
    "RoutingDecision",
    "TargetPlatform",
]


class NotificationKind(str, enum.Enum):
    ORDINARY = "ORDINARY"
    VOICE_CALL = "VOICE_CALL"
    VIDEO_CALL = "VIDEO_CALL"

    @classmethod
    def from_type_key(cls, raw: str | None) -> "NotificationKind":
        """Map a wire notification type key; anything but an exact call key is ORDINARY."""
        if raw == cls.VOICE_CALL.value:
            return cls.VOICE_CALL
        if raw == cls.VIDEO_CALL.value:
            return cls.VIDEO_CALL
        return cls.ORDINARY

    @property
    def is_call(self) -> bool:
        return self is not NotificationKind.ORDINARY


class TargetPlatform(str, enum.Enum):
    """Recipient platform, valued by the stored ``device_type`` code."""

    ANDROID = "1"
    IOS = "2"

    @classmethod
    def from_device_type(cls, raw: str | int | None) -> "TargetPlatform":
        """``"1"`` is Android; every other device type is treated as iOS."""
        return cls.ANDROID if str(raw).strip() == cls.ANDROID.value else cls.IOS


class DeliveryPath(str, enum.Enum):
    ORDINARY = "ORDINARY"
    REALTIME_CALL = "REALTIME_CALL"


@dataclass(frozen=True)
class RoutingDecision:
    path: DeliveryPath


@dataclass(frozen=True)
class NotificationRequest:
    """A single outbound notification, consumed once by the router.

    ``payload_fields`` is opaque to the ordinary path; the call path reads
    ``name``, ``roomId``, ``photo``, ``mobile_no`` and ``uid`` from it.
    """

    recipient_id: str
    kind: NotificationKind
    target_platform: TargetPlatform
    payload_fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload_fields", MappingProxyType(dict(self.payload_fields)))


@dataclass(frozen=True)
class DeviceRecord:
    """Device row owned by the external store."""

    recipient_id: str
    platform: TargetPlatform
    realtime_push_token: str | None = field(default=None, repr=False)


_CALL_DESCRIPTIONS = {
    NotificationKind.VOICE_CALL: "Incoming voice call",
    NotificationKind.VIDEO_CALL: "Incoming video call",
}


@dataclass(frozen=True)
class CallMetadata:
    """Caller details carried by a real-time call push."""

    caller_name: str
    room_id: str
    receiver_id: str
    caller_photo: str
    caller_phone: str
    description: str
    caller_id: str | None = None

    @classmethod
    def from_request(cls, request: NotificationRequest) -> "CallMetadata":
        fields = request.payload_fields
        caller_id = fields.get("uid")
        return cls(
            caller_name=str(fields.get("name", "")),
            room_id=str(fields.get("roomId", "")),
            receiver_id=request.recipient_id,
            caller_photo=str(fields.get("photo", "")),
            caller_phone=str(fields.get("mobile_no", "")),
            description=_CALL_DESCRIPTIONS.get(request.kind, ""),
            caller_id=str(caller_id) if caller_id else None,
        )

    def to_payload(self) -> dict[str, str]:
        """Custom keys read by the iOS VoIP push handler."""
        payload = {
            "name": self.caller_name,
            "photo": self.caller_photo,
            "roomId": self.room_id,
            "receiverId": self.receiver_id,
            "senderPhone": self.caller_phone,
            "bodyKey": self.description,
        }
        if self.caller_id:
            payload["uid"] = self.caller_id
        return payload


@dataclass(frozen=True)
class DispatchOutcome:
    path: DeliveryPath
    recipient_id: str
