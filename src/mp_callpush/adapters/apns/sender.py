"""APNs adapter – ApnsVoipPushSender (httpx over HTTP/2)."""
from __future__ import annotations

from typing import Any

import httpx

from mp_callpush.application.notifications.models import CallMetadata
from mp_callpush.config.apns import ApnsSettings
from mp_callpush.kernel.errors import DispatchError, InfrastructureTimeoutError
from mp_callpush.observability.logging import get_logger, token_prefix

__all__ = ["ApnsVoipPushSender", "build_voip_payload"]

logger = get_logger(__name__)

_SERVICE = "apns"


def build_voip_payload(metadata: CallMetadata) -> dict[str, Any]:
    """VoIP pushes carry an empty ``aps`` dictionary plus the call fields."""
    return {"aps": {}, **metadata.to_payload()}


class ApnsVoipPushSender:
    """RealtimePushSender that posts VoIP pushes to APNs.

    The client may be injected (tests, shared pools); otherwise an HTTP/2
    ``httpx.AsyncClient`` is created lazily and closed by :meth:`aclose`.
    """

    def __init__(self, settings: ApnsSettings, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(http2=True, timeout=self._settings.request_timeout)
        return self._client

    async def __aenter__(self) -> "ApnsVoipPushSender":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _headers(self, auth_token: str) -> dict[str, str]:
        return {
            "authorization": f"bearer {auth_token}",
            "apns-topic": self._settings.voip_topic,
            "apns-push-type": "voip",
            "apns-priority": "10",
            "apns-expiration": "0",
        }

    async def send_realtime(
        self,
        auth_token: str,
        recipient_token: str,
        metadata: CallMetadata,
    ) -> None:
        url = f"{self._settings.host}/3/device/{recipient_token}"
        payload = build_voip_payload(metadata)
        try:
            response = await self._get_client().post(url, headers=self._headers(auth_token), json=payload)
        except httpx.TimeoutException as exc:
            raise InfrastructureTimeoutError("APNs request timed out", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise DispatchError(_SERVICE, f"APNs request failed: {exc}", cause=exc) from exc

        apns_id = response.headers.get("apns-id")
        if response.status_code == 200:
            logger.info(
                "voip_push_sent",
                apns_id=apns_id,
                receiver_id=metadata.receiver_id,
                token_preview=token_prefix(recipient_token),
            )
            return

        reason: str | None = None
        if response.content:
            try:
                reason = response.json().get("reason")
            except ValueError:
                reason = response.text or None
        logger.error(
            "voip_push_rejected",
            status_code=response.status_code,
            reason=reason,
            apns_id=apns_id,
            receiver_id=metadata.receiver_id,
        )
        raise DispatchError(
            _SERVICE,
            f"APNs rejected VoIP push: HTTP {response.status_code} {reason or ''}".strip(),
            status_code=response.status_code,
            reason=reason,
            detail={"apns_id": apns_id} if apns_id else None,
        )
