"""Application notifications – router wiring from settings."""
from __future__ import annotations

from datetime import timedelta

from mp_callpush.application.notifications.ports import (
    DeviceStore,
    OrdinaryPushSender,
    RealtimePushSender,
)
from mp_callpush.application.notifications.resolver import RecipientTokenResolver
from mp_callpush.application.notifications.router import NotificationRouter
from mp_callpush.config.apns import ApnsSettings, UnconfiguredCredentials, load_credential_config
from mp_callpush.config.validation import InvalidSettingValueError
from mp_callpush.kernel.errors import ConfigurationError
from mp_callpush.kernel.time import Clock
from mp_callpush.observability.logging import get_logger
from mp_callpush.security.jwt import CredentialSigner, TokenCache

__all__ = ["build_notification_router"]

logger = get_logger(__name__)


def build_notification_router(
    settings: ApnsSettings,
    store: DeviceStore,
    ordinary_sender: OrdinaryPushSender,
    realtime_sender: RealtimePushSender | None = None,
    clock: Clock | None = None,
) -> NotificationRouter:
    """Assemble signer, cache, resolver and router.

    Raises :class:`ConfigurationError` before any signer exists when the
    credentials are unset or still placeholders, or when the default APNs
    sender is requested without ``APNS_BUNDLE_ID``. A sender created here is
    owned by the router and closed by :meth:`NotificationRouter.aclose`.
    """
    state = load_credential_config(settings)
    if isinstance(state, UnconfiguredCredentials):
        logger.error("provider_credentials_unconfigured", problems=list(state.reasons))
        raise ConfigurationError(
            "APNs provider credentials are not configured",
            detail={"problems": list(state.reasons)},
        )

    owns_realtime_sender = realtime_sender is None
    if realtime_sender is None:
        if not settings.bundle_id.strip():
            logger.error("apns_bundle_id_unset", setting=settings.env_key("bundle_id"))
            raise InvalidSettingValueError(
                settings.env_key("bundle_id"),
                settings.bundle_id,
                "must name the app bundle; VoIP pushes use the <bundle_id>.voip topic",
            )
        from mp_callpush.adapters.apns import ApnsVoipPushSender  # noqa: PLC0415

        realtime_sender = ApnsVoipPushSender(settings)

    token_cache = TokenCache(
        CredentialSigner(state.config),
        clock=clock,
        refresh_after=timedelta(seconds=settings.token_refresh_seconds),
        max_age=timedelta(seconds=settings.token_max_age_seconds),
    )
    logger.info(
        "notification_router_ready",
        key_id=state.config.key_id,
        sandbox=settings.use_sandbox,
        topic=settings.voip_topic,
    )
    return NotificationRouter(
        resolver=RecipientTokenResolver(store),
        token_cache=token_cache,
        realtime_sender=realtime_sender,
        ordinary_sender=ordinary_sender,
        owns_realtime_sender=owns_realtime_sender,
    )
