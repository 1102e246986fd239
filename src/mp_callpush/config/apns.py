"""Config – APNs settings and one-shot credential loading.

The credential source is read once at startup. :func:`load_credential_config`
turns the raw settings into either :class:`ConfiguredCredentials` or
:class:`UnconfiguredCredentials`; only the former may reach a signer.
"""
import dataclasses
from pathlib import Path
from typing import ClassVar, Union

from mp_callpush.config.settings.base import Settings
from mp_callpush.security.jwt.credentials import ProviderCredentialConfig, credential_problems

__all__ = [
    "APNS_MAX_TOKEN_AGE_SECONDS",
    "APNS_PRODUCTION_HOST",
    "APNS_SANDBOX_HOST",
    "ApnsSettings",
    "ConfiguredCredentials",
    "CredentialState",
    "UnconfiguredCredentials",
    "load_credential_config",
]

APNS_PRODUCTION_HOST = "https://api.push.apple.com"
APNS_SANDBOX_HOST = "https://api.sandbox.push.apple.com"

# APNs rejects provider tokens older than one hour.
APNS_MAX_TOKEN_AGE_SECONDS = 3600


@dataclasses.dataclass
class ApnsSettings(Settings):
    """APNs provider settings, read from ``APNS_*`` environment variables."""

    _prefix: ClassVar[str] = "APNS"

    key_id: str
    team_id: str
    private_key: str = dataclasses.field(default="", repr=False)
    private_key_path: str = ""
    bundle_id: str = ""
    use_sandbox: bool = False
    token_refresh_seconds: int = 3000
    token_max_age_seconds: int = APNS_MAX_TOKEN_AGE_SECONDS
    request_timeout: float = 10.0

    def _validate(self) -> None:
        if self.token_refresh_seconds <= 0:
            self._reject("token_refresh_seconds", "must be positive")
        if self.token_max_age_seconds > APNS_MAX_TOKEN_AGE_SECONDS:
            self._reject("token_max_age_seconds", f"must not exceed {APNS_MAX_TOKEN_AGE_SECONDS}")
        if self.token_refresh_seconds >= self.token_max_age_seconds:
            self._reject("token_refresh_seconds", "must be lower than APNS_TOKEN_MAX_AGE_SECONDS")
        if self.request_timeout <= 0:
            self._reject("request_timeout", "must be positive")

    @property
    def host(self) -> str:
        return APNS_SANDBOX_HOST if self.use_sandbox else APNS_PRODUCTION_HOST

    @property
    def voip_topic(self) -> str:
        return f"{self.bundle_id}.voip"


@dataclasses.dataclass(frozen=True)
class ConfiguredCredentials:
    config: ProviderCredentialConfig


@dataclasses.dataclass(frozen=True)
class UnconfiguredCredentials:
    reasons: tuple[str, ...]


CredentialState = Union[ConfiguredCredentials, UnconfiguredCredentials]


def _read_private_key(settings: ApnsSettings) -> str:
    if settings.private_key_path:
        return Path(settings.private_key_path).expanduser().read_text(encoding="utf-8")
    key = settings.private_key
    # Single-line env values carry escaped newlines.
    if "\\n" in key and "\n" not in key:
        key = key.replace("\\n", "\n")
    return key


def load_credential_config(settings: ApnsSettings) -> CredentialState:
    """Validate the credential fields of *settings* once, at load time."""
    try:
        private_key = _read_private_key(settings)
    except OSError as exc:
        return UnconfiguredCredentials(
            reasons=(f"private key file '{settings.private_key_path}' is unreadable: {exc}",)
        )
    config = ProviderCredentialConfig(
        key_id=settings.key_id.strip(),
        issuer_id=settings.team_id.strip(),
        private_key=private_key,
    )
    problems = credential_problems(config)
    if problems:
        return UnconfiguredCredentials(reasons=tuple(problems))
    return ConfiguredCredentials(config=config)
