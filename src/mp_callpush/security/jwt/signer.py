from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta
from typing import Any

import jwt as pyjwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from mp_callpush.kernel.errors import ConfigurationError, SigningError
from mp_callpush.observability.logging import get_logger, token_prefix
from mp_callpush.security.jwt.credentials import ProviderCredentialConfig, credential_problems

__all__ = [
    "CredentialSigner",
    "SIGNING_ALGORITHM",
    "SignedCredential",
]

SIGNING_ALGORITHM = "ES256"

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class SignedCredential:
    """A compact ``header.claims.signature`` provider token and its issue time."""

    token: str = dataclasses.field(repr=False)
    issued_at: datetime

    def age(self, now: datetime) -> timedelta:
        return now - self.issued_at


def _load_ec_private_key(private_key: str | bytes) -> ec.EllipticCurvePrivateKey:
    data = private_key.encode("utf-8") if isinstance(private_key, str) else private_key
    try:
        key = serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise SigningError("Provider private key could not be parsed", cause=exc) from exc
    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise SigningError(
            "Provider private key is not an elliptic-curve key",
            detail={"key_type": type(key).__name__},
        )
    if not isinstance(key.curve, ec.SECP256R1):
        raise SigningError(
            "Provider private key must use the P-256 curve",
            detail={"curve": key.curve.name},
        )
    return key


class CredentialSigner:
    """Mints ES256 provider tokens from a :class:`ProviderCredentialConfig`.

    The header carries only ``alg`` and ``kid``; the claims carry only ``iss``
    and ``iat``. The private key is parsed on first use and then reused.
    """

    def __init__(self, config: ProviderCredentialConfig) -> None:
        self._config = config
        self._key: ec.EllipticCurvePrivateKey | None = None

    @property
    def key_id(self) -> str:
        return self._config.key_id

    def sign(self, now: datetime) -> SignedCredential:
        """Return a freshly signed credential issued at *now*.

        Raises
        ------
        ConfigurationError
            When a credential field is unset or still a placeholder. Checked
            before any cryptographic work.
        SigningError
            When the key cannot be loaded or the signature fails.
        """
        problems = credential_problems(self._config)
        if problems:
            raise ConfigurationError(
                "Provider credentials are not configured",
                detail={"problems": problems},
            )

        if self._key is None:
            self._key = _load_ec_private_key(self._config.private_key)

        claims: dict[str, Any] = {"iss": self._config.issuer_id, "iat": int(now.timestamp())}
        try:
            token = pyjwt.encode(
                claims,
                self._key,
                algorithm=SIGNING_ALGORITHM,
                headers={"kid": self._config.key_id, "typ": None},
            )
        except (pyjwt.PyJWTError, ValueError, TypeError) as exc:
            raise SigningError("Failed to sign provider token", cause=exc) from exc

        logger.debug(
            "provider_token_signed",
            key_id=self._config.key_id,
            issued_at=claims["iat"],
            token_preview=token_prefix(token),
            token_length=len(token),
        )
        return SignedCredential(token=token, issued_at=now)
