"""Security – provider credential configuration."""
from __future__ import annotations

import dataclasses

__all__ = [
    "KEY_ID_PLACEHOLDER",
    "PRIVATE_KEY_PLACEHOLDER",
    "ProviderCredentialConfig",
    "TEAM_ID_PLACEHOLDER",
    "credential_problems",
]

KEY_ID_PLACEHOLDER = "YOUR_KEY_ID_HERE"
TEAM_ID_PLACEHOLDER = "YOUR_TEAM_ID_HERE"
PRIVATE_KEY_PLACEHOLDER = "PASTE_YOUR_PRIVATE_KEY"


@dataclasses.dataclass(frozen=True)
class ProviderCredentialConfig:
    """Key material used to mint provider tokens.

    ``issuer_id`` is the Apple developer team id; ``private_key`` is the PEM
    content of the ``AuthKey_<key_id>.p8`` file.
    """

    key_id: str
    issuer_id: str
    private_key: str | bytes = dataclasses.field(repr=False)


def credential_problems(config: ProviderCredentialConfig) -> list[str]:
    """Return the reasons *config* cannot be used for signing (empty if usable)."""
    problems: list[str] = []
    if not config.key_id or config.key_id == KEY_ID_PLACEHOLDER:
        problems.append("key_id is not configured")
    if not config.issuer_id or config.issuer_id == TEAM_ID_PLACEHOLDER:
        problems.append("issuer_id is not configured")
    key = config.private_key
    if isinstance(key, bytes):
        key = key.decode("utf-8", errors="replace")
    if not key or not key.strip() or PRIVATE_KEY_PLACEHOLDER in key:
        problems.append("private_key is not configured")
    return problems
