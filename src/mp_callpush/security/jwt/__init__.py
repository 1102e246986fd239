"""Security – APNs provider token minting (PyJWT-backed)."""
from mp_callpush.security.jwt.cache import DEFAULT_MAX_AGE, DEFAULT_REFRESH_AFTER, TokenCache
from mp_callpush.security.jwt.credentials import ProviderCredentialConfig, credential_problems
from mp_callpush.security.jwt.signer import SIGNING_ALGORITHM, CredentialSigner, SignedCredential

__all__ = [
    "CredentialSigner",
    "DEFAULT_MAX_AGE",
    "DEFAULT_REFRESH_AFTER",
    "ProviderCredentialConfig",
    "SIGNING_ALGORITHM",
    "SignedCredential",
    "TokenCache",
    "credential_problems",
]
