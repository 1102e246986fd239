"""Shared fixtures: synthetic P-256 provider keys and credential configs."""
from __future__ import annotations

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from mp_callpush.security.jwt import ProviderCredentialConfig

KEY_ID = "ABC123DEFG"
TEAM_ID = "TEAM123456"


def _pem(key: ec.EllipticCurvePrivateKey) -> str:
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="session")
def ec_private_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec_private_pem(ec_private_key: ec.EllipticCurvePrivateKey) -> str:
    return _pem(ec_private_key)


@pytest.fixture
def credential_config(ec_private_pem: str) -> ProviderCredentialConfig:
    return ProviderCredentialConfig(key_id=KEY_ID, issuer_id=TEAM_ID, private_key=ec_private_pem)
