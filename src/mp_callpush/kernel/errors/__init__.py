"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   └── RecipientTokenError
    │       ├── NotFoundError
    │       ├── MissingTokenError
    │       └── InvalidFormatError
    ├── ApplicationError         (application.py)
    │   ├── ConfigurationError
    │   └── TimeoutError
    └── InfrastructureError      (infrastructure.py)
        ├── SigningError
        ├── TimeoutError
        └── ExternalServiceError
            └── DispatchError
"""

from mp_callpush.kernel.errors.application import (
    ApplicationError,
    ConfigurationError,
    TimeoutError,
)
from mp_callpush.kernel.errors.base import BaseError
from mp_callpush.kernel.errors.domain import (
    DomainError,
    InvalidFormatError,
    MissingTokenError,
    NotFoundError,
    RecipientTokenError,
)
from mp_callpush.kernel.errors.infrastructure import (
    DispatchError,
    ExternalServiceError,
    InfrastructureError,
    SigningError,
)
from mp_callpush.kernel.errors.infrastructure import TimeoutError as InfrastructureTimeoutError

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConfigurationError",
    "DispatchError",
    "DomainError",
    "ExternalServiceError",
    "InfrastructureError",
    "InfrastructureTimeoutError",
    "InvalidFormatError",
    "MissingTokenError",
    "NotFoundError",
    "RecipientTokenError",
    "SigningError",
    "TimeoutError",
]
