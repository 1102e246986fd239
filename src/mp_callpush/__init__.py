"""
mp_callpush – APNs provider authentication and call-push routing.

Import path convention::

    from mp_callpush.kernel.errors import NotFoundError
    from mp_callpush.security.jwt import CredentialSigner, TokenCache
    from mp_callpush.application.notifications import NotificationRouter
    from mp_callpush.adapters.apns import ApnsVoipPushSender
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
