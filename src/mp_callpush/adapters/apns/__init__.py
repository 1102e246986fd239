"""APNs adapter – VoIP push delivery."""
from mp_callpush.adapters.apns.sender import ApnsVoipPushSender, build_voip_payload

__all__ = ["ApnsVoipPushSender", "build_voip_payload"]
