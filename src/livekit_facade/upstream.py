# Single import point for the wrapped LiveKit packages
from livekit import api as lkapi
from livekit import rtc as lkrtc
from livekit.protocol import models as lkmodels
from livekit.protocol import room as lkroom

__all__ = ["lkapi", "lkmodels", "lkroom", "lkrtc"]
