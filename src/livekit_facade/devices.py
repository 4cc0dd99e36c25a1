from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from .enums import LKEnum
from .errors import FacadeNotImplementedError, NotFoundError
from .facade_types import LKBase
from .upstream import lkrtc

DEFAULT_DEVICE_ID = "default"


class MediaDeviceKind(LKEnum):
    AUDIO_INPUT = "audioinput"
    AUDIO_OUTPUT = "audiooutput"
    VIDEO_INPUT = "videoinput"


@dataclass
class MediaDeviceInfo(LKBase):
    device_id: str
    kind: MediaDeviceKind
    label: str
    is_default: bool = False
    max_channels: int = 0
    default_sample_rate: float = 0.0

    @classmethod
    def from_lk(  # type: ignore[override]
        cls, info: dict, kind: MediaDeviceKind, default_index: Optional[int] = None
    ) -> "MediaDeviceInfo":
        index = info.get("index")
        if kind is MediaDeviceKind.AUDIO_INPUT:
            channels = info.get("max_input_channels", 0)
        else:
            channels = info.get("max_output_channels", 0)
        return cls(
            device_id=str(index),
            kind=kind,
            label=info.get("name", ""),
            is_default=index is not None and index == default_index,
            max_channels=int(channels),
            default_sample_rate=float(info.get("default_samplerate", 0.0)),
        )


class DeviceManager:
    """Enumerates local capture and playout devices.

    Audio devices come from `livekit.rtc.MediaDevices`, which needs the
    optional `sounddevice` package. The rtc client has no camera support,
    so video input lists are always empty.
    """

    def __init__(self, devices: Any = None) -> None:
        self._devices = devices
        self.logger = logging.getLogger("livekit-facade")

    @property
    def devices(self) -> Any:
        if self._devices is None:
            media_devices = getattr(lkrtc, "MediaDevices", None)
            if media_devices is None:
                raise FacadeNotImplementedError(
                    "Device enumeration needs the sounddevice package"
                )
            self._devices = media_devices()
        return self._devices

    def default_device_id(self, kind: MediaDeviceKind) -> Optional[str]:
        if kind is MediaDeviceKind.AUDIO_INPUT:
            index = self.devices.default_input_device()
        elif kind is MediaDeviceKind.AUDIO_OUTPUT:
            index = self.devices.default_output_device()
        else:
            return None
        return None if index is None else str(index)

    def get_devices(self, kind: Optional[MediaDeviceKind] = None) -> List[MediaDeviceInfo]:
        if kind is None:
            return [d for k in MediaDeviceKind for d in self.get_devices(k)]
        if kind is MediaDeviceKind.AUDIO_INPUT:
            raw = self.devices.list_input_devices()
            default = self.devices.default_input_device()
        elif kind is MediaDeviceKind.AUDIO_OUTPUT:
            raw = self.devices.list_output_devices()
            default = self.devices.default_output_device()
        else:
            return []
        infos = [MediaDeviceInfo.from_lk(d, kind, default) for d in raw]
        self.logger.debug(f"Found {len(infos)} {kind.value} devices")
        return infos

    def normalize_device_id(self, kind: MediaDeviceKind, device_id: str) -> str:
        """Resolve "default" to the id of the actual default device."""
        if device_id != DEFAULT_DEVICE_ID:
            return device_id
        resolved = self.default_device_id(kind)
        if resolved is None:
            raise NotFoundError(f"No default {kind.value} device")
        return resolved
