from __future__ import annotations

from typing import Any

from .entity import FacadeEntity
from .enums import StreamState, TrackKind
from .errors import FacadeNotImplementedError
from .facade_types import RtcStats
from .upstream import lkrtc
from .wrappers import wrap_track


class Track(FacadeEntity[Any]):
    """Media track facade; events are named by `TrackEvent`."""

    is_local = False

    @property
    def sid(self) -> str:
        return self._instance.sid

    @property
    def name(self) -> str:
        return self._instance.name

    @property
    def kind(self) -> TrackKind:
        return TrackKind.from_lk(self._instance.kind)

    @property
    def stream_state(self) -> StreamState:
        return StreamState.from_lk(self._instance.stream_state)

    @property
    def is_muted(self) -> bool:
        return self._instance.muted

    async def get_stats(self) -> list[RtcStats]:
        stats = await self._instance.get_stats()
        return [RtcStats.from_lk(s) for s in stats]


class LocalTrack(Track):
    is_local = True

    def mute(self) -> None:
        self._instance.mute()

    def unmute(self) -> None:
        self._instance.unmute()

    async def restart(self, **constraints: Any) -> None:
        raise FacadeNotImplementedError("Track restart is not available for local tracks")

    def set_publishing_quality(self, quality: Any) -> None:
        raise FacadeNotImplementedError("Publishing quality cannot be set on a local track")


class RemoteTrack(Track):
    def get_playout_delay(self) -> float:
        raise FacadeNotImplementedError("Playout delay is not exposed for remote tracks")

    def set_playout_delay(self, delay: float) -> None:
        raise FacadeNotImplementedError("Playout delay is not exposed for remote tracks")


class AudioTrack(Track):
    def audio_stream(self, sample_rate: int = 48000, num_channels: int = 1, **kwargs: Any) -> lkrtc.AudioStream:
        return lkrtc.AudioStream(
            self._instance, sample_rate=sample_rate, num_channels=num_channels, **kwargs
        )


class VideoTrack(Track):
    def video_stream(self, **kwargs: Any) -> lkrtc.VideoStream:
        return lkrtc.VideoStream(self._instance, **kwargs)


class LocalAudioTrack(AudioTrack, LocalTrack):
    @classmethod
    def create(cls, name: str, source: lkrtc.AudioSource) -> "LocalAudioTrack":
        return wrap_track(lkrtc.LocalAudioTrack.create_audio_track(name, source))  # type: ignore[return-value]


class LocalVideoTrack(VideoTrack, LocalTrack):
    @classmethod
    def create(cls, name: str, source: lkrtc.VideoSource) -> "LocalVideoTrack":
        return wrap_track(lkrtc.LocalVideoTrack.create_video_track(name, source))  # type: ignore[return-value]


class RemoteAudioTrack(AudioTrack, RemoteTrack):
    pass


class RemoteVideoTrack(VideoTrack, RemoteTrack):
    pass
