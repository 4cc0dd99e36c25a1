from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

from .entity import FacadeEntity
from .enums import (
    AudioTrackFeature,
    EncryptionType,
    PermissionStatus,
    SubscriptionStatus,
    TrackKind,
    TrackSource,
    VideoQuality,
)
from .errors import FacadeNotImplementedError
from .events import TrackPublicationEvent
from .wrappers import wrap_track

if TYPE_CHECKING:
    from .track import LocalTrack, RemoteTrack, Track


class TrackPublication(FacadeEntity[Any]):
    """Publication of a track by a participant.

    `track` is only set while the media is available locally: always for
    local publications, only while subscribed for remote ones.
    """

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
    def source(self) -> TrackSource:
        return TrackSource.from_lk(self._instance.source)

    @property
    def simulcasted(self) -> bool:
        return self._instance.simulcasted

    @property
    def width(self) -> int:
        return self._instance.width

    @property
    def height(self) -> int:
        return self._instance.height

    @property
    def mime_type(self) -> str:
        return self._instance.mime_type

    @property
    def is_muted(self) -> bool:
        return self._instance.muted

    @property
    def encryption_type(self) -> EncryptionType:
        return EncryptionType.from_lk(self._instance.encryption_type)

    @property
    def audio_features(self) -> List[AudioTrackFeature]:
        # the rtc track enum shares its numbering with the protocol one
        return [AudioTrackFeature.from_lk(f) for f in self._instance.audio_features]

    @property
    def track(self) -> Optional["Track"]:
        track = self._instance.track
        return None if track is None else wrap_track(track)


class LocalTrackPublication(TrackPublication):
    is_local = True

    @property
    def track(self) -> Optional["LocalTrack"]:
        return super().track  # type: ignore[return-value]

    def mute(self) -> None:
        track = self.track
        if track is not None:
            track.mute()

    def unmute(self) -> None:
        track = self.track
        if track is not None:
            track.unmute()

    async def wait_for_subscription(self) -> None:
        await self._instance.wait_for_subscription()


class RemoteTrackPublication(TrackPublication):
    """Publication of a remote participant.

    The rtc client reports no permission state. A subscription is taken as
    not allowed while the last attempt failed and no track arrived since.
    """

    def __init__(self, instance: Any) -> None:
        super().__init__(instance)
        self._subscription_error: Any = None

    def deliver(self, event: Any, *args: Any) -> None:
        if event is TrackPublicationEvent.SUBSCRIPTION_FAILED:
            self._subscription_error = args[0] if args else None
        elif event is TrackPublicationEvent.SUBSCRIBED:
            self._subscription_error = None
        super().deliver(event, *args)

    @property
    def track(self) -> Optional["RemoteTrack"]:
        return super().track  # type: ignore[return-value]

    @property
    def is_subscribed(self) -> bool:
        return self._instance.subscribed

    @property
    def subscription_status(self) -> SubscriptionStatus:
        if self._instance.track is not None:
            return SubscriptionStatus.SUBSCRIBED
        if self._instance.subscribed:
            return SubscriptionStatus.DESIRED
        return SubscriptionStatus.UNSUBSCRIBED

    @property
    def permission_status(self) -> PermissionStatus:
        if self._subscription_error is not None and self._instance.track is None:
            return PermissionStatus.NOT_ALLOWED
        return PermissionStatus.ALLOWED

    @property
    def subscription_error(self) -> Any:
        return self._subscription_error

    def set_subscribed(self, subscribed: bool) -> None:
        self._instance.set_subscribed(subscribed)

    def set_enabled(self, enabled: bool) -> None:
        raise FacadeNotImplementedError("Remote publications cannot be disabled")

    def set_video_quality(self, quality: VideoQuality) -> None:
        raise FacadeNotImplementedError("Remote video quality cannot be selected")
