"""In-memory stand-ins for rtc objects.

Tracks, publications and participants subclass the real rtc classes (so the
facade dispatch sees the real types) but bypass their FFI-backed
constructors and answer every property from plain attributes.
"""
from __future__ import annotations

import datetime
from types import SimpleNamespace
from typing import Any, Callable
from unittest.mock import AsyncMock, Mock

from livekit import rtc


def concrete(cls: type) -> type:
    cls.__abstractmethods__ = frozenset()
    return cls


def permission(**kwargs: Any) -> SimpleNamespace:
    """Shaped like the rtc ParticipantPermission message."""
    values: dict[str, Any] = dict(
        can_subscribe=True,
        can_publish=True,
        can_publish_data=True,
        hidden=False,
        can_update_metadata=False,
        can_publish_sources=[],
    )
    values.update(kwargs)
    return SimpleNamespace(**values)


class FakeTrack:
    def __init__(
        self,
        sid: str = "TR_1",
        name: str = "track",
        kind: int = rtc.TrackKind.KIND_AUDIO,
        muted: bool = False,
        stream_state: int = rtc.StreamState.STATE_ACTIVE,
    ) -> None:
        self._sid = sid
        self._name = name
        self._kind = kind
        self._muted = muted
        self._stream_state = stream_state
        self.get_stats = AsyncMock(return_value=[])

    sid = property(lambda self: self._sid)
    name = property(lambda self: self._name)
    kind = property(lambda self: self._kind)
    muted = property(lambda self: self._muted)
    stream_state = property(lambda self: self._stream_state)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._sid})"


class FakeLocalTrack(FakeTrack):
    def mute(self) -> None:
        self._muted = True

    def unmute(self) -> None:
        self._muted = False


class FakeLocalAudioTrack(FakeLocalTrack, rtc.LocalAudioTrack):
    pass


class FakeLocalVideoTrack(FakeLocalTrack, rtc.LocalVideoTrack):
    def __init__(self, sid: str = "TR_V1", name: str = "camera", **kwargs: Any) -> None:
        kwargs.setdefault("kind", rtc.TrackKind.KIND_VIDEO)
        super().__init__(sid, name, **kwargs)


class FakeRemoteAudioTrack(FakeTrack, rtc.RemoteAudioTrack):
    pass


class FakeRemoteVideoTrack(FakeTrack, rtc.RemoteVideoTrack):
    def __init__(self, sid: str = "TR_V2", name: str = "camera", **kwargs: Any) -> None:
        kwargs.setdefault("kind", rtc.TrackKind.KIND_VIDEO)
        super().__init__(sid, name, **kwargs)


class FakePublication:
    def __init__(
        self,
        sid: str = "TR_1",
        name: str = "track",
        kind: int = rtc.TrackKind.KIND_AUDIO,
        source: int = rtc.TrackSource.SOURCE_MICROPHONE,
        track: Any = None,
        subscribed: bool = False,
    ) -> None:
        self._sid = sid
        self._name = name
        self._kind = kind
        self._source = source
        self._track = track
        self._subscribed = subscribed
        self._muted = False
        self.simulcasted_value = False
        self.audio_features_value: list[int] = []
        self.wait_for_subscription = AsyncMock()

    sid = property(lambda self: self._sid)
    name = property(lambda self: self._name)
    kind = property(lambda self: self._kind)
    source = property(lambda self: self._source)
    simulcasted = property(lambda self: self.simulcasted_value)
    width = property(lambda self: 1280 if self._kind == rtc.TrackKind.KIND_VIDEO else 0)
    height = property(lambda self: 720 if self._kind == rtc.TrackKind.KIND_VIDEO else 0)
    mime_type = property(lambda self: "video/vp8" if self._kind == rtc.TrackKind.KIND_VIDEO else "audio/opus")
    encryption_type = property(lambda self: rtc.EncryptionType.NONE)
    subscribed = property(lambda self: self._subscribed)
    audio_features = property(lambda self: self.audio_features_value)

    @property
    def muted(self) -> bool:
        if self._track is not None:
            return self._track.muted
        return self._muted

    @property
    def track(self) -> Any:
        return self._track

    @track.setter
    def track(self, track: Any) -> None:
        self._track = track

    def set_subscribed(self, subscribed: bool) -> None:
        self._subscribed = subscribed

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._sid})"


class FakeLocalTrackPublication(FakePublication, rtc.LocalTrackPublication):
    pass


class FakeRemoteTrackPublication(FakePublication, rtc.RemoteTrackPublication):
    pass


class FakeParticipant:
    def __init__(
        self,
        identity: str = "alice",
        sid: str = "PA_1",
        name: str = "",
        kind: int = 0,
        publications: Any = (),
    ) -> None:
        self._identity = identity
        self._sid = sid
        self._name = name or identity
        self._kind = kind
        self._metadata = ""
        self._attributes: dict[str, str] = {}
        self._publications = {p.sid: p for p in publications}
        self.permissions_value = permission()

    sid = property(lambda self: self._sid)
    identity = property(lambda self: self._identity)
    name = property(lambda self: self._name)
    metadata = property(lambda self: self._metadata)
    attributes = property(lambda self: self._attributes)
    kind = property(lambda self: self._kind)
    track_publications = property(lambda self: self._publications)
    permissions = property(lambda self: self.permissions_value)

    def add_publication(self, publication: Any) -> None:
        self._publications[publication.sid] = publication

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._identity})"


@concrete
class FakeLocalParticipant(FakeParticipant, rtc.LocalParticipant):
    def __init__(self, identity: str = "me", sid: str = "PA_LOCAL", **kwargs: Any) -> None:
        super().__init__(identity, sid, **kwargs)
        self.publish_track = AsyncMock(side_effect=self._publish_track)
        self.unpublish_track = AsyncMock()
        self.publish_data = AsyncMock()
        self.publish_dtmf = AsyncMock()
        self.set_metadata = AsyncMock()
        self.set_name = AsyncMock()
        self.set_attributes = AsyncMock()
        self.perform_rpc = AsyncMock(return_value="pong")
        self.register_rpc_method = Mock()
        self.unregister_rpc_method = Mock()
        self.publish_transcription = AsyncMock()
        self.set_track_subscription_permissions = Mock()
        self.send_text = AsyncMock()
        self.stream_text = AsyncMock()
        self.send_file = AsyncMock()
        self.stream_bytes = AsyncMock()

    async def _publish_track(self, track: Any, options: Any) -> FakeLocalTrackPublication:
        publication = FakeLocalTrackPublication(
            sid=track.sid, name=track.name, kind=track.kind, source=options.source, track=track
        )
        self.add_publication(publication)
        return publication


@concrete
class FakeRemoteParticipant(FakeParticipant, rtc.RemoteParticipant):
    pass


class FakeRoom:
    """Event source shaped like the rtc Room emitter."""

    def __init__(self, local_participant: Any = None) -> None:
        self._events: dict[str, list[Callable[..., Any]]] = {}
        self._local_participant = local_participant
        self.remote_participants: dict[str, Any] = {}
        self.name = "room1011"
        self.metadata = ""
        self.sid = "RM_1"
        self.connection_state = rtc.ConnectionState.CONN_DISCONNECTED
        self.num_participants = 0
        self.num_publishers = 0
        self.is_recording = False
        self.creation_time = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
        self.empty_timeout = 300.0
        self.departure_timeout = 20.0
        self.e2ee_manager = Mock()
        self.connect = AsyncMock(side_effect=self._connect)
        self.disconnect = AsyncMock()
        self.get_rtc_stats = AsyncMock()
        self.register_text_stream_handler = Mock()
        self.register_byte_stream_handler = Mock()
        self.unregister_text_stream_handler = Mock()
        self.unregister_byte_stream_handler = Mock()

    async def _connect(self, url: str, token: str, options: Any) -> None:
        self.connection_state = rtc.ConnectionState.CONN_CONNECTED

    @property
    def local_participant(self) -> Any:
        if self._local_participant is None:
            raise Exception("cannot access local participant before connecting")
        return self._local_participant

    def isconnected(self) -> bool:
        return self.connection_state == rtc.ConnectionState.CONN_CONNECTED

    def on(self, event: str, callback: Callable[..., Any]) -> Callable[..., Any]:
        self._events.setdefault(event, []).append(callback)
        return callback

    def off(self, event: str, callback: Callable[..., Any]) -> None:
        self._events[event].remove(callback)

    def emit(self, event: str, *args: Any) -> None:
        for callback in list(self._events.get(event, [])):
            callback(*args)

    def listener_count(self, event: str | None = None) -> int:
        if event is None:
            return sum(len(v) for v in self._events.values())
        return len(self._events.get(event, []))


class Recorder:
    """Listener that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def __call__(self, *args: Any) -> None:
        self.calls.append(args)

    @property
    def count(self) -> int:
        return len(self.calls)
