from __future__ import annotations

import enum
from typing import Any, Generic, Iterable, Mapping, TypeVar, Union

from google.protobuf.internal.enum_type_wrapper import EnumTypeWrapper

from .errors import FacadeNotImplementedError, IncompleteEnumMapping, UntranslatableEnumValue
from .upstream import lkmodels, lkrtc

E = TypeVar("E", bound="LKEnum")

# a generated protobuf enum, or an IntEnum in rtc releases that replaced one
Upstream = Union[EnumTypeWrapper, "type[enum.IntEnum]"]

# facade enum class -> its primary mapping
_MAPPINGS: dict[type, "EnumMapping"] = {}


def upstream_members(upstream: Any) -> dict[str, int]:
    """Name to value table of an upstream enum."""
    if isinstance(upstream, type) and issubclass(upstream, enum.Enum):
        return {name: member for name, member in upstream.__members__.items()}
    return dict(upstream.items())


def upstream_name(upstream: Any) -> str:
    if isinstance(upstream, type) and issubclass(upstream, enum.Enum):
        return upstream.__qualname__
    return upstream.DESCRIPTOR.full_name


class LKEnum(enum.Enum):
    """Facade enumeration backed by an upstream protobuf enum."""

    def __str__(self) -> str:
        return self.name

    @classmethod
    def mapping(cls) -> "EnumMapping":
        try:
            return _MAPPINGS[cls]
        except KeyError:
            raise FacadeNotImplementedError(
                f"{cls.__name__} has no upstream counterpart"
            ) from None

    @classmethod
    def from_lk(cls: type[E], value: int) -> E:
        return cls.mapping().to_facade(value)

    def to_lk(self) -> int:
        return type(self).mapping().to_upstream(self)


class EnumMapping(Generic[E]):
    """Bidirectional table between a facade enum and an upstream enum.

    The upstream side is a generated protobuf enum or an `enum.IntEnum`.
    `pairs` must be one-to-one. Every facade member needs an upstream value,
    either through `pairs` or through `facade_fallbacks` (for facade members
    the upstream enum cannot express). Upstream values without a pair,
    including values unknown to the installed release, translate to
    `fallback` when one is given and raise otherwise.
    """

    def __init__(
        self,
        facade: type[E],
        upstream: Upstream,
        pairs: Mapping[E, int],
        *,
        fallback: E | None = None,
        facade_fallbacks: Mapping[E, int] | None = None,
        primary: bool = True,
    ) -> None:
        self.facade = facade
        self.upstream = upstream
        self.fallback = fallback
        self.pairs = dict(pairs)
        self.facade_fallbacks = dict(facade_fallbacks or {})

        self._to_upstream: dict[E, int] = {**self.pairs, **self.facade_fallbacks}
        self._to_facade: dict[int, E] = {v: k for k, v in self.pairs.items()}

        name = f"{facade.__name__} <-> {upstream_name(upstream)}"
        if len(self._to_facade) != len(self.pairs):
            raise IncompleteEnumMapping(f"{name}: upstream values are not unique")
        missing = [m.name for m in facade if m not in self._to_upstream]
        if missing:
            raise IncompleteEnumMapping(f"{name}: no upstream value for {missing}")
        known = set(self.upstream_values())
        unknown = [v for v in self._to_upstream.values() if v not in known]
        if unknown:
            raise IncompleteEnumMapping(f"{name}: {unknown} not in upstream enum")
        self.name = name

        if primary:
            _MAPPINGS[facade] = self

    def __repr__(self) -> str:
        return f"EnumMapping({self.name})"

    def upstream_values(self) -> list[int]:
        return list(upstream_members(self.upstream).values())

    def to_facade(self, value: int) -> E:
        try:
            return self._to_facade[value]
        except (KeyError, TypeError):
            pass
        # open enums may carry values newer than the installed release
        if self.fallback is not None and isinstance(value, int):
            return self.fallback
        raise UntranslatableEnumValue(f"Unknown {upstream_name(self.upstream)}: {value}")

    def to_upstream(self, value: E) -> int:
        try:
            return self._to_upstream[value]
        except (KeyError, TypeError):
            raise UntranslatableEnumValue(f"Unknown {self.facade.__name__}: {value}") from None

    def unpaired_upstream_values(self) -> list[int]:
        """Upstream values that only translate through the fallback."""
        return [v for v in self.upstream_values() if v not in self._to_facade]


def _by_name(facade: Iterable[E], upstream: Upstream, prefix: str = "") -> dict[E, int]:
    members = upstream_members(upstream)
    pairs = {}
    for m in facade:
        try:
            pairs[m] = members[prefix + m.name]
        except KeyError:
            raise IncompleteEnumMapping(
                f"{upstream_name(upstream)} has no {prefix + m.name}"
            ) from None
    return pairs


class ConnectionState(LKEnum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"
    SIGNAL_RECONNECTING = "signalReconnecting"


# the rtc client only reports three states
EnumMapping(
    ConnectionState,
    lkrtc.ConnectionState,
    {
        ConnectionState.DISCONNECTED: lkrtc.ConnectionState.CONN_DISCONNECTED,
        ConnectionState.CONNECTED: lkrtc.ConnectionState.CONN_CONNECTED,
        ConnectionState.RECONNECTING: lkrtc.ConnectionState.CONN_RECONNECTING,
    },
    facade_fallbacks={
        ConnectionState.CONNECTING: lkrtc.ConnectionState.CONN_DISCONNECTED,
        ConnectionState.SIGNAL_RECONNECTING: lkrtc.ConnectionState.CONN_RECONNECTING,
    },
)


class DisconnectReason(LKEnum):
    UNKNOWN_REASON = 0
    CLIENT_INITIATED = 1
    DUPLICATE_IDENTITY = 2
    SERVER_SHUTDOWN = 3
    PARTICIPANT_REMOVED = 4
    ROOM_DELETED = 5
    STATE_MISMATCH = 6
    JOIN_FAILURE = 7
    MIGRATION = 8
    SIGNAL_CLOSE = 9
    ROOM_CLOSED = 10
    USER_UNAVAILABLE = 11
    USER_REJECTED = 12
    SIP_TRUNK_FAILURE = 13


EnumMapping(
    DisconnectReason,
    lkmodels.DisconnectReason,
    _by_name(DisconnectReason, lkmodels.DisconnectReason),
    fallback=DisconnectReason.UNKNOWN_REASON,
)


class ParticipantKind(LKEnum):
    STANDARD = "standard"
    INGRESS = "ingress"
    EGRESS = "egress"
    SIP = "sip"
    AGENT = "agent"


# rtc participant kinds share their numbering with the protocol enum
EnumMapping(
    ParticipantKind,
    lkmodels.ParticipantInfo.Kind,
    _by_name(ParticipantKind, lkmodels.ParticipantInfo.Kind),
    fallback=ParticipantKind.STANDARD,
)


class ParticipantState(LKEnum):
    JOINING = "joining"
    JOINED = "joined"
    ACTIVE = "active"
    DISCONNECTED = "disconnected"


EnumMapping(
    ParticipantState,
    lkmodels.ParticipantInfo.State,
    _by_name(ParticipantState, lkmodels.ParticipantInfo.State),
)


class TrackKind(LKEnum):
    UNKNOWN = "unknown"
    AUDIO = "audio"
    VIDEO = "video"


EnumMapping(
    TrackKind,
    lkrtc.TrackKind,
    _by_name(TrackKind, lkrtc.TrackKind, "KIND_"),
    fallback=TrackKind.UNKNOWN,
)

# protocol-level track type, as found in server side track infos
PROTOCOL_TRACK_TYPE = EnumMapping(
    TrackKind,
    lkmodels.TrackType,
    {TrackKind.AUDIO: lkmodels.TrackType.AUDIO, TrackKind.VIDEO: lkmodels.TrackType.VIDEO},
    fallback=TrackKind.UNKNOWN,
    facade_fallbacks={TrackKind.UNKNOWN: lkmodels.TrackType.DATA},
    primary=False,
)


class TrackSource(LKEnum):
    UNKNOWN = "unknown"
    CAMERA = "camera"
    MICROPHONE = "microphone"
    SCREEN_SHARE = "screen_share"
    SCREEN_SHARE_AUDIO = "screen_share_audio"


EnumMapping(
    TrackSource,
    lkrtc.TrackSource,
    {
        TrackSource.UNKNOWN: lkrtc.TrackSource.SOURCE_UNKNOWN,
        TrackSource.CAMERA: lkrtc.TrackSource.SOURCE_CAMERA,
        TrackSource.MICROPHONE: lkrtc.TrackSource.SOURCE_MICROPHONE,
        TrackSource.SCREEN_SHARE: lkrtc.TrackSource.SOURCE_SCREENSHARE,
        TrackSource.SCREEN_SHARE_AUDIO: lkrtc.TrackSource.SOURCE_SCREENSHARE_AUDIO,
    },
    fallback=TrackSource.UNKNOWN,
)

PROTOCOL_TRACK_SOURCE = EnumMapping(
    TrackSource,
    lkmodels.TrackSource,
    _by_name(TrackSource, lkmodels.TrackSource),
    fallback=TrackSource.UNKNOWN,
    primary=False,
)


class StreamState(LKEnum):
    UNKNOWN = "unknown"
    ACTIVE = "active"
    PAUSED = "paused"


EnumMapping(
    StreamState,
    lkrtc.StreamState,
    _by_name(StreamState, lkrtc.StreamState, "STATE_"),
    fallback=StreamState.UNKNOWN,
)


class ConnectionQuality(LKEnum):
    POOR = "poor"
    GOOD = "good"
    EXCELLENT = "excellent"
    LOST = "lost"


EnumMapping(
    ConnectionQuality,
    lkrtc.ConnectionQuality,
    _by_name(ConnectionQuality, lkrtc.ConnectionQuality, "QUALITY_"),
)


class VideoQuality(LKEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    OFF = "off"


EnumMapping(VideoQuality, lkmodels.VideoQuality, _by_name(VideoQuality, lkmodels.VideoQuality))


class VideoCodec(LKEnum):
    VP8 = "vp8"
    H264 = "h264"
    VP9 = "vp9"
    AV1 = "av1"
    H265 = "h265"


EnumMapping(VideoCodec, lkrtc.VideoCodec, _by_name(VideoCodec, lkrtc.VideoCodec))


class AudioTrackFeature(LKEnum):
    STEREO = "stereo"
    NO_DTX = "no_dtx"
    AUTO_GAIN_CONTROL = "auto_gain_control"
    ECHO_CANCELLATION = "echo_cancellation"
    NOISE_SUPPRESSION = "noise_suppression"
    ENHANCED_NOISE_CANCELLATION = "enhanced_noise_cancellation"
    PRECONNECT_BUFFER = "preconnect_buffer"


EnumMapping(
    AudioTrackFeature,
    lkmodels.AudioTrackFeature,
    _by_name(AudioTrackFeature, lkmodels.AudioTrackFeature, "TF_"),
)


class EncryptionType(LKEnum):
    NONE = "none"
    GCM = "gcm"
    CUSTOM = "custom"


EnumMapping(EncryptionType, lkrtc.EncryptionType, _by_name(EncryptionType, lkrtc.EncryptionType))


class EncryptionState(LKEnum):
    NEW = "new"
    OK = "ok"
    ENCRYPTION_FAILED = "encryption_failed"
    DECRYPTION_FAILED = "decryption_failed"
    MISSING_KEY = "missing_key"
    KEY_RATCHETED = "key_ratcheted"
    INTERNAL_ERROR = "internal_error"


EnumMapping(
    EncryptionState, lkrtc.EncryptionState, _by_name(EncryptionState, lkrtc.EncryptionState)
)


class DataPacketKind(LKEnum):
    LOSSY = "lossy"
    RELIABLE = "reliable"


EnumMapping(
    DataPacketKind, lkrtc.DataPacketKind, _by_name(DataPacketKind, lkrtc.DataPacketKind, "KIND_")
)


class IceTransportType(LKEnum):
    RELAY = "relay"
    NOHOST = "nohost"
    ALL = "all"


EnumMapping(
    IceTransportType,
    lkrtc.IceTransportType,
    _by_name(IceTransportType, lkrtc.IceTransportType, "TRANSPORT_"),
)


class ContinualGatheringPolicy(LKEnum):
    GATHER_ONCE = "gather_once"
    GATHER_CONTINUALLY = "gather_continually"


EnumMapping(
    ContinualGatheringPolicy,
    lkrtc.ContinualGatheringPolicy,
    _by_name(ContinualGatheringPolicy, lkrtc.ContinualGatheringPolicy),
)


# facade-only statuses, derived from live upstream state
class SubscriptionStatus(LKEnum):
    DESIRED = "desired"
    SUBSCRIBED = "subscribed"
    UNSUBSCRIBED = "unsubscribed"


class PermissionStatus(LKEnum):
    ALLOWED = "allowed"
    NOT_ALLOWED = "not_allowed"


def mappings() -> list[EnumMapping]:
    """Every primary mapping, in declaration order."""
    return list(_MAPPINGS.values())
