# Plain shapes for options, event payloads and server side infos
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, NewType, Optional

from google.protobuf.json_format import MessageToDict

from .enums import (
    PROTOCOL_TRACK_SOURCE,
    PROTOCOL_TRACK_TYPE,
    AudioTrackFeature,
    ContinualGatheringPolicy,
    DataPacketKind,
    EncryptionType,
    EnumMapping,
    IceTransportType,
    ParticipantKind,
    ParticipantState,
    TrackKind,
    TrackSource,
    VideoCodec,
)
from .upstream import lkmodels, lkrtc
from .wrappers import optional, wrap_participant

if TYPE_CHECKING:
    from .participant import Participant

Time = NewType("Time", int)


class LKBase:
    def __str__(self) -> str:
        return self.__dump__()

    def __dump__(self, indent: str = "") -> str:
        if indent == "":
            s = [self.__class__.__name__ + ":"]
            indent = "    "
        else:
            s = [f"{self.__class__.__name__}:"]
        for attr, value in vars(self).items():
            if attr.startswith("_"):
                continue
            if isinstance(value, LKBase):
                s.append(f"{indent}{attr} = {value.__dump__(indent + '    ')}")
            elif isinstance(value, list):
                s.append(f"{indent}{attr} = [")
                for v in value:
                    if isinstance(v, LKBase):
                        s.append(f"{indent}    " + v.__dump__(indent + "        "))
                    else:
                        s.append(f"{indent}    {v}")
                s.append(f"{indent}]")
            else:
                s.append(f"{indent}{attr} = {value}")
        return "\n".join(s)

    @classmethod
    def from_lk(cls, pb: Any) -> Any:
        raise NotImplementedError()

    def to_lk(self) -> Any:
        raise NotImplementedError()


# --- connection options -----------------------------------------------------


@dataclass
class IceServer(LKBase):
    urls: List[str]
    username: str = ""
    password: str = ""

    def to_lk(self) -> lkrtc.IceServer:
        return lkrtc.IceServer(urls=self.urls, username=self.username, password=self.password)


@dataclass
class RtcConfiguration(LKBase):
    ice_transport_type: IceTransportType = IceTransportType.ALL
    continual_gathering_policy: ContinualGatheringPolicy = (
        ContinualGatheringPolicy.GATHER_CONTINUALLY
    )
    ice_servers: List[IceServer] = field(default_factory=list)

    def to_lk(self) -> lkrtc.RtcConfiguration:
        return lkrtc.RtcConfiguration(
            ice_transport_type=self.ice_transport_type.to_lk(),
            continual_gathering_policy=self.continual_gathering_policy.to_lk(),
            ice_servers=[s.to_lk() for s in self.ice_servers],
        )


@dataclass
class KeyProviderOptions(LKBase):
    shared_key: Optional[bytes] = None
    ratchet_salt: bytes = b"LKFrameEncryptionKey"
    ratchet_window_size: int = 16
    failure_tolerance: int = -1

    def to_lk(self) -> lkrtc.KeyProviderOptions:
        return lkrtc.KeyProviderOptions(
            shared_key=self.shared_key,
            ratchet_salt=self.ratchet_salt,
            ratchet_window_size=self.ratchet_window_size,
            failure_tolerance=self.failure_tolerance,
        )


@dataclass
class E2EEOptions(LKBase):
    key_provider_options: KeyProviderOptions = field(default_factory=KeyProviderOptions)
    encryption_type: EncryptionType = EncryptionType.GCM

    def to_lk(self) -> lkrtc.E2EEOptions:
        return lkrtc.E2EEOptions(
            key_provider_options=self.key_provider_options.to_lk(),
            encryption_type=self.encryption_type.to_lk(),
        )


@dataclass
class RoomOptions(LKBase):
    auto_subscribe: bool = True
    dynacast: bool = False
    e2ee: Optional[E2EEOptions] = None
    rtc_config: Optional[RtcConfiguration] = None

    def to_lk(self) -> lkrtc.RoomOptions:
        return lkrtc.RoomOptions(
            auto_subscribe=self.auto_subscribe,
            dynacast=self.dynacast,
            e2ee=self.e2ee.to_lk() if self.e2ee else None,
            rtc_config=self.rtc_config.to_lk() if self.rtc_config else None,
        )


@dataclass
class VideoEncoding(LKBase):
    max_bitrate: int
    max_framerate: float


@dataclass
class AudioEncoding(LKBase):
    max_bitrate: int


@dataclass
class TrackPublishOptions(LKBase):
    source: TrackSource = TrackSource.UNKNOWN
    video_codec: VideoCodec = VideoCodec.VP8
    video_encoding: Optional[VideoEncoding] = None
    audio_encoding: Optional[AudioEncoding] = None
    simulcast: bool = True
    dtx: bool = True
    red: bool = True

    def to_lk(self) -> lkrtc.TrackPublishOptions:
        opts = lkrtc.TrackPublishOptions(
            source=self.source.to_lk(),
            video_codec=self.video_codec.to_lk(),
            simulcast=self.simulcast,
            dtx=self.dtx,
            red=self.red,
        )
        if self.video_encoding is not None:
            opts.video_encoding.max_bitrate = self.video_encoding.max_bitrate
            opts.video_encoding.max_framerate = self.video_encoding.max_framerate
        if self.audio_encoding is not None:
            opts.audio_encoding.max_bitrate = self.audio_encoding.max_bitrate
        return opts


# --- event payloads ---------------------------------------------------------


@dataclass
class DataPacket(LKBase):
    data: bytes
    kind: DataPacketKind
    participant: Optional["Participant"] = None
    topic: Optional[str] = None

    @classmethod
    def from_lk(cls, packet: lkrtc.DataPacket) -> "DataPacket":
        return cls(
            data=packet.data,
            kind=DataPacketKind.from_lk(packet.kind),
            participant=optional(wrap_participant)(packet.participant),
            topic=packet.topic,
        )


@dataclass
class SipDTMF(LKBase):
    code: int
    digit: str
    participant: Optional["Participant"] = None

    @classmethod
    def from_lk(cls, dtmf: lkrtc.SipDTMF) -> "SipDTMF":
        return cls(
            code=dtmf.code,
            digit=dtmf.digit,
            participant=optional(wrap_participant)(dtmf.participant),
        )


@dataclass
class TranscriptionSegment(LKBase):
    id: str
    text: str
    start_time: int
    end_time: int
    language: str
    final: bool

    @classmethod
    def from_lk(cls, segment: lkrtc.TranscriptionSegment) -> "TranscriptionSegment":
        return cls(
            id=segment.id,
            text=segment.text,
            start_time=segment.start_time,
            end_time=segment.end_time,
            language=segment.language,
            final=segment.final,
        )

    def to_lk(self) -> lkrtc.TranscriptionSegment:
        return lkrtc.TranscriptionSegment(
            id=self.id,
            text=self.text,
            start_time=self.start_time,
            end_time=self.end_time,
            language=self.language,
            final=self.final,
        )


@dataclass
class Transcription(LKBase):
    participant_identity: str
    track_sid: str
    segments: List[TranscriptionSegment]

    def to_lk(self) -> lkrtc.Transcription:
        return lkrtc.Transcription(
            participant_identity=self.participant_identity,
            track_sid=self.track_sid,
            segments=[s.to_lk() for s in self.segments],
        )


@dataclass
class ParticipantTrackPermission(LKBase):
    """Which tracks of the local participant `participant_identity` may subscribe to."""

    participant_identity: str
    allow_all: bool = False
    allowed_track_sids: List[str] = field(default_factory=list)

    def to_lk(self) -> lkrtc.ParticipantTrackPermission:
        return lkrtc.ParticipantTrackPermission(
            participant_identity=self.participant_identity,
            allow_all=self.allow_all,
            allowed_track_sids=self.allowed_track_sids,
        )


@dataclass
class RtcStats(LKBase):
    """One WebRTC stats report, e.g. type "outbound_rtp" with its values."""

    type: str
    values: Dict[str, Any]

    @classmethod
    def from_lk(cls, stats: Any) -> "RtcStats":
        data = MessageToDict(stats, preserving_proto_field_name=True)
        kind = next(iter(data), "unknown")
        values = data.get(kind, {})
        return cls(type=kind, values=values if isinstance(values, dict) else {kind: values})


@dataclass
class RoomStats(LKBase):
    publisher: List[RtcStats]
    subscriber: List[RtcStats]

    @classmethod
    def from_lk(cls, stats: Any) -> "RoomStats":
        return cls(
            publisher=[RtcStats.from_lk(s) for s in stats.publisher_stats],
            subscriber=[RtcStats.from_lk(s) for s in stats.subscriber_stats],
        )


# --- server side infos ------------------------------------------------------


@dataclass
class Codec(LKBase):
    mime: str
    fmtp_line: str

    @classmethod
    def from_lk(cls, codec: lkmodels.Codec) -> "Codec":
        return cls(mime=codec.mime, fmtp_line=codec.fmtp_line)

    def to_lk(self) -> lkmodels.Codec:
        return lkmodels.Codec(mime=self.mime, fmtp_line=self.fmtp_line)


@dataclass
class TrackInfo(LKBase):
    sid: str
    kind: TrackKind
    name: str
    muted: bool
    width: int
    height: int
    simulcast: bool
    source: TrackSource
    mime_type: str
    mid: str
    stereo: bool
    audio_features: List[AudioTrackFeature]

    @classmethod
    def from_lk(cls, track_info: lkmodels.TrackInfo) -> "TrackInfo":
        return cls(
            sid=track_info.sid,
            kind=PROTOCOL_TRACK_TYPE.to_facade(track_info.type),
            name=track_info.name,
            muted=track_info.muted,
            width=track_info.width,
            height=track_info.height,
            simulcast=track_info.simulcast,
            source=PROTOCOL_TRACK_SOURCE.to_facade(track_info.source),
            mime_type=track_info.mime_type,
            mid=track_info.mid,
            stereo=track_info.stereo,
            audio_features=[AudioTrackFeature.from_lk(f) for f in track_info.audio_features],
        )


@dataclass
class ParticipantPermission(LKBase):
    can_subscribe: bool
    can_publish: bool
    can_publish_data: bool
    hidden: bool
    can_update_metadata: bool
    can_publish_sources: List[TrackSource] = field(default_factory=list)

    @classmethod
    def from_lk(
        cls, perm: lkmodels.ParticipantPermission, sources: EnumMapping = PROTOCOL_TRACK_SOURCE
    ) -> "ParticipantPermission":
        return cls(
            can_subscribe=perm.can_subscribe,
            can_publish=perm.can_publish,
            can_publish_data=perm.can_publish_data,
            hidden=perm.hidden,
            can_update_metadata=perm.can_update_metadata,
            can_publish_sources=[sources.to_facade(s) for s in perm.can_publish_sources],
        )

    @classmethod
    def from_rtc(cls, perm: Any) -> "ParticipantPermission":
        """From the permission a connected rtc participant reports."""
        return cls.from_lk(perm, TrackSource.mapping())

    def to_lk(self) -> lkmodels.ParticipantPermission:
        return lkmodels.ParticipantPermission(
            can_subscribe=self.can_subscribe,
            can_publish=self.can_publish,
            can_publish_data=self.can_publish_data,
            hidden=self.hidden,
            can_update_metadata=self.can_update_metadata,
            can_publish_sources=[PROTOCOL_TRACK_SOURCE.to_upstream(s) for s in self.can_publish_sources],
        )


@dataclass
class ParticipantInfo(LKBase):
    sid: str
    identity: str
    state: ParticipantState
    tracks: List[TrackInfo]
    metadata: str
    joined_at: Time
    name: str
    version: int
    permission: ParticipantPermission
    region: str
    is_publisher: bool
    kind: ParticipantKind
    attributes: Dict[str, str]

    @classmethod
    def from_lk(cls, info: lkmodels.ParticipantInfo) -> "ParticipantInfo":
        return cls(
            sid=info.sid,
            identity=info.identity,
            state=ParticipantState.from_lk(info.state),
            tracks=[TrackInfo.from_lk(t) for t in info.tracks],
            metadata=info.metadata,
            joined_at=Time(info.joined_at),
            name=info.name,
            version=info.version,
            permission=ParticipantPermission.from_lk(info.permission),
            region=info.region,
            is_publisher=info.is_publisher,
            kind=ParticipantKind.from_lk(info.kind),
            attributes=dict(info.attributes),
        )


@dataclass
class RoomInfo(LKBase):
    sid: str
    name: str
    empty_timeout: int
    max_participants: int
    creation_time: Time
    metadata: str
    num_participants: int
    num_publishers: int
    active_recording: bool
    enabled_codecs: List[Codec]

    @classmethod
    def from_lk(cls, room: lkmodels.Room) -> "RoomInfo":
        return cls(
            sid=room.sid,
            name=room.name,
            empty_timeout=room.empty_timeout,
            max_participants=room.max_participants,
            creation_time=Time(room.creation_time),
            metadata=room.metadata,
            num_participants=room.num_participants,
            num_publishers=room.num_publishers,
            active_recording=room.active_recording,
            enabled_codecs=[Codec.from_lk(c) for c in room.enabled_codecs],
        )

    def to_lk(self) -> lkmodels.Room:
        return lkmodels.Room(
            sid=self.sid,
            name=self.name,
            empty_timeout=self.empty_timeout,
            max_participants=self.max_participants,
            creation_time=self.creation_time,
            metadata=self.metadata,
            num_participants=self.num_participants,
            num_publishers=self.num_publishers,
            active_recording=self.active_recording,
            enabled_codecs=[c.to_lk() for c in self.enabled_codecs],
        )
