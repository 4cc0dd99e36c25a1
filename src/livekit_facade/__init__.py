from .api import RoomServiceClient
from .config import ConnectionConfig
from .devices import DeviceManager, MediaDeviceInfo, MediaDeviceKind
from .enums import (
    AudioTrackFeature,
    ConnectionQuality,
    ConnectionState,
    ContinualGatheringPolicy,
    DataPacketKind,
    DisconnectReason,
    EncryptionState,
    EncryptionType,
    IceTransportType,
    ParticipantKind,
    ParticipantState,
    PermissionStatus,
    StreamState,
    SubscriptionStatus,
    TrackKind,
    TrackSource,
    VideoCodec,
    VideoQuality,
)
from .errors import (
    ClassificationError,
    ConfigurationError,
    FacadeError,
    FacadeNotImplementedError,
    IncompleteEnumMapping,
    ModuleNotReadyError,
    NotFoundError,
    UntranslatableEnumValue,
)
from .events import ParticipantEvent, RoomEvent, TrackEvent, TrackPublicationEvent
from .facade_types import (
    AudioEncoding,
    DataPacket,
    E2EEOptions,
    IceServer,
    KeyProviderOptions,
    ParticipantInfo,
    ParticipantPermission,
    ParticipantTrackPermission,
    RoomInfo,
    RoomOptions,
    RoomStats,
    RtcConfiguration,
    RtcStats,
    SipDTMF,
    TrackInfo,
    TrackPublishOptions,
    Transcription,
    TranscriptionSegment,
    VideoEncoding,
)
from .participant import LocalParticipant, Participant, RemoteParticipant
from .room import VideoRoom
from .track import (
    LocalAudioTrack,
    LocalTrack,
    LocalVideoTrack,
    RemoteAudioTrack,
    RemoteTrack,
    RemoteVideoTrack,
    Track,
)
from .track_publication import LocalTrackPublication, RemoteTrackPublication, TrackPublication
from .utils import create_access_token
from .wrappers import wrap, wrap_participant, wrap_room, wrap_track, wrap_track_publication

__version__ = "0.1.0"
