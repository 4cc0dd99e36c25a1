from __future__ import annotations

import asyncio
import datetime
import inspect
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from pyee.asyncio import AsyncIOEventEmitter

from .bridge import EventBridge, EventRoute, translate_args
from .enums import (
    ConnectionQuality,
    ConnectionState,
    DisconnectReason,
    EncryptionState,
)
from .errors import FacadeNotImplementedError
from .events import ParticipantEvent, RoomEvent, TrackEvent, TrackPublicationEvent
from .facade_types import (
    DataPacket,
    ParticipantPermission,
    RoomOptions,
    RoomStats,
    SipDTMF,
    TranscriptionSegment,
)
from .upstream import lkrtc
from .wrappers import optional, wrap_participant, wrap_room, wrap_track, wrap_track_publication

if TYPE_CHECKING:
    from .participant import LocalParticipant, Participant, RemoteParticipant
    from .track import Track
    from .track_publication import TrackPublication

P = wrap_participant
OP = optional(wrap_participant)
PUB = wrap_track_publication
T = wrap_track


def _speakers(speakers: List[Any]) -> List["Participant"]:
    return [wrap_participant(p) for p in speakers]


def _segments(segments: List[Any]) -> List[TranscriptionSegment]:
    return [TranscriptionSegment.from_lk(s) for s in segments]


class VideoRoom(AsyncIOEventEmitter):
    """Facade over an rtc Room.

    Listeners subscribe with `RoomEvent` names. Every upstream room event is
    first delivered to the participant, publication and track facades it
    concerns, then emitted here, so a facade entity never sees an event
    after the room does.
    """

    def __init__(
        self,
        room: Optional[lkrtc.Room] = None,
        *,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        super().__init__(loop=loop)
        if room is None:
            room = lkrtc.Room(loop=loop)
        self._room = room
        self._active_speakers: List["Participant"] = []
        self.logger = logging.getLogger("livekit-facade")
        wrap_room(room, self)
        self._bridge = EventBridge(room, self, self._routes())
        self._bridge.attach()

    def __repr__(self) -> str:
        return f"VideoRoom({type(self._room).__name__}@{id(self._room):#x})"

    def _routes(self) -> List[EventRoute]:
        R = RoomEvent
        return [
            EventRoute("connected", R.CONNECTED),
            EventRoute(
                "disconnected",
                R.DISCONNECTED,
                translate_args(optional(DisconnectReason.from_lk)),
                self._on_disconnected,
                terminal=True,
            ),
            EventRoute("reconnecting", R.RECONNECTING),
            EventRoute("reconnected", R.RECONNECTED),
            EventRoute(
                "connection_state_changed",
                R.CONNECTION_STATE_CHANGED,
                translate_args(ConnectionState.from_lk),
            ),
            EventRoute("participant_connected", R.PARTICIPANT_CONNECTED, translate_args(P)),
            EventRoute(
                "participant_disconnected",
                R.PARTICIPANT_DISCONNECTED,
                translate_args(P),
                self._on_participant_disconnected,
            ),
            EventRoute(
                "participant_active",
                R.PARTICIPANT_ACTIVE,
                translate_args(OP),
                self._relay(ParticipantEvent.PARTICIPANT_ACTIVE),
            ),
            EventRoute(
                "local_track_published",
                R.LOCAL_TRACK_PUBLISHED,
                translate_args(PUB, T),
                self._on_local_track_published,
            ),
            EventRoute(
                "local_track_unpublished",
                R.LOCAL_TRACK_UNPUBLISHED,
                translate_args(PUB),
                self._on_local_track_unpublished,
            ),
            EventRoute(
                "local_track_republished",
                R.LOCAL_TRACK_REPUBLISHED,
                translate_args(PUB, optional(T)),
                self._on_local_track_republished,
            ),
            EventRoute(
                "local_track_subscribed",
                R.LOCAL_TRACK_SUBSCRIBED,
                translate_args(T),
                self._on_local_track_subscribed,
            ),
            EventRoute(
                "track_published",
                R.TRACK_PUBLISHED,
                translate_args(PUB, P),
                self._on_track_published,
            ),
            EventRoute(
                "track_unpublished",
                R.TRACK_UNPUBLISHED,
                translate_args(PUB, P),
                self._on_track_unpublished,
            ),
            EventRoute(
                "track_subscribed",
                R.TRACK_SUBSCRIBED,
                translate_args(T, PUB, P),
                self._on_track_subscribed,
            ),
            EventRoute(
                "track_unsubscribed",
                R.TRACK_UNSUBSCRIBED,
                translate_args(T, PUB, P),
                self._on_track_unsubscribed,
            ),
            EventRoute(
                "track_subscription_failed",
                R.TRACK_SUBSCRIPTION_FAILED,
                translate_args(P),
                self._on_track_subscription_failed,
            ),
            EventRoute(
                "track_muted", R.TRACK_MUTED, translate_args(OP, PUB), self._on_track_muted
            ),
            EventRoute(
                "track_unmuted", R.TRACK_UNMUTED, translate_args(OP, PUB), self._on_track_unmuted
            ),
            EventRoute(
                "active_speakers_changed",
                R.ACTIVE_SPEAKERS_CHANGED,
                translate_args(_speakers),
                self._on_active_speakers_changed,
            ),
            EventRoute("room_metadata_changed", R.ROOM_METADATA_CHANGED),
            EventRoute("room_updated", R.ROOM_UPDATED),
            EventRoute("moved", R.MOVED),
            EventRoute("token_refreshed", R.TOKEN_REFRESHED),
            EventRoute(
                "participant_metadata_changed",
                R.PARTICIPANT_METADATA_CHANGED,
                translate_args(OP),
                self._relay(ParticipantEvent.PARTICIPANT_METADATA_CHANGED),
            ),
            EventRoute(
                "participant_name_changed",
                R.PARTICIPANT_NAME_CHANGED,
                translate_args(OP),
                self._relay(ParticipantEvent.PARTICIPANT_NAME_CHANGED),
            ),
            EventRoute(
                "participant_attributes_changed",
                R.PARTICIPANT_ATTRIBUTES_CHANGED,
                translate_args(None, OP),
                self._on_participant_attributes_changed,
            ),
            EventRoute(
                "participant_permissions_changed",
                R.PARTICIPANT_PERMISSIONS_CHANGED,
                translate_args(OP, optional(ParticipantPermission.from_rtc)),
                self._relay(ParticipantEvent.PARTICIPANT_PERMISSIONS_CHANGED),
            ),
            EventRoute(
                "connection_quality_changed",
                R.CONNECTION_QUALITY_CHANGED,
                translate_args(OP, ConnectionQuality.from_lk),
                self._relay(ParticipantEvent.CONNECTION_QUALITY_CHANGED),
            ),
            EventRoute(
                "e2ee_state_changed",
                R.E2EE_STATE_CHANGED,
                translate_args(OP, EncryptionState.from_lk),
                self._relay(ParticipantEvent.ENCRYPTION_STATE_CHANGED),
            ),
            EventRoute(
                "participant_encryption_status_changed",
                R.PARTICIPANT_ENCRYPTION_STATUS_CHANGED,
                translate_args(OP),
                self._relay(ParticipantEvent.ENCRYPTION_STATUS_CHANGED),
            ),
            EventRoute(
                "data_received",
                R.DATA_RECEIVED,
                translate_args(DataPacket.from_lk),
                self._on_data_received,
            ),
            EventRoute(
                "sip_dtmf_received",
                R.SIP_DTMF_RECEIVED,
                translate_args(SipDTMF.from_lk),
                self._on_sip_dtmf_received,
            ),
            EventRoute(
                "transcription_received",
                R.TRANSCRIPTION_RECEIVED,
                translate_args(_segments, OP, optional(PUB)),
                self._on_transcription_received,
            ),
        ]

    # --- entity fan-out -----------------------------------------------------

    @staticmethod
    def _relay(event: ParticipantEvent) -> Callable[..., None]:
        """Deliver to the participant given as first argument, with the rest.

        The rtc client passes no participant when it no longer knows the
        identity; the room still emits, nothing is delivered.
        """

        def relay(participant: Optional["Participant"], *args: Any) -> None:
            if participant is not None:
                participant.deliver(event, *args)

        return relay

    def _on_disconnected(self, reason: Optional[DisconnectReason] = None) -> None:
        self._active_speakers = []

    def _on_participant_disconnected(self, participant: "RemoteParticipant") -> None:
        participant.deliver(ParticipantEvent.DISCONNECTED)
        participant.dispose()
        self._active_speakers = [p for p in self._active_speakers if p is not participant]

    def _on_local_track_published(self, publication: "TrackPublication", track: "Track") -> None:
        track.deliver(TrackEvent.PUBLISHED, publication)
        self.local_participant.deliver(ParticipantEvent.LOCAL_TRACK_PUBLISHED, publication, track)

    def _on_local_track_unpublished(self, publication: "TrackPublication") -> None:
        track = publication.track
        if track is not None:
            track.deliver(TrackEvent.UNPUBLISHED, publication)
        self.local_participant.deliver(ParticipantEvent.LOCAL_TRACK_UNPUBLISHED, publication)
        publication.dispose()

    def _on_local_track_republished(
        self, publication: "TrackPublication", track: Optional["Track"]
    ) -> None:
        self.local_participant.deliver(ParticipantEvent.LOCAL_TRACK_REPUBLISHED, publication, track)

    def _on_local_track_subscribed(self, track: "Track") -> None:
        track.deliver(TrackEvent.SUBSCRIBED)
        self.local_participant.deliver(ParticipantEvent.LOCAL_TRACK_SUBSCRIBED, track)

    def _on_track_published(self, publication: "TrackPublication", participant: "Participant") -> None:
        participant.deliver(ParticipantEvent.TRACK_PUBLISHED, publication)

    def _on_track_unpublished(self, publication: "TrackPublication", participant: "Participant") -> None:
        publication.deliver(TrackPublicationEvent.UNPUBLISHED)
        participant.deliver(ParticipantEvent.TRACK_UNPUBLISHED, publication)
        publication.dispose()

    def _on_track_subscribed(
        self, track: "Track", publication: "TrackPublication", participant: "Participant"
    ) -> None:
        track.deliver(TrackEvent.SUBSCRIBED)
        publication.deliver(TrackPublicationEvent.SUBSCRIBED, track)
        participant.deliver(ParticipantEvent.TRACK_SUBSCRIBED, track, publication)

    def _on_track_unsubscribed(
        self, track: "Track", publication: "TrackPublication", participant: "Participant"
    ) -> None:
        track.deliver(TrackEvent.UNSUBSCRIBED)
        publication.deliver(TrackPublicationEvent.UNSUBSCRIBED, track)
        participant.deliver(ParticipantEvent.TRACK_UNSUBSCRIBED, track, publication)
        track.dispose()

    def _on_track_subscription_failed(
        self, participant: "Participant", track_sid: str, error: Any
    ) -> None:
        publication = participant.track_publications.get(track_sid)
        if publication is not None:
            publication.deliver(TrackPublicationEvent.SUBSCRIPTION_FAILED, error)
        participant.deliver(ParticipantEvent.TRACK_SUBSCRIPTION_FAILED, track_sid, error)

    def _on_track_muted(
        self, participant: Optional["Participant"], publication: "TrackPublication"
    ) -> None:
        track = publication.track
        if track is not None:
            track.deliver(TrackEvent.MUTED)
        publication.deliver(TrackPublicationEvent.MUTED)
        if participant is not None:
            participant.deliver(ParticipantEvent.TRACK_MUTED, publication)

    def _on_track_unmuted(
        self, participant: Optional["Participant"], publication: "TrackPublication"
    ) -> None:
        track = publication.track
        if track is not None:
            track.deliver(TrackEvent.UNMUTED)
        publication.deliver(TrackPublicationEvent.UNMUTED)
        if participant is not None:
            participant.deliver(ParticipantEvent.TRACK_UNMUTED, publication)

    def _on_active_speakers_changed(self, speakers: List["Participant"]) -> None:
        self._active_speakers = list(speakers)

    def _on_participant_attributes_changed(
        self, changed: Dict[str, str], participant: Optional["Participant"]
    ) -> None:
        if participant is not None:
            participant.deliver(ParticipantEvent.ATTRIBUTES_CHANGED, changed)

    def _on_data_received(self, packet: DataPacket) -> None:
        if packet.participant is not None:
            packet.participant.deliver(ParticipantEvent.DATA_RECEIVED, packet)

    def _on_sip_dtmf_received(self, dtmf: SipDTMF) -> None:
        if dtmf.participant is not None:
            dtmf.participant.deliver(ParticipantEvent.SIP_DTMF_RECEIVED, dtmf)

    def _on_transcription_received(
        self,
        segments: List[TranscriptionSegment],
        participant: Optional["Participant"],
        publication: Optional["TrackPublication"],
    ) -> None:
        if participant is not None:
            participant.deliver(ParticipantEvent.TRANSCRIPTION_RECEIVED, segments, publication)

    # --- state --------------------------------------------------------------

    @property
    def instance(self) -> lkrtc.Room:
        return self._room

    @property
    def attached(self) -> bool:
        return self._bridge.attached

    @property
    def connection_state(self) -> ConnectionState:
        return ConnectionState.from_lk(self._room.connection_state)

    @property
    def is_connected(self) -> bool:
        return self._room.isconnected()

    @property
    def name(self) -> str:
        return self._room.name

    @property
    def metadata(self) -> str:
        return self._room.metadata

    @property
    def num_participants(self) -> int:
        return self._room.num_participants

    @property
    def num_publishers(self) -> int:
        return self._room.num_publishers

    @property
    def is_recording(self) -> bool:
        return self._room.is_recording

    @property
    def creation_time(self) -> datetime.datetime:
        return self._room.creation_time

    @property
    def empty_timeout(self) -> float:
        return self._room.empty_timeout

    @property
    def departure_timeout(self) -> float:
        return self._room.departure_timeout

    @property
    def active_speakers(self) -> List["Participant"]:
        """Speakers from the last ACTIVE_SPEAKERS_CHANGED, loudest first."""
        return list(self._active_speakers)

    @property
    def e2ee_manager(self) -> Any:
        return self._room.e2ee_manager

    @property
    def local_participant(self) -> "LocalParticipant":
        return wrap_participant(self._room.local_participant)  # type: ignore[return-value]

    @property
    def remote_participants(self) -> Dict[str, "RemoteParticipant"]:
        return {
            identity: wrap_participant(p)  # type: ignore[misc]
            for identity, p in self._room.remote_participants.items()
        }

    def get_participant_by_identity(self, identity: str) -> Optional["Participant"]:
        participant = self._room.remote_participants.get(identity)
        if participant is None and self._room.isconnected():
            local = self._room.local_participant
            if local.identity == identity:
                participant = local
        return None if participant is None else wrap_participant(participant)

    async def get_sid(self) -> str:
        # a plain property in older rtc releases, awaitable in newer ones
        sid = self._room.sid
        if callable(sid):
            sid = sid()
        if inspect.isawaitable(sid):
            sid = await sid
        return sid

    # --- actions ------------------------------------------------------------

    async def connect(self, url: str, token: str, options: Optional[RoomOptions] = None) -> None:
        self._bridge.attach()
        self.logger.info(f"Connecting to {url}")
        await self._room.connect(url, token, (options or RoomOptions()).to_lk())

    async def disconnect(self) -> None:
        self.logger.info(f"Disconnecting from {self._room.name}")
        await self._room.disconnect()

    async def get_rtc_stats(self) -> RoomStats:
        return RoomStats.from_lk(await self._room.get_rtc_stats())

    def set_e2ee_enabled(self, enabled: bool) -> None:
        self._room.e2ee_manager.set_enabled(enabled)

    def register_text_stream_handler(self, topic: str, handler: Callable[..., Any]) -> None:
        self._room.register_text_stream_handler(topic, handler)

    def register_byte_stream_handler(self, topic: str, handler: Callable[..., Any]) -> None:
        self._room.register_byte_stream_handler(topic, handler)

    def unregister_text_stream_handler(self, topic: str) -> None:
        self._room.unregister_text_stream_handler(topic)

    def unregister_byte_stream_handler(self, topic: str) -> None:
        self._room.unregister_byte_stream_handler(topic)

    def simulate_scenario(self, scenario: str) -> None:
        raise FacadeNotImplementedError("Scenario simulation is not offered by the rtc client")

    def dispose(self) -> None:
        self._bridge.detach()
