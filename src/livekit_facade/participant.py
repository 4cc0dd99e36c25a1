from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Union

from .entity import FacadeEntity
from .enums import DisconnectReason, ParticipantKind, TrackKind, TrackSource
from .errors import FacadeNotImplementedError
from .facade_types import (
    ParticipantPermission,
    ParticipantTrackPermission,
    TrackPublishOptions,
    Transcription,
)
from .wrappers import wrap_track_publication

if TYPE_CHECKING:
    from .track import LocalTrack
    from .track_publication import LocalTrackPublication, TrackPublication


class Participant(FacadeEntity[Any]):
    """Room member; events are named by `ParticipantEvent`."""

    is_local = False

    @property
    def sid(self) -> str:
        return self._instance.sid

    @property
    def identity(self) -> str:
        return self._instance.identity

    @property
    def name(self) -> str:
        return self._instance.name

    @property
    def metadata(self) -> str:
        return self._instance.metadata

    @property
    def attributes(self) -> Dict[str, str]:
        return dict(self._instance.attributes)

    @property
    def kind(self) -> ParticipantKind:
        return ParticipantKind.from_lk(self._instance.kind)

    @property
    def is_agent(self) -> bool:
        return self.kind == ParticipantKind.AGENT

    @property
    def permissions(self) -> ParticipantPermission:
        return ParticipantPermission.from_rtc(self._instance.permissions)

    @property
    def disconnect_reason(self) -> Optional[DisconnectReason]:
        reason = getattr(self._instance, "disconnect_reason", None)
        return None if reason is None else DisconnectReason.from_lk(reason)

    @property
    def track_publications(self) -> Dict[str, "TrackPublication"]:
        return {
            sid: wrap_track_publication(pub)
            for sid, pub in self._instance.track_publications.items()
        }

    def _publications_of(self, kind: TrackKind) -> List["TrackPublication"]:
        return [pub for pub in self.track_publications.values() if pub.kind == kind]

    @property
    def audio_track_publications(self) -> List["TrackPublication"]:
        return self._publications_of(TrackKind.AUDIO)

    @property
    def video_track_publications(self) -> List["TrackPublication"]:
        return self._publications_of(TrackKind.VIDEO)

    def get_track_publication(self, source: TrackSource) -> Optional["TrackPublication"]:
        for pub in self.track_publications.values():
            if pub.source == source:
                return pub
        return None

    def get_track_publication_by_name(self, name: str) -> Optional["TrackPublication"]:
        for pub in self.track_publications.values():
            if pub.name == name:
                return pub
        return None


class LocalParticipant(Participant):
    is_local = True

    async def publish_track(
        self, track: "LocalTrack", options: Optional[TrackPublishOptions] = None
    ) -> "LocalTrackPublication":
        if options is None:
            options = TrackPublishOptions(source=_default_source(track))
        self.logger.debug(f"Publishing {track.kind} track {track.name}")
        publication = await self._instance.publish_track(track.instance, options.to_lk())
        return wrap_track_publication(publication)  # type: ignore[return-value]

    async def unpublish_track(self, track_sid: str) -> None:
        await self._instance.unpublish_track(track_sid)

    async def publish_data(
        self,
        payload: Union[bytes, str],
        *,
        reliable: bool = True,
        destination_identities: Optional[List[str]] = None,
        topic: str = "",
    ) -> None:
        await self._instance.publish_data(
            payload,
            reliable=reliable,
            destination_identities=destination_identities or [],
            topic=topic,
        )

    async def publish_dtmf(self, *, code: int, digit: str) -> None:
        await self._instance.publish_dtmf(code=code, digit=digit)

    async def set_metadata(self, metadata: str) -> None:
        await self._instance.set_metadata(metadata)

    async def set_name(self, name: str) -> None:
        await self._instance.set_name(name)

    async def set_attributes(self, attributes: Dict[str, str]) -> None:
        await self._instance.set_attributes(attributes)

    async def perform_rpc(
        self,
        *,
        destination_identity: str,
        method: str,
        payload: str,
        response_timeout: Optional[float] = None,
    ) -> str:
        return await self._instance.perform_rpc(
            destination_identity=destination_identity,
            method=method,
            payload=payload,
            response_timeout=response_timeout,
        )

    def register_rpc_method(self, method: str, handler: Callable[..., Any]) -> None:
        self._instance.register_rpc_method(method, handler)

    def unregister_rpc_method(self, method: str) -> None:
        self._instance.unregister_rpc_method(method)

    async def publish_transcription(self, transcription: Transcription) -> None:
        await self._instance.publish_transcription(transcription.to_lk())

    def set_track_subscription_permissions(
        self,
        *,
        allow_all_participants: bool,
        participant_permissions: Optional[List[ParticipantTrackPermission]] = None,
    ) -> None:
        self._instance.set_track_subscription_permissions(
            allow_all_participants=allow_all_participants,
            participant_permissions=[p.to_lk() for p in participant_permissions or []],
        )

    # data streams; writers and stream infos are the rtc client's own objects

    async def send_text(
        self,
        text: str,
        *,
        destination_identities: Optional[List[str]] = None,
        topic: str = "",
        attributes: Optional[Dict[str, str]] = None,
        reply_to_id: Optional[str] = None,
    ) -> Any:
        return await self._instance.send_text(
            text,
            destination_identities=destination_identities,
            topic=topic,
            attributes=attributes,
            reply_to_id=reply_to_id,
        )

    async def stream_text(
        self,
        *,
        destination_identities: Optional[List[str]] = None,
        topic: str = "",
        attributes: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> Any:
        return await self._instance.stream_text(
            destination_identities=destination_identities,
            topic=topic,
            attributes=attributes,
            **kwargs,
        )

    async def send_file(
        self,
        file_path: str,
        *,
        topic: str = "",
        destination_identities: Optional[List[str]] = None,
        attributes: Optional[Dict[str, str]] = None,
    ) -> Any:
        self.logger.debug(f"Sending {file_path} on {topic!r}")
        return await self._instance.send_file(
            file_path,
            topic=topic,
            destination_identities=destination_identities,
            attributes=attributes,
        )

    async def stream_bytes(
        self,
        name: str,
        *,
        mime_type: str = "application/octet-stream",
        destination_identities: Optional[List[str]] = None,
        topic: str = "",
        attributes: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> Any:
        return await self._instance.stream_bytes(
            name,
            mime_type=mime_type,
            destination_identities=destination_identities,
            topic=topic,
            attributes=attributes,
            **kwargs,
        )

    async def set_camera_enabled(self, enabled: bool) -> None:
        raise FacadeNotImplementedError("Camera capture is not managed by the rtc client")

    async def set_microphone_enabled(self, enabled: bool) -> None:
        raise FacadeNotImplementedError("Microphone capture is not managed by the rtc client")


class RemoteParticipant(Participant):
    def set_volume(self, volume: float, source: TrackSource = TrackSource.MICROPHONE) -> None:
        raise FacadeNotImplementedError("Playback volume is not managed by the rtc client")

    def get_volume(self, source: TrackSource = TrackSource.MICROPHONE) -> float:
        raise FacadeNotImplementedError("Playback volume is not managed by the rtc client")


def _default_source(track: "LocalTrack") -> TrackSource:
    if track.kind == TrackKind.AUDIO:
        return TrackSource.MICROPHONE
    if track.kind == TrackKind.VIDEO:
        return TrackSource.CAMERA
    return TrackSource.UNKNOWN
