from __future__ import annotations

import enum
import importlib
import itertools
import logging
from typing import Any, Callable, Hashable, Iterable, Mapping

from .enums import TrackKind
from .errors import ClassificationError, ModuleNotReadyError
from .upstream import lkrtc


class Category(enum.Enum):
    TRACK = "track"
    PUBLICATION = "publication"
    PARTICIPANT = "participant"
    ROOM = "room"


class Locality(enum.Enum):
    LOCAL = "local"
    REMOTE = "remote"


def category_of(obj: Any) -> Category:
    if isinstance(obj, lkrtc.Track):
        return Category.TRACK
    if isinstance(obj, lkrtc.TrackPublication):
        return Category.PUBLICATION
    if isinstance(obj, lkrtc.Participant):
        return Category.PARTICIPANT
    if isinstance(obj, lkrtc.Room):
        return Category.ROOM
    raise ClassificationError(f"Cannot classify {type(obj).__name__}")


def track_discriminant(track: Any) -> tuple[Locality, TrackKind]:
    if isinstance(track, (lkrtc.LocalAudioTrack, lkrtc.LocalVideoTrack)):
        locality = Locality.LOCAL
    elif isinstance(track, (lkrtc.RemoteAudioTrack, lkrtc.RemoteVideoTrack)):
        locality = Locality.REMOTE
    else:
        raise ClassificationError(f"Unknown track type {type(track).__name__}")
    return locality, TrackKind.from_lk(track.kind)


def publication_discriminant(publication: Any) -> Locality:
    if isinstance(publication, lkrtc.LocalTrackPublication):
        return Locality.LOCAL
    if isinstance(publication, lkrtc.RemoteTrackPublication):
        return Locality.REMOTE
    raise ClassificationError(f"Unknown track publication type {type(publication).__name__}")


def participant_discriminant(participant: Any) -> Locality:
    # the rtc client marks the local participant by its type
    if isinstance(participant, lkrtc.LocalParticipant):
        return Locality.LOCAL
    if isinstance(participant, lkrtc.RemoteParticipant):
        return Locality.REMOTE
    raise ClassificationError(f"Unknown participant type {type(participant).__name__}")


class TypeDispatcher:
    """Closed dispatch table from a discriminant to a facade class.

    The facade classes are looked up by name in `module` the first time an
    object is classified, so entity modules may import the wrappers freely.
    """

    def __init__(
        self,
        category: Category,
        module: str,
        discriminate: Callable[[Any], Hashable],
        table: Mapping[Hashable, str],
        domain: Iterable[Hashable],
    ) -> None:
        self.category = category
        self.module = module
        self._discriminate = discriminate
        self._table = dict(table)
        self._classes: dict[str, type] | None = None
        self.logger = logging.getLogger("livekit-facade")

        missing = [key for key in domain if key not in self._table]
        if missing:
            raise ClassificationError(f"{category.value} dispatch has no entry for {missing}")

    def classes(self) -> dict[str, type]:
        if self._classes is None:
            try:
                module = importlib.import_module(self.module)
            except ImportError as e:
                raise ModuleNotReadyError(f"{self.module} cannot be imported: {e}") from e
            try:
                classes = {name: getattr(module, name) for name in set(self._table.values())}
            except AttributeError as e:
                # module is still being initialised
                raise ModuleNotReadyError(f"{self.module} is not ready: {e}") from e
            self._classes = classes
        return self._classes

    def resolve(self, underlying: Any) -> type:
        key = self._discriminate(underlying)
        try:
            name = self._table[key]
        except KeyError:
            raise ClassificationError(
                f"No {self.category.value} facade for {type(underlying).__name__} {key}"
            ) from None
        return self.classes()[name]

    def construct(self, underlying: Any) -> Any:
        cls = self.resolve(underlying)
        self.logger.debug(f"Dispatching {type(underlying).__name__} to {cls.__name__}")
        return cls(underlying)


TRACKS = TypeDispatcher(
    Category.TRACK,
    "livekit_facade.track",
    track_discriminant,
    {
        (Locality.LOCAL, TrackKind.AUDIO): "LocalAudioTrack",
        (Locality.LOCAL, TrackKind.VIDEO): "LocalVideoTrack",
        (Locality.REMOTE, TrackKind.AUDIO): "RemoteAudioTrack",
        (Locality.REMOTE, TrackKind.VIDEO): "RemoteVideoTrack",
    },
    itertools.product(Locality, (TrackKind.AUDIO, TrackKind.VIDEO)),
)

PUBLICATIONS = TypeDispatcher(
    Category.PUBLICATION,
    "livekit_facade.track_publication",
    publication_discriminant,
    {Locality.LOCAL: "LocalTrackPublication", Locality.REMOTE: "RemoteTrackPublication"},
    Locality,
)

PARTICIPANTS = TypeDispatcher(
    Category.PARTICIPANT,
    "livekit_facade.participant",
    participant_discriminant,
    {Locality.LOCAL: "LocalParticipant", Locality.REMOTE: "RemoteParticipant"},
    Locality,
)
