from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, TypeVar

from . import dispatch
from .dispatch import Category
from .registry import IdentityRegistry

if TYPE_CHECKING:
    from .participant import Participant
    from .room import VideoRoom
    from .track import Track
    from .track_publication import TrackPublication

T = TypeVar("T")
R = TypeVar("R")

tracks: IdentityRegistry[Any, "Track"] = IdentityRegistry("track", dispatch.TRACKS.construct)
publications: IdentityRegistry[Any, "TrackPublication"] = IdentityRegistry(
    "publication", dispatch.PUBLICATIONS.construct
)
participants: IdentityRegistry[Any, "Participant"] = IdentityRegistry(
    "participant", dispatch.PARTICIPANTS.construct
)
# rooms are never built here: a VideoRoom registers itself on construction
rooms: IdentityRegistry[Any, "VideoRoom"] = IdentityRegistry("room")


def wrap_track(track: Any) -> "Track":
    return tracks.wrap(track)


def wrap_track_publication(publication: Any) -> "TrackPublication":
    return publications.wrap(publication)


def wrap_participant(participant: Any) -> "Participant":
    return participants.wrap(participant)


def wrap_room(room: Any, wrapped: "VideoRoom | None" = None) -> "VideoRoom":
    """Associate `room` with `wrapped`, or look up the facade already associated.

    Raises NotFoundError when no facade was ever associated with `room`.
    """
    if wrapped is not None:
        return rooms.register(room, wrapped)
    return rooms.wrap(room)


_WRAPPERS: dict[Category, Callable[[Any], Any]] = {
    Category.TRACK: wrap_track,
    Category.PUBLICATION: wrap_track_publication,
    Category.PARTICIPANT: wrap_participant,
    Category.ROOM: wrap_room,
}


def wrap(obj: Any) -> Any:
    """Return the facade of any rtc object, creating it when needed."""
    return _WRAPPERS[dispatch.category_of(obj)](obj)


def optional(fn: Callable[[T], R]) -> Callable[[T | None], R | None]:
    def apply(value: T | None) -> R | None:
        return None if value is None else fn(value)

    return apply
