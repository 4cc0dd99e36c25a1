import gc

import pytest
from livekit import rtc

from livekit_facade import VideoRoom

from .fakes import (
    FakeLocalParticipant,
    FakeLocalTrackPublication,
    FakeLocalVideoTrack,
    FakeRemoteAudioTrack,
    FakeRemoteParticipant,
    FakeRemoteTrackPublication,
    FakeRoom,
)


@pytest.fixture(autouse=True)
def collect_garbage():
    yield
    gc.collect()


@pytest.fixture
def local_participant():
    return FakeLocalParticipant()


@pytest.fixture
def camera(local_participant):
    track = FakeLocalVideoTrack()
    local_participant.add_publication(
        FakeLocalTrackPublication(
            sid=track.sid, name=track.name, kind=track.kind, source=rtc.TrackSource.SOURCE_CAMERA, track=track
        )
    )
    return track


@pytest.fixture
def remote_audio():
    track = FakeRemoteAudioTrack(sid="TR_A2", name="mic")
    publication = FakeRemoteTrackPublication(sid="TR_A2", name="mic", subscribed=True)
    participant = FakeRemoteParticipant("bob", "PA_2", publications=[publication])
    return track, publication, participant


@pytest.fixture
def room(local_participant):
    return FakeRoom(local_participant)


@pytest.fixture
def video_room(room):
    return VideoRoom(room)
