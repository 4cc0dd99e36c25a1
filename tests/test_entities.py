import pytest
from livekit import rtc
from livekit.protocol import models

from livekit_facade import (
    AudioTrackFeature,
    FacadeNotImplementedError,
    LocalTrackPublication,
    ParticipantKind,
    ParticipantPermission,
    ParticipantTrackPermission,
    PermissionStatus,
    StreamState,
    SubscriptionStatus,
    TrackKind,
    TrackPublicationEvent,
    TrackPublishOptions,
    TrackSource,
    Transcription,
    TranscriptionSegment,
    VideoCodec,
    wrap_participant,
    wrap_track,
    wrap_track_publication,
)

from .fakes import (
    FakeLocalAudioTrack,
    FakeLocalParticipant,
    FakeRemoteParticipant,
    FakeRemoteTrackPublication,
    FakeRemoteVideoTrack,
    permission,
)


class TestTrack:
    def test_reads_through(self):
        track = FakeRemoteVideoTrack(stream_state=rtc.StreamState.STATE_PAUSED)
        facade = wrap_track(track)
        assert facade.sid == "TR_V2"
        assert facade.kind is TrackKind.VIDEO
        assert facade.stream_state is StreamState.PAUSED
        assert not facade.is_local
        track._stream_state = rtc.StreamState.STATE_ACTIVE
        assert facade.stream_state is StreamState.ACTIVE

    def test_local_mute_delegates(self):
        track = FakeLocalAudioTrack()
        facade = wrap_track(track)
        facade.mute()
        assert track.muted and facade.is_muted
        facade.unmute()
        assert not facade.is_muted

    async def test_stats_are_converted(self):
        track = FakeLocalAudioTrack()
        facade = wrap_track(track)
        assert await facade.get_stats() == []
        track.get_stats.assert_awaited_once()

    async def test_unmapped_operations(self):
        with pytest.raises(FacadeNotImplementedError):
            await wrap_track(FakeLocalAudioTrack()).restart()
        with pytest.raises(FacadeNotImplementedError):
            wrap_track(FakeRemoteVideoTrack()).set_playout_delay(0.2)


class TestTrackPublication:
    def test_subscription_status_is_live(self):
        publication = FakeRemoteTrackPublication(subscribed=False)
        facade = wrap_track_publication(publication)
        assert facade.subscription_status is SubscriptionStatus.UNSUBSCRIBED

        facade.set_subscribed(True)
        assert facade.is_subscribed
        assert facade.subscription_status is SubscriptionStatus.DESIRED

        publication.track = FakeRemoteVideoTrack()
        assert facade.subscription_status is SubscriptionStatus.SUBSCRIBED
        assert facade.track is wrap_track(publication.track)

    def test_permission_status_follows_subscription_failures(self):
        publication = FakeRemoteTrackPublication()
        facade = wrap_track_publication(publication)
        assert facade.permission_status is PermissionStatus.ALLOWED

        facade.deliver(TrackPublicationEvent.SUBSCRIPTION_FAILED, "denied")
        assert facade.permission_status is PermissionStatus.NOT_ALLOWED

        # a track that arrives anyway wins over the stale failure
        publication.track = FakeRemoteVideoTrack()
        assert facade.permission_status is PermissionStatus.ALLOWED

        publication.track = None
        facade.deliver(TrackPublicationEvent.SUBSCRIBED, None)
        assert facade.permission_status is PermissionStatus.ALLOWED

    def test_audio_features(self):
        publication = FakeRemoteTrackPublication()
        publication.audio_features_value = [
            models.AudioTrackFeature.TF_ECHO_CANCELLATION,
            models.AudioTrackFeature.TF_PRECONNECT_BUFFER,
        ]
        facade = wrap_track_publication(publication)
        assert facade.audio_features == [
            AudioTrackFeature.ECHO_CANCELLATION,
            AudioTrackFeature.PRECONNECT_BUFFER,
        ]

    def test_translated_fields(self):
        facade = wrap_track_publication(
            FakeRemoteTrackPublication(kind=rtc.TrackKind.KIND_VIDEO, source=rtc.TrackSource.SOURCE_CAMERA)
        )
        assert facade.kind is TrackKind.VIDEO
        assert facade.source is TrackSource.CAMERA
        assert (facade.width, facade.height) == (1280, 720)
        assert facade.track is None

    def test_unmapped_operations(self):
        facade = wrap_track_publication(FakeRemoteTrackPublication())
        with pytest.raises(FacadeNotImplementedError):
            facade.set_enabled(False)


class TestParticipant:
    def test_reads_through(self):
        publication = FakeRemoteTrackPublication(sid="TR_9", name="mic")
        bob = FakeRemoteParticipant("bob", "PA_2", kind=4, publications=[publication])
        facade = wrap_participant(bob)
        assert facade.identity == "bob"
        assert facade.kind is ParticipantKind.AGENT
        assert facade.is_agent
        assert facade.track_publications == {"TR_9": wrap_track_publication(publication)}
        assert facade.get_track_publication(TrackSource.MICROPHONE) is wrap_track_publication(publication)
        assert facade.get_track_publication_by_name("nope") is None
        assert facade.audio_track_publications == [wrap_track_publication(publication)]

    def test_attributes_not_cached(self):
        bob = FakeRemoteParticipant("bob")
        facade = wrap_participant(bob)
        bob._attributes["role"] = "host"
        assert facade.attributes == {"role": "host"}

    async def test_publish_track(self):
        me = FakeLocalParticipant()
        track = wrap_track(FakeLocalAudioTrack())
        publication = await wrap_participant(me).publish_track(track)
        assert isinstance(publication, LocalTrackPublication)
        assert publication.track is track
        (published, options), _ = me.publish_track.await_args
        assert published is track.instance
        assert options.source == rtc.TrackSource.SOURCE_MICROPHONE

    async def test_publish_options_are_translated(self):
        me = FakeLocalParticipant()
        track = wrap_track(FakeLocalAudioTrack())
        await wrap_participant(me).publish_track(
            track, TrackPublishOptions(source=TrackSource.SCREEN_SHARE_AUDIO, video_codec=VideoCodec.H264)
        )
        (_, options), _ = me.publish_track.await_args
        assert options.source == rtc.TrackSource.SOURCE_SCREENSHARE_AUDIO
        assert options.video_codec == VideoCodec.H264.to_lk()

    async def test_delegates_and_errors_pass_through(self):
        me = FakeLocalParticipant()
        facade = wrap_participant(me)
        await facade.publish_data(b"hi", topic="chat")
        me.publish_data.assert_awaited_once_with(
            b"hi", reliable=True, destination_identities=[], topic="chat"
        )
        assert await facade.perform_rpc(destination_identity="bob", method="ping", payload="") == "pong"

        error = RuntimeError("engine is closed")
        me.set_metadata.side_effect = error
        with pytest.raises(RuntimeError) as exc:
            await facade.set_metadata("{}")
        assert exc.value is error

    def test_permissions_translated(self):
        bob = FakeRemoteParticipant("bob")
        bob.permissions_value = permission(
            can_publish_data=False,
            can_publish_sources=[rtc.TrackSource.SOURCE_MICROPHONE, rtc.TrackSource.SOURCE_SCREENSHARE],
        )
        perm = wrap_participant(bob).permissions
        assert isinstance(perm, ParticipantPermission)
        assert perm.can_publish_data is False
        assert perm.can_publish_sources == [TrackSource.MICROPHONE, TrackSource.SCREEN_SHARE]

    async def test_publish_transcription(self):
        me = FakeLocalParticipant()
        segment = TranscriptionSegment(
            id="s1", text="hello", start_time=0, end_time=500, language="en", final=True
        )
        await wrap_participant(me).publish_transcription(Transcription("me", "TR_1", [segment]))
        (sent,), _ = me.publish_transcription.await_args
        assert isinstance(sent, rtc.Transcription)
        assert sent.track_sid == "TR_1"
        assert sent.segments[0].text == "hello"

    def test_track_subscription_permissions(self):
        me = FakeLocalParticipant()
        wrap_participant(me).set_track_subscription_permissions(
            allow_all_participants=False,
            participant_permissions=[ParticipantTrackPermission("bob", allowed_track_sids=["TR_1"])],
        )
        kwargs = me.set_track_subscription_permissions.call_args.kwargs
        assert kwargs["allow_all_participants"] is False
        (sent,) = kwargs["participant_permissions"]
        assert isinstance(sent, rtc.ParticipantTrackPermission)
        assert sent.participant_identity == "bob"

    async def test_data_streams_delegate(self):
        me = FakeLocalParticipant()
        facade = wrap_participant(me)

        await facade.send_text("hi", topic="chat")
        me.send_text.assert_awaited_once_with(
            "hi", destination_identities=None, topic="chat", attributes=None, reply_to_id=None
        )
        await facade.stream_text(topic="chat", stream_id="ST_1")
        me.stream_text.assert_awaited_once_with(
            destination_identities=None, topic="chat", attributes=None, stream_id="ST_1"
        )
        await facade.send_file("/tmp/notes.txt", topic="files")
        me.send_file.assert_awaited_once_with(
            "/tmp/notes.txt", topic="files", destination_identities=None, attributes=None
        )
        await facade.stream_bytes("blob", mime_type="image/png", total_size=4)
        me.stream_bytes.assert_awaited_once_with(
            "blob",
            mime_type="image/png",
            destination_identities=None,
            topic="",
            attributes=None,
            total_size=4,
        )

    def test_remote_volume_not_mapped(self):
        with pytest.raises(FacadeNotImplementedError):
            wrap_participant(FakeRemoteParticipant()).set_volume(0.5)
