from unittest import mock
from unittest.mock import AsyncMock, MagicMock

import pytest
from livekit import api
from livekit.protocol import models, room as room_service

from livekit_facade import ConnectionConfig, NotFoundError, RoomInfo, RoomServiceClient


@pytest.fixture
def server():
    fake = MagicMock()
    fake.aclose = AsyncMock()
    fake.room.create_room = AsyncMock(return_value=models.Room(sid="RM_1", name="room1011"))
    fake.room.list_rooms = AsyncMock(
        return_value=room_service.ListRoomsResponse(rooms=[models.Room(sid="RM_1", name="room1011")])
    )
    fake.room.update_room_metadata = AsyncMock(
        return_value=models.Room(sid="RM_1", name="room1011", metadata="{}")
    )
    fake.room.delete_room = AsyncMock(return_value=room_service.DeleteRoomResponse())
    fake.room.list_participants = AsyncMock(
        return_value=room_service.ListParticipantsResponse(
            participants=[models.ParticipantInfo(sid="PA_1", identity="alice")]
        )
    )
    with mock.patch.object(api, "LiveKitAPI", return_value=fake) as factory:
        yield factory, fake


@pytest.fixture
def config():
    return ConnectionConfig("wss://lk.example.com", "key", "a-test-secret-that-is-long-enough-for-hs256")


class TestRoomServiceClient:
    async def test_uses_http_url(self, server, config):
        factory, _ = server
        RoomServiceClient(config)
        assert factory.call_args.args == ("https://lk.example.com", "key", config.api_secret)

    async def test_create_room(self, server, config):
        _, fake = server
        client = RoomServiceClient(config)
        info = await client.create_room("room1011", max_participants=4)
        assert isinstance(info, RoomInfo)
        assert info.sid == "RM_1"
        (request,) = fake.room.create_room.await_args.args
        assert request.name == "room1011"
        assert request.max_participants == 4

    async def test_get_room(self, server, config):
        client = RoomServiceClient(config)
        assert (await client.get_room("room1011")).sid == "RM_1"
        with pytest.raises(NotFoundError):
            await client.get_room("elsewhere")

    async def test_update_delete_and_participants(self, server, config):
        _, fake = server
        async with RoomServiceClient(config) as client:
            assert (await client.update_room_metadata("room1011", "{}")).metadata == "{}"
            await client.delete_room("room1011")
            (participant,) = await client.list_participants("room1011")
        assert participant.identity == "alice"
        (request,) = fake.room.delete_room.await_args.args
        assert request.room == "room1011"
        fake.aclose.assert_awaited_once()

    async def test_server_errors_pass_through(self, server, config):
        _, fake = server
        error = RuntimeError("twirp error")
        fake.room.list_rooms.side_effect = error
        client = RoomServiceClient(config)
        with pytest.raises(RuntimeError) as exc:
            await client.list_rooms()
        assert exc.value is error

    def test_issue_token(self, server, config):
        client = RoomServiceClient(config)
        token = client.issue_token("room1011", "alice", name="Alice")
        claims = api.TokenVerifier(config.api_key, config.api_secret).verify(token)
        assert claims.identity == "alice"
        assert claims.name == "Alice"
        assert claims.video.room == "room1011"
        assert claims.video.room_join
