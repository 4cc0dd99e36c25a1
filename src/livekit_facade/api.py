from __future__ import annotations

import logging
from datetime import timedelta
from types import TracebackType
from typing import List, Optional

import aiohttp

from .config import ConnectionConfig
from .errors import NotFoundError
from .facade_types import ParticipantInfo, RoomInfo
from .upstream import lkapi, lkroom
from .utils import create_access_token


class RoomServiceClient:
    """Room management over the server HTTP API.

    Results are returned as facade shapes; errors from the server API
    propagate unchanged.
    """

    def __init__(
        self,
        config: Optional[ConnectionConfig] = None,
        *,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.config = config or ConnectionConfig.from_env()
        self.logger = logging.getLogger("livekit-facade-api")
        self._api = lkapi.LiveKitAPI(
            self.config.http_url,
            self.config.api_key,
            self.config.api_secret,
            session=session,
        )

    async def __aenter__(self) -> "RoomServiceClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._api.aclose()

    async def create_room(
        self,
        name: str,
        *,
        empty_timeout: int = 0,
        max_participants: int = 0,
        metadata: str = "",
    ) -> RoomInfo:
        self.logger.debug(f"Creating room {name}")
        room = await self._api.room.create_room(
            lkroom.CreateRoomRequest(
                name=name,
                empty_timeout=empty_timeout,
                max_participants=max_participants,
                metadata=metadata,
            )
        )
        return RoomInfo.from_lk(room)

    async def list_rooms(self, names: Optional[List[str]] = None) -> List[RoomInfo]:
        response = await self._api.room.list_rooms(lkroom.ListRoomsRequest(names=names or []))
        return [RoomInfo.from_lk(r) for r in response.rooms]

    async def get_room(self, name: str) -> RoomInfo:
        rooms = await self.list_rooms([name])
        for room in rooms:
            if room.name == name:
                return room
        raise NotFoundError(f"Room {name} not found")

    async def update_room_metadata(self, name: str, metadata: str) -> RoomInfo:
        self.logger.debug(f"Updating metadata of room {name}")
        room = await self._api.room.update_room_metadata(
            lkroom.UpdateRoomMetadataRequest(room=name, metadata=metadata)
        )
        return RoomInfo.from_lk(room)

    async def delete_room(self, name: str) -> None:
        self.logger.debug(f"Deleting room {name}")
        await self._api.room.delete_room(lkroom.DeleteRoomRequest(room=name))

    async def list_participants(self, room: str) -> List[ParticipantInfo]:
        response = await self._api.room.list_participants(
            lkroom.ListParticipantsRequest(room=room)
        )
        return [ParticipantInfo.from_lk(p) for p in response.participants]

    def issue_token(
        self,
        room: str,
        identity: str,
        *,
        name: Optional[str] = None,
        metadata: Optional[str] = None,
        can_publish: bool = True,
        can_subscribe: bool = True,
        ttl: Optional[timedelta] = None,
    ) -> str:
        return create_access_token(
            self.config.api_key,
            self.config.api_secret,
            room,
            identity,
            name=name,
            metadata=metadata,
            can_publish=can_publish,
            can_subscribe=can_subscribe,
            ttl=ttl,
        )
