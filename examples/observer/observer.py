#!/usr/bin/env python3
import argparse
import asyncio
import logging
import os
import sys
from typing import Any

from livekit_facade import (
    ConnectionConfig,
    ParticipantEvent,
    RoomEvent,
    RoomOptions,
    TrackEvent,
    VideoRoom,
    create_access_token,
)
from livekit_facade.participant import Participant
from livekit_facade.track import Track
from livekit_facade.track_publication import TrackPublication

logger = logging.getLogger("livekit-observer")

loggers = {
    "facade": logging.getLogger("livekit-facade"),
    "bridge": logging.getLogger("livekit-facade-bridge"),
    "api": logging.getLogger("livekit-facade-api"),
    "rtc": logging.getLogger("livekit"),
    "app": logging.getLogger("livekit-observer"),
}


def watch_participant(participant: Participant) -> None:
    @participant.on(ParticipantEvent.TRACK_MUTED.value)  # type: ignore
    def on_track_muted(publication: TrackPublication) -> None:
        logger.info(f"{participant.identity} muted {publication.name}")

    @participant.on(ParticipantEvent.TRACK_UNMUTED.value)  # type: ignore
    def on_track_unmuted(publication: TrackPublication) -> None:
        logger.info(f"{participant.identity} unmuted {publication.name}")

    @participant.on(ParticipantEvent.CONNECTION_QUALITY_CHANGED.value)  # type: ignore
    def on_quality(quality: Any) -> None:
        logger.debug(f"{participant.identity} connection quality is {quality}")

    @participant.on(ParticipantEvent.PARTICIPANT_PERMISSIONS_CHANGED.value)  # type: ignore
    def on_permissions(permissions: Any) -> None:
        logger.info(f"{participant.identity} permissions changed: can_publish={permissions.can_publish}")

    @participant.on(ParticipantEvent.DISCONNECTED.value)  # type: ignore
    def on_disconnected() -> None:
        logger.info(f"{participant.identity} left")


async def run(room: VideoRoom, url: str, token: str) -> None:
    done = asyncio.Event()

    @room.on(RoomEvent.PARTICIPANT_CONNECTED.value)  # type: ignore
    def on_participant_connected(participant: Participant) -> None:
        logger.info(f"Participant joined: {participant.identity} ({participant.kind})")
        watch_participant(participant)

    @room.on(RoomEvent.TRACK_SUBSCRIBED.value)  # type: ignore
    def on_track_subscribed(track: Track, publication: TrackPublication, participant: Participant) -> None:
        logger.info(f"Subscribed to {track.kind} track {publication.name} of {participant.identity}")

        @track.on(TrackEvent.UNSUBSCRIBED.value)  # type: ignore
        def on_unsubscribed() -> None:
            logger.debug(f"Track {publication.sid} unsubscribed")

    @room.on(RoomEvent.CONNECTION_STATE_CHANGED.value)  # type: ignore
    def on_state(state: Any) -> None:
        logger.debug(f"Connection state is {state}")

    @room.on(RoomEvent.ROOM_UPDATED.value)  # type: ignore
    def on_room_updated() -> None:
        logger.debug(f"Room updated, {room.num_participants} participants")

    @room.on(RoomEvent.ACTIVE_SPEAKERS_CHANGED.value)  # type: ignore
    def on_speakers(speakers: Any) -> None:
        logger.debug(f"Speaking: {[p.identity for p in speakers]}")

    @room.on(RoomEvent.DISCONNECTED.value)  # type: ignore
    def on_disconnected(reason: Any) -> None:
        logger.warning(f"Disconnected: {reason}")
        done.set()

    await room.connect(url, token, RoomOptions(auto_subscribe=True))
    logger.info(f"Connected to {room.name}, sid {await room.get_sid()}")
    for participant in room.remote_participants.values():
        logger.info(f"Already here: {participant.identity}")
        watch_participant(participant)

    await done.wait()


async def run_wrapper(url: str, token: str) -> None:
    room = VideoRoom()
    try:
        await run(room, url, token)
    finally:
        logger.error(f"Exiting")
        await room.disconnect()


if __name__ == "__main__":
    config = ConnectionConfig.from_env()
    room = "room1011"
    identity = f"pyobs-{os.getppid()}"

    parser = argparse.ArgumentParser(description="Log what happens in a room")
    parser.add_argument("--url", "-u", help="Livekit server url", default=config.url)
    parser.add_argument("--api-key", "-k", help="Livekit API key", default=config.api_key)
    parser.add_argument(
        "--api-secret", "-s", help="Livekit API secret", default=config.api_secret
    )
    parser.add_argument("--room", "-r", help="Livekit room name", default=room)
    parser.add_argument("--identity", "-i", help="Livekit identity", default=identity)
    parser.add_argument("--log", "-l", action="append", help="Log DEBUG module")
    parser.add_argument(
        "--list-log-modules", "-L", action="count", help="List module names"
    )
    args = parser.parse_args()

    if args.list_log_modules:
        print("-l " + " -l ".join(loggers.keys()))
        sys.exit(0)

    ch = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    ch.setFormatter(formatter)

    logger.addHandler(ch)
    logger.setLevel(logging.INFO)

    if args.log:
        for m in args.log:
            loggers[m].addHandler(ch)
            loggers[m].setLevel(logging.DEBUG)

    token = create_access_token(args.api_key, args.api_secret, args.room, args.identity)

    try:
        asyncio.run(run_wrapper(args.url, token))
    except KeyboardInterrupt:
        logger.debug("Exiting")
    except Exception:
        logger.exception(f"ERROR:")
    finally:
        logger.debug("Exiting")
