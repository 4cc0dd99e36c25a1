#!/usr/bin/env python3
import argparse
import asyncio
import logging
import math
import os
import sys

from livekit import rtc

from livekit_facade import (
    ConnectionConfig,
    LocalAudioTrack,
    RoomEvent,
    TrackPublishOptions,
    TrackSource,
    VideoRoom,
    create_access_token,
)

logger = logging.getLogger("livekit-publisher")

loggers = {
    "facade": logging.getLogger("livekit-facade"),
    "bridge": logging.getLogger("livekit-facade-bridge"),
    "api": logging.getLogger("livekit-facade-api"),
    "rtc": logging.getLogger("livekit"),
    "app": logging.getLogger("livekit-publisher"),
}

SAMPLE_RATE = 48000
NUM_CHANNELS = 1
FRAME_MS = 10


async def play_tone(source: rtc.AudioSource, frequency: float) -> None:
    samples_per_channel = SAMPLE_RATE * FRAME_MS // 1000
    frame = rtc.AudioFrame.create(SAMPLE_RATE, NUM_CHANNELS, samples_per_channel)
    data = frame.data
    step = 2 * math.pi * frequency / SAMPLE_RATE
    phase = 0.0
    while True:
        for i in range(samples_per_channel):
            data[i] = int(math.sin(phase) * 0.3 * 32767)
            phase = (phase + step) % (2 * math.pi)
        await source.capture_frame(frame)


async def run(room: VideoRoom, url: str, token: str, frequency: float) -> None:
    done = asyncio.Event()

    @room.on(RoomEvent.LOCAL_TRACK_PUBLISHED.value)  # type: ignore
    def on_published(publication, track) -> None:
        logger.info(f"Published {track.kind} track {publication.sid}")

    @room.on(RoomEvent.TRACK_SUBSCRIBED.value)  # type: ignore
    def on_track_subscribed(track, publication, participant) -> None:
        logger.info(f"{participant.identity} publishes {publication.name}")

    @room.on(RoomEvent.DISCONNECTED.value)  # type: ignore
    def on_disconnected(reason) -> None:
        logger.warning(f"Disconnected: {reason}")
        done.set()

    await room.connect(url, token)
    logger.info(f"Connected to {room.name}")

    source = rtc.AudioSource(SAMPLE_RATE, NUM_CHANNELS)
    track = LocalAudioTrack.create("sine", source)
    publication = await room.local_participant.publish_track(
        track, TrackPublishOptions(source=TrackSource.MICROPHONE)
    )
    logger.debug(f"Publication {publication.sid} muted={publication.is_muted}")

    tone = asyncio.create_task(play_tone(source, frequency))
    try:
        await done.wait()
    finally:
        tone.cancel()


async def run_wrapper(url: str, token: str, frequency: float) -> None:
    room = VideoRoom()
    try:
        await run(room, url, token, frequency)
    finally:
        logger.error(f"Exiting")
        await room.disconnect()


if __name__ == "__main__":
    config = ConnectionConfig.from_env()
    room = "room1011"
    identity = f"pypub-{os.getppid()}"

    parser = argparse.ArgumentParser(description="Publish a sine tone to a room")
    parser.add_argument("--url", "-u", help="Livekit server url", default=config.url)
    parser.add_argument("--api-key", "-k", help="Livekit API key", default=config.api_key)
    parser.add_argument(
        "--api-secret", "-s", help="Livekit API secret", default=config.api_secret
    )
    parser.add_argument("--room", "-r", help="Livekit room name", default=room)
    parser.add_argument("--identity", "-i", help="Livekit identity", default=identity)
    parser.add_argument(
        "--frequency", "-f", type=float, help="Tone frequency in Hz", default=440.0
    )
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
        asyncio.run(run_wrapper(args.url, token, args.frequency))
    except KeyboardInterrupt:
        logger.debug("Exiting")
    except Exception:
        logger.exception(f"ERROR:")
    finally:
        logger.debug("Exiting")
