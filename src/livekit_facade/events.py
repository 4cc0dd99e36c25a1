# Facade event identifiers; listeners subscribe with the string values
import enum


class RoomEvent(str, enum.Enum):
    CONNECTED = "CONNECTED"
    DISCONNECTED = "DISCONNECTED"
    RECONNECTING = "RECONNECTING"
    RECONNECTED = "RECONNECTED"
    CONNECTION_STATE_CHANGED = "CONNECTION_STATE_CHANGED"
    PARTICIPANT_CONNECTED = "PARTICIPANT_CONNECTED"
    PARTICIPANT_DISCONNECTED = "PARTICIPANT_DISCONNECTED"
    LOCAL_TRACK_PUBLISHED = "LOCAL_TRACK_PUBLISHED"
    LOCAL_TRACK_UNPUBLISHED = "LOCAL_TRACK_UNPUBLISHED"
    LOCAL_TRACK_SUBSCRIBED = "LOCAL_TRACK_SUBSCRIBED"
    TRACK_PUBLISHED = "TRACK_PUBLISHED"
    TRACK_UNPUBLISHED = "TRACK_UNPUBLISHED"
    TRACK_SUBSCRIBED = "TRACK_SUBSCRIBED"
    TRACK_UNSUBSCRIBED = "TRACK_UNSUBSCRIBED"
    TRACK_SUBSCRIPTION_FAILED = "TRACK_SUBSCRIPTION_FAILED"
    TRACK_MUTED = "TRACK_MUTED"
    TRACK_UNMUTED = "TRACK_UNMUTED"
    ACTIVE_SPEAKERS_CHANGED = "ACTIVE_SPEAKERS_CHANGED"
    ROOM_METADATA_CHANGED = "ROOM_METADATA_CHANGED"
    PARTICIPANT_METADATA_CHANGED = "PARTICIPANT_METADATA_CHANGED"
    PARTICIPANT_NAME_CHANGED = "PARTICIPANT_NAME_CHANGED"
    PARTICIPANT_ATTRIBUTES_CHANGED = "PARTICIPANT_ATTRIBUTES_CHANGED"
    CONNECTION_QUALITY_CHANGED = "CONNECTION_QUALITY_CHANGED"
    E2EE_STATE_CHANGED = "E2EE_STATE_CHANGED"
    PARTICIPANT_ENCRYPTION_STATUS_CHANGED = "PARTICIPANT_ENCRYPTION_STATUS_CHANGED"
    PARTICIPANT_PERMISSIONS_CHANGED = "PARTICIPANT_PERMISSIONS_CHANGED"
    PARTICIPANT_ACTIVE = "PARTICIPANT_ACTIVE"
    LOCAL_TRACK_REPUBLISHED = "LOCAL_TRACK_REPUBLISHED"
    ROOM_UPDATED = "ROOM_UPDATED"
    MOVED = "MOVED"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    DATA_RECEIVED = "DATA_RECEIVED"
    SIP_DTMF_RECEIVED = "SIP_DTMF_RECEIVED"
    TRANSCRIPTION_RECEIVED = "TRANSCRIPTION_RECEIVED"


class ParticipantEvent(str, enum.Enum):
    TRACK_PUBLISHED = "TRACK_PUBLISHED"
    TRACK_UNPUBLISHED = "TRACK_UNPUBLISHED"
    TRACK_SUBSCRIBED = "TRACK_SUBSCRIBED"
    TRACK_UNSUBSCRIBED = "TRACK_UNSUBSCRIBED"
    TRACK_SUBSCRIPTION_FAILED = "TRACK_SUBSCRIPTION_FAILED"
    TRACK_MUTED = "TRACK_MUTED"
    TRACK_UNMUTED = "TRACK_UNMUTED"
    LOCAL_TRACK_PUBLISHED = "LOCAL_TRACK_PUBLISHED"
    LOCAL_TRACK_UNPUBLISHED = "LOCAL_TRACK_UNPUBLISHED"
    LOCAL_TRACK_SUBSCRIBED = "LOCAL_TRACK_SUBSCRIBED"
    PARTICIPANT_METADATA_CHANGED = "PARTICIPANT_METADATA_CHANGED"
    PARTICIPANT_NAME_CHANGED = "PARTICIPANT_NAME_CHANGED"
    ATTRIBUTES_CHANGED = "ATTRIBUTES_CHANGED"
    CONNECTION_QUALITY_CHANGED = "CONNECTION_QUALITY_CHANGED"
    ENCRYPTION_STATE_CHANGED = "ENCRYPTION_STATE_CHANGED"
    ENCRYPTION_STATUS_CHANGED = "ENCRYPTION_STATUS_CHANGED"
    PARTICIPANT_PERMISSIONS_CHANGED = "PARTICIPANT_PERMISSIONS_CHANGED"
    PARTICIPANT_ACTIVE = "PARTICIPANT_ACTIVE"
    LOCAL_TRACK_REPUBLISHED = "LOCAL_TRACK_REPUBLISHED"
    DATA_RECEIVED = "DATA_RECEIVED"
    SIP_DTMF_RECEIVED = "SIP_DTMF_RECEIVED"
    TRANSCRIPTION_RECEIVED = "TRANSCRIPTION_RECEIVED"
    DISCONNECTED = "DISCONNECTED"


class TrackPublicationEvent(str, enum.Enum):
    MUTED = "MUTED"
    UNMUTED = "UNMUTED"
    SUBSCRIBED = "SUBSCRIBED"
    UNSUBSCRIBED = "UNSUBSCRIBED"
    SUBSCRIPTION_FAILED = "SUBSCRIPTION_FAILED"
    UNPUBLISHED = "UNPUBLISHED"


class TrackEvent(str, enum.Enum):
    MUTED = "MUTED"
    UNMUTED = "UNMUTED"
    PUBLISHED = "PUBLISHED"
    UNPUBLISHED = "UNPUBLISHED"
    SUBSCRIBED = "SUBSCRIBED"
    UNSUBSCRIBED = "UNSUBSCRIBED"
