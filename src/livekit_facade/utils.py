from __future__ import annotations

from datetime import timedelta
from typing import Optional

from .upstream import lkapi


def create_access_token(
    api_key: str,
    api_secret: str,
    room_name: str,
    identity: str,
    *,
    name: Optional[str] = None,
    metadata: Optional[str] = None,
    can_publish: bool = True,
    can_subscribe: bool = True,
    ttl: Optional[timedelta] = None,
) -> str:
    grants = lkapi.VideoGrants(
        room_join=True,
        room=room_name,
        can_publish=can_publish,
        can_subscribe=can_subscribe,
    )
    token = lkapi.AccessToken(api_key, api_secret).with_identity(identity).with_grants(grants)
    if name is not None:
        token = token.with_name(name)
    if metadata is not None:
        token = token.with_metadata(metadata)
    if ttl is not None:
        token = token.with_ttl(ttl)
    r: str = token.to_jwt()
    return r
