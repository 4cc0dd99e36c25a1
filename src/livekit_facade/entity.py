from __future__ import annotations

import enum
import logging
from typing import Any, Generic, TypeVar

from pyee.asyncio import AsyncIOEventEmitter

U = TypeVar("U")


class FacadeEntity(AsyncIOEventEmitter, Generic[U]):
    """Facade over exactly one rtc object.

    Every property reads through to the wrapped object; nothing is cached.
    Events are delivered by the room's event bridge until the entity is
    disposed.
    """

    def __init__(self, instance: U) -> None:
        super().__init__()
        self._instance = instance
        self._disposed = False
        self.logger = logging.getLogger("livekit-facade")

    @property
    def instance(self) -> U:
        return self._instance

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if not self._disposed:
            self.logger.debug(f"Disposing {self!r}")
            self._disposed = True

    def deliver(self, event: enum.Enum | str, *args: Any) -> None:
        if self._disposed:
            return
        name = event.value if isinstance(event, enum.Enum) else event
        self.emit(name, *args)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self._instance).__name__}@{id(self._instance):#x})"
