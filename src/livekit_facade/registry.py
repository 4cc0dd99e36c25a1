from __future__ import annotations

import logging
import threading
import weakref
from typing import Any, Callable, Generic, Iterator, TypeVar

from .errors import FacadeError, NotFoundError

U = TypeVar("U")
F = TypeVar("F")


class IdentityRegistry(Generic[U, F]):
    """Weak identity cache mapping an underlying rtc object to its facade.

    Entries are keyed by object identity. The registry itself holds facades
    weakly; each facade is anchored on its underlying object so the two live
    and die together, and neither is kept alive by the registry.
    """

    def __init__(self, category: str, factory: Callable[[U], F] | None = None) -> None:
        self.category = category
        self._factory = factory
        self._entries: weakref.WeakValueDictionary[int, Any] = weakref.WeakValueDictionary()
        self._anchor = f"_livekit_facade_{category}"
        self._lock = threading.RLock()
        self.logger = logging.getLogger("livekit-facade")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, underlying: object) -> bool:
        return self.get(underlying) is not None  # type: ignore[arg-type]

    def facades(self) -> Iterator[F]:
        return iter(list(self._entries.values()))

    def get(self, underlying: U) -> F | None:
        facade = self._entries.get(id(underlying))
        # ids are reused once an object is gone
        if facade is not None and facade.instance is underlying:
            return facade  # type: ignore[no-any-return]
        return None

    def wrap(self, underlying: U) -> F:
        with self._lock:
            facade = self.get(underlying)
            if facade is not None:
                return facade
            if self._factory is None:
                raise NotFoundError(
                    f"No {self.category} facade registered for {type(underlying).__name__}"
                )
            facade = self._factory(underlying)
            self._store(underlying, facade)
            self.logger.debug(f"Wrapped {self.category} {type(underlying).__name__}")
            return facade

    def register(self, underlying: U, facade: F) -> F:
        with self._lock:
            existing = self.get(underlying)
            if existing is facade:
                return facade
            if existing is not None:
                raise FacadeError(
                    f"{type(underlying).__name__} is already wrapped by {existing!r}",
                    code="RTC_ALREADY_WRAPPED",
                )
            self._store(underlying, facade)
            return facade

    def _store(self, underlying: U, facade: F) -> None:
        setattr(underlying, self._anchor, facade)
        self._entries[id(underlying)] = facade
