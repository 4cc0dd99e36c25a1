from __future__ import annotations

import enum
import itertools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional


def _identity(*args: Any) -> tuple:
    return args


def translate_args(*converters: Optional[Callable[[Any], Any]]) -> Callable[..., tuple]:
    """Positional translator: the n-th converter is applied to the n-th argument.

    `None` leaves the argument as is; arguments past the last converter pass
    through untouched.
    """

    def translate(*args: Any) -> tuple:
        return tuple(
            arg if conv is None else conv(arg)
            for conv, arg in zip(itertools.chain(converters, itertools.repeat(None)), args)
        )

    return translate


@dataclass(frozen=True)
class EventRoute:
    source: str
    target: str
    translate: Callable[..., tuple] = _identity
    fan_out: Optional[Callable[..., None]] = None
    terminal: bool = False

    @property
    def target_name(self) -> str:
        return self.target.value if isinstance(self.target, enum.Enum) else self.target


class EventBridge:
    """Subscribes once to an upstream emitter and re-emits translated events.

    Each upstream emission produces exactly one facade emission, in the
    order the upstream emitted them. A terminal route detaches the bridge
    after it has been delivered.
    """

    def __init__(self, source: Any, target: Any, routes: Iterable[EventRoute]) -> None:
        self.source = source
        self.target = target
        self.routes = list(routes)
        self._handlers: list[tuple[str, Callable[..., None]]] = []
        self.logger = logging.getLogger("livekit-facade-bridge")

    @property
    def attached(self) -> bool:
        return bool(self._handlers)

    def attach(self) -> None:
        if self._handlers:
            return
        for route in self.routes:
            handler = self._make_handler(route)
            self.source.on(route.source, handler)
            self._handlers.append((route.source, handler))
        self.logger.debug(f"Attached {len(self._handlers)} handlers to {type(self.source).__name__}")

    def detach(self) -> None:
        off = getattr(self.source, "off", None) or self.source.remove_listener
        handlers, self._handlers = self._handlers, []
        for event, handler in handlers:
            off(event, handler)
        if handlers:
            self.logger.debug(f"Detached from {type(self.source).__name__}")

    def _make_handler(self, route: EventRoute) -> Callable[..., None]:
        def handler(*args: Any) -> None:
            translated = route.translate(*args)
            if route.fan_out is not None:
                route.fan_out(*translated)
            self.logger.debug(f"{route.source} -> {route.target_name}")
            self.target.emit(route.target_name, *translated)
            if route.terminal:
                self.detach()

        return handler
