"""State store: immutable frames published to subscribers after every mutation."""

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisibleCell:
    """What the renderer needs for one cell. name None means empty: skip drawing."""

    render: tuple[int, ...]
    world: tuple[int, ...]
    name: str | None
    color_tag: str | None
    background_tag: str | None
    opacity: float
    adjacent: bool


@dataclass(frozen=True)
class Frame:
    tick: int
    offset: tuple[int, ...]
    size: tuple[int, ...]
    player: tuple[int, ...]
    cells: tuple[VisibleCell, ...]
    current_z: int = 0
    max_z: int = 0

    def occupied(self) -> tuple[VisibleCell, ...]:
        return tuple(c for c in self.cells if c.name is not None)


Subscriber = Callable[[Frame], None]


class SimulationStore:
    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []
        self._latest: Frame | None = None

    @property
    def latest(self) -> Frame | None:
        return self._latest

    def subscribe(self, fn: Subscriber) -> Callable[[], None]:
        """Register fn; the returned callable unsubscribes it."""
        self._subscribers.append(fn)

        def unsubscribe() -> None:
            if fn in self._subscribers:
                self._subscribers.remove(fn)

        return unsubscribe

    def clear(self) -> None:
        self._subscribers.clear()

    def publish(self, frame: Frame) -> None:
        self._latest = frame
        for fn in list(self._subscribers):
            try:
                fn(frame)
            except Exception:
                # A failing renderer must not halt the tick loop.
                logger.exception("subscriber %r failed on tick %d", fn, frame.tick)
