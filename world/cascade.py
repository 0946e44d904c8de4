"""
Matrix-rain automaton. Each tick reads the previous tick's committed state and writes all
decisions back in one batch:

  active, age <= ramp  -> new flag clears
  active, age >  ramp  -> fade_step += 1; at total_fade_steps the cell empties
  active (surviving)   -> small chance to swap its item, keeping age and fade
  inactive             -> activates if the cell above was active and not new, or by a
                          small spontaneous chance

Age is measured in ticks times the tick period, so the rule does not depend on wall time.
"""

import logging
from typing import Callable, Mapping, Sequence

import numpy as np

from world.catalog import IconCatalog, Item
from world.constants import RAMP_MS, REROLL_CHANCE, SPAWN_CHANCE, TICK_MS
from world.grid import WorldGrid

logger = logging.getLogger(__name__)


def _row_major(shape: tuple[int, ...], rng: np.random.Generator) -> np.ndarray:
    """Uniforms drawn top row to bottom row, left to right, layer by layer; indexed [x, y(, z)]."""
    return rng.random(shape[::-1]).T


def _coords(mask: np.ndarray) -> np.ndarray:
    """Coordinates of True cells in the same row-major order."""
    return np.argwhere(mask.T)[:, ::-1]


class CascadeAnimator:
    """Tick scheduler plus cascade rule. The host calls tick() (or advance()) at its cadence."""

    def __init__(
        self,
        grid: WorldGrid,
        catalog: IconCatalog,
        rng: np.random.Generator,
        *,
        tick_ms: int = TICK_MS,
        ramp_ms: int = RAMP_MS,
        reroll_chance: float = REROLL_CHANCE,
        spawn_chance: float = SPAWN_CHANCE,
        selection: Mapping[str, int] | None = None,
        on_tick: Callable[[int], None] | None = None,
    ) -> None:
        if tick_ms <= 0:
            raise ValueError("tick_ms must be positive")
        for name, p in (("reroll_chance", reroll_chance), ("spawn_chance", spawn_chance)):
            if not 0.0 <= p <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {p}")
        self.grid = grid
        self.catalog = catalog
        self.rng = rng
        self.tick_ms = int(tick_ms)
        self.ramp_ms = int(ramp_ms)
        self.reroll_chance = float(reroll_chance)
        self.spawn_chance = float(spawn_chance)
        self.selection = selection
        self.on_tick = on_tick
        self.tick_count = 0
        self._running = False
        self._accum = 0.0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def max_ticks_per_advance(self) -> int:
        return max(4, (1000 // self.tick_ms) // 10)

    def start(self) -> None:
        """Start the clock. Closes the grid's setup window for good."""
        self.grid.close_setup()
        if not self._running:
            self._running = True
            self._accum = 0.0
            logger.info("cascade started at tick %d (period %d ms)", self.tick_count, self.tick_ms)

    def stop(self) -> None:
        """Release the clock. Safe to call repeatedly."""
        if self._running:
            self._running = False
            self._accum = 0.0
            logger.info("cascade stopped at tick %d", self.tick_count)

    def advance(self, dt_ms: float) -> int:
        """Run the ticks due after dt_ms of host time; capped per call so a slow host never stalls."""
        if not self._running or dt_ms <= 0:
            return 0
        cap = self.max_ticks_per_advance
        self._accum += dt_ms / self.tick_ms
        n = min(int(self._accum), cap)
        self._accum -= n
        self._accum = min(self._accum, cap)
        for _ in range(n):
            self.tick()
        return n

    def _draw_item(self) -> Item:
        choices = self.catalog.select_weighted(self.selection)
        if len(choices) == 1:
            return choices[0]
        return choices[int(self.rng.integers(len(choices)))]

    def _draw_color(self) -> str:
        colors = self.grid.palette.icon_colors
        return colors[int(self.rng.integers(len(colors)))]

    def activate(self, coord: Sequence[int]) -> bool:
        """Activate one inactive cell as new at the current tick. Returns False if already active."""
        g = self.grid
        key = g.get_at(coord).coord
        if g.active[key]:
            return False
        self._activate_at(key)
        return True

    def _activate_at(self, key: tuple[int, ...]) -> None:
        g = self.grid
        g.content[key] = self._draw_item()
        g.color[key] = self._draw_color()
        g.background[key] = g.palette.background_colors[0]
        g.active[key] = True
        g.is_new[key] = True
        g.created_at[key] = self.tick_count
        g.fade_step[key] = 0

    def tick(self) -> int:
        """Advance the automaton by one step. Returns the new tick count."""
        g = self.grid
        self.tick_count += 1
        now = self.tick_count

        was_active = g.active.copy()
        was_new = g.is_new.copy()
        age_ms = (now - g.created_at) * self.tick_ms

        fading = was_active & (age_ms > self.ramp_ms)
        fade = np.where(fading, g.fade_step + 1, g.fade_step)
        dead = fading & (fade >= g.total_fade_steps)
        survivors = was_active & ~dead

        # Cascade source: the cell above, as committed last tick, active and no longer new.
        stable = was_active & ~was_new
        from_above = np.zeros_like(was_active)
        from_above[:, 1:, ...] = stable[:, :-1, ...]
        spawn = _row_major(g.shape, self.rng) < self.spawn_chance
        born = ~was_active & (from_above | spawn)
        reroll = survivors & (_row_major(g.shape, self.rng) < self.reroll_chance)

        g.is_new[was_active] = False
        g.fade_step[:] = np.where(dead, 0, fade)
        g.active[dead] = False
        g.content[dead] = None
        g.color[dead] = None
        g.background[dead] = None
        g.created_at[dead] = 0

        for c in _coords(born | reroll):
            key = tuple(int(v) for v in c)
            if born[key]:
                self._activate_at(key)
            else:
                g.content[key] = self._draw_item()

        if self.on_tick is not None:
            self.on_tick(now)
        return now
