"""World grid: fixed-size 2D or 3D cell arrays indexed by (x, y) or (x, y, z)."""

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from world.catalog import Item
from world.constants import DEPTH_DENSITY_FLOOR, TOTAL_FADE_STEPS
from world.errors import OutOfBounds
from world.icons import PALETTES, Palette

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cell:
    """Read-only view of one cell. Adjacency and depth opacity are derived by the navigator."""

    coord: tuple[int, ...]
    content: Item | None
    color_tag: str | None
    background_tag: str | None
    active: bool
    is_new: bool
    created_at_tick: int
    fade_step: int
    opacity: float
    is_adjacent_to_player: bool
    depth_opacity: float

    @property
    def empty(self) -> bool:
        return self.content is None


class WorldGrid:
    """Parallel arrays, one entry per coordinate. A cell is active iff it holds content."""

    __slots__ = (
        "shape", "palette", "total_fade_steps", "_setup_open",
        "content", "color", "background", "active", "is_new",
        "created_at", "fade_step", "adjacent", "depth_opacity",
    )

    def __init__(
        self,
        shape: Sequence[int],
        palette: Palette = PALETTES["explore"],
        total_fade_steps: int = TOTAL_FADE_STEPS,
    ) -> None:
        shape = tuple(int(n) for n in shape)
        if len(shape) not in (2, 3) or any(n <= 0 for n in shape):
            raise ValueError(f"world shape must be 2 or 3 positive dimensions, got {shape}")
        if total_fade_steps <= 0:
            raise ValueError("total_fade_steps must be positive")
        self.shape = shape
        self.palette = palette
        self.total_fade_steps = int(total_fade_steps)
        self._setup_open = True
        self.content = np.full(shape, None, dtype=object)
        self.color = np.full(shape, None, dtype=object)
        self.background = np.full(shape, None, dtype=object)
        self.active = np.zeros(shape, dtype=bool)
        self.is_new = np.zeros(shape, dtype=bool)
        self.created_at = np.zeros(shape, dtype=np.int64)
        self.fade_step = np.zeros(shape, dtype=np.int32)
        self.adjacent = np.zeros(shape, dtype=bool)
        self.depth_opacity = np.ones(shape, dtype=np.float64)

    @property
    def ndim(self) -> int:
        return len(self.shape)

    @property
    def depth(self) -> int:
        return self.shape[2] if self.ndim == 3 else 1

    @property
    def setup_open(self) -> bool:
        return self._setup_open

    def close_setup(self) -> None:
        """End the customization window. Permanent."""
        self._setup_open = False

    def in_bounds(self, coord: Sequence[int]) -> bool:
        return len(coord) == self.ndim and all(0 <= c < n for c, n in zip(coord, self.shape))

    def _check(self, coord: Sequence[int]) -> tuple[int, ...]:
        key = tuple(int(c) for c in coord)
        if not self.in_bounds(key):
            raise OutOfBounds(key, self.shape)
        return key

    def opacity(self) -> np.ndarray:
        """Fade opacity per cell: 1 - fade_step/total while active, 0 when empty."""
        op = 1.0 - self.fade_step / float(self.total_fade_steps)
        return np.where(self.active, np.clip(op, 0.0, 1.0), 0.0)

    def get_at(self, coord: Sequence[int]) -> Cell:
        key = self._check(coord)
        active = bool(self.active[key])
        fade = int(self.fade_step[key])
        return Cell(
            coord=key,
            content=self.content[key],
            color_tag=self.color[key],
            background_tag=self.background[key],
            active=active,
            is_new=bool(self.is_new[key]),
            created_at_tick=int(self.created_at[key]),
            fade_step=fade,
            opacity=max(0.0, 1.0 - fade / self.total_fade_steps) if active else 0.0,
            is_adjacent_to_player=bool(self.adjacent[key]),
            depth_opacity=float(self.depth_opacity[key]),
        )

    def set_at(
        self,
        coord: Sequence[int],
        content: Item | None,
        color_tag: str | None = None,
        background_tag: str | None = None,
    ) -> bool:
        """Upsert a cell during setup. Returns False (no-op) once setup has closed."""
        if not self._setup_open:
            logger.debug("set_at %s ignored: setup window closed", tuple(coord))
            return False
        key = self._check(coord)
        self.content[key] = content
        if content is None:
            # Tags belong to occupancy; an emptied cell carries none.
            color_tag = background_tag = None
        elif background_tag is None:
            background_tag = self.palette.background_colors[0]
        self.color[key] = color_tag
        self.background[key] = background_tag
        self.active[key] = content is not None
        self.is_new[key] = False
        self.created_at[key] = 0
        self.fade_step[key] = 0
        return True

    def clear(self) -> None:
        self.content.fill(None)
        self.color.fill(None)
        self.background.fill(None)
        self.active.fill(False)
        self.is_new.fill(False)
        self.created_at.fill(0)
        self.fade_step.fill(0)

    def active_count(self) -> int:
        return int(np.count_nonzero(self.active))

    def occupancy_probability(self, density: float) -> np.ndarray:
        """Per-cell Bernoulli parameter. Deeper layers are sparser: density * max(0.1, (depth - z)/depth)."""
        if self.ndim == 2:
            return np.full(self.shape, density, dtype=np.float64)
        nz = self.shape[2]
        z = np.arange(nz, dtype=np.float64)
        per_layer = density * np.maximum(DEPTH_DENSITY_FLOOR, (nz - z) / nz)
        return np.broadcast_to(per_layer, self.shape).copy()

    def initialize(self, density: float, rng: np.random.Generator, pool: Sequence[Item]) -> int:
        """
        Clear the grid, then occupy each coordinate independently with probability `density`
        (depth-scaled in 3D). Occupied cells get a uniform item from `pool` and a random color
        and background tag. Draws are taken row by row, layer by layer. Returns cells occupied.
        """
        if not 0.0 <= density <= 1.0:
            raise ValueError(f"density must be in [0, 1], got {density}")
        if not pool:
            raise ValueError("initialize needs a non-empty item pool")
        self.clear()
        # Transposed draws: z slowest, then y, x fastest.
        u = rng.random(self.shape[::-1]).T
        mask = u < self.occupancy_probability(density)
        coords = np.argwhere(mask.T)[:, ::-1]
        n = len(coords)
        if n == 0:
            return 0
        pool_arr = np.empty(len(pool), dtype=object)
        pool_arr[:] = list(pool)
        colors = np.array(self.palette.icon_colors, dtype=object)
        backgrounds = np.array(self.palette.background_colors, dtype=object)
        idx = tuple(coords.T)
        self.content[idx] = pool_arr[rng.integers(len(pool_arr), size=n)]
        self.color[idx] = colors[rng.integers(len(colors), size=n)]
        self.background[idx] = backgrounds[rng.integers(len(backgrounds), size=n)]
        self.active[idx] = True
        return n
