"""Player movement over the world. The player is the viewport center; moving pans the window."""

import logging
from typing import Sequence

import numpy as np

from world.constants import DEPTH_FLOOR, DEPTH_STEP, DIRECTIONS_2D, DIRECTIONS_3D
from world.grid import WorldGrid
from world.viewport import Viewport

logger = logging.getLogger(__name__)


def depth_opacity(z: np.ndarray | int, current_z: int) -> np.ndarray:
    """max(0.2, 1 - 0.2 * |z - current_z|): fixed steps per layer, floored."""
    return np.maximum(DEPTH_FLOOR, 1.0 - DEPTH_STEP * np.abs(np.asarray(z) - current_z))


class PlayerNavigator:
    """Validates moves against the viewport and keeps adjacency/depth metadata in step."""

    def __init__(self, grid: WorldGrid, viewport: Viewport) -> None:
        if grid.shape != viewport.world_shape:
            raise ValueError(f"grid {grid.shape} and viewport {viewport.world_shape} disagree")
        self.grid = grid
        self.viewport = viewport
        self.directions = DIRECTIONS_3D if grid.ndim == 3 else DIRECTIONS_2D

    @property
    def position(self) -> tuple[int, ...]:
        return self.viewport.player

    @property
    def current_z(self) -> int:
        return self.position[2] if self.grid.ndim == 3 else 0

    @property
    def max_z(self) -> int:
        return self.grid.depth - 1

    def vector(self, direction: str | Sequence[int]) -> tuple[int, ...]:
        if isinstance(direction, str):
            try:
                return self.directions[direction]
            except KeyError:
                raise ValueError(f"unknown direction {direction!r}; expected one of {sorted(self.directions)}") from None
        vec = tuple(int(d) for d in direction)
        if len(vec) != self.grid.ndim:
            raise ValueError(f"direction must have {self.grid.ndim} axes, got {vec}")
        return vec

    def move(self, direction: str | Sequence[int]) -> bool:
        """Pan one step. False (and nothing changed) when the player would leave the allowed area."""
        vec = self.vector(direction)
        if not self.viewport.pan(vec):
            logger.debug("move %s rejected at %s", direction, self.position)
            return False
        self.refresh()
        return True

    def adjacent_cells(self) -> list[tuple[int, ...]]:
        """Vertex adjacency: the 2x2 block whose shared corner is the player's position."""
        p = self.position
        rest = p[2:]
        return [
            (p[0] + dx, p[1] + dy) + rest
            for dy in (0, 1)
            for dx in (0, 1)
            if self.grid.in_bounds((p[0] + dx, p[1] + dy) + rest)
        ]

    def refresh(self) -> None:
        """Recompute adjacency flags and, for 3D worlds, depth opacity of every cell."""
        g = self.grid
        g.adjacent.fill(False)
        for c in self.adjacent_cells():
            g.adjacent[c] = True
        if g.ndim == 3:
            g.depth_opacity[:] = depth_opacity(np.arange(g.depth), self.current_z)
