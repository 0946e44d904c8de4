"""
Window onto the world grid. Offsets keep the window inside the world on every axis. On x/y the
player is the window's center cell (offset + size // 2). On z the player is the window's first
layer (offsetZ) and the window reaches view_depth layers deeper, cut short at the world floor.
"""

from itertools import product
from typing import Iterator, NamedTuple, Sequence


class WindowSize(NamedTuple):
    width: int
    height: int


def _clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


class Viewport:
    """Rectangular (2D) or volumetric (3D) window. z has a fixed window depth; x/y follow resize."""

    def __init__(self, world_shape: Sequence[int], view_depth: int = 1) -> None:
        self.world_shape = tuple(int(n) for n in world_shape)
        if len(self.world_shape) not in (2, 3):
            raise ValueError(f"world shape must be 2D or 3D, got {self.world_shape}")
        size = [0, 0]
        start = [self.world_shape[0] // 2, self.world_shape[1] // 2]
        self.view_depth = 1
        if len(self.world_shape) == 3:
            if not 1 <= view_depth <= self.world_shape[2]:
                raise ValueError(f"view_depth must be in [1, {self.world_shape[2]}], got {view_depth}")
            self.view_depth = int(view_depth)
            size.append(self.view_depth)
            start.append(0)
        self.size: tuple[int, ...] = tuple(size)
        # x/y: zero-size window, so offset == player == starting center until the first measurement.
        # z: the window starts at the surface layer.
        self.offset: tuple[int, ...] = (0,) * len(size)
        self.recenter(start)

    def __repr__(self) -> str:
        return f"Viewport(offset={self.offset}, size={self.size}, world={self.world_shape})"

    @property
    def ndim(self) -> int:
        return len(self.world_shape)

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    @property
    def ready(self) -> bool:
        """True once a display measurement produced a non-empty window."""
        return self.size[0] > 0 and self.size[1] > 0

    def _half(self, axis: int, size: int) -> int:
        return size // 2 if axis < 2 else 0

    @property
    def player(self) -> tuple[int, ...]:
        return tuple(o + self._half(i, s) for i, (o, s) in enumerate(zip(self.offset, self.size)))

    def _fit_depth(self) -> None:
        if self.ndim == 3:
            self.size = self.size[:2] + (min(self.view_depth, self.world_shape[2] - self.offset[2]),)

    def resize(self, pixel_width: int, pixel_height: int, cell_pixel_size: int) -> WindowSize:
        """Convert display pixels to a cell count per axis (clamped to the world) and recenter on the player."""
        if cell_pixel_size <= 0:
            raise ValueError(f"cell_pixel_size must be positive, got {cell_pixel_size}")
        if pixel_width < 0 or pixel_height < 0:
            raise ValueError(f"pixel size must be non-negative, got {pixel_width}x{pixel_height}")
        player = self.player
        cols = min(int(pixel_width) // int(cell_pixel_size), self.world_shape[0])
        rows = min(int(pixel_height) // int(cell_pixel_size), self.world_shape[1])
        self.size = (cols, rows) + self.size[2:]
        self.recenter(player)
        return WindowSize(cols, rows)

    def recenter(self, center: Sequence[int]) -> tuple[int, ...]:
        """x/y: offset = clamp(center - size // 2, 0, world - size). z: offset = clamp(center, 0, depth - 1)."""
        if len(center) != self.ndim:
            raise ValueError(f"center must have {self.ndim} axes, got {tuple(center)}")
        offset = [
            _clamp(int(c) - s // 2, 0, n - s)
            for c, s, n in zip(center[:2], self.size[:2], self.world_shape[:2])
        ]
        if self.ndim == 3:
            offset.append(_clamp(int(center[2]), 0, self.world_shape[2] - 1))
        self.offset = tuple(offset)
        self._fit_depth()
        return self.offset

    def translate(self, world_coord: Sequence[int]) -> tuple[int, ...] | None:
        """World coordinate -> render coordinate, or None when outside the window."""
        if len(world_coord) != self.ndim:
            return None
        rel = tuple(int(c) - o for c, o in zip(world_coord, self.offset))
        if all(0 <= r < s for r, s in zip(rel, self.size)):
            return rel
        return None

    def origin(self, render_coord: Sequence[int]) -> tuple[int, ...]:
        """Render coordinate -> world coordinate."""
        return tuple(int(r) + o for r, o in zip(render_coord, self.offset))

    def can_pan(self, delta: Sequence[int]) -> bool:
        if len(delta) != self.ndim:
            raise ValueError(f"delta must have {self.ndim} axes, got {tuple(delta)}")
        for axis, (o, d, s, n) in enumerate(zip(self.offset, delta, self.size, self.world_shape)):
            new_off = o + int(d)
            # Player stays off the outermost far ring: [0, n - 1).
            if not 0 <= new_off + self._half(axis, s) < n - 1:
                return False
            # x/y windows keep their size; the z window shrinks at the floor instead.
            if axis < 2 and not 0 <= new_off <= n - s:
                return False
        return True

    def pan(self, delta: Sequence[int]) -> bool:
        """Shift the window by delta, all or nothing. Returns False when rejected."""
        if not self.can_pan(delta):
            return False
        self.offset = tuple(o + int(d) for o, d in zip(self.offset, delta))
        self._fit_depth()
        return True

    def window_slices(self) -> tuple[slice, ...]:
        return tuple(slice(o, o + s) for o, s in zip(self.offset, self.size))

    def visible_coords(self) -> Iterator[tuple[int, ...]]:
        """World coordinates in the window, rows top to bottom, left to right, layer by layer."""
        ranges = [range(o, o + s) for o, s in zip(self.offset, self.size)]
        for rev in product(*reversed(ranges)):
            yield tuple(reversed(rev))
