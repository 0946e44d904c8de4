"""
One simulation instance: catalog, grid, viewport, navigator, optional cascade animator and the
store that publishes frames. Hosts talk to this object only; every mutation publishes a frame.

Modes:
  explore  density-filled world, the player pans the window and senses the 2x2 block around it
  rain     world starts empty and the cascade animator drives it
"""

import logging
from typing import Any, Callable, Iterable, Mapping, Sequence

from world.cascade import CascadeAnimator
from world.catalog import IconCatalog, Item
from world.constants import (
    CELL_PX_EXPLORE, CELL_PX_RAIN, DEFAULT_DENSITY, DEFAULT_NX, DEFAULT_NY, DEFAULT_VIEW_DEPTH,
    RAMP_MS, REROLL_CHANCE, SPAWN_CHANCE, TICK_MS, TOTAL_FADE_STEPS,
)
from world.grid import Cell, WorldGrid
from world.icons import DEFAULT_SELECTION, ICON_CATEGORIES, ICON_NAMES, PALETTES, CategoryTable, Palette
from world.navigator import PlayerNavigator
from world.seed_util import child_rngs
from world.store import Frame, SimulationStore, VisibleCell
from world.viewport import Viewport, WindowSize

logger = logging.getLogger(__name__)

MODES = ("explore", "rain")
CENTER_COLOR = "text-red-500"


class Simulation:
    def __init__(
        self,
        shape: Sequence[int] = (DEFAULT_NX, DEFAULT_NY),
        *,
        mode: str = "explore",
        density: float = DEFAULT_DENSITY,
        seed: int = -1,
        view_depth: int = DEFAULT_VIEW_DEPTH,
        cell_px: int | None = None,
        palette: Palette | None = None,
        names: Iterable[str] = ICON_NAMES,
        categories: CategoryTable = ICON_CATEGORIES,
        selection: Mapping[str, int] | None = DEFAULT_SELECTION,
        center_item: str | None = "Heart",
        tick_ms: int = TICK_MS,
        ramp_ms: int = RAMP_MS,
        total_fade_steps: int = TOTAL_FADE_STEPS,
        reroll_chance: float = REROLL_CHANCE,
        spawn_chance: float = SPAWN_CHANCE,
    ) -> None:
        if mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {mode!r}")
        self.mode = mode
        self.cell_px = cell_px or (CELL_PX_RAIN if mode == "rain" else CELL_PX_EXPLORE)
        self.selection = dict(selection) if selection else None
        self.center_item = center_item
        (catalog_rng, grid_rng, anim_rng), self.seed_used = child_rngs(seed, 3)
        self._grid_rng = grid_rng

        if palette is None:
            palette = PALETTES["rain" if mode == "rain" else "explore"]
        self.catalog = IconCatalog(names, categories, rng=catalog_rng)
        self.grid = WorldGrid(shape, palette=palette, total_fade_steps=total_fade_steps)
        if self.grid.ndim == 3:
            view_depth = min(view_depth, self.grid.depth)
        self.viewport = Viewport(self.grid.shape, view_depth=view_depth)
        self.navigator = PlayerNavigator(self.grid, self.viewport)
        self.store = SimulationStore()
        self.animator: CascadeAnimator | None = None
        if mode == "rain":
            # Rain items are single catalog-wide picks.
            self.animator = CascadeAnimator(
                self.grid, self.catalog, anim_rng,
                tick_ms=tick_ms, ramp_ms=ramp_ms,
                reroll_chance=reroll_chance, spawn_chance=spawn_chance,
                on_tick=self._on_tick,
            )
        else:
            self._populate(density)
        self.density = density
        self.navigator.refresh()
        self.publish()

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any], seed: int | None = None) -> "Simulation":
        """Build from a config dict as returned by config.load_config()."""
        world = cfg.get("world", {})
        nx, ny, nz = int(world.get("nx", DEFAULT_NX)), int(world.get("ny", DEFAULT_NY)), int(world.get("nz", 1))
        shape = (nx, ny, nz) if nz > 1 else (nx, ny)
        palette_name = cfg.get("palette")
        if palette_name is not None and palette_name not in PALETTES:
            raise ValueError(f"unknown palette {palette_name!r}; expected one of {sorted(PALETTES)}")
        anim = cfg.get("animation", {})
        return cls(
            shape,
            mode=cfg.get("mode", "explore"),
            density=float(cfg.get("density", DEFAULT_DENSITY)),
            seed=int(cfg.get("seed", -1) if seed is None else seed),
            view_depth=int(cfg.get("view_depth", DEFAULT_VIEW_DEPTH)),
            cell_px=cfg.get("cell_px"),
            palette=PALETTES[palette_name] if palette_name else None,
            selection=cfg.get("selection", DEFAULT_SELECTION),
            center_item=cfg.get("center_item", "Heart"),
            tick_ms=int(anim.get("tick_ms", TICK_MS)),
            ramp_ms=int(anim.get("ramp_ms", RAMP_MS)),
            total_fade_steps=int(anim.get("total_fade_steps", TOTAL_FADE_STEPS)),
            reroll_chance=float(anim.get("reroll_chance", REROLL_CHANCE)),
            spawn_chance=float(anim.get("spawn_chance", SPAWN_CHANCE)),
        )

    # ---------- setup phase ----------
    def _populate(self, density: float) -> None:
        pool = self.catalog.select_weighted(self.selection)
        n = self.grid.initialize(density, self._grid_rng, pool)
        logger.debug("world %s populated: %d cells at density %.3f", self.grid.shape, n, density)
        if self.center_item:
            item = self.catalog.get(self.center_item)
            if item is None:
                raise ValueError(f"center item {self.center_item!r} is not in the catalog")
            self.grid.set_at(self.viewport.player, item, CENTER_COLOR)

    def _resolve(self, content: Item | str | None) -> Item | None:
        if content is None or isinstance(content, Item):
            return content
        item = self.catalog.get(content)
        if item is None:
            raise ValueError(f"{content!r} is not in the catalog")
        return item

    def set_at(
        self,
        coord: Sequence[int],
        content: Item | str | None,
        color_tag: str | None = None,
        background_tag: str | None = None,
    ) -> bool:
        """Scene dressing before the simulation starts; ignored afterwards."""
        item = self._resolve(content)
        if color_tag is None and item is not None:
            color_tag = self.grid.palette.icon_colors[0]
        if not self.grid.set_at(coord, item, color_tag, background_tag):
            return False
        self.publish()
        return True

    def update_density(self, density: float) -> bool:
        """Refill the world at a new density (clamped to [0, 1]). Setup phase only."""
        if not self.grid.setup_open:
            logger.debug("update_density ignored: setup window closed")
            return False
        density = max(0.0, min(1.0, float(density)))
        self.density = density
        if self.mode == "explore":
            self._populate(density)
            self.navigator.refresh()
        self.publish()
        return True

    @property
    def setup_open(self) -> bool:
        return self.grid.setup_open

    def complete_setup(self) -> None:
        self.grid.close_setup()

    # ---------- running ----------
    @property
    def running(self) -> bool:
        return self.animator is not None and self.animator.running

    @property
    def tick_count(self) -> int:
        return self.animator.tick_count if self.animator is not None else 0

    def start(self) -> None:
        self.grid.close_setup()
        if self.animator is not None:
            self.animator.start()

    def stop(self) -> None:
        if self.animator is not None:
            self.animator.stop()

    def close(self) -> None:
        """Tear down: stop the clock and drop every subscriber."""
        self.stop()
        self.store.clear()

    def tick(self) -> int:
        if self.animator is None:
            return 0
        return self.animator.tick()

    def advance(self, dt_ms: float) -> int:
        if self.animator is None:
            return 0
        return self.animator.advance(dt_ms)

    def _on_tick(self, _tick: int) -> None:
        self.publish()

    # ---------- input ----------
    def resize(self, pixel_width: int, pixel_height: int, cell_px: int | None = None) -> WindowSize:
        size = self.viewport.resize(pixel_width, pixel_height, cell_px or self.cell_px)
        self.navigator.refresh()
        self.publish()
        return size

    def move(self, direction: str | Sequence[int]) -> bool:
        if not self.navigator.move(direction):
            return False
        self.publish()
        return True

    # ---------- output ----------
    def cell(self, coord: Sequence[int]) -> Cell:
        return self.grid.get_at(coord)

    def frame(self) -> Frame:
        """Project the window: one VisibleCell per visible coordinate, in row-major order."""
        g, vp = self.grid, self.viewport
        opacity = g.opacity() * g.depth_opacity
        cells = []
        for coord in vp.visible_coords():
            item = g.content[coord]
            cells.append(VisibleCell(
                render=vp.translate(coord),
                world=coord,
                name=item.name if item is not None else None,
                color_tag=g.color[coord],
                background_tag=g.background[coord],
                opacity=float(opacity[coord]),
                adjacent=bool(g.adjacent[coord]),
            ))
        return Frame(
            tick=self.tick_count,
            offset=vp.offset,
            size=vp.size,
            player=vp.player,
            cells=tuple(cells),
            current_z=self.navigator.current_z,
            max_z=self.navigator.max_z,
        )

    def publish(self) -> Frame:
        frame = self.frame()
        self.store.publish(frame)
        return frame

    def subscribe(self, fn: Callable[[Frame], None]) -> Callable[[], None]:
        return self.store.subscribe(fn)
