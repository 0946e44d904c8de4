"""Grid view: draws the visible-cell projection of a frame. Cells are absolutely placed at
render coordinate * cell size; items are drawn as short text glyphs derived from their names."""

import math
import re

import pygame

from ui.colors import blend, tag_to_rgb
from world.store import Frame, VisibleCell

BORDER_COLOR = (80, 80, 80)
BORDER_PX = 1
ADJACENT_COLOR = (250, 204, 21)
PLAYER_COLOR = (250, 204, 21)
HUD_COLOR = (200, 200, 200)
HUD_BG = (28, 28, 32)
GLYPH_FALLBACK = (200, 200, 200)


def glyph_label(name: str) -> str:
    """Two-letter label: capitals of a CamelCase name ("ShoppingCart" -> "SC"), else the first two letters."""
    caps = re.findall(r"[A-Z]", name)
    if len(caps) >= 2:
        return caps[0] + caps[1]
    return name[:2]


def _star_points(cx: float, cy: float, r_out: float, r_in: float) -> list[tuple[float, float]]:
    pts = []
    for k in range(10):
        r = r_out if k % 2 == 0 else r_in
        t = -math.pi / 2 + k * math.pi / 5
        pts.append((cx + r * math.cos(t), cy + r * math.sin(t)))
    return pts


def _cell_rect(rect: pygame.Rect, cell: VisibleCell, cell_px: int) -> pygame.Rect:
    rx, ry = cell.render[0], cell.render[1]
    return pygame.Rect(rect.x + rx * cell_px, rect.y + ry * cell_px, cell_px, cell_px)


def _draw_cell(surface: pygame.Surface, r: pygame.Rect, cell: VisibleCell, font: pygame.font.Font) -> None:
    bg = tag_to_rgb(cell.background_tag)
    if bg is not None:
        pygame.draw.rect(surface, blend(bg, cell.opacity), r)
    fg = tag_to_rgb(cell.color_tag)
    color = blend(fg, cell.opacity) if fg is not None else GLYPH_FALLBACK
    text = font.render(glyph_label(cell.name), True, color)
    surface.blit(text, text.get_rect(center=r.center))


def paint_order(frame: Frame) -> list[VisibleCell]:
    """Occupied cells far to near: layers furthest from the current one first, the current layer last."""
    def distance(cell: VisibleCell) -> int:
        return abs(cell.world[2] - frame.current_z) if len(cell.world) == 3 else 0

    return sorted(frame.occupied(), key=distance, reverse=True)


def draw_frame(
    surface: pygame.Surface,
    rect: pygame.Rect,
    frame: Frame,
    cell_px: int,
    font: pygame.font.Font,
    *,
    show_player: bool = True,
) -> None:
    """Draw occupied cells of the frame into rect, then adjacency outlines, player star and depth readout."""
    for cell in paint_order(frame):
        _draw_cell(surface, _cell_rect(rect, cell, cell_px), cell, font)
    for cell in frame.cells:
        if cell.adjacent:
            pygame.draw.rect(surface, ADJACENT_COLOR, _cell_rect(rect, cell, cell_px), 1)
    if show_player and frame.size[0] and frame.size[1]:
        px = rect.x + (frame.player[0] - frame.offset[0]) * cell_px + cell_px / 2
        py = rect.y + (frame.player[1] - frame.offset[1]) * cell_px + cell_px / 2
        pygame.draw.polygon(surface, PLAYER_COLOR, _star_points(px, py, cell_px * 0.4, cell_px * 0.17))
    pygame.draw.rect(surface, BORDER_COLOR, rect.inflate(2, 2), BORDER_PX)
    if frame.max_z > 0:
        _draw_depth_readout(surface, rect, frame, font)


def _draw_depth_readout(surface: pygame.Surface, rect: pygame.Rect, frame: Frame, font: pygame.font.Font) -> None:
    label = font.render(f"depth {frame.current_z}/{frame.max_z}", True, HUD_COLOR)
    box = label.get_rect(topleft=(rect.x + 6, rect.y + 6)).inflate(8, 4)
    pygame.draw.rect(surface, HUD_BG, box)
    surface.blit(label, label.get_rect(center=box.center))
