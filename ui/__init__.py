"""UI: pygame rendering of simulation frames."""

from ui.grid_view import draw_frame, glyph_label, paint_order
from ui.colors import tag_to_rgb, blend

__all__ = ["draw_frame", "glyph_label", "paint_order", "tag_to_rgb", "blend"]
