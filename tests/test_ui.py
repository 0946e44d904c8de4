import numpy as np
import pytest

from ui.colors import blend, tag_to_rgb
from ui.grid_view import glyph_label, paint_order
from world.store import Frame, VisibleCell


def test_tags_map_to_rgb() -> None:
    assert tag_to_rgb("text-black").tolist() == [0, 0, 0]
    red = tag_to_rgb("text-red-500")
    assert red.tolist() == [239, 68, 68]
    light, dark = tag_to_rgb("text-green-200"), tag_to_rgb("bg-green-900")
    base = tag_to_rgb("text-green-500")
    assert light.sum() > base.sum() > dark.sum()


@pytest.mark.parametrize("tag", [None, "bg-transparent", "text-unknown-500", "border-red-500"])
def test_transparent_and_unknown_tags(tag) -> None:
    assert tag_to_rgb(tag) is None


def test_blend_over_black() -> None:
    rgb = np.array([200.0, 100.0, 50.0])
    assert blend(rgb, 1.0) == (200, 100, 50)
    assert blend(rgb, 0.5) == (100, 50, 25)
    assert blend(rgb, 0.0) == (0, 0, 0)
    assert blend(rgb, 3.0) == (200, 100, 50)


def test_glyph_labels() -> None:
    assert glyph_label("ShoppingCart") == "SC"
    assert glyph_label("Heart") == "He"
    assert glyph_label("X") == "X"


def _cell(x: int, z: int, name: str | None = "Star") -> VisibleCell:
    return VisibleCell((x, 0, z - 1), (x, 0, z), name, "text-red-500", None, 1.0, False)


def test_deeper_layers_are_painted_before_the_current_one() -> None:
    cells = (_cell(0, 1), _cell(1, 1), _cell(0, 2), _cell(1, 2, None), _cell(0, 3), _cell(1, 3))
    frame = Frame(tick=0, offset=(0, 0, 1), size=(2, 1, 3), player=(1, 0, 1), cells=cells, current_z=1, max_z=9)
    order = [c.world for c in paint_order(frame)]
    assert order == [(0, 0, 3), (1, 0, 3), (0, 0, 2), (0, 0, 1), (1, 0, 1)]


def test_flat_frames_keep_row_major_order() -> None:
    cells = (
        VisibleCell((0, 0), (4, 4), "Star", None, None, 1.0, False),
        VisibleCell((1, 0), (5, 4), None, None, None, 1.0, False),
        VisibleCell((0, 1), (4, 5), "Heart", None, None, 1.0, True),
    )
    frame = Frame(tick=0, offset=(4, 4), size=(2, 2), player=(5, 5), cells=cells)
    assert [c.name for c in paint_order(frame)] == ["Star", "Heart"]
