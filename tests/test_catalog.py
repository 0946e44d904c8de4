import logging

import numpy as np
import pytest

from world.catalog import IconCatalog, Item
from world.errors import SelectionError
from world.icons import ICON_CATEGORIES, category_table


def _catalog(seed: int = 0, **kw) -> IconCatalog:
    return IconCatalog(rng=np.random.default_rng(seed), **kw)


def test_items_carry_their_categories() -> None:
    cat = _catalog()
    assert len(cat) == 52
    assert "Heart" in cat
    assert set(cat.categories_of("Heart")) == {"social", "health"}
    assert cat.get("Nope") is None


def test_select_one_is_a_catalog_item() -> None:
    cat = _catalog()
    for _ in range(20):
        assert cat.select_one().name in cat.names


def test_weighted_selection_skips_empty_category() -> None:
    cat = _catalog()
    picks = cat.select_weighted({"friends": 4, "inventory": 4, "animals": 6})
    allowed = set(ICON_CATEGORIES["friends"]) | set(ICON_CATEGORIES["inventory"])
    assert len(picks) == 8
    assert all(isinstance(p, Item) and p.name in allowed for p in picks)


def test_unknown_category_warns_and_contributes_nothing(caplog: pytest.LogCaptureFixture) -> None:
    cat = _catalog()
    with caplog.at_level(logging.WARNING, logger="world.catalog"):
        picks = cat.select_weighted({"dragons": 3, "friends": 2})
    assert len(picks) == 2
    assert all(p.name in ICON_CATEGORIES["friends"] for p in picks)
    assert "dragons" in caplog.text


def test_empty_or_absent_selection_falls_back_to_one_item() -> None:
    cat = _catalog()
    assert len(cat.select_weighted(None)) == 1
    assert len(cat.select_weighted({})) == 1
    assert len(cat.select_weighted({"animals": 5, "enemies": 2})) == 1


def test_missing_members_are_redrawn_not_left_as_holes() -> None:
    cat = _catalog(categories=category_table({"ghosts": ["Nope", "Heart"]}))
    picks = cat.select_weighted({"ghosts": 20})
    assert 0 < len(picks) <= 20
    assert {p.name for p in picks} == {"Heart"}


def test_category_of_only_missing_members_falls_back() -> None:
    cat = _catalog(categories=category_table({"void": ["A", "B"]}))
    picks = cat.select_weighted({"void": 3})
    assert len(picks) == 1
    assert picks[0].name in cat.names


@pytest.mark.parametrize("bad", [["friends"], {"friends": -1}, {"friends": "3"}, {"friends": True}])
def test_malformed_selection_raises(bad) -> None:
    with pytest.raises(SelectionError):
        _catalog().select_weighted(bad)


def test_same_seed_same_draws() -> None:
    sel = {"friends": 3, "magic": 3}
    a = [p.name for p in _catalog(seed=42).select_weighted(sel)]
    b = [p.name for p in _catalog(seed=42).select_weighted(sel)]
    assert a == b


def test_empty_catalog_is_rejected() -> None:
    with pytest.raises(ValueError):
        IconCatalog(names=[])
