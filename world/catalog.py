"""Content universe for the grid: items tagged with categories, weighted-by-category selection."""

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

import numpy as np

from world.errors import SelectionError
from world.icons import ICON_CATEGORIES, ICON_NAMES, CategoryTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Item:
    """Placeable content. Only the name travels; the renderer resolves it to a drawable."""

    name: str
    categories: tuple[str, ...] = ()


class IconCatalog:
    """Items plus a category table. Category members that name no item are tolerated."""

    def __init__(
        self,
        names: Iterable[str] = ICON_NAMES,
        categories: CategoryTable = ICON_CATEGORIES,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self.categories = categories
        membership: dict[str, list[str]] = {}
        for cat, members in categories.items():
            for name in members:
                membership.setdefault(name, []).append(cat)
        self._items: dict[str, Item] = {}
        for name in names:
            self._items[name] = Item(name, tuple(membership.get(name, ())))
        if not self._items:
            raise ValueError("catalog needs at least one item")
        self._order: tuple[Item, ...] = tuple(self._items.values())

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, name: object) -> bool:
        return name in self._items

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._items)

    def get(self, name: str) -> Item | None:
        return self._items.get(name)

    def categories_of(self, name: str) -> tuple[str, ...]:
        it = self._items.get(name)
        return it.categories if it else ()

    def select_one(self) -> Item:
        """Uniform pick over the whole catalog."""
        return self._order[int(self.rng.integers(len(self._order)))]

    def select_weighted(self, category_counts: Mapping[str, int] | None = None) -> list[Item]:
        """
        Draw `count` items per category, uniformly with replacement from that category's members.
        Unknown categories are logged and skipped, empty ones skipped silently. A member with no
        catalog entry is redrawn for the same slot, at most len(members) times. Falls back to a
        single catalog-wide pick when nothing was requested or nothing was produced.
        """
        if category_counts is None:
            return [self.select_one()]
        if not isinstance(category_counts, Mapping):
            raise SelectionError(f"category counts must be a mapping, got {type(category_counts).__name__}")
        for cat, count in category_counts.items():
            if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
                raise SelectionError(f"count for {cat!r} must be an integer, got {count!r}")
            if count < 0:
                raise SelectionError(f"count for {cat!r} must be non-negative, got {count}")

        out: list[Item] = []
        for cat, count in category_counts.items():
            members = self.categories.get(cat)
            if members is None:
                logger.warning("Category %r not found in category table", cat)
                continue
            if not members:
                continue
            for _ in range(int(count)):
                for _attempt in range(len(members)):
                    it = self._items.get(members[int(self.rng.integers(len(members)))])
                    if it is not None:
                        out.append(it)
                        break
        if not out:
            return [self.select_one()]
        return out
