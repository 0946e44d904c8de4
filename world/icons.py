"""Default content universe, category table and palettes. Injected into the catalog and grid
as immutable values so several simulations can run with different configuration."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

CategoryTable = Mapping[str, tuple[str, ...]]


@dataclass(frozen=True)
class Palette:
    """Opaque presentation tags handed out at occupancy time."""

    icon_colors: tuple[str, ...]
    background_colors: tuple[str, ...] = ("bg-transparent",)

    def __post_init__(self) -> None:
        if not self.icon_colors or not self.background_colors:
            raise ValueError("palette needs at least one icon color and one background color")


def category_table(raw: Mapping[str, Iterable[str]]) -> CategoryTable:
    """Freeze a {category: names} mapping."""
    return MappingProxyType({str(k): tuple(v) for k, v in raw.items()})


ICON_NAMES: tuple[str, ...] = (
    "Activity", "AlarmClock", "Archive", "ArrowDown", "ArrowUp", "Book", "Calendar",
    "Camera", "Check", "ChevronDown", "ChevronUp", "CircleCheck", "Cloud", "CloudRain",
    "Code", "Coffee", "Cog", "Crown", "Database", "Dices", "Download", "Earth", "File",
    "Folder", "Gift", "Github", "Globe", "Heart", "Home", "Image", "Key", "Laptop",
    "Lock", "Mail", "Map", "Moon", "Music", "Package", "Pencil", "Phone", "Shield",
    "ShoppingCart", "Smile", "Star", "Sun", "Truck", "Upload", "User", "Users", "Wifi",
    "X", "Zap",
)

ICON_CATEGORIES: CategoryTable = category_table({
    "consumables": ["Coffee", "Gift"],
    "weapons": ["Shield", "Zap"],
    "buildings": ["Home", "Lock"],
    "animals": [],
    "enemies": [],
    "friends": ["Smile", "User", "Users"],
    "naturalEnvironment": ["Cloud", "CloudRain", "Earth", "Globe", "Moon", "Sun"],
    "householdEnvironment": ["AlarmClock", "Coffee", "Laptop"],
    "currency": ["Crown", "Gift"],
    "travel": ["Map", "Truck"],
    "interfaceElements": [
        "ArrowDown", "ArrowUp", "Check", "ChevronDown", "ChevronUp",
        "CircleCheck", "Cog", "Download", "Upload", "X",
    ],
    "magic": ["Crown", "Star", "Zap"],
    "technology": ["Camera", "Laptop", "Phone", "Wifi"],
    "tools": ["Key", "Pencil"],
    "containers": ["Archive", "Database", "Folder", "Package", "ShoppingCart"],
    "social": ["Github", "Heart", "Mail", "Users"],
    "progression": ["Activity", "AlarmClock", "Calendar", "Crown", "Star"],
    "communication": ["Mail", "Phone"],
    "health": ["Activity", "Heart"],
    "inventory": ["Archive", "Folder", "Package", "ShoppingCart"],
    "music": ["Music"],
    "crafting": ["Pencil"],
    "weather": ["Cloud", "CloudRain", "Moon", "Sun"],
    "files": ["File", "Folder"],
    "puzzles": ["Dices", "Key", "Lock"],
    "sports": ["Dices", "Star"],
    "vehicles": ["Truck"],
    "gameElements": ["Crown", "Dices", "Star"],
    "cosmetics": ["Crown", "Pencil"],
    "directions": ["ArrowDown", "ArrowUp", "ChevronDown", "ChevronUp", "Map"],
    "security": ["Key", "Lock", "Shield"],
})

# Scene selection used to stock the explore world.
DEFAULT_SELECTION: dict[str, int] = {"friends": 4, "inventory": 4, "animals": 6}

PALETTES: dict[str, Palette] = {
    "explore": Palette(
        icon_colors=(
            "text-red-500", "text-blue-500", "text-green-500", "text-yellow-400",
            "text-purple-500", "text-pink-500", "text-orange-500", "text-teal-500",
            "text-indigo-500", "text-rose-500",
        ),
    ),
    "rain": Palette(
        icon_colors=("text-green-500", "text-green-400", "text-green-300", "text-green-200"),
    ),
    "tiles": Palette(
        icon_colors=(
            "text-red-400", "text-blue-400", "text-green-400", "text-yellow-300",
            "text-purple-400", "text-pink-400", "text-indigo-400", "text-teal-400",
        ),
        background_colors=(
            "bg-red-900", "bg-blue-900", "bg-green-900", "bg-yellow-900",
            "bg-purple-900", "bg-pink-900", "bg-indigo-900", "bg-teal-900",
        ),
    ),
}
