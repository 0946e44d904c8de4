"""World: grid, viewport, cascade automaton and player navigation for the icon grid."""

from world.catalog import IconCatalog, Item
from world.cascade import CascadeAnimator
from world.errors import GridError, OutOfBounds, SelectionError
from world.grid import Cell, WorldGrid
from world.navigator import PlayerNavigator
from world.simulation import Simulation
from world.store import Frame, SimulationStore, VisibleCell
from world.viewport import Viewport, WindowSize

__all__ = [
    "IconCatalog", "Item", "CascadeAnimator", "GridError", "OutOfBounds", "SelectionError",
    "Cell", "WorldGrid", "PlayerNavigator", "Simulation", "Frame", "SimulationStore",
    "VisibleCell", "Viewport", "WindowSize",
]
