"""
Terrain tiles for flood-fill mode.

A tile is a tagged value: empty, solid, or filled with a marker. The
marker is carried alongside the tag, so a marker can never be mistaken
for terrain.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class Terrain(Enum):
    """Kinds of terrain a tile can hold."""

    EMPTY = auto()
    SOLID = auto()
    FILLED = auto()


@dataclass(frozen=True)
class Tile:
    """
    A single terrain tile.

    Attributes:
        terrain: What the tile is.
        marker: Fill marker, set only for FILLED tiles.
    """

    terrain: Terrain = Terrain.EMPTY
    marker: Optional[str] = None

    def __post_init__(self) -> None:
        """Keep marker and terrain consistent."""
        if (self.terrain == Terrain.FILLED) != (self.marker is not None):
            raise ValueError("Only filled tiles carry a marker")

    @classmethod
    def filled(cls, marker: str) -> "Tile":
        """Create a tile filled with marker."""
        return cls(Terrain.FILLED, marker)

    @property
    def is_empty(self) -> bool:
        """Check if tile is empty."""
        return self.terrain == Terrain.EMPTY

    @property
    def is_solid(self) -> bool:
        """Check if tile blocks propagation."""
        return self.terrain == Terrain.SOLID

    @property
    def is_filled(self) -> bool:
        """Check if tile holds any marker."""
        return self.terrain == Terrain.FILLED

    def is_filled_with(self, marker: str) -> bool:
        """Check if tile holds this particular marker."""
        return self.is_filled and self.marker == marker


EMPTY = Tile()
SOLID = Tile(Terrain.SOLID)
