"""
Axial hex coordinates for a pointy-top layout.

A coordinate is the pair (q, r); the third cube component s = -q - r is
always derived, never stored. Direction indices run clockwise from
north-east:

    0: NE (+1, -1)
    1: E  (+1,  0)
    2: SE ( 0, +1)
    3: SW (-1, +1)
    4: W  (-1,  0)
    5: NW ( 0, -1)
"""

import math
from dataclasses import dataclass
from typing import Iterator, List, Tuple


# ============================================================================
# DIRECTION DEFINITIONS
# ============================================================================

HEX_DIRECTIONS = [
    ('northeast', 1, -1), ('east', 1, 0), ('southeast', 0, 1),
    ('southwest', -1, 1), ('west', -1, 0), ('northwest', 0, -1)
]

SQRT3 = math.sqrt(3.0)


def opposite_direction(direction: int) -> int:
    """Return the direction index pointing the opposite way."""
    return (direction + 3) % 6


# ============================================================================
# COORDINATE TYPE
# ============================================================================

@dataclass(frozen=True, order=True)
class HexCoordinate:
    """Immutable axial coordinate; equality, hashing and ordering use (q, r)."""
    q: int
    r: int

    @property
    def s(self) -> int:
        return -self.q - self.r

    def neighbor(self, direction: int) -> 'HexCoordinate':
        """
        Return the adjacent coordinate in the given direction.

        Args:
            direction: Direction index; wrapped modulo 6 so negative
                values and values above 5 are accepted.

        Returns:
            Neighboring HexCoordinate
        """
        _, dq, dr = HEX_DIRECTIONS[direction % 6]
        return HexCoordinate(self.q + dq, self.r + dr)

    def neighbors(self) -> List['HexCoordinate']:
        """All six neighbors in direction order."""
        return [self.neighbor(d) for d in range(6)]

    def distance_to(self, other: 'HexCoordinate') -> int:
        """Hex distance: (|dq| + |dr| + |ds|) / 2."""
        return (abs(self.q - other.q) + abs(self.r - other.r) + abs(self.s - other.s)) // 2

    def to_world_position(self, hex_size: float) -> Tuple[float, float]:
        """Pointy-top axial -> world (x, y). Used as the noise sampling position."""
        x = hex_size * (SQRT3 * self.q + SQRT3 / 2.0 * self.r)
        y = hex_size * (3.0 / 2.0 * self.r)
        return x, y

    def to_offset_coordinates(self) -> Tuple[int, int]:
        """Odd-r offset (col, row) for renderers that index tiles by offset."""
        col = self.q + (self.r - (self.r & 1)) // 2
        return col, self.r

    def __str__(self):
        return f"({self.q}, {self.r})"


def distance(a: HexCoordinate, b: HexCoordinate) -> int:
    """Hex distance between two coordinates."""
    return a.distance_to(b)


def hexagon_coordinates(radius: int) -> Iterator[HexCoordinate]:
    """
    Yield every coordinate within `radius` rings of the origin.

    Order is q ascending, then r ascending. Generation consumes randomness
    in this scan order, so it is part of the reproducibility contract.
    """
    for q in range(-radius, radius + 1):
        r1 = max(-radius, -q - radius)
        r2 = min(radius, -q + radius)
        for r in range(r1, r2 + 1):
            yield HexCoordinate(q, r)


def hexagon_size(radius: int) -> int:
    """Number of cells in a hexagon of the given radius (0 for negative radius)."""
    if radius < 0:
        return 0
    return 3 * radius * (radius + 1) + 1
