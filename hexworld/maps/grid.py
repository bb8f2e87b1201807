"""
HexGrid: the single owned mapping from HexCoordinate to HexCell.

Pipeline stages receive the grid in sequence and mutate cells only through
the update helpers here (mark_road, mark_building, set_biome) so every write
lands on the stored cell.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from hexworld.maps.coordinates import HexCoordinate
from hexworld.maps.terrain import Biome
from hexworld.maps.tile import HexCell


class HexGrid:
    """Coordinate -> cell mapping. Iteration follows insertion (scan) order."""

    def __init__(self, radius: int = 0):
        self.radius = radius
        self._cells: Dict[HexCoordinate, HexCell] = {}

    # -------------------------
    # Construction & lookup
    # -------------------------
    def add(self, cell: HexCell) -> HexCell:
        """Insert a new cell. Raises ValueError if the coordinate is already present."""
        if cell.coordinate in self._cells:
            raise ValueError(f"Duplicate cell at {cell.coordinate}")
        self._cells[cell.coordinate] = cell
        return cell

    def get(self, coord: HexCoordinate) -> Optional[HexCell]:
        """Return the cell at coord, or None when it lies outside the grid."""
        return self._cells.get(coord)

    def __contains__(self, coord) -> bool:
        return coord in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[HexCell]:
        return iter(self._cells.values())

    def coordinates(self) -> List[HexCoordinate]:
        return list(self._cells.keys())

    def neighbors(self, coord: HexCoordinate) -> Iterator[Tuple[HexCell, int]]:
        """Yield (cell, direction) for each neighbor inside the grid."""
        for direction in range(6):
            cell = self._cells.get(coord.neighbor(direction))
            if cell is not None:
                yield cell, direction

    # -------------------------
    # Updates
    # -------------------------
    def set_biome(self, coord: HexCoordinate, biome: Biome) -> bool:
        cell = self._cells.get(coord)
        if cell is None:
            return False
        cell.biome = biome
        return True

    def mark_road(self, coord: HexCoordinate, clear_to_ground: bool = False) -> bool:
        """
        Flag a cell as road.

        Args:
            coord: Target coordinate
            clear_to_ground: Also overwrite the biome with GROUND

        Returns:
            True if the cell was not a road before this call
        """
        cell = self._cells.get(coord)
        if cell is None:
            return False
        was_road = cell.is_road
        cell.set_road()
        if clear_to_ground:
            cell.biome = Biome.GROUND
        return not was_road

    def mark_building(self, coord: HexCoordinate) -> bool:
        cell = self._cells.get(coord)
        if cell is None:
            return False
        cell.set_building()
        return True

    # -------------------------
    # Summaries
    # -------------------------
    def road_coordinates(self) -> List[HexCoordinate]:
        return [c for c, cell in self._cells.items() if cell.is_road]

    def building_coordinates(self) -> List[HexCoordinate]:
        return [c for c, cell in self._cells.items() if cell.has_building]

    def biome_counts(self) -> Dict[Biome, int]:
        counts = {biome: 0 for biome in Biome}
        for cell in self._cells.values():
            counts[cell.biome] += 1
        return counts

    def snapshot(self) -> Dict[HexCoordinate, Tuple[Biome, bool, bool]]:
        """Biome/road/building flags for every coordinate (used for determinism checks)."""
        return {c: cell.flags() for c, cell in self._cells.items()}
