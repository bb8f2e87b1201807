"""
Renderer-facing output of a finished grid.

The generator itself never draws. A renderer consumes:
- `assign_building_types`: a weighted pick of SettlementType per building
  cell (default 70% castle, 20% school, 10% church). It draws from the RNG
  handed in by the renderer and is outside the reproducibility contract
  of generation.
- `tile_keys`: one tile key per cell, indexed by odd-r offset coordinates.
"""

from typing import Dict, Tuple

from hexworld.maps.coordinates import HexCoordinate
from hexworld.maps.terrain import SettlementType
from hexworld.maps.utils import weighted_choice

ROAD_TILE = "road"


def assign_building_types(grid, rng, settlement_table) -> Dict[HexCoordinate, SettlementType]:
    """
    Pick a building type for every building cell, in grid scan order.

    Args:
        grid: Finished HexGrid
        rng: Renderer's random source (exposes choices())
        settlement_table: SettlementType -> SettlementDefinition mapping

    Returns:
        Mapping of building coordinate -> chosen SettlementType
    """
    types = list(settlement_table.keys())
    weights = [settlement_table[t].selectionWeight for t in types]
    chosen = {}
    for cell in grid:
        if not cell.has_building:
            continue
        cell.building = weighted_choice(rng, types, weights)
        chosen[cell.coordinate] = cell.building
    return chosen


def tile_key(cell) -> str:
    """Building type if assigned, 'road' for other road/building cells, else the biome name."""
    if cell.has_building:
        return cell.building.value if cell.building is not None else ROAD_TILE
    if cell.is_road:
        return ROAD_TILE
    return cell.biome.value


def tile_keys(grid) -> Dict[Tuple[int, int], str]:
    """Offset (col, row) -> tile key for every cell."""
    return {cell.coordinate.to_offset_coordinates(): tile_key(cell) for cell in grid}


# Single-character glyphs for ASCII previews
PREVIEW_GLYPHS = {
    "water": "~", "sand": ".", "ground": ",", "forest": "T", "jungle": "J",
    "snow": "*", "mountain": "^", "volcano": "V", "city": "C", "road": "#",
    "castle": "H", "church": "+", "school": "S", "hospital": "h",
}


def ascii_preview(grid) -> str:
    """Render the grid as text rows in offset layout (odd rows shifted right)."""
    keys = tile_keys(grid)
    if not keys:
        return ""
    cols = [c for c, _ in keys]
    rows = [r for _, r in keys]
    lines = []
    for row in range(min(rows), max(rows) + 1):
        prefix = " " if row & 1 else ""
        glyphs = [PREVIEW_GLYPHS.get(keys.get((col, row)), " ") for col in range(min(cols), max(cols) + 1)]
        lines.append(prefix + " ".join(glyphs).rstrip())
    return "\n".join(lines)
