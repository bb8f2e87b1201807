"""
Biome classification from height and moisture, plus the nature clustering
pass that breaks up large uniform areas.
"""

from typing import Dict, List, Tuple

from hexworld.maps.coordinates import HexCoordinate
from hexworld.maps.terrain import Biome

# Height tiers
VOLCANO_HEIGHT = 0.90
MOUNTAIN_HEIGHT = 0.85
WATER_HEIGHT = 0.35
LOWLAND_HEIGHT = 0.60

# Moisture bands
LOWLAND_SAND_MOISTURE = 0.40
LOWLAND_GROUND_MOISTURE = 0.70
HIGHLAND_FOREST_MOISTURE = 0.60


def classify(height: float, moisture: float, volcano_enabled: bool = False) -> Biome:
    """
    Map (height, moisture) to a biome. First matching rule wins:
      1. height > 0.85 -> MOUNTAIN (VOLCANO above 0.90 when enabled)
      2. height < 0.35 -> WATER
      3. lowlands (height < 0.60): SAND / GROUND / FOREST by moisture
      4. highlands: FOREST below 0.60 moisture, otherwise SNOW
    """
    if height > MOUNTAIN_HEIGHT:
        if volcano_enabled and height > VOLCANO_HEIGHT:
            return Biome.VOLCANO
        return Biome.MOUNTAIN
    if height < WATER_HEIGHT:
        return Biome.WATER

    if height < LOWLAND_HEIGHT:
        if moisture < LOWLAND_SAND_MOISTURE:
            return Biome.SAND
        if moisture < LOWLAND_GROUND_MOISTURE:
            return Biome.GROUND
        return Biome.FOREST

    return Biome.FOREST if moisture < HIGHLAND_FOREST_MOISTURE else Biome.SNOW


def nature_cluster_biome(biome: Biome, detail: float, forest_density: float,
                         lake_threshold: float = 0.15, outcrop_threshold: float = 0.85) -> Biome:
    """
    Decide the clustered biome for one cell from its base biome and detail noise.

    Ground turns into forest clumps (detail > 1 - forest_density) or small
    lakes (detail < lake_threshold); sand gets rocky outcrops above
    outcrop_threshold. Other biomes are unchanged.
    """
    if biome == Biome.GROUND:
        if detail > 1.0 - forest_density:
            return Biome.FOREST
        if detail < lake_threshold:
            return Biome.WATER
    elif biome == Biome.SAND:
        if detail > outcrop_threshold:
            return Biome.MOUNTAIN
    return biome


def apply_nature_clusters(grid, detail: Dict[HexCoordinate, float], config) -> List[Tuple[HexCoordinate, Biome, Biome]]:
    """
    Run the nature clustering pass over a fully classified grid.

    All decisions are taken against the base biomes first and written
    afterwards, so no decision sees a partially updated grid.

    Returns:
        List of (coordinate, old_biome, new_biome) for every changed cell
    """
    changes = []
    for cell in grid:
        new_biome = nature_cluster_biome(
            cell.biome,
            detail[cell.coordinate],
            config.forest_density,
            config.lake_threshold,
            config.outcrop_threshold,
        )
        if new_biome != cell.biome:
            changes.append((cell.coordinate, cell.biome, new_biome))

    for coord, _, new_biome in changes:
        grid.set_biome(coord, new_biome)
    return changes
