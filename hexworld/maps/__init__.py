"""
Maps Package - Hexagonal Terrain Generation

This package procedurally generates a hexagonal terrain map: biomes from
noise fields, spaced settlements grown into small clusters, and road
networks linking them.

MODULES:
--------
config.py
    Complete map generation configuration with all tunable parameters.
    Use MapConfig dataclass to customize generation.

coordinates.py
    Axial hex coordinates: neighbors, hex distance, world/offset conversion.

terrain.py
    Biome and settlement enums plus their definition tables.

tile.py / grid.py
    HexCell and the HexGrid that owns every cell of a run.

noise.py
    Seeded Perlin noise and the height/moisture/settlement TerrainField.

biomes.py
    Height/moisture classification and the nature clustering pass.

utils.py
    A* pathfinding, road connectivity and weighted selection helpers.

settlements.py
    Spacing-constrained settlement placement and cluster expansion.

roads.py
    Highway (A*) and organic crawler road strategies.

render.py
    Renderer-facing building-type picks and offset-indexed tile keys.

mapGen.py
    Main MapGenerator class orchestrating the complete pipeline:
    terrain -> nature clusters -> settlements -> clusters -> roads.

USAGE:
------
```python
from hexworld.maps.config import MapConfig
from hexworld.maps.mapGen import MapGenerator

config = MapConfig(
    seed=12345,
    map_radius=40,
    min_settlement_spacing=12,
    road_method="organic+highways",
)

generator = MapGenerator(config)
grid = generator.generate()

stats = generator.get_statistics()
print(f"Placed {stats['settlements']} settlements, {stats['roads']} road cells")
```

PIPELINE:
---------
1. **Terrain**: sample three decorrelated noise fields per cell, classify
   the base biome, flag settlement zones
2. **Nature clusters**: forest clumps and lakes on ground, outcrops in sand
3. **Settlement centers**: shuffled candidates, greedy minimum spacing
4. **Cluster expansion**: up to city_size buildings in the ring around a center
5. **Roads**: organic crawler and/or A* highways to the nearest settlement

A fixed seed and configuration always produce an identical grid; the
order in which each stage consumes randomness is part of that contract.
"""

from hexworld.maps.config import MapConfig
from hexworld.maps.coordinates import HexCoordinate, HEX_DIRECTIONS, hexagon_coordinates
from hexworld.maps.grid import HexGrid
from hexworld.maps.mapGen import MapGenerator
from hexworld.maps.terrain import (
    Biome, BiomeDefinition, ConfigError, SettlementDefinition,
    SettlementType, DEFAULT_BIOME_DEFS, DEFAULT_SETTLEMENT_DEFS
)
from hexworld.maps.tile import HexCell

__all__ = [
    # Configuration
    'MapConfig',
    'ConfigError',

    # Generator
    'MapGenerator',

    # Coordinates & grid
    'HexCoordinate',
    'HEX_DIRECTIONS',
    'hexagon_coordinates',
    'HexGrid',
    'HexCell',

    # Definitions
    'Biome',
    'BiomeDefinition',
    'SettlementType',
    'SettlementDefinition',
    'DEFAULT_BIOME_DEFS',
    'DEFAULT_SETTLEMENT_DEFS',
]
