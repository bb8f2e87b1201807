"""
Hex map generator with noise biomes, nature clustering, spaced settlements,
settlement clusters and road networks.

This module implements MapGenerator which exposes:
    config = MapConfig(...)
    generator = MapGenerator(config)
    grid = generator.generate()
    centers = generator.settlement_centers
    stats = generator.get_statistics()
"""
import random
from typing import Dict, List

from hexworld.config import PerformanceTimer, get_map_logger, log_memory_usage
from hexworld.maps.biomes import apply_nature_clusters, classify
from hexworld.maps.config import MapConfig
from hexworld.maps.coordinates import HexCoordinate, hexagon_coordinates
from hexworld.maps.grid import HexGrid
from hexworld.maps.noise import TerrainField
from hexworld.maps.roads import RoadNetworkBuilder
from hexworld.maps.settlements import SettlementPlacer
from hexworld.maps.tile import HexCell
from hexworld.maps.utils import find_components, is_road


class MapGenerator:
    """
    Map generator class.

    - Uses MapConfig for all configurable parameters.
    - Owns one random source per run, seeded from config.seed unless an
      rng is injected; every stage draws from it in a fixed order.
    - Public method `generate()` returns the finished HexGrid.

    Args:
        config: MapConfig (defaults used when omitted)
        rng: Optional injected random source (random.Random-compatible)
        terrain_field: Optional field sampler replacing the noise TerrainField
    """
    def __init__(self, config: MapConfig = None, rng=None, terrain_field=None):
        self.config = config or MapConfig()
        self.logger = get_map_logger()
        self._injected_rng = rng
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.terrain_field = terrain_field or TerrainField(self.config)

        # Soft configuration problems are reported, never fatal
        self.config_problems = self.config.validate()
        for problem in self.config_problems:
            self.logger.warning(f"Map config: {problem}")

        # Fail fast on incomplete definition tables
        self.biome_table = self.config.biome_table()
        self.settlement_table = self.config.settlement_table()

        # Map state
        self.grid = HexGrid(self.config.map_radius)
        self.settlement_centers: List[HexCoordinate] = []
        self.unconnected_centers: List[HexCoordinate] = []
        self.stage_counts: Dict[str, int] = {}
        self.stage_seconds: Dict[str, float] = {}

        self.logger.info(f"Generator initialized with seed: {self.config.seed}")

    # -------------------------
    # Entry point
    # -------------------------
    def generate(self) -> HexGrid:
        """
        Run the full generation pipeline and return the final grid.

        Stages run strictly in sequence on one grid:
          - terrain: sample fields, classify base biomes, flag settlement zones
          - nature clustering: forest clumps, lakes, desert outcrops
          - settlement centers (spacing-constrained greedy placement)
          - cluster expansion (one ring around each center)
          - roads (configured strategy)
        """
        if self._injected_rng is None:
            self.rng = random.Random(self.config.seed)
        self.grid = HexGrid(self.config.map_radius)
        self.settlement_centers = []
        self.unconnected_centers = []
        self.stage_counts = {}
        self.stage_seconds = {}

        self.logger.info(f"Generating hex map with radius {self.config.map_radius}")

        with PerformanceTimer(self.logger, "Terrain", self.stage_seconds):
            self._generate_terrain()
        with PerformanceTimer(self.logger, "Nature clusters", self.stage_seconds):
            self._generate_nature_clusters()

        placer = SettlementPlacer(self.config, self.rng)
        with PerformanceTimer(self.logger, "Settlements", self.stage_seconds):
            self.settlement_centers = placer.place_centers(self.grid)
            self.stage_counts['cluster_buildings'] = placer.expand_clusters(self.grid, self.settlement_centers)

        with PerformanceTimer(self.logger, "Roads", self.stage_seconds):
            roads = RoadNetworkBuilder(self.config, self.rng)
            self.stage_counts['road_cells_added'] = roads.build(self.grid, self.settlement_centers)
            self.unconnected_centers = roads.unconnected

        stats = self.get_statistics()
        self.logger.info(
            f"Map complete: {stats['cells']} cells, {stats['settlements']} settlements, "
            f"{stats['buildings']} buildings, {stats['roads']} road cells, "
            f"{stats['unconnected_settlements']} unconnected "
            f"in {sum(self.stage_seconds.values()):.3f}s"
        )
        log_memory_usage(self.logger, "Memory after generation")
        return self.grid

    # -------------------------
    # Stages
    # -------------------------
    def _generate_terrain(self):
        """Create one cell per coordinate within the radius, in scan order."""
        coords = list(hexagon_coordinates(self.config.map_radius))
        samples = self.terrain_field.sample_all(coords)
        zones = 0
        for coord in coords:
            sample = samples[coord]
            is_zone = sample.settlement > self.config.settlement_threshold
            zones += is_zone
            self.grid.add(HexCell(
                coordinate=coord,
                height=sample.height,
                moisture=sample.moisture,
                biome=classify(sample.height, sample.moisture, self.config.volcano_enabled),
                is_settlement_zone=is_zone,
            ))
        self.stage_counts['settlement_zone_cells'] = zones
        self.logger.debug(f"Terrain: {len(self.grid)} cells, {zones} settlement-zone cells")

    def _generate_nature_clusters(self):
        detail = self.terrain_field.detail_all(self.grid.coordinates())
        changes = apply_nature_clusters(self.grid, detail, self.config)
        self.stage_counts['nature_changes'] = len(changes)
        self.logger.debug(f"Nature pass changed {len(changes)} cells")

    # -------------------------
    # Statistics helpers
    # -------------------------
    def get_statistics(self) -> Dict:
        """Return a dictionary of useful summary statistics about the generated map."""
        stats = {
            'seed': self.config.seed,
            'radius': self.config.map_radius,
            'cells': len(self.grid),
        }
        for biome, count in self.grid.biome_counts().items():
            stats[biome.value] = count
        stats['roads'] = sum(1 for cell in self.grid if cell.is_road)
        stats['buildings'] = sum(1 for cell in self.grid if cell.has_building)
        stats['settlement_zones'] = sum(1 for cell in self.grid if cell.is_settlement_zone)
        stats['settlements'] = len(self.settlement_centers)
        stats['unconnected_settlements'] = len(self.unconnected_centers)
        stats['road_components'] = len(find_components(self.grid, is_road))
        stats['config_problems'] = len(self.config_problems)
        stats.update(self.stage_counts)
        return stats

    def settlement_cluster(self, center: HexCoordinate) -> List[HexCoordinate]:
        """Building cells in the one-ring cluster around a center (center excluded)."""
        return [
            cell.coordinate for cell, _ in self.grid.neighbors(center)
            if cell.has_building
        ]

