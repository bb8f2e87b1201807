"""
Map generation configuration.

MapConfig gathers every tunable value of the pipeline. It is read-only during
a generation run. `validate()` reports problems without raising so a run can
still proceed (yielding a sparser map); definition tables are checked for
completeness when they are built and raise ConfigError when unusable.
"""

from dataclasses import dataclass, field, fields
from typing import Dict, List, Optional

from hexworld.config import HEX_SIZE, MAP_RADIUS, get_logger
from hexworld.maps.terrain import (
    Biome, BiomeDefinition, SettlementDefinition, SettlementType,
    biome_definition_from_dict, build_biome_table,
    build_settlement_table, settlement_definition_from_dict,
)

ROAD_METHODS = ("highways", "organic", "organic+highways")


@dataclass
class MapConfig:
    # Grid
    seed: int = 0
    map_radius: int = MAP_RADIUS
    hex_size: float = HEX_SIZE

    # Base noise
    noise_scale: float = 0.1
    noise_octaves: int = 1
    noise_persistence: float = 0.5
    noise_lacunarity: float = 2.0

    # Field offsets (distinct so the three fields are decorrelated)
    elevation_offset: float = 131.17
    moisture_offset: float = 1000.53
    settlement_offset: float = -1000.29
    settlement_noise_scale: float = 0.5

    # Nature clustering
    forest_clump_scale: float = 0.2
    forest_density: float = 0.4
    lake_threshold: float = 0.15
    outcrop_threshold: float = 0.85
    nature_offset: float = 7919.41
    volcano_enabled: bool = False

    # Settlements
    settlement_threshold: float = 0.75
    min_settlement_spacing: int = 15
    city_size: int = 4

    # Roads
    road_method: str = "highways"
    road_skip_probability: float = 0.85
    road_budget: int = 40
    astar_max_expansions: int = 50000

    # Optional definition overrides (lists of dicts or definition objects)
    biome_definitions: Optional[List] = None
    settlement_definitions: Optional[List] = None

    _biome_table: Optional[Dict[Biome, BiomeDefinition]] = field(default=None, init=False, repr=False, compare=False)
    _settlement_table: Optional[Dict[SettlementType, SettlementDefinition]] = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict) -> 'MapConfig':
        """Build a config from a plain mapping; unknown keys are logged and ignored."""
        known = {f.name for f in fields(cls) if f.init}
        unknown = sorted(k for k in data if k not in known)
        if unknown:
            get_logger(__name__).warning(f"Ignoring unknown map config keys: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    @property
    def map_diameter(self) -> int:
        return 2 * self.map_radius

    # -------------------------
    # Definition tables
    # -------------------------
    def biome_table(self) -> Dict[Biome, BiomeDefinition]:
        """Biome -> definition mapping, built once and validated for completeness."""
        if self._biome_table is None:
            defs = None
            if self.biome_definitions is not None:
                defs = [d if isinstance(d, BiomeDefinition) else biome_definition_from_dict(d)
                        for d in self.biome_definitions]
            self._biome_table = build_biome_table(defs)
        return self._biome_table

    def settlement_table(self) -> Dict[SettlementType, SettlementDefinition]:
        """SettlementType -> definition mapping, built once and validated for completeness."""
        if self._settlement_table is None:
            defs = None
            if self.settlement_definitions is not None:
                defs = [d if isinstance(d, SettlementDefinition) else settlement_definition_from_dict(d)
                        for d in self.settlement_definitions]
            self._settlement_table = build_settlement_table(defs)
        return self._settlement_table

    # -------------------------
    # Validation
    # -------------------------
    def validate(self) -> List[str]:
        """
        Return a list of configuration problems (empty when the config is sound).

        None of these stop generation: the run proceeds and simply produces a
        sparser map (or an empty grid for a negative radius).
        """
        problems = []
        if self.map_radius < 0:
            problems.append(f"map_radius must be >= 0, got {self.map_radius}")
        if self.hex_size <= 0:
            problems.append(f"hex_size must be > 0, got {self.hex_size}")
        if self.noise_scale <= 0:
            problems.append(f"noise_scale must be > 0, got {self.noise_scale}")
        if self.noise_octaves < 1:
            problems.append(f"noise_octaves must be >= 1, got {self.noise_octaves}")

        for name in ("forest_density", "lake_threshold", "outcrop_threshold",
                     "settlement_threshold", "road_skip_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                problems.append(f"{name} must be within [0, 1], got {value}")

        if not 1 <= self.city_size <= 6:
            problems.append(f"city_size must be within 1..6, got {self.city_size}")
        if self.min_settlement_spacing < 1:
            problems.append(f"min_settlement_spacing must be >= 1, got {self.min_settlement_spacing}")
        elif self.map_radius >= 0 and self.min_settlement_spacing > self.map_diameter:
            problems.append(
                f"min_settlement_spacing {self.min_settlement_spacing} exceeds map diameter "
                f"{self.map_diameter}; at most one settlement can be placed"
            )
        if self.road_budget < 0:
            problems.append(f"road_budget must be >= 0, got {self.road_budget}")
        if self.astar_max_expansions < 1:
            problems.append(f"astar_max_expansions must be >= 1, got {self.astar_max_expansions}")
        if self.road_method not in ROAD_METHODS:
            problems.append(
                f"road_method '{self.road_method}' is not one of {', '.join(ROAD_METHODS)}"
            )
        return problems
