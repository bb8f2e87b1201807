from enum import Enum
from typing import Dict, Iterable, Optional


class ConfigError(ValueError):
    """Raised when a definition table cannot be used for generation."""


class Biome(Enum):
    WATER = "water"
    SAND = "sand"
    GROUND = "ground"
    FOREST = "forest"
    JUNGLE = "jungle"
    SNOW = "snow"
    MOUNTAIN = "mountain"
    VOLCANO = "volcano"
    CITY = "city"


class SettlementType(Enum):
    CASTLE = "castle"
    CHURCH = "church"
    SCHOOL = "school"
    HOSPITAL = "hospital"


# Biomes that block settlement, cluster expansion and organic road growth
OBSTACLE_BIOMES = frozenset({Biome.WATER, Biome.MOUNTAIN})

# Movement cost of stepping onto any road cell, regardless of biome
ROAD_MOVEMENT_COST = 1


class BiomeDefinition:
    def __init__(self, name, biome, movementCost, selectionWeight=1.0):
        self.name = name  # display name of the biome
        self.biome = biome  # Biome enum value this definition describes
        self.movementCost = movementCost  # A* step cost onto a non-road cell of this biome
        self.selectionWeight = selectionWeight  # weight the renderer uses between tile variants

    def __repr__(self):
        return f"BiomeDefinition({self.biome.name}, cost={self.movementCost})"


class SettlementDefinition:
    def __init__(self, name, settlementType, selectionWeight):
        self.name = name  # display name of the building
        self.settlementType = settlementType  # SettlementType enum value
        self.selectionWeight = selectionWeight  # share of building cells rendered as this type

    def __repr__(self):
        return f"SettlementDefinition({self.settlementType.name}, weight={self.selectionWeight})"


# define default objects for the definition tables
DEFAULT_BIOME_DEFS = [
    BiomeDefinition("Water", Biome.WATER, 80),
    BiomeDefinition("Sand", Biome.SAND, 10),
    BiomeDefinition("Ground", Biome.GROUND, 10),
    BiomeDefinition("Forest", Biome.FOREST, 10),
    BiomeDefinition("Jungle", Biome.JUNGLE, 10),
    BiomeDefinition("Snow", Biome.SNOW, 10),
    BiomeDefinition("Mountain", Biome.MOUNTAIN, 500),
    BiomeDefinition("Volcano", Biome.VOLCANO, 500),
    BiomeDefinition("City", Biome.CITY, 10),
]

DEFAULT_SETTLEMENT_DEFS = [
    SettlementDefinition("Castle", SettlementType.CASTLE, 0.7),
    SettlementDefinition("Church", SettlementType.CHURCH, 0.1),
    SettlementDefinition("School", SettlementType.SCHOOL, 0.2),
    SettlementDefinition("Hospital", SettlementType.HOSPITAL, 0.0),
]


def _parse_enum(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"Invalid {enum_cls.__name__} '{value}'. Valid values: {valid}") from None


def biome_definition_from_dict(data: Dict) -> BiomeDefinition:
    """Build a BiomeDefinition from a plain mapping (config file shape)."""
    try:
        return BiomeDefinition(
            name=data.get("name", str(data["biome"]).title()),
            biome=_parse_enum(Biome, data["biome"]),
            movementCost=int(data["movement_cost"]),
            selectionWeight=float(data.get("selection_weight", 1.0)),
        )
    except KeyError as e:
        raise ConfigError(f"Biome definition missing field {e}") from None


def settlement_definition_from_dict(data: Dict) -> SettlementDefinition:
    """Build a SettlementDefinition from a plain mapping (config file shape)."""
    try:
        return SettlementDefinition(
            name=data.get("name", str(data["type"]).title()),
            settlementType=_parse_enum(SettlementType, data["type"]),
            selectionWeight=float(data["selection_weight"]),
        )
    except KeyError as e:
        raise ConfigError(f"Settlement definition missing field {e}") from None


def build_biome_table(definitions: Optional[Iterable[BiomeDefinition]] = None) -> Dict[Biome, BiomeDefinition]:
    """
    Build the Biome -> BiomeDefinition mapping and check it is complete.

    Raises:
        ConfigError: on duplicate entries, a missing biome, or a movement
            cost below the road cost (which would break the A* heuristic)
    """
    table: Dict[Biome, BiomeDefinition] = {}
    for definition in (definitions if definitions is not None else DEFAULT_BIOME_DEFS):
        if definition.biome in table:
            raise ConfigError(f"Duplicate biome definition for {definition.biome.name}")
        if definition.movementCost < ROAD_MOVEMENT_COST:
            raise ConfigError(
                f"Movement cost for {definition.biome.name} must be >= {ROAD_MOVEMENT_COST}, "
                f"got {definition.movementCost}"
            )
        table[definition.biome] = definition
    missing = [b.name for b in Biome if b not in table]
    if missing:
        raise ConfigError(f"Biome definitions missing for: {', '.join(missing)}")
    return table


def build_settlement_table(definitions: Optional[Iterable[SettlementDefinition]] = None) -> Dict[SettlementType, SettlementDefinition]:
    """
    Build the SettlementType -> SettlementDefinition mapping and check it is complete.

    Raises:
        ConfigError: on duplicates, missing types, negative weights, or
            when no type has a positive weight
    """
    table: Dict[SettlementType, SettlementDefinition] = {}
    for definition in (definitions if definitions is not None else DEFAULT_SETTLEMENT_DEFS):
        if definition.settlementType in table:
            raise ConfigError(f"Duplicate settlement definition for {definition.settlementType.name}")
        if definition.selectionWeight < 0:
            raise ConfigError(f"Selection weight for {definition.settlementType.name} cannot be negative")
        table[definition.settlementType] = definition
    missing = [t.name for t in SettlementType if t not in table]
    if missing:
        raise ConfigError(f"Settlement definitions missing for: {', '.join(missing)}")
    if sum(d.selectionWeight for d in table.values()) <= 0:
        raise ConfigError("At least one settlement type needs a positive selection weight")
    return table

