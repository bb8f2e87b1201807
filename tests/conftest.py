import pytest

from hexworld.maps.coordinates import HexCoordinate, hexagon_coordinates
from hexworld.maps.grid import HexGrid
from hexworld.maps.noise import FieldSample
from hexworld.maps.terrain import Biome
from hexworld.maps.tile import HexCell


def make_grid(radius, biome=Biome.GROUND, zone=False, biomes=None, coords=None):
    """
    Build a synthetic grid.

    Args:
        radius: Hexagon radius (ignored when coords is given)
        biome: Default biome for every cell
        zone: Default settlement-zone flag
        biomes: Optional {coord: biome} overrides
        coords: Optional explicit coordinate list
    """
    biomes = biomes or {}
    grid = HexGrid(radius)
    for coord in (coords if coords is not None else hexagon_coordinates(radius)):
        grid.add(HexCell(coord, 0.5, 0.5, biomes.get(coord, biome), is_settlement_zone=zone))
    return grid


class StubField:
    """
    TerrainField stand-in: flat ground everywhere, settlement propensity 1.0
    only on the given coordinates, neutral detail noise.
    """

    def __init__(self, zone_coords=(), height=0.5, moisture=0.5, detail=0.5):
        self.zone_coords = set(zone_coords)
        self.height = height
        self.moisture = moisture
        self.detail_value = detail

    def sample_all(self, coords):
        return {
            c: FieldSample(self.height, self.moisture, 1.0 if c in self.zone_coords else 0.0)
            for c in coords
        }

    def detail_all(self, coords):
        return {c: self.detail_value for c in coords}


@pytest.fixture
def origin():
    return HexCoordinate(0, 0)
