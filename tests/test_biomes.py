import pytest

from hexworld.maps.biomes import apply_nature_clusters, classify, nature_cluster_biome
from hexworld.maps.config import MapConfig
from hexworld.maps.coordinates import HexCoordinate
from hexworld.maps.terrain import Biome

from conftest import make_grid


@pytest.mark.parametrize("height, moisture, expected", [
    (0.95, 0.5, Biome.MOUNTAIN),
    (0.86, 0.0, Biome.MOUNTAIN),
    (0.10, 0.9, Biome.WATER),
    (0.34, 0.5, Biome.WATER),
    (0.40, 0.20, Biome.SAND),
    (0.40, 0.50, Biome.GROUND),
    (0.40, 0.80, Biome.FOREST),
    (0.70, 0.30, Biome.FOREST),
    (0.70, 0.90, Biome.SNOW),
    (0.85, 0.90, Biome.SNOW),
    (0.35, 0.39, Biome.SAND),
    (0.60, 0.10, Biome.FOREST),
])
def test_threshold_table(height, moisture, expected):
    assert classify(height, moisture) == expected


def test_volcano_tier_only_when_enabled():
    assert classify(0.95, 0.5) == Biome.MOUNTAIN
    assert classify(0.95, 0.5, volcano_enabled=True) == Biome.VOLCANO
    assert classify(0.88, 0.5, volcano_enabled=True) == Biome.MOUNTAIN


def test_classifier_total_and_pure():
    steps = [i / 20 for i in range(21)]
    for h in steps:
        for m in steps:
            first = classify(h, m)
            assert isinstance(first, Biome)
            assert classify(h, m) == first


def test_nature_ground_to_forest_and_lake():
    assert nature_cluster_biome(Biome.GROUND, 0.7, forest_density=0.4) == Biome.FOREST
    assert nature_cluster_biome(Biome.GROUND, 0.1, forest_density=0.4) == Biome.WATER
    assert nature_cluster_biome(Biome.GROUND, 0.5, forest_density=0.4) == Biome.GROUND


def test_nature_sand_outcrops():
    assert nature_cluster_biome(Biome.SAND, 0.9, forest_density=0.4) == Biome.MOUNTAIN
    assert nature_cluster_biome(Biome.SAND, 0.1, forest_density=0.4) == Biome.SAND


@pytest.mark.parametrize("biome", [Biome.WATER, Biome.FOREST, Biome.SNOW, Biome.MOUNTAIN])
def test_nature_leaves_other_biomes(biome):
    for detail in (0.0, 0.5, 1.0):
        assert nature_cluster_biome(biome, detail, forest_density=0.4) == biome


def test_apply_nature_clusters_reports_changes():
    a, b, c = HexCoordinate(0, 0), HexCoordinate(1, 0), HexCoordinate(0, 1)
    grid = make_grid(1, biomes={b: Biome.SAND, c: Biome.WATER})
    detail = {coord: 0.5 for coord in grid.coordinates()}
    detail[a] = 0.95
    detail[b] = 0.95
    detail[c] = 0.95

    changes = apply_nature_clusters(grid, detail, MapConfig())

    assert (a, Biome.GROUND, Biome.FOREST) in changes
    assert (b, Biome.SAND, Biome.MOUNTAIN) in changes
    assert len(changes) == 2
    assert grid.get(a).biome == Biome.FOREST
    assert grid.get(c).biome == Biome.WATER
