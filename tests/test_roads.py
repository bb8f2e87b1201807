import logging
import random

from hexworld.maps.config import MapConfig
from hexworld.maps.coordinates import HexCoordinate, hexagon_coordinates
from hexworld.maps.roads import HighwayBuilder, OrganicRoadCrawler, RoadNetworkBuilder
from hexworld.maps.terrain import Biome
from hexworld.maps.utils import bfs_reachable, is_road

from conftest import make_grid

WEST, EAST = HexCoordinate(-3, 0), HexCoordinate(3, 0)


def water_band_grid():
    """Radius-3 ground grid split by a full column of water at q == 0."""
    grid = make_grid(3)
    for coord in hexagon_coordinates(3):
        if coord.q == 0:
            grid.set_biome(coord, Biome.WATER)
    for center in (WEST, EAST):
        grid.mark_building(center)
    return grid


class TestHighways:
    def test_highway_crosses_water_and_clears_it(self):
        grid = water_band_grid()
        builder = HighwayBuilder(MapConfig())

        added = builder.build(grid, [WEST, EAST])

        assert added > 0
        assert builder.unconnected == []
        assert EAST in bfs_reachable(grid, WEST, is_road)
        crossing = [c for c in grid.road_coordinates() if c.q == 0]
        assert crossing
        assert all(grid.get(c).biome == Biome.GROUND for c in crossing)

    def test_highway_clears_forest(self):
        grid = make_grid(3, biome=Biome.FOREST)
        for center in (WEST, EAST):
            grid.mark_building(center)

        HighwayBuilder(MapConfig()).build(grid, [WEST, EAST])

        for coord in grid.road_coordinates():
            assert grid.get(coord).biome == Biome.GROUND
        assert grid.biome_counts()[Biome.FOREST] == len(grid) - len(grid.road_coordinates())

    def test_highway_keeps_other_biomes(self):
        grid = make_grid(3, biome=Biome.SAND)
        for center in (WEST, EAST):
            grid.mark_building(center)

        HighwayBuilder(MapConfig()).build(grid, [WEST, EAST])

        for coord in grid.road_coordinates():
            if coord not in (WEST, EAST):
                assert grid.get(coord).biome == Biome.SAND

    def test_disconnected_centers_are_reported(self):
        island = list(hexagon_coordinates(1))
        far = [HexCoordinate(c.q + 6, c.r) for c in island]
        grid = make_grid(0, coords=island + far)
        a, b = HexCoordinate(0, 0), HexCoordinate(6, 0)
        grid.mark_building(a)
        grid.mark_building(b)

        builder = HighwayBuilder(MapConfig())
        assert builder.build(grid, [a, b]) == 0
        assert builder.unconnected == [a, b]
        assert set(grid.road_coordinates()) == {a, b}

    def test_fewer_than_two_centers(self, origin):
        grid = make_grid(2)
        grid.mark_building(origin)
        builder = HighwayBuilder(MapConfig())
        assert builder.build(grid, []) == 0
        assert builder.build(grid, [origin]) == 0
        assert grid.road_coordinates() == [origin]

    def test_budget_exhaustion_leaves_center_unconnected(self):
        grid = water_band_grid()
        builder = HighwayBuilder(MapConfig(astar_max_expansions=1))
        assert builder.build(grid, [WEST, EAST]) == 0
        assert builder.unconnected == [WEST, EAST]


class TestOrganicCrawler:
    def zone_grid(self, radius=3, **kw):
        grid = make_grid(radius, zone=True, **kw)
        grid.mark_building(HexCoordinate(0, 0))
        return grid

    def test_skip_everything_places_nothing(self, origin):
        grid = self.zone_grid()
        crawler = OrganicRoadCrawler(MapConfig(road_skip_probability=1.0), random.Random(0))
        assert crawler.build(grid, [origin]) == 0
        assert grid.road_coordinates() == [origin]

    def test_budget_caps_new_roads(self, origin):
        grid = self.zone_grid()
        config = MapConfig(road_skip_probability=0.0, road_budget=5)
        assert OrganicRoadCrawler(config, random.Random(0)).build(grid, [origin]) == 5
        assert len(grid.road_coordinates()) == 6

    def test_zero_budget(self, origin):
        grid = self.zone_grid()
        config = MapConfig(road_skip_probability=0.0, road_budget=0)
        assert OrganicRoadCrawler(config, random.Random(0)).build(grid, [origin]) == 0

    def test_large_budget_fills_zone(self, origin):
        grid = self.zone_grid(biome=Biome.FOREST)
        config = MapConfig(road_skip_probability=0.0, road_budget=1000)
        assert OrganicRoadCrawler(config, random.Random(0)).build(grid, [origin]) == len(grid) - 1
        assert all(cell.is_road and cell.biome == Biome.GROUND for cell in grid)

    def test_stays_inside_settlement_zone(self, origin):
        grid = make_grid(3)
        strip = [HexCoordinate(q, 0) for q in range(-3, 4)]
        for coord in strip:
            grid.get(coord).is_settlement_zone = True
        grid.mark_building(origin)

        config = MapConfig(road_skip_probability=0.0, road_budget=1000)
        OrganicRoadCrawler(config, random.Random(0)).build(grid, [origin])

        assert set(grid.road_coordinates()) == set(strip)

    def test_never_enters_obstacles(self, origin):
        ring = {c: Biome.WATER for c in origin.neighbors()}
        ring[HexCoordinate(1, 0)] = Biome.MOUNTAIN
        grid = self.zone_grid(biomes=ring)

        config = MapConfig(road_skip_probability=0.0, road_budget=1000)
        assert OrganicRoadCrawler(config, random.Random(0)).build(grid, [origin]) == 0

    def test_same_rng_same_roads(self, origin):
        config = MapConfig(road_skip_probability=0.5, road_budget=20)
        first, second = self.zone_grid(), self.zone_grid()
        OrganicRoadCrawler(config, random.Random(8)).build(first, [origin])
        OrganicRoadCrawler(config, random.Random(8)).build(second, [origin])
        assert first.snapshot() == second.snapshot()


class TestRoadNetworkBuilder:
    def test_roads_only_grow(self):
        grid = water_band_grid()
        for cell in grid:
            cell.is_settlement_zone = True
        builder = RoadNetworkBuilder(MapConfig(road_method="organic+highways", road_budget=6),
                                     random.Random(2))

        builder.build(grid, [WEST, EAST])
        before = set(grid.road_coordinates())
        builder.build(grid, [WEST, EAST])
        after = set(grid.road_coordinates())

        assert before <= after
        assert EAST in bfs_reachable(grid, WEST, is_road)

    def test_rerunning_highways_adds_nothing(self):
        grid = water_band_grid()
        builder = RoadNetworkBuilder(MapConfig(), random.Random(0))
        assert builder.build(grid, [WEST, EAST]) > 0
        assert builder.build(grid, [WEST, EAST]) == 0

    def test_organic_only_never_runs_highways(self):
        grid = water_band_grid()
        config = MapConfig(road_method="organic", road_skip_probability=1.0)
        assert RoadNetworkBuilder(config, random.Random(0)).build(grid, [WEST, EAST]) == 0
        assert set(grid.road_coordinates()) == {WEST, EAST}

    def test_unknown_method_falls_back_to_highways(self, caplog):
        grid = water_band_grid()
        builder = RoadNetworkBuilder(MapConfig(road_method="teleport"), random.Random(0))
        with caplog.at_level(logging.WARNING):
            added = builder.build(grid, [WEST, EAST])
        assert added > 0
        assert "teleport" in caplog.text
