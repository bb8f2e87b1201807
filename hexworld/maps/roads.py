"""
Road network generation.

Two strategies share one interface (`build(grid, centers) -> int`):

- HighwayBuilder links every settlement center to its nearest other center
  with a cost-weighted A* path. Water and forest under a highway become
  ground.
- OrganicRoadCrawler grows roads breadth-first from each center inside the
  settlement zone. Each of the six directions of a dequeued cell draws one
  random number, whether or not the neighbor qualifies, so consumption order
  is fixed by the frontier order alone.

RoadNetworkBuilder selects between them from MapConfig.road_method
("highways", "organic" or "organic+highways"). Roads are only ever added,
so running a builder again never removes or shrinks the road set.
"""

from collections import deque
from typing import List

from hexworld.config import get_logger
from hexworld.maps.config import ROAD_METHODS
from hexworld.maps.coordinates import HexCoordinate
from hexworld.maps.terrain import Biome
from hexworld.maps.utils import astar_path, make_cost_fn, nearest_coordinate

# Biomes cleared to ground when a highway passes over them
HIGHWAY_CLEARED_BIOMES = frozenset({Biome.WATER, Biome.FOREST})


class RoadStrategy:
    """Base class for road strategies."""

    def __init__(self, config, rng=None):
        self.config = config
        self.rng = rng
        self.logger = get_logger(__name__)

    def build(self, grid, centers: List[HexCoordinate]) -> int:
        """Add roads to grid. Returns the number of cells that became road."""
        raise NotImplementedError


class HighwayBuilder(RoadStrategy):
    """Connect each settlement center to its nearest neighbor center via A*."""

    def __init__(self, config, rng=None):
        super().__init__(config, rng)
        self.cost_fn = make_cost_fn(config.biome_table())
        self.unconnected: List[HexCoordinate] = []

    def build(self, grid, centers: List[HexCoordinate]) -> int:
        self.unconnected = []
        if len(centers) < 2:
            return 0

        added = 0
        for start in centers:
            target = nearest_coordinate(start, centers)
            path = astar_path(grid, start, target, self.cost_fn,
                              max_expansions=self.config.astar_max_expansions)
            if path is None:
                self.logger.debug(f"No highway from {start} to {target}; leaving it unconnected")
                self.unconnected.append(start)
                continue
            added += self._carve_path(grid, path)

        self.logger.debug(
            f"Highways: {added} new road cells, {len(self.unconnected)} centers unconnected"
        )
        return added

    def _carve_path(self, grid, path: List[HexCoordinate]) -> int:
        """Mark each path cell as road; water and forest under it become ground."""
        added = 0
        for coord in path:
            cell = grid.get(coord)
            if cell is None:
                continue
            clear = cell.biome in HIGHWAY_CLEARED_BIOMES
            if grid.mark_road(coord, clear_to_ground=clear):
                added += 1
        return added


class OrganicRoadCrawler(RoadStrategy):
    """Probabilistic breadth-first road growth from each settlement center."""

    def build(self, grid, centers: List[HexCoordinate]) -> int:
        added = 0
        for center in centers:
            added += self._crawl(grid, center)
        self.logger.debug(f"Organic roads: {added} new road cells from {len(centers)} centers")
        return added

    def _crawl(self, grid, center: HexCoordinate) -> int:
        budget = self.config.road_budget
        skip = self.config.road_skip_probability
        frontier = deque([center])
        placed = 0

        while frontier and placed < budget:
            current = frontier.popleft()
            for direction in range(6):
                if self.rng.random() < skip:
                    continue
                coord = current.neighbor(direction)
                cell = grid.get(coord)
                if cell is None or cell.is_road:
                    continue
                if not cell.is_settlement_zone or cell.is_obstacle():
                    continue
                grid.mark_road(coord, clear_to_ground=True)
                frontier.append(coord)
                placed += 1
                if placed >= budget:
                    break

        return placed


class RoadNetworkBuilder:
    """
    Facade choosing the configured road strategy.

    Args:
        config: MapConfig (road_method and strategy parameters)
        rng: Random source used by the organic crawler
    """

    def __init__(self, config, rng):
        self.config = config
        self.rng = rng
        self.logger = get_logger(__name__)
        self.highways = HighwayBuilder(config, rng)
        self.crawler = OrganicRoadCrawler(config, rng)

    @property
    def unconnected(self) -> List[HexCoordinate]:
        return list(self.highways.unconnected)

    def build(self, grid, centers: List[HexCoordinate]) -> int:
        method = self.config.road_method
        if method not in ROAD_METHODS:
            self.logger.warning(f"Unknown road method '{method}', using 'highways'")
            method = "highways"

        added = 0
        if method in ("organic", "organic+highways"):
            added += self.crawler.build(grid, centers)
        if method in ("highways", "organic+highways"):
            added += self.highways.build(grid, centers)
        return added
