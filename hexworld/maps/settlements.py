"""
Settlement placement: candidate selection, minimum-spacing rejection and
one-ring cluster expansion.

Placement is a greedy packing over a shuffled candidate list: a candidate is
accepted when it is at least `min_settlement_spacing` hexes from every center
accepted before it. This is not a globally optimal packing; it is fast and
deterministic for a fixed shuffle.

Randomness is consumed in this order:
  1. one Fisher-Yates shuffle of the candidate list (grid scan order)
  2. one shuffle of the six directions per center, in center order
"""

from typing import List

from hexworld.config import get_logger
from hexworld.maps.coordinates import HexCoordinate


class SettlementPlacer:
    """
    Places settlement centers on a HexGrid and grows them into clusters.

    Args:
        config: MapConfig (min_settlement_spacing, city_size)
        rng: Random source exposing shuffle()
    """

    def __init__(self, config, rng):
        self.config = config
        self.rng = rng
        self.logger = get_logger(__name__)

    def find_candidates(self, grid) -> List[HexCoordinate]:
        """Settlement-zone cells that are not water or mountain, in grid scan order."""
        return [
            cell.coordinate for cell in grid
            if cell.is_settlement_zone and not cell.is_obstacle()
        ]

    def place_centers(self, grid) -> List[HexCoordinate]:
        """
        Pick settlement centers and mark them on the grid.

        Each accepted center becomes a building + road cell on GROUND.

        Returns:
            Centers in acceptance order
        """
        candidates = self.find_candidates(grid)
        self.rng.shuffle(candidates)

        spacing = self.config.min_settlement_spacing
        centers: List[HexCoordinate] = []
        rejected = 0
        for candidate in candidates:
            if all(candidate.distance_to(c) >= spacing for c in centers):
                centers.append(candidate)
                grid.mark_building(candidate)
            else:
                rejected += 1

        self.logger.debug(
            f"Settlement centers: {len(centers)} accepted, {rejected} rejected "
            f"from {len(candidates)} candidates (spacing={spacing})"
        )
        return centers

    def expand_clusters(self, grid, centers: List[HexCoordinate]) -> int:
        """
        Add up to `city_size` buildings around each center.

        Only the six direct neighbors of a center are considered, visited in a
        freshly shuffled direction order. A neighbor qualifies when it exists,
        is not water/mountain and has no building yet.

        Returns:
            Number of buildings added
        """
        city_size = self.config.city_size
        added = 0
        for center in centers:
            expanded = 0
            directions = list(range(6))
            self.rng.shuffle(directions)

            for direction in directions:
                if expanded >= city_size:
                    break
                coord = center.neighbor(direction)
                cell = grid.get(coord)
                if cell is None or cell.is_obstacle() or cell.has_building:
                    continue
                grid.mark_building(coord)
                expanded += 1
            added += expanded

        self.logger.debug(f"Cluster expansion added {added} buildings around {len(centers)} centers")
        return added

    def place(self, grid) -> List[HexCoordinate]:
        """Run center placement followed by cluster expansion."""
        centers = self.place_centers(grid)
        self.expand_clusters(grid, centers)
        return centers
