"""
Utility functions for hex map generation.

Grid traversal helpers, the cost-weighted A* used for highways, road
connectivity checks and the weighted pick used by the renderer interface.
All functions treat coordinates outside the grid as absent neighbors.
"""

import heapq
from collections import deque
from typing import Callable, Dict, List, Optional, Sequence, Set

from hexworld.config import get_logger
from hexworld.maps.coordinates import HexCoordinate
from hexworld.maps.terrain import Biome, BiomeDefinition, ROAD_MOVEMENT_COST
from hexworld.maps.tile import HexCell

logger = get_logger(__name__)

DEFAULT_MAX_EXPANSIONS = 50000


# ============================================================================
# MOVEMENT COSTS
# ============================================================================

def movement_cost(cell: HexCell, biome_table: Dict[Biome, BiomeDefinition]) -> int:
    """Cost of stepping onto cell: the road cost, otherwise the biome's movement cost."""
    if cell.is_road:
        return ROAD_MOVEMENT_COST
    return biome_table[cell.biome].movementCost


def make_cost_fn(biome_table: Dict[Biome, BiomeDefinition]) -> Callable[[HexCell], int]:
    """Bind a biome table into a single-argument cost function for astar_path."""
    def cost_fn(cell: HexCell) -> int:
        return movement_cost(cell, biome_table)
    return cost_fn


def path_cost(grid, path: Sequence[HexCoordinate], cost_fn: Callable[[HexCell], int]) -> int:
    """Total cost of a path, counting every step after the start cell."""
    return sum(cost_fn(grid.get(coord)) for coord in path[1:])


# ============================================================================
# PATHFINDING
# ============================================================================

def astar_path(
    grid,
    start: HexCoordinate,
    goal: HexCoordinate,
    cost_fn: Callable[[HexCell], int],
    max_expansions: int = DEFAULT_MAX_EXPANSIONS
) -> Optional[List[HexCoordinate]]:
    """
    A* pathfinding over the hex grid.

    The heuristic is hex distance to the goal, which never overestimates
    because every step costs at least 1. Ties on F are broken by lower H,
    then by insertion order, so results are deterministic.

    Args:
        grid: HexGrid to search
        start: Start coordinate
        goal: Goal coordinate
        cost_fn: Step cost for entering a cell (must be >= 1)
        max_expansions: Expansion budget; exceeding it yields None

    Returns:
        Start-to-goal list of coordinates, or None if no path was found
    """
    if start not in grid or goal not in grid:
        return None

    h_start = start.distance_to(goal)
    frontier = [(h_start, h_start, 0, start)]
    came_from: Dict[HexCoordinate, Optional[HexCoordinate]] = {start: None}
    cost_so_far: Dict[HexCoordinate, int] = {start: 0}
    closed: Set[HexCoordinate] = set()
    order = 0
    expansions = 0

    while frontier:
        _, _, _, current = heapq.heappop(frontier)
        if current in closed:
            continue

        if current == goal:
            # Reconstruct path
            path: List[HexCoordinate] = []
            while current is not None:
                path.append(current)
                current = came_from[current]
            path.reverse()
            return path

        if expansions >= max_expansions:
            logger.warning(f"A* expansion budget ({max_expansions}) exhausted between {start} and {goal}")
            return None
        expansions += 1
        closed.add(current)

        for cell, _ in grid.neighbors(current):
            nxt = cell.coordinate
            if nxt in closed:
                continue
            new_cost = cost_so_far[current] + cost_fn(cell)
            if nxt not in cost_so_far or new_cost < cost_so_far[nxt]:
                cost_so_far[nxt] = new_cost
                came_from[nxt] = current
                h = nxt.distance_to(goal)
                order += 1
                heapq.heappush(frontier, (new_cost + h, h, order, nxt))

    return None


def nearest_coordinate(origin: HexCoordinate, candidates: Sequence[HexCoordinate]) -> Optional[HexCoordinate]:
    """Closest candidate by hex distance, excluding origin; first in sequence order wins ties."""
    best = None
    best_d = None
    for c in candidates:
        if c == origin:
            continue
        d = origin.distance_to(c)
        if best_d is None or d < best_d:
            best_d = d
            best = c
    return best


# ============================================================================
# CONNECTIVITY
# ============================================================================

def bfs_reachable(
    grid,
    start: HexCoordinate,
    passable_fn: Callable[[HexCell], bool]
) -> Set[HexCoordinate]:
    """
    Breadth-First Search to find all passable cells reachable from start.
    """
    cell = grid.get(start)
    if cell is None or not passable_fn(cell):
        return set()

    reachable = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor, _ in grid.neighbors(current):
            coord = neighbor.coordinate
            if coord in reachable:
                continue
            if passable_fn(neighbor):
                reachable.add(coord)
                queue.append(coord)

    return reachable


def find_components(grid, passable_fn: Callable[[HexCell], bool]) -> List[Set[HexCoordinate]]:
    """
    Find all connected components of passable cells, in grid scan order.
    """
    seen: Set[HexCoordinate] = set()
    components: List[Set[HexCoordinate]] = []

    for cell in grid:
        if cell.coordinate in seen or not passable_fn(cell):
            continue
        component = bfs_reachable(grid, cell.coordinate, passable_fn)
        components.append(component)
        seen |= component

    return components


def is_road(cell: HexCell) -> bool:
    return cell.is_road


# ============================================================================
# RANDOM SELECTION
# ============================================================================

def weighted_choice(rng, items: Sequence, weights: Sequence[float]):
    """
    Pick one item proportionally to weights using the given RNG.

    Zero-weight items are never picked. Raises ValueError if all weights are zero.
    """
    total = sum(weights)
    if total <= 0:
        raise ValueError("weighted_choice needs at least one positive weight")
    normalized = [w / total for w in weights]
    return rng.choices(list(items), weights=normalized)[0]
