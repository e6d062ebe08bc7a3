"""
Ceiling tiling: large K x K tiles on a coarse grid, then 1x1 tiles in the gaps.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from gridroom.conversion.transforms import Rotator, Transform
from gridroom.generators.assets import AssetResolver, MeshHandle
from gridroom.generators.grid.grid_types import GridCoord, RoomSpec
from gridroom.generators.random_stream import NoCandidatesError, RandomStream, weighted_choice

logger = logging.getLogger(__name__)

# Small tiles draw from their own stream so large-tile changes do not shift them
CEILING_SMALL_SEED_OFFSET = 1000


@dataclass
class CeilingPlacement:
    mesh: MeshHandle
    cell: GridCoord
    size: int
    transform: Transform


class CeilingTiler:
    """
    Covers the room's ceiling with tiles.

    ``occupied`` is an H x W boolean bitmap indexed [y, x]. Cells passed in as
    ``blocked`` are treated as already covered.
    """

    def __init__(self, room: RoomSpec, ceiling_style, resolver: AssetResolver,
                 blocked: Sequence[GridCoord] = ()):
        self.room = room
        self.style = ceiling_style
        self.resolver = resolver
        self.occupied = np.zeros((room.height, room.width), dtype=bool)
        for cell in blocked:
            if room.in_bounds(cell.x, cell.y):
                self.occupied[cell.y, cell.x] = True

        self.placements: List[CeilingPlacement] = []
        self.metrics: Dict[str, int] = {
            'large_placed': 0,
            'small_placed': 0,
            'skipped_assets': 0,
        }

    def _transform(self, x: float, y: float) -> Transform:
        cs = self.room.cell_size
        location = self.room.to_world((x * cs, y * cs, self.style.ceiling_height))
        rotation = self.style.ceiling_rotation or Rotator()
        return Transform(rotation, location)

    def _pick(self, pool, stream: RandomStream) -> Optional[MeshHandle]:
        try:
            tile = weighted_choice(pool, stream)
        except NoCandidatesError:
            return None
        mesh = self.resolver.resolve(tile.mesh)
        if mesh is None:
            self.metrics['skipped_assets'] += 1
        return mesh

    def place_large_tiles(self, stream: RandomStream):
        pool = self.style.large_tiles
        k = max(1, int(self.style.large_tile_size))
        if not pool:
            return

        for y in range(0, self.room.height, k):
            for x in range(0, self.room.width, k):
                if x + k > self.room.width or y + k > self.room.height:
                    continue
                if self.occupied[y:y + k, x:x + k].any():
                    continue

                mesh = self._pick(pool, stream)
                if mesh is None:
                    # Leave the block to the small pass
                    continue

                self.occupied[y:y + k, x:x + k] = True
                self.placements.append(CeilingPlacement(
                    mesh, GridCoord(x, y), k, self._transform(x + k / 2.0, y + k / 2.0)
                ))
                self.metrics['large_placed'] += 1

    def place_small_tiles(self, stream: RandomStream):
        pool = self.style.small_tiles
        if not pool:
            return

        for y in range(self.room.height):
            for x in range(self.room.width):
                if self.occupied[y, x]:
                    continue
                mesh = self._pick(pool, stream)
                if mesh is None:
                    continue
                self.occupied[y, x] = True
                self.placements.append(CeilingPlacement(
                    mesh, GridCoord(x, y), 1, self._transform(x + 0.5, y + 0.5)
                ))
                self.metrics['small_placed'] += 1

    def tile(self, seed: int) -> List[CeilingPlacement]:
        self.place_large_tiles(RandomStream(seed))
        self.place_small_tiles(RandomStream(seed + CEILING_SMALL_SEED_OFFSET))
        logger.info("Ceiling: %d large, %d small tiles",
                    self.metrics['large_placed'], self.metrics['small_placed'])
        return list(self.placements)
