"""
Per-run state threaded through the room generation passes.

A RoomState is created fresh for every generate() call and holds all
intermediate products: the interior grid, the boundary ring, wall segments,
door records and the flat list of placement instructions in emission order.
Designer inputs are referenced, never modified.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from gridroom.conversion.transforms import Transform
from gridroom.generators.assets import AssetResolver, MeshHandle
from gridroom.generators.grid.grid_types import BoundaryOccupancy, GridCoord, InteriorGrid, RoomSpec
from gridroom.generators.room.room_types import (
    DoorRecord, FixedDoorLocation, ForcedEmptyRegion, InteriorPlacement,
    PlacementInstruction, RoomOverrides, WallSegmentRecord,
)
from gridroom.generators.styles.style_pack import StylePacks


# Instruction categories, in the order phases emit them
CATEGORY_FLOOR = "floor"
CATEGORY_DOOR = "door"
CATEGORY_WALL = "wall"
CATEGORY_WALL_MIDDLE = "wall_middle"
CATEGORY_WALL_TOP = "wall_top"
CATEGORY_CEILING = "ceiling"
CATEGORY_CORNER = "corner"


@dataclass
class RoomState:
    """
    Everything one generation run reads and produces.

    Attributes:
        room: Grid dimensions and origin
        styles: Pools the room is built from
        overrides: Designer overrides (read only)
        seed: Run seed
        resolver: Asset lookup
        forced_empty_regions: Overrides plus shape preset regions
        forced_empty_cells: Overrides plus shape preset cells
        resolved_doors: Fixed doors plus this run's procedural doors
        instructions: Every placed mesh, in emission order
        metrics: Per-pass counters keyed by pass name
    """
    room: RoomSpec
    styles: StylePacks
    overrides: RoomOverrides
    seed: int
    resolver: AssetResolver

    forced_empty_regions: List[ForcedEmptyRegion] = field(default_factory=list)
    forced_empty_cells: List[GridCoord] = field(default_factory=list)

    interior_grid: Optional[InteriorGrid] = None
    interior_placements: List[InteriorPlacement] = field(default_factory=list)

    boundary: BoundaryOccupancy = field(default_factory=BoundaryOccupancy)
    resolved_doors: List[FixedDoorLocation] = field(default_factory=list)
    doors: List[DoorRecord] = field(default_factory=list)
    segments: List[WallSegmentRecord] = field(default_factory=list)

    instructions: List[PlacementInstruction] = field(default_factory=list)
    metrics: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def emit(self, mesh: MeshHandle, transform: Transform, category: str) -> PlacementInstruction:
        instruction = PlacementInstruction(mesh, transform, category)
        self.instructions.append(instruction)
        return instruction

    def instructions_in(self, category: str) -> List[PlacementInstruction]:
        return [i for i in self.instructions if i.category == category]
