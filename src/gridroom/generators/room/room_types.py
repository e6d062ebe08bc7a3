"""
Room content types — placeable modules, designer overrides and produced records.

Asset references are plain strings resolved through an AssetResolver at the
point of use. Nothing in here is mutated by the generator; per-run output is
collected in the record types at the bottom of the module.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from gridroom.conversion.transforms import Rotator, Transform, Vec3
from gridroom.generators.assets import MeshHandle
from gridroom.generators.grid.grid_types import GridCoord, WallEdge

# Designer weights are clamped to this range on load
MIN_PLACEMENT_WEIGHT = 0.0
MAX_PLACEMENT_WEIGHT = 10.0

VALID_ROTATIONS = (0, 90, 180, 270)


def clamp_weight(weight: float) -> float:
    return min(MAX_PLACEMENT_WEIGHT, max(MIN_PLACEMENT_WEIGHT, float(weight)))


# ---------------------------------------------------------------------------
# Placeable modules
# ---------------------------------------------------------------------------

@dataclass
class MeshPlacementInfo:
    """
    A floor or interior mesh definition.

    Attributes:
        mesh: Asset reference
        footprint: (width, height) in cells at 0 degrees
        weight: Relative selection weight
        allowed_rotations: Yaw values the mesh may be rolled to
    """
    mesh: Optional[str]
    footprint: Tuple[int, int] = (1, 1)
    weight: float = 1.0
    allowed_rotations: List[int] = field(default_factory=lambda: [0])

    def rotations(self) -> List[int]:
        return list(self.allowed_rotations) or [0]

    def footprint_for(self, yaw: float) -> Tuple[int, int]:
        """Footprint after rotation; 90 and 270 swap width and height."""
        fw, fh = self.footprint
        if int(round(yaw)) % 360 in (90, 270):
            return (fh, fw)
        return (fw, fh)


@dataclass
class WallModule:
    """
    A wall module along one edge.

    Base is mandatory. Middle2 is only used when Middle1 is present.
    """
    footprint: int = 1
    base_mesh: Optional[str] = None
    middle1_mesh: Optional[str] = None
    middle2_mesh: Optional[str] = None
    top_mesh: Optional[str] = None
    weight: float = 1.0


@dataclass
class DoorSpec:
    """
    A door frame definition, optionally carrying a pool of variants.

    When ``door_pool`` is empty the spec itself is the only candidate.
    """
    name: str = "Door"
    frame_mesh: Optional[str] = None
    frame_footprint: int = 2
    frame_rotation_offset: Rotator = field(default_factory=Rotator)
    weight: float = 1.0
    door_pool: List['DoorSpec'] = field(default_factory=list)
    connection_box_extent: Vec3 = (50.0, 50.0, 200.0)

    @property
    def footprint(self) -> int:
        return max(1, int(self.frame_footprint))

    def candidates(self) -> List['DoorSpec']:
        return list(self.door_pool) if self.door_pool else [self]


# ---------------------------------------------------------------------------
# Designer overrides
# ---------------------------------------------------------------------------

@dataclass
class ForcedEmptyRegion:
    """Inclusive rectangle of cells that must stay empty (corners in any order)."""
    start_cell: GridCoord
    end_cell: GridCoord


@dataclass
class ForcedInteriorPlacement:
    """A mesh placed unconditionally before the random passes."""
    cell: GridCoord
    placement: MeshPlacementInfo


@dataclass
class DoorPositionOffsets:
    """Per-door fine tuning of frame and door actor positions."""
    frame_offset: Vec3 = (0.0, 0.0, 0.0)
    actor_offset: Vec3 = (0.0, 0.0, 0.0)


@dataclass
class FixedDoorLocation:
    """A door at an exact position along an edge."""
    edge: WallEdge
    start_cell: int
    door: Optional[DoorSpec]
    offsets: DoorPositionOffsets = field(default_factory=DoorPositionOffsets)

    @property
    def footprint(self) -> int:
        return self.door.footprint if self.door else 0


@dataclass
class ForcedWallPlacement:
    """A specific wall module at an exact position along an edge."""
    edge: WallEdge
    start_cell: int
    module: WallModule


@dataclass
class ProceduralDoorSettings:
    """
    Automatic door placement.

    ``required_edges`` overrides the min/max count when non-empty.
    """
    enabled: bool = False
    min_doors: int = 1
    max_doors: int = 2
    required_edges: List[WallEdge] = field(default_factory=list)


@dataclass
class RoomOverrides:
    """Every designer override for one room, passed explicitly into generation."""
    forced_empty_regions: List[ForcedEmptyRegion] = field(default_factory=list)
    forced_empty_cells: List[GridCoord] = field(default_factory=list)
    forced_placements: List[ForcedInteriorPlacement] = field(default_factory=list)
    fixed_doors: List[FixedDoorLocation] = field(default_factory=list)
    forced_walls: List[ForcedWallPlacement] = field(default_factory=list)
    procedural_doors: ProceduralDoorSettings = field(default_factory=ProceduralDoorSettings)
    shape_preset: Optional[str] = None


# ---------------------------------------------------------------------------
# Produced records
# ---------------------------------------------------------------------------

@dataclass
class PlacementInstruction:
    """One mesh instance to render."""
    mesh: MeshHandle
    transform: Transform
    category: str

    def key(self) -> Tuple[str, str, tuple]:
        """Comparable identity used for determinism checks."""
        return (self.category, self.mesh.name, self.transform.to_tuple())


@dataclass
class InteriorPlacement:
    """A floor/interior mesh placed on the interior grid."""
    mesh: MeshHandle
    cell: GridCoord
    footprint: Tuple[int, int]
    yaw: float
    transform: Transform
    source: str  # "forced", "weighted" or "filler"

    def covers(self) -> List[GridCoord]:
        fw, fh = self.footprint
        return [self.cell.offset(dx, dy) for dy in range(fh) for dx in range(fw)]


@dataclass
class WallSegmentRecord:
    """A placed base wall; the input to the vertical layer compositor."""
    edge: WallEdge
    start_cell: int
    length: int
    base_transform: Transform
    base_mesh: MeshHandle
    module: Optional[WallModule]
    forced: bool = False

    @property
    def end_cell(self) -> int:
        return self.start_cell + self.length


@dataclass
class DoorRecord:
    """A door span accepted on an edge."""
    edge: WallEdge
    start_cell: int
    footprint: int
    door: DoorSpec
    frame_transform: Transform
    actor_transform: Transform
    frame_mesh: Optional[MeshHandle] = None
    procedural: bool = False

    @property
    def end_cell(self) -> int:
        return self.start_cell + self.footprint
