"""
Vertical layer compositor.

Stacks Middle1, Middle2 and Top meshes on every placed base wall by chaining
attachment offsets: each layer is expressed relative to the layer below it.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from gridroom.conversion.transforms import Transform
from gridroom.generators.assets import TOP_SOCKET_NAME, AssetResolver, MeshHandle
from .room_types import WallSegmentRecord

logger = logging.getLogger(__name__)

DEFAULT_LAYER_HEIGHT = 100.0


def attachment_offset(mesh: MeshHandle, layer_height: float = DEFAULT_LAYER_HEIGHT) -> Transform:
    """
    Local transform from a mesh's pivot to where the next layer attaches.

    Uses the TopCenter socket when the mesh declares one, otherwise a vertical
    lift by the mesh's bounding height, otherwise one layer height.
    """
    socket = mesh.get_socket(TOP_SOCKET_NAME)
    if socket is not None:
        return socket
    if mesh.bounds_height > 0.0:
        return Transform(location=(0.0, 0.0, mesh.bounds_height))
    return Transform(location=(0.0, 0.0, layer_height))


@dataclass
class LayerPlacement:
    """A stacked layer mesh with its world transform."""
    layer: str  # "middle1", "middle2" or "top"
    mesh: MeshHandle
    transform: Transform
    segment: WallSegmentRecord


class VerticalLayerCompositor:
    """Derives layer transforms for a list of base wall segments."""

    def __init__(self, resolver: AssetResolver, layer_height: float = DEFAULT_LAYER_HEIGHT):
        self.resolver = resolver
        self.layer_height = layer_height
        self.metrics: Dict[str, int] = {
            'middle1_placed': 0,
            'middle2_placed': 0,
            'top_placed': 0,
            'skipped_assets': 0,
        }

    def _resolve_layer(self, ref: Optional[str]) -> Optional[MeshHandle]:
        if not ref:
            return None
        mesh = self.resolver.resolve(ref)
        if mesh is None:
            logger.warning("Wall layer mesh %r did not resolve", ref)
            self.metrics['skipped_assets'] += 1
        return mesh

    def stack_segment(self, segment: WallSegmentRecord) -> List[LayerPlacement]:
        module = segment.module
        if module is None:
            return []

        placed = []
        below_mesh = segment.base_mesh
        below_world = segment.base_transform

        middle1 = self._resolve_layer(module.middle1_mesh)
        if middle1 is not None:
            world = attachment_offset(below_mesh, self.layer_height).compose(below_world)
            placed.append(LayerPlacement("middle1", middle1, world, segment))
            self.metrics['middle1_placed'] += 1
            below_mesh, below_world = middle1, world

            # Middle2 only ever sits on Middle1
            middle2 = self._resolve_layer(module.middle2_mesh)
            if middle2 is not None:
                world = attachment_offset(below_mesh, self.layer_height).compose(below_world)
                placed.append(LayerPlacement("middle2", middle2, world, segment))
                self.metrics['middle2_placed'] += 1
                below_mesh, below_world = middle2, world

        top = self._resolve_layer(module.top_mesh)
        if top is not None:
            world = attachment_offset(below_mesh, self.layer_height).compose(below_world)
            placed.append(LayerPlacement("top", top, world, segment))
            self.metrics['top_placed'] += 1

        return placed

    def compose(self, segments: Sequence[WallSegmentRecord]) -> List[LayerPlacement]:
        placements = []
        for segment in segments:
            placements.extend(self.stack_segment(segment))
        logger.info("Wall layers: %d placed over %d segments", len(placements), len(segments))
        return placements
