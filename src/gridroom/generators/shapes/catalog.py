"""
Shape catalog: registry of room shape presets.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional, Tuple

from gridroom.generators.grid.grid_types import GridCoord, RoomSpec
from gridroom.generators.room.room_types import ForcedEmptyRegion, RoomOverrides
from .shape_preset import ShapePreset, ShapeType

logger = logging.getLogger(__name__)


class ShapeCatalog:
    """Registry mapping names to shape presets."""

    def __init__(self):
        self._presets: Dict[str, ShapePreset] = {}

    def register(self, preset: ShapePreset):
        self._presets[preset.name] = preset

    def get_preset(self, name: str) -> Optional[ShapePreset]:
        if name in self._presets:
            return self._presets[name]
        name_lower = name.lower()
        for pname, preset in self._presets.items():
            if pname.lower() == name_lower:
                return preset
        return None

    def list_presets(self, shape_type: Optional[ShapeType] = None) -> List[str]:
        if shape_type is None:
            return sorted(self._presets.keys())
        return sorted(n for n, p in self._presets.items() if p.shape_type == shape_type)

    def forced_empty_for(self, room: RoomSpec, overrides: RoomOverrides
                         ) -> Tuple[List[ForcedEmptyRegion], List[GridCoord]]:
        """
        The room's forced-empty inputs with its shape preset (if any) appended.

        An unknown preset name is logged and ignored. Preset regions whose
        low corner lies outside the room are dropped rather than clamped, so a
        10x10 preset on a smaller room never carves the last row or column.
        """
        regions = list(overrides.forced_empty_regions)
        cells = list(overrides.forced_empty_cells)

        if not overrides.shape_preset:
            return regions, cells

        preset = self.get_preset(overrides.shape_preset)
        if preset is None:
            logger.warning("Unknown shape preset '%s'; room stays rectangular",
                           overrides.shape_preset)
            return regions, cells

        if not preset.fits(room):
            logger.warning("Room %dx%d is smaller than the %dx%d recommended for '%s'",
                           room.width, room.height, *preset.recommended_min_size, preset.name)

        for preset_region in preset.empty_regions:
            low_x = min(preset_region.start_cell.x, preset_region.end_cell.x)
            low_y = min(preset_region.start_cell.y, preset_region.end_cell.y)
            if not room.in_bounds(low_x, low_y):
                logger.debug("Preset '%s' region at (%d, %d) is outside the room; skipped",
                             preset.name, low_x, low_y)
                continue
            regions.append(preset_region)
        cells.extend(preset.empty_cells)
        return regions, cells


# Global singleton
SHAPE_CATALOG = ShapeCatalog()

from .builtin import register_builtin_shapes
register_builtin_shapes(SHAPE_CATALOG)
