"""
Room shape presets — carve-outs that give a rectangular grid a non-rectangular floor.
"""

from .shape_preset import ShapePreset, ShapeType
from .catalog import SHAPE_CATALOG, ShapeCatalog

__all__ = ['ShapePreset', 'ShapeType', 'SHAPE_CATALOG', 'ShapeCatalog']
