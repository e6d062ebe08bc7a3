"""
Built-in room shape presets, all laid out for a 10x10 room. On a smaller
room, regions that start outside the grid are skipped by the catalog.

+X is north: rows of the carve-outs run along Y.
"""

from ..shape_preset import ShapePreset, ShapeType, region


RECTANGULAR_SHAPE = ShapePreset(
    name="Rectangular",
    shape_type=ShapeType.RECTANGULAR,
    description="Standard rectangular room with no empty regions.",
)

L_SHAPE = ShapePreset(
    name="L-Shape",
    shape_type=ShapeType.L_SHAPE,
    description="North-east quarter carved out.",
    empty_regions=[region(5, 5, 9, 9)],
)

T_SHAPE = ShapePreset(
    name="T-Shape",
    shape_type=ShapeType.T_SHAPE,
    description="Full-width bar along the north edge with a central stem running south.",
    empty_regions=[region(0, 0, 5, 2), region(0, 7, 5, 9)],
)

U_SHAPE = ShapePreset(
    name="U-Shape",
    shape_type=ShapeType.U_SHAPE,
    description="Opening carved from the north edge between two arms.",
    empty_regions=[region(4, 3, 9, 6)],
)

PLUS_SHAPE = ShapePreset(
    name="Plus Shape",
    shape_type=ShapeType.PLUS_SHAPE,
    description="All four 3x3 corners carved out.",
    empty_regions=[
        region(0, 0, 2, 2),
        region(7, 0, 9, 2),
        region(0, 7, 2, 9),
        region(7, 7, 9, 9),
    ],
)


def register_builtin_shapes(catalog):
    """Register all built-in shapes with the catalog."""
    for preset in (RECTANGULAR_SHAPE, L_SHAPE, T_SHAPE, U_SHAPE, PLUS_SHAPE):
        catalog.register(preset)


__all__ = [
    'RECTANGULAR_SHAPE',
    'L_SHAPE',
    'T_SHAPE',
    'U_SHAPE',
    'PLUS_SHAPE',
    'register_builtin_shapes',
]
