"""
Transform math and export of generated rooms.

Export helpers live in ``gridroom.conversion.placement_export``; they depend
on the room types, which themselves build on the transforms exported here.
"""

from .transforms import Rotator, Transform, Vec3, offset_location

__all__ = [
    'Rotator',
    'Transform',
    'Vec3',
    'offset_location',
]
