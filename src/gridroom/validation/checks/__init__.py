"""
Validation check modules.

- room_checks: interior coverage and overlap, door spans, wall coverage
"""

from .room_checks import (
    check_door_spans,
    check_interior_bounds,
    check_interior_coverage,
    check_interior_overlap,
    check_wall_coverage,
    validate_generation,
)

__all__ = [
    'check_door_spans',
    'check_interior_bounds',
    'check_interior_coverage',
    'check_interior_overlap',
    'check_wall_coverage',
    'validate_generation',
]
