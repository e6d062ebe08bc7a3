"""
Rigid transforms for placed room pieces.

Rotations are expressed as (pitch, yaw, roll) in degrees, applied as
roll about X, then pitch about Y, then yaw about Z. Transforms are stored as
4x4 homogeneous matrices so that socket offsets can be chained across
dependent wall layers:

    child_world = child_local.compose(parent_world)

which reads "express child_local inside parent_world".
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

Vec3 = Tuple[float, float, float]

# Decimal places kept when reading values back out of a matrix
OUTPUT_PRECISION = 6


def _clean(value: float) -> float:
    """Round away float noise and normalise -0.0."""
    return round(float(value), OUTPUT_PRECISION) + 0.0


def _normalize_angle(degrees: float) -> float:
    angle = _clean(degrees) % 360.0
    return 0.0 if angle >= 360.0 else angle + 0.0


def _add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


@dataclass(frozen=True)
class Rotator:
    """Euler rotation in degrees."""
    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0

    def __add__(self, other: 'Rotator') -> 'Rotator':
        return Rotator(
            self.pitch + other.pitch,
            self.yaw + other.yaw,
            self.roll + other.roll,
        )

    def is_zero(self) -> bool:
        return self.pitch == 0.0 and self.yaw == 0.0 and self.roll == 0.0

    def to_matrix(self) -> np.ndarray:
        """Return the 3x3 rotation matrix for this rotator."""
        p, y, r = np.radians([self.pitch, self.yaw, self.roll])
        cp, sp = math.cos(p), math.sin(p)
        cy, sy = math.cos(y), math.sin(y)
        cr, sr = math.cos(r), math.sin(r)

        rz = np.array([[cy, -sy, 0.0], [sy, cy, 0.0], [0.0, 0.0, 1.0]])
        ry = np.array([[cp, 0.0, sp], [0.0, 1.0, 0.0], [-sp, 0.0, cp]])
        rx = np.array([[1.0, 0.0, 0.0], [0.0, cr, -sr], [0.0, sr, cr]])
        return rz @ ry @ rx

    @classmethod
    def from_matrix(cls, m: np.ndarray) -> 'Rotator':
        """Decompose a 3x3 rotation matrix back into pitch/yaw/roll."""
        pitch = math.degrees(math.asin(float(np.clip(-m[2, 0], -1.0, 1.0))))
        yaw = math.degrees(math.atan2(m[1, 0], m[0, 0]))
        roll = math.degrees(math.atan2(m[2, 1], m[2, 2]))
        return cls(_clean(pitch), _normalize_angle(yaw), _clean(roll))

    @classmethod
    def from_sequence(cls, values: Optional[Sequence[float]]) -> 'Rotator':
        if not values:
            return cls()
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def to_list(self) -> list:
        return [self.pitch, self.yaw, self.roll]


class Transform:
    """Location + rotation stored as a homogeneous matrix (unit scale)."""

    __slots__ = ('_matrix',)

    def __init__(self, rotation: Optional[Rotator] = None,
                 location: Vec3 = (0.0, 0.0, 0.0)):
        m = np.identity(4)
        if rotation is not None and not rotation.is_zero():
            m[:3, :3] = rotation.to_matrix()
        m[:3, 3] = location
        self._matrix = m

    # ---------------------------------------------------------------
    # Constructors
    # ---------------------------------------------------------------

    @classmethod
    def identity(cls) -> 'Transform':
        return cls()

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> 'Transform':
        t = cls.__new__(cls)
        t._matrix = np.array(matrix, dtype=float)
        return t

    @classmethod
    def from_dict(cls, data: Dict) -> 'Transform':
        """Build from {"location": [x, y, z], "rotation": [pitch, yaw, roll]}."""
        location = tuple(float(v) for v in data.get('location', (0.0, 0.0, 0.0)))
        return cls(Rotator.from_sequence(data.get('rotation')), location)

    # ---------------------------------------------------------------
    # Accessors
    # ---------------------------------------------------------------

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    @property
    def location(self) -> Vec3:
        x, y, z = self._matrix[:3, 3]
        return (_clean(x), _clean(y), _clean(z))

    @property
    def rotator(self) -> Rotator:
        return Rotator.from_matrix(self._matrix[:3, :3])

    # ---------------------------------------------------------------
    # Operations
    # ---------------------------------------------------------------

    def compose(self, parent: 'Transform') -> 'Transform':
        """Treat self as local to parent and return the resulting world transform."""
        return Transform.from_matrix(parent._matrix @ self._matrix)

    def translated(self, offset: Vec3) -> 'Transform':
        """Return a copy moved by a world-space offset."""
        m = self._matrix.copy()
        m[:3, 3] += offset
        return Transform.from_matrix(m)

    def transform_point(self, point: Vec3) -> Vec3:
        p = self._matrix @ np.array([point[0], point[1], point[2], 1.0])
        return (_clean(p[0]), _clean(p[1]), _clean(p[2]))

    def to_tuple(self) -> Tuple[Vec3, Tuple[float, float, float]]:
        r = self.rotator
        return (self.location, (r.pitch, r.yaw, r.roll))

    def to_dict(self) -> Dict[str, list]:
        return {
            'location': list(self.location),
            'rotation': self.rotator.to_list(),
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transform):
            return NotImplemented
        return bool(np.array_equal(self._matrix, other._matrix))

    def __hash__(self):
        return hash(self._matrix.tobytes())

    def is_close(self, other: 'Transform', tol: float = 1e-6) -> bool:
        return bool(np.allclose(self._matrix, other._matrix, atol=tol))

    def __repr__(self) -> str:
        r = self.rotator
        return (f"Transform(location={self.location}, "
                f"rotation=(p={r.pitch}, y={r.yaw}, r={r.roll}))")


def offset_location(location: Vec3, offset: Vec3) -> Vec3:
    """Component-wise add, used for pivot and designer offsets."""
    return _add(location, offset)
