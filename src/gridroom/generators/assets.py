"""
Asset and instancing collaborators.

The generator never loads meshes or owns render resources itself. It talks to
two injected collaborators:

- AssetResolver: turns an asset reference (a string) into a MeshHandle, or
  None when the asset cannot be resolved.
- InstanceSink: groups placed instances into one bucket per unique mesh so a
  renderer can draw them in batches.

DictAssetResolver and BatchedInstanceSink are in-memory implementations used
by the CLI and the tests.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from gridroom.conversion.transforms import Transform

logger = logging.getLogger(__name__)

# Socket used to stack one wall layer on top of another
TOP_SOCKET_NAME = "TopCenter"


@dataclass(eq=False)
class MeshHandle:
    """
    A resolved mesh.

    Attributes:
        name: Asset reference this handle was resolved from
        sockets: Named local attachment transforms
        bounds_height: Height of the mesh bounding box (0 when unknown)
    """
    name: str
    sockets: Dict[str, Transform] = field(default_factory=dict)
    bounds_height: float = 0.0

    def get_socket(self, socket_name: str) -> Optional[Transform]:
        return self.sockets.get(socket_name)

    def __repr__(self) -> str:
        return f"MeshHandle({self.name!r})"


class AssetResolver(ABC):
    """Synchronous asset lookup. Resolution is never guaranteed to succeed."""

    @abstractmethod
    def resolve(self, asset_ref: Optional[str]) -> Optional[MeshHandle]:
        pass


class DictAssetResolver(AssetResolver):
    """
    Resolver backed by an in-memory mesh manifest.

    Each reference resolves to the same MeshHandle instance for the lifetime
    of the resolver, so handles can be used as bucket keys.
    """

    def __init__(self, meshes: Optional[Iterable[MeshHandle]] = None):
        self._meshes: Dict[str, MeshHandle] = {}
        for mesh in meshes or []:
            self.add(mesh)

    def add(self, mesh: MeshHandle) -> MeshHandle:
        self._meshes[mesh.name] = mesh
        return mesh

    def add_mesh(self, name: str, bounds_height: float = 0.0,
                 sockets: Optional[Dict[str, Transform]] = None) -> MeshHandle:
        return self.add(MeshHandle(name=name, sockets=dict(sockets or {}),
                                   bounds_height=bounds_height))

    def resolve(self, asset_ref: Optional[str]) -> Optional[MeshHandle]:
        if not asset_ref:
            return None
        mesh = self._meshes.get(asset_ref)
        if mesh is None:
            logger.debug("Asset not found: %s", asset_ref)
        return mesh

    def __contains__(self, asset_ref: str) -> bool:
        return asset_ref in self._meshes

    @classmethod
    def from_manifest(cls, manifest: Dict[str, Dict[str, Any]]) -> 'DictAssetResolver':
        """
        Build from a manifest of the form::

            {
              "SM_Wall_2m": {
                "bounds_height": 100.0,
                "sockets": {"TopCenter": {"location": [0, 0, 100], "rotation": [0, 0, 0]}}
              }
            }
        """
        resolver = cls()
        for name, entry in manifest.items():
            entry = entry or {}
            sockets = {
                socket_name: Transform.from_dict(socket)
                for socket_name, socket in entry.get('sockets', {}).items()
            }
            resolver.add_mesh(name, float(entry.get('bounds_height', 0.0)), sockets)
        return resolver


class InstanceBucket:
    """All instances of a single mesh."""

    def __init__(self, mesh: MeshHandle):
        self.mesh = mesh
        self.transforms: List[Transform] = []

    def add_instance(self, transform: Transform) -> int:
        self.transforms.append(transform)
        return len(self.transforms) - 1

    @property
    def instance_count(self) -> int:
        return len(self.transforms)

    def clear(self):
        self.transforms.clear()


class InstanceSink(ABC):
    """Receives placed instances, grouped per mesh."""

    @abstractmethod
    def get_or_create_bucket(self, mesh: MeshHandle) -> InstanceBucket:
        pass

    def clear(self) -> None:
        """Drop every instance from a previous run."""
        pass


class BatchedInstanceSink(InstanceSink):
    """One InstanceBucket per unique mesh, in first-use order."""

    def __init__(self):
        self._buckets: Dict[MeshHandle, InstanceBucket] = {}

    def get_or_create_bucket(self, mesh: MeshHandle) -> InstanceBucket:
        bucket = self._buckets.get(mesh)
        if bucket is None:
            bucket = InstanceBucket(mesh)
            self._buckets[mesh] = bucket
        return bucket

    def clear(self) -> None:
        for bucket in self._buckets.values():
            bucket.clear()
        self._buckets.clear()

    @property
    def buckets(self) -> List[InstanceBucket]:
        return list(self._buckets.values())

    def total_instances(self) -> int:
        return sum(b.instance_count for b in self._buckets.values())
