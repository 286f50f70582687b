# core/scene_data.py
"""
Shared, read-only scene tables.

Primitives refer to materials, textures and meshes by integer id. The tables
are built once before rendering and only read while workers run, so a single
SceneData is shared by reference between all render threads.
"""
import numbers
from typing import NewType, Sequence, TYPE_CHECKING
from core.errors import InvalidIndexError

if TYPE_CHECKING:
    from materials.material import Material
    from materials.textures import Texture
    from geometry.mesh import Mesh

MaterialId = NewType("MaterialId", int)
TextureId = NewType("TextureId", int)
MeshId = NewType("MeshId", int)
# Offset of the triangle's first index inside its mesh's index list
TriangleId = NewType("TriangleId", int)


def _lookup(table: tuple, index, kind: str):
    if isinstance(index, bool) or not isinstance(index, numbers.Integral) or not 0 <= index < len(table):
        raise InvalidIndexError(f"{kind} id {index!r} is outside the {kind} table (size {len(table)})")
    return table[index]


class SceneData:
    def __init__(self, materials: Sequence["Material"] = (), textures: Sequence["Texture"] = (),
                 meshes: Sequence["Mesh"] = ()):
        self.materials = tuple(materials)
        self.textures = tuple(textures)
        self.meshes = tuple(meshes)

    def material(self, material_id: MaterialId) -> "Material":
        return _lookup(self.materials, material_id, "material")

    def texture(self, texture_id: TextureId) -> "Texture":
        return _lookup(self.textures, texture_id, "texture")

    def mesh(self, mesh_id: MeshId) -> "Mesh":
        return _lookup(self.meshes, mesh_id, "mesh")

    def __repr__(self) -> str:
        return (f"SceneData({len(self.materials)} materials, {len(self.textures)} textures, "
                f"{len(self.meshes)} meshes)")
