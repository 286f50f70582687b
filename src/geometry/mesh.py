# geometry/mesh.py
import logging
from typing import Dict, Iterator, List, Optional, Tuple
from core.vector import Vector3
from core.uv import UV
from core.ray import Ray
from core.aabb import AABB
from core.scene_data import MeshId, TriangleId
from geometry.hittable import Hittable, Hit

logger = logging.getLogger(__name__)

# Below this determinant the ray is treated as parallel to the triangle
DETERMINANT_EPSILON = 1e-9

# Half thickness given to flat triangle bounding boxes
FLAT_BOX_PADDING = 1e-7

_ZERO = Vector3(0.0, 0.0, 0.0)


class Vertex:
    """A mesh vertex: position, normal (zero when unknown) and texture coordinate."""
    __slots__ = ("position", "normal", "uv")

    def __init__(self, position: Vector3, normal: Optional[Vector3] = None, uv: Optional[UV] = None):
        self.position = position
        self.normal = normal if normal is not None else _ZERO
        self.uv = uv if uv is not None else UV(0.0, 0.0)


class Mesh:
    """
    Indexed triangle storage. Every three consecutive indices form a triangle.
    """
    def __init__(self, vertices: List[Vertex], indices: List[int], material: int):
        if len(indices) % 3 != 0:
            raise ValueError(f"Mesh index count must be a multiple of 3, got {len(indices)}")
        self.vertices = vertices
        self.indices = indices
        self.material = material

    def get_triangle(self, triangle: TriangleId) -> Tuple[Vertex, Vertex, Vertex]:
        i = self.indices
        v = self.vertices
        return v[i[triangle]], v[i[triangle + 1]], v[i[triangle + 2]]

    def iter_triangles(self) -> Iterator[TriangleId]:
        return (TriangleId(3 * i) for i in range(len(self.indices) // 3))

    def __len__(self) -> int:
        return len(self.indices) // 3


def hit_triangle(a: Vertex, b: Vertex, c: Vertex, ray: Ray) -> Optional[Hit]:
    """
    Solves [a-b  a-c  d] * [u v t]^T = a-p with Cramer's rule.
    u weights b, v weights c and w = 1-u-v weights a.
    """
    pa_ = a.position
    ba = pa_ - b.position
    ca = pa_ - c.position
    pa = pa_ - ray.origin
    d = ray.direction

    det = (ba.x * ca.y * d.z + ba.y * ca.z * d.x + ba.z * ca.x * d.y
           - ba.x * ca.z * d.y - ba.y * ca.x * d.z - ba.z * ca.y * d.x)
    if abs(det) < DETERMINANT_EPSILON:
        return None
    inv_det = 1.0 / det

    t = (pa.x * (ba.y * ca.z - ba.z * ca.y)
         + pa.y * (ba.z * ca.x - ba.x * ca.z)
         + pa.z * (ba.x * ca.y - ba.y * ca.x)) * inv_det
    if t < ray.t_min or t > ray.t_max:
        return None

    u = (pa.x * (ca.y * d.z - ca.z * d.y)
         + pa.y * (ca.z * d.x - ca.x * d.z)
         + pa.z * (ca.x * d.y - ca.y * d.x)) * inv_det
    v = (pa.x * (ba.z * d.y - ba.y * d.z)
         + pa.y * (ba.x * d.z - ba.z * d.x)
         + pa.z * (ba.y * d.x - ba.x * d.y)) * inv_det
    w = 1.0 - u - v
    if u < 0.0 or v < 0.0 or w < 0.0:
        return None

    normal = (a.normal * w + b.normal * u + c.normal * v).normalize()
    if normal.length_squared() == 0.0:
        normal = (b.position - a.position).cross(c.position - a.position).normalize()
    uv = a.uv * w + b.uv * u + c.uv * v
    return Hit(t, ray.at(t), normal, uv)


def bounding_box_triangle(a: Vertex, b: Vertex, c: Vertex) -> AABB:
    """
    Min/max of the vertices. An axis with zero extent is padded so that the
    strict slab test still sees axis-aligned triangles.
    """
    p, q, r = a.position, b.position, c.position
    lo = [min(p.x, q.x, r.x), min(p.y, q.y, r.y), min(p.z, q.z, r.z)]
    hi = [max(p.x, q.x, r.x), max(p.y, q.y, r.y), max(p.z, q.z, r.z)]
    for axis in range(3):
        if hi[axis] - lo[axis] < FLAT_BOX_PADDING:
            lo[axis] -= FLAT_BOX_PADDING
            hi[axis] += FLAT_BOX_PADDING
    return AABB(Vector3(*lo), Vector3(*hi))


class TriangleRef(Hittable):
    """
    One triangle of a mesh in the scene's mesh table. The material comes from
    the owning mesh.
    """
    def __init__(self, triangle: TriangleId, mesh: MeshId):
        self.triangle = triangle
        self.mesh = mesh

    def hit(self, ray: Ray, scene_data) -> Optional[Hit]:
        mesh = scene_data.mesh(self.mesh)
        rec = hit_triangle(*mesh.get_triangle(self.triangle), ray)
        if rec is not None:
            rec.material = mesh.material
        return rec

    def bounding_box(self, scene_data) -> AABB:
        return bounding_box_triangle(*scene_data.mesh(self.mesh).get_triangle(self.triangle))

    def __repr__(self) -> str:
        return f"TriangleRef(triangle={self.triangle}, mesh={self.mesh})"


def mesh_hittables(mesh_id: MeshId, scene_data) -> List[TriangleRef]:
    """Builds one TriangleRef per triangle of a mesh in the table."""
    return [TriangleRef(t, mesh_id) for t in scene_data.mesh(mesh_id).iter_triangles()]


def _resolve(index: str, count: int) -> int:
    i = int(index)
    # OBJ indices are 1-based, negative ones count from the end
    return count + i if i < 0 else i - 1


def load_obj(filename: str, material: int) -> Mesh:
    """Load a triangle mesh from an OBJ file. Polygons are fan-triangulated."""
    positions: List[Vector3] = []
    normals: List[Vector3] = []
    uvs: List[UV] = []
    vertices: List[Vertex] = []
    indices: List[int] = []
    unique: Dict[Tuple[int, Optional[int], Optional[int]], int] = {}

    def vertex_index(token: str) -> int:
        parts = token.split('/')
        p = _resolve(parts[0], len(positions))
        t = _resolve(parts[1], len(uvs)) if len(parts) > 1 and parts[1] else None
        n = _resolve(parts[2], len(normals)) if len(parts) > 2 and parts[2] else None
        key = (p, t, n)
        if key not in unique:
            unique[key] = len(vertices)
            vertices.append(Vertex(positions[p],
                                   normals[n] if n is not None else None,
                                   uvs[t] if t is not None else None))
        return unique[key]

    logger.info("Opening OBJ file: %s", filename)
    with open(filename, 'r') as f:
        for line_num, line in enumerate(f, 1):
            values = line.split('#', 1)[0].split()
            if not values:
                continue
            try:
                if values[0] == 'v':
                    positions.append(Vector3(float(values[1]), float(values[2]), float(values[3])))
                elif values[0] == 'vn':
                    normals.append(Vector3(float(values[1]), float(values[2]), float(values[3])))
                elif values[0] == 'vt':
                    uvs.append(UV(float(values[1]), float(values[2])))
                elif values[0] == 'f':
                    face = [vertex_index(v) for v in values[1:]]
                    if len(face) < 3:
                        raise ValueError("face with fewer than 3 vertices")
                    for i in range(1, len(face) - 1):
                        indices.extend((face[0], face[i], face[i + 1]))
            except (ValueError, IndexError) as e:
                raise ValueError(f"{filename}:{line_num}: cannot parse {line.strip()!r}: {e}") from e

    logger.info("Loaded %d positions, %d normals, %d UVs, %d triangles",
                len(positions), len(normals), len(uvs), len(indices) // 3)
    return Mesh(vertices, indices, material)
