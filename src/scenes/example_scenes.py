# scenes/example_scenes.py
import logging
import math
from typing import Optional
from camera.camera import Camera
from core.scene_data import SceneData
from core.vector import Vector3, rgb
from core.uv import UV
from geometry.bvh import Bvh
from geometry.hittable import Hittable
from geometry.mesh import Mesh, Vertex, load_obj, mesh_hittables
from geometry.sphere import Sphere
from materials.emission import EnvironmentMap, SkyBackground
from materials.lambertian import Lambert
from materials.material import Material, AlbedoMap
from materials.presets import ColorPresets, DielectricPresets, LightPresets, MetalPresets
from materials.textures import CheckerTexture, ImageTexture, NoiseTexture, PerlinTexture, SolidTexture
from renderer.env_map_utils import generate_gradient_env_map
from renderer.path_tracer import Background, emission_background

logger = logging.getLogger(__name__)

UP = Vector3(0.0, 1.0, 0.0)


class ExampleScene:
    """Everything the renderer needs besides its settings."""
    def __init__(self, camera: Camera, scene_data: SceneData, root: Hittable, background: Background):
        self.camera = camera
        self.scene_data = scene_data
        self.root = root
        self.background = background


def three_balls(aspect_ratio: float = 1.0) -> ExampleScene:
    camera = Camera.looking_at(Vector3(-2.0, 2.0, 1.0), Vector3(0.0, 0.0, -1.0), UP,
                               aspect_ratio, math.pi / 2, aperture=0.2, focus_dist=3.46)

    scene_data = SceneData(materials=[
        ColorPresets.matte(ColorPresets.YELLOW),
        ColorPresets.matte(ColorPresets.BLUE),
        DielectricPresets.glass(),
        MetalPresets.mirror(),
    ])

    spheres = [
        Sphere(Vector3(0.0, -100.5, -1.0), 100.0, 0),  # Ground
        Sphere(Vector3(0.0, 0.0, -1.0), 0.5, 1),  # Diffuse
        Sphere(Vector3(-1.0, 0.0, -1.0), 0.5, 2),  # Glass
        Sphere(Vector3(1.0, 0.0, -1.0), 0.5, 3),  # Metal
    ]
    background = emission_background(SkyBackground(), scene_data)
    return ExampleScene(camera, scene_data, Bvh(spheres, scene_data), background)


def textured_spheres(aspect_ratio: float = 1.0) -> ExampleScene:
    camera = Camera.looking_at(Vector3(0.0, 1.5, 3.0), Vector3(0.0, 0.3, -1.0), UP,
                               aspect_ratio, math.radians(60))

    textures = [
        SolidTexture(rgb(0.9, 0.9, 0.9)),
        SolidTexture(rgb(0.2, 0.3, 0.1)),
        CheckerTexture(odd=1, even=0),
        NoiseTexture(seed=7),
        PerlinTexture(seed=11),
        ImageTexture(generate_gradient_env_map(256, 128)),
    ]
    materials = [
        Material(Lambert(), AlbedoMap(2)),
        Material(Lambert(), AlbedoMap(3)),
        Material(Lambert(), AlbedoMap(4)),
        MetalPresets.gold(),
        LightPresets.warm_light(4.0),
    ]
    scene_data = SceneData(materials, textures)

    spheres = [
        Sphere(Vector3(0.0, -1000.0, -1.0), 1000.0, 0),
        Sphere(Vector3(-1.1, 0.5, -1.0), 0.5, 1),
        Sphere(Vector3(0.0, 0.5, -1.5), 0.5, 2),
        Sphere(Vector3(1.1, 0.5, -1.0), 0.5, 3),
        Sphere(Vector3(0.0, 3.0, -1.0), 0.5, 4),
    ]
    background = emission_background(EnvironmentMap(5), scene_data)
    return ExampleScene(camera, scene_data, Bvh(spheres, scene_data), background)


def tetrahedron(material: int, size: float = 1.0) -> Mesh:
    """A small built-in mesh with per-vertex UVs and face normals."""
    a = Vector3(0.0, size, 0.0)
    b = Vector3(-size, 0.0, size)
    c = Vector3(size, 0.0, size)
    d = Vector3(0.0, 0.0, -size)
    vertices = [Vertex(a, uv=UV(0.5, 1.0)), Vertex(b, uv=UV(0.0, 0.0)),
                Vertex(c, uv=UV(1.0, 0.0)), Vertex(d, uv=UV(0.5, 0.0))]
    indices = [0, 1, 2, 0, 2, 3, 0, 3, 1, 1, 3, 2]
    return Mesh(vertices, indices, material)


def mesh_scene(aspect_ratio: float = 1.0, path: Optional[str] = None) -> ExampleScene:
    camera = Camera.looking_at(Vector3(0.0, 1.5, 4.0), Vector3(0.0, 0.5, 0.0), UP,
                               aspect_ratio, math.radians(50))

    materials = [
        ColorPresets.matte(ColorPresets.GRAY),
        MetalPresets.copper(),
    ]
    mesh = load_obj(path, 1) if path is not None else tetrahedron(1)
    scene_data = SceneData(materials, meshes=[mesh])

    objects = mesh_hittables(0, scene_data)
    objects.append(Sphere(Vector3(0.0, -1000.0, 0.0), 1000.0, 0))
    logger.info("Mesh scene: %d triangles", len(mesh))

    background = emission_background(SkyBackground(), scene_data)
    return ExampleScene(camera, scene_data, Bvh(objects, scene_data), background)


SCENES = {
    "three_balls": three_balls,
    "textured": textured_spheres,
    "mesh": mesh_scene,
}
