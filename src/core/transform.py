# core/transform.py
from core.vector import Vector3


class Transformation:
    """
    Rigid transformation: an orthonormal orientation (stored as its three
    column vectors) followed by a translation.
    """
    def __init__(self, x_axis: Vector3, y_axis: Vector3, z_axis: Vector3, position: Vector3):
        self.x_axis = x_axis
        self.y_axis = y_axis
        self.z_axis = z_axis
        self.position = position

    @staticmethod
    def identity() -> "Transformation":
        return Transformation(Vector3(1, 0, 0), Vector3(0, 1, 0), Vector3(0, 0, 1), Vector3(0, 0, 0))

    @staticmethod
    def lookat(position: Vector3, target: Vector3, up: Vector3) -> "Transformation":
        """
        Local frame with z pointing from the target back to the position.
        """
        z = (position - target).normalize()
        x = up.cross(z).normalize()
        y = z.cross(x)
        return Transformation(x, y, z, position)

    def inverse(self) -> "Transformation":
        # The transpose of an orthonormal matrix is its inverse
        x = Vector3(self.x_axis.x, self.y_axis.x, self.z_axis.x)
        y = Vector3(self.x_axis.y, self.y_axis.y, self.z_axis.y)
        z = Vector3(self.x_axis.z, self.y_axis.z, self.z_axis.z)
        inverse = Transformation(x, y, z, Vector3(0, 0, 0))
        inverse.position = -inverse.transform_vector(self.position)
        return inverse

    def transform_vector(self, v: Vector3) -> Vector3:
        return self.x_axis * v.x + self.y_axis * v.y + self.z_axis * v.z

    def transform_point(self, p: Vector3) -> Vector3:
        return self.transform_vector(p) + self.position
