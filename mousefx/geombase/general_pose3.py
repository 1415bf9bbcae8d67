"""GeneralPose3 - 3D pose with scale for the transform hierarchy.

Composition formula:
    parent * child:
        new_lin = parent.lin + qrot(parent.ang, parent.scale * child.lin)
        new_ang = qmul(parent.ang, child.ang)
        new_scale = parent.scale * child.scale  # element-wise

Quaternions are stored as (x, y, z, w).
"""

import math
import numpy
from scipy.spatial.transform import Rotation

from mousefx.util import qmul, qrot, qinv, as_vec3


# Базис в соглашении Y-up: камера смотрит вдоль локальной -Z.
LOCAL_UP = numpy.array([0.0, 1.0, 0.0])
LOCAL_FORWARD = numpy.array([0.0, 0.0, -1.0])


class GeneralPose3:
    """A 3D Pose with scale, represented by rotation quaternion, translation vector, and scale."""

    __slots__ = ('ang', 'lin', 'scale', '_rot_matrix', '_mat')

    def __init__(
        self,
        ang: numpy.ndarray = None,
        lin: numpy.ndarray = None,
        scale: numpy.ndarray = None
    ):
        if ang is None:
            ang = numpy.array([0.0, 0.0, 0.0, 1.0])
        if lin is None:
            lin = numpy.array([0.0, 0.0, 0.0])
        if scale is None:
            scale = numpy.array([1.0, 1.0, 1.0])
        self.ang = numpy.asarray(ang, dtype=numpy.float64)
        self.lin = as_vec3(lin)
        self.scale = as_vec3(scale)
        self._rot_matrix = None
        self._mat = None

    def copy(self) -> 'GeneralPose3':
        return GeneralPose3(
            ang=self.ang.copy(),
            lin=self.lin.copy(),
            scale=self.scale.copy()
        )

    @staticmethod
    def identity() -> 'GeneralPose3':
        return GeneralPose3()

    def rotation_matrix(self) -> numpy.ndarray:
        """Get the 3x3 rotation matrix corresponding to the pose's orientation."""
        if self._rot_matrix is None:
            x, y, z, w = self.ang
            self._rot_matrix = numpy.array([
                [1 - 2*(y**2 + z**2), 2*(x*y - z*w), 2*(x*z + y*w)],
                [2*(x*y + z*w), 1 - 2*(x**2 + z**2), 2*(y*z - x*w)],
                [2*(x*z - y*w), 2*(y*z + x*w), 1 - 2*(x**2 + y**2)]
            ])
        return self._rot_matrix

    def as_matrix(self) -> numpy.ndarray:
        """Get the 4x4 transformation matrix with scale baked in.

        Returns TRS matrix: Translation * Rotation * Scale
        """
        if self._mat is None:
            R = self.rotation_matrix()
            RS = R @ numpy.diag(self.scale)
            self._mat = numpy.eye(4)
            self._mat[:3, :3] = RS
            self._mat[:3, 3] = self.lin
        return self._mat

    def __repr__(self):
        return f"GeneralPose3(ang={self.ang}, lin={self.lin}, scale={self.scale})"

    def transform_point(self, point: numpy.ndarray) -> numpy.ndarray:
        """Transform a 3D point using the pose (with scale)."""
        return qrot(self.ang, self.scale * as_vec3(point)) + self.lin

    def rotate_vector(self, vector: numpy.ndarray) -> numpy.ndarray:
        """Rotate a 3D vector, ignoring scale and translation."""
        return qrot(self.ang, as_vec3(vector))

    def inverse_transform_point(self, pnt: numpy.ndarray) -> numpy.ndarray:
        inv_scale = 1.0 / self.scale
        return qrot(qinv(self.ang), as_vec3(pnt) - self.lin) * inv_scale

    def __mul__(self, other: 'GeneralPose3') -> 'GeneralPose3':
        if not isinstance(other, GeneralPose3):
            raise TypeError("Can only multiply GeneralPose3 with GeneralPose3")
        q = qmul(self.ang, other.ang)
        t = self.lin + qrot(self.ang, self.scale * other.lin)
        s = self.scale * other.scale
        return GeneralPose3(ang=q, lin=t, scale=s)

    def __matmul__(self, other: 'GeneralPose3') -> 'GeneralPose3':
        return self * other

    # --- Axes ---

    def forward(self) -> numpy.ndarray:
        """World direction of the local -Z axis (view direction for cameras)."""
        return self.rotate_vector(LOCAL_FORWARD)

    # --- Factory methods ---

    @staticmethod
    def rotation(axis: numpy.ndarray, angle: float) -> 'GeneralPose3':
        """Create a rotation pose around a given axis by a given angle."""
        axis = as_vec3(axis)
        axis = axis / numpy.linalg.norm(axis)
        s = math.sin(angle / 2)
        c = math.cos(angle / 2)
        q = numpy.array([axis[0] * s, axis[1] * s, axis[2] * s, c])
        return GeneralPose3(ang=q)

    @staticmethod
    def translation(x: float, y: float, z: float) -> 'GeneralPose3':
        return GeneralPose3(lin=numpy.array([x, y, z]))

    @staticmethod
    def rotateY(angle: float) -> 'GeneralPose3':
        return GeneralPose3.rotation(numpy.array([0.0, 1.0, 0.0]), angle)

    @staticmethod
    def looking_at(eye, target, up=LOCAL_UP) -> 'GeneralPose3':
        """Create a pose at 'eye' whose local -Z axis points towards 'target'.

        Args:
            eye: Position of the pose
            target: Point to look at
            up: Approximate up vector (default: world Y)
        """
        eye = as_vec3(eye)
        forward = as_vec3(target) - eye
        forward = forward / numpy.linalg.norm(forward)

        right = numpy.cross(forward, as_vec3(up))
        norm = numpy.linalg.norm(right)
        if norm < 1e-9:
            raise ValueError("looking_at: up vector is parallel to the view direction")
        right = right / norm

        up_corrected = numpy.cross(right, forward)

        rot_mat = numpy.column_stack([right, up_corrected, -forward])
        q = Rotation.from_matrix(rot_mat).as_quat()
        return GeneralPose3(ang=q, lin=eye)
