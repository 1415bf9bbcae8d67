"""
Camera component.

Coordinate convention: Y-up, right-handed
  - X: right
  - Y: up
  - Z: backwards (camera looks along its local -Z axis)

Projection matrices follow the OpenGL clip-space layout (NDC z in [-1, 1]).
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from mousefx.geombase import Ray3
from mousefx.editor.inspect_field import InspectField
from mousefx.core.component import Component


class CameraComponent(Component):
    """
    Unified camera component supporting both perspective and orthographic projection.

    Attributes:
        projection_type: "perspective" or "orthographic"
        fov_y: Vertical field of view in radians (perspective mode)
        aspect: Aspect ratio width/height
        ortho_size: Half-height of the orthographic view (orthographic mode)
        near, far: Clipping planes
        is_main: Preferred by Scene.main_camera()
    """

    inspect_fields = {
        "projection_type": InspectField(
            path="projection_type",
            label="Projection",
            kind="enum",
            choices=[("perspective", "Perspective"), ("orthographic", "Orthographic")],
        ),
        "fov_deg": InspectField(
            label="FOV (deg)",
            kind="float",
            min=5.0,
            max=170.0,
            step=1.0,
            getter=lambda obj: math.degrees(obj.fov_y),
            setter=lambda obj, value: setattr(obj, "fov_y", math.radians(float(value))),
        ),
        "ortho_size": InspectField(path="ortho_size", label="Ortho Size", kind="float", min=0.1, step=0.5),
        "near": InspectField(path="near", label="Near clip", kind="float", min=0.001, step=0.01),
        "far": InspectField(path="far", label="Far clip", kind="float", min=0.01, step=0.1),
        "is_main": InspectField(path="is_main", label="Main camera", kind="bool"),
    }

    def __init__(
        self,
        near: float = 0.1,
        far: float = 100.0,
        fov_y_degrees: float = 60.0,
        aspect: float = 1.0,
        ortho_size: float = 5.0,
        projection_type: str = "perspective",
        is_main: bool = False,
    ):
        super().__init__(enabled=True)
        self.near = near
        self.far = far
        self.fov_y = math.radians(fov_y_degrees)
        self.aspect = aspect
        self.ortho_size = ortho_size
        self.projection_type = projection_type
        self.is_main = is_main

    # --- Pose ---

    def _pose(self):
        if self.entity is None:
            raise RuntimeError("CameraComponent has no entity.")
        return self.entity.transform.global_pose()

    def position(self) -> np.ndarray:
        return self._pose().lin.copy()

    def forward(self) -> np.ndarray:
        """Unit view direction in world space."""
        f = self._pose().forward()
        return f / np.linalg.norm(f)

    # --- Matrices ---

    def get_view_matrix(self) -> np.ndarray:
        return np.linalg.inv(self._pose().as_matrix())

    def get_projection_matrix(self, aspect: Optional[float] = None) -> np.ndarray:
        if aspect is None:
            aspect = self.aspect
        if self.projection_type == "orthographic":
            return self._ortho_projection_matrix(aspect)
        if self.projection_type == "perspective":
            return self._perspective_projection_matrix(aspect)
        raise ValueError(f"Unknown projection type: {self.projection_type!r}")

    def _perspective_projection_matrix(self, aspect: float) -> np.ndarray:
        f = 1.0 / math.tan(self.fov_y * 0.5)
        near, far = self.near, self.far
        proj = np.zeros((4, 4), dtype=np.float64)
        proj[0, 0] = f / max(1e-6, aspect)
        proj[1, 1] = f
        proj[2, 2] = (far + near) / (near - far)
        proj[2, 3] = (2 * far * near) / (near - far)
        proj[3, 2] = -1.0
        return proj

    def _ortho_projection_matrix(self, aspect: float) -> np.ndarray:
        top = self.ortho_size
        bottom = -self.ortho_size
        right = self.ortho_size * aspect
        left = -right
        near, far = self.near, self.far

        lr = right - left
        tb = top - bottom
        fn = far - near

        proj = np.zeros((4, 4), dtype=np.float64)
        proj[0, 0] = 2.0 / lr
        proj[1, 1] = 2.0 / tb
        proj[2, 2] = -2.0 / fn
        proj[0, 3] = -(right + left) / lr
        proj[1, 3] = -(top + bottom) / tb
        proj[2, 3] = -(far + near) / fn
        proj[3, 3] = 1.0
        return proj

    # --- Picking ---

    def screen_point_to_ray(self, x: float, y: float, viewport_rect: Sequence[float]) -> Ray3:
        """
        Луч из камеры через пиксель (x, y).

        viewport_rect = (px, py, width, height) в пикселях окна, начало
        координат в левом верхнем углу. Луч начинается на ближней плоскости.
        """
        px, py, pw, ph = viewport_rect
        # свёрнутое окно даёт нулевой размер
        pw = max(1.0, float(pw))
        ph = max(1.0, float(ph))

        # aspect берём из viewport, а не сохранённый в камере:
        # размер окна мог поменяться
        viewport_aspect = pw / ph

        nx = ((x - px) / pw) * 2.0 - 1.0
        ny = ((y - py) / ph) * -2.0 + 1.0

        PV = self.get_projection_matrix(viewport_aspect) @ self.get_view_matrix()
        inv_PV = np.linalg.inv(PV)

        p_near = inv_PV @ np.array([nx, ny, -1.0, 1.0])
        p_far = inv_PV @ np.array([nx, ny, 1.0, 1.0])

        p_near /= p_near[3]
        p_far /= p_far[3]

        origin = p_near[:3]
        direction = p_far[:3] - p_near[:3]
        return Ray3(origin, direction)
