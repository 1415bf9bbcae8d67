"""Infinite plane given by a unit normal and an anchor point."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from mousefx.geombase.ray import Ray3

# |dot(direction, normal)| below this counts as a ray parallel to the plane.
PARALLEL_EPSILON = 1e-6


class Plane3:
    """
    Плоскость в 3D: normal — единичная нормаль, point — любая точка плоскости.
    """

    def __init__(self, normal: np.ndarray, point: np.ndarray):
        n = np.asarray(normal, dtype=np.float64)
        length = np.linalg.norm(n)
        if length <= 1e-12:
            raise ValueError("Plane3: normal must be non-zero")
        self.normal = n / length
        self.point = np.asarray(point, dtype=np.float64)

    @property
    def distance(self) -> float:
        """Signed offset d of the plane equation dot(n, p) + d = 0."""
        return -float(np.dot(self.normal, self.point))

    def signed_distance(self, p: np.ndarray) -> float:
        return float(np.dot(np.asarray(p, dtype=np.float64) - self.point, self.normal))

    def raycast(self, ray: Ray3) -> Tuple[bool, float]:
        """
        Пересечение луча с плоскостью.

        Returns (ok, enter): ray.point_at(enter) lies on the plane when ok.
        A ray parallel to the plane gives (False, 0.0); a plane behind the
        ray origin gives (False, enter) with the negative enter kept.
        """
        vdot = float(np.dot(ray.direction, self.normal))
        if abs(vdot) < PARALLEL_EPSILON:
            return False, 0.0

        enter = float(np.dot(self.point - ray.origin, self.normal)) / vdot
        return enter >= 0.0, enter

    def __repr__(self):
        return f"Plane3(normal={self.normal}, point={self.point})"
