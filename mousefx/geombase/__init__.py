"""
Базовые геометрические классы (Geometric Base).

- GeneralPose3 - позы с масштабированием
- Ray3 - луч
- Plane3 - плоскость и пересечение луча с ней
"""

from .general_pose3 import GeneralPose3
from .ray import Ray3
from .plane import Plane3, PARALLEL_EPSILON

__all__ = [
    'GeneralPose3',
    'Ray3',
    'Plane3',
    'PARALLEL_EPSILON',
]
