"""
mousefx - курсор мыши → точка на плоскости → свойства эффекта частиц.

Основные модули:
- geombase - позы, лучи, плоскости
- core - компоненты, сущности, сцена, камера, ввод, эффекты
- components - VfxMouseEmitterComponent
"""

from .geombase import GeneralPose3, Plane3, Ray3
from .components import MouseEmitterConfig, PlaneMode, VfxMouseEmitterComponent

__version__ = '0.1.0'

__all__ = [
    'GeneralPose3',
    'Plane3',
    'Ray3',
    'MouseEmitterConfig',
    'PlaneMode',
    'VfxMouseEmitterComponent',
]
