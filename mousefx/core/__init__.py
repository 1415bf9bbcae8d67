"""Минимальное ядро сцены: компоненты, сущности, камера, ввод и эффекты."""

from mousefx.core.component import Component, COMPONENT_REGISTRY
from mousefx.core.entity import Entity
from mousefx.core.input import InputSource, InputState, ManualInputSource, MouseButton
from mousefx.core.camera import CameraComponent
from mousefx.core.effect import EffectTarget, VisualEffectComponent
from mousefx.core.scene import Scene

__all__ = [
    "Component",
    "COMPONENT_REGISTRY",
    "Entity",
    "InputSource",
    "InputState",
    "ManualInputSource",
    "MouseButton",
    "CameraComponent",
    "EffectTarget",
    "VisualEffectComponent",
    "Scene",
]
