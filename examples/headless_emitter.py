"""
Headless run of VfxMouseEmitterComponent with a scripted cursor.

    python examples/headless_emitter.py
"""

import logging
import math

from mousefx.geombase import GeneralPose3
from mousefx.core import CameraComponent, Entity, ManualInputSource, MouseButton, Scene, VisualEffectComponent
from mousefx.components import MouseEmitterConfig, VfxMouseEmitterComponent


def build_scene(input_source: ManualInputSource) -> Scene:
    scene = Scene(input_source=input_source)

    camera_entity = Entity(pose=GeneralPose3.looking_at(eye=[0.0, 5.0, -5.0], target=[0.0, 0.0, 0.0]), name="camera")
    camera_entity.add_component(CameraComponent(is_main=True))
    scene.add(camera_entity)

    fx_entity = Entity(pose=GeneralPose3.translation(1.0, 0.0, 2.0), name="fx")
    fx_entity.add_component(VisualEffectComponent())
    fx_entity.add_component(VfxMouseEmitterComponent(config=MouseEmitterConfig(diagnostics_interval=0.25)))
    scene.add(fx_entity)
    return scene


def main():
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    mouse = ManualInputSource(width=800, height=600)
    scene = build_scene(mouse)
    effect = scene.entities[1].find_component(VisualEffectComponent)

    dt = 1.0 / 60.0
    for frame in range(120):
        angle = frame * dt * math.pi
        mouse.move_to(400 + 200 * math.cos(angle), 300 + 150 * math.sin(angle))
        if frame == 30:
            mouse.press(MouseButton.LEFT)
        if frame == 90:
            mouse.release(MouseButton.LEFT)
        scene.update(dt)

    print("Emit:", effect.get_float("Emit"), "MouseWorld:", effect.get_vector3("MouseWorld"))


if __name__ == "__main__":
    main()
