"""
VfxMouseEmitterComponent fed by a real GLFW window.

Move the mouse over the window and hold the left button; the effect
properties are logged twice a second. Close the window to exit.
"""

import logging
import time

import glfw

from mousefx.geombase import GeneralPose3
from mousefx.core import CameraComponent, Entity, Scene, VisualEffectComponent
from mousefx.components import MouseEmitterConfig, PlaneMode, VfxMouseEmitterComponent
from mousefx.platform.glfw_input import GlfwInputSource


def main():
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    if not glfw.init():
        raise RuntimeError("Failed to initialize GLFW")
    window = glfw.create_window(800, 600, "mousefx", None, None)
    if not window:
        glfw.terminate()
        raise RuntimeError("Failed to create GLFW window")
    glfw.make_context_current(window)

    scene = Scene(input_source=GlfwInputSource(window))

    camera_entity = Entity(pose=GeneralPose3.looking_at(eye=[0.0, 5.0, -5.0], target=[0.0, 0.0, 0.0]), name="camera")
    camera_entity.add_component(CameraComponent(is_main=True))
    scene.add(camera_entity)

    fx_entity = Entity(name="fx")
    fx_entity.add_component(VisualEffectComponent())
    fx_entity.add_component(VfxMouseEmitterComponent(
        config=MouseEmitterConfig(plane_mode=PlaneMode.VIEWPOINT_PLANE, camera_plane_distance=5.0),
    ))
    scene.add(fx_entity)

    last = time.perf_counter()
    try:
        while not glfw.window_should_close(window):
            glfw.poll_events()
            now = time.perf_counter()
            scene.update(now - last)
            last = now
            glfw.swap_buffers(window)
    finally:
        glfw.destroy_window(window)
        glfw.terminate()


if __name__ == "__main__":
    main()
