"""Tests for VfxMouseEmitterComponent: plane modes, fallback, local space, emission, init errors."""

import logging
import math

import numpy as np
import pytest

from mousefx.components import (
    EmitterError,
    MouseEmitterConfig,
    PlaneMode,
    VfxMouseEmitterComponent,
    make_plane,
)
from mousefx.core import (
    CameraComponent,
    Entity,
    ManualInputSource,
    MouseButton,
    Scene,
    VisualEffectComponent,
)
from mousefx.geombase import GeneralPose3

EYE = np.array([0.0, 5.0, -5.0])
DT = 1.0 / 60.0


def build(config=None, camera_pose=None, fx_pose=None, with_camera=True, with_effect=True):
    mouse = ManualInputSource(width=800, height=600)
    scene = Scene(input_source=mouse)

    camera = None
    if with_camera:
        if camera_pose is None:
            camera_pose = GeneralPose3.looking_at(eye=EYE, target=[0.0, 0.0, 0.0])
        cam_entity = Entity(pose=camera_pose, name="camera")
        camera = cam_entity.add_component(CameraComponent(is_main=True))
        scene.add(cam_entity)

    fx_entity = Entity(pose=fx_pose, name="fx")
    effect = fx_entity.add_component(VisualEffectComponent()) if with_effect else None
    emitter = fx_entity.add_component(VfxMouseEmitterComponent(config=config))
    scene.add(fx_entity)
    return scene, mouse, camera, effect, emitter


def world_config(**kwargs):
    kwargs.setdefault("send_local_space", False)
    kwargs.setdefault("enable_diagnostics", False)
    return MouseEmitterConfig(**kwargs)


class TestWorldPlane:

    def test_center_of_screen_hits_origin(self):
        scene, mouse, camera, effect, emitter = build(world_config())

        scene.update(DT)

        sample = emitter.last_sample
        assert sample.ok
        assert sample.world_point[1] == pytest.approx(0.0, abs=1e-9)
        np.testing.assert_allclose(sample.world_point, [0.0, 0.0, 0.0], atol=1e-9)
        assert sample.enter == pytest.approx(np.linalg.norm(EYE) - camera.near)
        np.testing.assert_allclose(effect.get_vector3("MouseWorld"), sample.world_point)

    @pytest.mark.parametrize("plane_y", [0.0, 2.0, -1.5])
    def test_hits_lie_on_plane(self, plane_y):
        scene, mouse, camera, effect, emitter = build(world_config(plane_y=plane_y))

        hits = 0
        for x in range(0, 801, 100):
            for y in range(0, 601, 100):
                mouse.move_to(x, y)
                scene.update(DT)
                sample = emitter.last_sample
                if not sample.ok:
                    continue
                hits += 1
                assert sample.enter >= 0.0
                assert sample.world_point[1] == pytest.approx(plane_y, abs=1e-6)
        assert hits > 0

    def test_parallel_ray_falls_back_to_origin(self):
        pose = GeneralPose3.looking_at(eye=[0.0, 1.0, 0.0], target=[0.0, 1.0, 10.0])
        scene, mouse, camera, effect, emitter = build(world_config(plane_y=1.0), camera_pose=pose)
        effect.set_vector3("MouseWorld", [9.0, 9.0, 9.0])

        scene.update(DT)

        assert not emitter.last_sample.ok
        assert emitter.last_sample.enter == 0.0
        np.testing.assert_array_equal(effect.get_vector3("MouseWorld"), [0.0, 0.0, 0.0])

    def test_plane_behind_camera_falls_back_to_origin(self):
        pose = GeneralPose3.looking_at(eye=[0.0, 5.0, 0.0], target=[0.0, 10.0, 1.0])
        scene, mouse, camera, effect, emitter = build(world_config(), camera_pose=pose)

        scene.update(DT)

        sample = emitter.last_sample
        assert not sample.ok
        assert sample.enter < 0.0
        np.testing.assert_array_equal(sample.world_point, [0.0, 0.0, 0.0])
        np.testing.assert_array_equal(effect.get_vector3("MouseWorld"), [0.0, 0.0, 0.0])

    def test_fallback_in_local_space_sends_local_origin(self):
        pose = GeneralPose3.looking_at(eye=[0.0, 1.0, 0.0], target=[0.0, 1.0, 10.0])
        config = world_config(plane_y=1.0, send_local_space=True)
        scene, mouse, camera, effect, emitter = build(
            config, camera_pose=pose, fx_pose=GeneralPose3.translation(3.0, 4.0, 5.0)
        )

        scene.update(DT)

        np.testing.assert_array_equal(effect.get_vector3("MouseWorld"), [0.0, 0.0, 0.0])


class TestViewpointPlane:

    def test_plane_follows_camera(self):
        config = world_config(plane_mode=PlaneMode.VIEWPOINT_PLANE, camera_plane_distance=4.0)
        scene, mouse, camera, effect, emitter = build(config)

        first = make_plane(config, camera)
        np.testing.assert_allclose(first.normal, camera.forward(), atol=1e-12)
        np.testing.assert_allclose(first.point, camera.position() + camera.forward() * 4.0, atol=1e-12)

        camera.entity.transform.relocate(GeneralPose3.looking_at(eye=[6.0, 1.0, 0.0], target=[0.0, 0.0, 0.0]))
        second = make_plane(config, camera)

        np.testing.assert_allclose(second.normal, camera.forward(), atol=1e-12)
        np.testing.assert_allclose(second.point, camera.position() + camera.forward() * 4.0, atol=1e-12)
        assert not np.allclose(first.normal, second.normal)
        assert not np.allclose(first.point, second.point)

    def test_center_point_is_in_front_of_camera_each_frame(self):
        config = world_config(plane_mode=PlaneMode.VIEWPOINT_PLANE, camera_plane_distance=3.0)
        scene, mouse, camera, effect, emitter = build(config)

        for eye in ([0.0, 5.0, -5.0], [4.0, 2.0, 1.0], [-3.0, 0.5, 2.0]):
            camera.entity.transform.relocate(GeneralPose3.looking_at(eye=eye, target=[0.0, 0.0, 0.0]))
            scene.update(DT)

            sample = emitter.last_sample
            assert sample.ok
            expected = np.array(eye) + camera.forward() * 3.0
            np.testing.assert_allclose(sample.world_point, expected, atol=1e-9)
            assert sample.enter == pytest.approx(3.0 - camera.near)

    def test_grazing_camera_still_hits(self):
        pose = GeneralPose3.looking_at(eye=[0.0, 1.0, 0.0], target=[0.0, 1.0, 10.0])
        config = world_config(plane_mode=PlaneMode.VIEWPOINT_PLANE, plane_y=1.0)
        scene, mouse, camera, effect, emitter = build(config, camera_pose=pose)

        mouse.move_to(100, 500)
        scene.update(DT)

        sample = emitter.last_sample
        assert sample.ok
        plane = make_plane(config, camera)
        assert plane.signed_distance(sample.world_point) == pytest.approx(0.0, abs=1e-9)


class TestLocalSpace:

    @pytest.mark.parametrize("scale", [(1.0, 1.0, 1.0), (2.0, 2.0, 2.0), (0.5, 2.0, 4.0)])
    def test_round_trip_through_effect_pose(self, scale):
        fx_pose = GeneralPose3(
            ang=GeneralPose3.rotateY(math.radians(30.0)).ang,
            lin=[1.0, -2.0, 3.0],
            scale=scale,
        )
        config = world_config(send_local_space=True)
        scene, mouse, camera, effect, emitter = build(config, fx_pose=fx_pose)

        mouse.move_to(250, 420)
        scene.update(DT)

        sample = emitter.last_sample
        assert sample.ok
        sent = effect.get_vector3("MouseWorld")
        np.testing.assert_allclose(sent, sample.sent_point)
        np.testing.assert_allclose(fx_pose.transform_point(sent), sample.world_point, atol=1e-9)
        assert not np.allclose(sent, sample.world_point)

    def test_world_space_sends_world_point(self):
        config = world_config(send_local_space=False)
        scene, mouse, camera, effect, emitter = build(config, fx_pose=GeneralPose3.translation(5.0, 0.0, 0.0))

        mouse.move_to(250, 420)
        scene.update(DT)

        np.testing.assert_allclose(effect.get_vector3("MouseWorld"), emitter.last_sample.world_point)


class TestEmission:

    def test_level_signal_every_frame(self):
        scene, mouse, camera, effect, emitter = build(world_config())
        script = [False, True, True, False, True, False, False]

        for held in script:
            if held:
                mouse.press(MouseButton.LEFT)
            else:
                mouse.release(MouseButton.LEFT)
            scene.update(DT)
            assert effect.get_float("Emit") == (1.0 if held else 0.0)

    def test_only_configured_button_emits(self):
        scene, mouse, camera, effect, emitter = build(world_config(mouse_button=MouseButton.RIGHT))

        mouse.press(MouseButton.LEFT)
        scene.update(DT)
        assert effect.get_float("Emit") == 0.0

        mouse.press(MouseButton.RIGHT)
        scene.update(DT)
        assert effect.get_float("Emit") == 1.0

    def test_two_writes_per_frame(self):
        scene, mouse, camera, effect, emitter = build(world_config())
        for _ in range(5):
            scene.update(DT)
        assert effect.write_count == 10

    def test_zero_size_viewport_still_writes(self):
        scene, mouse, camera, effect, emitter = build(world_config())
        mouse.resize(0, 0)
        mouse.move_to(0, 0)
        mouse.press(MouseButton.LEFT)

        scene.update(DT)

        assert effect.write_count == 2
        assert effect.get_float("Emit") == 1.0
        assert np.all(np.isfinite(effect.get_vector3("MouseWorld")))

    def test_mismatched_names_are_silent(self, caplog):
        config = world_config(emit_property_name="emit", vector_property_name="mouseWorld")
        scene, mouse, camera, effect, emitter = build(config)
        mouse.press(MouseButton.LEFT)

        with caplog.at_level(logging.WARNING, logger="mousefx"):
            scene.update(DT)

        assert effect.get_float("Emit") == 0.0
        np.testing.assert_array_equal(effect.get_vector3("MouseWorld"), [0.0, 0.0, 0.0])
        assert emitter.enabled
        assert caplog.records == []


class TestInitialization:

    def test_references_resolved_from_entity_and_scene(self):
        scene, mouse, camera, effect, emitter = build(world_config())
        scene.update(DT)
        assert emitter.effect is effect
        assert emitter.camera is camera
        assert emitter.input_source is mouse
        assert emitter.errors == []

    def test_camera_added_after_emitter_is_found(self):
        mouse = ManualInputSource()
        scene = Scene(input_source=mouse)
        fx_entity = Entity(name="fx")
        fx_entity.add_component(VisualEffectComponent())
        emitter = fx_entity.add_component(VfxMouseEmitterComponent(config=world_config()))
        scene.add(fx_entity)

        cam_entity = Entity(pose=GeneralPose3.looking_at(eye=EYE, target=[0.0, 0.0, 0.0]), name="camera")
        cam_entity.add_component(CameraComponent())
        scene.add(cam_entity)

        scene.update(DT)
        assert emitter.enabled
        assert emitter.last_sample.ok

    def test_missing_effect_target(self, caplog):
        scene, mouse, camera, effect, emitter = build(world_config(), with_effect=False)

        with caplog.at_level(logging.ERROR, logger="mousefx"):
            for _ in range(3):
                scene.update(DT)

        assert emitter.errors == [EmitterError.MISSING_EFFECT_TARGET]
        assert not emitter.enabled
        assert emitter.last_sample is None
        messages = [r.getMessage() for r in caplog.records]
        assert len(messages) == 1
        assert "Effect target missing" in messages[0]

    def test_missing_viewpoint(self, caplog):
        scene, mouse, camera, effect, emitter = build(world_config(), with_camera=False)

        with caplog.at_level(logging.ERROR, logger="mousefx"):
            for _ in range(3):
                scene.update(DT)

        assert emitter.errors == [EmitterError.MISSING_VIEWPOINT]
        assert not emitter.enabled
        assert effect.write_count == 0
        messages = [r.getMessage() for r in caplog.records]
        assert len(messages) == 1
        assert "Camera missing" in messages[0]

    def test_both_missing_reported_separately(self, caplog):
        scene, mouse, camera, effect, emitter = build(world_config(), with_camera=False, with_effect=False)

        with caplog.at_level(logging.ERROR, logger="mousefx"):
            scene.update(DT)

        assert emitter.errors == [EmitterError.MISSING_EFFECT_TARGET, EmitterError.MISSING_VIEWPOINT]
        assert not emitter.enabled
        assert len(caplog.records) == 2

    def test_update_without_references_is_noop(self):
        emitter = VfxMouseEmitterComponent(config=world_config())
        emitter.update(DT)
        assert emitter.last_sample is None

    def test_explicit_references_without_scene(self):
        cam_entity = Entity(pose=GeneralPose3.looking_at(eye=EYE, target=[0.0, 0.0, 0.0]))
        camera = cam_entity.add_component(CameraComponent())
        effect = VisualEffectComponent()
        mouse = ManualInputSource()
        emitter = VfxMouseEmitterComponent(effect=effect, camera=camera, input_source=mouse, config=world_config())

        mouse.press(MouseButton.LEFT)
        emitter.update(DT)

        assert effect.get_float("Emit") == 1.0
        assert emitter.last_sample.ok


class TestDiagnostics:

    def _info_lines(self, caplog):
        return [r.getMessage() for r in caplog.records if "ok=" in r.getMessage()]

    def test_logged_on_interval(self, caplog):
        config = world_config(enable_diagnostics=True, diagnostics_interval=0.5)
        scene, mouse, camera, effect, emitter = build(config)

        with caplog.at_level(logging.INFO, logger="mousefx"):
            for _ in range(6):
                scene.update(0.2)

        lines = self._info_lines(caplog)
        assert len(lines) == 2
        assert "ok=True" in lines[0]
        assert "enter=" in lines[0]
        assert "world=(" in lines[0] and "sent=(" in lines[0]
        assert "planeMode=WORLD_PLANE" in lines[0]
        assert "local=False" in lines[0]

    def test_disabled_diagnostics_are_silent(self, caplog):
        scene, mouse, camera, effect, emitter = build(world_config(enable_diagnostics=False))

        with caplog.at_level(logging.INFO, logger="mousefx"):
            for _ in range(60):
                scene.update(0.1)

        assert self._info_lines(caplog) == []
