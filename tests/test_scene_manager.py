"""Tests for the SceneManager, scene serialization and the demo preset."""

import json
import logging
import xml.etree.ElementTree as ET

import pytest

SVG_NS = "{http://www.w3.org/2000/svg}"


def _count(context, tag):
    return len(ET.fromstring(context.tostring()).findall(f".//{SVG_NS}{tag}"))


class TestSceneBuilding:
    """Test adding members to a scene."""

    def test_invalid_size(self):
        from raysketch.scene.manager import SceneManager

        with pytest.raises(ValueError):
            SceneManager(0, 100)

    def test_default_materials(self):
        from raysketch.materials import MirrorMaterial, RefractiveMaterial
        from raysketch.scene.manager import SceneManager

        scene = SceneManager(1000, 1000)
        assert scene.add_circle(100, 100, 10).material == RefractiveMaterial()
        assert scene.add_rectangle(10, 10, 50, 20).material == MirrorMaterial()
        assert scene.add_line(0, 0, 10, 10).material == MirrorMaterial()
        assert len(scene.objects) == 3

    def test_explicit_material(self):
        from raysketch.materials import AbsorberMaterial
        from raysketch.scene.manager import SceneManager

        scene = SceneManager()
        obj = scene.add_circle(100, 100, 10, material=AbsorberMaterial(), name="dark")
        assert obj.material == AbsorberMaterial()
        assert obj.name == "dark"

    def test_add_fresnel(self):
        from raysketch.materials import FresnelMaterial
        from raysketch.scene.manager import SceneManager

        scene = SceneManager()
        obj = scene.add_fresnel(0, 0, 100, 0, reflection_angle=90.0)
        assert obj.material == FresnelMaterial(reflection_angle=90.0)

    def test_bounding_box_is_replaced(self):
        from raysketch.scene.manager import SceneManager

        scene = SceneManager(500, 400)
        scene.set_bounding_box()
        bounds = scene.set_bounding_box(inset=10)

        assert scene.bounds is bounds
        assert bounds.shape.x == 10
        assert bounds.shape.width == 480
        assert bounds.shape.height == 380

    def test_traceables_order(self):
        from raysketch.core.vector import Vector
        from raysketch.emitters import CircleEmitter, DirectionalEmitter
        from raysketch.scene.manager import SceneManager

        scene = SceneManager()
        line = scene.add_line(0, 0, 10, 10)
        circle_emitter = scene.add_emitter(CircleEmitter.from_coords(500, 500, 50))
        scene.add_emitter(DirectionalEmitter(Vector(0, 0), Vector(1, 0)))
        bounds = scene.set_bounding_box()

        assert scene.traceables == [bounds, line, circle_emitter]

    def test_clear(self):
        from raysketch.emitters import CircleEmitter
        from raysketch.scene.manager import SceneManager

        scene = SceneManager()
        scene.set_bounding_box()
        scene.add_line(0, 0, 10, 10)
        scene.add_emitter(CircleEmitter.from_coords(500, 500, 50))
        scene.clear()

        assert scene.objects == []
        assert scene.emitters == []
        assert scene.bounds is None


class TestSceneRun:
    """Test tracing and drawing a scene."""

    def test_run_returns_total_rays(self):
        from raysketch.emitters import CircleEmitter
        from raysketch.scene.manager import SceneManager

        scene = SceneManager(1000, 1000)
        scene.set_bounding_box()
        scene.add_emitter(CircleEmitter.from_coords(250, 250, 20, ray_step=90))
        scene.add_emitter(CircleEmitter.from_coords(750, 750, 20, ray_step=45))

        assert scene.run() == 12

    def test_emitters_see_each_other(self):
        from raysketch.core.vector import Vector
        from raysketch.emitters import CircleEmitter, DirectionalEmitter
        from raysketch.scene.manager import SceneManager

        scene = SceneManager(1000, 1000)
        scene.set_bounding_box()
        scene.add_emitter(CircleEmitter.from_coords(500, 500, 50, ray_step=90))
        beam = scene.add_emitter(DirectionalEmitter(Vector(100, 500), Vector(1, 0)))
        scene.run()

        assert len(beam.rays[0].path) == 3

    def test_missing_bounds_warns(self, caplog):
        from raysketch.core.vector import Vector
        from raysketch.emitters import DirectionalEmitter
        from raysketch.scene.manager import SceneManager

        scene = SceneManager(100, 100)
        scene.add_emitter(DirectionalEmitter(Vector(50, 50), Vector(1, 0)))

        with caplog.at_level(logging.WARNING, logger="raysketch"):
            assert scene.run() == 1

        assert "no bounding box" in caplog.text
        assert scene.emitters[0].rays[0].path == []

    def test_capped_rays_are_reported(self, caplog):
        from raysketch.config import TraceSettings
        from raysketch.core.vector import Vector
        from raysketch.emitters import DirectionalEmitter
        from raysketch.scene.manager import SceneManager

        scene = SceneManager(100, 100, settings=TraceSettings(max_iterations=20))
        scene.add_line(0, 0, 0, 100)
        scene.add_line(100, 0, 100, 100)
        scene.add_emitter(DirectionalEmitter(Vector(50, 50), Vector(1, 0)))

        with caplog.at_level(logging.WARNING, logger="raysketch"):
            scene.run()

        assert "1 rays reached the iteration cap" in caplog.text
        assert len(scene.emitters[0].rays[0].path) == 20

    def test_absorbed_rays_on_last_step_are_not_reported(self, caplog):
        from raysketch.config import TraceSettings
        from raysketch.core.vector import Vector
        from raysketch.emitters import DirectionalEmitter
        from raysketch.scene.manager import SceneManager

        scene = SceneManager(100, 100, settings=TraceSettings(max_iterations=1))
        scene.set_bounding_box()
        scene.add_emitter(DirectionalEmitter(Vector(50, 50), Vector(1, 0)))

        with caplog.at_level(logging.WARNING, logger="raysketch"):
            scene.run()

        ray = scene.emitters[0].rays[0]
        assert ray.iteration_count == 1
        assert not ray.is_capped
        assert "iteration cap" not in caplog.text

    def test_draw_skips_bounds_and_objects_by_default(self):
        from raysketch.core.vector import Vector
        from raysketch.emitters import DirectionalEmitter
        from raysketch.preview.svg import SVGContext
        from raysketch.scene.manager import SceneManager

        scene = SceneManager(200, 200)
        scene.set_bounding_box()
        scene.add_rectangle(150, 20, 20, 20)
        scene.add_emitter(DirectionalEmitter(Vector(10, 100), Vector(1, 0)))
        scene.run()

        context = SVGContext(200, 200)
        scene.draw(context)
        assert _count(context, "rect") == 0
        assert _count(context, "line") == 1

        context = SVGContext(200, 200)
        scene.draw(context, show_objects=True)
        assert _count(context, "rect") == 1


class TestSceneSerialization:
    """Test scene dictionaries and configs."""

    def _build(self):
        from raysketch.core.vector import Vector
        from raysketch.emitters import CircleEmitter, LinearEmitter
        from raysketch.geometry.bezier import BezierPath
        from raysketch.geometry.line import Line
        from raysketch.scene.manager import SceneManager

        scene = SceneManager(800, 600)
        scene.set_bounding_box(inset=5)
        scene.add_circle(100, 100, 30, name="lens")
        scene.add_rectangle(300, 300, 50, 20, rotation=0.5)
        scene.add_fresnel(400, 100, 500, 150)
        scene.add_object(BezierPath.polyline([Vector(0, 0), Vector(10, 0), Vector(10, 10)]))
        scene.add_emitter(CircleEmitter.from_coords(600, 400, 40, ray_step=10, name="red"))
        scene.add_emitter(LinearEmitter(Line.from_coords(50, 500, 150, 500), ray_step=20))
        return scene

    def test_dict_survives_json(self):
        from raysketch.scene.manager import SceneManager

        scene = self._build()
        data = json.loads(json.dumps(scene.to_dict()))

        restored = SceneManager()
        restored.from_dict(data)

        assert restored.to_dict() == scene.to_dict()
        assert restored.width == 800
        assert len(restored.objects) == 4
        assert len(restored.emitters) == 2
        assert restored.bounds is not None

    def test_restored_scene_traces_the_same(self):
        from raysketch.scene.manager import SceneManager

        scene = self._build()
        restored = SceneManager()
        restored.from_config(scene.to_config())

        assert restored.run() == scene.run()
        for original, copy in zip(scene.emitters, restored.emitters):
            assert [len(p) for p in original.paths] == [len(p) for p in copy.paths]

    def test_settings_round_trip(self):
        from raysketch.config import TraceSettings
        from raysketch.scene.manager import SceneManager

        scene = SceneManager(settings=TraceSettings(max_iterations=50))
        restored = SceneManager()
        restored.from_dict(scene.to_dict())
        assert restored.settings == TraceSettings(max_iterations=50)

    def test_unknown_shape(self):
        from raysketch.scene.manager import SceneManager

        scene = SceneManager()
        with pytest.raises(ValueError, match="Unknown shape type"):
            scene.from_dict({"objects": [{"shape": {"type": "ellipse"}}]})

    def test_unsupported_shape_to_dict(self):
        from raysketch.scene.manager import shape_to_dict

        with pytest.raises(TypeError):
            shape_to_dict("circle")  # type: ignore[arg-type]

    def test_shape_dicts(self):
        from raysketch.core.vector import Vector
        from raysketch.geometry.bezier import BezierPath, BezierPoint
        from raysketch.geometry.circle import Circle
        from raysketch.geometry.line import Line
        from raysketch.geometry.rectangle import Rectangle
        from raysketch.scene.manager import shape_from_dict, shape_to_dict

        curve = BezierPath(
            Vector(0, 0), (BezierPoint(Vector(10, 0), Vector(3, 5), Vector(7, 5)),)
        )
        for shape in (
            Line.from_coords(1, 2, 3, 4),
            Circle(Vector(5, 5), 2, 1),
            Rectangle(0, 0, 10, 5, 0.25),
            curve,
        ):
            assert shape_from_dict(shape_to_dict(shape)) == shape


class TestDemoScene:
    """Test the preset refraction sketch."""

    def test_members(self):
        from raysketch.scene.presets import create_demo_scene

        scene = create_demo_scene()

        assert scene.bounds is not None
        assert len(scene.objects) == 6
        assert [e.name for e in scene.emitters] == ["red", "green", "blue"]
        assert all(e.draw_style.opacity == 0.33 for e in scene.emitters)

    def test_scaled_layout(self):
        from raysketch.scene.presets import create_demo_scene

        scene = create_demo_scene(500, 500)
        lens = scene.objects[0]
        assert lens.shape.center.x == pytest.approx(225)
        assert lens.shape.radius == pytest.approx(50)
        assert scene.emitters[0].circle.radius == pytest.approx(25)

    def test_run(self):
        from raysketch.scene.presets import create_demo_scene

        scene = create_demo_scene(ray_step=30)
        assert scene.run() == 36
        for emitter in scene.emitters:
            for ray in emitter.rays:
                assert ray.is_terminated
                assert len(ray.path) >= 1
