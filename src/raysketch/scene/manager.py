"""Scene manager for building, tracing and drawing sketches.

The SceneManager owns the three kinds of scene members:

- An optional bounding box that absorbs every ray (the canvas edge)
- Scene objects: a shape paired with a material
- Emitters, which cast rays; circular emitters are also hit by the rays of
  other emitters

``run`` traces every emitter against all traceable members and ``draw``
renders the result into any drawing context. Scenes serialize to plain
dictionaries through :class:`SceneConfig`.

Example:
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.emitters import DirectionalEmitter
    >>> from raysketch.scene.manager import SceneManager
    >>> scene = SceneManager(200, 200)
    >>> bounds = scene.set_bounding_box()
    >>> mirror = scene.add_line(150, 50, 150, 150)
    >>> emitter = scene.add_emitter(DirectionalEmitter(Vector(50, 100), Vector(1, 0)))
    >>> scene.run()
    1
    >>> len(emitter.rays[0].path)
    2
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from raysketch.config import TraceSettings
from raysketch.core.vector import Vector
from raysketch.emitters import Emitter, emitter_from_dict
from raysketch.geometry.bezier import BezierPath, BezierPoint
from raysketch.geometry.circle import Circle
from raysketch.geometry.intersection import Shape
from raysketch.geometry.line import Line
from raysketch.geometry.rectangle import BoundingBox, Rectangle
from raysketch.materials import (
    AbsorberMaterial,
    FresnelMaterial,
    Material,
    material_from_dict,
    material_to_dict,
)
from raysketch.preview.style import DEFAULT_STYLE, DrawingStyle
from raysketch.scene.intersection import Traceable
from raysketch.scene.objects import SceneObject, default_material

if TYPE_CHECKING:
    from raysketch.preview.context import DrawingContext

logger = logging.getLogger(__name__)


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        width: Canvas width the scene was built for.
        height: Canvas height the scene was built for.
        objects: Scene object configurations (shape plus material).
        emitters: Emitter configurations.
        bounding_box: Bounding box rectangle, or None if the scene has none.
        settings: Trace settings.
    """

    width: float = 1000.0
    height: float = 1000.0
    objects: list[dict[str, Any]] = field(default_factory=list)
    emitters: list[dict[str, Any]] = field(default_factory=list)
    bounding_box: dict[str, Any] | None = None
    settings: dict[str, Any] = field(default_factory=dict)


# =============================================================================
# Shape serialization
# =============================================================================


def _xy(vector: Vector | None) -> list[float] | None:
    return None if vector is None else [vector.x, vector.y]


def _vector(data: list[float] | None) -> Vector | None:
    return None if data is None else Vector(data[0], data[1])


def shape_to_dict(shape: Shape) -> dict[str, Any]:
    """JSON-compatible description of a shape.

    Raises:
        TypeError: If the shape kind is not supported.
    """
    if isinstance(shape, Line):
        return {"type": "line", "start": _xy(shape.start), "end": _xy(shape.end)}
    if isinstance(shape, Circle):
        return {
            "type": "circle",
            "center": _xy(shape.center),
            "radius": shape.radius,
            "radius_offset": shape.radius_offset,
        }
    if isinstance(shape, Rectangle):
        return {
            "type": "rectangle",
            "x": shape.x,
            "y": shape.y,
            "width": shape.width,
            "height": shape.height,
            "rotation": shape.rotation,
        }
    if isinstance(shape, BezierPath):
        return {
            "type": "bezier",
            "start": _xy(shape.start),
            "points": [
                {
                    "point": _xy(p.point),
                    "control1": _xy(p.control1),
                    "control2": _xy(p.control2),
                }
                for p in shape.points
            ],
        }
    raise TypeError(f"Unsupported shape type: {type(shape).__name__}")


def shape_from_dict(data: dict[str, Any]) -> Shape:
    """Rebuild a shape from :func:`shape_to_dict` output.

    Raises:
        ValueError: If the shape type is unknown.
    """
    kind = str(data.get("type", "")).lower()
    if kind == "line":
        return Line(_vector(data["start"]), _vector(data["end"]))
    if kind == "circle":
        return Circle(
            _vector(data["center"]), data["radius"], data.get("radius_offset", 0.0)
        )
    if kind == "rectangle":
        return Rectangle(
            data["x"], data["y"], data["width"], data["height"], data.get("rotation", 0.0)
        )
    if kind == "bezier":
        points = tuple(
            BezierPoint(
                _vector(p["point"]), _vector(p.get("control1")), _vector(p.get("control2"))
            )
            for p in data.get("points", [])
        )
        return BezierPath(_vector(data["start"]), points)
    raise ValueError(f"Unknown shape type: {kind}")


class SceneManager:
    """Builds a sketch scene and traces its emitters.

    Attributes:
        width: Canvas width.
        height: Canvas height.
        objects: Scene objects in insertion order.
        emitters: Emitters in insertion order.
        bounds: The absorbing bounding box, if set.
        settings: Trace settings used by ``run`` when none are passed.

    Example:
        >>> scene = SceneManager(1000, 1000)
        >>> bounds = scene.set_bounding_box()
        >>> lens = scene.add_circle(450, 250, 100)
        >>> lens.material
        RefractiveMaterial(ior=1.46, exterior_ior=1.0)
    """

    def __init__(
        self,
        width: float = 1000.0,
        height: float = 1000.0,
        settings: TraceSettings | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Scene size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.settings = settings or TraceSettings()
        self.objects: list[SceneObject] = []
        self.emitters: list[Emitter] = []
        self.bounds: SceneObject | None = None

    def clear(self) -> None:
        """Remove every object, emitter and the bounding box."""
        self.objects.clear()
        self.emitters.clear()
        self.bounds = None

    # =========================================================================
    # Scene objects
    # =========================================================================

    def add_object(
        self, shape: Shape, material: Material | None = None, name: str = ""
    ) -> SceneObject:
        """Add a shape with ``material`` (or the shape's default material)."""
        obj = SceneObject(shape, material or default_material(shape), name)
        self.objects.append(obj)
        logger.debug("Added %s", obj.describe())
        return obj

    def add_circle(
        self,
        x: float,
        y: float,
        radius: float,
        material: Material | None = None,
        name: str = "",
    ) -> SceneObject:
        """Add a circle, refractive unless another material is given."""
        return self.add_object(Circle(Vector(x, y), radius), material, name)

    def add_rectangle(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        rotation: float = 0.0,
        material: Material | None = None,
        name: str = "",
    ) -> SceneObject:
        """Add a rectangle by its top-left corner, a mirror by default."""
        return self.add_object(Rectangle(x, y, width, height, rotation), material, name)

    def add_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        material: Material | None = None,
        name: str = "",
    ) -> SceneObject:
        """Add a line segment, a mirror by default."""
        return self.add_object(Line.from_coords(x1, y1, x2, y2), material, name)

    def add_fresnel(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        reflection_angle: float = 180.0,
        name: str = "",
    ) -> SceneObject:
        """Add a Fresnel line that collimates rays crossing it."""
        return self.add_line(
            x1, y1, x2, y2, FresnelMaterial(reflection_angle=reflection_angle), name
        )

    def set_bounding_box(self, inset: float = 0.0) -> SceneObject:
        """Surround the canvas with an absorbing box, replacing any previous one."""
        self.bounds = SceneObject(
            BoundingBox.from_canvas(self.width, self.height, inset),
            AbsorberMaterial(),
            "bounds",
        )
        return self.bounds

    def add_emitter(self, emitter: Emitter) -> Emitter:
        self.emitters.append(emitter)
        return emitter

    # =========================================================================
    # Tracing and drawing
    # =========================================================================

    @property
    def traceables(self) -> list[Traceable]:
        """Everything a ray can hit: bounds, objects, then traceable emitters."""
        members: list[Traceable] = []
        if self.bounds is not None:
            members.append(self.bounds)
        members.extend(self.objects)
        members.extend(e for e in self.emitters if hasattr(e, "ray_hit"))
        return members

    def run(self, settings: TraceSettings | None = None) -> int:
        """Trace every emitter against the scene.

        Returns:
            Total number of rays cast.
        """
        settings = settings or self.settings
        if self.bounds is None:
            logger.warning("Scene has no bounding box; rays may escape the canvas")

        members = self.traceables
        start = time.perf_counter()
        total = 0
        for emitter in self.emitters:
            total += len(emitter.run(members, settings))
        elapsed = time.perf_counter() - start

        capped = sum(
            1 for emitter in self.emitters for ray in emitter.rays if ray.is_capped
        )
        logger.info(
            "Traced %d rays from %d emitters in %.2fs", total, len(self.emitters), elapsed
        )
        if capped:
            logger.warning("%d rays reached the iteration cap", capped)
        return total

    def draw(
        self,
        context: DrawingContext,
        *,
        show_objects: bool = False,
        object_style: DrawingStyle = DEFAULT_STYLE,
    ) -> None:
        """Draw the emitters' rays, and optionally the scene objects.

        The bounding box is never drawn. Tracing is not repeated; call
        ``run`` first.
        """
        from raysketch.preview.context import draw_shape

        if show_objects:
            for obj in self.objects:
                draw_shape(context, obj.shape, object_style)
        for emitter in self.emitters:
            emitter.draw(context)

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig(
            width=self.width, height=self.height, settings=self.settings.to_dict()
        )

        for obj in self.objects:
            obj_config: dict[str, Any] = {
                "shape": shape_to_dict(obj.shape),
                "material": material_to_dict(obj.material),
            }
            if obj.name:
                obj_config["name"] = obj.name
            config.objects.append(obj_config)

        config.emitters = [emitter.to_dict() for emitter in self.emitters]

        if self.bounds is not None:
            config.bounding_box = shape_to_dict(self.bounds.shape)

        return config

    def from_config(self, config: SceneConfig) -> None:
        """Replace the scene with the contents of ``config``.

        Raises:
            ValueError: If the configuration contains unknown shape,
                material or emitter types.
        """
        self.clear()
        self.width = config.width
        self.height = config.height
        self.settings = TraceSettings.from_dict(config.settings)

        for obj_config in config.objects:
            shape = shape_from_dict(obj_config["shape"])
            material_config = obj_config.get("material")
            material = material_from_dict(material_config) if material_config else None
            self.add_object(shape, material, obj_config.get("name", ""))

        for emitter_config in config.emitters:
            self.add_emitter(emitter_from_dict(emitter_config))

        if config.bounding_box is not None:
            box = config.bounding_box
            self.bounds = SceneObject(
                BoundingBox(box["x"], box["y"], box["width"], box["height"]),
                AbsorberMaterial(),
                "bounds",
            )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "width": config.width,
            "height": config.height,
            "objects": config.objects,
            "emitters": config.emitters,
            "bounding_box": config.bounding_box,
            "settings": config.settings,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary produced by ``to_dict``."""
        config = SceneConfig(
            width=data.get("width", 1000.0),
            height=data.get("height", 1000.0),
            objects=data.get("objects", []),
            emitters=data.get("emitters", []),
            bounding_box=data.get("bounding_box"),
            settings=data.get("settings", {}),
        )
        self.from_config(config)
