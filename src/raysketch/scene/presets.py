"""Preset scenes.

The demo scene is a 1000 x 1000 refraction sketch: an absorbing border, two
glass lenses, a mirror block, three Fresnel lines and three circular
emitters in red, green and blue. Other canvas sizes scale the layout.
"""

from __future__ import annotations

from raysketch.emitters import CircleEmitter, RayTraceStyle
from raysketch.preview.style import BLUE, GREEN, RED, Color, DrawingStyle
from raysketch.scene.manager import SceneManager

# Layout of the demo scene on a 1000 x 1000 canvas
DEMO_SIZE = 1000.0
DEMO_LENSES = ((450.0, 250.0, 100.0), (875.0, 500.0, 75.0))
DEMO_MIRROR = (200.0, 700.0, 200.0, 100.0)
DEMO_FRESNEL_LINES = (
    (800.0, 300.0, 600.0, 150.0),
    (600.0, 700.0, 700.0, 500.0),
    (150.0, 550.0, 500.0, 600.0),
)
DEMO_EMITTERS: tuple[tuple[str, float, float, Color], ...] = (
    ("red", 600.0, 400.0, RED),
    ("green", 650.0, 800.0, GREEN),
    ("blue", 155.0, 480.0, BLUE),
)
DEMO_EMITTER_RADIUS = 50.0

# Ray opacity; overlapping paths accumulate on an additive canvas
DEMO_RAY_OPACITY = 0.33


def create_demo_scene(
    width: float = DEMO_SIZE,
    height: float = DEMO_SIZE,
    ray_step: float = 1.0,
    style: RayTraceStyle = RayTraceStyle.LINE,
) -> SceneManager:
    """Build the three-emitter refraction sketch.

    Args:
        width: Canvas width.
        height: Canvas height.
        ray_step: Degrees between the rays of each emitter.
        style: How emitter paths are drawn.

    Returns:
        An untraced SceneManager; call ``run`` before drawing.
    """
    sx = width / DEMO_SIZE
    sy = height / DEMO_SIZE
    sr = min(sx, sy)

    scene = SceneManager(width, height)
    scene.set_bounding_box()

    for x, y, radius in DEMO_LENSES:
        scene.add_circle(x * sx, y * sy, radius * sr, name="lens")

    x, y, w, h = DEMO_MIRROR
    scene.add_rectangle(x * sx, y * sy, w * sx, h * sy, name="mirror")

    for x1, y1, x2, y2 in DEMO_FRESNEL_LINES:
        scene.add_fresnel(x1 * sx, y1 * sy, x2 * sx, y2 * sy, name="fresnel")

    for name, x, y, color in DEMO_EMITTERS:
        scene.add_emitter(
            CircleEmitter.from_coords(
                x * sx,
                y * sy,
                DEMO_EMITTER_RADIUS * sr,
                ray_step,
                style=style,
                draw_style=DrawingStyle(stroke=color, opacity=DEMO_RAY_OPACITY),
                name=name,
            )
        )

    return scene
