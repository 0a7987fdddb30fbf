"""Python toolkit for 2D vector sketches with ray-traced light effects.

This package provides a small 2D geometry library, a ray-casting engine and
drawing backends, with support for:
- Analytic intersections between lines, circles, rectangles and Bezier paths
- Ray propagation through mirrors, lenses, Fresnel lines and absorbers
- Emitters that cast rays radially, along a line or from a single point
- Polygon boolean operations (union, intersect) on circles and rectangles
- Raster (Taichi) and SVG (svgwrite) drawing contexts

Subpackages:
    core: Vector arithmetic, rays and the propagation loop
    geometry: Shape primitives, intersections, booleans and hatching
    materials: Ray modification rules applied when a ray hits an object
    emitters: Ray sources and their drawing styles
    scene: Scene objects, nearest-hit search and scene management
    preview: Drawing contexts, display and export utilities
"""

__version__ = "0.1.0"
