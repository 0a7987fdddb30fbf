"""Ray propagation through a scene of traceable objects.

Each step finds the closest object the ray hits, records the travelled
segment, moves the ray's origin to the hit point and lets the object's
material rewrite the direction or terminate the ray:

    while not terminated:
        hit = nearest hit among candidates
        no hit       -> terminate
        hit          -> path += Line(origin, hit.point); origin = hit.point
                        hit.target.modify_ray(ray)
        iterations  += 1; past the cap -> terminate (logged)

A ray leaving a surface does not hit it again at distance zero because every
shape rejects hits whose ray parameter rounds to zero. When
``TraceSettings.exclude_previous_hit`` is set, the object hit in the previous
step is additionally left out of the next step's candidates.

Example:
    >>> from raysketch.core.ray import Ray
    >>> from raysketch.core.tracer import trace_ray
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.scene.objects import bounding_box
    >>> ray = trace_ray(Ray(Vector(50, 50), Vector(1, 0)), [bounding_box(100, 100)])
    >>> len(ray.path), ray.is_terminated
    (1, True)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from raysketch.config import TraceSettings
from raysketch.core.ray import Ray
from raysketch.scene.intersection import Traceable, find_nearest_hit

logger = logging.getLogger(__name__)


def step_ray(
    ray: Ray,
    candidates: Iterable[Traceable],
    precision: int,
) -> Traceable | None:
    """Advance a ray by a single hit.

    Returns:
        The object that was hit, or None if nothing was hit (the ray is then
        terminated).
    """
    hit = find_nearest_hit(ray.origin, ray.direction, candidates, precision)
    if hit is None:
        ray.terminate()
        return None

    ray.advance_to(hit.point)
    hit.target.modify_ray(ray)
    return hit.target


def trace_ray(
    ray: Ray,
    objects: Sequence[Traceable],
    settings: TraceSettings | None = None,
) -> Ray:
    """Propagate ``ray`` until it is terminated.

    Args:
        ray: The ray to trace; mutated in place.
        objects: Objects the ray can hit.
        settings: Hit precision, self-exclusion and iteration cap. The
            effective cap is the smaller of ``settings.max_iterations`` and
            ``ray.max_iterations``; without settings only the ray's cap
            applies.

    Returns:
        The same ray, terminated, with its full path.
    """
    limit = ray.max_iterations
    if settings is None:
        settings = TraceSettings()
    else:
        limit = min(limit, settings.max_iterations)
    previous: Traceable | None = None

    while not ray.is_terminated:
        candidates: Sequence[Traceable] = objects
        if settings.exclude_previous_hit and previous is not None:
            candidates = [obj for obj in objects if obj is not previous]

        previous = step_ray(ray, candidates, settings.hit_precision)
        ray.iteration_count += 1

        if not ray.is_terminated and ray.iteration_count >= limit:
            logger.warning(
                "Ray from %s hit the iteration cap (%d steps); terminating",
                ray.path[0].start.to_tuple() if ray.path else ray.origin.to_tuple(),
                limit,
            )
            ray.terminate()
            ray.is_capped = True

    logger.debug(
        "Ray terminated after %d steps, %d segments", ray.iteration_count, len(ray.path)
    )
    return ray


def trace_rays(
    rays: Iterable[Ray],
    objects: Sequence[Traceable],
    settings: TraceSettings | None = None,
) -> list[Ray]:
    """Trace several independent rays against the same objects."""
    return [trace_ray(ray, objects, settings) for ray in rays]
