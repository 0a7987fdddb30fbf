"""Tracing configuration shared by the propagation loop and emitters.

Example:
    >>> from raysketch.config import TraceSettings
    >>> settings = TraceSettings(max_iterations=200)
    >>> settings.hit_precision
    6
"""

from dataclasses import asdict, dataclass
from typing import Any

# Tolerance for denominators and parallel tests in the intersection maths
EPSILON = 1e-9

# Default safety cap on propagation steps per ray
DEFAULT_MAX_ITERATIONS = 1000

# Hit distances are rounded to this many decimals before the t > 0 test
DEFAULT_HIT_PRECISION = 6


@dataclass(frozen=True)
class TraceSettings:
    """Knobs for a single ray cast.

    Attributes:
        max_iterations: Number of propagation steps after which a ray is
            force-terminated. Default is 1000.
        hit_precision: Decimal places a hit distance is rounded to before it
            is required to be strictly positive. Keeps a ray from hitting the
            surface it just left.
        exclude_previous_hit: If True, the object hit in the previous step is
            also removed from the candidates of the next step.
    """

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    hit_precision: int = DEFAULT_HIT_PRECISION
    exclude_previous_hit: bool = False

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be at least 1, got {self.max_iterations}"
            )
        if self.hit_precision < 0:
            raise ValueError(
                f"hit_precision must be non-negative, got {self.hit_precision}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert the settings to a JSON-compatible dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TraceSettings":
        """Create settings from a dictionary, ignoring unknown keys."""
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)
