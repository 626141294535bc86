"""Render settings.

RenderSettings carries the values the orchestrator needs (tile divider,
finalization gamma) along with sampler options that it passes through
untouched.

Example:
    >>> settings = RenderSettings(tile_divider=8, samples_per_pixel=4)
    >>> settings.tile_size(640, 480)
    (80, 60)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any

from src.retracer.core.errors import ConfigurationError
from src.retracer.core.tiling import compute_tile_size


@dataclass
class RenderSettings:
    """Configuration for a single render.

    Attributes:
        tile_divider: Number of tiles per image axis. Tile size is
            ceil(resolution / tile_divider). Must be positive; may be
            fractional.
        samples_per_pixel: Samples a sampler should take per pixel.
        seed: Seed for samplers that jitter or randomize.
        gamma: Gamma applied during finalization. 1.0 keeps output linear,
            2.2 approximates sRGB.
        options: Sampler-specific options, opaque to the renderer.
    """

    tile_divider: float = 4.0
    samples_per_pixel: int = 1
    seed: int = 0
    gamma: float = 1.0
    options: dict[str, Any] = field(default_factory=dict)

    def validate(self) -> None:
        """Check the settings.

        Raises:
            ConfigurationError: If any value is out of range.
        """
        divider = self.tile_divider
        if isinstance(divider, bool) or not isinstance(divider, Real):
            raise ConfigurationError(f"Tile divider must be a number, got {divider!r}")
        if not math.isfinite(divider) or divider <= 0:
            raise ConfigurationError(f"Tile divider must be positive, got {divider}")

        spp = self.samples_per_pixel
        if isinstance(spp, bool) or not isinstance(spp, int) or spp <= 0:
            raise ConfigurationError(f"Samples per pixel must be a positive integer, got {spp!r}")

        if isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed < 0:
            raise ConfigurationError(f"Seed must be a non-negative integer, got {self.seed!r}")

        if not isinstance(self.gamma, Real) or not self.gamma > 0:
            raise ConfigurationError(f"Gamma must be positive, got {self.gamma}")

    def tile_size(self, width: int, height: int) -> tuple[int, int]:
        """Nominal tile size for an image of the given resolution."""
        return compute_tile_size(width, height, self.tile_divider)
