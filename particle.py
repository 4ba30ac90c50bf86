# particle.py
"""
Manages the state of the decorative particle background.

This module defines the Particle record handed to the drawing layer and the
ParticleField class, which owns the particle population in NumPy arrays and
knows how to seed it and advance it by one tick.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from constants import (
    DEFAULT_PARTICLE_COUNT, PARTICLE_SIZE_RANGE, PARTICLE_OPACITY_RANGE,
    PARTICLE_SPEED_RANGE, PARTICLE_DIRECTION_RANGE
)
from simulation import advance

Color = Tuple[int, int, int]
Size = Tuple[float, float]

# --- Data Contracts ---
#
# class ParticleField:
#   - __init__(self, rng: Optional[np.random.Generator] = None):
#     - Starts Empty: all arrays have length 0.
#
#   - populate(self, viewport_size, palette, count=30) -> None:
#     - Inputs:
#       - viewport_size: (width, height). Negative values count as zero.
#       - palette: non-empty ordered sequence of RGB tuples.
#       - count: int >= 0.
#     - Side Effects: Replaces every particle array. Bumps `generation`.
#     - Invariants: len(self) == count; 0 <= x < width, 0 <= y < height
#       (all zero for a degenerate viewport).
#
#   - step(self, viewport_size) -> None:
#     - Side Effects: Moves every particle one tick in place.
#     - Invariants: len(self) is unchanged. No-op while Empty.

@dataclass(frozen=True)
class Particle:
    """Read-only view of one particle, as handed to the drawing layer."""
    id: int
    position: Tuple[float, float]
    size: float
    opacity: float
    speed: float
    direction: float
    color: Color


class ParticleField:
    """
    A container for the background particles, holding their state in
    NumPy arrays indexed by creation order.
    """
    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.populated = False
        # Number of completed populate() calls; renderers key caches on it.
        self.generation = 0
        self._next_id = 0
        self.palette: List[Color] = []
        self._allocate(0)

    def _allocate(self, count: int) -> None:
        self.ids = np.zeros(count, dtype=np.int64)
        self.positions = np.zeros((count, 2), dtype=np.float64)
        self.sizes = np.zeros(count, dtype=np.float64)
        self.opacities = np.zeros(count, dtype=np.float64)
        self.speeds = np.zeros(count, dtype=np.float64)
        self.directions = np.zeros(count, dtype=np.float64)
        self.color_indices = np.zeros(count, dtype=np.int32)

    def __len__(self) -> int:
        return self.positions.shape[0]

    @property
    def is_empty(self) -> bool:
        return not self.populated

    def populate(self, viewport_size: Size, palette: Sequence[Color],
                 count: int = DEFAULT_PARTICLE_COUNT) -> None:
        """
        Replaces the whole population with `count` freshly drawn particles.

        The palette is copied, so a later accent change does not recolour
        particles that are already on screen.
        """
        width = max(float(viewport_size[0]), 0.0)
        height = max(float(viewport_size[1]), 0.0)
        self.palette = [tuple(c) for c in palette]

        self._allocate(count)
        self.ids = np.arange(self._next_id, self._next_id + count, dtype=np.int64)
        self._next_id += count

        self.positions = self.rng.uniform(
            low=[0.0, 0.0],
            high=[width, height],
            size=(count, 2)
        )
        self.sizes = self.rng.uniform(*PARTICLE_SIZE_RANGE, size=count)
        self.opacities = self.rng.uniform(*PARTICLE_OPACITY_RANGE, size=count)
        self.speeds = self.rng.uniform(*PARTICLE_SPEED_RANGE, size=count)
        self.directions = self.rng.uniform(*PARTICLE_DIRECTION_RANGE, size=count)
        self.color_indices = self.rng.integers(
            low=0,
            high=len(self.palette),
            size=count,
            dtype=np.int32
        )

        self.populated = True
        self.generation += 1
        logging.info(
            f"ParticleField populated with {count} particles "
            f"for viewport {width:.0f}x{height:.0f} (generation {self.generation})."
        )

    def step(self, viewport_size: Size) -> None:
        """Advances every particle by one tick, wrapping at the viewport edges."""
        if not self.populated:
            return
        advance(
            self.positions, self.speeds, self.directions,
            viewport_size[0], viewport_size[1], self.rng
        )

    def color_of(self, index: int) -> Color:
        return self.palette[self.color_indices[index]]

    def snapshot(self) -> List[Particle]:
        """Returns the particles in creation order as immutable records."""
        return [
            Particle(
                id=int(self.ids[i]),
                position=(float(self.positions[i, 0]), float(self.positions[i, 1])),
                size=float(self.sizes[i]),
                opacity=float(self.opacities[i]),
                speed=float(self.speeds[i]),
                direction=float(self.directions[i]),
                color=self.color_of(i),
            )
            for i in range(len(self))
        ]
