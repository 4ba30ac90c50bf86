# store.py
"""
The shared particle store.

One ParticleStore is built at start-up and handed to every screen's
renderer, so particles already in motion carry over when the user switches
tabs. All access happens on the pygame event-loop thread; there is no
locking. Moving simulation and drawing onto separate threads would need a
lock around populate, step and the render read.
"""
import logging
from typing import Optional, Sequence, Tuple

import numpy as np

from constants import DEFAULT_PARTICLE_COUNT, RESIZE_REPOPULATE_THRESHOLD
from particle import ParticleField, Color, Size


class ParticleStore:
    """Process-wide particle state: the field plus the size it was seeded for."""

    def __init__(self, particle_count: int = DEFAULT_PARTICLE_COUNT,
                 seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None):
        self.particle_count = particle_count
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.field = ParticleField(self.rng)
        # Viewport at the last populate(); None until the first one.
        self.populated_size: Optional[Tuple[float, float]] = None
        logging.info(f"ParticleStore created (particle_count={particle_count}, seed={seed}).")

    @property
    def is_empty(self) -> bool:
        return self.field.is_empty

    def populate(self, viewport_size: Size, palette: Sequence[Color]) -> None:
        self.field.populate(viewport_size, palette, self.particle_count)
        self.populated_size = (float(viewport_size[0]), float(viewport_size[1]))

    def needs_repopulate(self, viewport_size: Size) -> bool:
        """True when the viewport moved more than the threshold on either axis."""
        if self.populated_size is None:
            return False
        d_width = abs(viewport_size[0] - self.populated_size[0])
        d_height = abs(viewport_size[1] - self.populated_size[1])
        return d_width > RESIZE_REPOPULATE_THRESHOLD or d_height > RESIZE_REPOPULATE_THRESHOLD

    def step(self, viewport_size: Size) -> None:
        self.field.step(viewport_size)
