# simulation.py
"""
Per-tick motion kernel for the particle background.

Each particle drifts along its own heading at its own speed. There are no
inter-particle forces: a particle never reads another particle's state, so
the kernel is a single flat loop. Random draws are made by the caller with
its own generator and passed in, which keeps the jitted code deterministic
for a given seed.
"""
import numpy as np
from numba import jit

from constants import DIRECTION_CHANGE_PROBABILITY, DIRECTION_CHANGE_MAX

# --- Data Contracts ---
#
# advance(positions, speeds, directions, width, height, rng) -> None:
#   - Inputs:
#     - positions: float64 array of shape (N, 2), modified in place.
#     - speeds: float64 array of shape (N,), units per tick.
#     - directions: float64 array of shape (N,), radians, modified in place.
#     - width, height: viewport bounds used for wrap-around.
#     - rng: np.random.Generator supplying the drift rolls and amounts.
#   - Outputs: None
#   - Invariants: N is unchanged. After the call every coordinate lies in
#     [0, width] x [0, height] whenever the pre-step displacement is
#     smaller than the viewport.

@jit(nopython=True)
def _advance_numba(positions, speeds, directions, width, height,
                   rolls, nudges, change_probability):
    """
    Numba-jitted function that moves every particle one tick.

    The displacement uses the heading from before this tick's drift, so a
    heading change becomes visible on the following tick.
    """
    particle_count = positions.shape[0]
    for i in range(particle_count):
        speed = speeds[i]
        heading = directions[i]

        x = positions[i, 0] + speed * np.cos(heading)
        y = positions[i, 1] + speed * np.sin(heading)

        # Occasional drift. The heading is never wrapped back into [0, 2pi).
        if rolls[i] < change_probability:
            directions[i] = heading + nudges[i]

        # Strict comparisons: a particle may rest exactly on either edge.
        if x < 0.0:
            x = width
        elif x > width:
            x = 0.0
        if y < 0.0:
            y = height
        elif y > height:
            y = 0.0

        positions[i, 0] = x
        positions[i, 1] = y


def advance(positions: np.ndarray, speeds: np.ndarray, directions: np.ndarray,
            width: float, height: float, rng: np.random.Generator) -> None:
    """Draws this tick's randomness and runs the jitted kernel."""
    count = positions.shape[0]
    if count == 0:
        return
    rolls = rng.random(count)
    nudges = rng.uniform(-DIRECTION_CHANGE_MAX, DIRECTION_CHANGE_MAX, count)
    _advance_numba(
        positions, speeds, directions,
        np.float64(width), np.float64(height),
        rolls, nudges, DIRECTION_CHANGE_PROBABILITY
    )
