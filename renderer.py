# renderer.py
"""
Drives and draws the shared particle background using Pygame.

Every screen owns one ParticleRenderer. The renderer holds no particle
data itself: it seeds the shared store on first display, re-seeds it on a
large resize, steps it once per timer event, and draws whatever the store
holds at paint time.
"""
import logging
import math
from typing import Callable, List, Optional, Sequence, Tuple

import pygame

from constants import TICK_INTERVAL_MS
from particle import Color, Size
from store import ParticleStore

# --- Data Contracts ---
#
# class ParticleRenderer:
#   - __init__(self, store: ParticleStore, palette_provider: Callable[[], Sequence[Color]], name: str):
#     - palette_provider is called at populate time only, so the accent in
#       effect at that moment is captured.
#
#   - mount(self, viewport_size) -> None:
#     - Side Effects: Seeds the store if it is Empty. Starts a repeating
#       pygame timer posting `tick_event` every TICK_INTERVAL_MS.
#
#   - resize(self, viewport_size) -> None:
#     - Side Effects: Re-seeds the store when either axis moved by more
#       than RESIZE_REPOPULATE_THRESHOLD since the last populate.
#
#   - handle_event(self, event) -> bool:
#     - Outputs: True if the event was this renderer's tick (and was consumed).
#
#   - draw(self, surface: pygame.Surface) -> None:
#     - Side Effects: Adds one filled circle per particle onto `surface`.
#
#   - unmount(self) -> None:
#     - Side Effects: Stops the timer. Safe to call twice.

class ParticleRenderer:
    """
    Thin lifecycle and drawing driver over a shared ParticleStore.
    """
    def __init__(self, store: ParticleStore,
                 palette_provider: Callable[[], Sequence[Color]],
                 name: str = "background", log_throttle_ticks: int = 200):
        self.store = store
        self.palette_provider = palette_provider
        self.name = name
        self.log_throttle_ticks = max(int(log_throttle_ticks), 1)

        self.viewport: Optional[Tuple[float, float]] = None
        self.mounted = False
        self.tick_count = 0
        # Each renderer gets its own event type so a stale timer from one
        # screen can never step the field on behalf of another.
        self.tick_event = pygame.event.custom_type()

        self._sprites: List[pygame.Surface] = []
        self._sprite_generation = -1

    def _populate(self, viewport_size: Size) -> None:
        self.store.populate(viewport_size, list(self.palette_provider()))

    def mount(self, viewport_size: Size) -> None:
        """Called when the owning screen becomes visible."""
        if self.mounted:
            self.resize(viewport_size)
            return
        self.viewport = (float(viewport_size[0]), float(viewport_size[1]))
        if self.store.is_empty:
            self._populate(self.viewport)
        pygame.time.set_timer(self.tick_event, TICK_INTERVAL_MS)
        self.mounted = True
        logging.info(f"Renderer '{self.name}' mounted at {self.viewport[0]:.0f}x{self.viewport[1]:.0f}.")

    def resize(self, viewport_size: Size) -> None:
        self.viewport = (float(viewport_size[0]), float(viewport_size[1]))
        if self.store.needs_repopulate(self.viewport):
            # Full reset: every particle in flight is discarded.
            logging.info(
                f"Renderer '{self.name}': viewport changed to "
                f"{self.viewport[0]:.0f}x{self.viewport[1]:.0f}, re-seeding particles."
            )
            self._populate(self.viewport)

    def tick(self) -> None:
        if self.viewport is None:
            return
        self.store.step(self.viewport)
        self.tick_count += 1
        if self.tick_count % self.log_throttle_ticks == 0:
            logging.debug(f"Renderer '{self.name}' tick {self.tick_count} ({len(self.store.field)} particles).")

    def handle_event(self, event: pygame.event.Event) -> bool:
        if self.mounted and event.type == self.tick_event:
            self.tick()
            return True
        return False

    def unmount(self) -> None:
        """Called when the owning screen is hidden; stops the clock."""
        if not self.mounted:
            return
        pygame.time.set_timer(self.tick_event, 0)
        self.mounted = False
        logging.info(f"Renderer '{self.name}' unmounted after {self.tick_count} ticks.")

    def _pre_render_sprites(self) -> List[pygame.Surface]:
        """
        Pre-renders one sprite per particle. Size, opacity and colour are
        fixed at creation, so sprites only change when the field is
        re-seeded.

        The colour is premultiplied by opacity onto a black square; blitted
        with BLEND_RGB_ADD the black corners add nothing and overlapping
        particles brighten each other.
        """
        field = self.store.field
        sprites = []
        for i in range(len(field)):
            size = float(field.sizes[i])
            opacity = float(field.opacities[i])
            diameter = max(int(math.ceil(size)), 1)
            r, g, b = field.color_of(i)
            premultiplied = (int(round(r * opacity)), int(round(g * opacity)), int(round(b * opacity)))

            sprite = pygame.Surface((diameter, diameter))
            sprite.fill((0, 0, 0))
            pygame.draw.circle(sprite, premultiplied, (diameter / 2, diameter / 2), size / 2)
            sprites.append(sprite)
        logging.debug(f"Renderer '{self.name}': pre-rendered {len(sprites)} particle sprites.")
        return sprites

    def draw(self, surface: pygame.Surface) -> None:
        field = self.store.field
        if self._sprite_generation != field.generation:
            self._sprites = self._pre_render_sprites()
            self._sprite_generation = field.generation

        positions = field.positions
        for i, sprite in enumerate(self._sprites):
            half = sprite.get_width() / 2
            surface.blit(
                sprite,
                (int(positions[i, 0] - half), int(positions[i, 1] - half)),
                special_flags=pygame.BLEND_RGB_ADD
            )
