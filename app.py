# app.py
"""
The application window: tab navigation and the Pygame event loop.
"""
import logging
from typing import Any, Dict, List

import pygame

from categories import CATEGORIES
from constants import FPS, FULLSCREEN, WINDOW_WIDTH, WINDOW_HEIGHT, TEXT_TERTIARY, BACKGROUND_SECONDARY_COLOR
from screens import (
    AppContext, AppearanceScreen, CategoryScreen, ExportScreen, Fonts,
    ProfileScreen, Screen, TAB_BAR_HEIGHT
)

# --- Data Contracts ---
#
# class LifePortalApp:
#   - __init__(self, context: AppContext, window_params: Dict[str, Any]):
#     - Side Effects: Initializes Pygame, opens the window and shows the
#       first tab (which seeds the shared particle store).
#
#   - run(self) -> None:
#     - Side Effects: Runs until the window closes or Esc is pressed on a
#       screen that does not consume it.
#
#   - switch_to(self, index: int) -> None:
#     - Side Effects: Hides the current screen (stopping its renderer's
#       timer) and shows the new one. The particle store is untouched.

class LifePortalApp:
    def __init__(self, context: AppContext, window_params: Dict[str, Any]):
        pygame.init()
        pygame.font.init()

        if window_params.get('fullscreen', FULLSCREEN):
            display_info = pygame.display.Info()
            size = (display_info.current_w, display_info.current_h)
            self.window = pygame.display.set_mode(size, pygame.FULLSCREEN)
        else:
            size = (window_params.get('width', WINDOW_WIDTH), window_params.get('height', WINDOW_HEIGHT))
            self.window = pygame.display.set_mode(size, pygame.RESIZABLE)
        pygame.display.set_caption("LifePortal")

        self.context = context
        self.clock = pygame.time.Clock()
        self.fonts = Fonts()

        self.screens: List[Screen] = [ProfileScreen(context)]
        self.screens.extend(CategoryScreen(context, name) for name in CATEGORIES)
        self.screens.append(AppearanceScreen(context))
        self.screens.append(ExportScreen(context))

        self.active_index = 0
        self.active.show(self.window.get_size())
        logging.info(f"LifePortalApp initialized ({size[0]}x{size[1]}, {len(self.screens)} tabs).")

    @property
    def active(self) -> Screen:
        return self.screens[self.active_index]

    def switch_to(self, index: int) -> None:
        if index == self.active_index or not 0 <= index < len(self.screens):
            return
        self.active.hide()
        self.active_index = index
        self.active.show(self.window.get_size())
        logging.info(f"Switched to tab '{self.active.title}'.")

    def _handle_event(self, event: pygame.event.Event) -> bool:
        """Returns False when the app should exit."""
        if event.type == pygame.QUIT:
            logging.info("Quit event received.")
            return False
        if event.type == pygame.VIDEORESIZE:
            self.active.resize(event.size)
            return True
        if self.active.handle_event(event):
            return True
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down.")
                return False
            if pygame.K_1 <= event.key <= pygame.K_9:
                self.switch_to(event.key - pygame.K_1)
        return True

    def _draw_tab_bar(self) -> None:
        width, height = self.window.get_size()
        bar = pygame.Rect(0, height - TAB_BAR_HEIGHT, width, TAB_BAR_HEIGHT)
        pygame.draw.rect(self.window, BACKGROUND_SECONDARY_COLOR, bar)
        accent = self.context.theme.accent_rgb
        slot = width / len(self.screens)
        for i, screen in enumerate(self.screens):
            color = accent if i == self.active_index else TEXT_TERTIARY
            label = self.fonts.small.render(f"{i + 1} {screen.title[:4]}", True, color)
            center = (int(slot * i + slot / 2), bar.centery)
            self.window.blit(label, label.get_rect(center=center))

    def run(self) -> None:
        running = True
        while running:
            for event in pygame.event.get():
                if not self._handle_event(event):
                    running = False
                    break
            self.active.draw(self.window, self.fonts)
            self._draw_tab_bar()
            pygame.display.flip()
            self.clock.tick(FPS)

    def close(self) -> None:
        self.active.hide()
        pygame.font.quit()
        pygame.quit()
