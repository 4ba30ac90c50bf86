# screens.py
"""
The application's screens.

Every screen owns its own ParticleRenderer over the shared ParticleStore.
Showing a screen mounts its renderer and hiding it unmounts it, so only the
visible screen's timer is running while the particles themselves carry
over from screen to screen.
"""
import io
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

import pygame

from categories import (
    CategoryList, PRIORITY_LABELS, category_description, priority_color
)
from constants import (
    BACKGROUND_COLOR, BACKGROUND_SECONDARY_COLOR, CARD_BACKGROUND_COLOR,
    TEXT_PRIMARY, TEXT_SECONDARY, TEXT_TERTIARY
)
from exporter import export_data
from renderer import ParticleRenderer
from storage import SettingsStore
from store import ParticleStore
from theme import ACCENT_OPTIONS, Theme
from user_profile import Profile, load_profile, save_profile, set_image_from_file

Size = Tuple[int, int]

# Vertical space reserved for the tab bar drawn by the app.
TAB_BAR_HEIGHT = 44
MARGIN = 20


@dataclass
class AppContext:
    """Everything a screen needs, built once in main and shared by reference."""
    particles: ParticleStore
    settings: SettingsStore
    theme: Theme
    export_dir: str
    log_throttle_ticks: int = 200


class Fonts:
    """The handful of fonts the screens use, with a default-font fallback."""
    def __init__(self):
        try:
            self.title = pygame.font.SysFont("Georgia", 30)
            self.heading = pygame.font.SysFont("Segoe UI", 16, bold=True)
            self.main = pygame.font.SysFont("Segoe UI", 15)
            self.small = pygame.font.SysFont("Segoe UI", 12)
        except pygame.error:
            logging.warning("System fonts not found, falling back to the default font.")
            self.title = pygame.font.SysFont(None, 34)
            self.heading = pygame.font.SysFont(None, 20, bold=True)
            self.main = pygame.font.SysFont(None, 19)
            self.small = pygame.font.SysFont(None, 16)


def build_vertical_gradient(size: Size, top: Tuple[int, int, int],
                            bottom: Tuple[int, int, int]) -> pygame.Surface:
    width, height = size
    surface = pygame.Surface((max(width, 1), max(height, 1)))
    span = max(height - 1, 1)
    for y in range(height):
        t = y / span
        color = tuple(int(top[c] + (bottom[c] - top[c]) * t) for c in range(3))
        pygame.draw.line(surface, color, (0, y), (width, y))
    return surface


def render_text_wrapped(text: str, font: pygame.font.Font, max_width: int,
                        color: tuple) -> List[pygame.Surface]:
    """
    Renders text, wrapping it to a new line if it exceeds max_width.
    Returns a list of rendered surfaces, one for each line.
    """
    words = text.split(' ')
    lines = []
    current_line = ""
    for word in words:
        test_line = f"{current_line} {word}".strip()
        if font.size(test_line)[0] <= max_width:
            current_line = test_line
        else:
            lines.append(current_line)
            current_line = word
    lines.append(current_line)
    return [font.render(line, True, color) for line in lines if line]


def blit_lines(surface: pygame.Surface, lines: List[pygame.Surface], x: int, y: int) -> int:
    """Blits stacked lines and returns the y just below the last one."""
    for line in lines:
        surface.blit(line, (x, y))
        y += line.get_height()
    return y


def typed_text(event: pygame.event.Event) -> str:
    """The printable text a KEYDOWN produced, or '' for control keys."""
    text = getattr(event, "unicode", "")
    return text if text and text.isprintable() else ""


class Screen:
    """Base screen: gradient background, particles, then content."""
    title = ""

    def __init__(self, context: AppContext):
        self.context = context
        self.renderer = ParticleRenderer(
            context.particles, context.theme.palette,
            name=self.title, log_throttle_ticks=context.log_throttle_ticks
        )
        self._background: Optional[pygame.Surface] = None

    # --- lifecycle ---
    def show(self, size: Size) -> None:
        self.renderer.mount(size)
        self.refresh()

    def hide(self) -> None:
        self.renderer.unmount()

    def resize(self, size: Size) -> None:
        self.renderer.resize(size)
        self._background = None

    def refresh(self) -> None:
        """Re-reads persisted data; called whenever the screen is shown."""

    # --- events ---
    def handle_event(self, event: pygame.event.Event) -> bool:
        if self.renderer.handle_event(event):
            return True
        if event.type == pygame.KEYDOWN:
            return self.on_key(event)
        return False

    def on_key(self, event: pygame.event.Event) -> bool:
        return False

    # --- drawing ---
    def draw(self, surface: pygame.Surface, fonts: Fonts) -> None:
        size = surface.get_size()
        if self._background is None or self._background.get_size() != size:
            self._background = build_vertical_gradient(size, BACKGROUND_COLOR, BACKGROUND_SECONDARY_COLOR)
        surface.blit(self._background, (0, 0))
        self.renderer.draw(surface)
        self.draw_content(surface, fonts)

    def draw_content(self, surface: pygame.Surface, fonts: Fonts) -> None:
        raise NotImplementedError


class ProfileScreen(Screen):
    """Name, nickname, picture and the birth-to-death timeline."""
    title = "Profile"
    FIELDS = ("full_name", "nickname", "birth_date", "image_path")
    FIELD_LABELS = {
        "full_name": "Full Name",
        "nickname": "Nickname",
        "birth_date": "Birth Date (YYYY-MM-DD)",
        "image_path": "Picture File (leave empty to keep)",
    }

    def __init__(self, context: AppContext):
        super().__init__(context)
        self.profile = Profile()
        self.editing = False
        self.field_index = 0
        self.drafts: Dict[str, str] = {}
        self._image_surface: Optional[pygame.Surface] = None
        self.message = ""

    def refresh(self) -> None:
        self.profile = load_profile(self.context.settings)
        self._image_surface = None
        if self.profile.image is not None:
            try:
                self._image_surface = pygame.image.load(io.BytesIO(self.profile.image))
            except pygame.error as e:
                logging.warning(f"Stored profile image could not be decoded: {e}")

    def start_editing(self) -> None:
        self.editing = True
        self.field_index = 0
        self.drafts = {
            "full_name": self.profile.full_name,
            "nickname": self.profile.nickname,
            "birth_date": self.profile.birth_date.isoformat() if self.profile.birth_date else "",
            "image_path": "",
        }

    def commit_edits(self) -> None:
        self.message = ""
        birth_text = self.drafts["birth_date"].strip()
        birth_date = self.profile.birth_date
        if birth_text:
            try:
                birth_date = date.fromisoformat(birth_text)
            except ValueError:
                self.message = f"'{birth_text}' is not a valid date; birth date unchanged."
                logging.warning(self.message)
        else:
            birth_date = None
        self.profile.full_name = self.drafts["full_name"]
        self.profile.nickname = self.drafts["nickname"]
        self.profile.birth_date = birth_date
        image_path = self.drafts["image_path"].strip()
        if image_path:
            try:
                set_image_from_file(self.profile, image_path)
            except OSError as e:
                self.message = f"Could not read picture: {e}"
                logging.warning(self.message)
        save_profile(self.context.settings, self.profile)
        self.editing = False
        self.refresh()

    def on_key(self, event: pygame.event.Event) -> bool:
        if not self.editing:
            if event.key == pygame.K_e:
                self.start_editing()
                return True
            if event.key == pygame.K_x and self.profile.image is not None:
                self.profile.image = None
                self._image_surface = None
                save_profile(self.context.settings, self.profile)
                return True
            return False

        current = self.FIELDS[self.field_index]
        if event.key == pygame.K_ESCAPE:
            self.editing = False
        elif event.key == pygame.K_RETURN:
            self.commit_edits()
        elif event.key == pygame.K_TAB:
            self.field_index = (self.field_index + 1) % len(self.FIELDS)
        elif event.key == pygame.K_BACKSPACE:
            self.drafts[current] = self.drafts[current][:-1]
        else:
            self.drafts[current] += typed_text(event)
        # While editing every key belongs to the form.
        return True

    def draw_content(self, surface: pygame.Surface, fonts: Fonts) -> None:
        width = surface.get_width()
        accent = self.context.theme.accent_rgb
        y = MARGIN * 2

        if self.editing:
            for i, field_name in enumerate(self.FIELDS):
                label = fonts.small.render(self.FIELD_LABELS[field_name], True, TEXT_SECONDARY)
                surface.blit(label, (MARGIN, y))
                y += label.get_height() + 4
                box = pygame.Rect(MARGIN, y, width - 2 * MARGIN, 32)
                border = accent if i == self.field_index else TEXT_TERTIARY
                pygame.draw.rect(surface, CARD_BACKGROUND_COLOR, box, border_radius=8)
                pygame.draw.rect(surface, border, box, 1, border_radius=8)
                text = fonts.main.render(self.drafts[field_name], True, TEXT_PRIMARY)
                surface.blit(text, (box.x + 8, box.y + 7))
                y = box.bottom + 12
            hint = fonts.small.render("Tab: next field   Enter: save   Esc: cancel", True, TEXT_TERTIARY)
            surface.blit(hint, (MARGIN, y))
            return

        picture = pygame.Rect(width - MARGIN - 100, y, 100, 100)
        if self._image_surface is not None:
            surface.blit(pygame.transform.scale(self._image_surface, picture.size), picture.topleft)
        else:
            pygame.draw.rect(surface, (50, 50, 52), picture, border_radius=20)
        pygame.draw.rect(surface, TEXT_TERTIARY, picture, 1, border_radius=20)

        name_lines = render_text_wrapped(self.profile.full_name or "Your Name", fonts.title,
                                         picture.x - 2 * MARGIN, TEXT_PRIMARY)
        y = blit_lines(surface, name_lines, MARGIN, y)
        nickname = fonts.main.render(self.profile.nickname, True, TEXT_TERTIARY)
        surface.blit(nickname, (MARGIN, y + 4))

        # Timeline: filled share of a hundred-year line.
        y = picture.bottom + 40
        card = pygame.Rect(MARGIN, y, width - 2 * MARGIN, 60)
        pygame.draw.rect(surface, TEXT_TERTIARY, card, 1, border_radius=10)
        line_left, line_right = card.x + 20, card.right - 20
        line_y = card.y + 20
        lived = int((line_right - line_left) * self.profile.life_progress())
        pygame.draw.line(surface, TEXT_TERTIARY, (line_left, line_y), (line_right, line_y), 2)
        pygame.draw.line(surface, accent, (line_left, line_y), (line_left + lived, line_y), 2)
        pygame.draw.circle(surface, accent, (line_left, line_y), 5)
        pygame.draw.circle(surface, TEXT_TERTIARY, (line_right, line_y), 5)
        birth = fonts.small.render("BIRTH", True, TEXT_TERTIARY)
        death = fonts.small.render("DEATH", True, TEXT_TERTIARY)
        surface.blit(birth, (card.x + 12, card.bottom - 22))
        surface.blit(death, (card.right - 12 - death.get_width(), card.bottom - 22))

        y = card.bottom + 16
        if self.message:
            y = blit_lines(surface, render_text_wrapped(self.message, fonts.small, card.width, TEXT_SECONDARY), MARGIN, y)
        hint = fonts.small.render("E: edit profile   X: remove picture", True, TEXT_TERTIARY)
        surface.blit(hint, (MARGIN, y))


class CategoryScreen(Screen):
    """One category's goal list with add, toggle and delete."""
    FIELDS = ("title", "description", "date", "priority")
    FIELD_LABELS = {
        "title": "Title",
        "description": "Description (optional)",
        "date": "Date (YYYY-MM-DD)",
        "priority": "Priority (Left/Right or 1-3)",
    }

    def __init__(self, context: AppContext, category: str):
        self.title = category
        super().__init__(context)
        self.goals = CategoryList(category, context.settings)
        self.selected = 0
        self.adding = False
        self.field_index = 0
        self.drafts: Dict[str, str] = {}
        self.draft_priority = 1
        self.message = ""

    @property
    def draft_title(self) -> str:
        return self.drafts.get("title", "")

    def refresh(self) -> None:
        self.goals.load()
        self.selected = min(self.selected, max(len(self.goals.items) - 1, 0))

    def start_adding(self) -> None:
        self.adding = True
        self.field_index = 0
        self.drafts = {"title": "", "description": "", "date": date.today().isoformat()}
        self.draft_priority = 1
        self.message = ""

    def commit_goal(self) -> None:
        """Saves the draft as a new goal. A bad date keeps the form open."""
        title = self.drafts["title"].strip()
        if not title:
            self.message = "A goal needs a title."
            return
        date_text = self.drafts["date"].strip()
        when = None
        if date_text:
            try:
                when = datetime.combine(date.fromisoformat(date_text), datetime.min.time())
            except ValueError:
                self.message = f"'{date_text}' is not a valid date."
                logging.warning(self.message)
                return
        try:
            self.goals.add(title, self.drafts["description"].strip(), when, self.draft_priority)
        except OSError as e:
            self.message = f"Could not save goal: {e}"
            logging.error(self.message)
            return
        self.selected = len(self.goals.items) - 1
        self.adding = False
        self.message = ""

    def _edit_form(self, event: pygame.event.Event) -> None:
        current = self.FIELDS[self.field_index]
        if event.key == pygame.K_ESCAPE:
            self.adding = False
            self.message = ""
        elif event.key == pygame.K_RETURN:
            self.commit_goal()
        elif event.key == pygame.K_TAB:
            self.field_index = (self.field_index + 1) % len(self.FIELDS)
        elif current == "priority":
            levels = len(PRIORITY_LABELS)
            if event.key == pygame.K_RIGHT:
                self.draft_priority = self.draft_priority % levels + 1
            elif event.key == pygame.K_LEFT:
                self.draft_priority = (self.draft_priority - 2) % levels + 1
            elif typed_text(event) in ("1", "2", "3"):
                self.draft_priority = int(typed_text(event))
        elif event.key == pygame.K_BACKSPACE:
            self.drafts[current] = self.drafts[current][:-1]
        else:
            self.drafts[current] += typed_text(event)

    def on_key(self, event: pygame.event.Event) -> bool:
        if self.adding:
            self._edit_form(event)
            # The open form swallows every key, digits included.
            return True

        items = self.goals.items
        if event.key == pygame.K_n:
            self.start_adding()
            return True
        if not items:
            return False
        if event.key == pygame.K_DOWN:
            self.selected = min(self.selected + 1, len(items) - 1)
        elif event.key == pygame.K_UP:
            self.selected = max(self.selected - 1, 0)
        elif event.key in (pygame.K_SPACE, pygame.K_c):
            self.goals.toggle(items[self.selected].id)
        elif event.key in (pygame.K_DELETE, pygame.K_BACKSPACE):
            self.goals.delete(items[self.selected].id)
            self.selected = min(self.selected, max(len(self.goals.items) - 1, 0))
        else:
            return False
        return True

    def _draw_card(self, surface, fonts, item, rect: pygame.Rect, selected: bool) -> None:
        accent = self.context.theme.accent_rgb
        pygame.draw.rect(surface, CARD_BACKGROUND_COLOR, rect, border_radius=12)
        pygame.draw.rect(surface, accent if selected else (77, 77, 77), rect, 1, border_radius=12)

        dot = (rect.x + 18, rect.y + 20)
        color = priority_color(item.priority)
        pygame.draw.circle(surface, color, dot, 6)
        pygame.draw.circle(surface, color, dot, 8, 1)

        title_color = TEXT_TERTIARY if item.is_completed else TEXT_PRIMARY
        title = fonts.main.render(item.title, True, title_color)
        surface.blit(title, (rect.x + 34, rect.y + 11))
        if item.is_completed:
            strike_y = rect.y + 11 + title.get_height() // 2
            pygame.draw.line(surface, title_color, (rect.x + 34, strike_y), (rect.x + 34 + title.get_width(), strike_y))

        check = (rect.right - 20, rect.y + 20)
        if item.is_completed:
            pygame.draw.circle(surface, accent, check, 8)
        else:
            pygame.draw.circle(surface, TEXT_TERTIARY, check, 8, 1)

        if item.description:
            desc = fonts.small.render(item.description, True, TEXT_SECONDARY)
            surface.blit(desc, (rect.x + 34, rect.y + 34))
        when = fonts.small.render(item.date.strftime("%b %d, %Y"), True, TEXT_TERTIARY)
        surface.blit(when, (rect.x + 34, rect.bottom - when.get_height() - 8))

    def draw_content(self, surface: pygame.Surface, fonts: Fonts) -> None:
        width = surface.get_width()
        y = MARGIN
        surface.blit(fonts.title.render(self.title, True, TEXT_PRIMARY), (MARGIN, y))
        y += 44
        surface.blit(fonts.heading.render(f"{self.title.upper()} GOALS", True, TEXT_TERTIARY), (MARGIN, y))
        y += 26
        y = blit_lines(surface, render_text_wrapped(category_description(self.title), fonts.main,
                                                    width - 2 * MARGIN, TEXT_SECONDARY), MARGIN, y) + 12

        if self.adding:
            accent = self.context.theme.accent_rgb
            for i, field_name in enumerate(self.FIELDS):
                label = fonts.small.render(self.FIELD_LABELS[field_name], True, TEXT_SECONDARY)
                surface.blit(label, (MARGIN, y))
                y += label.get_height() + 4
                box = pygame.Rect(MARGIN, y, width - 2 * MARGIN, 32)
                pygame.draw.rect(surface, CARD_BACKGROUND_COLOR, box, border_radius=8)
                pygame.draw.rect(surface, accent if i == self.field_index else TEXT_TERTIARY, box, 1, border_radius=8)
                if field_name == "priority":
                    pygame.draw.circle(surface, priority_color(self.draft_priority), (box.x + 16, box.centery), 6)
                    text = fonts.main.render(PRIORITY_LABELS[self.draft_priority], True, TEXT_PRIMARY)
                    surface.blit(text, (box.x + 30, box.y + 7))
                else:
                    text = fonts.main.render(self.drafts[field_name], True, TEXT_PRIMARY)
                    surface.blit(text, (box.x + 8, box.y + 7))
                y = box.bottom + 12
            if self.message:
                y = blit_lines(surface, render_text_wrapped(self.message, fonts.small, width - 2 * MARGIN,
                                                            TEXT_SECONDARY), MARGIN, y)
            hint = "Tab: next field   Enter: save   Esc: cancel"
            surface.blit(fonts.small.render(hint, True, TEXT_TERTIARY), (MARGIN, y))
            return

        if not self.goals.items:
            y += 40
            for text, font, color in (
                ("No items added yet", fonts.heading, TEXT_SECONDARY),
                (f"Press N to add your first {self.title.lower()} goal", fonts.main, TEXT_TERTIARY),
            ):
                line = font.render(text, True, color)
                surface.blit(line, ((width - line.get_width()) // 2, y))
                y += line.get_height() + 10
            return

        bottom_limit = surface.get_height() - TAB_BAR_HEIGHT - MARGIN
        for index, item in enumerate(self.goals.items):
            rect = pygame.Rect(MARGIN, y, width - 2 * MARGIN, 76)
            if rect.bottom > bottom_limit:
                break
            self._draw_card(surface, fonts, item, rect, index == self.selected)
            y = rect.bottom + 14


class AppearanceScreen(Screen):
    """Accent colour picker. Applying a colour persists it in the theme."""
    title = "Appearance"

    def __init__(self, context: AppContext):
        super().__init__(context)
        self.index = 0

    def refresh(self) -> None:
        self.index = ACCENT_OPTIONS.index(self.context.theme.current_accent)

    def on_key(self, event: pygame.event.Event) -> bool:
        if event.key == pygame.K_RIGHT:
            self.index = (self.index + 1) % len(ACCENT_OPTIONS)
        elif event.key == pygame.K_LEFT:
            self.index = (self.index - 1) % len(ACCENT_OPTIONS)
        elif event.key == pygame.K_RETURN:
            self.context.theme.set_accent(ACCENT_OPTIONS[self.index])
        else:
            return False
        return True

    def draw_content(self, surface: pygame.Surface, fonts: Fonts) -> None:
        width = surface.get_width()
        selected = ACCENT_OPTIONS[self.index]
        y = MARGIN * 2
        title = fonts.title.render("Appearance Settings", True, TEXT_PRIMARY)
        surface.blit(title, ((width - title.get_width()) // 2, y))
        y += 50
        blurb = "Choose an accent color for your LifePortal experience"
        y = blit_lines(surface, render_text_wrapped(blurb, fonts.main, width - 2 * MARGIN, TEXT_SECONDARY), MARGIN, y) + 30

        columns = 3
        cell_w = (width - 2 * MARGIN) // columns
        for i, option in enumerate(ACCENT_OPTIONS):
            cx = MARGIN + (i % columns) * cell_w + cell_w // 2
            cy = y + (i // columns) * 110 + 34
            pygame.draw.circle(surface, option.rgb, (cx, cy), 30)
            if option == selected:
                pygame.draw.circle(surface, TEXT_PRIMARY, (cx, cy), 34, 2)
            name = fonts.small.render(option.name, True, TEXT_PRIMARY if option == selected else TEXT_SECONDARY)
            surface.blit(name, (cx - name.get_width() // 2, cy + 40))
        y += ((len(ACCENT_OPTIONS) + columns - 1) // columns) * 110 + 20

        button = pygame.Rect((width - 200) // 2, y, 200, 44)
        pygame.draw.rect(surface, selected.rgb, button, border_radius=10)
        label = fonts.heading.render("Apply Changes", True, TEXT_PRIMARY)
        surface.blit(label, label.get_rect(center=button.center))
        hint = fonts.small.render("Left/Right: choose   Enter: apply", True, TEXT_TERTIARY)
        surface.blit(hint, ((width - hint.get_width()) // 2, button.bottom + 12))


class ExportScreen(Screen):
    """Writes all user data to a JSON file on Enter."""
    title = "Export"
    INCLUDED = ("Profile Information", "Personal Goals", "Health Objectives",
                "Professional Goals", "Future Aspirations")

    def __init__(self, context: AppContext):
        super().__init__(context)
        self.status = ""

    def export(self) -> Optional[str]:
        try:
            path = export_data(self.context.settings, self.context.export_dir)
        except OSError as e:
            self.status = f"Export failed: {e}"
            return None
        self.status = f"Saved to {path}"
        return path

    def on_key(self, event: pygame.event.Event) -> bool:
        if event.key == pygame.K_RETURN:
            self.export()
            return True
        return False

    def draw_content(self, surface: pygame.Surface, fonts: Fonts) -> None:
        width = surface.get_width()
        accent = self.context.theme.accent_rgb
        y = MARGIN * 2
        title = fonts.title.render("Export Your Life Data", True, TEXT_PRIMARY)
        surface.blit(title, ((width - title.get_width()) // 2, y))
        y += 50
        blurb = ("This will export all your personal information, goals, and settings "
                 "as a JSON file that you can save and import later.")
        y = blit_lines(surface, render_text_wrapped(blurb, fonts.main, width - 2 * MARGIN, TEXT_SECONDARY), MARGIN, y) + 24
        surface.blit(fonts.heading.render("Your data includes:", True, TEXT_PRIMARY), (MARGIN, y))
        y += 30
        for entry in self.INCLUDED:
            pygame.draw.circle(surface, accent, (MARGIN + 8, y + 9), 5)
            surface.blit(fonts.main.render(entry, True, TEXT_PRIMARY), (MARGIN + 24, y))
            y += 26

        button = pygame.Rect((width - 200) // 2, y + 20, 200, 44)
        pygame.draw.rect(surface, accent, button, border_radius=10)
        label = fonts.heading.render("Export Data", True, TEXT_PRIMARY)
        surface.blit(label, label.get_rect(center=button.center))
        if self.status:
            blit_lines(surface, render_text_wrapped(self.status, fonts.small, width - 2 * MARGIN, TEXT_SECONDARY),
                       MARGIN, button.bottom + 14)
