import json
from datetime import date, datetime

import pygame
import pytest

from categories import CategoryList
from screens import AppContext, AppearanceScreen, CategoryScreen, ExportScreen, ProfileScreen
from store import ParticleStore
from theme import Theme

SIZE = (390, 844)


@pytest.fixture
def context(settings, tmp_path, timer_calls):
    return AppContext(
        particles=ParticleStore(particle_count=30, seed=7),
        settings=settings,
        theme=Theme(settings),
        export_dir=str(tmp_path / "exports"),
    )


def key(k, text=""):
    return pygame.event.Event(pygame.KEYDOWN, key=k, unicode=text)


def type_text(screen, text):
    for ch in text:
        screen.handle_event(key(ord(ch), ch))


def test_screens_share_one_particle_store(context):
    profile = ProfileScreen(context)
    health = CategoryScreen(context, "Health")

    profile.show(SIZE)
    profile.hide()
    generation = context.particles.field.generation
    health.show(SIZE)

    assert context.particles.field.generation == generation
    assert not profile.renderer.mounted
    assert health.renderer.mounted


def test_screen_forwards_its_tick_events(context):
    screen = CategoryScreen(context, "Personal")
    screen.show(SIZE)
    assert screen.handle_event(pygame.event.Event(screen.renderer.tick_event))
    assert screen.renderer.tick_count == 1


def test_category_screen_adds_and_toggles_goals(context):
    screen = CategoryScreen(context, "Personal")
    screen.show(SIZE)

    assert screen.handle_event(key(pygame.K_n, "n"))
    type_text(screen, "Read")
    screen.handle_event(key(pygame.K_TAB))
    type_text(screen, "Twice a week")
    screen.handle_event(key(pygame.K_TAB))
    for _ in range(10):
        screen.handle_event(key(pygame.K_BACKSPACE))
    type_text(screen, "2025-05-01")
    screen.handle_event(key(pygame.K_TAB))
    screen.handle_event(key(pygame.K_RIGHT))
    screen.handle_event(key(pygame.K_RETURN))

    assert not screen.adding
    items = CategoryList("Personal", context.settings).load()
    assert [(item.title, item.description, item.date, item.priority) for item in items] == [
        ("Read", "Twice a week", datetime(2025, 5, 1), 2)
    ]

    screen.handle_event(key(pygame.K_SPACE, " "))
    assert CategoryList("Personal", context.settings).load()[0].is_completed


def test_category_form_defaults_to_today_and_low_priority(context):
    screen = CategoryScreen(context, "Health")
    screen.show(SIZE)
    screen.handle_event(key(pygame.K_n, "n"))
    type_text(screen, "Walk")
    screen.handle_event(key(pygame.K_RETURN))

    item = CategoryList("Health", context.settings).load()[0]
    assert (item.description, item.priority) == ("", 1)
    assert item.date.date() == date.today()


def test_category_form_priority_field_takes_digits(context):
    screen = CategoryScreen(context, "Career")
    screen.show(SIZE)
    screen.handle_event(key(pygame.K_n, "n"))
    for _ in range(3):
        screen.handle_event(key(pygame.K_TAB))
    screen.handle_event(key(pygame.K_3, "3"))
    assert screen.draft_priority == 3
    screen.handle_event(key(pygame.K_LEFT))
    assert screen.draft_priority == 2
    assert screen.draft_title == ""


def test_category_form_rejects_bad_date_and_stays_open(context):
    screen = CategoryScreen(context, "Future")
    screen.show(SIZE)
    screen.handle_event(key(pygame.K_n, "n"))
    type_text(screen, "Travel")
    screen.handle_event(key(pygame.K_TAB))
    screen.handle_event(key(pygame.K_TAB))
    for _ in range(10):
        screen.handle_event(key(pygame.K_BACKSPACE))
    type_text(screen, "next year")
    screen.handle_event(key(pygame.K_RETURN))

    assert screen.adding
    assert "not a valid date" in screen.message
    assert CategoryList("Future", context.settings).load() == []


def test_category_form_needs_a_title(context):
    screen = CategoryScreen(context, "Future")
    screen.show(SIZE)
    screen.handle_event(key(pygame.K_n, "n"))
    screen.handle_event(key(pygame.K_RETURN))
    assert screen.adding
    assert screen.message
    assert CategoryList("Future", context.settings).load() == []


def test_category_screen_escape_cancels_without_saving(context):
    screen = CategoryScreen(context, "Future")
    screen.show(SIZE)
    screen.handle_event(key(pygame.K_n, "n"))
    type_text(screen, "Move abroad")
    assert screen.handle_event(key(pygame.K_ESCAPE))
    assert not screen.adding
    assert CategoryList("Future", context.settings).load() == []


def test_unhandled_keys_fall_through_to_navigation(context):
    screen = CategoryScreen(context, "Health")
    screen.show(SIZE)
    assert not screen.handle_event(key(pygame.K_3, "3"))


def test_appearance_screen_applies_selected_accent(context):
    screen = AppearanceScreen(context)
    screen.show(SIZE)
    screen.handle_event(key(pygame.K_RIGHT))
    screen.handle_event(key(pygame.K_RETURN))
    assert context.theme.current_accent.name == "Purple"


def test_profile_screen_edits_and_saves(context):
    screen = ProfileScreen(context)
    screen.show(SIZE)

    screen.handle_event(key(pygame.K_e, "e"))
    type_text(screen, "Pat")
    screen.handle_event(key(pygame.K_TAB))
    screen.handle_event(key(pygame.K_TAB))
    type_text(screen, "1990-06-15")
    screen.handle_event(key(pygame.K_RETURN))

    assert not screen.editing
    assert screen.profile.full_name == "Pat"
    assert context.settings.get("birthDate") == "1990-06-15"


def test_profile_screen_keeps_old_birth_date_on_bad_input(context):
    context.settings.set("birthDate", "1990-06-15")
    screen = ProfileScreen(context)
    screen.show(SIZE)

    screen.handle_event(key(pygame.K_e, "e"))
    screen.handle_event(key(pygame.K_TAB))
    screen.handle_event(key(pygame.K_TAB))
    for _ in range(10):
        screen.handle_event(key(pygame.K_BACKSPACE))
    type_text(screen, "tomorrow")
    screen.handle_event(key(pygame.K_RETURN))

    assert context.settings.get("birthDate") == "1990-06-15"
    assert "not a valid date" in screen.message


def test_export_screen_writes_file(context):
    screen = ExportScreen(context)
    screen.show(SIZE)
    assert screen.handle_event(key(pygame.K_RETURN))
    assert screen.status.startswith("Saved to ")

    path = screen.status[len("Saved to "):]
    with open(path, encoding="utf-8") as f:
        assert "categoryData" in json.load(f)


def test_export_screen_reports_failure(context, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    context.export_dir = str(blocker)
    screen = ExportScreen(context)
    assert screen.export() is None
    assert screen.status.startswith("Export failed")


def test_profile_screen_opens_with_corrupt_stored_picture(context):
    context.settings.set("fullName", "Pat")
    context.settings.set("profileImageExists", True)
    context.settings.set("profileImageData", "abc")

    screen = ProfileScreen(context)
    screen.show(SIZE)
    assert screen.profile.full_name == "Pat"
    assert screen.profile.image is None


def test_category_form_stays_open_when_saving_fails(context, monkeypatch):
    screen = CategoryScreen(context, "Career")
    screen.show(SIZE)
    screen.handle_event(key(pygame.K_n, "n"))
    type_text(screen, "Promotion")

    def refuse(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("storage.os.replace", refuse)
    screen.handle_event(key(pygame.K_RETURN))

    assert screen.adding
    assert screen.message.startswith("Could not save goal")
    assert screen.goals.items == []
