import os

# Headless pygame for every test module.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from storage import SettingsStore
from store import ParticleStore


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def timer_calls(monkeypatch):
    """Records pygame.time.set_timer calls instead of touching SDL."""
    calls = []

    def fake_set_timer(event, millis, loops=0):
        calls.append((event, millis))

    monkeypatch.setattr(pygame.time, "set_timer", fake_set_timer)
    return calls


@pytest.fixture
def particle_store():
    return ParticleStore(particle_count=30, seed=42)


@pytest.fixture
def settings(tmp_path):
    return SettingsStore(str(tmp_path / "settings.json"))
