"""Shared fixtures; pygame runs against the dummy video driver."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from orbit_overlay.core.model import EffectFlags, Simulation
from orbit_overlay.data.bodies import get_body, get_scenario


@pytest.fixture(scope="session", autouse=True)
def pygame_session():
    """Initialise pygame with a 1x1 display for fonts and convert_alpha."""
    pygame.init()
    pygame.display.set_mode((1, 1))
    yield
    pygame.quit()


@pytest.fixture
def earth():
    return get_body("earth")


@pytest.fixture
def leo_simulation(earth):
    """Earth LEO simulation with every effect switched off."""
    satellite = get_scenario("leo").build_satellite(earth)
    return Simulation(body=earth, satellite=satellite, effects=EffectFlags())


@pytest.fixture
def all_effects_simulation(earth):
    satellite = get_scenario("iss").build_satellite(earth)
    return Simulation(
        body=earth,
        satellite=satellite,
        effects=EffectFlags(lunar=True, solar=True, drag=True, j2=True, srp=True),
    )


@pytest.fixture
def font():
    return pygame.font.Font(None, 14)


@pytest.fixture
def canvas():
    return pygame.Surface((1000, 800))
