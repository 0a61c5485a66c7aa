"""Preset celestial bodies and orbit scenarios."""
from __future__ import annotations

import math
from dataclasses import dataclass

from orbit_overlay.core.config import PHYSICS_CFG
from orbit_overlay.core.model import CelestialBody, Satellite


@dataclass(frozen=True)
class BodyPreset:
    key: str
    name: str
    radius: float
    mass: float
    j2: float
    color: tuple[int, int, int]
    outline_color: tuple[int, int, int]

    @property
    def mu(self) -> float:
        return PHYSICS_CFG.gravitational_constant * self.mass

    def build(self) -> CelestialBody:
        return CelestialBody(
            name=self.name,
            radius=self.radius,
            mu=self.mu,
            j2=self.j2,
            color=self.color,
            outline_color=self.outline_color,
        )


BODY_DEFINITIONS: tuple[BodyPreset, ...] = (
    BodyPreset("earth", "Earth", 6_371_000.0, 5.972e24, 1.08263e-3, (100, 149, 237), (34, 139, 34)),
    BodyPreset("mercury", "Mercury", 2_439_700.0, 3.301e23, 5.03e-5, (169, 154, 134), (120, 110, 96)),
    BodyPreset("venus", "Venus", 6_051_800.0, 4.867e24, 4.458e-6, (230, 200, 140), (190, 160, 100)),
    BodyPreset("moon", "Moon", 1_737_400.0, 7.342e22, 2.033e-4, (192, 192, 192), (140, 140, 140)),
    BodyPreset("mars", "Mars", 3_389_500.0, 6.417e23, 1.956e-3, (193, 68, 14), (140, 50, 10)),
    BodyPreset("jupiter", "Jupiter", 69_911_000.0, 1.898e27, 1.469e-2, (216, 170, 120), (170, 120, 80)),
    BodyPreset("saturn", "Saturn", 58_232_000.0, 5.683e26, 1.633e-2, (226, 200, 150), (180, 150, 100)),
    BodyPreset("uranus", "Uranus", 25_362_000.0, 8.681e25, 3.343e-3, (170, 220, 230), (120, 170, 180)),
    BodyPreset("neptune", "Neptune", 24_622_000.0, 1.024e26, 3.411e-3, (70, 110, 220), (40, 70, 170)),
    BodyPreset("pluto", "Pluto", 1_188_300.0, 1.309e22, 0.0, (210, 190, 170), (160, 140, 120)),
    BodyPreset("sun", "Sun", 696_340_000.0, 1.989e30, 2.0e-7, (255, 200, 60), (255, 150, 30)),
)

BODIES: dict[str, BodyPreset] = {body.key: body for body in BODY_DEFINITIONS}
DEFAULT_BODY_KEY = "earth"


@dataclass(frozen=True)
class OrbitScenario:
    key: str
    name: str
    altitude_periapsis: float
    eccentricity: float
    inclination_deg: float
    description: str
    argument_of_periapsis_deg: float = 0.0

    def build_satellite(self, body: CelestialBody) -> Satellite:
        r_periapsis = body.radius + self.altitude_periapsis
        a = r_periapsis / (1.0 - self.eccentricity)
        return Satellite(
            body=body,
            semi_major_axis=a,
            eccentricity=self.eccentricity,
            inclination=math.radians(self.inclination_deg),
            argument_of_periapsis=math.radians(self.argument_of_periapsis_deg),
        )


SCENARIO_DEFINITIONS: tuple[OrbitScenario, ...] = (
    OrbitScenario(
        key="leo",
        name="LEO",
        altitude_periapsis=400_000.0,
        eccentricity=0.01,
        inclination_deg=0.0,
        description="Low orbit inside the drag band (~400 km).",
    ),
    OrbitScenario(
        key="iss",
        name="ISS-like",
        altitude_periapsis=410_000.0,
        eccentricity=0.0005,
        inclination_deg=51.6,
        description="Inclined low orbit, swings through both hemispheres.",
    ),
    OrbitScenario(
        key="molniya",
        name="Molniya",
        altitude_periapsis=600_000.0,
        eccentricity=0.72,
        inclination_deg=63.4,
        argument_of_periapsis_deg=270.0,
        description="Highly elliptical orbit with apogee over the north.",
    ),
    OrbitScenario(
        key="gto",
        name="GTO",
        altitude_periapsis=250_000.0,
        eccentricity=0.73,
        inclination_deg=28.5,
        description="Geostationary transfer orbit.",
    ),
    OrbitScenario(
        key="geo",
        name="GEO",
        altitude_periapsis=35_786_000.0,
        eccentricity=0.0,
        inclination_deg=0.0,
        description="Geostationary ring, far above the atmosphere.",
    ),
)

SCENARIOS: dict[str, OrbitScenario] = {scenario.key: scenario for scenario in SCENARIO_DEFINITIONS}
SCENARIO_DISPLAY_ORDER: list[str] = [scenario.key for scenario in SCENARIO_DEFINITIONS]
DEFAULT_SCENARIO_KEY = SCENARIO_DISPLAY_ORDER[0]


def get_body(key: str) -> CelestialBody:
    try:
        preset = BODIES[key.lower()]
    except KeyError:
        raise KeyError(f"Unknown body '{key}', expected one of {', '.join(BODIES)}") from None
    return preset.build()


def get_scenario(key: str) -> OrbitScenario:
    try:
        return SCENARIOS[key.lower()]
    except KeyError:
        raise KeyError(f"Unknown scenario '{key}', expected one of {', '.join(SCENARIOS)}") from None


__all__ = [
    "BODIES",
    "BODY_DEFINITIONS",
    "BodyPreset",
    "DEFAULT_BODY_KEY",
    "DEFAULT_SCENARIO_KEY",
    "OrbitScenario",
    "SCENARIOS",
    "SCENARIO_DEFINITIONS",
    "SCENARIO_DISPLAY_ORDER",
    "get_body",
    "get_scenario",
]
