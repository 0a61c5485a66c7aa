"""Data models for the simulation snapshot consumed by the renderer."""
from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING

import numpy as np

from .config import PHYSICS_CFG, PhysicsCfg
from . import physics
from .physics import ShadowCondition, ShadowType

if TYPE_CHECKING:  # pragma: no cover
    import pygame


Color = tuple[int, int, int] | tuple[int, int, int, int]


@dataclass(frozen=True)
class Viewport:
    """Pixel centre plus metres-to-pixels scale and zoom multiplier."""

    center_x: int
    center_y: int
    scale: float
    zoom: float = 1.0

    def __post_init__(self) -> None:
        if self.scale <= 0.0:
            raise ValueError("Viewport scale must be positive")
        if self.zoom <= 0.0:
            raise ValueError("Viewport zoom must be positive")

    @property
    def ppm(self) -> float:
        return self.scale * self.zoom

    @property
    def center(self) -> tuple[int, int]:
        return self.center_x, self.center_y

    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        ppm = self.ppm
        return self.center_x + int(x * ppm), self.center_y - int(y * ppm)


@dataclass
class CelestialBody:
    """Primary body the satellite orbits."""

    name: str
    radius: float
    mu: float
    j2: float = 0.0
    color: Color = (100, 149, 237)
    outline_color: Color = (34, 139, 34)
    image: pygame.Surface | None = None


@dataclass(frozen=True)
class OrbitParameters:
    semi_major_axis: float
    eccentricity: float
    periapsis_angle: float = 0.0

    def __post_init__(self) -> None:
        if self.semi_major_axis <= 0.0:
            raise ValueError("semi_major_axis must be positive")
        if not 0.0 <= self.eccentricity < 1.0:
            raise ValueError("eccentricity must lie in [0, 1)")

    @property
    def semi_minor_axis(self) -> float:
        e = self.eccentricity
        return self.semi_major_axis * math.sqrt(1.0 - e * e)

    @property
    def focus_offset(self) -> float:
        return self.semi_major_axis * self.eccentricity


@dataclass
class EffectFlags:
    lunar: bool = False
    solar: bool = False
    drag: bool = False
    j2: bool = False
    srp: bool = False

    def toggle(self, name: str) -> bool:
        if name not in EFFECT_NAMES:
            raise KeyError(f"Unknown effect '{name}', expected one of {', '.join(EFFECT_NAMES)}")
        value = not getattr(self, name)
        setattr(self, name, value)
        return value

    def active(self) -> list[str]:
        return [name for name in EFFECT_NAMES if getattr(self, name)]

    @classmethod
    def from_names(cls, names: list[str] | tuple[str, ...]) -> "EffectFlags":
        flags = cls()
        for name in names:
            if name not in EFFECT_NAMES:
                raise KeyError(f"Unknown effect '{name}', expected one of {', '.join(EFFECT_NAMES)}")
            setattr(flags, name, True)
        return flags


EFFECT_NAMES: tuple[str, ...] = tuple(f.name for f in fields(EffectFlags))


@dataclass
class Satellite:
    """Keplerian satellite state around ``body``; angles in radians."""

    body: CelestialBody
    semi_major_axis: float
    eccentricity: float
    inclination: float = 0.0
    argument_of_periapsis: float = 0.0
    longitude_of_ascending_node: float = 0.0
    true_anomaly: float = 0.0
    size: int = 4
    color: Color = (255, 0, 0)
    image: pygame.Surface | None = None
    cfg: PhysicsCfg = field(default=PHYSICS_CFG, repr=False)

    def __post_init__(self) -> None:
        if self.semi_major_axis <= 0.0:
            raise ValueError("semi_major_axis must be positive")
        if not 0.0 <= self.eccentricity < 1.0:
            raise ValueError("eccentricity must lie in [0, 1)")

    def _elements(self) -> tuple[float, float, float, float, float, float]:
        return (
            self.semi_major_axis,
            self.eccentricity,
            self.inclination,
            self.argument_of_periapsis,
            self.longitude_of_ascending_node,
            self.true_anomaly,
        )

    def position_3d(self) -> np.ndarray:
        return physics.position_from_elements(*self._elements())

    def position(self) -> np.ndarray:
        return self.position_3d()[:2]

    def velocity_3d(self) -> np.ndarray:
        return physics.velocity_from_elements(*self._elements(), self.body.mu)

    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity_3d()))

    def radius(self) -> float:
        return float(np.linalg.norm(self.position_3d()))

    def altitude(self) -> float:
        return self.radius() - self.body.radius

    def period(self) -> float:
        return physics.orbital_period(self.semi_major_axis, self.body.mu)

    def advance(self, dt: float) -> None:
        """Move the satellite ``dt`` seconds along its Kepler orbit."""

        e = self.eccentricity
        n = 2.0 * math.pi / self.period()
        mean = physics.mean_from_true(self.true_anomaly, e) + n * dt
        mean = math.fmod(mean, 2.0 * math.pi)
        self.true_anomaly = physics.true_from_mean(mean, e, self.cfg) % (2.0 * math.pi)

    def drag_acceleration(self) -> float:
        return physics.drag_acceleration(self.radius(), self.speed(), self.body.radius, self.cfg)

    def j2_acceleration(self) -> np.ndarray:
        return physics.j2_acceleration(self.position_3d(), self.body.mu, self.body.radius, self.body.j2)

    def j2_rates(self) -> tuple[float, float]:
        return physics.j2_rates(
            self.semi_major_axis,
            self.eccentricity,
            self.inclination,
            self.body.mu,
            self.body.radius,
            self.body.j2,
        )

    def shadow_condition(self, sun_pos: np.ndarray) -> ShadowCondition:
        return physics.shadow_condition(self.position_3d(), sun_pos, self.body.radius, self.cfg)

    def srp_acceleration(self, sun_pos: np.ndarray, t: float = 0.0) -> np.ndarray:
        condition = self.shadow_condition(sun_pos)
        return physics.srp_acceleration(self.position_3d(), sun_pos, condition, t, self.cfg)


@dataclass
class Simulation:
    """Snapshot container read by the renderer each frame."""

    body: CelestialBody
    satellite: Satellite | None
    effects: EffectFlags = field(default_factory=EffectFlags)
    time: float = 0.0
    paused: bool = False
    cfg: PhysicsCfg = field(default=PHYSICS_CFG, repr=False)

    def step(self, dt: float) -> None:
        if self.paused or dt <= 0.0:
            return
        self.time += dt
        if self.satellite is not None:
            self.satellite.advance(dt)

    def moon_position(self) -> np.ndarray:
        return physics.moon_position(self.time, self.cfg)

    def sun_position(self) -> np.ndarray:
        return physics.sun_position(self.time, self.cfg)

    def lunar_acceleration(self) -> np.ndarray:
        if self.satellite is None:
            return np.zeros(2)
        return physics.lunar_acceleration(self.satellite.position(), self.time, self.cfg)

    def solar_acceleration(self) -> np.ndarray:
        if self.satellite is None:
            return np.zeros(2)
        return physics.solar_acceleration(self.satellite.position(), self.time, self.cfg)

    def orbit_parameters(self) -> OrbitParameters | None:
        sat = self.satellite
        if sat is None:
            return None
        return OrbitParameters(
            semi_major_axis=sat.semi_major_axis,
            eccentricity=sat.eccentricity,
            periapsis_angle=sat.argument_of_periapsis + sat.longitude_of_ascending_node,
        )


__all__ = [
    "CelestialBody",
    "Color",
    "EFFECT_NAMES",
    "EffectFlags",
    "OrbitParameters",
    "Satellite",
    "ShadowCondition",
    "ShadowType",
    "Simulation",
    "Viewport",
]
