"""Perturbation calculators feeding the overlay.

Values are approximate and only drive arrow lengths, directions and label
text.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .config import PHYSICS_CFG, PhysicsCfg


class ShadowType(Enum):
    DIRECT_SUNLIGHT = "Direct Sunlight"
    PENUMBRA = "Penumbra (Partial Shadow)"
    UMBRAL = "Umbra (Complete Shadow)"

    @property
    def description(self) -> str:
        return self.value


@dataclass(frozen=True)
class ShadowCondition:
    shadow_type: ShadowType
    lighting_factor: float


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp *value* between *lo* and *hi*."""

    return max(lo, min(hi, value))


def orbital_radius(a: float, e: float, nu: float) -> float:
    """Conic radius ``a(1 - e^2) / (1 + e cos nu)``."""

    return a * (1.0 - e * e) / (1.0 + e * math.cos(nu))


def perifocal_to_inertial(
    vec: np.ndarray, arg_periapsis: float, inclination: float, raan: float
) -> np.ndarray:
    """Rotate an orbital-plane ``(x, y)`` vector by omega, i and Omega."""

    x, y = float(vec[0]), float(vec[1])
    x1 = x * math.cos(arg_periapsis) - y * math.sin(arg_periapsis)
    y1 = x * math.sin(arg_periapsis) + y * math.cos(arg_periapsis)

    y2 = y1 * math.cos(inclination)
    z2 = y1 * math.sin(inclination)

    x3 = x1 * math.cos(raan) - y2 * math.sin(raan)
    y3 = x1 * math.sin(raan) + y2 * math.cos(raan)
    return np.array([x3, y3, z2], dtype=float)


def position_from_elements(
    a: float,
    e: float,
    inclination: float,
    arg_periapsis: float,
    raan: float,
    nu: float,
) -> np.ndarray:
    r = orbital_radius(a, e, nu)
    planar = np.array([r * math.cos(nu), r * math.sin(nu)])
    return perifocal_to_inertial(planar, arg_periapsis, inclination, raan)


def velocity_from_elements(
    a: float,
    e: float,
    inclination: float,
    arg_periapsis: float,
    raan: float,
    nu: float,
    mu: float,
) -> np.ndarray:
    h = math.sqrt(mu * a * (1.0 - e * e))
    v_radial = mu * e * math.sin(nu) / h
    v_tangential = mu * (1.0 + e * math.cos(nu)) / h
    planar = np.array(
        [
            v_radial * math.cos(nu) - v_tangential * math.sin(nu),
            v_radial * math.sin(nu) + v_tangential * math.cos(nu),
        ]
    )
    return perifocal_to_inertial(planar, arg_periapsis, inclination, raan)


def orbital_period(a: float, mu: float) -> float:
    return 2.0 * math.pi * math.sqrt(a**3 / mu)


def solve_kepler(mean_anomaly: float, e: float, cfg: PhysicsCfg = PHYSICS_CFG) -> float:
    """Eccentric anomaly for ``mean_anomaly`` using Newton iteration."""

    E = mean_anomaly if e < 0.8 else math.pi
    for _ in range(cfg.kepler_max_iterations):
        delta = (E - e * math.sin(E) - mean_anomaly) / (1.0 - e * math.cos(E))
        E -= delta
        if abs(delta) < cfg.kepler_tolerance:
            break
    return E


def mean_from_true(nu: float, e: float) -> float:
    E = 2.0 * math.atan2(math.sqrt(1.0 - e) * math.sin(nu / 2.0), math.sqrt(1.0 + e) * math.cos(nu / 2.0))
    return E - e * math.sin(E)


def true_from_mean(mean_anomaly: float, e: float, cfg: PhysicsCfg = PHYSICS_CFG) -> float:
    E = solve_kepler(mean_anomaly, e, cfg)
    return 2.0 * math.atan2(math.sqrt(1.0 + e) * math.sin(E / 2.0), math.sqrt(1.0 - e) * math.cos(E / 2.0))


def moon_position(t: float, cfg: PhysicsCfg = PHYSICS_CFG) -> np.ndarray:
    """Moon position (2D, body-centred) on a circular orbit."""

    angle = math.radians(cfg.moon_initial_angle_deg + (t / cfg.moon_period) * 360.0)
    return np.array([cfg.moon_distance * math.cos(angle), cfg.moon_distance * math.sin(angle)])


def sun_position(t: float, cfg: PhysicsCfg = PHYSICS_CFG) -> np.ndarray:
    """Apparent sun position (2D, body-centred) at 1 AU."""

    angle = math.radians(cfg.sun_initial_angle_deg + (t / cfg.sun_period) * 360.0)
    return np.array([cfg.au * math.cos(angle), cfg.au * math.sin(angle)])


def third_body_acceleration(
    sat_pos: np.ndarray, body_pos: np.ndarray, mu_body: float
) -> np.ndarray:
    """Differential pull of a third body on the satellite relative to the primary."""

    sat = np.asarray(sat_pos, dtype=float)[:2]
    body = np.asarray(body_pos, dtype=float)[:2]
    to_body = body - sat
    d = float(np.linalg.norm(to_body))
    s = float(np.linalg.norm(body))
    if d <= 0.0 or s <= 0.0:
        return np.zeros(2)
    return mu_body * (to_body / d**3 - body / s**3)


def lunar_acceleration(sat_pos: np.ndarray, t: float, cfg: PhysicsCfg = PHYSICS_CFG) -> np.ndarray:
    return third_body_acceleration(sat_pos, moon_position(t, cfg), cfg.moon_mu)


def solar_acceleration(sat_pos: np.ndarray, t: float, cfg: PhysicsCfg = PHYSICS_CFG) -> np.ndarray:
    return third_body_acceleration(sat_pos, sun_position(t, cfg), cfg.sun_mu)


def atmospheric_density(altitude: float, cfg: PhysicsCfg = PHYSICS_CFG) -> float:
    """Exponential atmosphere, zero above the drag ceiling."""

    if altitude < 0.0:
        return cfg.sea_level_density
    if altitude > cfg.drag_max_altitude:
        return 0.0
    return cfg.sea_level_density * math.exp(-altitude / cfg.scale_height)


def drag_acceleration(
    r_magnitude: float,
    speed: float,
    body_radius: float,
    cfg: PhysicsCfg = PHYSICS_CFG,
) -> float:
    """Drag deceleration magnitude, zero outside the drag altitude band."""

    altitude = r_magnitude - body_radius
    if altitude < cfg.drag_min_altitude or altitude > cfg.drag_max_altitude:
        return 0.0
    if speed <= 0.0:
        return 0.0
    density = atmospheric_density(altitude, cfg)
    force = 0.5 * density * speed * speed * cfg.drag_coefficient * cfg.satellite_area
    return force / cfg.satellite_mass


def j2_acceleration(position: np.ndarray, mu: float, radius: float, j2: float) -> np.ndarray:
    """Oblateness acceleration vector for a 3D body-centred position."""

    x, y, z = (float(c) for c in position)
    r = math.sqrt(x * x + y * y + z * z)
    if r <= 0.0:
        return np.zeros(3)
    factor = -1.5 * j2 * mu * radius * radius / r**5
    z2_ratio = 5.0 * z * z / (r * r)
    return np.array(
        [
            factor * x * (1.0 - z2_ratio),
            factor * y * (1.0 - z2_ratio),
            factor * z * (3.0 - z2_ratio),
        ]
    )


def j2_rates(
    a: float,
    e: float,
    inclination: float,
    mu: float,
    radius: float,
    j2: float,
) -> tuple[float, float]:
    """Secular nodal and apsidal precession in degrees per day."""

    n = math.sqrt(mu / a**3)
    factor = -1.5 * j2 * radius * radius * n / (a * a * (1.0 - e * e) ** 2)
    nodal = factor * math.cos(inclination)
    apsidal = factor * (2.5 * math.sin(inclination) ** 2 - 2.0)
    seconds_per_day = 86_400.0
    return math.degrees(nodal) * seconds_per_day, math.degrees(apsidal) * seconds_per_day


def latitude(position: np.ndarray) -> float:
    """Geocentric latitude in radians from a 3D position."""

    r = float(np.linalg.norm(position))
    if r <= 0.0:
        return 0.0
    return math.asin(clamp(float(position[2]) / r, -1.0, 1.0))


def _sun_3d(sun_pos: np.ndarray) -> np.ndarray:
    return np.array([float(sun_pos[0]), float(sun_pos[1]), 0.0])


def shadow_condition(
    sat_pos: np.ndarray,
    sun_pos: np.ndarray,
    body_radius: float,
    cfg: PhysicsCfg = PHYSICS_CFG,
) -> ShadowCondition:
    """Classify the satellite as lit, in penumbra or in umbra using shadow cones."""

    sat = np.asarray(sat_pos, dtype=float)
    sun = _sun_3d(sun_pos)
    sun_distance = float(np.linalg.norm(sun))
    if sun_distance <= 0.0:
        return ShadowCondition(ShadowType.DIRECT_SUNLIGHT, 1.0)
    sun_dir = sun / sun_distance

    projection = float(np.dot(sat, sun_dir))
    if projection >= 0.0:
        return ShadowCondition(ShadowType.DIRECT_SUNLIGHT, 1.0)

    cross_track = float(np.linalg.norm(sat - projection * sun_dir))
    depth = abs(projection)
    umbra_angle = math.atan((cfg.sun_radius - body_radius) / sun_distance)
    penumbra_angle = math.atan((cfg.sun_radius + body_radius) / sun_distance)
    umbra_radius = body_radius - depth * math.tan(umbra_angle)
    penumbra_radius = body_radius + depth * math.tan(penumbra_angle)

    if umbra_radius > 0.0 and cross_track <= umbra_radius:
        return ShadowCondition(ShadowType.UMBRAL, 0.0)
    if cross_track <= penumbra_radius:
        inner = max(0.0, umbra_radius)
        width = penumbra_radius - inner
        factor = (cross_track - inner) / width if width > 0.0 else 1.0
        return ShadowCondition(ShadowType.PENUMBRA, clamp(factor, 0.0, 1.0))
    return ShadowCondition(ShadowType.DIRECT_SUNLIGHT, 1.0)


def solar_cycle_variation(t: float, cfg: PhysicsCfg = PHYSICS_CFG) -> float:
    """Flux multiplier for the eleven-year solar cycle."""

    phase = 2.0 * math.pi * t / cfg.solar_cycle_period
    return 1.0 + cfg.solar_cycle_amplitude * math.sin(phase)


def srp_acceleration(
    sat_pos: np.ndarray,
    sun_pos: np.ndarray,
    condition: ShadowCondition,
    t: float = 0.0,
    cfg: PhysicsCfg = PHYSICS_CFG,
) -> np.ndarray:
    """Radiation pressure acceleration pointing away from the sun."""

    if condition.lighting_factor <= 0.0:
        return np.zeros(3)
    sat = np.asarray(sat_pos, dtype=float)
    to_sun = _sun_3d(sun_pos) - sat
    distance = float(np.linalg.norm(to_sun))
    if distance <= 0.0:
        return np.zeros(3)
    away = -to_sun / distance

    flux = cfg.solar_constant * (cfg.au * cfg.au) / (distance * distance)
    flux *= condition.lighting_factor * solar_cycle_variation(t, cfg)
    pressure = flux / cfg.speed_of_light
    momentum_factor = 1.0 + cfg.reflectivity * (1.0 + cfg.diffuse_reflection_factor)
    magnitude = pressure * momentum_factor * cfg.satellite_area / cfg.satellite_mass
    return magnitude * away


__all__ = [
    "PHYSICS_CFG",
    "PhysicsCfg",
    "ShadowCondition",
    "ShadowType",
    "atmospheric_density",
    "clamp",
    "drag_acceleration",
    "j2_acceleration",
    "j2_rates",
    "latitude",
    "lunar_acceleration",
    "mean_from_true",
    "moon_position",
    "orbital_period",
    "orbital_radius",
    "perifocal_to_inertial",
    "position_from_elements",
    "shadow_condition",
    "solar_acceleration",
    "solar_cycle_variation",
    "solve_kepler",
    "srp_acceleration",
    "sun_position",
    "third_body_acceleration",
    "true_from_mean",
    "velocity_from_elements",
]
