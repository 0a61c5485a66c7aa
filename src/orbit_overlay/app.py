"""Interactive pygame window for the orbit overlay."""
from __future__ import annotations

import argparse
import dataclasses
import math
from typing import Optional, Sequence

import pygame

from orbit_overlay.core.config import RENDER_CFG
from orbit_overlay.core.logging_utils import RunLogger, timeseries_row
from orbit_overlay.core.model import EFFECT_NAMES, EffectFlags, Simulation
from orbit_overlay.core.physics import ShadowType
from orbit_overlay.core.timekeeping import FixedStepAccumulator, FrameTimer
from orbit_overlay.data.bodies import (
    BODIES,
    DEFAULT_BODY_KEY,
    DEFAULT_SCENARIO_KEY,
    SCENARIOS,
    get_body,
    get_scenario,
)
from orbit_overlay.render import (
    AssetLibrary,
    Camera,
    OrbitalRenderer,
    SatelliteTrail,
    draw_hud,
    load_font,
)

SIM_STEP = 5.0  # simulated seconds per physics step
MAX_SUBSTEPS = 400
DEFAULT_TIME_WARP = 60.0
WARP_FACTOR = 2.0
WHEEL_ZOOM_FACTOR = 1.1
TRAIL_RESIZE_FACTOR = 2

ELEMENT_ANGLE_OPTIONS = {
    "inc": "inclination",
    "argp": "argument_of_periapsis",
    "raan": "longitude_of_ascending_node",
    "nu": "true_anomaly",
}

EFFECT_KEYS = {
    pygame.K_1: "lunar",
    pygame.K_2: "solar",
    pygame.K_3: "drag",
    pygame.K_4: "j2",
    pygame.K_5: "srp",
}


def parse_size(text: str) -> tuple[int, int]:
    try:
        width_text, height_text = text.lower().split("x", 1)
        size = (int(width_text), int(height_text))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got {text!r}") from exc
    if size[0] <= 0 or size[1] <= 0:
        raise argparse.ArgumentTypeError("Window size must be positive")
    return size


def parse_effects(text: str) -> list[str]:
    if text.strip().lower() in ("", "none"):
        return []
    if text.strip().lower() == "all":
        return list(EFFECT_NAMES)
    names = [part.strip().lower() for part in text.split(",") if part.strip()]
    unknown = [name for name in names if name not in EFFECT_NAMES]
    if unknown:
        raise argparse.ArgumentTypeError(
            f"Unknown effect(s) {', '.join(unknown)}; choose from {', '.join(EFFECT_NAMES)}"
        )
    return names


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected an integer, got {text!r}") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError("Value must be positive")
    return value


def scenario_help() -> str:
    return "; ".join(f"{key}: {scenario.description}" for key, scenario in SCENARIOS.items())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orbit-overlay",
        description="Draw a satellite orbit with perturbation force vectors.",
    )
    parser.add_argument("--body", default=DEFAULT_BODY_KEY, choices=sorted(BODIES))
    parser.add_argument(
        "--scenario",
        default=DEFAULT_SCENARIO_KEY,
        choices=sorted(SCENARIOS),
        help=scenario_help(),
    )
    parser.add_argument(
        "--effects",
        type=parse_effects,
        default=[],
        help="Comma separated effects to enable (lunar,solar,drag,j2,srp), 'all' or 'none'",
    )
    parser.add_argument(
        "--size",
        type=parse_size,
        default=(RENDER_CFG.width, RENDER_CFG.height),
        help="Window size as WIDTHxHEIGHT",
    )
    parser.add_argument("--time-warp", type=float, default=DEFAULT_TIME_WARP)
    parser.add_argument(
        "--trail-length",
        type=positive_int,
        default=RENDER_CFG.trail_max_length,
        help="Number of past satellite positions kept in the trail",
    )
    parser.add_argument("--log-dir", default="data/runs")
    parser.add_argument("--no-log", action="store_true", help="Disable CSV run logging")

    elements = parser.add_argument_group(
        "orbital elements", "Override individual elements of the chosen scenario (angles in degrees)"
    )
    elements.add_argument("--sma-km", type=float, help="Semi-major axis in km")
    elements.add_argument("--ecc", type=float, help="Eccentricity, 0 <= e < 1")
    elements.add_argument("--inc", type=float, help="Inclination")
    elements.add_argument("--argp", type=float, help="Argument of periapsis")
    elements.add_argument("--raan", type=float, help="Longitude of the ascending node")
    elements.add_argument("--nu", type=float, help="True anomaly")
    return parser


def element_overrides(args: argparse.Namespace) -> dict[str, float]:
    """Satellite field overrides in SI units and radians for the element options that were given."""

    overrides: dict[str, float] = {}
    if args.sma_km is not None:
        overrides["semi_major_axis"] = args.sma_km * 1000.0
    if args.ecc is not None:
        overrides["eccentricity"] = args.ecc
    for option, name in ELEMENT_ANGLE_OPTIONS.items():
        value = getattr(args, option)
        if value is not None:
            overrides[name] = math.radians(value)
    return overrides


def build_simulation(
    body_key: str,
    scenario_key: str,
    effects: Sequence[str],
    overrides: Optional[dict[str, float]] = None,
) -> Simulation:
    body = get_body(body_key)
    satellite = get_scenario(scenario_key).build_satellite(body)
    if overrides:
        satellite = dataclasses.replace(satellite, **overrides)
    return Simulation(body=body, satellite=satellite, effects=EffectFlags.from_names(list(effects)))


def run(args: argparse.Namespace, simulation: Simulation) -> None:
    cfg = RENDER_CFG

    logger: Optional[RunLogger] = None
    if not args.no_log:
        logger = RunLogger(args.log_dir, label=f"{args.body}_{args.scenario}")
        logger.write_meta(
            {
                "body": args.body,
                "scenario": args.scenario,
                "effects": simulation.effects.active(),
                "elements": element_overrides(args),
                "time_warp": args.time_warp,
                "trail_length": args.trail_length,
                "sim_step": SIM_STEP,
                "code_version": "orbit-overlay 0.1",
            }
        )

    pygame.init()
    try:
        pygame.display.set_caption("Orbit Overlay")
        screen = pygame.display.set_mode(args.size, pygame.RESIZABLE)
        clock = pygame.time.Clock()
        hud_font = load_font(cfg.font_names, cfg.hud_font_size)

        renderer = OrbitalRenderer(simulation, render_cfg=cfg, assets=AssetLibrary(), run_logger=logger)
        camera = Camera(screen.get_size(), cfg.base_scale, min_zoom=cfg.min_zoom, max_zoom=cfg.max_zoom)
        trail = SatelliteTrail(args.trail_length, color=cfg.trail_color)
        timer = FrameTimer()
        accumulator = FixedStepAccumulator(SIM_STEP, MAX_SUBSTEPS, time_warp=args.time_warp)

        frame = 0
        last_shadow: Optional[ShadowType] = None
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    camera.update_size(screen.get_size())
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in EFFECT_KEYS:
                        name = EFFECT_KEYS[event.key]
                        enabled = simulation.effects.toggle(name)
                        if logger is not None:
                            logger.log_event([simulation.time, "toggle", name, enabled])
                    elif event.key == pygame.K_SPACE:
                        simulation.paused = not simulation.paused
                        accumulator.clear()
                    elif event.key in (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS):
                        camera.zoom_by_factor(cfg.zoom_step)
                    elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                        camera.zoom_by_factor(1.0 / cfg.zoom_step)
                    elif event.key == pygame.K_c:
                        trail.clear()
                    elif event.key == pygame.K_RIGHTBRACKET:
                        trail.resize(trail.max_length * TRAIL_RESIZE_FACTOR)
                    elif event.key == pygame.K_LEFTBRACKET:
                        trail.resize(max(1, trail.max_length // TRAIL_RESIZE_FACTOR))
                    elif event.key in (pygame.K_UP, pygame.K_RIGHT):
                        accumulator.scale_warp(WARP_FACTOR)
                    elif event.key in (pygame.K_DOWN, pygame.K_LEFT):
                        accumulator.scale_warp(1.0 / WARP_FACTOR)
                    elif event.key == pygame.K_r:
                        camera.reset()
                elif event.type == pygame.MOUSEWHEEL:
                    if event.y != 0:
                        camera.zoom_by_factor(WHEEL_ZOOM_FACTOR ** event.y)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    camera.begin_pan(event.pos)
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    camera.end_pan()
                elif event.type == pygame.MOUSEMOTION:
                    camera.pan(event.pos)

            real_dt = timer.tick()
            if not simulation.paused:
                accumulator.accrue(real_dt)
                steps, dt = accumulator.consume()
                for _ in range(steps):
                    simulation.step(dt)
            camera.update(cfg.zoom_smoothing)

            satellite = simulation.satellite
            if satellite is not None and not simulation.paused:
                x, y = satellite.position()
                trail.add_point(x, y)

            if logger is not None and satellite is not None:
                if simulation.effects.srp:
                    condition = satellite.shadow_condition(simulation.sun_position())
                    if condition.shadow_type is not last_shadow:
                        if last_shadow is not None:
                            logger.log_event(
                                [simulation.time, "shadow", condition.shadow_type.name.lower(), condition.lighting_factor]
                            )
                        last_shadow = condition.shadow_type
                else:
                    last_shadow = None
                if frame % cfg.log_every_frames == 0:
                    logger.log_ts(timeseries_row(simulation))

            screen.fill(cfg.background_color)
            trail.draw(screen, camera.viewport(), max_points=cfg.trail_max_rendered_points)
            center_x, center_y = camera.center
            renderer.render(screen, center_x, center_y, camera.base_scale, camera.zoom)
            draw_hud(screen, hud_font, simulation, zoom=camera.zoom, time_warp=accumulator.time_warp, render_cfg=cfg)

            pygame.display.flip()
            clock.tick(cfg.fps)
            frame += 1
    finally:
        if logger is not None:
            logger.close()
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        simulation = build_simulation(args.body, args.scenario, args.effects, element_overrides(args))
    except ValueError as exc:
        parser.error(str(exc))
    run(args, simulation)


if __name__ == "__main__":
    main()
