"""Run logging for the orbit overlay."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import IO, Optional, Sequence

import numpy as np

from .model import Simulation


class _BufferedCsv:
    """One CSV file with a header row and a line buffer flushed in batches."""

    def __init__(self, path: Path, header: Sequence[str], threshold: int) -> None:
        self.path = path
        self._fh: IO[str] = path.open("w", newline="", encoding="utf-8")
        self._fh.write(",".join(header) + "\n")
        self._lines: list[str] = []
        self._threshold = max(1, threshold)

    def append(self, line: str) -> None:
        self._lines.append(line)
        if len(self._lines) >= self._threshold:
            self.flush()

    def flush(self) -> None:
        if self._lines:
            self._fh.write("\n".join(self._lines) + "\n")
            self._lines.clear()
        self._fh.flush()

    def close(self) -> None:
        self.flush()
        self._fh.close()


def _unique_run_dir(root_dir: Path, base: str) -> Path:
    candidate = root_dir / base
    suffix = 1
    while candidate.exists():
        candidate = root_dir / f"{base}_{suffix}"
        suffix += 1
    candidate.mkdir(parents=True)
    return candidate


class RunLogger:
    """Buffered logger that stores per-frame overlay data to CSV files.

    Each run gets ``<root_dir>/<run_id>/`` holding ``timeseries.csv``,
    ``events.csv`` and ``meta.json``. Without an explicit ``run_id`` the
    directory is named ``<timestamp>_<label>``.
    """

    TIMESERIES_HEADER = [
        "t",
        "x",
        "y",
        "z",
        "speed",
        "altitude",
        "a_lunar",
        "a_solar",
        "a_drag",
        "a_j2",
        "a_srp",
        "lighting",
    ]
    EVENTS_HEADER = ["t", "type", "subject", "details"]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        label: str = "overlay",
        timeseries_flush_threshold: int = 200,
        events_flush_threshold: int = 50,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)
        base = run_id or f"{datetime.now():%Y%m%d_%H%M%S}_{label}"
        self.run_dir = _unique_run_dir(self.root_dir, base)
        self.run_id = self.run_dir.name

        self.timeseries_path = self.run_dir / "timeseries.csv"
        self.events_path = self.run_dir / "events.csv"
        self.meta_path = self.run_dir / "meta.json"
        self._timeseries = _BufferedCsv(self.timeseries_path, self.TIMESERIES_HEADER, timeseries_flush_threshold)
        self._events = _BufferedCsv(self.events_path, self.EVENTS_HEADER, events_flush_threshold)
        self._closed = False

        (self.root_dir / "last_run.txt").write_text(self.run_id, encoding="utf-8")

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def log_ts(self, values: Sequence[float]) -> None:
        if len(values) != len(self.TIMESERIES_HEADER):
            raise ValueError(
                f"Expected {len(self.TIMESERIES_HEADER)} timeseries values, got {len(values)}"
            )
        self._timeseries.append(",".join(f"{float(v):.10g}" for v in values))

    def log_event(self, values: Sequence[object]) -> None:
        self._events.append(",".join(self._format_event_value(v) for v in values))

    def close(self) -> None:
        if self._closed:
            return
        self._timeseries.close()
        self._events.close()
        self._closed = True

    @staticmethod
    def _format_event_value(value: object) -> str:
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, (int, float)):
            return f"{value:.10g}"
        text = str(value)
        if "," in text or '"' in text:
            return '"' + text.replace('"', '""') + '"'
        return text

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


def timeseries_row(simulation: Simulation) -> list[float]:
    """Values for one :attr:`RunLogger.TIMESERIES_HEADER` row.

    Disabled effects are logged as ``0``.
    """

    sat = simulation.satellite
    if sat is None:
        return [simulation.time] + [0.0] * (len(RunLogger.TIMESERIES_HEADER) - 1)
    effects = simulation.effects
    position = sat.position_3d()
    sun = simulation.sun_position()
    condition = sat.shadow_condition(sun)
    return [
        simulation.time,
        float(position[0]),
        float(position[1]),
        float(position[2]),
        sat.speed(),
        sat.altitude(),
        float(np.linalg.norm(simulation.lunar_acceleration())) if effects.lunar else 0.0,
        float(np.linalg.norm(simulation.solar_acceleration())) if effects.solar else 0.0,
        sat.drag_acceleration() if effects.drag else 0.0,
        float(np.linalg.norm(sat.j2_acceleration())) if effects.j2 else 0.0,
        float(np.linalg.norm(sat.srp_acceleration(sun, simulation.time))) if effects.srp else 0.0,
        condition.lighting_factor,
    ]


__all__ = ["RunLogger", "timeseries_row"]
