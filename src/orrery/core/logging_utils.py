"""Run recording for the orrery: planet tracks and clock events as CSV."""
from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Mapping, Optional

from .model import PlanetState

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(module)s - %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


class RunLogger:
    """Buffered logger that stores planet positions and events to CSV files."""

    TIMESERIES_HEADER = ["jd", "planet", "x", "y", "z", "r"]
    EVENTS_HEADER = ["jd", "type", "details"]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        timeseries_flush_threshold: int = 400,
        events_flush_threshold: int = 20,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base = run_id or f"{timestamp}_run"
        candidate_id = base
        suffix = 1
        while (self.root_dir / candidate_id).exists():
            candidate_id = f"{base}_{suffix:02d}"
            suffix += 1

        self.run_id = candidate_id
        self.run_dir = self.root_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=False)

        self.timeseries_path = self.run_dir / "timeseries.csv"
        self.events_path = self.run_dir / "events.csv"
        self.meta_path = self.run_dir / "meta.json"

        self._ts_file = self.timeseries_path.open("w", newline="", encoding="utf-8")
        self._ts_file.write(",".join(self.TIMESERIES_HEADER) + "\n")
        self._ev_file = self.events_path.open("w", newline="", encoding="utf-8")
        self._ev_file.write(",".join(self.EVENTS_HEADER) + "\n")

        self._ts_buffer: list[str] = []
        self._ev_buffer: list[str] = []
        self._ts_threshold = max(1, timeseries_flush_threshold)
        self._ev_threshold = max(1, events_flush_threshold)
        self._closed = False

        last_run_marker = self.root_dir / "last_run.txt"
        last_run_marker.write_text(self.run_id, encoding="utf-8")
        logger.info("Recording run %s to %s", self.run_id, self.run_dir)

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def log_state(self, state: PlanetState) -> None:
        x, y, z = (float(v) for v in state.position)
        self._ts_buffer.append(
            ",".join(
                [
                    self._format_value(state.julian_date),
                    state.planet_id,
                    self._format_value(x),
                    self._format_value(y),
                    self._format_value(z),
                    self._format_value(state.distance),
                ]
            )
        )
        if len(self._ts_buffer) >= self._ts_threshold:
            self._flush_timeseries()

    def log_states(self, states: Mapping[str, PlanetState] | Iterable[PlanetState]) -> None:
        values = states.values() if isinstance(states, Mapping) else states
        for state in values:
            self.log_state(state)

    def log_event(self, julian_date: float, event_type: str, details: object = "") -> None:
        if isinstance(details, (dict, list)):
            details = json.dumps(details, sort_keys=True)
        self._ev_buffer.append(
            ",".join(
                [
                    self._format_value(julian_date),
                    event_type,
                    self._quote(str(details)),
                ]
            )
        )
        if len(self._ev_buffer) >= self._ev_threshold:
            self._flush_events()

    def close(self) -> None:
        if self._closed:
            return
        self._flush_timeseries()
        self._flush_events()
        self._ts_file.close()
        self._ev_file.close()
        self._closed = True

    def _flush_timeseries(self) -> None:
        if self._ts_buffer:
            self._ts_file.write("\n".join(self._ts_buffer) + "\n")
            self._ts_file.flush()
            self._ts_buffer.clear()

    def _flush_events(self) -> None:
        if self._ev_buffer:
            self._ev_file.write("\n".join(self._ev_buffer) + "\n")
            self._ev_file.flush()
            self._ev_buffer.clear()

    @staticmethod
    def _format_value(value: float) -> str:
        return f"{value:.12g}"

    @staticmethod
    def _quote(text: str) -> str:
        if any(ch in text for ch in ',"\n'):
            return '"' + text.replace('"', '""') + '"'
        return text

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


def read_last_run_id(root_dir: str | Path) -> Optional[str]:
    marker = Path(root_dir) / "last_run.txt"
    if not marker.exists():
        return None
    run_id = marker.read_text(encoding="utf-8").strip()
    return run_id or None


__all__ = ["LOG_FORMAT", "RunLogger", "configure_logging", "read_last_run_id"]
