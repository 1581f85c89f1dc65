"""Analyze a recorded orrery run and generate track figures."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Dict, List

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from orrery.core.logging_utils import read_last_run_id
from orrery.data.planets import PLANET_IDS, PLANET_INFO


TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"
DEFAULT_RUNS_DIR = Path("data") / "runs"


def load_timeseries(path: Path) -> Dict[str, Dict[str, np.ndarray]]:
    """Load ``timeseries.csv`` grouped by planet."""

    columns: Dict[str, Dict[str, List[float]]] = {}
    with path.open("r", newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            planet = row.get("planet")
            if not planet:
                continue
            track = columns.setdefault(planet, {"jd": [], "x": [], "y": [], "z": [], "r": []})
            for key in track:
                track[key].append(float(row[key]))
    return {
        planet: {key: np.asarray(values) for key, values in track.items()}
        for planet, track in columns.items()
    }


def load_events(path: Path) -> List[dict]:
    events: List[dict] = []
    with path.open("r", newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            if not row or not row.get("type"):
                continue
            event = {"jd": float(row["jd"]), "type": row["type"]}
            details_raw = row.get("details", "")
            if details_raw:
                try:
                    event["details"] = json.loads(details_raw)
                except json.JSONDecodeError:
                    event["details"] = details_raw
            events.append(event)
    return events


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def summarize_tracks(tracks: Dict[str, Dict[str, np.ndarray]]) -> Dict[str, dict]:
    summary: Dict[str, dict] = {}
    for planet, track in tracks.items():
        r = track["r"]
        if r.size == 0:
            continue
        summary[planet] = {
            "samples": int(r.size),
            "r_min": float(r.min()),
            "r_max": float(r.max()),
            "jd_start": float(track["jd"][0]),
            "jd_end": float(track["jd"][-1]),
        }
    return summary


def summarize_events(events: List[dict]) -> Dict[str, int]:
    summary: Dict[str, int] = {}
    for event in events:
        summary[event["type"]] = summary.get(event["type"], 0) + 1
    return summary


def _planet_order(tracks: Dict[str, Dict[str, np.ndarray]]) -> List[str]:
    known = [planet for planet in PLANET_IDS if planet in tracks]
    return known + sorted(planet for planet in tracks if planet not in PLANET_IDS)


def _color(planet: str) -> str:
    info = PLANET_INFO.get(planet)
    if info is None:
        return "#888888"
    return "#{:02x}{:02x}{:02x}".format(*info.color)


def plot_tracks(fig_dir: Path, tracks: Dict[str, Dict[str, np.ndarray]]) -> None:
    fig, ax = plt.subplots(figsize=(7, 7))
    fig.patch.set_facecolor("#04081a")
    ax.set_facecolor("#04081a")
    for planet in _planet_order(tracks):
        track = tracks[planet]
        ax.plot(track["x"], track["y"], color=_color(planet), lw=1.2, label=planet.title())
        ax.scatter(track["x"][-1:], track["y"][-1:], color=_color(planet), s=14)
    ax.scatter([0.0], [0.0], color="#ffcc5c", s=60, label="Sun")
    ax.set_aspect("equal", "box")
    ax.set_xlabel("x [AU]")
    ax.set_ylabel("y [AU]")
    ax.set_title("Heliocentric tracks (ecliptic x-y)")
    ax.legend(fontsize=8)
    fig.tight_layout()
    fig.savefig(fig_dir / "tracks_xy.png", dpi=150)
    plt.close(fig)


def plot_distance(fig_dir: Path, tracks: Dict[str, Dict[str, np.ndarray]], events: List[dict]) -> None:
    fig, ax = plt.subplots(figsize=(8, 4))
    for planet in _planet_order(tracks):
        track = tracks[planet]
        ax.plot(track["jd"], track["r"], color=_color(planet), lw=1.2, label=planet.title())
    for event in events:
        if event["type"] in ("pause", "reverse"):
            ax.axvline(event["jd"], color="#868e96", linestyle=":", alpha=0.5)
    ax.set_xlabel("JD")
    ax.set_ylabel("r [AU]")
    ax.set_yscale("log")
    ax.set_title("Heliocentric distance")
    ax.grid(True, alpha=0.3)
    ax.legend(fontsize=8)
    fig.tight_layout()
    fig.savefig(fig_dir / "distance.png", dpi=150)
    plt.close(fig)


def print_summary(
    run_dir: Path,
    meta: dict,
    track_summary: Dict[str, dict],
    event_summary: Dict[str, int],
) -> None:
    print(f"Run: {run_dir.name}")
    if "start_date" in meta:
        print(f" Start: {meta['start_date']} (JD {meta.get('epoch_jd', float('nan')):.3f})")
    for planet, stats in track_summary.items():
        print(
            f" {planet:<8} samples={stats['samples']:>6}  "
            f"r_min={stats['r_min']:.4f} AU  r_max={stats['r_max']:.4f} AU"
        )
    if event_summary:
        print(" Events:" + ",".join(f" {etype}: {count}" for etype, count in event_summary.items()))
    else:
        print(" Events: none")


def resolve_run_dir(run_arg: str | None, base_runs_dir: Path = DEFAULT_RUNS_DIR) -> Path | None:
    if run_arg:
        run_path = Path(run_arg)
        if not run_path.is_dir():
            run_path = base_runs_dir / run_arg
        return run_path
    run_id = read_last_run_id(base_runs_dir)
    if run_id is None:
        return None
    return base_runs_dir / run_id


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a recorded orrery run and create figures.")
    parser.add_argument("run_dir", nargs="?", help="Path or id of a run directory")
    parser.add_argument("--runs-dir", default=str(DEFAULT_RUNS_DIR), help="Directory holding recorded runs")
    args = parser.parse_args(argv)

    run_path = resolve_run_dir(args.run_dir, Path(args.runs_dir))
    if run_path is None:
        parser.error("No run given and last_run.txt is missing.")
    if not run_path.is_dir():
        parser.error(f"Run directory not found: {run_path}")

    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME
    meta_path = run_path / META_FILENAME
    if not ts_path.exists() or not ev_path.exists():
        parser.error("Run directory is missing timeseries.csv or events.csv.")

    meta: dict = {}
    if meta_path.exists():
        with meta_path.open("r", encoding="utf-8") as fh:
            meta = json.load(fh)

    tracks = load_timeseries(ts_path)
    if not tracks:
        parser.error("timeseries.csv is empty, nothing to analyze.")
    events = load_events(ev_path)

    fig_dir = ensure_fig_dir(run_path)
    plot_tracks(fig_dir, tracks)
    plot_distance(fig_dir, tracks, events)

    print_summary(run_path, meta, summarize_tracks(tracks), summarize_events(events))


if __name__ == "__main__":
    main()
