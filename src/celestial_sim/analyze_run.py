"""Analyze a recorded session and generate diagnostic figures."""
from __future__ import annotations

import argparse
import csv
import json
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from celestial_sim.core.config import ORBIT_CFG
from celestial_sim.core.model import SeasonalPhase


TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"
TEXT_COLUMNS = {"phase"}
PHASE_ORDER = [phase.value for phase in SeasonalPhase]
PHASE_COLORS = {
    "Vernal Equinox": "#94d82d",
    "Spring": "#69db7c",
    "Summer Solstice": "#ffd43b",
    "Summer": "#ffa94d",
    "Autumnal Equinox": "#e8590c",
    "Autumn": "#c2255c",
    "Winter Solstice": "#4dabf7",
    "Winter": "#748ffc",
    "In Orbit": "#adb5bd",
}


@dataclass(frozen=True)
class RunSummary:
    samples: int
    elapsed_days: float
    completed_orbits: int
    min_distance_au: float
    max_distance_au: float
    phase_fractions: Dict[str, float]
    phase_transitions: int
    control_events: Dict[str, int]


def load_timeseries(path: Path) -> Dict[str, object]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        columns: Dict[str, list] = {name: [] for name in reader.fieldnames or []}
        for row in reader:
            for key, value in row.items():
                if key is None:
                    continue
                if key in TEXT_COLUMNS:
                    columns.setdefault(key, []).append(value)
                else:
                    columns.setdefault(key, []).append(float(value))
    return {
        key: values if key in TEXT_COLUMNS else np.asarray(values, dtype=float)
        for key, values in columns.items()
    }


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row:
                continue
            events.append(
                {
                    "elapsed_days": float(row["elapsed_days"]),
                    "type": row["type"],
                    "details": row.get("details") or "",
                }
            )
    return events


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def summarize_run(ts: Dict[str, object], events: List[dict]) -> RunSummary:
    elapsed = np.asarray(ts.get("elapsed_days", []), dtype=float)
    distance = np.asarray(ts.get("distance_au", []), dtype=float)
    phases = list(ts.get("phase", []))  # type: ignore[arg-type]

    samples = int(elapsed.size)
    elapsed_days = float(elapsed[-1]) if samples else 0.0
    counts = Counter(phases)
    fractions = {
        label: counts[label] / len(phases) for label in PHASE_ORDER if counts.get(label)
    }
    event_types = Counter(event["type"] for event in events)
    transitions = event_types.pop("phase", 0)

    return RunSummary(
        samples=samples,
        elapsed_days=elapsed_days,
        completed_orbits=int(elapsed_days // ORBIT_CFG.days_in_year),
        min_distance_au=float(distance.min()) if distance.size else float("nan"),
        max_distance_au=float(distance.max()) if distance.size else float("nan"),
        phase_fractions=fractions,
        phase_transitions=transitions,
        control_events=dict(event_types),
    )


def plot_orbit_track(fig_dir: Path, ts: Dict[str, object]) -> None:
    fig, ax = plt.subplots(figsize=(7, 5))
    theta = np.linspace(0, 2 * np.pi, 256)
    ax.plot(
        ORBIT_CFG.orbit_rx * np.cos(theta),
        ORBIT_CFG.orbit_ry * np.sin(theta),
        color="#facc15",
        linestyle="--",
        alpha=0.5,
        label="Orbit",
    )
    ax.plot(ts["x"], ts["y"], color="#3b82f6", lw=1.5, label="Earth")
    ax.scatter([0.0], [0.0], color="#f97316", s=80, label="Sun")
    ax.set_aspect("equal", "box")
    # Match the on-screen orientation, where y grows downward.
    ax.invert_yaxis()
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title("Orbit track")
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "orbit_track.png", dpi=150)
    plt.close(fig)


def plot_distance(fig_dir: Path, ts: Dict[str, object]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["elapsed_days"], ts["distance_au"], color="#4dabf7")
    ax.set_xlabel("Simulated days")
    ax.set_ylabel("Distance [AU]")
    ax.set_title("Distance from the Sun")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "distance.png", dpi=150)
    plt.close(fig)


def plot_phase_timeline(fig_dir: Path, ts: Dict[str, object]) -> None:
    phases = list(ts["phase"])  # type: ignore[arg-type]
    levels = np.array([PHASE_ORDER.index(label) for label in phases], dtype=float)
    colors = [PHASE_COLORS.get(label, "#adb5bd") for label in phases]
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.scatter(ts["elapsed_days"], levels, c=colors, s=6)
    ax.set_yticks(range(len(PHASE_ORDER)))
    ax.set_yticklabels(PHASE_ORDER)
    ax.set_xlabel("Simulated days")
    ax.set_title("Seasonal phase over time")
    ax.grid(True, axis="x", alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "phase_timeline.png", dpi=150)
    plt.close(fig)


def print_summary(run_dir: Path, meta: dict, summary: RunSummary) -> None:
    print(f"Run: {run_dir.name}")
    print(f" Start date: {meta.get('start_date', 'unknown')}")
    print(f" Samples: {summary.samples}")
    print(f" Simulated days: {summary.elapsed_days:.2f} ({summary.completed_orbits} full orbits)")
    print(
        f" Distance: {summary.min_distance_au:.4f} - {summary.max_distance_au:.4f} AU"
    )
    print(f" Phase transitions: {summary.phase_transitions}")
    if summary.phase_fractions:
        print(
            " Time per phase:"
            + ",".join(f" {label}: {share:.1%}" for label, share in summary.phase_fractions.items())
        )
    if summary.control_events:
        print(
            " Control events:"
            + ",".join(f" {kind}: {count}" for kind, count in summary.control_events.items())
        )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="celestial-analyze",
        description="Analyze a recorded session and write figures.",
    )
    parser.add_argument("run_dir", nargs="?", help="Path to a specific run directory")
    parser.add_argument("--runs-dir", default="data/runs", help="Directory holding recorded runs")
    args = parser.parse_args(argv)

    base_runs_dir = Path(args.runs_dir)
    if args.run_dir:
        run_path = Path(args.run_dir)
        if not run_path.is_dir():
            run_path = base_runs_dir / args.run_dir
    else:
        last_run_file = base_runs_dir / "last_run.txt"
        if not last_run_file.exists():
            parser.error("No run given and last_run.txt is missing.")
        run_id = last_run_file.read_text(encoding="utf-8").strip()
        run_path = base_runs_dir / run_id

    if not run_path.is_dir():
        parser.error(f"Run directory not found: {run_path}")

    meta_path = run_path / META_FILENAME
    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME

    if not meta_path.exists() or not ts_path.exists() or not ev_path.exists():
        parser.error("Run directory is missing required files (meta/timeseries/events).")

    with meta_path.open("r", encoding="utf-8") as fh:
        meta = json.load(fh)

    ts = load_timeseries(ts_path)
    events = load_events(ev_path)
    if not len(ts.get("elapsed_days", [])):  # type: ignore[arg-type]
        parser.error("timeseries.csv is empty, nothing to analyze.")

    fig_dir = ensure_fig_dir(run_path)
    plot_orbit_track(fig_dir, ts)
    plot_distance(fig_dir, ts)
    plot_phase_timeline(fig_dir, ts)

    print_summary(run_path, meta, summarize_run(ts, events))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
