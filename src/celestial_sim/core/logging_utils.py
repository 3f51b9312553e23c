"""Run recording helpers scoped to the celestial simulator package."""
from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from .model import OrbitalState, SeasonalPhase


logger = logging.getLogger(__name__)


class RunRecorder:
    """Buffered recorder that stores a session trace to CSV files.

    Listens to an :class:`~celestial_sim.core.session.AnimationSession` and
    writes every ``log_every_frames``-th orbital state plus control and phase
    change events.
    """

    TIMESERIES_HEADER = [
        "elapsed_days",
        "day_of_year",
        "x",
        "y",
        "rotation_deg",
        "distance_au",
        "day_offset",
        "phase",
    ]
    EVENTS_HEADER = ["elapsed_days", "type", "details"]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        log_every_frames: int = 1,
        timeseries_flush_threshold: int = 200,
        events_flush_threshold: int = 50,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        def make_candidate(suffix: Optional[int] = None) -> str:
            base = run_id or f"{timestamp}_run"
            if suffix is None:
                return base
            if run_id:
                return f"{run_id}_{suffix}"
            return f"{base}_{suffix:02d}"

        candidate_id = make_candidate()
        suffix = 1
        while (self.root_dir / candidate_id).exists():
            candidate_id = make_candidate(suffix)
            suffix += 1

        self.run_id = candidate_id
        self.run_dir = self.root_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=False)

        self.timeseries_path = self.run_dir / "timeseries.csv"
        self.events_path = self.run_dir / "events.csv"
        self.meta_path = self.run_dir / "meta.json"

        self._ts_file = self.timeseries_path.open("w", newline="")
        self._ts_file.write(",".join(self.TIMESERIES_HEADER) + "\n")
        self._ev_file = self.events_path.open("w", newline="")
        self._ev_file.write(",".join(self.EVENTS_HEADER) + "\n")

        self._ts_buffer: list[str] = []
        self._ev_buffer: list[str] = []
        self._ts_threshold = max(1, timeseries_flush_threshold)
        self._ev_threshold = max(1, events_flush_threshold)
        self._log_every = max(1, log_every_frames)
        self._frame_counter = 0
        self._last_phase: SeasonalPhase | None = None
        self._closed = False

        last_run_marker = self.root_dir / "last_run.txt"
        last_run_marker.write_text(self.run_id, encoding="utf-8")
        logger.info("Recording run to %s", self.run_dir)

    @property
    def closed(self) -> bool:
        return self._closed

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True, default=str)

    def log_ts(self, values: Sequence[object]) -> None:
        self._ts_buffer.append(",".join(self._format_value(v) for v in values))
        if len(self._ts_buffer) >= self._ts_threshold:
            self._flush_timeseries()

    def log_event(self, values: Sequence[object]) -> None:
        self._ev_buffer.append(",".join(self._format_value(v) for v in values))
        if len(self._ev_buffer) >= self._ev_threshold:
            self._flush_events()

    def on_frame(self, state: OrbitalState) -> None:
        if self._last_phase is not state.seasonal_phase:
            if self._last_phase is not None:
                logger.debug(
                    "Phase %s -> %s at day %.2f",
                    self._last_phase,
                    state.seasonal_phase,
                    state.elapsed_days,
                )
                self.log_event((state.elapsed_days, "phase", state.seasonal_phase.value))
            self._last_phase = state.seasonal_phase

        if self._frame_counter % self._log_every == 0:
            self.log_ts(
                (
                    state.elapsed_days,
                    state.day_of_year,
                    state.x,
                    state.y,
                    state.rotation_angle,
                    state.distance_au,
                    state.day_offset,
                    state.seasonal_phase.value,
                )
            )
        self._frame_counter += 1

    def on_control(self, kind: str, details: str, state: OrbitalState) -> None:
        self.log_event((state.elapsed_days, kind, details))

    def close(self) -> None:
        if self._closed:
            return
        try:
            self._flush_timeseries()
            self._flush_events()
        finally:
            self._closed = True
            try:
                self._ts_file.close()
            finally:
                self._ev_file.close()

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
    def _format_value(value: object) -> str:
        if isinstance(value, bool):
            return str(int(value))
        if isinstance(value, (int, float)):
            return f"{value:.10g}"
        return str(value)

    def __enter__(self) -> "RunRecorder":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["RunRecorder"]
