"""Tests for the command line setup of the visualizer."""
import json

import pytest

from celestial_sim import app


def test_default_arguments():
    args = app.build_parser().parse_args([])
    assert args.speed_level == 1
    assert args.no_rotation is False
    assert args.paused is False
    assert args.record is False
    assert args.windowed_size == (1200, 720)


def test_window_size_argument():
    args = app.build_parser().parse_args(["--windowed-size", "800x600"])
    assert args.windowed_size == (800, 600)


@pytest.mark.parametrize("value", ["800", "axb", "100x100"])
def test_window_size_rejected(value):
    with pytest.raises(SystemExit):
        app.build_parser().parse_args(["--windowed-size", value])


def test_speed_level_outside_set_rejected():
    with pytest.raises(SystemExit):
        app.build_parser().parse_args(["--speed-level", "4"])


def test_build_session_from_flags():
    args = app.build_parser().parse_args(["--speed-level", "3", "--no-rotation", "--paused"])
    session = app.build_session(args)
    assert session.clock.speed_multiplier == 365.25
    assert session.clock.paused is True
    assert session.rotation_enabled is False


def test_build_session_records(tmp_path):
    args = app.build_parser().parse_args(
        ["--record", "--runs-dir", str(tmp_path), "--log-every", "1"]
    )
    session = app.build_session(args)
    with session:
        session.on_frame(0.0)
        session.on_frame(1000.0)
        session.toggle_paused()

    run_id = (tmp_path / "last_run.txt").read_text(encoding="utf-8")
    run_dir = tmp_path / run_id
    meta = json.loads((run_dir / "meta.json").read_text(encoding="utf-8"))
    assert meta["speed_multiplier"] == 7.0
    assert meta["start_date"] == "2024-03-20"
    lines = (run_dir / "timeseries.csv").read_text().splitlines()
    assert len(lines) == 3
    assert "pause" in (run_dir / "events.csv").read_text()


def test_scene_rect_leaves_room_for_panel():
    left, top, width, height = app.scene_rect((1200, 720))
    assert (left, top) == (20, 20)
    assert width == 1200 - 380 - 60
    assert height == 680
