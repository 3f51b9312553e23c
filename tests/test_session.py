"""Tests for the animation session lifecycle and controls."""
import pytest

from celestial_sim.core.model import SeasonalPhase
from celestial_sim.core.session import AnimationSession
from celestial_sim.core.timekeeping import SimulationClock


class RecordingListener:
    def __init__(self):
        self.frames = []
        self.controls = []
        self.closed = False

    def on_frame(self, state):
        self.frames.append(state)

    def on_control(self, kind, details, state):
        self.controls.append((kind, details, state.elapsed_days))

    def close(self):
        self.closed = True


def test_frames_advance_clock():
    with AnimationSession() as session:
        first = session.on_frame(0.0)
        second = session.on_frame(2000.0)
    assert first.elapsed_days == 0.0
    assert first.seasonal_phase is SeasonalPhase.VERNAL_EQUINOX
    assert second.elapsed_days == 14.0


def test_on_frame_requires_running_session():
    session = AnimationSession()
    with pytest.raises(RuntimeError):
        session.on_frame(0.0)
    with session:
        session.on_frame(0.0)
    with pytest.raises(RuntimeError):
        session.on_frame(16.0)


def test_enter_resets_clock():
    clock = SimulationClock()
    clock.tick(0.0)
    clock.tick(1000.0)
    with AnimationSession(clock) as session:
        assert session.clock.elapsed_days == 0.0
        assert session.clock.last_millis is None


def test_exit_releases_on_exception():
    listener = RecordingListener()
    session = AnimationSession()
    session.add_listener(listener)
    with pytest.raises(KeyError):
        with session:
            session.on_frame(0.0)
            raise KeyError("boom")
    assert not session.running
    assert listener.closed
    assert session.clock.last_millis is None


def test_listener_receives_frames():
    listener = RecordingListener()
    session = AnimationSession()
    session.add_listener(listener)
    with session:
        for millis in (0.0, 1000.0, 2000.0):
            session.on_frame(millis)
    assert [state.elapsed_days for state in listener.frames] == [0.0, 7.0, 14.0]
    assert listener.closed


def test_remove_listener():
    listener = RecordingListener()
    session = AnimationSession()
    session.add_listener(listener)
    session.remove_listener(listener)
    with session:
        session.on_frame(0.0)
    assert listener.frames == []
    assert not listener.closed


def test_controls_are_forwarded():
    listener = RecordingListener()
    session = AnimationSession()
    session.add_listener(listener)
    with session:
        session.on_frame(0.0)
        session.on_frame(1000.0)
        session.set_speed_level(3)
        session.toggle_paused()
        session.set_paused(True)
        session.toggle_paused()
        session.toggle_rotation()
    assert listener.controls == [
        ("speed", "1 Year/s", 7.0),
        ("pause", "", 7.0),
        ("resume", "", 7.0),
        ("rotation", "off", 7.0),
    ]


def test_pause_through_session():
    with AnimationSession() as session:
        session.on_frame(0.0)
        session.set_paused(True)
        state = session.on_frame(10_000.0)
        assert state.elapsed_days == 0.0
        session.set_paused(False)
        state = session.on_frame(11_000.0)
        assert state.elapsed_days == 7.0


def test_rotation_flag_changes_state():
    with AnimationSession(SimulationClock(0)) as session:
        session.on_frame(0.0)
        state = session.on_frame(500.0)
        assert state.rotation_angle == 180.0
        session.set_rotation_enabled(False)
        assert session.state.rotation_angle == 0.0
        assert session.on_frame(750.0).rotation_angle == 0.0


def test_state_does_not_tick():
    with AnimationSession() as session:
        session.on_frame(0.0)
        session.on_frame(1000.0)
        assert session.state.elapsed_days == 7.0
        assert session.state == session.state


def test_bad_speed_level_fails_loudly():
    with AnimationSession() as session:
        with pytest.raises(ValueError):
            session.set_speed_level(4)
        assert session.clock.speed_level == 1


class FailingCloseListener(RecordingListener):
    def close(self):
        raise OSError("disk full")


def test_failing_close_does_not_skip_other_listeners(caplog):
    failing = FailingCloseListener()
    tracking = RecordingListener()
    session = AnimationSession()
    session.add_listener(failing)
    session.add_listener(tracking)
    session.start()
    with pytest.raises(OSError, match="disk full"):
        session.stop()
    assert tracking.closed
    assert not session.running
    assert "Closing listener" in caplog.text
    # Listeners are released even when one of them failed.
    session.stop()


def test_first_close_error_wins():
    class OtherFailure(RecordingListener):
        def close(self):
            raise ValueError("second")

    session = AnimationSession()
    session.add_listener(FailingCloseListener())
    session.add_listener(OtherFailure())
    session.start()
    with pytest.raises(OSError):
        session.stop()
