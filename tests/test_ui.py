"""Tests for the side panel controls; none of them need a display."""
import pygame
import pytest

from celestial_sim import app
from celestial_sim.core.session import AnimationSession
from celestial_sim.render.ui import ActionButton, SpeedSlider, ToggleSwitch


LABELS = ["1 Day/s", "1 Week/s", "1 Month/s", "1 Year/s"]


def press(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=button)


def motion(pos):
    return pygame.event.Event(pygame.MOUSEMOTION, pos=pos, rel=(0, 0), buttons=(1, 0, 0))


def release(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONUP, pos=pos, button=1)


class FakeValue:
    def __init__(self, value):
        self.value = value
        self.changes = []

    def set(self, value):
        self.value = value
        self.changes.append(value)

    def get(self):
        return self.value


def make_slider(value=1):
    holder = FakeValue(value)
    # 200 px of travel between the first and last stop.
    slider = SpeedSlider((0, 0, 218, 48), LABELS, holder.set, holder.get)
    return slider, holder


class TestSpeedSlider:
    def test_stops_span_the_track(self):
        slider, _ = make_slider()
        assert slider.stops == 4
        assert slider.stop_x(0) == 9
        assert slider.stop_x(3) == 209

    @pytest.mark.parametrize(
        "x, expected",
        [(-50, 0), (9, 0), (40, 0), (76, 1), (142, 2), (180, 3), (209, 3), (500, 3)],
    )
    def test_index_at_snaps_to_nearest_stop(self, x, expected):
        slider, _ = make_slider()
        assert slider.index_at(x) == expected

    def test_each_stop_maps_back_to_itself(self):
        slider, _ = make_slider()
        for index in range(slider.stops):
            assert slider.index_at(slider.stop_x(index)) == index

    def test_click_selects_stop(self):
        slider, holder = make_slider(value=1)
        assert slider.handle_event(press((209, 10)))
        assert holder.changes == [3]
        assert slider.dragging

    def test_click_on_current_stop_does_not_notify(self):
        slider, holder = make_slider(value=1)
        assert slider.handle_event(press((76, 10)))
        assert holder.changes == []

    def test_drag_follows_pointer_until_release(self):
        slider, holder = make_slider(value=0)
        slider.handle_event(press((9, 10)))
        assert slider.handle_event(motion((142, 200)))
        assert slider.handle_event(release((142, 200)))
        assert not slider.dragging
        assert not slider.handle_event(motion((209, 10)))
        assert holder.changes == [2]

    def test_click_outside_or_with_other_button_is_ignored(self):
        slider, holder = make_slider()
        assert not slider.handle_event(press((100, 100)))
        assert not slider.handle_event(press((209, 10), button=3))
        assert holder.changes == []

    def test_requires_two_stops(self):
        with pytest.raises(ValueError):
            SpeedSlider((0, 0, 100, 20), ["only"], lambda i: None, lambda: 0)


class TestToggleSwitch:
    def test_click_toggles(self):
        state = {"on": True}

        def toggle():
            state["on"] = not state["on"]

        switch = ToggleSwitch((10, 10, 200, 40), "Earth's Rotation", toggle, lambda: state["on"])
        assert switch.handle_event(press((50, 30)))
        assert state["on"] is False
        assert not switch.handle_event(press((5, 5)))
        assert state["on"] is False

    def test_pill_sits_inside_right_edge(self):
        switch = ToggleSwitch((0, 0, 200, 40), "x", lambda: None, lambda: True)
        pill = switch.pill
        assert switch.rect.contains(pill)
        assert pill.width == pill.height * 2
        assert pill.centery == switch.rect.centery


def test_action_button_click():
    clicks = []
    button = ActionButton((0, 0, 100, 40), lambda: clicks.append(1), lambda: "Pause")
    assert button.handle_event(press((50, 20)))
    assert not button.handle_event(release((50, 20)))
    assert clicks == [1]


class TestPanelControls:
    def test_controls_drive_session(self):
        session = AnimationSession()
        with session:
            slider, switch, pause_button = app.build_controls(session, (1200, 720))

            slider.handle_event(press((slider.stop_x(3), slider.rect.top + 5)))
            assert session.clock.speed_level == 3
            assert session.clock.speed_label == "1 Year/s"

            switch.handle_event(press(switch.rect.center))
            assert session.rotation_enabled is False

            pause_button.handle_event(press(pause_button.rect.center))
            assert session.clock.paused is True

    def test_controls_do_not_overlap(self):
        slider, switch, pause_button = app.build_controls(AnimationSession(), (1200, 720))
        assert not slider.rect.colliderect(switch.rect)
        assert not switch.rect.colliderect(pause_button.rect)
        assert slider.rect.right <= 1200
