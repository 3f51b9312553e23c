"""Tests for mapping the model view box onto the window."""
import numpy as np
import pytest

from celestial_sim.core.config import ORBIT_CFG
from celestial_sim.render.viewport import Viewport


def test_identity_fit():
    viewport = Viewport((0, 0, 600, 440), ORBIT_CFG.view_box)
    assert viewport.scale == pytest.approx(1.0)
    assert viewport.world_to_screen(0.0, 0.0) == (300, 220)
    assert viewport.world_to_screen(250.0, 0.0) == (550, 220)
    # Screen y grows downward like model y.
    assert viewport.world_to_screen(0.0, 180.0) == (300, 400)


def test_meet_fit_centres_spare_width():
    viewport = Viewport((10, 20, 1200, 440), ORBIT_CFG.view_box)
    assert viewport.scale == pytest.approx(1.0)
    assert viewport.world_to_screen(0.0, 0.0) == (610, 240)


def test_meet_fit_scales_down():
    viewport = Viewport((0, 0, 300, 1000), ORBIT_CFG.view_box)
    assert viewport.scale == pytest.approx(0.5)
    assert viewport.world_to_screen(-300.0, -220.0) == (0, 390)


def test_screen_to_world_round_trip():
    viewport = Viewport((0, 0, 900, 660), ORBIT_CFG.view_box)
    x, y = viewport.screen_to_world(*viewport.world_to_screen(100.0, -60.0))
    assert x == pytest.approx(100.0)
    assert y == pytest.approx(-60.0)


def test_update_rect_refits():
    viewport = Viewport((0, 0, 600, 440), ORBIT_CFG.view_box)
    viewport.update_rect((0, 0, 1200, 880))
    assert viewport.scale == pytest.approx(2.0)
    assert viewport.length_to_screen(12.0) == 24


def test_points_to_screen():
    viewport = Viewport((0, 0, 600, 440), ORBIT_CFG.view_box)
    points = np.array([[0.0, 0.0], [250.0, 0.0], [0.0, -180.0]])
    assert viewport.points_to_screen(points) == [(300, 220), (550, 220), (300, 40)]


def test_degenerate_rect():
    viewport = Viewport((0, 0, 0, 0), ORBIT_CFG.view_box)
    assert viewport.scale == 0.0
    assert viewport.length_to_screen(30.0) == 1
