"""Celestial Mechanics Visualizer.

An interactive 2D animation of the Earth's revolution around the Sun and its
rotation about a tilted axis, driven by an adjustable time scale.
"""
from __future__ import annotations

import argparse
import logging
import sys

import numpy as np
import pygame

from celestial_sim.core.config import ORBIT_CFG, RENDER_CFG
from celestial_sim.core.logging_utils import RunRecorder
from celestial_sim.core.model import OrbitalState
from celestial_sim.core.orbit import format_calendar_date, sample_orbit_path
from celestial_sim.core.session import AnimationSession
from celestial_sim.core.timekeeping import FrameTimer, SimulationClock
from celestial_sim.data.speeds import DEFAULT_SPEED_LEVEL, SPEED_LEVEL_DEFINITIONS
from celestial_sim.logging_config import setup_logging
from celestial_sim.render import (
    ActionButton,
    AssetLibrary,
    ControlPalette,
    SpeedSlider,
    ToggleSwitch,
    Viewport,
    draw_card,
    draw_dashed_path,
    draw_earth,
    draw_starfield,
    draw_sun,
    generate_starfield,
    get_text_surface,
    load_font,
)


logger = logging.getLogger(__name__)

FONT_NAMES = ["Segoe UI", "Helvetica", "Arial", "DejaVu Sans"]

SPEED_KEYS = {
    pygame.K_1: 0,
    pygame.K_2: 1,
    pygame.K_3: 2,
    pygame.K_4: 3,
}

CONTROLS_TOP = 270

KEY_HINTS = (
    "1-4  speed level",
    "Left/Right  slower/faster",
    "R  toggle rotation",
    "Space  pause/resume",
    "Esc  quit",
)


def _parse_size(value: str) -> tuple[int, int]:
    try:
        width_text, height_text = value.lower().split("x", 1)
        width, height = int(width_text), int(height_text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}") from None
    if width < 320 or height < 240:
        raise argparse.ArgumentTypeError("window must be at least 320x240")
    return width, height


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="celestial-sim",
        description="Animate the Earth's orbit and rotation around the Sun.",
    )
    parser.add_argument(
        "--speed-level",
        type=int,
        choices=range(len(SPEED_LEVEL_DEFINITIONS)),
        default=DEFAULT_SPEED_LEVEL,
        help="Initial speed: "
        + ", ".join(f"{i}={level.label}" for i, level in enumerate(SPEED_LEVEL_DEFINITIONS)),
    )
    parser.add_argument("--no-rotation", action="store_true", help="Start with the Earth's spin off.")
    parser.add_argument("--paused", action="store_true", help="Start paused.")
    parser.add_argument("--record", action="store_true", help="Record the session under --runs-dir.")
    parser.add_argument("--runs-dir", default="data/runs", help="Directory for recorded runs.")
    parser.add_argument(
        "--log-every",
        type=int,
        default=6,
        help="Record every N-th frame when --record is set (default: 6).",
    )
    parser.add_argument(
        "--windowed-size",
        type=_parse_size,
        default=(RENDER_CFG.width, RENDER_CFG.height),
        help="Window size as WIDTHxHEIGHT.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument("--log-file", default=None, help="Also write log output to this file.")
    return parser


def build_session(args: argparse.Namespace) -> AnimationSession:
    """Create the session and, when requested, attach a run recorder."""

    clock = SimulationClock(args.speed_level, paused=args.paused)
    session = AnimationSession(clock, rotation_enabled=not args.no_rotation)
    if args.record:
        recorder = RunRecorder(args.runs_dir, log_every_frames=args.log_every)
        recorder.write_meta(
            {
                "start_date": ORBIT_CFG.start_date.isoformat(),
                "orbit_rx": ORBIT_CFG.orbit_rx,
                "orbit_ry": ORBIT_CFG.orbit_ry,
                "days_in_year": ORBIT_CFG.days_in_year,
                "eccentricity": ORBIT_CFG.eccentricity,
                "speed_level": clock.speed_level,
                "speed_multiplier": clock.speed_multiplier,
                "rotation_enabled": session.rotation_enabled,
                "log_every_frames": args.log_every,
            }
        )
        session.add_listener(recorder)
    return session


def scene_rect(size: tuple[int, int]) -> tuple[int, int, int, int]:
    width, height = size
    margin = RENDER_CFG.panel_margin
    scene_width = max(1, width - RENDER_CFG.side_panel_width - margin * 3)
    return margin, margin, scene_width, max(1, height - margin * 2)


def build_controls(
    session: AnimationSession, size: tuple[int, int]
) -> tuple[SpeedSlider, ToggleSwitch, ActionButton]:
    """Side panel controls: speed slider, rotation switch and pause button."""

    width, _ = size
    panel_x = width - RENDER_CFG.side_panel_width - RENDER_CFG.panel_margin
    panel_w = RENDER_CFG.side_panel_width
    slider = SpeedSlider(
        (panel_x, CONTROLS_TOP, panel_w, 48),
        [level.label for level in SPEED_LEVEL_DEFINITIONS],
        session.set_speed_level,
        lambda: session.clock.speed_level,
    )
    switch = ToggleSwitch(
        (panel_x, CONTROLS_TOP + 64, panel_w, 44),
        "Earth's Rotation",
        session.toggle_rotation,
        lambda: session.rotation_enabled,
    )
    pause_button = ActionButton(
        (panel_x, CONTROLS_TOP + 124, panel_w, 52),
        session.toggle_paused,
        lambda: "Resume Simulation" if session.clock.paused else "Pause Simulation",
    )
    return slider, switch, pause_button


def run(session: AnimationSession, window_size: tuple[int, int]) -> None:
    screen = pygame.display.set_mode(window_size, pygame.RESIZABLE)
    pygame.display.set_caption("Celestial Mechanics Visualizer")
    clock = pygame.time.Clock()

    title_font = load_font(FONT_NAMES, 28, bold=True)
    label_font = load_font(FONT_NAMES, 14, bold=True)
    value_font = load_font(FONT_NAMES, 20, bold=True)
    font = load_font(FONT_NAMES, 18)
    font_small = load_font(FONT_NAMES, 14)

    assets = AssetLibrary(RENDER_CFG)
    viewport = Viewport(scene_rect(window_size), ORBIT_CFG.view_box)
    starfield = generate_starfield(RENDER_CFG.num_stars, size=window_size)
    orbit_points = sample_orbit_path(RENDER_CFG.orbit_samples)
    frame_timer = FrameTimer()

    def slow_down() -> None:
        session.set_speed_level(max(0, session.clock.speed_level - 1))

    def speed_up() -> None:
        top = len(SPEED_LEVEL_DEFINITIONS) - 1
        session.set_speed_level(min(top, session.clock.speed_level + 1))

    palette = ControlPalette.from_cfg(RENDER_CFG)
    controls = build_controls(session, window_size)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                size = (max(320, event.w), max(240, event.h))
                screen = pygame.display.set_mode(size, pygame.RESIZABLE)
                viewport.update_rect(scene_rect(size))
                starfield = generate_starfield(RENDER_CFG.num_stars, size=size)
                controls = build_controls(session, size)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in SPEED_KEYS:
                    session.set_speed_level(SPEED_KEYS[event.key])
                elif event.key == pygame.K_RIGHT:
                    speed_up()
                elif event.key == pygame.K_LEFT:
                    slow_down()
                elif event.key == pygame.K_r:
                    session.toggle_rotation()
                elif event.key == pygame.K_SPACE:
                    session.toggle_paused()
            elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEMOTION, pygame.MOUSEBUTTONUP):
                for control in controls:
                    if control.handle_event(event):
                        break

        state = session.on_frame(frame_timer.now_millis())
        draw_frame(
            screen,
            state,
            viewport=viewport,
            assets=assets,
            starfield=starfield,
            orbit_points=orbit_points,
            fonts=(title_font, label_font, value_font, font, font_small),
        )
        slider, switch, pause_button = controls
        slider.draw(screen, font, palette)
        switch.draw(screen, font, palette)
        pause_button.draw(screen, font, palette, pygame.mouse.get_pos())

        width, height = screen.get_size()
        panel_x = width - RENDER_CFG.side_panel_width - RENDER_CFG.panel_margin
        line_h = font_small.get_linesize()
        hint_y = height - 48 - line_h * len(KEY_HINTS)
        for i, hint in enumerate(KEY_HINTS):
            surf = get_text_surface(font_small, hint, RENDER_CFG.hud_muted_color)
            screen.blit(surf, (panel_x, hint_y + i * line_h))

        fps_surf = font_small.render(f"FPS: {clock.get_fps():.1f}", True, RENDER_CFG.hud_text_color)
        fps_surf.set_alpha(RENDER_CFG.fps_text_alpha)
        screen.blit(fps_surf, fps_surf.get_rect(bottomright=(width - 16, height - 16)))

        pygame.display.flip()
        clock.tick(RENDER_CFG.target_fps)


def draw_frame(
    screen: pygame.Surface,
    state: OrbitalState,
    *,
    viewport: Viewport,
    assets: AssetLibrary,
    starfield: list[dict[str, object]],
    orbit_points: np.ndarray,
    fonts: tuple[pygame.font.Font, ...],
) -> None:
    title_font, label_font, value_font, font, _ = fonts
    cfg = RENDER_CFG
    screen.fill(cfg.background_color)
    draw_starfield(screen, starfield)

    left, top, width, height = viewport.rect
    scene = pygame.Surface((width, height), pygame.SRCALPHA)
    pygame.draw.rect(scene, (*cfg.scene_panel_color[:3], 90), scene.get_rect(), border_radius=12)
    screen.blit(scene, (left, top))

    orbit_layer = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
    draw_dashed_path(
        orbit_layer,
        cfg.orbit_color,
        viewport.points_to_screen(orbit_points),
        viewport.length_to_screen(cfg.orbit_dash_length),
    )
    screen.blit(orbit_layer, (0, 0))

    draw_sun(
        screen,
        viewport.world_to_screen(0.0, 0.0),
        viewport.length_to_screen(ORBIT_CFG.sun_radius),
        assets=assets,
    )
    draw_earth(
        screen,
        viewport.world_to_screen(state.x, state.y),
        viewport.length_to_screen(ORBIT_CFG.earth_radius),
        spin_deg=ORBIT_CFG.axial_tilt_deg + state.rotation_angle,
        night_side_deg=state.night_side_angle,
        axis_overhang=viewport.length_to_screen(cfg.earth_axis_overhang),
        render_cfg=cfg,
    )

    screen_w, _ = screen.get_size()
    panel_x = screen_w - cfg.side_panel_width - cfg.panel_margin
    title = title_font.render("Celestial Mechanics", True, cfg.hud_label_color)
    screen.blit(title, (panel_x, cfg.panel_margin))

    card_w = (cfg.side_panel_width - 12) // 2
    card_y = cfg.panel_margin + 60
    draw_card(
        screen,
        pygame.Rect(panel_x, card_y, card_w, 84),
        "SIMULATED DATE",
        format_calendar_date(state.calendar_date),
        title_font=label_font,
        value_font=value_font,
        render_cfg=cfg,
    )
    draw_card(
        screen,
        pygame.Rect(panel_x + card_w + 12, card_y, card_w, 84),
        "ORBITAL POSITION",
        state.seasonal_phase.value,
        title_font=label_font,
        value_font=value_font,
        render_cfg=cfg,
    )

    info_y = card_y + 100
    info = font.render(
        f"Distance {state.distance_au:.3f} AU   Day {state.day_of_year:6.1f}",
        True,
        cfg.hud_muted_color,
    )
    screen.blit(info, (panel_x, info_y))

    speed_caption = label_font.render("SIMULATION SPEED", True, cfg.hud_label_color)
    screen.blit(speed_caption, (panel_x, CONTROLS_TOP - 28))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    session = build_session(args)
    pygame.init()
    try:
        with session:
            run(session, args.windowed_size)
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pygame.quit()
        sys.exit()
