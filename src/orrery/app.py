"""Interactive top-down orrery.

Planets are placed every frame from their Keplerian elements at the clock's
current Julian date. Controls:

    space       pause / resume
    r           reverse time
    up / down   faster / slower
    f           fast forward (x5)
    1-8         focus a planet, 0 focuses the Sun
    mouse wheel zoom, right drag pans
    esc         quit
"""
from __future__ import annotations

import argparse
import logging
import random
from datetime import datetime, timezone

import numpy as np
import pygame

from orrery.core.config import RENDER_CFG, TIME_CFG
from orrery.core.kepler import compute_all_positions, sample_orbit_path
from orrery.core.logging_utils import RunLogger, configure_logging
from orrery.core.telemetry import build_telemetry_rows, format_julian_date
from orrery.core.timekeeping import FrameTimer, SimulationClock, TimeControl
from orrery.data.planets import PLANET_IDS, PLANET_INFO
from orrery.render import (
    AssetLibrary,
    Button,
    ButtonVisualStyle,
    Camera,
    build_text_panel,
    downsample_points,
    draw_label,
    draw_orbit_line,
    draw_planet,
    draw_selection_ring,
    draw_starfield,
    draw_sun,
    generate_starfield,
    load_font,
    planet_pixel_radius,
)

logger = logging.getLogger(__name__)

FONT_NAMES = ("DejaVu Sans", "Segoe UI", "Helvetica", "Arial")
# Orbit ellipses drift slowly; resample after this many days of sim time.
ORBIT_REFRESH_DAYS = 3_650.0
MAX_FRAME_DT = 0.25


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Keplerian solar system viewer.")
    parser.add_argument(
        "--date",
        help="Start date (ISO 8601, UTC). Defaults to now.",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=TIME_CFG.default_speed,
        help="Initial speed multiplier.",
    )
    parser.add_argument(
        "--days-per-second",
        type=float,
        default=TIME_CFG.days_per_second,
        help="Simulated days per second at 1x.",
    )
    parser.add_argument("--no-record", action="store_true", help="Do not write a run to data/runs.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def parse_start_date(text: str | None) -> datetime:
    if not text:
        return datetime.now(timezone.utc)
    moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        start = parse_start_date(args.date)
    except ValueError as exc:
        raise SystemExit(f"Invalid --date: {exc}") from exc

    clock = SimulationClock(start, days_per_second=args.days_per_second)
    control = TimeControl(clock)
    control.set_preset(args.speed)

    pygame.init()
    pygame.display.set_caption("Orrery")
    screen = pygame.display.set_mode((RENDER_CFG.width, RENDER_CFG.height), pygame.RESIZABLE)
    pygame_clock = pygame.time.Clock()
    font = load_font(FONT_NAMES, 16)
    small_font = load_font(FONT_NAMES, 13)
    title_font = load_font(FONT_NAMES, 18, bold=True)

    assets = AssetLibrary()
    camera = Camera(
        screen.get_size(),
        RENDER_CFG.pixels_per_au,
        min_scale=RENDER_CFG.min_pixels_per_au,
        max_scale=RENDER_CFG.max_pixels_per_au,
    )
    starfield = generate_starfield(
        RENDER_CFG.num_stars,
        size=screen.get_size(),
        rng=random.Random(RENDER_CFG.star_seed),
    )
    planet_radii = {
        planet_id: planet_pixel_radius(PLANET_INFO[planet_id].diameter_km, render_cfg=RENDER_CFG)
        for planet_id in PLANET_IDS
    }

    run_logger: RunLogger | None = None
    if not args.no_record:
        run_logger = RunLogger(RENDER_CFG.runs_dir)
        run_logger.write_meta(
            {
                "start_date": start.isoformat(),
                "epoch_jd": clock.epoch_jd,
                "days_per_second": clock.days_per_second,
                "start_speed": control.scale,
                "planets": list(PLANET_IDS),
            }
        )

    selected: str | None = "earth"
    orbit_paths: dict[str, np.ndarray] = {}
    orbit_paths_jd: float | None = None
    running = True
    frame_index = 0

    def log_event(event_type: str, details: object = "") -> None:
        logger.info("%s %s", event_type, details)
        if run_logger is not None:
            run_logger.log_event(clock.julian_date, event_type, details)

    def toggle_pause() -> None:
        paused = control.toggle_pause()
        log_event("pause" if paused else "resume", {"speed": control.scale})

    def toggle_reverse() -> None:
        reversed_ = control.toggle_reverse()
        log_event("reverse", {"reversed": reversed_})

    def change_speed(action) -> None:
        action()
        log_event("speed", {"speed": control.scale, "label": control.display_label()})

    def select(planet_id: str | None) -> None:
        nonlocal selected
        selected = planet_id
        if planet_id is None:
            camera.set_target((0.0, 0.0))

    def quit_app() -> None:
        nonlocal running
        running = False

    style = ButtonVisualStyle(
        base_color=RENDER_CFG.button_color,
        hover_color=RENDER_CFG.button_hover_color,
        text_color=RENDER_CFG.button_text_color,
        radius=RENDER_CFG.button_radius,
        border_color=RENDER_CFG.button_border_color,
        border_width=1,
        active_color=(*RENDER_CFG.hud_accent_color, 120),
    )
    button_w, button_h = RENDER_CFG.button_size
    gap = RENDER_CFG.button_gap
    buttons = [
        Button((20, 20, button_w, button_h), "Reverse", toggle_reverse, style=style, active_getter=lambda: control.reversed),
        Button(
            (20, 20 + (button_h + gap), button_w, button_h),
            "Pause",
            toggle_pause,
            lambda: "Resume" if control.paused else "Pause",
            style=style,
            active_getter=lambda: control.paused,
        ),
        Button((20, 20 + 2 * (button_h + gap), button_w, button_h), "Slower", lambda: change_speed(control.slow_down), style=style),
        Button((20, 20 + 3 * (button_h + gap), button_w, button_h), "Faster", lambda: change_speed(control.speed_up), style=style),
        Button((20, 20 + 4 * (button_h + gap), button_w, button_h), "5× Fwd", lambda: change_speed(control.fast_forward), style=style),
    ]
    preset_buttons = []
    for index, preset in enumerate(TIME_CFG.speed_presets):
        preset_buttons.append(
            Button(
                (20 + index * (60 + 6), RENDER_CFG.height - 56, 60, 34),
                f"{preset:g}×",
                lambda value=preset: change_speed(lambda: control.set_preset(value)),
                style=style,
                active_getter=lambda value=preset: control.is_preset_active(value),
            )
        )

    def layout_presets(size: tuple[int, int]) -> None:
        for index, button in enumerate(preset_buttons):
            button.rect.topleft = (20 + index * (60 + 6), size[1] - 56)

    timer = FrameTimer()
    try:
        while running:
            frame_dt = min(timer.tick(), MAX_FRAME_DT)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    quit_app()
                elif event.type == pygame.VIDEORESIZE:
                    screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                    camera.update_size(event.size)
                    layout_presets(event.size)
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        quit_app()
                    elif event.key == pygame.K_SPACE:
                        toggle_pause()
                    elif event.key == pygame.K_r:
                        toggle_reverse()
                    elif event.key == pygame.K_UP:
                        change_speed(control.speed_up)
                    elif event.key == pygame.K_DOWN:
                        change_speed(control.slow_down)
                    elif event.key == pygame.K_f:
                        change_speed(control.fast_forward)
                    elif event.key == pygame.K_0:
                        select(None)
                    elif pygame.K_1 <= event.key <= pygame.K_8:
                        select(PLANET_IDS[event.key - pygame.K_1])
                elif event.type == pygame.MOUSEWHEEL:
                    factor = RENDER_CFG.zoom_step if event.y > 0 else 1.0 / RENDER_CFG.zoom_step
                    camera.zoom_by_factor(factor)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 3:
                    select(None)
                    camera.begin_pan(event.pos)
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 3:
                    camera.end_pan()
                elif event.type == pygame.MOUSEMOTION and event.buttons[2]:
                    camera.pan(event.pos)
                if event.type == pygame.MOUSEBUTTONDOWN:
                    for button in (*buttons, *preset_buttons):
                        if button.handle_event(event):
                            break

            clock.advance(frame_dt)
            jd = clock.julian_date
            states = compute_all_positions(jd)

            if orbit_paths_jd is None or abs(jd - orbit_paths_jd) > ORBIT_REFRESH_DAYS:
                orbit_paths = {
                    planet_id: sample_orbit_path(planet_id, jd, RENDER_CFG.orbit_path_samples)
                    for planet_id in PLANET_IDS
                }
                orbit_paths_jd = jd

            if selected is not None and selected in states:
                x, y, _ = states[selected].position
                camera.set_target((x, y))
            camera.update(RENDER_CFG.camera_smoothing)

            if run_logger is not None and frame_index % RENDER_CFG.log_every_frames == 0:
                run_logger.log_states(states)
                for state in states.values():
                    if not state.converged:
                        run_logger.log_event(jd, "nonconvergence", {"planet": state.planet_id})
            frame_index += 1

            screen.fill(RENDER_CFG.background_color)
            draw_starfield(screen, starfield, camera.center, camera.scale, render_cfg=RENDER_CFG)

            for planet_id, path in orbit_paths.items():
                alpha = RENDER_CFG.selected_orbit_alpha if planet_id == selected else RENDER_CFG.orbit_line_alpha
                color = (*PLANET_INFO[planet_id].color, alpha)
                points = downsample_points(camera.project_points(path), RENDER_CFG.orbit_path_samples)
                draw_orbit_line(screen, color, points, RENDER_CFG.orbit_line_width)

            draw_sun(screen, camera.world_to_screen(0.0, 0.0), render_cfg=RENDER_CFG, assets=assets)

            for planet_id, state in states.items():
                if not state.known:
                    continue
                info = PLANET_INFO[planet_id]
                pos = camera.world_to_screen(float(state.position[0]), float(state.position[1]))
                draw_planet(screen, pos, planet_radii[planet_id], info.color, assets=assets)
                if planet_id == selected:
                    draw_selection_ring(screen, pos, planet_radii[planet_id], color=RENDER_CFG.selected_ring_color)
                draw_label(
                    screen,
                    small_font,
                    info.name,
                    pos,
                    color=RENDER_CFG.label_text_color,
                    offset=RENDER_CFG.label_offset,
                )

            mouse_pos = pygame.mouse.get_pos()
            for button in (*buttons, *preset_buttons):
                button.draw(screen, font, mouse_pos)

            hud_lines = [
                (format_julian_date(jd), RENDER_CFG.hud_text_color),
                (f"JD {jd:,.3f}", RENDER_CFG.hud_label_color),
                (f"Time warp: {control.display_label()}", RENDER_CFG.hud_accent_color),
            ]
            if control.paused:
                hud_lines.append(("PAUSED", RENDER_CFG.hud_warning_color))
            elif control.reversed:
                hud_lines.append(("REV", RENDER_CFG.hud_warning_color))
            hud = build_text_panel(title_font, hud_lines, background_color=RENDER_CFG.panel_background_color)
            screen.blit(hud, hud.get_rect(topright=(screen.get_width() - 20, 20)))

            if selected is not None and selected in states:
                rows = build_telemetry_rows(selected, states[selected])
                if rows:
                    lines = [(f"{label}: {value}", RENDER_CFG.hud_text_color) for label, value in rows]
                    panel = build_text_panel(small_font, lines, background_color=RENDER_CFG.panel_background_color)
                    screen.blit(
                        panel,
                        panel.get_rect(bottomright=(screen.get_width() - 20, screen.get_height() - 20)),
                    )

            pygame.display.flip()
            pygame_clock.tick(RENDER_CFG.fps_limit)
    finally:
        if run_logger is not None:
            run_logger.close()
        pygame.quit()


if __name__ == "__main__":
    main()
