"""Configuration dataclasses for the orrery."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrbitCfg:
    j2000_jd: float = 2_451_545.0
    days_per_century: float = 36_525.0
    unix_epoch_jd: float = 2_440_587.5
    ms_per_day: float = 86_400_000.0
    kepler_tolerance: float = 1e-8
    kepler_max_iterations: int = 50
    max_eccentricity: float = 0.99


@dataclass(frozen=True)
class TimeCfg:
    min_speed: float = 0.01
    max_speed: float = 500.0
    default_speed: float = 1.0
    speed_presets: tuple[float, ...] = (0.1, 1.0, 5.0, 20.0, 100.0)
    fast_forward_factor: float = 5.0
    step_factor: float = 1.5
    # Ephemeris days covered by one accumulated second at 1x.
    days_per_second: float = 1.0
    slider_min: float = 0.0
    slider_max: float = 100.0


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1200
    height: int = 860
    fps_limit: int = 60
    background_color: tuple[int, int, int] = (4, 8, 20)
    sun_color: tuple[int, int, int] = (255, 204, 92)
    sun_glow_color: tuple[int, int, int] = (255, 170, 60)
    sun_pixel_radius: int = 12
    planet_min_pixel_radius: int = 3
    planet_max_pixel_radius: int = 11
    selected_ring_color: tuple[int, int, int] = (46, 209, 195)
    pixels_per_au: float = 140.0
    min_pixels_per_au: float = 6.0
    max_pixels_per_au: float = 2_400.0
    zoom_step: float = 1.15
    camera_smoothing: float = 0.12
    orbit_path_samples: int = 256
    orbit_line_alpha: int = 90
    orbit_line_width: int = 1
    selected_orbit_alpha: int = 200
    hud_text_color: tuple[int, int, int] = (234, 241, 255)
    hud_label_color: tuple[int, int, int] = (150, 170, 200)
    hud_accent_color: tuple[int, int, int] = (46, 209, 195)
    hud_warning_color: tuple[int, int, int] = (255, 176, 120)
    panel_background_color: tuple[int, int, int, int] = (12, 18, 30, int(255 * 0.72))
    button_color: tuple[int, int, int, int] = (8, 32, 64, int(255 * 0.78))
    button_hover_color: tuple[int, int, int, int] = (18, 52, 94, int(255 * 0.88))
    button_text_color: tuple[int, int, int] = (234, 241, 255)
    button_border_color: tuple[int, int, int, int] = (88, 140, 255, int(255 * 0.55))
    button_radius: int = 14
    button_size: tuple[int, int] = (96, 40)
    button_gap: int = 10
    label_text_color: tuple[int, int, int] = (208, 216, 228)
    label_offset: int = 8
    num_stars: int = 260
    star_seed: int = 42
    starfield_parallax: float = 0.08
    # kepler.scene_positions: (x, z * squash, y) * scale.
    scene_scale: float = 50.0
    scene_vertical_squash: float = 0.3
    log_every_frames: int = 30
    runs_dir: str = "data/runs"


ORBIT_CFG = OrbitCfg()
TIME_CFG = TimeCfg()
RENDER_CFG = RenderCfg()


__all__ = ["ORBIT_CFG", "RENDER_CFG", "TIME_CFG", "OrbitCfg", "RenderCfg", "TimeCfg"]
