from __future__ import annotations

import math
import random
from typing import Iterable, Sequence, TYPE_CHECKING

import numpy as np
import pygame

from .assets import AssetLibrary, Color, get_text_surface

if TYPE_CHECKING:  # pragma: no cover
    from orrery.core.config import RenderCfg


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def planet_pixel_radius(diameter_km: float, *, render_cfg: RenderCfg) -> int:
    """Disc radius on screen, log-scaled so Mercury and Jupiter both read."""

    lo, hi = math.log10(4_000.0), math.log10(140_000.0)
    fraction = _clamp((math.log10(max(diameter_km, 1.0)) - lo) / (hi - lo), 0.0, 1.0)
    span = render_cfg.planet_max_pixel_radius - render_cfg.planet_min_pixel_radius
    return render_cfg.planet_min_pixel_radius + int(round(fraction * span))


def draw_sun(
    surface: pygame.Surface,
    position: tuple[int, int],
    *,
    render_cfg: RenderCfg,
    assets: AssetLibrary,
) -> None:
    radius = render_cfg.sun_pixel_radius
    glow = assets.get_glow(radius * 3, render_cfg.sun_glow_color)
    surface.blit(glow, glow.get_rect(center=position))
    pygame.draw.circle(surface, render_cfg.sun_color, position, radius)


def draw_planet(
    surface: pygame.Surface,
    position: tuple[int, int],
    radius: int,
    color: tuple[int, int, int],
    *,
    assets: AssetLibrary,
) -> None:
    if radius <= 0:
        return
    disc = assets.get_disc(radius, color)
    surface.blit(disc, disc.get_rect(center=position))


def draw_selection_ring(
    surface: pygame.Surface,
    position: tuple[int, int],
    radius: int,
    *,
    color: tuple[int, int, int],
) -> None:
    pygame.draw.circle(surface, color, position, radius + 5, 2)


def draw_label(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    position: tuple[int, int],
    *,
    color: Color,
    offset: int,
) -> None:
    label = get_text_surface(font, text, color)
    rect = label.get_rect()
    rect.midleft = (position[0] + offset, position[1] - offset)
    surface.blit(label, rect)


def draw_orbit_line(
    surface: pygame.Surface,
    color: tuple[int, int, int] | tuple[int, int, int, int],
    points: Sequence[tuple[int, int]],
    width: int,
) -> None:
    if len(points) < 2:
        return
    if len(color) == 4 and color[3] < 255:
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        pygame.draw.lines(overlay, color, False, points, max(1, width))
        surface.blit(overlay, (0, 0))
        return
    if width <= 1:
        pygame.draw.aalines(surface, color, False, points)
    else:
        pygame.draw.lines(surface, color, False, points, width)
        pygame.draw.aalines(surface, color, False, points)


def downsample_points(
    points: Sequence[tuple[float, float]], max_points: int
) -> list[tuple[float, float]]:
    if len(points) <= max_points:
        return list(points)
    step = max(1, math.ceil(len(points) / max_points))
    sampled = list(points[::step])
    if sampled[-1] != points[-1]:
        sampled.append(points[-1])
    return sampled


def generate_starfield(
    num_stars: int,
    *,
    size: tuple[int, int],
    rng: random.Random | None = None,
) -> list[dict[str, object]]:
    rng = rng or random.Random()
    width, height = size
    stars: list[dict[str, object]] = []
    for _ in range(num_stars):
        x = rng.uniform(0, width)
        y = rng.uniform(0, height)
        radius = rng.choice([1, 1, 1, 2])
        alpha = rng.randint(60, 150)
        base = rng.randint(200, 240)
        color = (
            max(0, base - rng.randint(10, 25)),
            max(0, base - rng.randint(5, 15)),
            base,
        )
        star_surface = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(star_surface, (*color, alpha), (radius, radius), radius)
        stars.append({"pos": (x, y), "surface": star_surface, "radius": radius})
    return stars


def draw_starfield(
    surface: pygame.Surface,
    starfield: Iterable[dict[str, object]],
    camera_center: np.ndarray,
    scale: float,
    *,
    render_cfg: RenderCfg,
) -> None:
    width, height = surface.get_size()
    offset_x = camera_center[0] * scale * render_cfg.starfield_parallax
    offset_y = camera_center[1] * scale * render_cfg.starfield_parallax
    for star in starfield:
        base_x, base_y = star["pos"]  # type: ignore[index]
        star_surface = star["surface"]  # type: ignore[index]
        radius = star["radius"]  # type: ignore[index]
        sx = int((base_x - offset_x) % width)
        sy = int((base_y + offset_y) % height)
        surface.blit(star_surface, (sx - radius, sy - radius))
