from __future__ import annotations

from collections import OrderedDict
from typing import Iterable

import pygame


Color = tuple[int, int, int] | tuple[int, int, int, int]


class AssetLibrary:
    """Cache for generated planet discs and glow surfaces."""

    def __init__(self) -> None:
        self._disc_cache: dict[tuple[int, Color], pygame.Surface] = {}
        self._glow_cache: dict[tuple[int, tuple[int, int, int]], pygame.Surface] = {}

    def get_disc(self, radius: int, color: Color) -> pygame.Surface:
        if radius <= 0:
            raise ValueError("Disc radius must be positive")
        key = (radius, color)
        cached = self._disc_cache.get(key)
        if cached is not None:
            return cached
        disc = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(disc, color, (radius, radius), radius)
        highlight = (255, 255, 255, 60)
        pygame.draw.circle(
            disc,
            highlight,
            (int(radius * 0.7), int(radius * 0.7)),
            max(1, radius // 2),
        )
        self._disc_cache[key] = disc
        return disc

    def get_glow(self, radius: int, color: tuple[int, int, int]) -> pygame.Surface:
        if radius <= 0:
            raise ValueError("Glow radius must be positive")
        key = (radius, color)
        cached = self._glow_cache.get(key)
        if cached is not None:
            return cached
        glow = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        steps = 6
        for step in range(steps, 0, -1):
            alpha = int(70 * (1.0 - step / (steps + 1)))
            pygame.draw.circle(glow, (*color, alpha), (radius, radius), max(1, radius * step // steps))
        self._glow_cache[key] = glow
        return glow


_TEXT_SURFACE_CACHE_MAX_SIZE = 256
_TEXT_SURFACE_CACHE: OrderedDict[tuple[int, str, Color], pygame.Surface] = OrderedDict()


def get_text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    """Return a cached rendered surface for the given font, text and color."""

    key = (id(font), text, color)
    cached = _TEXT_SURFACE_CACHE.get(key)
    if cached is not None:
        _TEXT_SURFACE_CACHE.move_to_end(key)
        return cached
    rendered = font.render(text, True, color)
    _TEXT_SURFACE_CACHE[key] = rendered
    if len(_TEXT_SURFACE_CACHE) > _TEXT_SURFACE_CACHE_MAX_SIZE:
        _TEXT_SURFACE_CACHE.popitem(last=False)
    return rendered


def load_font(preferred_names: Iterable[str], size: int, *, bold: bool = False) -> pygame.font.Font:
    names = list(preferred_names)
    for name in names:
        match = pygame.font.match_font(name, bold=bold)
        if match:
            return pygame.font.Font(match, size)
    fallback = names[0] if names else None
    return pygame.font.SysFont(fallback, size, bold=bold)
