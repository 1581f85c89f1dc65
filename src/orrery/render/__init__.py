"""Rendering helpers for the orrery viewer."""

from .camera import Camera
from .assets import (
    AssetLibrary,
    get_text_surface,
    load_font,
)
from .draw import (
    downsample_points,
    draw_label,
    draw_orbit_line,
    draw_planet,
    draw_selection_ring,
    draw_starfield,
    draw_sun,
    generate_starfield,
    planet_pixel_radius,
)
from .ui import (
    Button,
    ButtonVisualStyle,
    build_text_panel,
)

__all__ = [
    "AssetLibrary",
    "Button",
    "ButtonVisualStyle",
    "Camera",
    "build_text_panel",
    "downsample_points",
    "draw_label",
    "draw_orbit_line",
    "draw_planet",
    "draw_selection_ring",
    "draw_starfield",
    "draw_sun",
    "generate_starfield",
    "get_text_surface",
    "load_font",
    "planet_pixel_radius",
]
