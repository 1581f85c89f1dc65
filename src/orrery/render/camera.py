from __future__ import annotations

from dataclasses import dataclass

import numpy as np


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


@dataclass
class CameraState:
    center: np.ndarray
    target: np.ndarray
    scale: float
    scale_target: float


class Camera:
    """Top-down camera over the ecliptic plane, measured in pixels per AU."""

    def __init__(
        self,
        size: tuple[int, int],
        pixels_per_au: float,
        *,
        min_scale: float,
        max_scale: float,
    ) -> None:
        if min_scale <= 0.0 or max_scale < min_scale:
            raise ValueError("Camera zoom bounds must satisfy 0 < min <= max")
        self._size = size
        self._min_scale = min_scale
        self._max_scale = max_scale
        scale = _clamp(pixels_per_au, min_scale, max_scale)
        self._state = CameraState(
            center=np.zeros(2, dtype=float),
            target=np.zeros(2, dtype=float),
            scale=scale,
            scale_target=scale,
        )
        self._pan_anchor: tuple[int, int] | None = None

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def update_size(self, size: tuple[int, int]) -> None:
        self._size = size

    @property
    def scale(self) -> float:
        return self._state.scale

    @property
    def center(self) -> np.ndarray:
        return self._state.center

    def set_target(self, position: tuple[float, float]) -> None:
        self._state.target[:] = position

    def zoom_by_factor(self, factor: float) -> None:
        self._state.scale_target = _clamp(
            self._state.scale_target * factor, self._min_scale, self._max_scale
        )

    def update(self, smoothing: float = 0.1) -> None:
        state = self._state
        state.scale += (state.scale_target - state.scale) * smoothing
        state.scale = _clamp(state.scale, self._min_scale, self._max_scale)
        state.center += (state.target - state.center) * smoothing

    def begin_pan(self, position: tuple[int, int]) -> None:
        self._pan_anchor = position

    def pan(self, position: tuple[int, int]) -> None:
        if self._pan_anchor is None:
            return
        dx = position[0] - self._pan_anchor[0]
        dy = position[1] - self._pan_anchor[1]
        if dx == 0 and dy == 0:
            return
        scale = max(self.scale, 1e-9)
        self._state.center[0] -= dx / scale
        self._state.center[1] += dy / scale
        self._state.target[:] = self._state.center
        self._pan_anchor = position

    def end_pan(self) -> None:
        self._pan_anchor = None

    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        width, height = self._size
        cx, cy = self._state.center
        sx = width // 2 + int((x - cx) * self._state.scale)
        sy = height // 2 - int((y - cy) * self._state.scale)
        return sx, sy

    def project_points(self, points: np.ndarray) -> list[tuple[int, int]]:
        """Project an ``(N, 2+)`` array of AU coordinates to screen pixels."""

        if len(points) == 0:
            return []
        width, height = self._size
        scale = self._state.scale
        sx = width // 2 + ((points[:, 0] - self._state.center[0]) * scale).astype(int)
        sy = height // 2 - ((points[:, 1] - self._state.center[1]) * scale).astype(int)
        return list(zip(sx.tolist(), sy.tolist()))
