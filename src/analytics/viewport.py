"""
src/analytics/viewport.py
─────────────────────────
Zoom / pan viewport over an index-aligned series.

State machine:
  FULL    entire series visible, zoom_level = 1
  ZOOMED  ceil(N / zoom_level) points visible around center_index

Zoom steps move the visible fraction by 5 points (floor 5%). Any window that
covers >= 99% of the series snaps back to FULL, as does zooming out past 97%.
The visible window is a pure function of (zoom_level, center_index, mode, N).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

FIRST_ZOOM_LEVEL = 1.053   # ~95% visible
PAN_ZOOM_LEVEL = 2.0       # 50% visible when panning from FULL
ZOOM_STEP = 0.05
MIN_VISIBLE_FRACTION = 0.05
ZOOM_OUT_SNAP_FRACTION = 0.97
WINDOW_SNAP_FRACTION = 0.99


class ViewMode(str, Enum):
    FULL = "full"
    ZOOMED = "zoomed"


@dataclass(frozen=True)
class ViewportState:
    zoom_level: float = 1.0
    center_index: int = 0
    mode: ViewMode = ViewMode.FULL


@dataclass(frozen=True)
class VisibleWindow:
    start: int
    end: int  # inclusive

    @property
    def count(self) -> int:
        return max(0, self.end - self.start + 1)


def compute_window(state: ViewportState, n_points: int) -> VisibleWindow:
    """Raw visible window for a state, before the 99% snap guard."""
    if n_points <= 0:
        return VisibleWindow(0, -1)
    if state.mode is ViewMode.FULL:
        return VisibleWindow(0, n_points - 1)

    points = min(n_points, math.ceil(n_points / state.zoom_level))
    start = state.center_index - points // 2
    end = start + points - 1
    if start < 0:
        start, end = 0, points - 1
    elif end > n_points - 1:
        start, end = n_points - points, n_points - 1
    return VisibleWindow(start, end)


class ViewportController:
    """Session-scoped pan/zoom state for one chart."""

    def __init__(self, n_points: int, state: ViewportState | None = None) -> None:
        self.n_points = max(0, int(n_points))
        if state is None:
            self.reset()
        else:
            self.state = ViewportState(
                zoom_level=max(1.0, float(state.zoom_level)),
                center_index=self._clamp(state.center_index),
                mode=ViewMode(state.mode),
            )
            self._settle()

    # ── Serialization (dcc.Store) ─────────────────────────────────────────────

    @classmethod
    def from_state(cls, n_points: int, data: dict | None) -> ViewportController:
        """Rebuild from a stored dict; a missing or foreign state resets."""
        if not data or data.get("n_points") != n_points:
            return cls(n_points)
        return cls(
            n_points,
            ViewportState(
                zoom_level=data.get("zoom_level", 1.0),
                center_index=data.get("center_index", n_points // 2),
                mode=data.get("mode", ViewMode.FULL.value),
            ),
        )

    def to_state(self) -> dict:
        return {
            "zoom_level": self.state.zoom_level,
            "center_index": self.state.center_index,
            "mode": self.state.mode.value,
            "n_points": self.n_points,
        }

    # ── Derived values ────────────────────────────────────────────────────────

    @property
    def mode(self) -> ViewMode:
        return self.state.mode

    @property
    def visible_fraction(self) -> float:
        return 1.0 / self.state.zoom_level

    def visible_window(self) -> VisibleWindow:
        window = compute_window(self.state, self.n_points)
        if self.state.mode is ViewMode.ZOOMED and window.count >= self.n_points * WINDOW_SNAP_FRACTION:
            return VisibleWindow(0, self.n_points - 1)
        return window

    # ── Transitions ───────────────────────────────────────────────────────────

    def reset(self) -> None:
        self.state = ViewportState(zoom_level=1.0, center_index=self.n_points // 2, mode=ViewMode.FULL)

    def set_length(self, n_points: int) -> None:
        """The underlying series changed: start over in FULL view."""
        self.n_points = max(0, int(n_points))
        self.reset()

    def zoom_in(self) -> None:
        if self.state.mode is ViewMode.FULL or self.state.zoom_level == 1.0:
            zoom = FIRST_ZOOM_LEVEL
        else:
            fraction = max(MIN_VISIBLE_FRACTION, self.visible_fraction - ZOOM_STEP)
            zoom = 1.0 / fraction
        self.state = ViewportState(zoom_level=zoom, center_index=self.state.center_index, mode=ViewMode.ZOOMED)
        self._settle()

    def zoom_out(self) -> None:
        if self.state.mode is ViewMode.FULL or abs(self.state.zoom_level - FIRST_ZOOM_LEVEL) < 0.01:
            self.reset()
            return
        fraction = min(1.0, self.visible_fraction + ZOOM_STEP)
        if fraction > ZOOM_OUT_SNAP_FRACTION:
            self.reset()
            return
        self.state = ViewportState(zoom_level=1.0 / fraction, center_index=self.state.center_index, mode=ViewMode.ZOOMED)
        self._settle()

    def pan_left(self) -> None:
        self._pan(-1)

    def pan_right(self) -> None:
        self._pan(1)

    def _pan(self, direction: int) -> None:
        if self.state.mode is ViewMode.FULL:
            self.state = ViewportState(zoom_level=PAN_ZOOM_LEVEL, center_index=self.state.center_index, mode=ViewMode.ZOOMED)
        visible = math.ceil(self.n_points / self.state.zoom_level)
        step = max(1, math.ceil(visible / 4))
        center = self._clamp(self.state.center_index + direction * step)
        self.state = ViewportState(zoom_level=self.state.zoom_level, center_index=center, mode=ViewMode.ZOOMED)
        self._settle()

    def apply(self, action: str) -> None:
        """Dispatch a named gesture ("zoom_in", "pan_left", ...)."""
        handlers = {
            "zoom_in": self.zoom_in,
            "zoom_out": self.zoom_out,
            "pan_left": self.pan_left,
            "pan_right": self.pan_right,
            "reset": self.reset,
        }
        handler = handlers.get(action)
        if handler is None:
            raise ValueError(f"unknown viewport action: {action!r}")
        handler()

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _clamp(self, index: int) -> int:
        return min(max(0, int(index)), max(0, self.n_points - 1))

    def _settle(self) -> None:
        if self.state.mode is ViewMode.ZOOMED:
            window = compute_window(self.state, self.n_points)
            if window.count >= self.n_points * WINDOW_SNAP_FRACTION:
                self.reset()
