"""
src/data/degradation.py
───────────────────────
Pressure patterns around a pump failure, used by the sample-data simulator.

Phases:
  degradation  : gradual pressure drop with growing variance (wear, leaks)
  broken       : pump down: pressure collapses toward zero
  recovering   : restart: pressure climbs back to baseline
"""
from __future__ import annotations

from enum import Enum

import numpy as np


class FailurePhase(str, Enum):
    DEGRADATION = "degradation"
    BROKEN = "broken"
    RECOVERING = "recovering"


def degradation_pressure(
    t: float,
    base_pressure: float,
    noise: float,
    rng: np.random.Generator,
) -> float:
    """
    Pre-failure pressure at normalized progress t ∈ [0, 1].

    Drop grows quadratically; noise scale grows linearly.
    """
    drop = base_pressure * (0.08 * t + 0.12 * t ** 2)
    noise_scale = noise * (1.0 + 3.0 * t)
    return float(base_pressure - drop + rng.normal(0.0, noise_scale))


def broken_pressure(base_pressure: float, rng: np.random.Generator) -> float:
    return float(abs(rng.normal(base_pressure * 0.05, base_pressure * 0.02)))


def recovering_pressure(
    t: float,
    base_pressure: float,
    noise: float,
    rng: np.random.Generator,
) -> float:
    """Pressure ramping from ~30% back to baseline as t goes 0 → 1."""
    level = 0.3 + 0.7 * (1.0 - (1.0 - t) ** 2)
    return float(base_pressure * level + rng.normal(0.0, noise))
