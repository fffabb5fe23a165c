from __future__ import annotations

import math
from typing import Sequence

import numpy as np

JITTER_SCALE = 1000.0
SHIMMER_SCALE = 500.0


def _clamp(value: float) -> float:
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(100.0, value))


def _positive(series: Sequence[float]) -> np.ndarray:
    values = np.asarray(series, dtype=np.float64)
    return values[np.isfinite(values) & (values > 0)]


def compute_jitter(zcr_series: Sequence[float]) -> float:
    """Relative frame-to-frame perturbation of the zero-crossing rate, 0-100."""
    rates = _positive(zcr_series)
    if rates.size < 2:
        return 0.0
    mean_diff = float(np.mean(np.abs(np.diff(rates))))
    mean_rate = float(np.mean(rates))
    jitter = mean_diff / mean_rate if mean_rate > 0 else 0.0
    return _clamp(jitter * JITTER_SCALE)


def compute_shimmer(rms_series: Sequence[float]) -> float:
    """Mean relative change of frame RMS amplitude, 0-100."""
    amplitudes = _positive(rms_series)
    if amplitudes.size < 2:
        return 0.0
    relative = np.abs(np.diff(amplitudes)) / amplitudes[:-1]
    return _clamp(float(np.mean(relative)) * SHIMMER_SCALE)
