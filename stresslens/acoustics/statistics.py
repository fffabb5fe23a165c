from __future__ import annotations

from typing import Dict, Mapping, Sequence

import numpy as np

from .models import FeatureStatistics


def compute_statistics(series: Sequence[float]) -> FeatureStatistics:
    """Mean, population standard deviation and extrema of one series."""
    values = np.asarray(series, dtype=np.float64)
    if values.size == 0:
        return FeatureStatistics()
    return FeatureStatistics(
        mean=float(np.mean(values)),
        std=float(np.std(values)),
        min=float(np.min(values)),
        max=float(np.max(values)),
    )


def summarize(series: Mapping[str, Sequence[float]]) -> Dict[str, FeatureStatistics]:
    return {name: compute_statistics(values) for name, values in series.items()}


def coefficient_of_variation(stats: FeatureStatistics) -> float:
    if stats.mean == 0:
        return 0.0
    return stats.std / stats.mean
