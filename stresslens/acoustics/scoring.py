from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50

JITTER_WEIGHT = 0.30
SHIMMER_WEIGHT = 0.30
ENERGY_VAR_WEIGHT = 0.15
ZCR_VAR_WEIGHT = 0.10
SPECTRAL_FLUX_WEIGHT = 0.10
SPECTRAL_FLATNESS_WEIGHT = 0.05


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_stress(
    jitter: float,
    shimmer: float,
    energy_var: float,
    zcr_var: float,
    spectral_flux_mean: float,
    spectral_flatness_mean: float,
) -> int:
    """Combine instability and variability measures into a 0-100 stress score.

    Jitter and shimmer carry most of the weight; energy and zero-crossing
    variability follow, with small contributions from spectral flux and
    (inverted) spectral flatness.
    """
    inputs = (jitter, shimmer, energy_var, zcr_var, spectral_flux_mean, spectral_flatness_mean)
    try:
        if not all(math.isfinite(value) for value in inputs):
            raise ValueError(f"non-finite stress input: {inputs}")
        jitter_score = min(100.0, jitter)
        shimmer_score = min(100.0, shimmer)
        energy_var_score = min(100.0, energy_var * 200)
        zcr_var_score = min(100.0, zcr_var * 200)
        spectral_flux_score = min(100.0, spectral_flux_mean * 100)
        spectral_flatness_score = 100 - min(100.0, spectral_flatness_mean * 100)

        weighted = (
            jitter_score * JITTER_WEIGHT
            + shimmer_score * SHIMMER_WEIGHT
            + energy_var_score * ENERGY_VAR_WEIGHT
            + zcr_var_score * ZCR_VAR_WEIGHT
            + spectral_flux_score * SPECTRAL_FLUX_WEIGHT
            + spectral_flatness_score * SPECTRAL_FLATNESS_WEIGHT
        )
        if not math.isfinite(weighted):
            raise ValueError(f"non-finite stress score: {weighted}")
        return max(0, min(100, round_half_up(weighted)))
    except (TypeError, ValueError, ArithmeticError):
        logger.exception("Error calculating stress score")
        return NEUTRAL_SCORE
