import math

import pytest

from stresslens.acoustics.instability import compute_jitter, compute_shimmer


@pytest.mark.parametrize("series", [[], [0.0, 0.0, 0.0], [12.0], [0.0, 12.0, -3.0]])
def test_jitter_needs_two_positive_rates(series):
    assert compute_jitter(series) == 0.0


@pytest.mark.parametrize("series", [[], [0.0] * 10, [0.2], [0.0, 0.2, 0.0]])
def test_shimmer_needs_two_positive_amplitudes(series):
    assert compute_shimmer(series) == 0.0


def test_steady_rates_have_no_jitter():
    assert compute_jitter([25.0] * 50) == 0.0


def test_jitter_is_relative_mean_difference():
    assert compute_jitter([100.0, 101.0, 100.0, 101.0]) == pytest.approx(1 / 100.5 * 1000)


def test_jitter_ignores_non_positive_and_non_finite_frames():
    expected = 1 / 100.5 * 1000
    assert compute_jitter([0.0, 100.0, 0.0, 101.0]) == pytest.approx(expected)
    assert compute_jitter([math.nan, 100.0, math.inf, 101.0]) == pytest.approx(expected)


def test_jitter_is_clamped():
    assert compute_jitter([10.0, 30.0, 10.0, 30.0]) == 100.0


def test_shimmer_is_mean_relative_change():
    expected = (0.1 + 0.1 / 1.1) / 2 * 500
    assert compute_shimmer([1.0, 1.1, 1.0]) == pytest.approx(expected)


def test_shimmer_is_clamped():
    assert compute_shimmer([1.0, 3.0]) == 100.0
