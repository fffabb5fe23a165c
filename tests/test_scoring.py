import math

import pytest

from stresslens.acoustics.scoring import NEUTRAL_SCORE, round_half_up, score_stress


def test_flat_signal_contributes_only_flatness_term():
    assert score_stress(0, 0, 0, 0, 0, 0) == 5
    assert score_stress(0, 0, 0, 0, 0, 1.0) == 0


def test_saturated_inputs_reach_one_hundred():
    assert score_stress(100, 100, 1.0, 1.0, 1.0, 0.0) == 100
    assert score_stress(500, 900, 50.0, 50.0, 50.0, 0.0) == 100


def test_weights_follow_jitter_and_shimmer():
    # 0.30 * 40 + 0.30 * 20 + 0.05 * 50
    assert score_stress(40, 20, 0, 0, 0, 0.5) == 21


def test_half_points_round_up():
    # zcr variability alone contributes exactly 2.5
    assert score_stress(0, 0, 0, 0.125, 0, 1.0) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.4999) == 2


@pytest.mark.parametrize("bad", [math.nan, math.inf, None])
def test_invalid_input_scores_neutral(bad):
    assert score_stress(bad, 0, 0, 0, 0, 0) == NEUTRAL_SCORE


def test_score_is_always_an_int_in_range():
    for jitter in (0, 13.7, 55.5, 100):
        for flatness in (0, 0.33, 1.0, 4.0):
            score = score_stress(jitter, jitter / 2, 0.3, 0.1, 0, flatness)
            assert isinstance(score, int)
            assert 0 <= score <= 100
