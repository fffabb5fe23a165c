import math

import numpy as np
import pytest

from audio_helpers import sine_samples
from stresslens.acoustics.frames import (
    FRAME_SIZE,
    FrameFeatureExtractor,
    bark_band_limits,
    expected_frame_count,
)
from stresslens.acoustics.models import FrameFeatures


@pytest.fixture
def extractor():
    return FrameFeatureExtractor()


@pytest.mark.parametrize(
    "length, frames",
    [(0, 0), (1023, 0), (1024, 1), (1535, 1), (1536, 2), (5000, 8)],
)
def test_series_length_follows_frame_and_hop(extractor, length, frames):
    series = extractor.extract(np.zeros(length, dtype=np.float32))
    assert expected_frame_count(length) == frames
    assert len(series) == frames
    for values in series.series().values():
        assert len(values) == frames


def test_every_frame_of_a_clean_signal_is_valid(extractor):
    series = extractor.extract(sine_samples())
    assert series.valid_frames == len(series) == expected_frame_count(32000)


def test_energy_and_rms_of_constant_frame(extractor):
    features = extractor.describe(np.full(FRAME_SIZE, 0.5))
    assert features.energy == pytest.approx(256.0)
    assert features.rms == pytest.approx(0.5)


def test_zcr_counts_sign_changes(extractor):
    alternating = np.tile([0.5, -0.5], FRAME_SIZE // 2)
    assert extractor.describe(alternating).zcr == FRAME_SIZE - 1


def test_centroid_of_bin_aligned_tone(extractor):
    n = np.arange(FRAME_SIZE)
    tone = np.sin(2 * np.pi * 64 * n / FRAME_SIZE)
    features = extractor.describe(tone)
    assert features.spectral_centroid == pytest.approx(64.0, abs=0.5)
    assert features.spectral_flatness < 0.1
    assert features.loudness > 0


def test_white_noise_is_flatter_than_a_tone(extractor):
    rng = np.random.default_rng(3)
    noise = rng.normal(0, 0.3, FRAME_SIZE)
    n = np.arange(FRAME_SIZE)
    tone = 0.3 * np.sin(2 * np.pi * 64 * n / FRAME_SIZE + 0.2)
    assert extractor.describe(noise).spectral_flatness > extractor.describe(tone).spectral_flatness


def test_rolloff_of_tone_sits_near_its_bin(extractor):
    n = np.arange(FRAME_SIZE)
    tone = np.sin(2 * np.pi * 64 * n / FRAME_SIZE)
    bin_width = 44100 / (2 * 511)
    rolloff = extractor.describe(tone).spectral_rolloff
    assert 60 * bin_width < rolloff < 80 * bin_width


def test_silent_frame_degrades_to_zeros(extractor):
    features = extractor.describe(np.zeros(FRAME_SIZE)).normalized()
    assert features.energy == 0
    assert features.spectral_centroid == 0
    assert features.spectral_flatness == 0
    assert features.loudness == 0
    assert features.spectral_rolloff == pytest.approx(512 * 44100 / 1022)


def test_normalized_replaces_non_finite_values():
    frame = FrameFeatures(energy=math.nan, rms=math.inf, zcr=None, loudness=3.0)
    clean = frame.normalized()
    assert clean.energy == 0
    assert clean.rms == 0
    assert clean.zcr == 0
    assert clean.loudness == 3.0


def test_failing_frame_is_isolated(extractor, monkeypatch):
    original = extractor.describe
    calls = {"n": 0}

    def flaky(frame):
        calls["n"] += 1
        if calls["n"] == 2:
            raise ValueError("bad frame")
        return original(frame)

    monkeypatch.setattr(extractor, "describe", flaky)
    series = extractor.extract(sine_samples(duration_s=0.5))

    total = expected_frame_count(8000)
    assert len(series) == total
    assert series.valid_frames == total - 1
    assert series.energy[1] == 0
    assert series.energy[0] > 0


def test_bark_limits_are_monotonic():
    limits = bark_band_limits(FRAME_SIZE, 44100)
    assert len(limits) == 25
    assert limits[0] == 0
    assert limits[-1] == FRAME_SIZE // 2 - 1
    assert np.all(np.diff(limits) >= 0)


def test_failing_frame_keeps_series_aligned(extractor, monkeypatch):
    describe = extractor.describe
    calls = {"n": 0}

    def flaky(frame):
        calls["n"] += 1
        if calls["n"] == 2:
            raise FloatingPointError("bad frame")
        return describe(frame)

    monkeypatch.setattr(extractor, "describe", flaky)
    series = extractor.extract(sine_samples(duration_s=5000 / 16000))

    assert len(series) == 8
    assert series.valid_frames == 7
    assert series.energy[1] == 0
    assert series.energy[0] > 0
