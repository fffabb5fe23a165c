import numpy as np
import pytest

from audio_helpers import make_wav_bytes, sine_samples
from stresslens.acoustics import (
    NEUTRAL_FEATURES,
    AcousticAnalyzer,
    AudioFeatures,
    extract_audio_features,
)

NEUTRAL_RECORD = {
    "energy": 0,
    "rms": 0,
    "spectralCentroid": 0,
    "spectralFlatness": 0,
    "spectralRolloff": 0,
    "spectralFlux": 0,
    "zcr": 0,
    "loudness": 0,
    "jitter": 0,
    "shimmer": 0,
    "stressScore": 50,
}


def _assert_well_formed(features: AudioFeatures) -> None:
    record = features.as_dict()
    assert set(record) == set(NEUTRAL_RECORD)
    assert isinstance(features.stress_score, int)
    assert 0 <= features.stress_score <= 100
    for name, value in record.items():
        assert np.isfinite(value), name
        assert value >= 0, name


def test_empty_buffer_returns_neutral_record():
    features = extract_audio_features(b"")
    assert features == NEUTRAL_FEATURES
    assert features.as_dict() == NEUTRAL_RECORD


def test_recording_shorter_than_one_frame_is_neutral():
    wav = make_wav_bytes(sine_samples(duration_s=0.03))  # 480 samples
    assert extract_audio_features(wav) == NEUTRAL_FEATURES


def test_too_few_frames_is_neutral():
    # 2560 samples -> 4 frames
    wav = make_wav_bytes(sine_samples(duration_s=2560 / 16000))
    assert extract_audio_features(wav) == NEUTRAL_FEATURES


def test_steady_sine_has_no_tremor():
    wav = make_wav_bytes(sine_samples(duration_s=2.0, freq=250.0, amplitude=0.5))
    features = extract_audio_features(wav)

    _assert_well_formed(features)
    assert features.jitter < 5
    assert features.shimmer < 5
    assert features.spectral_flux == 0
    assert features.rms == pytest.approx(0.5 / np.sqrt(2), rel=0.02)
    assert features.energy > 0
    assert features.zcr > 0


def test_tremolo_raises_shimmer():
    t = np.arange(32000)
    envelope = 0.3 + 0.25 * np.sin(2 * np.pi * 6 * t / 16000)
    wav = make_wav_bytes(envelope * sine_samples(duration_s=2.0))
    steady = extract_audio_features(make_wav_bytes(sine_samples(duration_s=2.0)))

    features = extract_audio_features(wav)

    _assert_well_formed(features)
    assert features.shimmer > steady.shimmer
    assert features.stress_score >= steady.stress_score


def test_analysis_is_deterministic():
    wav = make_wav_bytes(sine_samples(duration_s=1.0, freq=180.0))
    assert extract_audio_features(wav) == extract_audio_features(wav)


@pytest.mark.parametrize(
    "buffer",
    [
        b"RIFF",
        b"\x00" * 3000,
        b"RIFF" + b"\xff" * 5000,
        np.random.default_rng(11).bytes(20000),
        bytes(range(256)) * 64,
    ],
)
def test_arbitrary_bytes_yield_a_usable_record(buffer):
    _assert_well_formed(extract_audio_features(buffer))


def test_file_path_matches_buffer(tmp_path):
    wav = make_wav_bytes(sine_samples(duration_s=1.0))
    path = tmp_path / "voice.wav"
    path.write_bytes(wav)

    assert extract_audio_features(path) == extract_audio_features(wav)
    assert extract_audio_features(str(path)) == extract_audio_features(wav)


def test_missing_file_is_neutral(tmp_path):
    assert extract_audio_features(tmp_path / "missing.wav") == NEUTRAL_FEATURES


def test_analyzer_accepts_bytearray():
    wav = bytearray(make_wav_bytes(sine_samples(duration_s=0.5)))
    features = AcousticAnalyzer().analyze(wav)
    _assert_well_formed(features)
    assert features != NEUTRAL_FEATURES
