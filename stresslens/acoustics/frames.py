from __future__ import annotations

import logging

import numpy as np

from .models import FrameFeatures, FrameFeatureSeries

logger = logging.getLogger(__name__)

FRAME_SIZE = 1024
HOP_SIZE = 512
MIN_VALID_FRAMES = 5
# Frequency-valued descriptors assume this rate; the source rate is not tracked.
REFERENCE_SAMPLE_RATE = 44100
BARK_BANDS = 24


def expected_frame_count(sample_count: int, frame_size: int = FRAME_SIZE, hop_size: int = HOP_SIZE) -> int:
    if sample_count < frame_size:
        return 0
    return (sample_count - frame_size) // hop_size + 1


def bark_band_limits(frame_size: int, sample_rate: int, bands: int = BARK_BANDS) -> np.ndarray:
    """Spectrum bin index where each Bark band starts (plus the final limit)."""
    bins = frame_size // 2
    hz = np.arange(frame_size, dtype=np.float64) * sample_rate / frame_size
    bark = 13.0 * np.arctan(hz / 1315.8) + 3.5 * np.arctan((hz / 7518.0) ** 2)
    bark = bark[:bins]
    top = bark[-1]
    edges = np.arange(1, bands, dtype=np.float64) * top / bands
    limits = np.empty(bands + 1, dtype=np.int64)
    limits[0] = 0
    limits[1:bands] = np.searchsorted(bark, edges, side="right")
    limits[bands] = bins - 1
    return limits


class FrameFeatureExtractor:
    """Slides a fixed window over the samples and describes every frame."""

    def __init__(
        self,
        frame_size: int = FRAME_SIZE,
        hop_size: int = HOP_SIZE,
        sample_rate: int = REFERENCE_SAMPLE_RATE,
    ) -> None:
        self.frame_size = frame_size
        self.hop_size = hop_size
        self.sample_rate = sample_rate
        self._window = np.hanning(frame_size)
        self._bark_limits = bark_band_limits(frame_size, sample_rate)

    def extract(self, samples: np.ndarray) -> FrameFeatureSeries:
        series = FrameFeatureSeries()
        signal = np.asarray(samples, dtype=np.float64)
        total = expected_frame_count(len(signal), self.frame_size, self.hop_size)
        for index in range(total):
            start = index * self.hop_size
            frame = signal[start:start + self.frame_size]
            try:
                features = self.describe(frame)
            except Exception:
                logger.debug("Skipping frame at position %d", start, exc_info=True)
                series.append_placeholder()
                continue
            series.append(features)
            series.valid_frames += 1
        logger.info("Processed %d of %d frames", series.valid_frames, total)
        return series

    def describe(self, frame: np.ndarray) -> FrameFeatures:
        amplitude = np.abs(np.fft.rfft(frame * self._window))[: self.frame_size // 2]
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            return FrameFeatures(
                energy=self._energy(frame),
                rms=self._rms(frame),
                spectral_centroid=self._centroid(amplitude),
                spectral_flatness=self._flatness(amplitude),
                spectral_rolloff=self._rolloff(amplitude),
                zcr=self._zcr(frame),
                loudness=self._loudness(amplitude),
            )

    @staticmethod
    def _energy(frame: np.ndarray) -> float:
        return float(np.sum(frame * frame))

    @staticmethod
    def _rms(frame: np.ndarray) -> float:
        return float(np.sqrt(np.mean(frame * frame)))

    @staticmethod
    def _zcr(frame: np.ndarray) -> float:
        positive = frame >= 0
        return float(np.count_nonzero(positive[1:] != positive[:-1]))

    @staticmethod
    def _centroid(amplitude: np.ndarray) -> float:
        bins = np.arange(len(amplitude), dtype=np.float64)
        return float(np.sum(bins * amplitude) / np.sum(amplitude))

    @staticmethod
    def _flatness(amplitude: np.ndarray) -> float:
        geometric = np.exp(np.mean(np.log(amplitude)))
        return float(geometric / np.mean(amplitude))

    def _rolloff(self, amplitude: np.ndarray) -> float:
        bin_width = self.sample_rate / (2.0 * (len(amplitude) - 1))
        total = float(np.sum(amplitude))
        removed = 0
        if total > 0:
            remaining = total - np.cumsum(amplitude[::-1])
            removed = int(np.argmax(remaining <= 0.99 * total)) + 1
        return (len(amplitude) - removed) * bin_width

    def _loudness(self, amplitude: np.ndarray) -> float:
        cumulative = np.concatenate(([0.0], np.cumsum(amplitude)))
        limits = self._bark_limits
        band_sums = cumulative[limits[1:]] - cumulative[limits[:-1]]
        specific = np.power(np.maximum(band_sums, 0.0), 0.23)
        return float(np.sum(specific))
