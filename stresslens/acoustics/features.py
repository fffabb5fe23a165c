from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from .decoder import AudioDecoder
from .frames import MIN_VALID_FRAMES, FrameFeatureExtractor
from .instability import compute_jitter, compute_shimmer
from .models import NEUTRAL_FEATURES, AudioFeatures
from .scoring import score_stress
from .statistics import coefficient_of_variation, compute_statistics, summarize

logger = logging.getLogger(__name__)

AudioSource = Union[bytes, bytearray, memoryview, str, os.PathLike]


class AcousticAnalyzer:
    """Decode, frame, aggregate and score a single recording."""

    def __init__(
        self,
        decoder: Optional[AudioDecoder] = None,
        extractor: Optional[FrameFeatureExtractor] = None,
    ) -> None:
        self.decoder = decoder or AudioDecoder()
        self.extractor = extractor or FrameFeatureExtractor()

    def analyze(self, source: AudioSource) -> AudioFeatures:
        buffer = self._read(source)
        if buffer is None:
            return NEUTRAL_FEATURES

        samples = self.decoder.decode(buffer)
        if len(samples) == 0:
            logger.warning("Could not load audio data, returning neutral features")
            return NEUTRAL_FEATURES

        series = self.extractor.extract(samples)
        if series.valid_frames < MIN_VALID_FRAMES:
            logger.warning(
                "Not enough valid audio frames for reliable analysis (%d)",
                series.valid_frames,
            )
            return NEUTRAL_FEATURES

        stats = summarize(series.series())
        flux = compute_statistics([0.0] * len(series))
        jitter = compute_jitter(series.zcr)
        shimmer = compute_shimmer(series.rms)
        stress_score = score_stress(
            jitter=jitter,
            shimmer=shimmer,
            energy_var=coefficient_of_variation(stats["energy"]),
            zcr_var=coefficient_of_variation(stats["zcr"]),
            spectral_flux_mean=flux.mean,
            spectral_flatness_mean=stats["spectral_flatness"].mean,
        )
        logger.info(
            "Extracted audio features - jitter: %.3f, shimmer: %.3f, stress score: %d",
            jitter,
            shimmer,
            stress_score,
        )
        return AudioFeatures(
            energy=stats["energy"].mean,
            rms=stats["rms"].mean,
            spectral_centroid=stats["spectral_centroid"].mean,
            spectral_flatness=stats["spectral_flatness"].mean,
            spectral_rolloff=stats["spectral_rolloff"].mean,
            spectral_flux=flux.mean,
            zcr=stats["zcr"].mean,
            loudness=stats["loudness"].mean,
            jitter=jitter,
            shimmer=shimmer,
            stress_score=stress_score,
        )

    @staticmethod
    def _read(source: AudioSource) -> Optional[bytes]:
        if isinstance(source, (bytes, bytearray, memoryview)):
            return bytes(source)
        try:
            return Path(source).read_bytes()
        except (OSError, TypeError, ValueError):
            logger.exception("Error loading audio file %r", source)
            return None


def extract_audio_features(source: AudioSource) -> AudioFeatures:
    return AcousticAnalyzer().analyze(source)
