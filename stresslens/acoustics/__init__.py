from .decoder import AudioDecoder
from .features import AcousticAnalyzer, extract_audio_features
from .frames import FRAME_SIZE, HOP_SIZE, MIN_VALID_FRAMES, FrameFeatureExtractor
from .instability import compute_jitter, compute_shimmer
from .models import (
    NEUTRAL_FEATURES,
    AudioFeatures,
    FeatureStatistics,
    FrameFeatures,
    FrameFeatureSeries,
    WavFormatInfo,
)
from .scoring import score_stress
from .statistics import coefficient_of_variation, compute_statistics

__all__ = [
    "AcousticAnalyzer",
    "AudioDecoder",
    "AudioFeatures",
    "FRAME_SIZE",
    "FeatureStatistics",
    "FrameFeatureExtractor",
    "FrameFeatureSeries",
    "FrameFeatures",
    "HOP_SIZE",
    "MIN_VALID_FRAMES",
    "NEUTRAL_FEATURES",
    "WavFormatInfo",
    "coefficient_of_variation",
    "compute_jitter",
    "compute_shimmer",
    "compute_statistics",
    "extract_audio_features",
    "score_stress",
]
