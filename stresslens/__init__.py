"""Voice stress analysis: acoustic feature extraction, scoring and reporting."""

from .acoustics import AudioFeatures, extract_audio_features

__all__ = ["AudioFeatures", "extract_audio_features"]
