from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, fields
from typing import Dict, List

FEATURE_NAMES = (
    "energy",
    "rms",
    "spectral_centroid",
    "spectral_flatness",
    "spectral_rolloff",
    "zcr",
    "loudness",
)


@dataclass(frozen=True)
class WavFormatInfo:
    channels: int = 1
    bits_per_sample: int = 16
    data_offset: int = 44


@dataclass
class FrameFeatures:
    """Descriptors computed for a single analysis frame."""

    energy: float = 0.0
    rms: float = 0.0
    spectral_centroid: float = 0.0
    spectral_flatness: float = 0.0
    spectral_rolloff: float = 0.0
    zcr: float = 0.0
    loudness: float = 0.0

    def normalized(self) -> "FrameFeatures":
        """Return a copy where every missing or non-finite value is 0."""
        values = {}
        for item in fields(self):
            raw = getattr(self, item.name)
            try:
                value = float(raw)
            except (TypeError, ValueError):
                value = 0.0
            values[item.name] = value if math.isfinite(value) else 0.0
        return FrameFeatures(**values)


@dataclass
class FrameFeatureSeries:
    """Parallel per-frame series; every list always has the same length."""

    energy: List[float] = field(default_factory=list)
    rms: List[float] = field(default_factory=list)
    spectral_centroid: List[float] = field(default_factory=list)
    spectral_flatness: List[float] = field(default_factory=list)
    spectral_rolloff: List[float] = field(default_factory=list)
    zcr: List[float] = field(default_factory=list)
    loudness: List[float] = field(default_factory=list)
    valid_frames: int = 0

    def append(self, frame: FrameFeatures) -> None:
        clean = frame.normalized()
        for name in FEATURE_NAMES:
            getattr(self, name).append(getattr(clean, name))

    def append_placeholder(self) -> None:
        self.append(FrameFeatures())

    def series(self) -> Dict[str, List[float]]:
        return {name: getattr(self, name) for name in FEATURE_NAMES}

    def __len__(self) -> int:
        return len(self.energy)


@dataclass(frozen=True)
class FeatureStatistics:
    mean: float = 0.0
    std: float = 0.0
    min: float = 0.0
    max: float = 0.0


@dataclass(frozen=True)
class AudioFeatures:
    """Final per-recording record handed back to callers."""

    energy: float = 0.0
    rms: float = 0.0
    spectral_centroid: float = 0.0
    spectral_flatness: float = 0.0
    spectral_rolloff: float = 0.0
    # Reserved: flux is not computed and stays 0.
    spectral_flux: float = 0.0
    zcr: float = 0.0
    loudness: float = 0.0
    jitter: float = 0.0
    shimmer: float = 0.0
    stress_score: int = 50

    def as_dict(self) -> Dict[str, float]:
        data = asdict(self)
        return {_camel(key): value for key, value in data.items()}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


NEUTRAL_FEATURES = AudioFeatures()
