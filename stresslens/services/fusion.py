from __future__ import annotations

import io
import logging
import math
from typing import List, Optional

import soundfile as sf

from ..acoustics import AudioFeatures
from ..schemas import StressAnalysisResponse, StressCategory
from .lexicon import LexiconSentiment
from .transcription import TranscriptResult

logger = logging.getLogger(__name__)

NEUTRAL_SUBSCORE = 50
SLOW_WPM = 80.0
FAST_WPM = 200.0

HIGH_STRESS_RECOMMENDATIONS = [
    "Try the 4-7-8 breathing technique: inhale for 4 seconds, hold for 7, exhale for 8",
    "Consider a 10-minute break to reset your mind",
    "Use progressive muscle relaxation to release physical tension",
]
MODERATE_STRESS_RECOMMENDATIONS = [
    "Try the 4-7-8 breathing technique: inhale for 4 seconds, hold for 7, exhale for 8",
    "Consider taking a short break to reset your mind",
    "Listen to calming sounds or music to reduce tension",
]
LOW_STRESS_RECOMMENDATIONS = [
    "Continue practicing mindfulness regularly",
    "Maintain your current stress management techniques",
    "Schedule regular breaks throughout your day",
]

SCORE_LABELS = {
    "voice_tone": ("Calm", "Slightly Tense", "Tense"),
    "speech_pace": ("Slow", "Normal", "Accelerated"),
    "voice_tremor": ("Minimal", "Moderate", "Significant"),
    "sentiment": ("Positive", "Moderately Negative", "Negative"),
}


def _clamp_score(value: float) -> int:
    return max(0, min(100, int(math.floor(value + 0.5))))


def score_label(score: int, kind: str) -> str:
    if not score:
        return "Neutral"
    low, mid, high = SCORE_LABELS[kind]
    if score < 40:
        return low
    if score < 70:
        return mid
    return high


def stress_category(level: int) -> StressCategory:
    if level < 40:
        return StressCategory.low
    if level > 70:
        return StressCategory.high
    return StressCategory.medium


def recommendations_for(level: int) -> List[str]:
    if level > 70:
        return list(HIGH_STRESS_RECOMMENDATIONS)
    if level > 40:
        return list(MODERATE_STRESS_RECOMMENDATIONS)
    return list(LOW_STRESS_RECOMMENDATIONS)


def container_duration(audio_bytes: bytes) -> float:
    """Duration in seconds as reported by libsndfile, 0 when unreadable."""
    if not audio_bytes:
        return 0.0
    try:
        info = sf.info(io.BytesIO(audio_bytes))
    except (RuntimeError, TypeError, ValueError):
        logger.debug("libsndfile could not read the upload header")
        return 0.0
    return float(info.duration) if info.samplerate else 0.0


class StressReportBuilder:
    """Merges acoustic features with transcript cues into the stress report."""

    def __init__(self, lexicon: Optional[LexiconSentiment] = None) -> None:
        self.lexicon = lexicon or LexiconSentiment()

    def build(
        self,
        features: AudioFeatures,
        transcript: TranscriptResult | None = None,
        audio_bytes: bytes = b"",
    ) -> StressAnalysisResponse:
        voice_tone = features.stress_score
        voice_tremor = self.tremor_score(features)
        speech_pace = self.pace_score(transcript, audio_bytes)
        sentiment = self.sentiment_score(transcript)

        stress_level = int(
            math.floor(
                voice_tone * 0.30
                + speech_pace * 0.25
                + voice_tremor * 0.20
                + sentiment * 0.25
            )
        )
        stress_level = max(0, min(100, stress_level))

        return StressAnalysisResponse(
            stress_level=stress_level,
            stress_category=stress_category(stress_level),
            voice_tone_score=voice_tone,
            voice_tone_label=score_label(voice_tone, "voice_tone"),
            speech_pace_score=speech_pace,
            speech_pace_label=score_label(speech_pace, "speech_pace"),
            voice_tremor_score=voice_tremor,
            voice_tremor_label=score_label(voice_tremor, "voice_tremor"),
            sentiment_score=sentiment,
            sentiment_label=score_label(sentiment, "sentiment"),
            transcript=transcript.text if transcript else "",
            recommendations=recommendations_for(stress_level),
            audio_features=features.as_dict(),
        )

    @staticmethod
    def tremor_score(features: AudioFeatures) -> int:
        return _clamp_score((features.jitter + features.shimmer) / 2)

    @staticmethod
    def pace_score(transcript: TranscriptResult | None, audio_bytes: bytes = b"") -> int:
        if transcript is None or transcript.word_count <= 0:
            return NEUTRAL_SUBSCORE
        duration = transcript.duration_seconds or container_duration(audio_bytes)
        if duration <= 0:
            return NEUTRAL_SUBSCORE
        words_per_minute = transcript.word_count / duration * 60
        return _clamp_score((words_per_minute - SLOW_WPM) / (FAST_WPM - SLOW_WPM) * 100)

    def sentiment_score(self, transcript: TranscriptResult | None) -> int:
        if transcript is None:
            return NEUTRAL_SUBSCORE
        if transcript.sentiment_score is not None:
            return _clamp_score(transcript.sentiment_score)
        negativity = self.lexicon.negativity(transcript.text)
        if negativity is None:
            return NEUTRAL_SUBSCORE
        return _clamp_score(negativity)
