from __future__ import annotations

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer


class LexiconSentiment:
    """Offline sentiment powered by VADER, scored 0 (positive) to 100 (negative)."""

    def __init__(self) -> None:
        self._analyzer = SentimentIntensityAnalyzer()

    def negativity(self, text: str) -> float | None:
        if not text.strip():
            return None
        compound = self._analyzer.polarity_scores(text).get("compound", 0.0)
        return round((1 - compound) / 2 * 100, 2)
