from .chat import GeminiChat, SupportChat, keyword_reply
from .fusion import StressReportBuilder
from .lexicon import LexiconSentiment
from .transcription import AssemblyAITranscriber, TranscriptResult

__all__ = [
    "AssemblyAITranscriber",
    "GeminiChat",
    "LexiconSentiment",
    "StressReportBuilder",
    "SupportChat",
    "TranscriptResult",
    "keyword_reply",
]
