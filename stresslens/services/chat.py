from __future__ import annotations

import logging
from typing import Optional

import google.generativeai as genai
from fastapi.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a supportive stress-management assistant. Reply briefly and warmly, "
    "suggest practical techniques such as breathing exercises or short breaks, "
    "and mention that the user can analyze their voice to measure stress. "
    "Do not give medical diagnoses. User message:\n"
)

KEYWORD_REPLIES = (
    (
        ("stress", "anxious"),
        "I understand you're feeling stressed. That's a normal response to challenging "
        "situations. Would you like to try a quick breathing exercise, learn about stress "
        "management techniques, or analyze your voice to measure your current stress levels?",
    ),
    (
        ("sleep", "insomnia"),
        "Sleep problems can both cause and be caused by stress. Here are some tips that "
        "might help:\n\n"
        "• Establish a regular sleep schedule\n"
        "• Create a relaxing bedtime routine\n"
        "• Limit screen time before bed\n"
        "• Create a comfortable sleep environment\n"
        "• Try relaxation techniques like deep breathing",
    ),
    (
        ("breathe", "breathing"),
        "Deep breathing is a powerful stress-reduction technique. Try this: Inhale slowly "
        "through your nose for 4 seconds, hold for 7 seconds, and exhale through your mouth "
        "for 8 seconds. Repeat this pattern 5 times. How do you feel after trying it?",
    ),
)

DEFAULT_REPLY = (
    "I'm here to help you manage stress and improve your well-being. You can ask me about "
    "stress management techniques, try a voice stress analysis, or discuss specific concerns "
    "you have about your mental well-being. How can I assist you today?"
)


def keyword_reply(message: str) -> str:
    lowered = message.lower()
    for keywords, reply in KEYWORD_REPLIES:
        if any(keyword in lowered for keyword in keywords):
            return reply
    return DEFAULT_REPLY


class GeminiChat:
    """Wraps Google Gemini for chat replies."""

    def __init__(self, api_key: Optional[str], model: str) -> None:
        self.api_key = api_key
        self.model_id = model
        self._model: Optional[genai.GenerativeModel] = None

        if api_key:
            genai.configure(api_key=api_key)
            self._model = genai.GenerativeModel(model)

    @property
    def enabled(self) -> bool:
        return self._model is not None

    async def reply(self, message: str) -> str:
        if not self.enabled:
            raise RuntimeError("Gemini client is not configured (missing GEMINI_API_KEY).")

        prompt = SYSTEM_PROMPT + message

        def _call_model() -> str:
            assert self._model is not None
            try:
                response = self._model.generate_content(prompt)
            except Exception as exc:
                raise RuntimeError("Gemini request failed.") from exc

            if response.candidates:
                for candidate in response.candidates:
                    for part in candidate.content.parts:
                        if getattr(part, "text", None):
                            return part.text

            raise RuntimeError("Gemini response did not contain text.")

        return (await run_in_threadpool(_call_model)).strip()


class SupportChat:
    """Gemini replies when configured, keyword replies otherwise."""

    def __init__(self, gemini: Optional[GeminiChat] = None) -> None:
        self.gemini = gemini

    async def respond(self, message: str) -> str:
        if self.gemini is not None and self.gemini.enabled:
            try:
                return await self.gemini.reply(message)
            except RuntimeError:
                logger.warning("Gemini chat failed, using keyword reply", exc_info=True)
        return keyword_reply(message)
