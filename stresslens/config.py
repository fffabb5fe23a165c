from __future__ import annotations

import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class Settings(BaseModel):
    """Runtime configuration with sensible defaults for local development."""

    assemblyai_api_key: str | None = Field(
        default=os.getenv("ASSEMBLYAI_API_KEY"),
        description="API key for AssemblyAI transcription and sentiment analysis.",
    )
    assemblyai_base_url: str = Field(
        default=os.getenv("ASSEMBLYAI_BASE_URL", "https://api.assemblyai.com"),
        description="Base URL of the AssemblyAI REST API.",
    )
    transcription_timeout: float = Field(
        default=float(os.getenv("TRANSCRIPTION_TIMEOUT", "30")),
        description="Per-request timeout (seconds) for transcription calls.",
    )
    transcription_poll_interval: float = Field(
        default=float(os.getenv("TRANSCRIPTION_POLL_INTERVAL", "1.5")),
        description="Delay (seconds) between transcript status polls.",
    )
    transcription_max_wait: float = Field(
        default=float(os.getenv("TRANSCRIPTION_MAX_WAIT", "60")),
        description="Give up on a transcript that is not ready after this many seconds.",
    )
    gemini_api_key: str | None = Field(
        default=os.getenv("GEMINI_API_KEY"),
        description="API key for Google Gemini chat replies.",
    )
    gemini_chat_model: str = Field(
        default=os.getenv("GEMINI_CHAT_MODEL", "gemini-2.0-flash"),
        description="Gemini model ID used for chat replies.",
    )
    cors_allow_origins: List[str] = Field(
        default_factory=lambda: [
            origin.strip()
            for origin in os.getenv(
                "CORS_ALLOW_ORIGINS", "http://localhost:5173"
            ).split(",")
            if origin.strip()
        ],
        description="Comma separated list of allowed origins.",
    )
    max_upload_bytes: int = Field(
        default=int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))),
        description="Largest accepted voice recording upload.",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
