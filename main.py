from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from stresslens.acoustics import extract_audio_features
from stresslens.config import get_settings
from stresslens.schemas import (
    ChatRequest,
    ChatResponse,
    StressAnalysisCreate,
    StressAnalysisResponse,
    StressHistoryEntry,
)
from stresslens.services import (
    AssemblyAITranscriber,
    GeminiChat,
    StressReportBuilder,
    SupportChat,
    TranscriptResult,
)
from stresslens.store import StressHistoryStore

settings = get_settings()

app = FastAPI(
    title="Voice Stress Analyzer",
    version="0.1.0",
    description="Acoustic voice stress analysis with transcript-aware stress reports.",
)

logger = logging.getLogger("uvicorn.error")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

history_store = StressHistoryStore()
report_builder = StressReportBuilder()
transcriber = AssemblyAITranscriber(
    api_key=settings.assemblyai_api_key,
    base_url=settings.assemblyai_base_url,
    timeout=settings.transcription_timeout,
    poll_interval=settings.transcription_poll_interval,
    max_wait=settings.transcription_max_wait,
)
support_chat = SupportChat(
    gemini=GeminiChat(
        api_key=settings.gemini_api_key,
        model=settings.gemini_chat_model,
    )
)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/chat", response_model=ChatResponse)
async def chat(payload: ChatRequest) -> ChatResponse:
    if not payload.message or not payload.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")
    response = await support_chat.respond(payload.message.strip())
    return ChatResponse(response=response)


@app.post(
    "/api/analyze-voice",
    response_model=StressAnalysisResponse,
    summary="Analyze a voice recording and return a stress report.",
)
async def analyze_voice(audio: Optional[UploadFile] = File(default=None)) -> StressAnalysisResponse:
    if audio is None:
        raise HTTPException(status_code=400, detail="No audio file uploaded")

    if audio.size is not None and audio.size > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Audio file is too large")

    # One byte past the limit is enough to flag an oversized upload.
    audio_bytes = await audio.read(settings.max_upload_bytes + 1)
    if not audio_bytes:
        raise HTTPException(status_code=400, detail="No audio file uploaded")
    if len(audio_bytes) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Audio file is too large")

    logger.info(
        "Incoming voice analysis: filename=%s content_type=%s bytes=%d",
        audio.filename,
        audio.content_type,
        len(audio_bytes),
    )

    try:
        features = await run_in_threadpool(extract_audio_features, audio_bytes)
        transcript = await transcribe_audio(audio_bytes)
        return report_builder.build(features, transcript, audio_bytes)
    except Exception:
        logger.exception("Error in voice analysis API")
        raise HTTPException(status_code=500, detail="Failed to analyze voice recording")


@app.post(
    "/api/stress-analysis",
    response_model=StressHistoryEntry,
    status_code=201,
    summary="Save a stress analysis result to the history.",
)
async def save_stress_analysis(payload: StressAnalysisCreate) -> StressHistoryEntry:
    return await history_store.add(payload)


@app.get("/api/stress-history", response_model=List[StressHistoryEntry])
async def stress_history(
    user_id: Optional[int] = Query(default=None, alias="userId"),
) -> List[StressHistoryEntry]:
    return await history_store.history(user_id)


async def transcribe_audio(audio_bytes: bytes) -> TranscriptResult | None:
    # Transcription is optional: without an AssemblyAI key the report falls
    # back to neutral pace and sentiment scores.
    if not transcriber.enabled:
        return None
    try:
        return await transcriber.transcribe(audio_bytes)
    except RuntimeError as err:
        logger.warning("Transcription unavailable: %s", err)
        return None
