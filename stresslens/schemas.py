from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StressCategory(str, Enum):
    low = "Low"
    medium = "Medium"
    high = "High"


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class StressAnalysisResponse(CamelModel):
    stress_level: int = Field(..., ge=0, le=100, alias="stressLevel")
    stress_category: StressCategory = Field(..., alias="stressCategory")
    voice_tone_score: int = Field(..., ge=0, le=100, alias="voiceToneScore")
    voice_tone_label: str = Field(..., alias="voiceToneLabel")
    speech_pace_score: int = Field(..., ge=0, le=100, alias="speechPaceScore")
    speech_pace_label: str = Field(..., alias="speechPaceLabel")
    voice_tremor_score: int = Field(..., ge=0, le=100, alias="voiceTremorScore")
    voice_tremor_label: str = Field(..., alias="voiceTremorLabel")
    sentiment_score: int = Field(..., ge=0, le=100, alias="sentimentScore")
    sentiment_label: str = Field(..., alias="sentimentLabel")
    transcript: str = ""
    recommendations: List[str]
    audio_features: Dict[str, float] = Field(
        default_factory=dict,
        alias="audioFeatures",
        description="Acoustic feature record that produced the voice tone score.",
    )


class StressAnalysisCreate(CamelModel):
    user_id: Optional[int] = Field(default=None, alias="userId")
    stress_level: int = Field(..., ge=0, le=100, alias="stressLevel")
    voice_tone_score: int = Field(..., ge=0, le=100, alias="voiceToneScore")
    speech_pace_score: int = Field(..., ge=0, le=100, alias="speechPaceScore")
    voice_tremor_score: int = Field(..., ge=0, le=100, alias="voiceTremorScore")
    sentiment_score: int = Field(..., ge=0, le=100, alias="sentimentScore")
    transcript: Optional[str] = None
    audio_features: Optional[str] = Field(
        default=None,
        alias="audioFeatures",
        description="JSON string of extracted audio features.",
    )


class StressHistoryEntry(StressAnalysisCreate):
    id: int
    created_at: datetime = Field(..., alias="createdAt")


class ChatRequest(BaseModel):
    message: Optional[str] = Field(default=None, description="User chat message.")


class ChatResponse(BaseModel):
    response: str
