from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

SENTIMENT_WEIGHTS = {"POSITIVE": 0.0, "NEUTRAL": 50.0, "NEGATIVE": 100.0}


@dataclass
class TranscriptResult:
    text: str
    word_count: int
    duration_seconds: float
    sentiment_score: Optional[float] = None


class AssemblyAITranscriber:
    """Uploads a recording to AssemblyAI and waits for transcript + sentiment."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.assemblyai.com",
        timeout: float = 30.0,
        poll_interval: float = 1.5,
        max_wait: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def transcribe(self, audio_bytes: bytes) -> TranscriptResult:
        if not self.api_key:
            raise RuntimeError(
                "ASSEMBLYAI_API_KEY is required to call the AssemblyAI API."
            )
        headers = {"Authorization": self.api_key}
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                upload = await client.post(
                    "/v2/upload",
                    content=audio_bytes,
                    headers={"Content-Type": "application/octet-stream"},
                )
                upload.raise_for_status()
                audio_url = upload.json()["upload_url"]

                created = await client.post(
                    "/v2/transcript",
                    json={"audio_url": audio_url, "sentiment_analysis": True},
                )
                created.raise_for_status()
                data = await self._wait_for_transcript(client, created.json()["id"])
            return self._to_result(data)
        except httpx.HTTPStatusError as exc:
            raise RuntimeError(
                f"AssemblyAI API error: {exc.response.status_code}"
            ) from exc
        except httpx.RequestError as exc:
            raise RuntimeError("Unable to reach AssemblyAI API") from exc
        except (KeyError, ValueError, TypeError, AttributeError) as exc:
            raise RuntimeError("Unexpected AssemblyAI response payload") from exc

    async def _wait_for_transcript(
        self, client: httpx.AsyncClient, transcript_id: str
    ) -> Dict[str, Any]:
        deadline = time.monotonic() + self.max_wait
        while True:
            response = await client.get(f"/v2/transcript/{transcript_id}")
            response.raise_for_status()
            data = response.json()
            status = data.get("status")
            if status == "completed":
                return data
            if status == "error":
                raise RuntimeError(
                    f"AssemblyAI transcription failed: {data.get('error', 'unknown error')}"
                )
            if time.monotonic() >= deadline:
                raise RuntimeError("Timed out waiting for AssemblyAI transcript")
            logger.debug("Transcript %s is %s, polling again", transcript_id, status)
            await asyncio.sleep(self.poll_interval)

    @staticmethod
    def _to_result(data: Dict[str, Any]) -> TranscriptResult:
        text = (data.get("text") or "").strip()
        words = data.get("words") or []
        word_count = len(words) if words else len(text.split())
        duration = float(data.get("audio_duration") or 0.0)
        return TranscriptResult(
            text=text,
            word_count=word_count,
            duration_seconds=duration,
            sentiment_score=sentiment_from_results(
                data.get("sentiment_analysis_results") or []
            ),
        )


def sentiment_from_results(results: List[Dict[str, Any]]) -> Optional[float]:
    """Average sentence sentiment on a 0 (positive) to 100 (negative) scale."""
    scores = [
        SENTIMENT_WEIGHTS[item["sentiment"].upper()]
        for item in results
        if isinstance(item, dict)
        and str(item.get("sentiment", "")).upper() in SENTIMENT_WEIGHTS
    ]
    if not scores:
        return None
    return sum(scores) / len(scores)
