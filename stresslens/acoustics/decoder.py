from __future__ import annotations

import logging
import struct
from typing import Optional, Sequence

import numpy as np

from .models import WavFormatInfo

logger = logging.getLogger(__name__)

FMT_SCAN_START, FMT_SCAN_END = 12, 200
DATA_SCAN_START, DATA_SCAN_END = 36, 300
HEADER_SKIP_BYTES = 100
HEADER_SKIP_RATIO = 0.1
SYNTHETIC_LENGTH = 10_000


def empty_samples() -> np.ndarray:
    return np.zeros(0, dtype=np.float32)


def _downmix(frames: np.ndarray, channels: int) -> np.ndarray:
    if channels == 1:
        return frames
    return frames.reshape(-1, channels).mean(axis=1)


def _interleaved(payload: bytes, dtype: str, channels: int) -> np.ndarray:
    width = np.dtype(dtype).itemsize
    per_channel = len(payload) // (width * channels)
    if per_channel == 0:
        return np.zeros(0, dtype=dtype)
    return np.frombuffer(payload, dtype=dtype, count=per_channel * channels)


def convert_pcm16(payload: bytes, channels: int = 1) -> np.ndarray:
    raw = _interleaved(payload, "<i2", channels).astype(np.float64)
    return (_downmix(raw, channels) / 32768.0).astype(np.float32)


def convert_pcm8(payload: bytes, channels: int = 1) -> np.ndarray:
    raw = _interleaved(payload, "u1", channels).astype(np.float64) - 128.0
    return (_downmix(raw, channels) / 128.0).astype(np.float32)


def convert_float32(payload: bytes, channels: int = 1) -> np.ndarray:
    raw = _interleaved(payload, "<f4", channels).astype(np.float64)
    return _downmix(raw, channels).astype(np.float32)


CONVERTERS = {
    8: convert_pcm8,
    16: convert_pcm16,
    32: convert_float32,
}


def scan_wav_format(buffer: bytes) -> WavFormatInfo:
    """Locate the ``fmt `` and ``data`` chunks near the start of a RIFF buffer."""
    channels, bits = 1, 16
    for pos in range(FMT_SCAN_START, min(len(buffer) - 8, FMT_SCAN_END)):
        if buffer[pos:pos + 4] != b"fmt ":
            continue
        try:
            (channels,) = struct.unpack_from("<H", buffer, pos + 10)
            (bits,) = struct.unpack_from("<H", buffer, pos + 22)
        except struct.error:
            channels, bits = 1, 16
            logger.debug("Unreadable fmt chunk at %d, keeping defaults", pos)
            continue
        break

    data_offset = 44
    for pos in range(DATA_SCAN_START, min(len(buffer) - 8, DATA_SCAN_END)):
        if buffer[pos:pos + 4] == b"data":
            data_offset = pos + 8
            break

    return WavFormatInfo(channels=channels, bits_per_sample=bits, data_offset=data_offset)


class DecodeStrategy:
    """One stage of the decode fallback chain.

    ``decode`` returns ``None`` when the stage cannot proceed, which hands the
    buffer to the next stage.
    """

    name = "base"

    def applies(self, buffer: bytes) -> bool:
        return True

    def decode(self, buffer: bytes) -> Optional[np.ndarray]:
        raise NotImplementedError


class RiffWavStrategy(DecodeStrategy):
    name = "riff-wav"

    def applies(self, buffer: bytes) -> bool:
        return buffer[:4] == b"RIFF"

    def decode(self, buffer: bytes) -> Optional[np.ndarray]:
        info = scan_wav_format(buffer)
        if info.data_offset >= len(buffer):
            logger.warning("Invalid WAV data offset %d, using raw PCM", info.data_offset)
            return None
        if info.channels < 1:
            logger.warning("WAV header reports no channels, using raw PCM")
            return None
        converter = CONVERTERS.get(info.bits_per_sample)
        if converter is None:
            logger.warning(
                "Unsupported bit depth %d, trying 16-bit conversion",
                info.bits_per_sample,
            )
            converter = convert_pcm16
        try:
            samples = converter(buffer[info.data_offset:], info.channels)
        except (ValueError, TypeError):
            logger.exception("WAV payload conversion failed")
            return None
        logger.debug(
            "Decoded WAV: %d channel(s), %d-bit, %d samples",
            info.channels,
            info.bits_per_sample,
            len(samples),
        )
        return samples


class RawPcmStrategy(DecodeStrategy):
    """Headerless 16-bit mono PCM after skipping a heuristic header region."""

    name = "raw-pcm"

    def decode(self, buffer: bytes) -> Optional[np.ndarray]:
        skip = min(HEADER_SKIP_BYTES, int(len(buffer) * HEADER_SKIP_RATIO))
        try:
            samples = convert_pcm16(buffer[skip:], 1)
        except (ValueError, TypeError):
            logger.exception("Raw PCM interpretation failed")
            return None
        logger.debug("Decoded %d samples as raw PCM", len(samples))
        return samples


class SyntheticToneStrategy(DecodeStrategy):
    """Last resort: a fixed sine so downstream statistics stay computable."""

    name = "synthetic"

    def decode(self, buffer: bytes) -> Optional[np.ndarray]:
        logger.warning("Creating synthetic audio data as fallback")
        index = np.arange(SYNTHETIC_LENGTH, dtype=np.float64)
        return (np.sin(index * 0.1) * 0.5).astype(np.float32)


DEFAULT_CHAIN: Sequence[DecodeStrategy] = (
    RiffWavStrategy(),
    RawPcmStrategy(),
    SyntheticToneStrategy(),
)


class AudioDecoder:
    """Turns an arbitrary byte buffer into normalized mono samples."""

    def __init__(self, strategies: Sequence[DecodeStrategy] = DEFAULT_CHAIN) -> None:
        self.strategies = tuple(strategies)

    def decode(self, buffer: bytes) -> np.ndarray:
        if not buffer:
            logger.warning("Empty or invalid audio buffer")
            return empty_samples()
        data = bytes(buffer)
        for strategy in self.strategies:
            if not strategy.applies(data):
                continue
            samples = strategy.decode(data)
            if samples is not None:
                return samples
        return empty_samples()
