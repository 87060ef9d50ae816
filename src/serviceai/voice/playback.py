"""Gapless playback scheduling for streamed model audio."""

import logging
from dataclasses import dataclass

from ..config import OUTPUT_SAMPLE_RATE
from .audio import AudioOutput, PlaybackHandle
from .pcm import pcm16_duration, pcm16_to_float32

logger = logging.getLogger(__name__)


@dataclass
class ScheduledBuffer:
    handle: PlaybackHandle
    start: float
    end: float


class PlaybackScheduler:
    """Queues audio chunks back-to-back on an output device.

    Each chunk starts at max(now, watermark) and moves the watermark forward
    by its duration, so consecutive chunks play without gaps.
    """

    def __init__(self, output: AudioOutput, sample_rate: int = OUTPUT_SAMPLE_RATE):
        self._output = output
        self._sample_rate = sample_rate
        self._next_start_time = 0.0
        self._buffers: list[ScheduledBuffer] = []

    @property
    def next_start_time(self) -> float:
        return self._next_start_time

    @property
    def is_speaking(self) -> bool:
        """True while any scheduled buffer has not finished playing."""
        self._prune()
        return bool(self._buffers)

    @property
    def pending(self) -> int:
        self._prune()
        return len(self._buffers)

    def schedule(self, pcm: bytes) -> ScheduledBuffer | None:
        """Schedule a PCM16 chunk after everything already queued."""
        duration = pcm16_duration(pcm, self._sample_rate)
        if duration <= 0:
            return None

        start = max(self._next_start_time, self._output.current_time)
        handle = self._output.play(pcm16_to_float32(pcm)[:, 0], start, self._sample_rate)
        buffer = ScheduledBuffer(handle=handle, start=start, end=start + duration)
        self._next_start_time = buffer.end
        self._buffers.append(buffer)
        return buffer

    def clear(self) -> None:
        """Stop and drop every queued buffer and reset the watermark."""
        for buffer in self._buffers:
            buffer.handle.stop()
        if self._buffers:
            logger.debug("Discarded %d queued audio buffers", len(self._buffers))
        self._buffers.clear()
        self._next_start_time = 0.0

    def _prune(self) -> None:
        now = self._output.current_time
        self._buffers = [b for b in self._buffers if b.end > now]
