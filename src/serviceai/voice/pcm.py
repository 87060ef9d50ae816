"""PCM conversions between device samples and the live wire format.

The wire format is 16-bit little-endian mono PCM; devices work in float32
samples in [-1.0, 1.0].
"""

import numpy as np
from numpy.typing import NDArray

from ..config import OUTPUT_SAMPLE_RATE

PCM16_SCALE = 32768.0


def float32_to_pcm16(samples: NDArray[np.floating]) -> bytes:
    """Encode float samples as PCM16 bytes, clipping out-of-range values."""
    scaled = np.clip(np.asarray(samples, dtype=np.float32) * PCM16_SCALE, -32768, 32767)
    return scaled.astype("<i2").tobytes()


def pcm16_to_float32(data: bytes, channels: int = 1) -> NDArray[np.float32]:
    """Decode PCM16 bytes into float samples, shape (frames, channels).

    A trailing odd byte is ignored.
    """
    usable = len(data) - (len(data) % (2 * channels))
    ints = np.frombuffer(data[:usable], dtype="<i2")
    return (ints.astype(np.float32) / PCM16_SCALE).reshape(-1, channels)


def pcm16_duration(data: bytes, sample_rate: int = OUTPUT_SAMPLE_RATE, channels: int = 1) -> float:
    """Playback duration in seconds of a PCM16 chunk."""
    frames = len(data) // (2 * channels)
    return frames / sample_rate
