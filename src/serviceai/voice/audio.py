"""Audio device interfaces.

Capture and playback primitives are provided by the host platform; the
voice coordinator only relies on these interfaces.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

import numpy as np
from numpy.typing import NDArray


class AudioInput(ABC):
    """A microphone producing 16 kHz mono float32 frames."""

    @abstractmethod
    async def open(self) -> None:
        """Acquire the input device.

        Raises:
            PermissionError: If access to the microphone is denied
        """

    @abstractmethod
    def frames(self) -> AsyncIterator[NDArray[np.float32]]:
        """Yield captured frames until the device is closed."""

    @abstractmethod
    async def close(self) -> None:
        """Release the input device and its audio context. Idempotent."""


class PlaybackHandle(ABC):
    """A buffer scheduled on an output device."""

    @abstractmethod
    def stop(self) -> None:
        """Stop playback of this buffer immediately."""


class AudioOutput(ABC):
    """A speaker that plays float32 buffers at scheduled times."""

    @property
    @abstractmethod
    def current_time(self) -> float:
        """Device clock in seconds."""

    @abstractmethod
    def play(self, samples: NDArray[np.float32], start_time: float, sample_rate: int) -> PlaybackHandle:
        """Schedule samples to start at start_time on the device clock."""

    @abstractmethod
    async def close(self) -> None:
        """Release the output audio context. Idempotent."""
