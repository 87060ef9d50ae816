"""Voice module: live voice turns, playback scheduling and PCM helpers.

Voice mode is driven by an embedding host. The host supplies concrete
AudioInput and AudioOutput adapters for its platform, builds a live
gateway with create_live_gateway, and runs a VoiceTurnCoordinator for the
active conversation. The serviceai command line is text only.
"""

from .audio import AudioInput, AudioOutput, PlaybackHandle
from .coordinator import VoiceStatus, VoiceTurnCoordinator
from .pcm import float32_to_pcm16, pcm16_duration, pcm16_to_float32
from .playback import PlaybackScheduler

__all__ = [
    "AudioInput",
    "AudioOutput",
    "PlaybackHandle",
    "PlaybackScheduler",
    "VoiceStatus",
    "VoiceTurnCoordinator",
    "float32_to_pcm16",
    "pcm16_duration",
    "pcm16_to_float32",
]
