"""
nether_audio - Audio cue for zone entries

Bounded Context: Audible feedback
Responsibilities:
  - Play a short cue on each rising edge of the detection signal
  - Own the playback policy (no restart while playing)
  - Swallow playback errors at the boundary
"""

from .player import AudioService, NullAudioService, PygameAudioService

__all__ = [
    "AudioService",
    "NullAudioService",
    "PygameAudioService",
]
