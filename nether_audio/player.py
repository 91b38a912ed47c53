"""
Audio Cue Playback
==================

Bounded Context: Audible feedback when a human enters the zone.

Design:
- AudioService protocol: one no-argument cue per rising edge
- Playback policy owned here: a cue still playing is not restarted
- Errors never leave this module (logged, swallowed)

Dependencies:
- pygame (mixer)
"""

from pathlib import Path
from typing import Optional, Protocol, Union

import pygame

from nether_zone.logging import LogEvent, StructuredLogger


class AudioService(Protocol):
    """Protocol for cue players (interface)."""

    def play_cue(self) -> None:
        """Play the entry cue. Must not raise."""
        ...


class PygameAudioService:
    """
    Plays a sound file through pygame.mixer.

    Usage:
        audio = PygameAudioService("sounds/nether.wav")
        monitor.add_entry_listener(audio.play_cue)
    """

    def __init__(
        self,
        sound_path: Union[str, Path],
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            sound_path: WAV/OGG file to play
            logger: Structured logger (default: component "audio")
        """
        self.sound_path = Path(sound_path)
        self.logger = logger or StructuredLogger(component="audio")
        self._sound: Optional[pygame.mixer.Sound] = None
        self._channel: Optional[pygame.mixer.Channel] = None

    def _load(self) -> pygame.mixer.Sound:
        """Initialize the mixer and load the sound on first use."""
        if self._sound is None:
            if not self.sound_path.exists():
                raise FileNotFoundError(f"Sound file not found: {self.sound_path}")
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            self._sound = pygame.mixer.Sound(str(self.sound_path))
        return self._sound

    @property
    def is_playing(self) -> bool:
        return self._channel is not None and self._channel.get_busy()

    def play_cue(self) -> None:
        """Start the cue unless it is already playing."""
        if self.is_playing:
            self.logger.debug(
                event=LogEvent.AUDIO_SKIPPED,
                message="Cue still playing, not restarted",
            )
            return

        try:
            sound = self._load()
            self._channel = sound.play()
        except (pygame.error, OSError) as e:
            self.logger.error(
                event=LogEvent.AUDIO_PLAYBACK_FAILED,
                message="Could not play cue",
                metadata={'sound_path': str(self.sound_path)},
                exc_info=e
            )
            return

        self.logger.info(
            event=LogEvent.AUDIO_PLAYED,
            message="Cue played",
            metadata={'sound_path': str(self.sound_path)}
        )

    def close(self) -> None:
        """Release the mixer."""
        if pygame.mixer.get_init():
            pygame.mixer.quit()
        self._sound = None
        self._channel = None


class NullAudioService:
    """Silent AudioService; only logs the cue."""

    def __init__(self, logger: Optional[StructuredLogger] = None):
        self.logger = logger or StructuredLogger(component="audio")
        self.cues_requested = 0

    def play_cue(self) -> None:
        self.cues_requested += 1
        self.logger.info(
            event=LogEvent.AUDIO_PLAYED,
            message="Cue requested (audio disabled)",
            metadata={'cues_requested': self.cues_requested}
        )

    def close(self) -> None:
        pass
