"""Sounddevice-backed chime played before delegating to another notifier."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import sounddevice as sd

from .contracts import Notifier


def chime_samples(
    *,
    frequency_hz: float = 880.0,
    duration_seconds: float = 0.4,
    sample_rate_hz: int = 22050,
    volume: float = 0.3,
) -> np.ndarray:
    """Mono float32 sine tone with a linear fade-out to avoid a click."""
    sample_count = int(duration_seconds * sample_rate_hz)
    t = np.arange(sample_count, dtype=np.float32) / sample_rate_hz
    tone = np.sin(2.0 * np.pi * frequency_hz * t)
    fade = np.linspace(1.0, 0.0, sample_count, dtype=np.float32)
    return (volume * tone * fade).astype(np.float32)


class ChimeNotifier:
    """Plays a short tone, then hands the message to `inner`."""
    def __init__(
        self,
        *,
        inner: Notifier,
        sample_rate_hz: int = 22050,
        output_device_index: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._inner = inner
        self._sample_rate_hz = sample_rate_hz
        self._output_device_index = output_device_index
        self._logger = logger or logging.getLogger("notify")
        self._samples = chime_samples(sample_rate_hz=sample_rate_hz)

    def notify(self, message: str) -> None:
        try:
            sd.play(
                self._samples,
                samplerate=self._sample_rate_hz,
                device=self._output_device_index,
                blocking=True,
            )
        except Exception as error:
            # The message is still delivered without sound.
            self._logger.warning("Chime playback failed: %s", error)
        self._inner.notify(message)
