import importlib
import sys
import types
import unittest
from unittest.mock import patch

import numpy as np

from notify import MESSAGE_END_OF_WORK


def _build_sounddevice_stub(error: Exception | None = None):
    module = types.ModuleType("sounddevice")
    module.calls = []  # type: ignore[attr-defined]

    def play(data, **kwargs):
        if error is not None:
            raise error
        module.calls.append((data, kwargs))  # type: ignore[attr-defined]

    module.play = play  # type: ignore[attr-defined]
    return module


def _import_chime(stub):
    # Import notify.chime without a PortAudio-backed sounddevice.
    with patch.dict(sys.modules, {"sounddevice": stub}):
        sys.modules.pop("notify.chime", None)
        return importlib.import_module("notify.chime")


class _RecordingNotifier:
    def __init__(self):
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


class ChimeNotifierTests(unittest.TestCase):
    def tearDown(self) -> None:
        sys.modules.pop("notify.chime", None)

    def test_chime_samples_fade_out(self) -> None:
        chime = _import_chime(_build_sounddevice_stub())
        samples = chime.chime_samples(duration_seconds=0.1, sample_rate_hz=1000, volume=0.5)

        self.assertEqual(np.float32, samples.dtype)
        self.assertEqual(100, len(samples))
        self.assertLessEqual(float(np.max(np.abs(samples))), 0.5)
        self.assertAlmostEqual(0.0, float(samples[-1]), places=6)

    def test_plays_tone_then_delegates(self) -> None:
        stub = _build_sounddevice_stub()
        chime = _import_chime(stub)
        inner = _RecordingNotifier()

        chime.ChimeNotifier(inner=inner, sample_rate_hz=8000).notify(MESSAGE_END_OF_WORK)

        self.assertEqual(1, len(stub.calls))
        self.assertEqual(8000, stub.calls[0][1]["samplerate"])
        self.assertEqual([MESSAGE_END_OF_WORK], inner.messages)

    def test_playback_failure_still_delivers_message(self) -> None:
        chime = _import_chime(_build_sounddevice_stub(error=RuntimeError("no device")))
        inner = _RecordingNotifier()

        with self.assertLogs("notify", level="WARNING"):
            chime.ChimeNotifier(inner=inner).notify(MESSAGE_END_OF_WORK)

        self.assertEqual([MESSAGE_END_OF_WORK], inner.messages)


if __name__ == "__main__":
    unittest.main()
