"""Sounddevice-backed completion chime."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .errors import NotificationError

CHIME_SAMPLE_RATE_HZ = 22050
_CHIME_NOTES_HZ = (880.0, 1318.5)
_NOTE_SECONDS = 0.18
_FADE_SECONDS = 0.02


def synthesize_chime(sample_rate_hz: int = CHIME_SAMPLE_RATE_HZ) -> np.ndarray:
    """Render a short two-note chime as a mono float32 PCM array."""
    samples_per_note = int(sample_rate_hz * _NOTE_SECONDS)
    fade = max(1, int(sample_rate_hz * _FADE_SECONDS))
    t = np.arange(samples_per_note, dtype=np.float32) / sample_rate_hz

    envelope = np.ones(samples_per_note, dtype=np.float32)
    envelope[:fade] = np.linspace(0.0, 1.0, fade, dtype=np.float32)
    envelope[-fade:] = np.linspace(1.0, 0.0, fade, dtype=np.float32)

    notes = [
        0.3 * np.sin(2.0 * np.pi * frequency * t) * envelope
        for frequency in _CHIME_NOTES_HZ
    ]
    return np.concatenate(notes).astype(np.float32)


class ChimePlayer:
    """Plays the completion chime through a selected sounddevice output."""
    def __init__(
        self,
        output_device_index: Optional[int] = None,
        blocksize: int = 1024,
        logger: Optional[logging.Logger] = None,
    ):
        self._output_device_index = output_device_index
        self._blocksize = blocksize
        self._logger = logger or logging.getLogger("notifications.sound")
        self._wav = synthesize_chime()

    def play(self, blocking: bool = True) -> None:
        # PortAudio is loaded when sounddevice is imported; keep that off the
        # import path of hosts without an audio stack.
        try:
            import sounddevice as sd
        except OSError as error:
            raise NotificationError(f"Audio output unavailable: {error}") from error

        wav = self._wav
        pos = 0

        def callback(outdata, frames, time_info, status):
            nonlocal pos
            if status:
                self._logger.warning("Sounddevice status: %s", status)

            end = pos + frames
            chunk = wav[pos:end]

            if len(chunk) < frames:
                outdata[: len(chunk), 0] = chunk
                outdata[len(chunk) :, 0] = 0
                raise sd.CallbackStop()

            outdata[:, 0] = chunk
            pos = end

        try:
            with sd.OutputStream(
                channels=1,
                samplerate=CHIME_SAMPLE_RATE_HZ,
                blocksize=self._blocksize,
                callback=callback,
                device=self._output_device_index,
            ):
                if blocking:
                    sd.sleep(int(len(wav) / CHIME_SAMPLE_RATE_HZ * 1000) + 200)
        except Exception as error:
            raise NotificationError(f"Chime playback failed: {error}") from error
