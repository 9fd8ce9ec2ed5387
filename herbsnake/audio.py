"""
audio.py — Background music.

Music notes:
  - Tracks live in herbsnake/music/<name>.mp3 (music1 = menu,
    music2 = normal game, music3 = advanced game).
  - If a file is missing or the mixer is unavailable the game runs
    silently with a logged warning.
  - Fades are driven by update(dt) from the main loop. Only one fade runs
    at a time; starting a new one replaces the old one.

Classes:
    VolumeFade  — linear volume ramp with an optional stop/pause at the end
    MusicPlayer — pygame.mixer.music wrapper with fades
    PhaseMusic  — simulation phase listener that picks the music cue
"""

import logging
import os

import pygame

from .config import (
    MUSIC_DIR, MUSIC_EXT, MUSIC_FADE_IN, MUSIC_VOLUME,
    PHASE_COUNTDOWN, PHASE_RUNNING, PHASE_PAUSED,
)

log = logging.getLogger(__name__)

THEN_STOP  = "stop"
THEN_PAUSE = "pause"


def _clamp_volume(v: float) -> float:
    return max(0.0, min(1.0, v))


# ────────────────────────── VolumeFade ───────────────────────────
class VolumeFade:
    """Single active fade job: start volume, target volume, duration."""

    def __init__(self):
        self.start_volume: float = 0.0
        self.target: float = 0.0
        self.duration: float = 0.0
        self.elapsed: float = 0.0
        self.then: str | None = None
        self.active: bool = False

    def start(self, start_volume: float, target: float, duration: float,
              then: str | None = None) -> None:
        self.start_volume = _clamp_volume(start_volume)
        self.target = _clamp_volume(target)
        self.duration = max(0.001, duration)
        self.elapsed = 0.0
        self.then = then
        self.active = True

    def cancel(self) -> None:
        self.active = False
        self.then = None

    def update(self, dt: float) -> tuple[float, str | None] | None:
        """
        Advance the ramp by `dt` seconds.

        Returns None when idle, otherwise (volume, action) where action is
        the pending stop/pause, reported once on the frame the fade ends.
        """
        if not self.active:
            return None
        self.elapsed += dt
        t = min(1.0, self.elapsed / self.duration)
        volume = _clamp_volume(self.start_volume + t * (self.target - self.start_volume))
        if t < 1.0:
            return volume, None
        then = self.then
        self.cancel()
        return volume, then


# ────────────────────────── MusicPlayer ──────────────────────────
class MusicPlayer:
    """
    Looping background music with fade in / fade out.

    `backend` defaults to pygame.mixer.music; anything with load, play,
    stop, pause, unpause and set_volume works.
    """

    def __init__(self, backend=None, music_dir: str = MUSIC_DIR, ext: str = MUSIC_EXT):
        self.backend = backend if backend is not None else pygame.mixer.music
        self.music_dir = music_dir
        self.ext = ext
        self.fade = VolumeFade()
        self.track: str | None = None
        self.volume: float = 0.0
        self.target_volume: float = MUSIC_VOLUME
        self.paused: bool = False

    @property
    def playing(self) -> bool:
        return self.track is not None and not self.paused

    def path_for(self, track: str) -> str:
        return os.path.join(self.music_dir, track + self.ext)

    # ── Commands ─────────────────────────────────────────────────
    def play(self, track: str, fade_in: float = 0.0, volume: float = MUSIC_VOLUME) -> bool:
        """Start `track` looping from the beginning. Returns False if it could not load."""
        self.fade.cancel()
        path = self.path_for(track)
        if not os.path.isfile(path):
            log.warning("%s not found at '%s', running without music", track, path)
            self._drop()
            return False
        try:
            self.backend.load(path)
            self.backend.play(loops=-1)
        except pygame.error as exc:
            log.warning("could not play %s: %s", track, exc)
            self._drop()
            return False

        self.track = track
        self.paused = False
        self.target_volume = _clamp_volume(volume)
        if fade_in > 0:
            self._set_volume(0.0)
            self.fade.start(0.0, self.target_volume, fade_in)
        else:
            self._set_volume(self.target_volume)
        return True

    def stop(self, fade_out: float = 0.0) -> None:
        if self.track is None:
            return
        if fade_out > 0 and not self.paused:
            self.fade.start(self.volume, 0.0, fade_out, then=THEN_STOP)
        else:
            self.fade.cancel()
            self._stop_now()

    def pause(self, fade_out: float = 0.0) -> None:
        """Freeze playback at the current position."""
        if not self.playing:
            return
        if fade_out > 0:
            self.fade.start(self.volume, 0.0, fade_out, then=THEN_PAUSE)
        else:
            self.fade.cancel()
            self._pause_now()

    def resume(self, fade_in: float = 0.0) -> None:
        """Continue from where it was paused."""
        if self.track is None:
            return
        if self.paused:
            self.backend.unpause()
            self.paused = False
        if fade_in > 0:
            self.fade.start(self.volume, self.target_volume, fade_in)
        else:
            self.fade.cancel()
            self._set_volume(self.target_volume)

    def update(self, dt: float) -> None:
        step = self.fade.update(dt)
        if step is None:
            return
        volume, then = step
        self._set_volume(volume)
        if then == THEN_STOP:
            self._stop_now()
        elif then == THEN_PAUSE:
            self._pause_now()

    # ── Private helpers ──────────────────────────────────────────
    def _set_volume(self, volume: float) -> None:
        self.volume = volume
        self.backend.set_volume(volume)

    def _stop_now(self) -> None:
        self.backend.stop()
        self._drop()

    def _pause_now(self) -> None:
        self.backend.pause()
        self.paused = True

    def _drop(self) -> None:
        self.track = None
        self.paused = False
        self.volume = 0.0


# ────────────────────────── PhaseMusic ───────────────────────────
class PhaseMusic:
    """
    Phase listener for GameSimulation.add_listener().

    countdown → the difficulty's track fades in (kept running on restart)
    paused    → music freezes
    running   → music continues (unfreezes after a pause)
    over      → music keeps playing
    """

    def __init__(self, player: MusicPlayer, track: str, fade_in: float = MUSIC_FADE_IN):
        self.player = player
        self.track = track
        self.fade_in = fade_in

    def __call__(self, phase: str, snapshot=None) -> None:
        if phase == PHASE_COUNTDOWN:
            if self.player.track != self.track:
                self.player.play(self.track, fade_in=self.fade_in)
            elif self.player.paused:
                self.player.resume()
        elif phase == PHASE_PAUSED:
            self.player.pause()
        elif phase == PHASE_RUNNING and self.player.paused:
            self.player.resume()
