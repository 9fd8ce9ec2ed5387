"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Navigate between the start menu, the intro card, the score history
    and a game.
  - Translate raw keyboard events into simulation commands.
  - Drive the simulation clock: update(dt) every frame, then render.
  - Wire the music player and the score store to the simulation.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the Simulation's job).

The controller is the only layer that reads pygame events.
"""

import logging
import sys

import pygame

from .audio import MusicPlayer, PhaseMusic
from .config import (
    WIDTH, HEIGHT, FPS, DIFFICULTIES, SCORES_PATH,
    MENU_MUSIC, MUSIC_FADE_IN,
    PHASE_COUNTDOWN, PHASE_OVER,
    SCREEN_MENU, SCREEN_HISTORY, SCREEN_INTRO, SCREEN_GAME,
    INTRO_TAGLINE, INTRO_SECTIONS,
)
from .model import Direction
from .scores import JsonScoreStore
from .simulation import GameSimulation, new_game
from .view import GameView

log = logging.getLogger(__name__)

DIRECTION_KEYS = {
    pygame.K_UP:    Direction.UP,
    pygame.K_w:     Direction.UP,
    pygame.K_DOWN:  Direction.DOWN,
    pygame.K_s:     Direction.DOWN,
    pygame.K_LEFT:  Direction.LEFT,
    pygame.K_a:     Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d:     Direction.RIGHT,
}


class GameController:
    """
    Owns the main loop.
    Glues Simulation <-> View without them knowing about each other.
    Also owns the music player so its lifecycle stays in one place.
    """

    def __init__(self, scores_path: str = SCORES_PATH):
        pygame.init()
        try:
            pygame.mixer.init()
        except pygame.error as exc:
            log.warning("audio unavailable: %s", exc)
        self.screen   = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("HERB SNAKE")
        self.clock    = pygame.time.Clock()
        self.view     = GameView(self.screen)
        self.store    = JsonScoreStore(scores_path)
        self.music    = MusicPlayer()
        self.profiles = list(DIFFICULTIES.values())
        self.selected: int = 0
        self.screen_name: str = SCREEN_MENU
        self.sim: GameSimulation | None = None

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the main loop until the player quits."""
        self.music.play(MENU_MUSIC, fade_in=MUSIC_FADE_IN)
        while True:
            dt = self.clock.tick(FPS) / 1000.0
            self._handle_events()
            self.music.update(dt)
            if self.screen_name == SCREEN_GAME:
                self.sim.update(dt)
                self.view.render_game(self.sim.snapshot(), self.sim.profile)
            elif self.screen_name == SCREEN_HISTORY:
                self.view.render_history(self.profiles, self.store.all())
            elif self.screen_name == SCREEN_INTRO:
                self.view.render_intro(INTRO_TAGLINE, INTRO_SECTIONS)
            else:
                self.view.render_menu(self.profiles, self.selected)

    # ── Navigation ────────────────────────────────────────────────
    def start_game(self) -> None:
        profile = self.profiles[self.selected]
        log.info("starting %s game", profile.key)
        self.sim = new_game(profile, store=self.store)
        self.sim.add_listener(PhaseMusic(self.music, profile.music))
        self.screen_name = SCREEN_GAME
        # the countdown was entered before the listener was attached
        self.music.play(profile.music, fade_in=MUSIC_FADE_IN)

    def exit_to_menu(self) -> None:
        if self.sim is not None:
            self.sim.stop_timers()
            self.sim = None
        self.screen_name = SCREEN_MENU
        self.music.play(MENU_MUSIC, fade_in=MUSIC_FADE_IN)

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)

    def _handle_keydown(self, key: int) -> None:
        if self.screen_name == SCREEN_MENU:
            self._handle_menu_keys(key)
        elif self.screen_name == SCREEN_HISTORY:
            self._handle_history_keys(key)
        elif self.screen_name == SCREEN_INTRO:
            self._handle_intro_keys(key)
        else:
            self._handle_game_keys(key)

    # ── Per-screen key handlers ───────────────────────────────────
    def _handle_menu_keys(self, key: int) -> None:
        if key == pygame.K_q:
            self._quit()
        elif key in (pygame.K_RETURN, pygame.K_SPACE):
            self.start_game()
        elif key in (pygame.K_UP, pygame.K_w):
            self.selected = (self.selected - 1) % len(self.profiles)
        elif key in (pygame.K_DOWN, pygame.K_s):
            self.selected = (self.selected + 1) % len(self.profiles)
        elif key == pygame.K_h:
            self.screen_name = SCREEN_HISTORY
        elif key == pygame.K_i:
            self.screen_name = SCREEN_INTRO
        else:
            diff_map = {pygame.K_1: 0, pygame.K_2: 1}
            if key in diff_map:
                self.selected = diff_map[key]

    def _handle_history_keys(self, key: int) -> None:
        if key == pygame.K_x:
            self.store.reset_all()
        elif key in (pygame.K_ESCAPE, pygame.K_h, pygame.K_BACKSPACE):
            self.screen_name = SCREEN_MENU

    def _handle_intro_keys(self, key: int) -> None:
        if key in (pygame.K_ESCAPE, pygame.K_i, pygame.K_BACKSPACE, pygame.K_RETURN):
            self.screen_name = SCREEN_MENU

    def _handle_game_keys(self, key: int) -> None:
        sim = self.sim
        if key == pygame.K_ESCAPE:
            self.exit_to_menu()
        elif key in DIRECTION_KEYS:
            sim.request_direction(DIRECTION_KEYS[key])
        elif key == pygame.K_p or (key == pygame.K_SPACE and sim.phase != PHASE_OVER):
            sim.toggle_pause()
        elif key == pygame.K_r and sim.phase != PHASE_COUNTDOWN:
            sim.restart()
        elif key in (pygame.K_RETURN, pygame.K_SPACE) and sim.phase == PHASE_OVER:
            sim.restart()

    # ── Utilities ─────────────────────────────────────────────────
    def _quit(self) -> None:
        if pygame.mixer.get_init():
            pygame.mixer.music.stop()
        pygame.quit()
        sys.exit()
