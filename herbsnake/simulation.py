"""
simulation.py — The game state machine.

Owns ALL in-game state and rules. Zero rendering, zero input handling.
The controller calls update(dt) once per frame; two internal timers turn
that into a strict serial sequence of countdown steps and game ticks.

Phases:
    countdown  ──(5 x 1 s)──►  running  ◄──toggle_pause()──►  paused
                                  │
                           wall / self hit
                                  ▼
                                over     (only restart() leaves it)

restart() is accepted in every phase and always lands in a fresh
countdown.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable

from .blend import ColorBlend
from .config import (
    CHANNELS, COUNTDOWN_SECONDS, DIFFICULTIES, DifficultyProfile,
    PHASE_COUNTDOWN, PHASE_RUNNING, PHASE_PAUSED, PHASE_OVER,
)
from .model import Direction, FoodManager, Grid, Snake
from .scores import MemoryScoreStore
from .timers import IntervalTimer

log = logging.getLogger(__name__)


# ─────────────────────────── Snapshot ────────────────────────────
@dataclass(frozen=True)
class FoodView:
    position: tuple
    channel: str
    visible: bool
    lifetime: float


@dataclass(frozen=True)
class Snapshot:
    """Read-only picture of the simulation handed to the view and listeners."""
    difficulty: str
    rows: int
    cols: int
    phase: str
    countdown: int
    snake: tuple
    heading: str
    foods: tuple
    score: int
    best_score: int
    new_best: bool
    counts: tuple
    color: tuple
    rgb: tuple
    tick_interval: float
    hit_wall: bool
    end_message: str

    @property
    def visible_foods(self) -> tuple:
        return tuple(f for f in self.foods if f.visible)


PhaseListener = Callable[[str, Snapshot], None]
TickListener = Callable[[Snapshot], None]


# ──────────────────────── GameSimulation ─────────────────────────
class GameSimulation:
    """
    One game session for a single difficulty.

    `store` is any object with get_best(key) / set_best(key, value).
    `rng` is the randomness source for herb placement and colour; pass a
    seeded random.Random for reproducible runs.
    """

    def __init__(self, profile: DifficultyProfile, store=None,
                 rng: random.Random | None = None):
        self.profile = profile
        self.store = store if store is not None else MemoryScoreStore()
        self.rng = rng or random.Random()
        self.grid = Grid(profile.rows, profile.cols)
        self.blend = ColorBlend(profile.start_color, profile.polarity)
        self.foods = FoodManager(self.grid, self.rng)

        self.countdown_timer = IntervalTimer(self.countdown_step)
        self.tick_timer = IntervalTimer(self.tick)
        self._phase_listeners: list[PhaseListener] = []
        self._tick_listeners: list[TickListener] = []

        self.phase: str = PHASE_COUNTDOWN
        self.countdown: int = COUNTDOWN_SECONDS
        self.snake: Snake = Snake.spawn(self.grid)
        self.score: int = 0
        self.tick_interval: float = profile.initial_tick
        self.hit_wall: bool = False
        self.best_score: int = 0
        self.new_best: bool = False
        self.restart()

    # ── Listeners ────────────────────────────────────────────────
    def add_listener(self, callback: PhaseListener) -> None:
        """Call `callback(phase, snapshot)` on every phase transition."""
        self._phase_listeners.append(callback)

    def remove_listener(self, callback: PhaseListener) -> None:
        if callback in self._phase_listeners:
            self._phase_listeners.remove(callback)

    def add_tick_listener(self, callback: TickListener) -> None:
        """Call `callback(snapshot)` after every executed tick."""
        self._tick_listeners.append(callback)

    # ── Public API ───────────────────────────────────────────────
    def restart(self) -> None:
        """Throw the current session away and start a fresh countdown."""
        self.stop_timers()

        self.snake = Snake.spawn(self.grid)
        self.blend.reset()
        self.foods.spawn_initial(self.snake.body)
        self.score = 0
        self.tick_interval = self.profile.initial_tick
        self.hit_wall = False
        self.new_best = False
        self.best_score = self.store.get_best(self.profile.key)

        self.countdown = COUNTDOWN_SECONDS
        self.countdown_timer.start(1.0)
        self._set_phase(PHASE_COUNTDOWN)

    def countdown_step(self) -> None:
        """One second of the pre-game countdown."""
        if self.phase != PHASE_COUNTDOWN:
            return
        self.countdown -= 1
        if self.countdown > 0:
            return
        self.countdown = 0
        self.countdown_timer.stop()
        self.tick_timer.start(self.tick_interval)
        self._set_phase(PHASE_RUNNING)

    def toggle_pause(self) -> None:
        if self.phase == PHASE_RUNNING:
            self.tick_timer.stop()
            self._set_phase(PHASE_PAUSED)
        elif self.phase == PHASE_PAUSED:
            self.tick_timer.start(self.tick_interval)
            self._set_phase(PHASE_RUNNING)

    def request_direction(self, direction) -> None:
        """
        Buffer a heading change for the next tick.

        Accepts a Direction or one of "up", "down", "left", "right".
        Ignored during the countdown, after game over, for unknown names
        and for a straight reversal.
        """
        if self.phase not in (PHASE_RUNNING, PHASE_PAUSED):
            return
        if isinstance(direction, str):
            try:
                direction = Direction.from_name(direction)
            except KeyError:
                log.debug("ignoring unknown direction %r", direction)
                return
        self.snake.request_direction(direction)

    def stop_timers(self) -> None:
        """Cancel both timers; nothing fires until restart() or a resume."""
        self.countdown_timer.stop()
        self.tick_timer.stop()

    def update(self, dt: float) -> None:
        """
        Advance the running timer by `dt` seconds of wall-clock time.

        The two timers never run together; the frame that ends the
        countdown does not also feed the freshly started tick timer.
        """
        if self.countdown_timer.running:
            self.countdown_timer.advance(dt)
            return
        self.tick_timer.advance(dt)

    def tick(self) -> bool:
        """
        Run one game step. Returns False if the simulation was not running.

        Herbs age by the tick interval rather than by wall-clock time, so
        they decay faster as the snake speeds up.
        """
        if self.phase != PHASE_RUNNING:
            return False

        self.snake.apply_pending()
        self.foods.advance(self.tick_interval, self.snake.body)

        new_head = self.snake.next_head()
        if not self.grid.in_bounds(new_head):
            self._game_over(hit_wall=True)
            return True
        if self.snake.would_collide_with_self(new_head):
            self._game_over(hit_wall=False)
            return True

        food = self.foods.at(new_head)
        self.snake.advance(grow=food is not None)
        if food is not None:
            self._eat(food)

        if self._tick_listeners:
            snap = self.snapshot()
            for callback in list(self._tick_listeners):
                callback(snap)
        return True

    # ── Queries ──────────────────────────────────────────────────
    @property
    def difficulty(self) -> str:
        return self.profile.key

    @property
    def counts(self) -> dict[str, int]:
        return dict(self.blend.counts)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            difficulty=self.profile.key,
            rows=self.grid.rows,
            cols=self.grid.cols,
            phase=self.phase,
            countdown=self.countdown,
            snake=self.snake.cells,
            heading=self.snake.heading.name,
            foods=tuple(
                FoodView(f.position, f.channel, f.visible, f.lifetime)
                for f in self.foods
            ),
            score=self.score,
            best_score=self.best_score,
            new_best=self.new_best,
            counts=tuple(self.blend.counts[c] for c in CHANNELS),
            color=self.blend.display_color(),
            rgb=self.blend.display_rgb(),
            tick_interval=self.tick_interval,
            hit_wall=self.hit_wall,
            end_message=self.profile.end_message,
        )

    # ── Private helpers ──────────────────────────────────────────
    def _eat(self, food) -> None:
        self.score += 1
        self.blend.absorb(food.channel)
        self.foods.remove_at(food.position)
        self.foods.refill(self.snake.body)
        self._maybe_accelerate()
        # restart so a shorter interval applies from this tick on
        self.tick_timer.start(self.tick_interval)

    def _maybe_accelerate(self) -> None:
        every = self.profile.accel_every
        if every <= 0 or self.score <= 0 or self.score % every:
            return
        candidate = max(self.profile.min_tick,
                        self.tick_interval - self.profile.accel_step)
        if candidate < self.tick_interval - 1e-9:
            log.debug("speed up: %.3fs -> %.3fs at score %d",
                      self.tick_interval, candidate, self.score)
            self.tick_interval = candidate

    def _game_over(self, hit_wall: bool) -> None:
        self.hit_wall = hit_wall
        self.stop_timers()

        best = self.store.get_best(self.profile.key)
        if self.score > best:
            self.store.set_best(self.profile.key, self.score)
            self.new_best = True
            best = self.score
        self.best_score = best
        log.info("game over (%s) on %s: score %d, best %d",
                 "wall" if hit_wall else "self", self.profile.key,
                 self.score, best)
        self._set_phase(PHASE_OVER)

    def _set_phase(self, phase: str) -> None:
        self.phase = phase
        log.debug("phase -> %s", phase)
        if not self._phase_listeners:
            return
        snap = self.snapshot()
        for callback in list(self._phase_listeners):
            callback(phase, snap)


def new_game(difficulty, store=None, rng: random.Random | None = None) -> GameSimulation:
    """Build a simulation from a difficulty key ("normal"/"advanced") or profile."""
    profile = DIFFICULTIES[difficulty] if isinstance(difficulty, str) else difficulty
    return GameSimulation(profile, store=store, rng=rng)
