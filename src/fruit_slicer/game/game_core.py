# src/fruit_slicer/game/game_core.py
#
# Session controller: score, misses, spawn cadence, difficulty ramp and the
# IDLE -> PLAYING -> (PAUSED <-> PLAYING) -> GAME_OVER -> IDLE lifecycle.
#
# All callbacks (timers, pointer events, board callbacks) run on the thread
# that drives scheduler.advance(), so no locking is needed.

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .board import Board
from .errors import InvalidParameters
from .geometry import Point, Size
from .highscore import MemoryHighScoreStore
from .kinematics import calculate_gravity
from .scheduler import Scheduler, TimerHandle
from .spawner import Spawner
from .state import ObjectKind, Phase
from .trails import Trails

logger = logging.getLogger(__name__)

MISSED_REASON = "You've missed three fruits"

FRUIT_SPRITES = (
    "images/apple.png",
    "images/banana.png",
    "images/cherry.png",
    "images/coconut.png",
    "images/grapes.png",
    "images/mango.png",
    "images/pear.png",
    "images/pineapple.png",
)
BOMB_SPRITE = "images/bomb.png"


@dataclass
class GameConfig:
    # Timing (ms)
    spawn_interval: float = 3000.0    # a wave of fruits every 3 s
    step: float = 20.0                # simulation tick
    flight_duration: float = 6000.0   # total flight time of a spawned fruit
    min_flight_duration: float = 1500.0

    # Rules
    max_misses: int = 3
    points_per_slice: int = 10
    max_wave: int = 3                 # fruits per spawn wave drawn from [1, max_wave]
    bomb_every: Tuple[int, int] = (4, 8)

    # Difficulty ramp: every `speedup_every` points the flight gets shorter
    speedup_every: int = 100
    speedup_ratio: float = 0.05

    # Strike combo
    strike_window: float = 100.0
    strike_display: float = 1000.0

    # Blade trail
    trail_len: int = 12
    trail_ttl: float = 0.25           # seconds

    # Sprites
    object_size: Size = Size(90, 90)
    fruit_sprites: Tuple[str, ...] = FRUIT_SPRITES
    bomb_sprite: str = BOMB_SPRITE


class GameEngine:
    def __init__(
        self,
        width: int,
        height: int,
        loader,
        cfg: Optional[GameConfig] = None,
        scheduler: Optional[Scheduler] = None,
        store=None,
        rng: Optional[random.Random] = None,
        on_game_over: Optional[Callable[[str], None]] = None,
    ):
        self.width = width
        self.height = height
        cfg = cfg or GameConfig()
        self.cfg = cfg
        self.scheduler = scheduler or Scheduler()
        self.store = store or MemoryHighScoreStore()
        self.rng = rng or random.Random()
        self.on_game_over = on_game_over

        self.spawner = Spawner(cfg.fruit_sprites, cfg.bomb_sprite, cfg.bomb_every, self.rng)
        self.board = Board(
            width,
            height,
            loader,
            self.spawner,
            on_miss=self.on_miss,
            on_hazard=self.on_hazard_hit,
            on_score=self.on_score,
            object_size=cfg.object_size,
            step_ms=cfg.step,
            rng=self.rng,
        )
        self.trails = Trails(cfg.trail_len, cfg.trail_ttl)

        self.phase = Phase.IDLE
        self.score = 0
        self.missed = 0
        self.high_score = int(self.store.read())
        self.game_over_reason: Optional[str] = None

        self.flight_duration = float(cfg.flight_duration)
        self.gravity = calculate_gravity(height, self.flight_duration, cfg.step)

        self.strike_count = 0
        self.multiplier = 0
        self._multiplier_until = 0.0
        self._strike_reset: Optional[TimerHandle] = None

        self._spawn_timer: Optional[TimerHandle] = None
        self._tick_timer: Optional[TimerHandle] = None

    # ------------------------------------------------------------------
    # timers
    # ------------------------------------------------------------------
    def _start_timers(self) -> None:
        self._stop_timers()
        self._spawn_timer = self.scheduler.every(self.cfg.spawn_interval, self.spawn_wave)
        self._tick_timer = self.scheduler.every(self.cfg.step, self.tick)

    def _stop_timers(self) -> None:
        for handle in (self._spawn_timer, self._tick_timer, self._strike_reset):
            if handle is not None:
                handle.cancel()
        self._spawn_timer = None
        self._tick_timer = None
        self._strike_reset = None
        self.strike_count = 0

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        if self.phase in (Phase.PLAYING, Phase.PAUSED):
            return

        self.score = 0
        self.missed = 0
        self.strike_count = 0
        self.multiplier = 0
        self.game_over_reason = None
        self.flight_duration = float(self.cfg.flight_duration)
        self.gravity = calculate_gravity(self.height, self.flight_duration, self.cfg.step)
        self.spawner.reset()
        self.board.clear()
        self.trails.reset()

        self.phase = Phase.PLAYING
        self._start_timers()
        logger.info("session started (%dx%d, flight %.0fms)", self.width, self.height, self.flight_duration)

        # first fruit right away
        self._spawn(ObjectKind.FRUIT)

    def pause(self) -> None:
        if self.phase is not Phase.PLAYING:
            return
        self.phase = Phase.PAUSED
        self._stop_timers()
        logger.info("paused (score %d, missed %d)", self.score, self.missed)

    def resume(self) -> None:
        if self.phase is not Phase.PAUSED:
            return
        self.phase = Phase.PLAYING
        self._start_timers()
        logger.info("resumed")

    def game_over(self, reason: str) -> None:
        if self.phase not in (Phase.PLAYING, Phase.PAUSED):
            return

        self._stop_timers()
        self.board.clear()
        self.phase = Phase.GAME_OVER
        self.game_over_reason = reason
        logger.info("game over: %s (score %d, high score %d)", reason, self.score, self.high_score)

        if self.on_game_over is not None:
            self.on_game_over(reason)

    def return_to_menu(self) -> None:
        if self.phase is not Phase.GAME_OVER:
            return
        self.phase = Phase.IDLE
        self.trails.reset()

    # ------------------------------------------------------------------
    # periodic work
    # ------------------------------------------------------------------
    def _spawn(self, kind: ObjectKind) -> None:
        try:
            self.board.spawn(kind, self.gravity, self.flight_duration)
        except InvalidParameters as e:
            logger.warning("skipping %s spawn: %s", kind.name.lower(), e)

    def spawn_wave(self) -> None:
        count = self.rng.randint(1, max(1, self.cfg.max_wave))
        self.board.spawn_wave(count, self.gravity, self.flight_duration)

    def tick(self) -> None:
        if self.phase is not Phase.PLAYING:
            return
        self.board.tick()

    # ------------------------------------------------------------------
    # board callbacks
    # ------------------------------------------------------------------
    def on_miss(self) -> None:
        if self.phase is not Phase.PLAYING:
            return
        self.missed += 1
        logger.debug("missed fruit %d/%d", self.missed, self.cfg.max_misses)

        if self.missed == self.cfg.max_misses:
            self.game_over(MISSED_REASON)

    def on_score(self) -> None:
        if self.phase is not Phase.PLAYING:
            return

        before = self.score
        self.score += self.cfg.points_per_slice

        if self.score > self.high_score:
            self.high_score = self.score
            self.store.write(self.high_score)

        step = self.cfg.speedup_every
        if step > 0 and self.score // step > before // step:
            self._speed_up()

        self._strike()

    def on_hazard_hit(self, reason: str) -> None:
        self.game_over(reason)

    def _speed_up(self) -> None:
        shorter = self.flight_duration * (1.0 - self.cfg.speedup_ratio)
        self.flight_duration = max(self.cfg.min_flight_duration, shorter)
        self.gravity = calculate_gravity(self.height, self.flight_duration, self.cfg.step)
        logger.info("speed up at %d points: flight %.0fms, gravity %.4f",
                    self.score, self.flight_duration, self.gravity)

    def _strike(self) -> None:
        self.strike_count += 1
        self.multiplier = self.strike_count
        self._multiplier_until = self.scheduler.now + self.cfg.strike_display

        if self._strike_reset is not None:
            self._strike_reset.cancel()
        self._strike_reset = self.scheduler.once(self.cfg.strike_window, self._reset_strike)

    def _reset_strike(self) -> None:
        self.strike_count = 0
        self._strike_reset = None

    def visible_multiplier(self) -> int:
        """Strike multiplier to show on the HUD, 0 when nothing to show."""
        if self.multiplier > 1 and self.scheduler.now <= self._multiplier_until:
            return self.multiplier
        return 0

    # ------------------------------------------------------------------
    # input / output
    # ------------------------------------------------------------------
    def on_pointer(self, x: float, y: float, t: float):
        self.trails.update(x, y, t)
        if self.phase is not Phase.PLAYING:
            return []

        segment = self.trails.last_segment()
        previous = segment[0] if segment else None
        return self.board.hit_test(Point(x, y), previous)

    def draw(self, surface) -> None:
        self.board.draw(surface)
