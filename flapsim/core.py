"""Fixed-timestep simulation core.

The core owns the bird, the ordered pipe list, the score and the game-over
flag. It has no timers of its own: the host calls `tick` at the tick rate,
`spawn_obstacle_pair` at the spawn rate and `request_impulse` on input.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import pymunk

from . import constants


@dataclass(frozen=True)
class GameConfig:
    """Explicit game parameters, defaulting to the module constants."""

    board_width: int = constants.BOARD_WIDTH
    board_height: int = constants.BOARD_HEIGHT
    bird_x: int = constants.BIRD_X
    bird_y: int = constants.BIRD_Y
    bird_width: int = constants.BIRD_WIDTH
    bird_height: int = constants.BIRD_HEIGHT
    pipe_width: int = constants.PIPE_WIDTH
    pipe_height: int = constants.PIPE_HEIGHT
    scroll_velocity: int = constants.SCROLL_VELOCITY
    gravity: int = constants.GRAVITY
    impulse_velocity: int = constants.IMPULSE_VELOCITY
    tick_rate: int = constants.TICK_RATE
    spawn_interval_ms: int = constants.SPAWN_INTERVAL_MS
    prune_offscreen: bool = True

    def __post_init__(self):
        sizes = {
            "board_width": self.board_width,
            "board_height": self.board_height,
            "bird_width": self.bird_width,
            "bird_height": self.bird_height,
            "pipe_width": self.pipe_width,
            "pipe_height": self.pipe_height,
            "tick_rate": self.tick_rate,
        }
        for name, value in sizes.items():
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.spawn_interval_ticks < 1:
            raise ValueError(f"spawn_interval_ms={self.spawn_interval_ms} is shorter than one tick")

    @property
    def gap(self) -> int:
        # Opening between the two pipes of a pair
        return self.board_height // 4

    @property
    def spawn_x(self) -> int:
        return self.board_width

    @property
    def spawn_interval_ticks(self) -> int:
        return round(self.spawn_interval_ms * self.tick_rate / 1000)


@dataclass
class Avatar:
    x: int
    y: int
    width: int
    height: int
    velocity: int = 0


@dataclass
class Obstacle:
    x: int
    y: int
    width: int
    height: int
    role: str  # "top" or "bottom"
    passed: bool = False


@dataclass(frozen=True)
class ObstacleView:
    box: pymunk.BB
    role: str


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the game for rendering and policies.

    Boxes are pymunk.BB values in screen coordinates, so `bottom` holds the
    smaller y value and `top` the larger one.
    """

    avatar: pymunk.BB
    obstacles: Tuple[ObstacleView, ...]
    score: float
    game_over: bool
    board_width: int
    board_height: int

    @property
    def score_text(self) -> str:
        if self.game_over:
            return f"Game Over: {int(self.score)}"
        return str(int(self.score))


def to_bb(item) -> pymunk.BB:
    return pymunk.BB(item.x, item.y, item.x + item.width, item.y + item.height)


def collision(a, b) -> bool:
    """Strict axis-aligned overlap of two boxes with x, y, width and height."""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


@dataclass
class Simulation:
    config: GameConfig = field(default_factory=GameConfig)
    seed: Optional[int] = None
    score: float = field(init=False, default=0.0)
    game_over: bool = field(init=False, default=False)
    obstacles: List[Obstacle] = field(init=False, default_factory=list)

    def __post_init__(self):
        self.rng = random.Random(self.seed)
        cfg = self.config
        self.avatar = Avatar(cfg.bird_x, cfg.bird_y, cfg.bird_width, cfg.bird_height)

    def tick(self) -> None:
        """Advance the game by one fixed step; frozen once the game is over."""
        if self.game_over:
            return

        cfg = self.config
        bird = self.avatar
        bird.velocity += cfg.gravity
        bird.y = max(bird.y + bird.velocity, 0)

        for pipe in self.obstacles:
            pipe.x += cfg.scroll_velocity
            if not pipe.passed and bird.x > pipe.x + pipe.width:
                # Half a point per pipe, one per pair
                self.score += 0.5
                pipe.passed = True
            if collision(bird, pipe):
                self.game_over = True

        if bird.y > cfg.board_height:
            self.game_over = True

        if cfg.prune_offscreen:
            # Only pipes already scored and fully left of the board are dropped
            self.obstacles = [p for p in self.obstacles if not (p.passed and p.x + p.width < 0)]

    def spawn_obstacle_pair(self) -> Tuple[Obstacle, Obstacle]:
        cfg = self.config
        # Top pipe hangs above the screen by between a quarter and three quarters of its height
        offset = int(0 - cfg.pipe_height / 4 - self.rng.random() * (cfg.pipe_height / 2))
        top = Obstacle(cfg.spawn_x, offset, cfg.pipe_width, cfg.pipe_height, "top")
        bottom = Obstacle(
            cfg.spawn_x,
            offset + cfg.pipe_height + cfg.gap,
            cfg.pipe_width,
            cfg.pipe_height,
            "bottom",
        )
        self.obstacles.append(top)
        self.obstacles.append(bottom)
        return top, bottom

    def request_impulse(self) -> None:
        """Flap, restarting first if the previous run has ended."""
        if self.game_over:
            self.reset()
        self.avatar.velocity = self.config.impulse_velocity

    def reset(self) -> None:
        cfg = self.config
        self.avatar.y = cfg.bird_y
        self.avatar.velocity = 0
        self.obstacles.clear()
        self.score = 0.0
        self.game_over = False

    def snapshot(self) -> Snapshot:
        cfg = self.config
        return Snapshot(
            avatar=to_bb(self.avatar),
            obstacles=tuple(ObstacleView(to_bb(p), p.role) for p in self.obstacles),
            score=self.score,
            game_over=self.game_over,
            board_width=cfg.board_width,
            board_height=cfg.board_height,
        )
