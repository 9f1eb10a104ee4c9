"""Single game runner (headless or interactive).

The host side of the simulation: it drives `tick` at the tick rate, spawns
pipe pairs on the slower spawn timer and forwards SPACE to
`request_impulse`. Headless runs count ticks instead of waiting on the clock.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import pygame

from . import constants
from .core import GameConfig, Simulation, Snapshot
from .render import draw_snapshot, load_assets

Policy = Callable[[Snapshot], bool]


@dataclass
class SimulationResult:
    """Container for the output of a single game run."""

    score: float
    ticks: int
    game_over: bool
    frame_log: List[Dict[str, Any]]
    pipes_spawned: int
    restarts: int = 0


def log_frame(frame_log: List[Dict[str, Any]], tick: int, sim: Simulation) -> None:
    # Capture bird kinematics and pipe positions for the current tick
    frame_log.append({
        "tick": tick,
        "y": sim.avatar.y,
        "vy": sim.avatar.velocity,
        "score": sim.score,
        "game_over": sim.game_over,
        "obstacles": [(p.x, p.y, p.role) for p in sim.obstacles],
    })


@dataclass
class RunTally:
    """Per-run counters; a restart starts a fresh run but keeps the restart count."""

    ticks: int = 0
    pipes_spawned: int = 0
    restarts: int = 0
    frame_log: List[Dict[str, Any]] = field(default_factory=list)

    def record_tick(self, sim: Simulation) -> None:
        self.ticks += 1
        log_frame(self.frame_log, self.ticks, sim)

    def spawn(self, sim: Simulation) -> None:
        sim.spawn_obstacle_pair()
        self.pipes_spawned += 1

    def restart(self) -> None:
        self.restarts += 1
        self.ticks = 0
        self.pipes_spawned = 0
        self.frame_log = []

    def result(self, sim: Simulation) -> SimulationResult:
        return SimulationResult(sim.score, self.ticks, sim.game_over, self.frame_log, self.pipes_spawned, self.restarts)


def run_headless(
    sim: Simulation,
    policy: Optional[Policy] = None,
    max_ticks: Optional[int] = None,
) -> SimulationResult:
    tally = RunTally()
    interval = sim.config.spawn_interval_ticks

    while max_ticks is None or tally.ticks < max_ticks:
        if (tally.ticks + 1) % interval == 0:
            tally.spawn(sim)
        if policy is not None and policy(sim.snapshot()):
            sim.request_impulse()
        sim.tick()
        tally.record_tick(sim)
        if sim.game_over:
            break

    return tally.result(sim)


def run_sim(
    seed: Optional[int] = None,
    policy: Optional[Policy] = None,
    display: bool = True,
    max_ticks: Optional[int] = None,
    config: Optional[GameConfig] = None,
    images_dir: str = constants.IMAGES_DIR,
) -> SimulationResult:
    """Run a single game.

    With `display=False` the game runs as fast as possible and ends on the
    first game over (or after `max_ticks`). With a window, SPACE flaps and
    restarts after a game over, and the run ends when the window is closed
    or ESC is pressed. `policy`, if given, flaps automatically.
    """

    if max_ticks is not None and max_ticks < 0:
        raise ValueError(f"max_ticks must be non-negative, got {max_ticks}")

    cfg = config or GameConfig()
    sim = Simulation(cfg, seed)

    if not display:
        # Headless fast path for batch runs
        return run_headless(sim, policy, max_ticks)

    pygame.init()
    screen = pygame.display.set_mode((cfg.board_width, cfg.board_height))
    pygame.display.set_caption("Flappy Bird")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("Arial", constants.FONT_SIZE)
    assets = load_assets(images_dir, cfg)

    SPAWN_EVENT = pygame.USEREVENT + 1
    pygame.time.set_timer(SPAWN_EVENT, cfg.spawn_interval_ms)

    tally = RunTally()

    def finish() -> SimulationResult:
        pygame.time.set_timer(SPAWN_EVENT, 0)
        pygame.quit()
        return tally.result(sim)

    def flap():
        # Tap to restart: the same input flaps and, after a game over, starts a new run
        was_over = sim.game_over
        sim.request_impulse()
        if was_over:
            tally.restart()
            pygame.time.set_timer(SPAWN_EVENT, cfg.spawn_interval_ms)

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return finish()
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return finish()
                if event.key == pygame.K_SPACE:
                    flap()
            if event.type == SPAWN_EVENT and not sim.game_over:
                tally.spawn(sim)

        if not sim.game_over:
            if policy is not None and policy(sim.snapshot()):
                sim.request_impulse()
            sim.tick()
            tally.record_tick(sim)
            if sim.game_over:
                # Freeze the final frame until the player restarts
                pygame.time.set_timer(SPAWN_EVENT, 0)

        draw_snapshot(screen, assets, sim.snapshot(), font)
        pygame.display.flip()
        clock.tick(cfg.tick_rate)

        if max_ticks is not None and tally.ticks >= max_ticks:
            return finish()
