"""Sprite loading and frame drawing for the interactive window."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

import pygame

from . import constants
from .core import GameConfig, Snapshot

WHITE = (255, 255, 255)


@dataclass
class Assets:
    background: pygame.Surface
    bird: pygame.Surface
    top_pipe: pygame.Surface
    bottom_pipe: pygame.Surface


def load_image(path: str, size: Tuple[int, int], fallback_color) -> pygame.Surface:
    """Load an image scaled to `size`; a flat placeholder stands in if it cannot be read."""
    try:
        image = pygame.image.load(path)
        if pygame.display.get_surface() is not None:
            image = image.convert_alpha()
        return pygame.transform.scale(image, size)
    except (pygame.error, FileNotFoundError) as e:
        print(f"[warn] could not load image {path}: {e}")
        placeholder = pygame.Surface(size)
        placeholder.fill(fallback_color)
        return placeholder


def load_assets(directory: str = constants.IMAGES_DIR, config: Optional[GameConfig] = None) -> Assets:
    cfg = config or GameConfig()
    pipe_size = (cfg.pipe_width, cfg.pipe_height)
    return Assets(
        background=load_image(os.path.join(directory, "flappybirdbg.png"), (cfg.board_width, cfg.board_height), (78, 192, 202)),
        bird=load_image(os.path.join(directory, "flappybird.png"), (cfg.bird_width, cfg.bird_height), (250, 200, 40)),
        top_pipe=load_image(os.path.join(directory, "toppipe.png"), pipe_size, (90, 170, 50)),
        bottom_pipe=load_image(os.path.join(directory, "bottompipe.png"), pipe_size, (90, 170, 50)),
    )


def draw_snapshot(screen: pygame.Surface, assets: Assets, snapshot: Snapshot, font: pygame.font.Font) -> None:
    screen.blit(assets.background, (0, 0))

    bird = snapshot.avatar
    screen.blit(assets.bird, (bird.left, bird.bottom))

    for view in snapshot.obstacles:
        sprite = assets.top_pipe if view.role == "top" else assets.bottom_pipe
        screen.blit(sprite, (view.box.left, view.box.bottom))

    # Score in the top-left corner
    screen.blit(font.render(snapshot.score_text, True, WHITE), (10, 10))
