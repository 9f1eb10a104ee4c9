"""Replay multiple game logs in a grid window."""
from __future__ import annotations

import math
from typing import Optional

import pygame

from .core import GameConfig


def visualize_results_grid(
    results,
    config: Optional[GameConfig] = None,
    window_size=(1200, 800),
    fps=60,
):
    """Visualize multiple game logs in a single Pygame window."""

    cfg = config or GameConfig()
    sims = sorted(results.items(), key=lambda kv: kv[0])
    n_sims = len(sims)
    if n_sims == 0:
        print("No runs to visualize.")
        return

    pygame.init()
    W, H = window_size
    screen = pygame.display.set_mode((W, H))
    pygame.display.set_caption("Flappy Bird - Grid Replay")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont(None, 16)

    # Pick a near-square grid to pack all panels
    cols = math.ceil(math.sqrt(n_sims))
    rows = math.ceil(n_sims / cols)

    cell_w = W / cols
    cell_h = H / rows
    margin = 18
    scale = min((cell_w - 2 * margin) / cfg.board_width, (cell_h - 2 * margin) / cfg.board_height)

    log_lists = [data["log"] for _, data in sims]
    max_len = max(len(log) for log in log_lists)

    def board_rect(ix, x, y, w, h):
        # Map a board-space box into the ix-th grid cell in screen space
        col = ix % cols
        row = ix // cols
        offset_x = col * cell_w + margin
        offset_y = row * cell_h + margin
        return pygame.Rect(
            int(offset_x + x * scale),
            int(offset_y + y * scale),
            max(1, int(w * scale)),
            max(1, int(h * scale)),
        )

    frame = 0
    playing = True
    running = True

    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    # Toggle playback pause
                    playing = not playing
                elif event.key == pygame.K_r:
                    # Restart replay from frame zero
                    frame = 0
                    playing = True

        if playing:
            frame += 1
            if frame >= max_len:
                frame = max_len - 1
                playing = False

        frame = max(0, min(frame, max_len - 1))

        screen.fill((10, 10, 10))

        for idx, (seed, data) in enumerate(sims):
            log = data["log"]

            col = idx % cols
            row = idx // cols
            cell_rect = pygame.Rect(int(col * cell_w), int(row * cell_h), int(cell_w), int(cell_h))

            # Panel background and border
            pygame.draw.rect(screen, (20, 20, 20), cell_rect, 0)
            pygame.draw.rect(screen, (60, 60, 60), cell_rect, 1)

            board = board_rect(idx, 0, 0, cfg.board_width, cfg.board_height)
            pygame.draw.rect(screen, (40, 90, 110), board, 0)

            if len(log) > 0:
                state = log[min(frame, len(log) - 1)]

                # Pipes are clipped to the board so off-screen parts stay hidden
                screen.set_clip(board)
                for px, py, _role in state["obstacles"]:
                    pygame.draw.rect(screen, (90, 170, 50), board_rect(idx, px, py, cfg.pipe_width, cfg.pipe_height), 0)
                screen.set_clip(None)

                # Bird marker: yellow while alive, red once the run is over
                color = (250, 200, 40) if not state["game_over"] else (200, 50, 50)
                pygame.draw.rect(screen, color, board_rect(idx, cfg.bird_x, state["y"], cfg.bird_width, cfg.bird_height), 0)

                overlay = f"tick={state['tick']}  y={state['y']}  vy={state['vy']}  score={int(state['score'])}"
                text = font.render(overlay, True, (220, 220, 220))
                screen.blit(text, (cell_rect.x + 5, cell_rect.bottom - 16))

            label1 = f"seed={seed}  pipes={data['pipes_spawned']}"
            if data["game_over"]:
                # Show final score of a finished run
                label2 = f"game over  score={int(data['score'])}"
                label2_color = (255, 80, 80)
            else:
                label2 = f"alive  score={int(data['score'])}  ticks={data['ticks']}"
                label2_color = (255, 255, 0)

            text1 = font.render(label1, True, (255, 255, 255))
            text2 = font.render(label2, True, label2_color)
            screen.blit(text1, (cell_rect.right - 5 - text1.get_width(), cell_rect.y + 5))
            screen.blit(text2, (cell_rect.right - 5 - text2.get_width(), cell_rect.y + 22))

        # Global UI hint across all panels
        hint = "SPACE: pause/resume   R: replay   ESC: quit"
        hint_text = font.render(hint, True, (200, 200, 200))
        screen.blit(hint_text, (10, H - 25))

        pygame.display.flip()
        clock.tick(fps)

    pygame.quit()
