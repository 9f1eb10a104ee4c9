"""Autopilot policies: map a snapshot to a flap decision.

Policies are plain module-level functions so they can be sent to worker
processes by `multi.run_multi_parallel`.
"""
from __future__ import annotations

from typing import Optional, Tuple

from .core import Snapshot


def never_flap(snapshot: Snapshot) -> bool:
    return False


def next_gap(snapshot: Snapshot) -> Optional[Tuple[float, float]]:
    """Return (gap_upper_y, gap_lower_y) of the first pair still ahead of the bird."""
    bird = snapshot.avatar
    top_edge = None
    for view in snapshot.obstacles:
        if view.box.right < bird.left:
            continue
        if view.role == "top":
            top_edge = view.box.top
        elif top_edge is not None:
            return top_edge, view.box.bottom
    return None


def gap_follower(snapshot: Snapshot, margin: int = 12) -> bool:
    # Flap when the bird's lower edge sinks close to the bottom of the next gap
    if snapshot.game_over:
        return False
    bird = snapshot.avatar
    gap = next_gap(snapshot)
    if gap is None:
        middle = snapshot.board_height / 2
        return bird.top > middle
    upper, lower = gap
    if bird.bottom - upper < margin:
        # Too close to the top pipe, let gravity pull us down
        return False
    return bird.top > lower - margin
