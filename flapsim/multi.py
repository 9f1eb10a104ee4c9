"""Batch and parallel game helpers."""
from __future__ import annotations

from multiprocessing import Pool, cpu_count
from typing import Dict, Iterable, Optional, Tuple

from . import constants
from .core import GameConfig
from .policies import gap_follower
from .single import Policy, SimulationResult, run_sim


def _result_to_dict(result: SimulationResult) -> Dict[str, object]:
    # Flatten SimulationResult into the dict structure the replay grid reads
    return {
        "score": result.score,
        "ticks": result.ticks,
        "game_over": result.game_over,
        "log": result.frame_log,
        "pipes_spawned": result.pipes_spawned,
    }


def run_multi(
    seeds: Iterable[int],
    policy: Policy = gap_follower,
    max_ticks: Optional[int] = constants.BATCH_MAX_TICKS,
    display: bool = False,
    config: Optional[GameConfig] = None,
):
    """Run one game per seed (sequential)."""
    results = {}
    for seed in seeds:
        print(f"\n=== Run seed={seed} ===")
        sim_result = run_sim(
            seed=seed,
            policy=policy,
            display=display,
            max_ticks=max_ticks,
            config=config,
        )
        results[seed] = _result_to_dict(sim_result)
    return results


def _sim_worker(args: Tuple[int, Policy, Optional[int], Optional[GameConfig]]):
    # Child-process worker for multiprocessing Pool
    seed, policy, max_ticks, config = args
    sim_result = run_sim(
        seed=seed,
        policy=policy,
        display=False,
        max_ticks=max_ticks,
        config=config,
    )
    return seed, _result_to_dict(sim_result)


def run_multi_parallel(
    seeds: Iterable[int],
    policy: Policy = gap_follower,
    max_ticks: Optional[int] = constants.BATCH_MAX_TICKS,
    config: Optional[GameConfig] = None,
    processes: Optional[int] = None,
):
    """Run one game per seed in parallel (headless). `policy` must be picklable."""
    args = [(seed, policy, max_ticks, config) for seed in seeds]
    n_cpus = processes or cpu_count()
    print(f"Running {len(args)} games on {n_cpus} cores (headless)...")

    results = {}
    with Pool(processes=n_cpus) as pool:
        for seed, data in pool.map(_sim_worker, args):
            results[seed] = data
    return results
