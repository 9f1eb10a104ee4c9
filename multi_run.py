from flapsim.multi import run_multi_parallel
from flapsim.policies import gap_follower
from flapsim.visualize import visualize_results_grid

if __name__ == "__main__":
    seeds = [1, 2, 3, 4, 5, 6, 7, 8]
    max_ticks = 60 * 60  # one minute of game time

    # 1) Run all games in parallel, headless, with the autopilot flapping
    results = run_multi_parallel(seeds, policy=gap_follower, max_ticks=max_ticks)

    for seed, data in sorted(results.items()):
        status = "game over" if data["game_over"] else "alive"
        print(f"seed={seed} -> score={int(data['score'])} ticks={data['ticks']} ({status})")

    # 2) Replay all games in one Pygame window
    visualize_results_grid(results, window_size=(1200, 800), fps=60)
