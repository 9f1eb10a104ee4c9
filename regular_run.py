from flapsim.single import run_sim

# Interactive game: SPACE to flap, SPACE again after a crash to restart, ESC to quit

result = run_sim(display=True)

print(f"score={int(result.score)} ticks={result.ticks} restarts={result.restarts}")
