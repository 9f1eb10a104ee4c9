import pymunk
import pytest

from flapsim.core import Avatar, GameConfig, Obstacle, Simulation, collision


def test_gravity_integration_from_rest():
    sim = Simulation(seed=0)
    sim.avatar.y = 0
    sim.avatar.velocity = 0

    sim.tick()
    assert sim.avatar.velocity == 1
    assert sim.avatar.y == 1

    for _ in range(8):
        sim.tick()
    assert sim.avatar.velocity == 9
    assert sim.avatar.y == 45


def test_avatar_clamped_at_top():
    sim = Simulation(seed=0)
    sim.avatar.y = 10
    sim.avatar.velocity = -50
    sim.tick()
    assert sim.avatar.y == 0


def test_avatar_never_above_top_while_flapping():
    sim = Simulation(seed=3)
    for i in range(300):
        if i % 2 == 0:
            sim.request_impulse()
        if i % 90 == 0:
            sim.spawn_obstacle_pair()
        sim.tick()
        if sim.game_over:
            break
        assert sim.avatar.y >= 0


def test_impulse_overrides_velocity():
    sim = Simulation()
    sim.avatar.velocity = 20
    sim.request_impulse()
    assert sim.avatar.velocity == -9


def test_spawn_pair_gap_is_constant():
    sim = Simulation(seed=42)
    for _ in range(50):
        top, bottom = sim.spawn_obstacle_pair()
        assert bottom.y - (top.y + top.height) == 160
        assert -384 < top.y <= -128
        assert top.x == bottom.x == 360
        assert (top.role, bottom.role) == ("top", "bottom")
    assert len(sim.obstacles) == 100
    assert [p.role for p in sim.obstacles[:4]] == ["top", "bottom", "top", "bottom"]


def test_spawn_is_reproducible_with_seed():
    a = Simulation(seed=7)
    b = Simulation(seed=7)
    offsets_a = [a.spawn_obstacle_pair()[0].y for _ in range(10)]
    offsets_b = [b.spawn_obstacle_pair()[0].y for _ in range(10)]
    assert offsets_a == offsets_b


def test_passed_awards_half_point_once():
    sim = Simulation(seed=0)
    top, bottom = sim.spawn_obstacle_pair()
    top.x = bottom.x = -16

    sim.tick()
    assert top.passed and bottom.passed
    assert sim.score == 1.0
    assert not sim.game_over

    sim.tick()
    assert sim.score == 1.0


def test_not_passed_while_overlapping_bird_column():
    sim = Simulation(seed=0)
    sim.obstacles.append(Obstacle(x=0, y=-1000, width=64, height=512, role="top"))
    sim.tick()
    # Trailing edge at 60 is still right of the bird at 45
    assert not sim.obstacles[0].passed
    assert sim.score == 0


def test_collision_with_pipe_ends_game():
    sim = Simulation(seed=0)
    sim.obstacles.append(Obstacle(x=50, y=100, width=64, height=512, role="bottom"))
    sim.tick()
    assert sim.game_over


def test_falling_below_board_ends_game():
    sim = Simulation(seed=0)
    sim.avatar.y = 640
    sim.tick()
    assert sim.game_over


def test_tick_is_frozen_after_game_over():
    sim = Simulation(seed=0)
    sim.spawn_obstacle_pair()
    sim.avatar.y = 700
    sim.tick()
    assert sim.game_over

    before = (sim.avatar.y, sim.avatar.velocity, sim.score, [(p.x, p.y) for p in sim.obstacles])
    for _ in range(5):
        sim.tick()
    after = (sim.avatar.y, sim.avatar.velocity, sim.score, [(p.x, p.y) for p in sim.obstacles])
    assert before == after


def test_reset_restores_first_tick_behaviour():
    fresh = Simulation(seed=1)
    fresh.tick()

    sim = Simulation(seed=1)
    sim.spawn_obstacle_pair()
    sim.score = 3.5
    sim.avatar.y = 700
    sim.tick()
    assert sim.game_over

    sim.reset()
    assert sim.score == 0
    assert sim.obstacles == []
    assert not sim.game_over

    sim.tick()
    assert (sim.avatar.y, sim.avatar.velocity, sim.score) == (fresh.avatar.y, fresh.avatar.velocity, fresh.score)


def test_impulse_after_game_over_restarts_and_flaps():
    sim = Simulation(seed=0)
    sim.spawn_obstacle_pair()
    sim.avatar.y = 700
    sim.tick()
    assert sim.game_over

    sim.request_impulse()
    assert not sim.game_over
    assert sim.obstacles == []
    assert sim.score == 0
    assert sim.avatar.y == 180
    assert sim.avatar.velocity == -9


def test_offscreen_pipes_are_pruned():
    sim = Simulation(seed=0)
    sim.obstacles.append(Obstacle(x=-64, y=-1000, width=64, height=512, role="top"))
    sim.obstacles.append(Obstacle(x=-60, y=-1000, width=64, height=512, role="top"))
    sim.tick()
    assert [p.x for p in sim.obstacles] == [-64]


def test_pruning_can_be_disabled():
    sim = Simulation(GameConfig(prune_offscreen=False), seed=0)
    sim.obstacles.append(Obstacle(x=-64, y=-1000, width=64, height=512, role="top"))
    sim.tick()
    assert len(sim.obstacles) == 1


def test_collision_inside_and_left():
    pipe = Obstacle(x=100, y=100, width=64, height=512, role="bottom")
    inside = Avatar(x=110, y=200, width=34, height=24)
    left = Avatar(x=10, y=200, width=34, height=24)
    assert collision(inside, pipe)
    assert not collision(left, pipe)


def test_collision_touching_edges_is_not_overlap():
    pipe = Obstacle(x=100, y=100, width=64, height=512, role="bottom")
    assert not collision(Avatar(x=66, y=200, width=34, height=24), pipe)
    assert not collision(Avatar(x=120, y=76, width=34, height=24), pipe)
    assert collision(Avatar(x=67, y=77, width=34, height=24), pipe)


@pytest.mark.parametrize("ax,ay", [(0, 0), (90, 90), (150, 500), (164, 300), (300, 300), (120, 611)])
def test_collision_is_symmetric(ax, ay):
    a = Avatar(x=ax, y=ay, width=34, height=24)
    b = Obstacle(x=100, y=100, width=64, height=512, role="top")
    assert collision(a, b) == collision(b, a)


def test_snapshot_boxes_and_score_text():
    sim = Simulation(seed=0)
    sim.spawn_obstacle_pair()
    snap = sim.snapshot()
    assert snap.avatar == pymunk.BB(45, 180, 79, 204)
    assert [v.role for v in snap.obstacles] == ["top", "bottom"]
    assert snap.obstacles[0].box.right == 360 + 64
    assert snap.score_text == "0"

    sim.score = 2.5
    assert sim.snapshot().score_text == "2"

    sim.game_over = True
    assert sim.snapshot().score_text == "Game Over: 2"


def test_config_defaults_and_derived_values():
    cfg = GameConfig()
    assert cfg.gap == 160
    assert cfg.spawn_x == 360
    assert cfg.spawn_interval_ticks == 90
    assert (cfg.bird_x, cfg.bird_y) == (45, 180)


@pytest.mark.parametrize("kwargs", [
    {"board_width": 0},
    {"pipe_height": -1},
    {"tick_rate": 0},
    {"spawn_interval_ms": 1},
])
def test_config_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_single_passed_pipe_awards_half_point():
    sim = Simulation(seed=0)
    pipe = Obstacle(x=-16, y=-1000, width=64, height=512, role="top")
    sim.obstacles.append(pipe)

    sim.tick()
    assert pipe.passed
    assert sim.score == 0.5

    sim.tick()
    assert sim.score == 0.5


def test_unpassed_offscreen_pipe_is_kept():
    sim = Simulation(GameConfig(bird_x=-100), seed=0)
    pipe = Obstacle(x=-66, y=-1000, width=64, height=512, role="top")
    sim.obstacles.append(pipe)

    sim.tick()
    # Right edge at -6 is off the board but still ahead of the bird at -100
    assert not pipe.passed
    assert sim.obstacles == [pipe]
    assert sim.score == 0
