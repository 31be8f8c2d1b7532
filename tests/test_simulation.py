import math

import pytest

import config
from entities import ActorKind, Direction
from maze_layout import LayoutError, TileKind
from merge import center_point
from simulation import ACTOR_UPDATES, GamePhase, PelletRespawnTimer, Simulation

# Steps for the player to leave its start cell for the pellet on its left
STEPS_TO_FIRST_PELLET = 9


def run_steps(sim, count):
    for _ in range(count):
        sim.step()


def eat_all_pellets_except(sim, keep):
    for y in range(sim.grid.height):
        for x in range(sim.grid.width):
            if (x, y) != keep:
                sim.grid.consume_pellet((x, y))
    sim.pellets_left = sim.grid.count_pellets()


def test_new_simulation_is_not_started():
    sim = Simulation(seed=1)

    assert sim.phase == GamePhase.NOT_STARTED
    assert sim.ghosts == []
    assert sim.step()['phase'] == "NOT_STARTED"
    assert sim.steps == 0


def test_start_game_places_actors(sim):
    assert sim.phase == GamePhase.PLAYING
    assert sim.score == 0
    assert sim.pellets_left == sim.grid.count_pellets() > 0
    assert sim.player.cell == (9, 15)
    assert sim.player.direction == Direction.LEFT
    assert sim.player.next_direction == Direction.LEFT
    assert [ghost.cell for ghost in sim.ghosts] == [(8, 8), (10, 8), (8, 10), (10, 10)]
    assert [ghost.color for ghost in sim.ghosts] == config.GHOST_COLORS
    assert sim.ultimate_ghost is None


def test_bad_layout_fails_at_construction():
    with pytest.raises(LayoutError):
        Simulation(layout=["#####", "#.G.#", "#####"])


def test_every_actor_kind_has_an_update():
    assert set(ACTOR_UPDATES) == set(ActorKind)


def test_request_direction_last_write_wins(sim):
    sim.request_direction(Direction.UP)
    sim.request_direction("down")
    assert sim.player.next_direction == Direction.DOWN


def test_request_direction_ignored_unless_playing():
    sim = Simulation(seed=1)
    sim.request_direction(Direction.UP)
    assert sim.player.next_direction is None


def test_request_direction_rejects_garbage(sim):
    with pytest.raises(ValueError):
        sim.request_direction("sideways")


def test_first_pellet_scores_ten(sim):
    initial = sim.pellets_left

    run_steps(sim, STEPS_TO_FIRST_PELLET - 1)
    assert sim.score == 0
    assert sim.player.cell == (9, 15)

    snapshot = sim.step()

    assert sim.player.cell == (8, 15)
    assert snapshot['score'] == 10
    assert snapshot['pellets_left'] == initial - 1
    assert sim.grid.tile_at((8, 15)) == TileKind.EMPTY
    assert snapshot['phase'] == "PLAYING"


def test_merge_broadcast_on_the_step_score_reaches_threshold(sim):
    sim.score = config.MERGE_SCORE - config.PELLET_POINTS

    run_steps(sim, STEPS_TO_FIRST_PELLET - 1)
    assert not any(ghost.is_merging for ghost in sim.ghosts)

    sim.step()
    assert sim.score == config.MERGE_SCORE
    assert all(ghost.is_merging for ghost in sim.ghosts)
    assert all(ghost.speed == config.GHOST_MERGING_SPEED for ghost in sim.ghosts)

    target = center_point(sim.grid)
    before = [(ghost.x, ghost.y) for ghost in sim.ghosts]
    sim.step()
    for (x0, y0), ghost in zip(before, sim.ghosts):
        if ghost.merged:
            continue
        # Moved along the straight line towards the center
        cross = (ghost.x - x0) * (target[1] - y0) - (ghost.y - y0) * (target[0] - x0)
        assert cross == pytest.approx(0, abs=1e-6)
        d0 = math.hypot(target[0] - x0, target[1] - y0)
        d1 = math.hypot(target[0] - ghost.x, target[1] - ghost.y)
        assert d0 - d1 == pytest.approx(config.GHOST_MERGING_SPEED)


def test_all_ghosts_merged_spawns_one_ultimate_ghost(sim):
    target = center_point(sim.grid)
    for ghost in sim.ghosts:
        ghost.is_merging = True
        ghost.x, ghost.y = target
        ghost.sync_cell()

    snapshot = sim.step()

    assert all(ghost.merged for ghost in sim.ghosts)
    ultimate = sim.ultimate_ghost
    assert ultimate is not None
    assert ultimate.kind == ActorKind.ULTIMATE
    assert snapshot['ultimate_ghost'] is not None

    run_steps(sim, 5)
    assert sim.ultimate_ghost is ultimate
    assert sim.phase == GamePhase.PLAYING


def test_no_ultimate_ghost_while_any_ghost_roams(sim):
    target = center_point(sim.grid)
    for ghost in sim.ghosts[1:]:
        ghost.is_merging = True
        ghost.x, ghost.y = target
        ghost.sync_cell()

    run_steps(sim, 3)

    assert not sim.ghosts[0].merged
    assert sim.ultimate_ghost is None


def test_touching_a_roaming_ghost_loses(sim):
    ghost = sim.ghosts[0]
    ghost.x, ghost.y = sim.player.x, sim.player.y
    ghost.sync_cell()

    snapshot = sim.step()

    assert snapshot['phase'] == "LOST"
    assert sim.phase == GamePhase.LOST


def test_merging_ghost_does_not_collide(sim):
    ghost = sim.ghosts[0]
    ghost.is_merging = True
    ghost.x, ghost.y = sim.player.x, sim.player.y
    ghost.sync_cell()

    sim.step()

    assert sim.player.distance_to(ghost) < config.GHOST_COLLISION_DISTANCE
    assert sim.phase == GamePhase.PLAYING


def test_ultimate_ghost_catches_player(sim):
    for ghost in sim.ghosts:
        ghost.is_merging = True
        ghost.merged = True
    target = center_point(sim.grid)
    sim.player.direction = None
    sim.player.next_direction = None
    sim.player.x, sim.player.y = target[0] + 20, target[1]
    sim.player.sync_cell()

    sim.step()

    assert sim.ultimate_ghost is not None
    assert sim.phase == GamePhase.LOST


def test_eating_last_pellet_wins_below_win_score(sim):
    eat_all_pellets_except(sim, keep=(8, 15))
    assert sim.pellets_left == 1

    run_steps(sim, STEPS_TO_FIRST_PELLET)

    assert sim.pellets_left == 0
    assert sim.score < config.WIN_SCORE
    assert sim.phase == GamePhase.WON


def test_reaching_win_score_wins_with_pellets_left(sim):
    sim.score = config.WIN_SCORE - config.PELLET_POINTS

    run_steps(sim, STEPS_TO_FIRST_PELLET)

    assert sim.score == config.WIN_SCORE
    assert sim.pellets_left > 0
    assert sim.phase == GamePhase.WON


def test_first_terminal_phase_sticks(sim):
    eat_all_pellets_except(sim, keep=(8, 15))
    run_steps(sim, STEPS_TO_FIRST_PELLET - 1)
    ghost = sim.ghosts[0]
    ghost.x, ghost.y = sim.player.x, sim.player.y
    ghost.sync_cell()

    sim.step()

    assert sim.phase == GamePhase.WON


def test_terminal_phase_freezes_the_game(sim):
    ghost = sim.ghosts[0]
    ghost.x, ghost.y = sim.player.x, sim.player.y
    ghost.sync_cell()
    sim.step()
    frozen = sim.snapshot()

    sim.step()
    sim.request_direction(Direction.UP)

    assert sim.steps == frozen['steps']
    assert sim.player.to_dict() == frozen['player']
    assert sim.player.next_direction != Direction.UP


def test_reset_after_loss(sim):
    ghost = sim.ghosts[0]
    ghost.x, ghost.y = sim.player.x, sim.player.y
    ghost.sync_cell()
    sim.step()
    assert sim.phase == GamePhase.LOST
    sim.grid.consume_pellet((1, 1))
    old_ghosts = sim.ghosts

    sim.reset_game()

    assert sim.phase == GamePhase.PLAYING
    assert sim.score == 0
    assert sim.steps == 0
    assert sim.grid.tile_at((1, 1)) == TileKind.PELLET
    assert sim.pellets_left == sim.grid.count_pellets()
    assert sim.ghosts is not old_ghosts
    assert not any(g.is_merging for g in sim.ghosts)


def test_respawn_restores_pellets_and_count(sim):
    initial = sim.pellets_left
    sim.grid.consume_pellet((1, 1))
    sim.pellets_left -= 1

    assert sim.respawn_pellets() == 1
    assert sim.pellets_left == initial
    assert sim.respawn_pellets() == 0
    assert sim.pellets_left == initial


def test_respawn_skips_player_cell(sim):
    run_steps(sim, STEPS_TO_FIRST_PELLET)
    assert sim.player.cell == (8, 15)

    assert sim.respawn_pellets() == 0
    assert sim.grid.tile_at((8, 15)) == TileKind.EMPTY


def test_respawn_only_while_playing():
    sim = Simulation(seed=1)
    sim.grid.consume_pellet((1, 1))
    assert sim.respawn_pellets() == 0
    assert sim.update_timers(config.PELLET_RESPAWN_INTERVAL_MS) == 0


def test_update_timers_respawns_on_interval(sim):
    sim.grid.consume_pellet((1, 1))
    sim.pellets_left -= 1

    for _ in range(49):
        assert sim.update_timers(100) == 0
    assert sim.grid.tile_at((1, 1)) == TileKind.EMPTY

    assert sim.update_timers(100) == 1
    assert sim.grid.tile_at((1, 1)) == TileKind.PELLET


def test_respawn_timer_is_frame_rate_independent():
    slow, fast = PelletRespawnTimer(5000), PelletRespawnTimer(5000)

    slow_fires = sum(slow.update(100) for _ in range(100))
    fast_fires = sum(fast.update(10) for _ in range(1000))

    assert slow_fires == fast_fires == 2


def test_respawn_timer_caps_large_jumps():
    timer = PelletRespawnTimer(5000, max_delta_ms=250)
    assert timer.update(60000) == 0
    assert timer.elapsed_ms == 250

    timer.reset()
    assert timer.elapsed_ms == 0


def test_snapshot_is_detached(sim):
    snapshot = sim.snapshot()
    snapshot['tiles'][15, 8] = TileKind.WALL

    assert sim.grid.tile_at((8, 15)) == TileKind.PELLET
    assert set(snapshot) == {'phase', 'score', 'pellets_left', 'steps', 'tiles',
                             'player', 'ghosts', 'ultimate_ghost'}
    assert snapshot['ultimate_ghost'] is None
    assert [g['color'] for g in snapshot['ghosts']] == config.GHOST_COLORS


def test_long_run_keeps_invariants():
    sim = Simulation(seed=42)
    sim.start_game()
    score = 0

    for tick in range(3000):
        if sim.phase != GamePhase.PLAYING:
            break
        if tick % 40 == 0:
            sim.request_direction(list(Direction)[tick // 40 % 4])
        sim.step()

        assert sim.score >= score
        score = sim.score
        assert sim.pellets_left == sim.grid.count_pellets()
        for actor in [sim.player] + sim.ghosts:
            assert actor.grid_x == math.floor(actor.x / config.TILE_SIZE)
            assert actor.grid_y == math.floor(actor.y / config.TILE_SIZE)
        for ghost in sim.ghosts:
            if not ghost.is_merging:
                assert sim.grid.is_walkable(ghost.cell)
