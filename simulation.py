"""
Simulation owner: game state, per-frame step and pellet respawn.

A Simulation is the only writer of its grid, actors and score. Drivers call
step() once per frame and update_timers() with elapsed wall-clock time; both
run on the same thread, so pellet respawn never interleaves with a step.
"""

import random
from enum import Enum

import config
from entities import ActorKind, Direction, make_ghost, make_player
from ghost_ai import update_ghost
from grid import Grid
from layout_validator import LayoutValidator
from maze_layout import DEFAULT_LAYOUT, parse_layout
from merge import all_merged, broadcast_merge, center_point, spawn_ultimate_ghost
from motion import advance
from pursuit_ai import update_pursuit


class GamePhase(Enum):
    NOT_STARTED = "NOT_STARTED"
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"


class PelletRespawnTimer:
    """Fixed-interval timer driven by elapsed milliseconds, not by frames"""

    def __init__(self, interval_ms=None, max_delta_ms=None):
        self.interval_ms = interval_ms or config.PELLET_RESPAWN_INTERVAL_MS
        self.max_delta_ms = max_delta_ms or config.MAX_DELTA_TIME_MS
        self.elapsed_ms = 0

    def reset(self):
        self.elapsed_ms = 0

    def update(self, elapsed_ms):
        """Add elapsed time; returns how many intervals completed"""
        self.elapsed_ms += max(0, min(elapsed_ms, self.max_delta_ms))
        fires = 0
        while self.elapsed_ms >= self.interval_ms:
            self.elapsed_ms -= self.interval_ms
            fires += 1
        return fires


def _update_player(actor, sim):
    advance(actor, sim.grid)
    return False


def _update_ghost(actor, sim):
    return update_ghost(actor, sim.grid, sim.rng, sim.merge_target)


def _update_ultimate(actor, sim):
    update_pursuit(actor, sim.grid, sim.player, sim.rng)
    return False


# Behavior per actor kind; all share the motion primitives in motion.py
ACTOR_UPDATES = {
    ActorKind.PLAYER: _update_player,
    ActorKind.GHOST: _update_ghost,
    ActorKind.ULTIMATE: _update_ultimate,
}


def update_actor(actor, sim):
    return ACTOR_UPDATES[actor.kind](actor, sim)


class Simulation:
    def __init__(self, layout=None, rng=None, seed=None):
        """
        Build a simulation for a fixed maze.

        Args:
            layout: maze rows (strings) or 2D tile codes; defaults to DEFAULT_LAYOUT
            rng: random source with random() and choice(); overrides seed
            seed: seed for a private random.Random when rng is not given

        Raises:
            LayoutError: the layout is malformed or lacks start markers
        """
        self.layout = parse_layout(DEFAULT_LAYOUT if layout is None else layout)
        self.player_start, self.ghost_starts = LayoutValidator(self.layout).validate()
        self.rng = rng if rng is not None else random.Random(seed)

        self.grid = Grid(self.layout)
        self.merge_target = center_point(self.grid)
        self.respawn_timer = PelletRespawnTimer()

        self.phase = GamePhase.NOT_STARTED
        self.player = make_player(self.player_start)
        self.ghosts = []
        self.ultimate_ghost = None
        self.score = 0
        self.pellets_left = self.grid.count_pellets()
        self.steps = 0

    # ------------------------------------------------------------------
    # Inbound interface
    # ------------------------------------------------------------------

    def start_game(self):
        self.reset_game()

    def reset_game(self):
        """(Re)initialize grid, actors and score and start playing"""
        self.grid.reset()

        start_direction = Direction.parse(config.PLAYER_START_DIRECTION)
        self.player = make_player(self.player_start)
        self.player.direction = start_direction
        self.player.next_direction = start_direction

        self.ghosts = [make_ghost(cell, i) for i, cell in enumerate(self.ghost_starts)]
        self.ultimate_ghost = None
        self.score = 0
        self.pellets_left = self.grid.count_pellets()
        self.steps = 0
        self.respawn_timer.reset()
        self.phase = GamePhase.PLAYING

        self._log(f"New game - {len(self.ghosts)} ghosts, {self.pellets_left} pellets")

    def request_direction(self, direction):
        """Buffer the player's next turn (last request wins)"""
        direction = Direction.parse(direction)
        if self.phase != GamePhase.PLAYING:
            return
        self.player.next_direction = direction

    # ------------------------------------------------------------------
    # Per-frame step
    # ------------------------------------------------------------------

    def step(self):
        """Run one frame of the game and return the published snapshot"""
        if self.phase != GamePhase.PLAYING:
            return self.snapshot()

        self.steps += 1

        # 1. Player movement
        update_actor(self.player, self)

        # 2. Pellet pickup; both win conditions are checked on their own
        if self.grid.consume_pellet(self.player.cell):
            self.score += config.PELLET_POINTS
            self.pellets_left -= 1
            if self.score >= config.WIN_SCORE:
                self._finish(GamePhase.WON, f"score reached {self.score}")
            if self.pellets_left == 0:
                self._finish(GamePhase.WON, "all pellets eaten")

        # 3. Roaming / converging ghosts
        if self.score >= config.MERGE_SCORE:
            flagged = broadcast_merge(self.ghosts)
            if flagged:
                self._log(f"Score {self.score} - {flagged} ghosts converging on {self.grid.center_cell}")

        for ghost in self.ghosts:
            if ghost.merged:
                continue
            if update_actor(ghost, self):
                self._log(f"{ghost.name} merged at center")
                continue
            if not ghost.is_merging and self.player.distance_to(ghost) < config.GHOST_COLLISION_DISTANCE:
                self._finish(GamePhase.LOST, f"caught by {ghost.name}")

        # 4. Ultimate ghost once every ghost has merged
        if all_merged(self.ghosts):
            if self.ultimate_ghost is None:
                self.ultimate_ghost = spawn_ultimate_ghost(self.grid)
                self._log(f"Ultimate ghost spawned at {self.ultimate_ghost.cell}")

            update_actor(self.ultimate_ghost, self)
            if self.player.distance_to(self.ultimate_ghost) < config.ULTIMATE_COLLISION_DISTANCE:
                self._finish(GamePhase.LOST, "caught by the ultimate ghost")

        # 5. Publish
        return self.snapshot()

    def _finish(self, phase, reason):
        # First terminal transition of a tick sticks
        if self.phase != GamePhase.PLAYING:
            return
        self.phase = phase
        self._log(f"Game {phase.value} after {self.steps} steps ({reason}), score {self.score}")

    # ------------------------------------------------------------------
    # Timed effects
    # ------------------------------------------------------------------

    def respawn_pellets(self):
        """Restore eaten pellets except under the player; returns the count"""
        if self.phase != GamePhase.PLAYING:
            return 0
        restored = self.grid.respawn_pellets(self.layout, exempt_cell=self.player.cell)
        if restored:
            self.pellets_left += restored
            self._log(f"Respawned {restored} pellets ({self.pellets_left} left)")
        return restored

    def update_timers(self, elapsed_ms):
        """Advance wall-clock timers between steps; returns pellets restored"""
        if self.phase != GamePhase.PLAYING:
            return 0
        restored = 0
        for _ in range(self.respawn_timer.update(elapsed_ms)):
            restored += self.respawn_pellets()
        return restored

    # ------------------------------------------------------------------
    # Outbound interface
    # ------------------------------------------------------------------

    def snapshot(self):
        """Read-only view of the current state for renderers and tools"""
        return {
            'phase': self.phase.value,
            'score': self.score,
            'pellets_left': self.pellets_left,
            'steps': self.steps,
            'tiles': self.grid.tiles.copy(),
            'player': self.player.to_dict(),
            'ghosts': [ghost.to_dict() for ghost in self.ghosts],
            'ultimate_ghost': self.ultimate_ghost.to_dict() if self.ultimate_ghost else None,
        }

    def _log(self, message):
        if config.ENABLE_SIMULATION_LOGGING:
            print(f"Simulation: {message}")
