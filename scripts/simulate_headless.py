#!/usr/bin/env python3
"""
Play games without a display using a randomly turning player.
Prints one line per game and a JSON summary (optionally written to --output).
"""
import json
import random
from collections import Counter
from datetime import datetime

import config
from entities import Direction
from simulation import GamePhase, Simulation


def play_game(sim, rng, max_steps=20000, turn_every=30):
    """Play one game on a fixed-rate simulated clock; returns a result dict"""
    frame_ms = 1000.0 / config.TARGET_FPS
    sim.start_game()
    while sim.phase == GamePhase.PLAYING and sim.steps < max_steps:
        if sim.steps % turn_every == 0:
            sim.request_direction(rng.choice(list(Direction)))
        sim.update_timers(frame_ms)
        sim.step()

    return {
        'phase': sim.phase.value,
        'score': sim.score,
        'steps': sim.steps,
        'pellets_left': sim.pellets_left,
        'ultimate_ghost': sim.ultimate_ghost is not None,
    }


def run_batch(num_games=10, max_steps=20000, seed=None, turn_every=30):
    rng = random.Random(seed)
    sim = Simulation(rng=random.Random(rng.random()))
    results = []
    for i in range(num_games):
        result = play_game(sim, rng, max_steps=max_steps, turn_every=turn_every)
        results.append(result)
        print(f"Game {i+1}/{num_games}: {result['phase']} score={result['score']} steps={result['steps']}")

    outcomes = Counter(result['phase'] for result in results)
    scores = [result['score'] for result in results]
    return {
        'timestamp': datetime.now().isoformat(),
        'seed': seed,
        'games': num_games,
        'outcomes': dict(outcomes),
        'average_score': sum(scores) / len(scores) if scores else 0,
        'best_score': max(scores) if scores else 0,
        'ultimate_ghost_games': sum(1 for result in results if result['ultimate_ghost']),
        'results': results,
    }


if __name__ == '__main__':
    import argparse
    p = argparse.ArgumentParser()
    p.add_argument('--games', type=int, default=10)
    p.add_argument('--max-steps', type=int, default=20000)
    p.add_argument('--seed', type=int, default=None)
    p.add_argument('--turn-every', type=int, default=30)
    p.add_argument('--output', default=None)
    p.add_argument('--quiet', action='store_true', help='disable simulation logging')
    args = p.parse_args()

    if args.quiet:
        config.ENABLE_SIMULATION_LOGGING = False

    summary = run_batch(args.games, args.max_steps, seed=args.seed, turn_every=args.turn_every)
    print(json.dumps({k: v for k, v in summary.items() if k != 'results'}, indent=2))
    if args.output:
        with open(args.output, 'w') as f:
            json.dump(summary, f, indent=2)
        print(f"Summary saved to {args.output}")
