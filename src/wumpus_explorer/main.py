#!/usr/bin/env python3
# Run the agent headless on a world file or a random world

import os
import sys
import json
import random
import argparse
import datetime

from wumpus_explorer.engine import GameEngine
from wumpus_explorer.environment.world_builder import WorldParseError, load_world, generate_world
from wumpus_explorer.utils.constants import DIRECTION_NAMES, MAX_STEPS_DEFAULT
from wumpus_explorer.utils.logging_utils import log_event, log_error, log_info, log_success


def run_episode(engine, max_steps=MAX_STEPS_DEFAULT):
    """
    Drives suggest_move -> execute_action until the game ends or max_steps
    actions have been taken. Returns a log of every step and the final state.
    """
    steps = []
    step_count = 0

    while step_count < max_steps:
        action = engine.suggest_move()
        if action is None:
            break
        step_count += 1

        goal = engine.last_goal
        result = engine.execute_action(action)
        state = engine.get_world_state()
        steps.append({
            "step": step_count,
            "action": action,
            "goal": goal.name if goal is not None else None,
            "message": result.message,
            "perception": result.perception._asdict(),
            "agent_pos": list(state.agent_position),
            "agent_dir": state.agent_direction,
            "score": state.score,
        })
        log_event(
            f"Step {step_count}: {action} -> {result.message} "
            f"(at {state.agent_position} facing {DIRECTION_NAMES[state.agent_direction]}, score {state.score})"
        )

    state = engine.get_world_state()
    return {
        "steps": steps,
        "final_state": {
            "game_won": state.game_won,
            "game_over": state.game_over,
            "agent_alive": state.agent_alive,
            "agent_has_gold": state.agent_has_gold,
            "agent_pos": list(state.agent_position),
            "score": state.score,
            "steps_used": step_count,
            "recent_inferences": engine.get_knowledge_base().get_recent_inferences(10),
        },
    }


def save_log(log, output_dir, name="episode"):
    """Save the log to a timestamped JSON file in output_dir."""
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(output_dir, f"{name}_{timestamp}.json")

    os.makedirs(output_dir, exist_ok=True)
    with open(log_path, "w") as f:
        json.dump(log, f, indent=2)

    log_info(f"Log saved to {log_path}")
    return log_path


def build_parser():
    parser = argparse.ArgumentParser(description="Run the Wumpus World agent headless")
    parser.add_argument("--world", type=str, help="Path to a 10x10 world layout (W, P, G, -)")
    parser.add_argument("--seed", type=int, help="Seed for world generation and the agent's random choices")
    parser.add_argument("--max-steps", type=int, default=MAX_STEPS_DEFAULT, help="Maximum number of actions")
    parser.add_argument("--log-dir", type=str, help="Directory to save a JSON log of the episode")
    parser.add_argument("--quiet", action="store_true", help="Only print the final result")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # --quiet only silences this run; the caller's setting is put back afterwards.
    previous_quiet = os.environ.get("WUMPUS_QUIET")
    if args.quiet:
        os.environ["WUMPUS_QUIET"] = "1"
    try:
        return _run(args)
    finally:
        if previous_quiet is None:
            os.environ.pop("WUMPUS_QUIET", None)
        else:
            os.environ["WUMPUS_QUIET"] = previous_quiet


def _run(args):
    rng = random.Random(args.seed)
    if args.world:
        try:
            world = load_world(args.world)
        except (OSError, WorldParseError) as e:
            log_error(f"Could not load world {args.world}: {e}")
            return 1
        name = os.path.splitext(os.path.basename(args.world))[0]
    else:
        world = generate_world(rng)
        name = "random" if args.seed is None else f"random_{args.seed}"

    engine = GameEngine(world, rng=rng)
    log = run_episode(engine, args.max_steps)
    final = log["final_state"]

    if final["game_won"]:
        log_success(f"The agent won! Score: {final['score']}")
    elif final["game_over"]:
        log_error(f"The agent lost. Score: {final['score']}")
    else:
        log_info(f"Maximum steps reached. Score: {final['score']}")
    print(f"Final score: {final['score']} after {final['steps_used']} steps")

    if args.log_dir:
        save_log(log, args.log_dir, name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
