"""Tests for the headless runner."""

import os
import json
import random

import pytest

from wumpus_explorer.engine import GameEngine
from wumpus_explorer.environment.world_builder import generate_world, parse_world
from wumpus_explorer.main import main, run_episode
from wumpus_explorer.utils.constants import ACTIONS, HOME_POS


@pytest.fixture
def gold_next_door(tmp_path, make_layout):
    path = tmp_path / "gold_next_door.txt"
    path.write_text(make_layout(gold=(8, 0), pits=[(0, 9)]))
    return path


def test_main_runs_world_file(gold_next_door, capsys):
    assert main(["--world", str(gold_next_door), "--quiet"]) == 0

    out = capsys.readouterr().out
    assert "Final score: 995 after 5 steps" in out


def test_main_writes_json_log(gold_next_door, tmp_path):
    log_dir = tmp_path / "logs"

    assert main(["--world", str(gold_next_door), "--log-dir", str(log_dir)]) == 0

    logs = list(log_dir.glob("gold_next_door_*.json"))
    assert len(logs) == 1
    log = json.loads(logs[0].read_text())
    assert log["final_state"]["game_won"] is True
    assert log["final_state"]["score"] == 995
    assert [step["action"] for step in log["steps"]][:2] == ["MOVE_FORWARD", "GRAB"]
    assert log["steps"][0]["goal"] == "EXPLORE_SAFELY"
    assert log["steps"][-1]["agent_pos"] == list(HOME_POS)


def test_main_rejects_malformed_world(tmp_path):
    path = tmp_path / "short.txt"
    path.write_text("----------\n" * 5)

    assert main(["--world", str(path)]) == 1


def test_main_rejects_missing_world(tmp_path):
    assert main(["--world", str(tmp_path / "nope.txt")]) == 1


def test_quiet_flag_does_not_outlive_the_run(gold_next_door, monkeypatch):
    monkeypatch.delenv("WUMPUS_QUIET", raising=False)

    assert main(["--world", str(gold_next_door), "--quiet"]) == 0
    assert "WUMPUS_QUIET" not in os.environ

    monkeypatch.setenv("WUMPUS_QUIET", "yes")
    assert main(["--world", str(gold_next_door), "--quiet"]) == 0
    assert os.environ["WUMPUS_QUIET"] == "yes"


def test_main_on_random_world(capsys):
    assert main(["--seed", "7", "--max-steps", "50"]) == 0
    assert "Final score:" in capsys.readouterr().out


def test_zero_step_budget_does_nothing(make_layout):
    engine = GameEngine(parse_world(make_layout(gold=(8, 0))))

    log = run_episode(engine, max_steps=0)

    assert log["steps"] == []
    assert log["final_state"]["steps_used"] == 0
    assert log["final_state"]["score"] == 0
    assert engine.get_action_history() == []


@pytest.mark.parametrize("seed", range(10))
def test_autoplay_on_random_worlds(seed):
    world = generate_world(random.Random(seed))
    engine = GameEngine(world, rng=random.Random(seed))

    log = run_episode(engine, max_steps=200)
    final = log["final_state"]

    assert len(log["steps"]) == final["steps_used"] <= 200
    assert all(step["action"] in ACTIONS for step in log["steps"])
    if not final["game_over"]:
        assert final["steps_used"] == 200
    if final["game_won"]:
        assert final["agent_alive"]
        assert final["agent_has_gold"]
        assert tuple(final["agent_pos"]) == HOME_POS
    if not final["agent_alive"]:
        assert final["game_over"] and not final["game_won"]
