import json

import pytest

from tilematch.components.goal import GoalType
from tilematch.components.piece import CollectibleType, ObstacleType, PieceType
from tilematch.config import GoalSpec, LevelConfig, LevelConfigError, ObstaclePlacement, load_level_config
from tilematch.factories.levels import all_levels, get_level, load_levels

LEVEL_JSON = {
    "id": 7,
    "rows": 4,
    "cols": 5,
    "moves": 12,
    "palette": ["red", "blue", "green"],
    "goals": [
        {"type": "destroy_obstacle", "target": "ice_1", "count": 2},
        {"type": "score", "count": 500},
    ],
    "layout": ["xxxxx", "xxxxx", "x...x", "xxxxx"],
    "obstacles": [{"row": 1, "col": 1, "type": "ice_2"}],
    "collectibles": [{"row": 0, "col": 4, "type": "acorn"}],
}


def test_builtin_levels():
    levels = all_levels()
    assert [level.level_id for level in levels] == [1, 2, 3, 4, 5]
    assert get_level(1).goals == (GoalSpec(GoalType.SCORE, "score", 1000),)
    assert get_level(42) is None


def test_level_three_has_twenty_ice():
    level = get_level(3)
    assert len(level.obstacles) == 20
    assert {p.obstacle for p in level.obstacles} == {ObstacleType.ICE_1}


def test_level_five_box_layers_match_goal():
    level = get_level(5)
    layers = sum(p.obstacle.layers for p in level.obstacles if p.obstacle.family == "box")
    goal = [g for g in level.goals if g.goal_type is GoalType.DESTROY_OBSTACLE][0]
    assert layers == goal.required == 15


def test_level_four_default_spawners_are_column_tops():
    level = get_level(4)
    spawners = level.spawner_positions()
    assert len(spawners) == 9
    assert (0, 4) in spawners
    assert (2, 0) in spawners
    assert (1, 1) in spawners
    assert not level.is_playable(0, 0)


def test_from_dict_parses_all_sections():
    level = LevelConfig.from_dict(LEVEL_JSON)
    assert level.level_id == 7
    assert level.palette == (PieceType.RED, PieceType.BLUE, PieceType.GREEN)
    assert level.goals[0] == GoalSpec(GoalType.DESTROY_OBSTACLE, "ice_1", 2)
    assert level.goals[1] == GoalSpec(GoalType.SCORE, "score", 500)
    assert level.obstacles == (ObstaclePlacement(1, 1, ObstacleType.ICE_2),)
    assert level.collectibles[0].collectible is CollectibleType.ACORN
    assert not level.is_playable(2, 2)
    assert level.spawner_positions() == frozenset((0, c) for c in range(5))


@pytest.mark.parametrize("patch", [
    {"rows": 0},
    {"moves": -1},
    {"palette": []},
    {"palette": ["red", "empty"]},
    {"palette": ["red", "mauve"]},
    {"layout": ["xxxxx", "xxxxx", "xxxxx"]},
    {"layout": ["xxxxx", "xxxxx", "x.o.x", "xxxxx"]},
    {"goals": [{"type": "collect", "target": "mauve", "count": 3}]},
    {"goals": [{"type": "score", "count": 0}]},
    {"goals": [{"type": "teleport", "count": 3}]},
    {"obstacles": [{"row": 2, "col": 2, "type": "ice_1"}]},
    {"spawners": [[9, 9]]},
])
def test_invalid_level_definitions_raise(patch):
    data = dict(LEVEL_JSON, **patch)
    with pytest.raises(LevelConfigError):
        LevelConfig.from_dict(data)


def test_missing_key_raises_level_error():
    data = dict(LEVEL_JSON)
    del data["moves"]
    with pytest.raises(LevelConfigError):
        LevelConfig.from_dict(data)


def test_load_level_config_from_file(tmp_path):
    path = tmp_path / "level7.json"
    path.write_text(json.dumps(LEVEL_JSON), encoding="utf-8")
    assert load_level_config(path).level_id == 7
    with pytest.raises(LevelConfigError):
        load_level_config(tmp_path / "missing.json")
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(LevelConfigError):
        load_level_config(broken)


def test_load_levels_orders_by_id(tmp_path):
    for name, level_id in (("a.json", 9), ("b.json", 3)):
        (tmp_path / name).write_text(json.dumps(dict(LEVEL_JSON, id=level_id)), encoding="utf-8")
    assert [level.level_id for level in load_levels(tmp_path)] == [3, 9]
