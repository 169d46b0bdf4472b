from tilematch.components.goal import Goal, GoalTracker, GoalType
from tilematch.components.piece import ObstacleType, Piece, PieceType
from tilematch.utils.goals import goals_complete, record_collected, record_obstacle_layers, record_score


def _pieces(*types):
    return [Piece(piece_id=i + 1, piece_type=t, row=0, col=i) for i, t in enumerate(types)]


def test_collect_goal_counts_matching_colour_and_clamps():
    goal = Goal(GoalType.COLLECT, "red", 4)
    other = Goal(GoalType.COLLECT, "blue", 10)
    tracker = GoalTracker([goal, other])
    changed = record_collected(tracker, _pieces(PieceType.RED, PieceType.RED, PieceType.RED))
    assert changed == [goal]
    assert goal.current == 3
    record_collected(tracker, _pieces(PieceType.RED, PieceType.RED, PieceType.RED))
    assert goal.current == 4
    assert record_collected(tracker, _pieces(PieceType.RED)) == []
    assert goal.current == 4
    assert other.current == 0


def test_score_goal_tracks_min_of_score_and_required():
    goal = Goal(GoalType.SCORE, "score", 1000)
    tracker = GoalTracker([goal])
    assert record_score(tracker, 270) == [goal]
    assert goal.current == 270
    record_score(tracker, 5000)
    assert goal.current == 1000
    assert record_score(tracker, 6000) == []


def test_destroy_goal_counts_layers_of_same_family():
    box = Goal(GoalType.DESTROY_OBSTACLE, "box_1", 15)
    ice = Goal(GoalType.DESTROY_OBSTACLE, "ice_1", 5)
    tracker = GoalTracker([box, ice])
    record_obstacle_layers(tracker, ObstacleType.BOX_3)
    record_obstacle_layers(tracker, ObstacleType.BOX_1)
    assert box.current == 2
    assert ice.current == 0
    record_obstacle_layers(tracker, ObstacleType.ICE_2)
    assert ice.current == 1


def test_goal_progress_never_decreases():
    goal = Goal(GoalType.COLLECT, "red", 5, current=3)
    assert not goal.advance(0)
    assert not goal.advance(-2)
    assert goal.current == 3


def test_goals_complete():
    assert goals_complete(GoalTracker([]))
    tracker = GoalTracker([Goal(GoalType.SCORE, "score", 10, current=10), Goal(GoalType.COLLECT, "red", 2)])
    assert not goals_complete(tracker)
    tracker.goals[1].current = 2
    assert goals_complete(tracker)
