from tilematch.components.match import Match, MatchShape
from tilematch.components.piece import ObstacleType, Piece, PieceType, SpecialPieceType
from tilematch.config import ScoreConfig
from tilematch.utils.scoring import compute_stars, obstacle_bonus, score_for_match, score_for_matches


def _match(length, special=SpecialPieceType.NONE):
    pieces = [Piece(piece_id=i + 1, piece_type=PieceType.RED, row=0, col=i) for i in range(length)]
    return Match(pieces=pieces, shape=MatchShape.HORIZONTAL, special_generated=special)


def test_score_for_match_applies_chain_multiplier():
    config = ScoreConfig()
    assert score_for_match(_match(3), 0, config) == 180
    assert score_for_match(_match(3), 1, config) == 270
    assert score_for_match(_match(3), 2, config) == 405
    assert score_for_match(_match(3), 3, config) == 607


def test_special_bonus_is_added_before_multiplier():
    config = ScoreConfig()
    assert score_for_match(_match(4, SpecialPieceType.LINE_CLEAR_V), 1, config) == 480
    assert score_for_match(_match(5, SpecialPieceType.COLOR_CLEAR), 1, config) == 750
    assert score_for_match(_match(5, SpecialPieceType.SCATTER), 1, config) == 630


def test_pass_score_sums_matches():
    config = ScoreConfig()
    assert score_for_matches([_match(3), _match(4, SpecialPieceType.LINE_CLEAR_H)], 1, config) == 750


def test_custom_score_config():
    config = ScoreConfig(match_base=10, chain_multiplier=2.0)
    assert score_for_match(_match(3), 2, config) == 120


def test_obstacle_bonus_by_type():
    config = ScoreConfig()
    assert obstacle_bonus(ObstacleType.ICE_2, config) == 40
    assert obstacle_bonus(ObstacleType.BOX_3, config) == 150
    assert obstacle_bonus(ObstacleType.NONE, config) == 0


def test_compute_stars_thresholds():
    assert compute_stars(10, 20) == 3
    assert compute_stars(9, 20) == 2
    assert compute_stars(5, 20) == 2
    assert compute_stars(4, 20) == 1
    assert compute_stars(0, 20) == 1
    assert compute_stars(0, 0) == 1
