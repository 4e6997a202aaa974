from models.structures import (
    ActionKind,
    ChainAction,
    CancelTag,
    CharacterStats,
    KnockdownType,
    Move,
    MoveCategory,
    moves_from_records,
)


def test_move_from_json_record():
    move = Move.from_dict({
        "name": "Crouch HK",
        "input": "2HK",
        "startup": "8",
        "active": "3",
        "recovery": "24",
        "onBlock": "-11",
        "onHit": "KD +38",
        "category": "normal",
        "cancels": ["Special"],
        "knockdown": {"type": "hard", "advantage": 38, "backRiseAdvantage": 33},
        "raw": {"blockstun": 19, "moveType": "normal"},
    })

    assert move.on_block == "-11"
    assert move.on_hit == "KD +38"
    assert move.cancels == (CancelTag.SPECIAL,)
    assert move.knockdown.type == KnockdownType.HARD
    assert move.knockdown.advantage == 38
    assert move.knockdown.back_rise_advantage == 33
    assert move.raw.blockstun == 19
    assert move.raw.move_type == "normal"


def test_missing_fields_default_to_sentinel():
    move = Move.from_dict({"name": "Drive Parry"})
    assert move.startup == "-"
    assert move.category == MoveCategory.NORMAL
    assert move.raw is None
    assert move.knockdown is None


def test_unknown_category_maps_to_normal():
    assert MoveCategory.parse("taunt") == MoveCategory.NORMAL
    assert MoveCategory.parse("Special") == MoveCategory.SPECIAL


def test_character_stats_from_dict():
    stats = CharacterStats.from_dict({"health": 10000, "forwardDash": 19, "backDash": 23})
    assert stats.forward_dash == 19
    assert stats.back_dash == 23
    assert stats.forward_walk is None


def test_moves_from_records():
    moves = moves_from_records([{"name": "Stand LP"}, {"name": "Stand MP"}])
    assert [m.name for m in moves] == ["Stand LP", "Stand MP"]
    assert moves_from_records(None) == []


def test_chain_action_from_custom_move():
    action = ChainAction.from_custom_move({"name": "6HK214HKair", "input": "41~46", "frames": 42})
    assert action.kind == ActionKind.CUSTOM
    assert action.frames == 42
    assert action.name == "6HK214HKair"
    assert action.input == "41~46"
    assert action.startup is None
