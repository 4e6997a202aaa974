from analysis.cancels import cancel_routes, is_cancel_eligible, super_level
from models.structures import CancelTag, Move, MoveCategory, PrecomputedStats


def make_move(name="Test Move", input="5MP", category=MoveCategory.NORMAL, cancels=(), move_type=None):
    raw = PrecomputedStats(move_type=move_type) if move_type else None
    return Move(name=name, input=input, startup="5", category=category, cancels=tuple(cancels), raw=raw)


def test_special_tag_allows_special_only():
    mp = make_move(cancels=[CancelTag.SPECIAL])
    hadoken = make_move("Hadoken", "236LP", MoveCategory.SPECIAL)
    jab = make_move("Stand LP", "5LP")

    assert is_cancel_eligible(mp, hadoken)
    assert not is_cancel_eligible(mp, jab)


def test_level_specific_super_tags():
    sa1 = make_move("Shinku Hadoken", "236236P", MoveCategory.SUPER, move_type="SA1")
    sa2 = make_move("Shin Hashogeki", "214214P", MoveCategory.SUPER, move_type="SA2")
    move1 = make_move(cancels=[CancelTag.SA2])

    assert super_level(sa1) == 1
    assert super_level(sa2) == 2
    assert is_cancel_eligible(move1, sa2)
    assert not is_cancel_eligible(move1, sa1)


def test_critical_art_counts_as_level_three():
    ca = make_move("Shin Shoryuken (CA)", "236236K", MoveCategory.SUPER, move_type="CA")
    assert super_level(ca) == 3
    assert is_cancel_eligible(make_move(cancels=[CancelTag.CA]), ca)
    assert is_cancel_eligible(make_move(cancels=[CancelTag.SA3]), ca)


def test_level_from_name_when_metadata_missing():
    sa3 = make_move("SA3 Shin Shoryuken", "236236K", MoveCategory.SUPER)
    assert super_level(sa3) == 3
    assert super_level(make_move("Stand MP")) is None


def test_chain_targets_light_normals():
    jab = make_move(cancels=[CancelTag.CHAIN], input="5LP")
    assert is_cancel_eligible(jab, make_move("Crouch LK", "2LK"))
    assert not is_cancel_eligible(jab, make_move("Stand MP", "5MP"))


def test_target_combo_and_drive_rush():
    hp = make_move(cancels=[CancelTag.TARGET_COMBO, CancelTag.DRIVE_RUSH])
    jinrai = make_move("Jinrai Kick", "5HP>HK", MoveCategory.UNIQUE)
    drc = make_move("Drive Rush", "MPMK~66", MoveCategory.UNIQUE)

    assert cancel_routes(hp, jinrai) == [CancelTag.TARGET_COMBO]
    assert CancelTag.DRIVE_RUSH in cancel_routes(hp, drc)


def test_no_tags_means_not_eligible():
    assert not is_cancel_eligible(make_move(), make_move("Hadoken", "236LP", MoveCategory.SPECIAL))


def test_unknown_tags_are_dropped_on_load():
    move = Move.from_dict({"name": "Stand MP", "input": "5MP", "cancels": ["Bogus", "Special", "special"]})
    assert move.cancels == (CancelTag.SPECIAL,)
