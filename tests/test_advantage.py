from analysis.advantage import calculate_advantage, derive_move_stats, recommend_followups
from models.structures import (
    CalculationInput,
    CalculationMode,
    CalculationType,
    CancelTag,
    GapStatus,
    HitState,
    Move,
    MoveCategory,
    PrecomputedStats,
)


def make_move(**overrides):
    fields = dict(
        name="Test Move",
        input="5MP",
        damage="800",
        startup="5",
        active="3",
        recovery="15",
        on_block="-2",
        on_hit="4",
        category=MoveCategory.NORMAL,
    )
    fields.update(overrides)
    return Move(**fields)


def calc(move1, move2, type="block", mode="link", hit_state="normal", cancel_frame=1, **flags):
    return calculate_advantage(
        CalculationInput(
            move1=move1,
            move2=move2,
            type=CalculationType(type),
            mode=CalculationMode(mode),
            hit_state=HitState(hit_state),
            cancel_frame=cancel_frame,
            **flags,
        )
    )


def test_block_link_interruptible():
    result = calc(make_move(on_block="-2"), make_move(startup="5"))
    assert result.valid
    assert result.gap == 6
    assert result.status == GapStatus.INTERRUPTIBLE
    assert result.display_value == "6F"


def test_block_link_true_blockstring_and_frame_trap():
    assert calc(make_move(on_block="+3"), make_move(startup="4")).status == GapStatus.TRUE_BLOCKSTRING
    assert calc(make_move(on_block="+3"), make_move(startup="4")).gap == 0

    trap = calc(make_move(on_block="+1"), make_move(startup="4"))
    assert trap.gap == 2
    assert trap.status == GapStatus.FRAME_TRAP


def test_block_link_high_risk():
    result = calc(make_move(on_block="-10"), make_move(startup="5"))
    assert result.gap == 14
    assert result.status == GapStatus.HIGH_RISK


def test_block_cancel_uses_derived_blockstun():
    result = calc(
        make_move(active="4", recovery="20", on_block="-5"),
        make_move(startup="10"),
        mode="cancel",
        cancel_frame=2,
    )
    assert result.blockstun == 19
    assert result.gap == -8
    assert result.status == GapStatus.TRUE_BLOCKSTRING


def test_block_cancel_prefers_precomputed_blockstun():
    move1 = make_move(raw=PrecomputedStats(blockstun=9))
    result = calc(move1, make_move(startup="5"), mode="cancel")
    assert result.blockstun == 9
    assert result.gap == 1 + 4 - 9


def test_burnout_adds_to_block_advantage_only():
    assert calc(make_move(on_block="-2"), make_move(startup="5"), is_burnout=True).gap == 2
    assert calc(make_move(on_hit="6"), make_move(startup="5"), type="hit", is_burnout=True).gap == 1

    cancel = calc(
        make_move(active="4", recovery="20", on_block="-5"),
        make_move(startup="10"),
        mode="cancel",
        cancel_frame=2,
        is_burnout=True,
    )
    assert cancel.blockstun == 23


def test_hit_link_combo_and_failure():
    ok = calc(make_move(on_hit="+6"), make_move(startup="5"), type="hit")
    assert ok.gap == 1
    assert ok.status == GapStatus.COMBO
    assert ok.display_value == "+1F"

    fail = calc(make_move(on_hit="+4"), make_move(startup="5"), type="hit")
    assert fail.gap == -1
    assert fail.status == GapStatus.NO_COMBO
    assert fail.display_value == "1F"


def test_hit_state_modifiers():
    ch = calc(make_move(on_hit="3"), make_move(startup="5"), type="hit", hit_state="ch")
    pc = calc(make_move(on_hit="1"), make_move(startup="5"), type="hit", hit_state="pc")
    assert ch.gap == 0 and ch.status == GapStatus.COMBO
    assert pc.gap == 0 and pc.status == GapStatus.COMBO


def test_hit_state_ignored_in_block_mode():
    result = calc(make_move(on_block="-2"), make_move(startup="5"), hit_state="pc")
    assert result.gap == 6


def test_hit_cancel_surplus():
    result = calc(
        make_move(active="4", recovery="20", on_hit="5"),
        make_move(startup="15"),
        type="hit",
        mode="cancel",
    )
    assert result.hitstun == 29
    assert result.gap == 13
    assert result.status == GapStatus.COMBO


def test_hit_cancel_counter_hit_extends_hitstun():
    result = calc(
        make_move(active="4", recovery="20", on_hit="5"),
        make_move(startup="15"),
        type="hit",
        mode="cancel",
        hit_state="ch",
    )
    assert result.hitstun == 31
    assert result.gap == 15


def test_drive_rush_bonus():
    assert calc(make_move(on_hit="2"), make_move(startup="5"), type="hit", is_drive_rush=True).gap == 1
    assert calc(make_move(on_block="-2"), make_move(startup="5"), is_drive_rush=True).gap == 2


def test_missing_startup_is_invalid():
    result = calc(make_move(), make_move(startup="-"))
    assert not result.valid
    assert result.error == "no valid frame data"


def test_cancel_frame_below_one_is_clamped():
    move1 = make_move(active="4", recovery="20", on_block="-5")
    assert calc(move1, make_move(startup="10"), mode="cancel", cancel_frame=0) == calc(
        move1, make_move(startup="10"), mode="cancel", cancel_frame=1
    )


def test_identical_inputs_identical_results():
    move1 = make_move(on_block="-2")
    move2 = make_move(startup="5")
    first = calc(move1, move2)
    second = calc(move1, move2)
    assert first == second
    assert move1 == make_move(on_block="-2")


def test_derive_move_stats_uses_contact_recovery():
    move = make_move(active="3", recovery="14(16)", on_block="-2", on_hit="+1")
    assert derive_move_stats(move) == (15, 18)


def test_recommend_followups_hit_link_order():
    move1 = make_move(on_hit="+6")
    moves = [
        make_move(name="Slow", input="5HP", startup="8"),
        make_move(name="Mid", input="5MP", startup="6"),
        make_move(name="Jab", input="5LP", startup="4"),
        make_move(name="Short", input="5LK", startup="5"),
        make_move(name="Throw", input="LPLK", startup="5", category=MoveCategory.THROW),
    ]
    followups = recommend_followups(move1, moves, calc_type=CalculationType.HIT)
    assert [f.move.name for f in followups] == ["Jab", "Short", "Mid"]
    assert [f.result.gap for f in followups] == [2, 1, 0]


def test_recommend_followups_cancel_requires_route():
    move1 = make_move(cancels=(CancelTag.SPECIAL,), active="4", recovery="20", on_hit="5")
    moves = [
        make_move(name="Hadoken", input="236LP", startup="16", category=MoveCategory.SPECIAL),
        make_move(name="Shoryuken", input="623HP", startup="6", category=MoveCategory.SPECIAL),
        make_move(name="Jab", input="5LP", startup="4"),
    ]
    followups = recommend_followups(move1, moves, calc_type=CalculationType.HIT, mode=CalculationMode.CANCEL)
    assert [f.move.name for f in followups] == ["Shoryuken", "Hadoken"]
    assert followups[0].routes == (CancelTag.SPECIAL,)
