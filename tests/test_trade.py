from analysis.trade import (
    analyze_trade,
    calculate_trade_advantage,
    effective_hitstun,
    parse_hitstun,
    trade_advantage,
)
from models.structures import Move, PrecomputedStats


def make_move(hitstun=None, blockstun=None):
    raw = PrecomputedStats(hitstun=hitstun, blockstun=blockstun)
    return Move(name="Test Move", input="5MP", raw=raw)


def test_parse_hitstun():
    assert parse_hitstun(15) == 15
    assert parse_hitstun("15*17") == 15
    assert parse_hitstun("27(22)") == 27
    assert parse_hitstun("KD") == 0
    assert parse_hitstun(None) == 0


def test_trade_advantage_counter_hit_on_both_sides():
    assert calculate_trade_advantage(make_move(hitstun=15), make_move(hitstun=17)) == -2
    assert trade_advantage(make_move(hitstun=17), make_move(hitstun=15)) == 2


def test_trade_with_notation_strings():
    assert calculate_trade_advantage(make_move(hitstun="31*23"), make_move(hitstun="27(22)")) == 4


def test_effective_hitstun_falls_back_to_blockstun():
    assert effective_hitstun(make_move(blockstun=19)) == (21, "blockstun")
    assert effective_hitstun(make_move()) == (2, "normal")
    assert effective_hitstun(Move(name="No Raw")) == (2, "normal")


def test_accepts_plain_records():
    assert calculate_trade_advantage({"hitstun": 15}, {"blockstun": 19}) == -4


def test_analyze_trade_names_advantaged_side():
    result = analyze_trade(make_move(hitstun=15), make_move(hitstun=17))
    assert result.advantage == -2
    assert result.advantaged == "B"
    assert analyze_trade(make_move(hitstun=15), make_move(hitstun=15)).advantaged is None
