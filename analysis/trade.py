"""
Cálculo de trade (os dois golpes acertam no mesmo frame).

Em um trade os dois jogadores entram em hitstun de Counter Hit
(hitstun base + 2). A vantagem do lado A é a diferença entre o hitstun que
A causa e o hitstun que B causa: positivo significa que A se recupera antes.
"""

import re
from typing import Tuple

from config import get_default_config
from models.structures import TradeResult


_FIRST_INT = re.compile(r"\d+")


def parse_hitstun(value) -> int:
    """Primeiro inteiro de `value` ("31*23" -> 31, "27(22)" -> 27); 0 se ausente."""

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    match = _FIRST_INT.search(str(value))
    return int(match.group()) if match else 0


def _stun_fields(move):
    # aceita Move (lê `raw`), PrecomputedStats ou dicionário do JSON
    if isinstance(move, dict):
        return move.get("hitstun"), move.get("blockstun")
    raw = getattr(move, "raw", move)
    if raw is None:
        return None, None
    return getattr(raw, "hitstun", None), getattr(raw, "blockstun", None)


def effective_hitstun(move, config=None) -> Tuple[int, str]:
    """
    Hitstun de counter hit causado por `move` e a origem do valor.

    Usa hitstun + 2; sem hitstun (comum em knockdowns/projéteis) usa
    blockstun + 2; sem nenhum dos dois devolve 2.
    """

    if config is None:
        config = get_default_config()
    bonus = config.trade_counter_hit_bonus

    hitstun_value, blockstun_value = _stun_fields(move)
    stun = parse_hitstun(hitstun_value)
    if stun > 0:
        return stun + bonus, "normal"

    blockstun = parse_hitstun(blockstun_value)
    if blockstun > 0:
        return blockstun + bonus, "blockstun"

    return stun + bonus, "normal"


def analyze_trade(move_a, move_b, config=None) -> TradeResult:
    hitstun_a, source_a = effective_hitstun(move_a, config)
    hitstun_b, source_b = effective_hitstun(move_b, config)
    return TradeResult(
        advantage=hitstun_a - hitstun_b,
        hitstun_a=hitstun_a,
        hitstun_b=hitstun_b,
        source_a=source_a,
        source_b=source_b,
    )


def calculate_trade_advantage(move_a, move_b, config=None) -> int:
    return analyze_trade(move_a, move_b, config).advantage


trade_advantage = calculate_trade_advantage
