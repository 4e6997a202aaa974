"""
Constantes e configuração padrão das calculadoras de frame data.

Os valores refletem as regras do SF6:
- Counter Hit adiciona 2 frames de hitstun, Punish Counter adiciona 4.
- Burnout (defensor sem Drive) sofre +4 frames de blockstun.
- Golpes feitos a partir de Drive Rush ganham +4 de vantagem.
"""

from dataclasses import dataclass


COUNTER_HIT_BONUS = 2
PUNISH_COUNTER_BONUS = 4
BURNOUT_BONUS = 4
DRIVE_RUSH_BONUS = 4

# Em trade os dois lados entram em hitstun de counter hit
TRADE_COUNTER_HIT_BONUS = 2

# Limites de classificação de gap (bloqueio)
FRAME_TRAP_MAX_GAP = 3  # 1..3 -> frame trap
INTERRUPTIBLE_MAX_GAP = 9  # 4..9 -> interruptível

# Frames de invencibilidade a throw ao levantar
WAKEUP_THROW_INVUL = 1

# Quantidade máxima de resultados devolvidos pelas enumerações
MAX_RESULTS = 50


@dataclass
class CalculatorConfig:
    counter_hit_bonus: int = COUNTER_HIT_BONUS
    punish_counter_bonus: int = PUNISH_COUNTER_BONUS
    burnout_bonus: int = BURNOUT_BONUS
    drive_rush_bonus: int = DRIVE_RUSH_BONUS
    trade_counter_hit_bonus: int = TRADE_COUNTER_HIT_BONUS
    frame_trap_max_gap: int = FRAME_TRAP_MAX_GAP
    interruptible_max_gap: int = INTERRUPTIBLE_MAX_GAP
    max_results: int = MAX_RESULTS
    wakeup_throw_invul: int = WAKEUP_THROW_INVUL


def get_default_config():
    return CalculatorConfig()
