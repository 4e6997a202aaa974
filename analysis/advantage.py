"""
Cálculo de gap (bloqueio) e surplus (combo) entre dois golpes.

Modos:
- block/link:   gap = startup2 - vantagem1 - 1
- block/cancel: gap = cancel_frame + (startup2 - 1) - blockstun1
- hit/link:     surplus = vantagem1 - startup2
- hit/cancel:   surplus = hitstun1 - (cancel_frame + startup2)

Modificadores situacionais entram na vantagem (ou no stun, nos modos cancel):
Counter Hit +2 / Punish Counter +4 só em hit, Burnout +4 só em block,
Drive Rush +4 nos dois tipos.
"""

from typing import List, Tuple

from config import get_default_config
from models.structures import (
    CalculationInput,
    CalculationMode,
    CalculationResult,
    CalculationType,
    FollowUp,
    GapStatus,
    HitState,
    MoveCategory,
)
from analysis.cancels import cancel_routes
from analysis.frame_notation import (
    has_frame_data,
    parse_active_total,
    parse_recovery_total,
    parse_scalar,
    parse_startup,
)


NO_FRAME_DATA = "no valid frame data"

_DESCRIPTIONS = {
    GapStatus.TRUE_BLOCKSTRING: "O oponente não consegue agir entre os dois golpes.",
    GapStatus.FRAME_TRAP: "O normal mais rápido (4F) do oponente não entra; só um reversal invencível escapa.",
    GapStatus.INTERRUPTIBLE: "O oponente pode interromper com normais rápidos ou trocar golpes.",
    GapStatus.HIGH_RISK: "Gap grande demais; fácil de punir com reversal ou golpe de alto dano.",
    GapStatus.COMBO: "O combo conecta.",
}


def derive_move_stats(move) -> Tuple[int, int]:
    """
    Blockstun e hitstun causados pelo golpe.

    Usa os valores pré-calculados em `move.raw` quando presentes; senão
    deriva `active + recovery(contato) + vantagem`.
    """

    active = parse_active_total(move.active)
    recovery = parse_recovery_total(move.recovery, on_contact=True)
    raw = move.raw

    if raw is not None and has_frame_data(raw.blockstun):
        blockstun = parse_scalar(raw.blockstun)
    else:
        blockstun = active + recovery + parse_scalar(move.on_block)

    if raw is not None and has_frame_data(raw.hitstun):
        hitstun = parse_scalar(raw.hitstun)
    else:
        hitstun = active + recovery + parse_scalar(move.on_hit)

    return blockstun, hitstun


def _hit_state_bonus(hit_state, config) -> int:
    if hit_state == HitState.COUNTER_HIT:
        return config.counter_hit_bonus
    if hit_state == HitState.PUNISH_COUNTER:
        return config.punish_counter_bonus
    return 0


def classify_gap(gap, config=None) -> GapStatus:
    if config is None:
        config = get_default_config()

    if gap <= 0:
        return GapStatus.TRUE_BLOCKSTRING
    if gap <= config.frame_trap_max_gap:
        return GapStatus.FRAME_TRAP
    if gap <= config.interruptible_max_gap:
        return GapStatus.INTERRUPTIBLE
    return GapStatus.HIGH_RISK


def calculate_advantage(calc: CalculationInput, config=None) -> CalculationResult:
    """
    Calcula o gap (block) ou surplus (hit) para o par `move1 -> move2`.

    Devolve `CalculationResult(valid=False, error=...)` quando o startup do
    golpe 2 não tem frame data. Nunca altera os objetos recebidos.
    """

    if config is None:
        config = get_default_config()

    move1 = calc.move1
    startup2 = parse_startup(calc.move2.startup)
    if startup2 is None:
        return CalculationResult(valid=False, error=NO_FRAME_DATA)

    cancel_frame = max(1, int(calc.cancel_frame or 1))

    if calc.type == CalculationType.BLOCK:
        adv1 = parse_scalar(move1.on_block)
        bonus = config.burnout_bonus if calc.is_burnout else 0
    else:
        adv1 = parse_scalar(move1.on_hit)
        bonus = _hit_state_bonus(calc.hit_state, config)

    if calc.is_drive_rush:
        bonus += config.drive_rush_bonus
    adv1 += bonus

    blockstun = None
    hitstun = None

    # === COMBO (HIT) ===
    if calc.type == CalculationType.HIT:
        if calc.mode == CalculationMode.CANCEL:
            hitstun = derive_move_stats(move1)[1] + bonus
            gap = hitstun - (cancel_frame + startup2)
            formula_desc = f"{hitstun} (Hitstun) - ({cancel_frame} (CancelFrame) + {startup2} (Startup))"
        else:
            gap = adv1 - startup2
            formula_desc = f"{adv1} (Adv) - {startup2} (Startup)"

        if gap >= 0:
            status = GapStatus.COMBO
            description = _DESCRIPTIONS[status]
            display_label = "Surplus"
            display_value = f"+{gap}F"
        else:
            status = GapStatus.NO_COMBO
            description = f"Faltam {abs(gap)} frames."
            display_label = "Missing"
            display_value = f"{abs(gap)}F"

    # === GAP (BLOCK) ===
    else:
        if calc.mode == CalculationMode.CANCEL:
            blockstun = derive_move_stats(move1)[0] + bonus
            gap = cancel_frame + (startup2 - 1) - blockstun
            formula_desc = (
                f"{cancel_frame} (CancelFrame) + {startup2 - 1} (Startup-1) - {blockstun} (Blockstun)"
            )
        else:
            gap = startup2 - adv1 - 1
            formula_desc = f"{startup2} (Startup) - {adv1} (Adv) - 1"

        status = classify_gap(gap, config)
        description = _DESCRIPTIONS[status]
        display_label = "Gap"
        display_value = f"{gap}F"

    return CalculationResult(
        valid=True,
        gap=gap,
        display_label=display_label,
        display_value=display_value,
        status=status,
        description=description,
        formula_desc=formula_desc,
        adv1=adv1,
        startup2=startup2,
        blockstun=blockstun,
        hitstun=hitstun,
    )


_VIABLE = (GapStatus.COMBO, GapStatus.TRUE_BLOCKSTRING, GapStatus.FRAME_TRAP)


def recommend_followups(
    move1,
    moves,
    calc_type=CalculationType.BLOCK,
    mode=CalculationMode.LINK,
    hit_state=HitState.NORMAL,
    cancel_frame=1,
    is_burnout=False,
    is_drive_rush=False,
    only_viable=True,
    config=None,
) -> List[FollowUp]:
    """
    Avalia cada golpe de `moves` como continuação de `move1`.

    - no modo cancel só entram golpes elegíveis pelas rotas de cancel do move1
    - em hit, throws são ignorados (não conectam em hitstun)
    - `only_viable`: mantém apenas combos que conectam, blockstrings e frame traps

    Ordenação estável: block por gap crescente, hit por surplus decrescente;
    empates por startup crescente, depois nome e input.
    """

    if config is None:
        config = get_default_config()

    candidates = []
    for move2 in moves:
        if calc_type == CalculationType.HIT and move2.category == MoveCategory.THROW:
            continue

        routes = ()
        if mode == CalculationMode.CANCEL:
            routes = tuple(cancel_routes(move1, move2))
            if not routes:
                continue

        result = calculate_advantage(
            CalculationInput(
                move1=move1,
                move2=move2,
                type=calc_type,
                mode=mode,
                hit_state=hit_state,
                cancel_frame=cancel_frame,
                is_burnout=is_burnout,
                is_drive_rush=is_drive_rush,
            ),
            config,
        )
        if not result.valid:
            continue
        if only_viable and result.status not in _VIABLE:
            continue
        candidates.append(FollowUp(move=move2, result=result, routes=routes))

    if calc_type == CalculationType.HIT:
        candidates.sort(key=lambda f: (-f.result.gap, f.result.startup2, f.move.name, f.move.input))
    else:
        candidates.sort(key=lambda f: (f.result.gap, f.result.startup2, f.move.name, f.move.input))

    return candidates[: config.max_results]
