"""
Janelas de oki: acertar o oponente caído no instante em que ele fica vulnerável.

Notação (N = vantagem do knockdown, R = startup do reversal mais rápido do oponente):
- primeiro frame atingível do oponente: N + 1
- primeiro frame do reversal que causa dano: N + R
- janela atingível: [N+1, N+R-1], vazia quando R <= 1

Timeline do atacante: soma o custo total de todas as ações menos a última;
da última soma só o startup e registra o tamanho da janela ativa `a`.
    our_start = custo anterior + startup final
    our_end   = our_start + a - 1

Loop throw: o throw precisa acertar depois da invencibilidade a throw do
wakeup (I) e antes do reversal ficar ativo.
"""

from typing import List, Optional, Sequence, Tuple

from config import get_default_config
from models.structures import (
    ActionKind,
    ChainAction,
    KnockdownType,
    LoopThrowMatch,
    LoopThrowWindow,
    MoveCategory,
    OkiMatch,
    OkiOutcome,
    OkiTimeline,
)
from analysis.frame_notation import move_total_frames, parse_active_total, parse_startup
from analysis.result_keys import build_result_key, unique_result_key


def opponent_window(knockdown_advantage, reversal_startup) -> Tuple[int, int]:
    """Janela [N+1, N+R-1]; vazia (fim < início) quando R <= 1."""

    return knockdown_advantage + 1, knockdown_advantage + reversal_startup - 1


def knockdown_advantage_of(move, back_rise=False) -> Optional[int]:
    kd = move.knockdown
    if kd is None or kd.type == KnockdownType.NONE:
        return None
    if back_rise and kd.back_rise_advantage is not None:
        return int(kd.back_rise_advantage)
    return kd.advantage


def action_cost(action: ChainAction) -> int:
    if action.kind == ActionKind.MOVE and action.move is not None:
        return move_total_frames(action.move)
    return max(0, int(action.frames))


def _final_strike(action: ChainAction) -> Tuple[int, int]:
    """(startup, frames ativos) da última ação da sequência."""

    if action.kind == ActionKind.MOVE and action.move is not None:
        startup = parse_startup(action.move.startup)
        if startup is None:
            return 0, 0
        return startup, max(1, parse_active_total(action.move.active))

    if action.kind == ActionKind.CUSTOM and action.startup is not None:
        active = action.active if action.active is not None else 1
        return int(action.startup), max(0, int(active))

    # dash ou ação custom sem startup: não acerta nada
    return max(0, int(action.frames)), 0


def classify_oki(our_start, our_end, knockdown_advantage, reversal_startup) -> OkiOutcome:
    window_start, window_end = opponent_window(knockdown_advantage, reversal_startup)

    if (
        our_end >= our_start
        and window_start <= window_end
        and our_start <= window_end
        and our_end >= window_start
    ):
        return OkiOutcome.PRESSURE_SUCCESS
    if our_end < our_start:
        # sem frames ativos: não acerta nem troca
        return OkiOutcome.TOO_LATE if our_start > window_end else OkiOutcome.TOO_EARLY
    if our_start == knockdown_advantage + reversal_startup:
        return OkiOutcome.TRADE
    if our_end < window_start:
        return OkiOutcome.TOO_EARLY
    return OkiOutcome.TOO_LATE


def compute_oki_timeline(
    chain: Sequence[ChainAction],
    knockdown_advantage: int,
    reversal_startup: int,
    delay: int = 0,
) -> OkiTimeline:
    """
    Calcula a janela ativa do golpe final da sequência `chain` e a classifica.

    `delay` são frames de espera antes do golpe final (somados ao custo anterior).
    Uma sequência vazia é classificada como `too_early`.
    """

    window_start, window_end = opponent_window(knockdown_advantage, reversal_startup)
    actions = list(chain)
    if not actions:
        return OkiTimeline(0, -1, OkiOutcome.TOO_EARLY, window_start, window_end, 0)

    prior = sum(action_cost(a) for a in actions[:-1]) + max(0, delay)
    startup, active = _final_strike(actions[-1])
    our_start = prior + startup
    our_end = our_start + active - 1

    return OkiTimeline(
        our_start=our_start,
        our_end=our_end,
        classification=classify_oki(our_start, our_end, knockdown_advantage, reversal_startup),
        window_start=window_start,
        window_end=window_end,
        prior_frames=prior,
    )


def _prefixes(stats, prefix_chain, custom_actions=None):
    # ordem fixa: nada / dash / dash x2 / custom / dash + custom / sequência fornecida
    prefixes = [("", ())]
    dash = None
    if stats is not None and stats.forward_dash > 0:
        dash = ChainAction.dash(stats)
        prefixes.append(("Dash", (dash,)))
        prefixes.append(("Dash x2", (dash, dash)))
    for custom in custom_actions or ():
        prefixes.append((custom.name, (custom,)))
    if dash is not None:
        for custom in custom_actions or ():
            prefixes.append((f"Dash + {custom.name}", (dash, custom)))
    if prefix_chain:
        actions = tuple(prefix_chain)
        prefixes.append((" + ".join(a.name for a in actions), actions))
    return prefixes


def _prefix_input(actions) -> Optional[str]:
    inputs = [a.input for a in actions if a.input]
    return " > ".join(inputs) if inputs else None


def enumerate_oki_matches(
    moves,
    stats,
    knockdown_advantage: int,
    reversal_startup: int,
    prefix_chain: Optional[Sequence[ChainAction]] = None,
    allow_delay: bool = True,
    custom_actions: Optional[Sequence[ChainAction]] = None,
    config=None,
) -> List[OkiMatch]:
    """
    Lista combinações (prefixo + golpe) que acertam a janela do oponente.

    Prefixos: nenhum, dash, dash x2, cada ação de `custom_actions` (sozinha e
    depois de um dash) e `prefix_chain` (se fornecida). Com
    `allow_delay`, um golpe que chegaria cedo demais pode esperar o mínimo de
    frames necessário (o `delay`). Ordenado por delay, custo do prefixo,
    startup e nome; limitado a `config.max_results`.
    """

    if config is None:
        config = get_default_config()

    window_start, window_end = opponent_window(knockdown_advantage, reversal_startup)
    if window_start > window_end:
        return []

    strikes = [
        m for m in moves
        if m.category != MoveCategory.THROW and parse_startup(m.startup) is not None
    ]

    found = []
    for order, (prefix_name, actions) in enumerate(_prefixes(stats, prefix_chain, custom_actions)):
        prefix_frames = sum(action_cost(a) for a in actions)
        for move in strikes:
            chain = actions + (ChainAction.of_move(move),)
            timeline = compute_oki_timeline(chain, knockdown_advantage, reversal_startup)

            delay = 0
            if allow_delay and timeline.classification == OkiOutcome.TOO_EARLY:
                delay = window_start - timeline.our_end
                timeline = compute_oki_timeline(chain, knockdown_advantage, reversal_startup, delay=delay)

            if timeline.classification != OkiOutcome.PRESSURE_SUCCESS:
                continue

            active_frame_hit = max(1, window_start - timeline.our_start + 1)
            sort_key = (delay, prefix_frames, order, parse_startup(move.startup), move.name, move.input)
            found.append((sort_key, prefix_name, prefix_frames, _prefix_input(actions), move, delay, timeline, active_frame_hit))

    found.sort(key=lambda item: item[0])

    key_counts = {}
    matches = []
    for _, prefix_name, prefix_frames, prefix_input, move, delay, timeline, active_frame_hit in found[: config.max_results]:
        base = build_result_key(
            prefix_name, prefix_frames, move.name, move.input,
            timeline.our_start, timeline.our_end, prefix_input,
        )
        matches.append(
            OkiMatch(
                prefix_name=prefix_name,
                prefix_frames=prefix_frames,
                move=move,
                delay=delay,
                our_start=timeline.our_start,
                our_end=timeline.our_end,
                active_frame_hit=active_frame_hit,
                is_meaty=active_frame_hit > 1 and not move.no_meaty,
                key=unique_result_key(base, key_counts),
                prefix_input=prefix_input,
            )
        )
    return matches


def loop_throw_window(
    knockdown_advantage: int,
    invul: int,
    throw_startup: int,
    throw_active: int,
    reversal_startup: int,
) -> LoopThrowWindow:
    """
    - earliest  = N + I + 1
    - latest    = max(N + R - 1, earliest)
    - max_delay = latest - T
    - min_delay = max_delay - (A - 1)
    """

    earliest = knockdown_advantage + invul + 1
    latest = max(knockdown_advantage + reversal_startup - 1, earliest)
    max_delay = latest - throw_startup
    min_delay = max_delay - (throw_active - 1)
    return LoopThrowWindow(
        earliest=earliest,
        latest=latest,
        max_delay=max_delay,
        min_delay=min_delay,
        min_delay_display=max(0, min_delay),
    )


def _filler_candidates(moves):
    fillers = [
        m for m in moves
        if m.category in (MoveCategory.NORMAL, MoveCategory.UNIQUE) and move_total_frames(m) > 0
    ]
    fillers.sort(key=lambda m: (parse_startup(m.startup) or 0, m.name, m.input))
    return fillers


def enumerate_loop_throws(
    moves,
    stats,
    knockdown_advantage: int,
    invul: int,
    throw_startup: int,
    throw_active: int,
    reversal_startup: int,
    prefix_chain: Optional[Sequence[ChainAction]] = None,
    config=None,
    custom_actions: Optional[Sequence[ChainAction]] = None,
) -> List[LoopThrowMatch]:
    """
    Lista preparações cujo custo acumulado cai em [min_delay, max_delay].

    Cada prefixo (nenhum, dash, dash x2, `custom_actions`, `prefix_chain`) é testado sozinho e
    seguido de um golpe de "enchimento" (normal/unique no ar, custo total).
    Ordenado por delay; limitado a `config.max_results`.
    """

    if config is None:
        config = get_default_config()

    window = loop_throw_window(knockdown_advantage, invul, throw_startup, throw_active, reversal_startup)
    if window.is_empty:
        return []

    fillers = [None] + _filler_candidates(moves)

    found = []
    for order, (prefix_name, actions) in enumerate(_prefixes(stats, prefix_chain, custom_actions)):
        prefix_frames = sum(action_cost(a) for a in actions)
        for filler_order, filler in enumerate(fillers):
            delay = prefix_frames + (move_total_frames(filler) if filler is not None else 0)
            if not (window.min_delay <= delay <= window.max_delay):
                continue
            found.append(((delay, order, filler_order), prefix_name, prefix_frames, actions, filler, delay))

    found.sort(key=lambda item: item[0])

    key_counts = {}
    matches = []
    for _, prefix_name, prefix_frames, actions, filler, delay in found[: config.max_results]:
        throw_start = delay + throw_startup
        throw_end = throw_start + throw_active - 1
        names = tuple(a.name for a in actions) + ((filler.name,) if filler is not None else ())
        base = build_result_key(
            prefix_name, prefix_frames,
            filler.name if filler is not None else "",
            filler.input if filler is not None else "",
            throw_start, throw_end, _prefix_input(actions),
        )
        matches.append(
            LoopThrowMatch(
                prefix_name=prefix_name,
                prefix_frames=prefix_frames,
                filler=filler,
                delay=delay,
                throw_start=throw_start,
                throw_end=throw_end,
                key=unique_result_key(base, key_counts),
                actions=names,
            )
        )
    return matches
