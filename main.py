"""
Pipeline principal da calculadora.

Este módulo lê um pedido (`request.json`) e orquestra as etapas:
- carregamento da frame data do personagem (`models.structures`)
- gap / surplus entre dois golpes (`analysis.advantage`)
- busca de continuações (`analysis.advantage.recommend_followups`)
- timeline e enumeração de oki (`analysis.oki`)
- janela de loop throw (`analysis.oki`)
- trade (`analysis.trade`)
- geração de insights (`analysis.insights`)

O resultado é escrito em `output/results.json`.
"""

import json
import os
import sys
from dataclasses import asdict

from config import get_default_config
from models.structures import (
    CalculationInput,
    CalculationMode,
    CalculationType,
    ChainAction,
    CharacterStats,
    HitState,
    moves_from_records,
)
from analysis.advantage import calculate_advantage, recommend_followups
from analysis.frame_notation import parse_active_total, parse_startup
from analysis.insights import generate_insights
from analysis.oki import (
    compute_oki_timeline,
    enumerate_loop_throws,
    enumerate_oki_matches,
    knockdown_advantage_of,
    loop_throw_window,
)
from analysis.trade import analyze_trade


def load_character(path):
    """Lê o JSON de um personagem e devolve `(stats, moves)`."""

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return CharacterStats.from_dict(data.get("stats", {})), moves_from_records(data.get("moves", []))


def _parse_chain(items, moves_by_name, stats):
    chain = []
    for item in items or []:
        if item.get("action") == "dash":
            chain.append(ChainAction.dash(stats))
        elif item.get("action") == "back_dash":
            chain.append(ChainAction.back_dash(stats))
        elif "custom" in item:
            chain.append(
                ChainAction.custom(
                    item["custom"], item.get("frames", 0), item.get("startup"), item.get("active"), item.get("input")
                )
            )
        elif item.get("move") in moves_by_name:
            chain.append(ChainAction.of_move(moves_by_name[item["move"]]))
        else:
            print("Ignoring unknown chain action:", item)
    return chain


def _knockdown(req, moves_by_name):
    if "knockdownAdvantage" in req:
        return int(req["knockdownAdvantage"])
    move = moves_by_name.get(req.get("knockdownMove"))
    if move is None:
        return None
    return knockdown_advantage_of(move, back_rise=bool(req.get("backRise", False)))


def run(request_path, output_path=os.path.join("output", "results.json")):
    """
    Pipeline:
    pedido → frame data → vantagem/continuações → oki → loop throw → trade → insights
    """

    if not os.path.exists(request_path):
        print("No request found at", request_path)
        return None

    with open(request_path, "r", encoding="utf-8") as f:
        request = json.load(f)

    base_dir = os.path.dirname(os.path.abspath(request_path))
    character_path = request.get("character", "")
    if not os.path.isabs(character_path) and not os.path.exists(character_path):
        character_path = os.path.join(base_dir, os.path.basename(character_path))
    if not os.path.exists(character_path):
        print("No character data found at", character_path)
        return None

    config = get_default_config()
    stats, moves = load_character(character_path)
    moves_by_name = {m.name: m for m in moves}
    custom_actions = [ChainAction.from_custom_move(c) for c in request.get("customMoves") or []]

    results = {}

    # Gap / surplus entre dois golpes
    adv_req = request.get("advantage")
    if adv_req:
        move1 = moves_by_name.get(adv_req.get("move1"))
        move2 = moves_by_name.get(adv_req.get("move2"))
        if move1 is None or move2 is None:
            print("Unknown moves for advantage:", adv_req.get("move1"), adv_req.get("move2"))
        else:
            result = calculate_advantage(
                CalculationInput(
                    move1=move1,
                    move2=move2,
                    type=CalculationType(adv_req.get("type", "block")),
                    mode=CalculationMode(adv_req.get("mode", "link")),
                    hit_state=HitState(adv_req.get("hitState", "normal")),
                    cancel_frame=int(adv_req.get("cancelFrame", 1)),
                    is_burnout=bool(adv_req.get("isBurnout", False)),
                    is_drive_rush=bool(adv_req.get("isDriveRush", False)),
                ),
                config,
            )
            results["advantage"] = asdict(result)

    # Continuações recomendadas
    fu_req = request.get("followups")
    if fu_req and fu_req.get("move1") in moves_by_name:
        followups = recommend_followups(
            moves_by_name[fu_req["move1"]],
            moves,
            calc_type=CalculationType(fu_req.get("type", "block")),
            mode=CalculationMode(fu_req.get("mode", "link")),
            hit_state=HitState(fu_req.get("hitState", "normal")),
            cancel_frame=int(fu_req.get("cancelFrame", 1)),
            config=config,
        )
        results["followups"] = [asdict(f) for f in followups]

    # Oki
    oki_req = request.get("oki")
    if oki_req:
        n = _knockdown(oki_req, moves_by_name)
        r = int(oki_req.get("reversalStartup", 4))
        if n is None:
            print("No knockdown advantage available for oki request")
        else:
            chain = _parse_chain(oki_req.get("chain"), moves_by_name, stats)
            if chain:
                results["oki_timeline"] = asdict(compute_oki_timeline(chain, n, r))
            matches = enumerate_oki_matches(moves, stats, n, r, config=config, custom_actions=custom_actions)
            results["oki"] = [asdict(m) for m in matches]

    # Loop throw
    lt_req = request.get("loopThrow")
    if lt_req:
        n = _knockdown(lt_req, moves_by_name)
        throw = moves_by_name.get(lt_req.get("throwMove"))
        if n is None or throw is None:
            print("Loop throw request needs a knockdown and a throw move")
        else:
            invul = int(lt_req.get("invul", config.wakeup_throw_invul))
            r = int(lt_req.get("reversalStartup", 4))
            t = parse_startup(throw.startup) or 0
            a = parse_active_total(throw.active) or 1
            results["loop_throw_window"] = asdict(loop_throw_window(n, invul, t, a, r))
            loops = enumerate_loop_throws(
                moves, stats, n, invul, t, a, r,
                prefix_chain=_parse_chain(lt_req.get("chain"), moves_by_name, stats) or None,
                config=config,
                custom_actions=custom_actions,
            )
            results["loop_throws"] = [asdict(m) for m in loops]

    # Trade
    trade_req = request.get("trade")
    if trade_req:
        move_a = moves_by_name.get(trade_req.get("moveA"))
        move_b = moves_by_name.get(trade_req.get("moveB"))
        if move_a is not None and move_b is not None:
            trade = analyze_trade(move_a, move_b, config)
            results["trade"] = dict(asdict(trade), advantaged=trade.advantaged)

    results["insights"] = generate_insights(results)

    out_dir = os.path.dirname(output_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(results, f, indent=2, ensure_ascii=False)

    print("Wrote results to", output_path)
    return results


if __name__ == "__main__":
    req = sys.argv[1] if len(sys.argv) > 1 else os.path.join("data", "sample_request.json")
    run(req)
