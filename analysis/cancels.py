"""
Elegibilidade de cancel entre dois golpes.

Cada `CancelTag` do golpe 1 mapeia para um predicado sobre o golpe 2.
O golpe 2 é elegível quando QUALQUER tag do golpe 1 satisfaz seu predicado.
Tags sem regra na tabela nunca concedem elegibilidade.
"""

import re
from typing import List, Optional

from models.structures import CancelTag, MoveCategory


_LEVEL_PATTERNS = (
    re.compile(r"\bsa\s*([123])\b", re.IGNORECASE),
    re.compile(r"\blv\.?\s*([123])\b", re.IGNORECASE),
    re.compile(r"\blevel\s*([123])\b", re.IGNORECASE),
)
_CRITICAL_ART = re.compile(r"\bca\b|critical art", re.IGNORECASE)
_DRIVE_RUSH_NAME = re.compile(r"drive\s*rush", re.IGNORECASE)
_DRIVE_RUSH_INPUT = re.compile(r"(mpmk|mp\+mk)\s*[~>]?\s*66", re.IGNORECASE)
_LIGHT_BUTTON = re.compile(r"\bL[PK]\b|\dL[PK]|L[PK]$", re.IGNORECASE)


def is_critical_art(move) -> bool:
    if move.category != MoveCategory.SUPER:
        return False
    move_type = move.raw.move_type if move.raw is not None else None
    for text in (move_type, move.name):
        if text and _CRITICAL_ART.search(text):
            return True
    return False


def super_level(move) -> Optional[int]:
    """
    Nível do super (1, 2 ou 3) derivado de metadados, nome e input.

    Critical Art conta como nível 3. None quando não é super ou o nível
    não pode ser determinado.
    """

    if move.category != MoveCategory.SUPER:
        return None

    move_type = move.raw.move_type if move.raw is not None else None
    for text in (move_type, move.name, move.input):
        if not text:
            continue
        for pattern in _LEVEL_PATTERNS:
            match = pattern.search(text)
            if match:
                return int(match.group(1))

    if is_critical_art(move):
        return 3
    return None


def _is_light_normal(move) -> bool:
    return move.category == MoveCategory.NORMAL and bool(_LIGHT_BUTTON.search(move.input or ""))


def _is_target_combo(move) -> bool:
    return move.category == MoveCategory.UNIQUE or ">" in (move.input or "")


def _is_drive_rush(move) -> bool:
    return bool(_DRIVE_RUSH_NAME.search(move.name or "")) or bool(_DRIVE_RUSH_INPUT.search(move.input or ""))


CANCEL_RULES = {
    CancelTag.SPECIAL: lambda m: m.category == MoveCategory.SPECIAL,
    CancelTag.SUPER: lambda m: m.category == MoveCategory.SUPER,
    CancelTag.SA1: lambda m: super_level(m) == 1,
    CancelTag.SA2: lambda m: super_level(m) == 2,
    CancelTag.SA3: lambda m: super_level(m) == 3,
    CancelTag.CA: is_critical_art,
    CancelTag.CHAIN: _is_light_normal,
    CancelTag.TARGET_COMBO: _is_target_combo,
    CancelTag.DRIVE_RUSH: _is_drive_rush,
}


def cancel_routes(move1, move2) -> List[CancelTag]:
    """Tags do golpe 1 que permitem cancelar no golpe 2 (ordem declarada)."""

    routes = []
    for tag in move1.cancels or ():
        rule = CANCEL_RULES.get(tag)
        if rule is not None and rule(move2):
            routes.append(tag)
    return routes


def is_cancel_eligible(move1, move2) -> bool:
    return len(cancel_routes(move1, move2)) > 0
