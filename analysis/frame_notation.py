"""
Parser da notação textual de frames usada nas tabelas de frame data.

A notação é pequena mas irregular:
- escalares com sinal ("-2", "+3", "KD +40")
- segmentos de hit somados ("2,3") e multiplicados ("4x6,7,3")
- total explícito entre parênteses ("4x6,7,3(34 total)")
- recovery alternativo entre parênteses ("14(16)": contato vs. whiff)
- recovery aditivo ("15+15 land")
- ranges ("586~775")

Todas as funções são totais: texto vazio, "-" ou texto sem números nunca
levantam exceção, devolvem 0 (ou None nas variantes `Optional`).
"""

import re
from typing import Optional


_NO_DATA = ("", "-", "--", "n/a")

_SIGNED_INT = re.compile(r"[-+]?\d+")
_UNSIGNED_INT = re.compile(r"\d+")
_EXPLICIT_TOTAL = re.compile(r"(\d+)\s*total", re.IGNORECASE)
_TOTAL_WORD = re.compile(r"\btotal\b", re.IGNORECASE)
_PARENTHESIZED = re.compile(r"\((\d+)\)")
_PRODUCT = re.compile(r"(\d+)\s*[x*]\s*(\d+)", re.IGNORECASE)
_RANGE_PAIR = re.compile(r"(\d+)\s*~\s*(\d+)")
_RANGE_OPEN = re.compile(r"(\d+)\s*~\s*")


def normalize_frame_text(value) -> str:
    """Unifica variações tipográficas (sinais unicode, '×') e espaços."""

    if value is None:
        return ""
    text = str(value)
    text = re.sub(r"[−–—]", "-", text)
    text = text.replace("＋", "+")
    text = re.sub(r"[×✕✖]", "x", text)
    return re.sub(r"\s+", " ", text).strip()


def has_frame_data(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    text = normalize_frame_text(value)
    if text.lower() in _NO_DATA:
        return False
    return _UNSIGNED_INT.search(text) is not None


def _numbers(text):
    return [int(n) for n in _UNSIGNED_INT.findall(text)]


def _explicit_total(text) -> Optional[int]:
    match = _EXPLICIT_TOTAL.search(text)
    return int(match.group(1)) if match else None


def _evaluate(text) -> Optional[int]:
    # "(N total)" vence qualquer recomputação
    total = _explicit_total(text)
    if total is not None:
        return total

    text = _RANGE_PAIR.sub(r"\1", text)
    text = _RANGE_OPEN.sub(r"\1", text)

    # resolve produtos ("4x6") antes de somar o restante
    while _PRODUCT.search(text):
        text = _PRODUCT.sub(lambda m: str(int(m.group(1)) * int(m.group(2))), text, count=1)

    numbers = _numbers(text)
    if not numbers:
        return None
    return sum(numbers)


def parse_scalar(value) -> int:
    """
    Primeiro inteiro (com sinal) encontrado em `value`; 0 quando não há.

    Na forma "N*M" (quantidade de hits x dano) devolve o valor após o último `*`.
    """

    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    text = normalize_frame_text(value)
    if text.lower() in _NO_DATA:
        return 0
    if "*" in text:
        text = text.rsplit("*", 1)[1]
    match = _SIGNED_INT.search(text)
    return int(match.group()) if match else 0


def parse_startup(value) -> Optional[int]:
    """Primeiro frame ativo; None quando o campo não tem frame data."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = normalize_frame_text(value)
    if text.lower() in _NO_DATA:
        return None
    numbers = _numbers(text)
    return numbers[0] if numbers else None


def active_total_or_none(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = normalize_frame_text(value)
    if text.lower() in _NO_DATA:
        return None
    return _evaluate(text)


def parse_active_total(value) -> int:
    """Soma de todos os segmentos ativos ("2,3" -> 5, "4x6,7,3" -> 34)."""

    return active_total_or_none(value) or 0


def recovery_total_or_none(value, on_contact=False) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = normalize_frame_text(value)
    if text.lower() in _NO_DATA:
        return None

    alternates = [int(n) for n in _PARENTHESIZED.findall(text)]
    if alternates:
        if on_contact:
            leading = _PARENTHESIZED.sub(" ", text)
            contact = _evaluate(leading)
            if contact is not None:
                return contact
        # último "(N)" é o recovery de whiff/aterrissagem
        return alternates[-1]

    return _evaluate(text)


def parse_recovery_total(value, on_contact=False) -> int:
    """
    Total de recovery.

    Com alternativa entre parênteses ("14(16)") devolve o valor de whiff (16),
    usado nas timelines de pior caso; com `on_contact=True` devolve o valor
    inicial (14), usado no cálculo de blockstun/hitstun.
    """

    return recovery_total_or_none(value, on_contact=on_contact) or 0


def startup_total_override(value) -> Optional[int]:
    """Total informado no próprio startup (ex.: "586~775 (total)" -> 775)."""

    if value is None or isinstance(value, (int, bool)):
        return None
    text = normalize_frame_text(value)
    if text.lower() in _NO_DATA:
        return None

    total = _explicit_total(text)
    if total is not None:
        return total

    if _TOTAL_WORD.search(text):
        numbers = _numbers(text)
        if numbers:
            return numbers[-1]
    return None


def _precomputed_total(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = normalize_frame_text(value)
    if text.lower() in _NO_DATA:
        return None

    total = _explicit_total(text)
    if total is not None:
        return total
    alternates = [int(n) for n in _PARENTHESIZED.findall(text)]
    if alternates:
        return alternates[-1]
    numbers = _numbers(text)
    return numbers[0] if numbers else None


def move_total_frames(move) -> int:
    """
    Total de frames de um golpe do input até poder agir de novo.

    Ordem: total pré-calculado (`raw.total`), depois
    `(startup - 1) + active + recovery(whiff)`, depois um total escrito no
    próprio startup. 0 quando nada disso está disponível.
    """

    raw = getattr(move, "raw", None)
    if raw is not None and raw.total is not None:
        precomputed = _precomputed_total(raw.total)
        if precomputed is not None:
            return precomputed

    startup = parse_startup(move.startup)
    active = active_total_or_none(move.active)
    recovery = recovery_total_or_none(move.recovery)
    if startup is not None and active is not None and recovery is not None:
        return max(0, startup - 1) + active + recovery

    override = startup_total_override(move.startup)
    if override is not None:
        return override
    return 0
