"""Chaves determinísticas para deduplicar resultados enumerados de oki."""

from typing import Dict, Optional


def build_result_key(
    prefix_name: str,
    prefix_frames: int,
    move_name: str,
    move_input: str,
    our_start: int,
    our_end: int,
    prefix_input: Optional[str] = None,
) -> str:
    return "|".join(
        str(part)
        for part in (
            prefix_name,
            prefix_frames,
            prefix_input or "",
            move_name,
            move_input,
            our_start,
            our_end,
        )
    )


def unique_result_key(base_key: str, key_counts: Dict[str, int]) -> str:
    """
    Devolve `base_key` na primeira ocorrência e `base_key|dupN` nas seguintes.

    `key_counts` é o contador da enumeração corrente e é atualizado aqui.
    """

    count = key_counts.get(base_key, 0)
    key_counts[base_key] = count + 1
    if count == 0:
        return base_key
    return f"{base_key}|dup{count + 1}"
