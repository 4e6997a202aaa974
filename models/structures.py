from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


# Valor de frame como aparece nos dados: texto em notação ("4x6,7,3") ou inteiro
FrameValue = Union[int, str, None]


class MoveCategory(str, Enum):
    NORMAL = "normal"
    UNIQUE = "unique"
    SPECIAL = "special"
    SUPER = "super"
    THROW = "throw"

    @classmethod
    def parse(cls, value):
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.NORMAL


class KnockdownType(str, Enum):
    SOFT = "soft"
    HARD = "hard"
    NONE = "none"


class CancelTag(str, Enum):
    """Rotas de cancel que um golpe pode declarar (vocabulário fechado)."""

    SPECIAL = "Special"
    SUPER = "Super"
    SA1 = "SA1"
    SA2 = "SA2"
    SA3 = "SA3"
    CA = "CA"
    CHAIN = "Chain"
    TARGET_COMBO = "Target Combo"
    DRIVE_RUSH = "Drive Rush"

    @classmethod
    def parse(cls, value) -> Optional["CancelTag"]:
        if isinstance(value, CancelTag):
            return value
        text = str(value).strip().lower()
        for tag in cls:
            if tag.value.lower() == text:
                return tag
        return None


class CalculationType(str, Enum):
    BLOCK = "block"
    HIT = "hit"


class CalculationMode(str, Enum):
    LINK = "link"
    CANCEL = "cancel"


class HitState(str, Enum):
    NORMAL = "normal"
    COUNTER_HIT = "ch"
    PUNISH_COUNTER = "pc"


class ActionKind(str, Enum):
    DASH = "dash"
    BACK_DASH = "back_dash"
    MOVE = "move"
    CUSTOM = "custom"


class OkiOutcome(str, Enum):
    PRESSURE_SUCCESS = "pressure_success"
    TRADE = "trade"
    TOO_EARLY = "too_early"
    TOO_LATE = "too_late"


class GapStatus(str, Enum):
    TRUE_BLOCKSTRING = "true_blockstring"
    FRAME_TRAP = "frame_trap"
    INTERRUPTIBLE = "interruptible"
    HIGH_RISK = "high_risk"
    COMBO = "combo"
    NO_COMBO = "no_combo"


@dataclass(frozen=True)
class KnockdownData:
    type: KnockdownType = KnockdownType.NONE
    advantage: int = 0  # frames de vantagem no knockdown
    back_rise_advantage: Optional[int] = None


@dataclass(frozen=True)
class PrecomputedStats:
    """
    Estatísticas já calculadas pela fonte de dados (ex.: FAT).

    Quando um campo está presente ele tem prioridade sobre o valor derivado
    a partir de startup/active/recovery. Os valores podem vir como inteiro
    ou como texto em notação de frames ("27(22)", "KD +40").
    """

    total: FrameValue = None
    blockstun: FrameValue = None
    hitstun: FrameValue = None
    move_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]):
        if not data:
            return None
        return cls(
            total=data.get("total"),
            blockstun=data.get("blockstun"),
            hitstun=data.get("hitstun"),
            move_type=data.get("moveType", data.get("move_type")),
        )


@dataclass(frozen=True)
class Move:
    """
    Um golpe/ação de personagem com a frame data em notação textual.

    - `startup`, `active`, `recovery`, `on_block`, `on_hit`: texto em notação
      de frames; o sentinela "-" (desconhecido) é sempre aceito
    - `category`: normal, unique, special, super ou throw
    - `cancels`: rotas de cancel declaradas pelo golpe
    - `raw`: estatísticas pré-calculadas (opcional)
    """

    name: str
    input: str = ""
    damage: str = "-"
    startup: FrameValue = "-"
    active: FrameValue = "-"
    recovery: FrameValue = "-"
    on_block: FrameValue = "-"
    on_hit: FrameValue = "-"
    category: MoveCategory = MoveCategory.NORMAL
    cancels: Tuple[CancelTag, ...] = ()
    knockdown: Optional[KnockdownData] = None
    raw: Optional[PrecomputedStats] = None
    no_meaty: bool = False  # se True o bônus de meaty é sempre 0
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Constrói um `Move` a partir do registro JSON por personagem.

        Tags de cancel desconhecidas são descartadas.
        """
        cancels = []
        for value in data.get("cancels") or []:
            tag = CancelTag.parse(value)
            if tag is not None and tag not in cancels:
                cancels.append(tag)

        knockdown = None
        kd = data.get("knockdown")
        if kd:
            try:
                kd_type = KnockdownType(str(kd.get("type", "none")).lower())
            except ValueError:
                kd_type = KnockdownType.NONE
            knockdown = KnockdownData(
                type=kd_type,
                advantage=int(kd.get("advantage") or 0),
                back_rise_advantage=kd.get("backRiseAdvantage"),
            )

        return cls(
            name=str(data.get("name", "")),
            input=str(data.get("input", "")),
            damage=data.get("damage", "-"),
            startup=data.get("startup", "-"),
            active=data.get("active", "-"),
            recovery=data.get("recovery", "-"),
            on_block=data.get("onBlock", data.get("on_block", "-")),
            on_hit=data.get("onHit", data.get("on_hit", "-")),
            category=MoveCategory.parse(data.get("category", "normal")),
            cancels=tuple(cancels),
            knockdown=knockdown,
            raw=PrecomputedStats.from_dict(data.get("raw")),
            no_meaty=bool(data.get("noMeaty", False)),
            notes=data.get("notes"),
        )


@dataclass(frozen=True)
class CharacterStats:
    health: int
    forward_dash: int  # total de frames do dash para frente
    back_dash: int  # total de frames do backdash
    forward_walk: Optional[float] = None
    back_walk: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        return cls(
            health=int(data.get("health", 10000)),
            forward_dash=int(data.get("forwardDash", data.get("forward_dash", 0))),
            back_dash=int(data.get("backDash", data.get("back_dash", 0))),
            forward_walk=data.get("forwardWalk", data.get("forward_walk")),
            back_walk=data.get("backWalk", data.get("back_walk")),
        )


@dataclass(frozen=True)
class ChainAction:
    """
    Uma etapa da sequência de preparação do oki.

    - dash / back_dash: custo = `frames` (total do dash)
    - move: custo = total de frames do golpe
    - custom: ação definida pelo usuário com `frames` totais e, opcionalmente,
      `startup`/`active` explícitos para quando ela é a última ação
    """

    kind: ActionKind
    move: Optional[Move] = None
    frames: int = 0
    startup: Optional[int] = None
    active: Optional[int] = None
    label: Optional[str] = None
    notation: Optional[str] = None  # input das ações custom

    @classmethod
    def dash(cls, stats: CharacterStats):
        return cls(ActionKind.DASH, frames=stats.forward_dash, label="Dash")

    @classmethod
    def back_dash(cls, stats: CharacterStats):
        return cls(ActionKind.BACK_DASH, frames=stats.back_dash, label="Back Dash")

    @classmethod
    def of_move(cls, move: Move):
        return cls(ActionKind.MOVE, move=move, label=move.name)

    @classmethod
    def custom(cls, label, frames, startup=None, active=None, notation=None):
        return cls(ActionKind.CUSTOM, frames=int(frames), startup=startup, active=active, label=label, notation=notation)

    @classmethod
    def from_custom_move(cls, data):
        """Ação custom salva por personagem (`{"name", "input", "frames"}`)."""

        return cls.custom(data.get("name", ""), data.get("frames") or 0, notation=data.get("input"))

    @property
    def name(self) -> str:
        if self.label:
            return self.label
        if self.move is not None:
            return self.move.name
        return self.kind.value

    @property
    def input(self) -> str:
        if self.move is not None:
            return self.move.input
        return self.notation or ""


@dataclass(frozen=True)
class CalculationInput:
    move1: Move
    move2: Move
    type: CalculationType
    mode: CalculationMode
    hit_state: HitState = HitState.NORMAL
    cancel_frame: int = 1  # índice (1-based) do frame ativo do move1 em que ocorre o cancel
    is_burnout: bool = False
    is_drive_rush: bool = False


@dataclass(frozen=True)
class CalculationResult:
    valid: bool
    gap: int = 0
    display_label: str = ""
    display_value: str = ""
    status: Optional[GapStatus] = None
    description: str = ""
    formula_desc: str = ""
    adv1: int = 0
    startup2: int = 0
    blockstun: Optional[int] = None
    hitstun: Optional[int] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class FollowUp:
    """Resultado da busca de continuações para um golpe."""

    move: Move
    result: CalculationResult
    routes: Tuple[CancelTag, ...] = ()


@dataclass(frozen=True)
class OkiTimeline:
    our_start: int
    our_end: int
    classification: OkiOutcome
    window_start: int  # primeiro frame em que o oponente pode ser atingido (N+1)
    window_end: int  # último frame antes do reversal (N+R-1)
    prior_frames: int = 0


@dataclass(frozen=True)
class OkiMatch:
    prefix_name: str
    prefix_frames: int
    move: Move
    delay: int  # frames de espera antes de apertar o golpe final
    our_start: int
    our_end: int
    active_frame_hit: int  # qual frame ativo acerta (1 = primeiro)
    is_meaty: bool
    key: str
    prefix_input: Optional[str] = None


@dataclass(frozen=True)
class LoopThrowWindow:
    earliest: int
    latest: int
    max_delay: int
    min_delay: int
    min_delay_display: int  # min_delay limitado a >= 0

    @property
    def is_empty(self) -> bool:
        return self.max_delay < 0 or self.max_delay < self.min_delay_display


@dataclass(frozen=True)
class LoopThrowMatch:
    prefix_name: str
    prefix_frames: int
    filler: Optional[Move]
    delay: int  # custo acumulado antes de apertar o throw
    throw_start: int  # primeiro frame ativo do throw
    throw_end: int
    key: str
    actions: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TradeResult:
    advantage: int  # positivo: lado A se recupera primeiro
    hitstun_a: int
    hitstun_b: int
    source_a: str
    source_b: str

    @property
    def advantaged(self) -> Optional[str]:
        if self.advantage > 0:
            return "A"
        if self.advantage < 0:
            return "B"
        return None


def moves_from_records(records: List[Dict[str, Any]]) -> List[Move]:
    return [Move.from_dict(r) for r in records or []]
