# scramble_sim/logic/schedule.py
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Dict, Mapping, Optional, Union
from zoneinfo import ZoneInfo

from scramble_sim.config import get_flag, get_section
from scramble_sim.core.puzzles import (
    DAY_NAMES,
    DAY_SCHEDULE,
    DEFAULT_EMOJI,
    FALLBACK_EMOJI,
    Difficulty,
    InvalidPuzzleType,
    PuzzleType,
)
from scramble_sim.logic.dispatch import (
    FIXED_SCRAMBLE_PUZZLES,
    DifficultyLike,
    generate_custom_scramble,
    generate_scramble,
    resolve_difficulty,
)

logger = logging.getLogger(__name__)

# Nombres cortos que aceptan los comandos del bot (en minúscula)
ALIASES: Dict[str, PuzzleType] = {
    "skewb": PuzzleType.SKEWB,
    "skb": PuzzleType.SKEWB,
    "3x3 bld": PuzzleType.THREE_BLD,
    "3bld": PuzzleType.THREE_BLD,
    "2x2": PuzzleType.TWO,
    "2": PuzzleType.TWO,
    "3x3": PuzzleType.THREE,
    "3": PuzzleType.THREE,
    "pyraminx": PuzzleType.PYRAMINX,
    "pyra": PuzzleType.PYRAMINX,
    "3x3 oh": PuzzleType.THREE_OH,
    "3oh": PuzzleType.THREE_OH,
    "clock": PuzzleType.CLOCK,
    "clk": PuzzleType.CLOCK,
}

THREAD_PING = "||@daily scramble ping||"


@dataclass(frozen=True)
class DailyScramble:
    day: str
    puzzle: PuzzleType
    scramble: str


@dataclass(frozen=True)
class ScrambleResult:
    puzzle: PuzzleType
    scramble: str
    custom_parameters: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class NextChallenge:
    day: str
    puzzle: PuzzleType
    is_today: bool
    next_time: str
    time_until: str


def puzzle_for_day(day: Optional[date] = None) -> PuzzleType:
    """Evento que toca en `day` según el calendario semanal (por defecto, hoy)."""
    day = day or date.today()
    return DAY_SCHEDULE[DAY_NAMES[day.weekday()]]


def daily_scramble(day: Optional[date] = None, rng: Optional[random.Random] = None) -> DailyScramble:
    """Genera el scramble del reto diario.

    Args:
        day: Fecha del reto (por defecto, hoy).
        rng: Generador aleatorio opcional.

    Returns:
        `DailyScramble` con el nombre del día, el evento y el scramble.
    """
    day = day or date.today()
    puzzle = puzzle_for_day(day)
    return DailyScramble(DAY_NAMES[day.weekday()], puzzle, generate_scramble(puzzle, rng=rng))


def parse_puzzle_type(text: str, strict: Optional[bool] = None) -> PuzzleType:
    """Interpreta lo que escribe un usuario ("pyra", "3BLD", " Clock ", ...).

    No distingue mayúsculas y acepta los alias de `ALIASES`.

    Args:
        text: Texto ingresado.
        strict: Si True, un texto desconocido lanza error; si False devuelve 3x3.
            None usa `dispatch.strict` de la configuración.

    Raises:
        InvalidPuzzleType: En modo estricto, si el texto no es un alias conocido.
    """
    key = text.lower().strip()
    if key in ALIASES:
        return ALIASES[key]
    if strict is None:
        strict = get_flag("dispatch.strict")
    if strict:
        raise InvalidPuzzleType(text)
    logger.warning("Alias de puzzle desconocido %r; se usa 3x3", text)
    return PuzzleType.THREE


def _as_puzzle(value: Union[PuzzleType, str], strict: Optional[bool]) -> PuzzleType:
    return value if isinstance(value, PuzzleType) else parse_puzzle_type(value, strict)


def scramble_for_type(
    value: Union[PuzzleType, str],
    rng: Optional[random.Random] = None,
    strict: Optional[bool] = None,
) -> ScrambleResult:
    """Scramble estándar para un evento dado por enum o alias."""
    puzzle = _as_puzzle(value, strict)
    return ScrambleResult(puzzle, generate_scramble(puzzle, rng=rng))


def custom_scramble_for_type(
    value: Union[PuzzleType, str],
    moves: Optional[int] = None,
    difficulty: Optional[DifficultyLike] = None,
    rng: Optional[random.Random] = None,
    strict: Optional[bool] = None,
) -> ScrambleResult:
    """Scramble personalizado; guarda los parámetros usados en el resultado.

    `moves` se reporta como "default" cuando no se indicó.
    """
    puzzle = _as_puzzle(value, strict)
    if puzzle in FIXED_SCRAMBLE_PUZZLES:
        # Pyraminx, Skewb y Clock no usan la dificultad: se reporta sin validar
        if difficulty is None:
            difficulty = get_section("custom.default_difficulty", Difficulty.MEDIUM.value)
        label = difficulty.value if isinstance(difficulty, Difficulty) else difficulty
        scramble = generate_custom_scramble(puzzle, moves, rng=rng, strict=strict)
    else:
        level = resolve_difficulty(difficulty, strict)
        label = level.value
        scramble = generate_custom_scramble(puzzle, moves, level, rng=rng, strict=strict)
    return ScrambleResult(
        puzzle,
        scramble,
        {"moves": moves or "default", "difficulty": label},
    )


def thread_title(day: Optional[date] = None) -> str:
    """Título del hilo diario: solo el nombre del evento."""
    return puzzle_for_day(day).value


def thread_content(scramble: str) -> str:
    """Cuerpo del mensaje del reto diario (Markdown de Discord)."""
    return (
        "# Today's Daily Scramble!\n"
        f"{THREAD_PING}\n"
        "\n"
        "```\n"
        f"{scramble}\n"
        "```\n"
        "\n"
        "Good luck! 🍀"
    )


def puzzle_emoji(
    puzzle: Union[PuzzleType, str],
    overrides: Optional[Mapping[str, str]] = None,
) -> str:
    """Emoji del evento. `overrides` (o la sección `emoji` del config) tiene prioridad."""
    if overrides is None:
        overrides = get_section("emoji", {}) or {}
    label = puzzle.value if isinstance(puzzle, PuzzleType) else puzzle
    if label in overrides:
        return overrides[label]
    try:
        return DEFAULT_EMOJI[PuzzleType(label)]
    except ValueError:
        return FALLBACK_EMOJI


def next_challenge(
    now: Optional[datetime] = None,
    post_time: Optional[str] = None,
    tz: Optional[str] = None,
) -> NextChallenge:
    """Calcula el próximo reto diario y cuánto falta.

    Args:
        now: Instante de referencia (sin zona se asume UTC). Por defecto, ahora.
        post_time: Hora de publicación "HH:MM" (por defecto `schedule.post_time`).
        tz: Zona horaria de `post_time` (por defecto `schedule.timezone`).

    Returns:
        `NextChallenge` con día, evento, si es hoy y el tiempo restante "Xh Ym".
    """
    post_time = post_time or get_section("schedule.post_time", "16:00")
    zone = ZoneInfo(tz or get_section("schedule.timezone", "Asia/Kolkata"))

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local = now.astimezone(zone)

    hour, minute = (int(x) for x in post_time.split(":"))
    post_at = time(hour, minute)
    target = datetime.combine(local.date(), post_at, tzinfo=zone)
    is_today = local < target
    if not is_today:
        # Se reconstruye en hora local: el offset UTC puede cambiar (DST)
        target = datetime.combine(local.date() + timedelta(days=1), post_at, tzinfo=zone)

    delta = target.astimezone(timezone.utc) - now.astimezone(timezone.utc)
    minutes = int(delta.total_seconds()) // 60
    return NextChallenge(
        day=DAY_NAMES[target.weekday()],
        puzzle=puzzle_for_day(target.date()),
        is_today=is_today,
        next_time=f"{post_time} {zone.key}",
        time_until=f"{minutes // 60}h {minutes % 60}m",
    )
