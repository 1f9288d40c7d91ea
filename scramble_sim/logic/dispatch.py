# scramble_sim/logic/dispatch.py
from __future__ import annotations

import logging
import random
from typing import Callable, Dict, Optional, Union

from scramble_sim.config import get_flag, get_section
from scramble_sim.core.puzzles import (
    Difficulty,
    InvalidDifficulty,
    InvalidPuzzleType,
    PuzzleType,
)
from scramble_sim.logic.custom import (
    DEFAULT_MOVES_2X2,
    DEFAULT_MOVES_3X3,
    generate_custom_2x2,
    generate_custom_3x3,
)
from scramble_sim.logic.scramble import (
    generate_2x2,
    generate_3x3,
    generate_3x3_bld,
    generate_3x3_oh,
    generate_clock,
    generate_pyraminx,
    generate_skewb,
)

logger = logging.getLogger(__name__)

PuzzleLike = Union[PuzzleType, str]
DifficultyLike = Union[Difficulty, str]
Generator = Callable[[Optional[random.Random]], str]

GENERATORS: Dict[PuzzleType, Generator] = {
    PuzzleType.TWO: generate_2x2,
    PuzzleType.THREE: generate_3x3,
    PuzzleType.THREE_BLD: generate_3x3_bld,
    PuzzleType.THREE_OH: generate_3x3_oh,
    PuzzleType.PYRAMINX: generate_pyraminx,
    PuzzleType.SKEWB: generate_skewb,
    PuzzleType.CLOCK: generate_clock,
}

# Eventos que ignoran move_count y difficulty en el modo personalizado
FIXED_SCRAMBLE_PUZZLES = (PuzzleType.PYRAMINX, PuzzleType.SKEWB, PuzzleType.CLOCK)


def _is_strict(strict: Optional[bool]) -> bool:
    if strict is None:
        return get_flag("dispatch.strict")
    return strict


def resolve_puzzle(value: PuzzleLike, strict: Optional[bool] = None) -> Optional[PuzzleType]:
    """Convierte una etiqueta exacta ("3x3 BLD", "Clock", ...) en `PuzzleType`.

    Args:
        value: Miembro del enum o etiqueta canónica (sensible a mayúsculas).
        strict: Si True, una etiqueta desconocida lanza error. None usa
            `dispatch.strict` de la configuración.

    Returns:
        El `PuzzleType`, o None si la etiqueta es desconocida en modo permisivo.

    Raises:
        InvalidPuzzleType: En modo estricto, si la etiqueta es desconocida.
    """
    if isinstance(value, PuzzleType):
        return value
    try:
        return PuzzleType(value)
    except ValueError:
        if _is_strict(strict):
            raise InvalidPuzzleType(value) from None
        logger.warning("Tipo de puzzle desconocido %r; se usa 3x3", value)
        return None


def resolve_difficulty(value: Optional[DifficultyLike], strict: Optional[bool] = None) -> Difficulty:
    """Convierte "easy" / "medium" / "hard" en `Difficulty`.

    None toma `custom.default_difficulty` de la configuración (medium si falta).

    Raises:
        InvalidDifficulty: En modo estricto, si el valor es desconocido.
    """
    if value is None:
        value = get_section("custom.default_difficulty", Difficulty.MEDIUM.value)
    if isinstance(value, Difficulty):
        return value
    try:
        return Difficulty(value)
    except ValueError:
        if _is_strict(strict):
            raise InvalidDifficulty(value) from None
        logger.warning("Dificultad desconocida %r; se usa medium", value)
        return Difficulty.MEDIUM


def generate_scramble(
    puzzle: PuzzleLike,
    *,
    rng: Optional[random.Random] = None,
    strict: Optional[bool] = None,
) -> str:
    """Genera el scramble estándar para un evento.

    Args:
        puzzle: Evento (enum o etiqueta canónica).
        rng: Generador aleatorio opcional (para resultados reproducibles).
        strict: Ver `resolve_puzzle`.

    Returns:
        Movimientos separados por espacios. Un evento desconocido produce un
        scramble de 3x3 en modo permisivo.
    """
    resolved = resolve_puzzle(puzzle, strict)
    if resolved is None:
        return generate_3x3(rng)
    return GENERATORS[resolved](rng)


def generate_custom_scramble(
    puzzle: PuzzleLike,
    move_count: Optional[int] = None,
    difficulty: Optional[DifficultyLike] = None,
    *,
    rng: Optional[random.Random] = None,
    strict: Optional[bool] = None,
) -> str:
    """Genera un scramble personalizado.

    - 2x2: `generate_custom_2x2` (por defecto 10 movimientos).
    - 3x3, 3x3 BLD, 3x3 OH y eventos desconocidos: `generate_custom_3x3`
      (por defecto 20 movimientos).
    - Pyraminx, Skewb y Clock ignoran `move_count` y `difficulty` y usan su
      generador estándar.

    Args:
        puzzle: Evento (enum o etiqueta canónica).
        move_count: Cantidad de movimientos; None o 0 usan el valor por defecto.
        difficulty: "easy", "medium" o "hard".
        rng: Generador aleatorio opcional.
        strict: Ver `resolve_puzzle` / `resolve_difficulty`.

    Returns:
        Movimientos separados por espacios.
    """
    resolved = resolve_puzzle(puzzle, strict)

    if resolved in FIXED_SCRAMBLE_PUZZLES:
        return GENERATORS[resolved](rng)

    level = resolve_difficulty(difficulty, strict)
    if resolved == PuzzleType.TWO:
        return generate_custom_2x2(move_count or DEFAULT_MOVES_2X2, level, rng)

    # 3x3, BLD, OH y desconocidos
    return generate_custom_3x3(move_count or DEFAULT_MOVES_3X3, level, rng)
