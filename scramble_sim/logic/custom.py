# scramble_sim/logic/custom.py
from __future__ import annotations

import logging
import random
from typing import List, Optional

from scramble_sim.core.puzzles import Difficulty
from scramble_sim.logic.moves import (
    CUSTOM_MODIFIERS,
    FACES_2X2,
    FACES_3X3,
    OPPOSITES,
    SAME_AXIS,
    SLICES,
)
from scramble_sim.logic.rng import make_rng, random_element

logger = logging.getLogger(__name__)

DEFAULT_MOVES_3X3 = 20
DEFAULT_MOVES_2X2 = 10


def clamp_2x2_moves(move_count: int, difficulty: Difficulty) -> int:
    """Ajusta la cantidad de movimientos del 2x2 según la dificultad.

    - easy: como máximo 8
    - medium: entre 9 y 11
    - hard: como mínimo 11
    """
    if difficulty == Difficulty.EASY:
        return min(move_count, 8)
    if difficulty == Difficulty.HARD:
        return max(move_count, 11)
    return min(max(move_count, 9), 11)


def generate_custom_3x3(
    move_count: int = DEFAULT_MOVES_3X3,
    difficulty: Difficulty = Difficulty.MEDIUM,
    rng: Optional[random.Random] = None,
) -> str:
    """Genera un scramble de 3x3 con cantidad de movimientos y dificultad a elección.

    La dificultad define el alfabeto:
    - easy: sufijos "", "'"
    - medium: sufijos "", "'", "2"
    - hard: además "w", "w'", "w2" y las capas centrales M, E, S

    Cada jugada excluye la cara anterior, su opuesta y las caras del último eje
    exterior usado (las capas centrales no cambian ese eje).

    Args:
        move_count: Cantidad exacta de movimientos (negativo se trata como 0).
        difficulty: Nivel de dificultad.
        rng: Generador aleatorio opcional.

    Returns:
        Movimientos separados por espacios.
    """
    rng = rng or make_rng()
    faces: List[str] = list(FACES_3X3)
    if difficulty == Difficulty.HARD:
        faces.extend(SLICES)
    modifiers = CUSTOM_MODIFIERS[difficulty]

    seq: List[str] = []
    last_face = ""
    last_axis = ""

    for _ in range(max(move_count, 0)):
        available = [
            f for f in faces
            if f != last_face
            and f != OPPOSITES.get(last_face)
            and not (last_axis and last_axis in SAME_AXIS.get(f, ()))
        ]
        if not available:
            available = [f for f in faces if f != last_face]

        face = random_element(rng, available)
        last_face = face
        if face in SAME_AXIS:
            last_axis = face

        seq.append(face + random_element(rng, modifiers))

    logger.debug("custom 3x3 (%s, %d): %s", difficulty, move_count, seq)
    return " ".join(seq)


def generate_custom_2x2(
    move_count: int = DEFAULT_MOVES_2X2,
    difficulty: Difficulty = Difficulty.MEDIUM,
    rng: Optional[random.Random] = None,
) -> str:
    """Genera un scramble de 2x2 (caras R, U, F) ajustado a la dificultad.

    La cantidad de movimientos se ajusta con `clamp_2x2_moves`. En easy solo se
    usan cuartos de vuelta; en medium y hard también giros dobles.

    Args:
        move_count: Cantidad pedida de movimientos.
        difficulty: Nivel de dificultad.
        rng: Generador aleatorio opcional.

    Returns:
        Movimientos separados por espacios.
    """
    rng = rng or make_rng()
    count = clamp_2x2_moves(move_count, difficulty)
    modifiers = CUSTOM_MODIFIERS[Difficulty.EASY if difficulty == Difficulty.EASY else Difficulty.MEDIUM]

    seq: List[str] = []
    last_face = ""
    for _ in range(max(count, 0)):
        face = random_element(rng, [f for f in FACES_2X2 if f != last_face])
        last_face = face
        seq.append(face + random_element(rng, modifiers))

    logger.debug("custom 2x2 (%s, %d): %s", difficulty, count, seq)
    return " ".join(seq)
