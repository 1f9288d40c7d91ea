# scramble_sim/logic/scramble.py
from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Sequence, Set

from scramble_sim.logic.moves import (
    ADJACENT_CORNERS,
    ADJACENT_PAIRS_3X3,
    ANTI_ROTATION,
    CLOCK_FLIP,
    CLOCK_MAX_HOUR,
    CORNERS_SKEWB,
    DIAL_POSITIONS,
    FACES_2X2,
    FACES_3X3,
    FACES_PYRAMINX,
    HARD_PATTERNS_2X2,
    HARD_PATTERNS_PYRAMINX,
    PIN_POSITIONS,
    PIN_STATES,
    PYRAMINX_MODIFIERS,
    SAME_AXIS,
    TIPS_PYRAMINX,
)
from scramble_sim.logic.rng import make_rng, random_element, random_int

logger = logging.getLogger(__name__)

MOVES_3X3 = 20
MOVES_SKEWB = 9


def _biased_modifier(rng: random.Random) -> str:
    """Sufijo para las jugadas de patrón difícil: favorece el giro doble (40%)."""
    if rng.random() < 0.4:
        return "2"
    return "'" if rng.random() < 0.5 else ""


def _weighted_modifier(rng: random.Random, none_cut: float, inverse_cut: float) -> str:
    r = rng.random()
    if r < none_cut:
        return ""
    if r < inverse_cut:
        return "'"
    return "2"


def _axis_candidates(faces: Sequence[str], last: str, second_last: str) -> List[str]:
    """Caras permitidas tras `last`, evitando su eje y la cara de hace dos jugadas.

    Si los filtros vacían el conjunto, solo se excluye la jugada anterior.
    """
    available = list(faces)
    if last:
        available = [f for f in available if f not in SAME_AXIS[last]]
    if last and second_last:
        available = [f for f in available if f != second_last]
    if not available:
        available = [f for f in faces if f != last]
    return available


def _axis_scramble(
    rng: random.Random,
    faces: Sequence[str],
    count: int,
    bias_pairs: Sequence[Sequence[str]],
    bias_every: int,
    none_cut: float,
    inverse_cut: float,
) -> List[str]:
    """Núcleo común de 3x3 y 2x2: filtrado por eje y sesgo hacia pares difíciles.

    Args:
        rng: Generador aleatorio.
        faces: Alfabeto de caras.
        count: Cantidad de movimientos.
        bias_pairs: Pares de caras que se prefieren cada `bias_every` jugadas.
        bias_every: Periodo del sesgo (5 en 3x3, 3 en 2x2).
        none_cut: Probabilidad acumulada del sufijo vacío.
        inverse_cut: Probabilidad acumulada hasta el sufijo "'".

    Returns:
        Lista de tokens.
    """
    seq: List[str] = []
    last = ""
    second_last = ""

    for i in range(count):
        available = _axis_candidates(faces, last, second_last)

        # Cada `bias_every` jugadas, 60% de usar la cara "adyacente" a la anterior
        if i > 0 and i % bias_every == 0 and last:
            pairs = [p for p in bias_pairs if last in p]
            if pairs:
                pair = random_element(rng, pairs)
                preferred = next((m for m in pair if m != last), None)
                if preferred and preferred in available and rng.random() < 0.6:
                    seq.append(preferred + _biased_modifier(rng))
                    second_last, last = last, preferred
                    continue

        face = random_element(rng, available)
        seq.append(face + _weighted_modifier(rng, none_cut, inverse_cut))
        second_last, last = last, face

    return seq


def generate_3x3(rng: Optional[random.Random] = None) -> str:
    """Genera un scramble de 3x3 de 20 movimientos.

    Nunca repite el eje de la jugada anterior (evita "R L" o "R R2") ni vuelve a
    la cara de hace dos jugadas. Cada 5 jugadas hay un 60% de probabilidad de
    elegir una cara adyacente a la anterior.

    Args:
        rng: Generador aleatorio opcional (para resultados reproducibles).

    Returns:
        Un string con 20 movimientos separados por espacios.
    """
    rng = rng or make_rng()
    seq = _axis_scramble(rng, FACES_3X3, MOVES_3X3, ADJACENT_PAIRS_3X3, 5, 0.33, 0.66)
    logger.debug("3x3 scramble: %s", seq)
    return " ".join(seq)


def generate_2x2(rng: Optional[random.Random] = None) -> str:
    """Genera un scramble de 2x2 de 9 a 11 movimientos con caras R, U, F.

    Args:
        rng: Generador aleatorio opcional.

    Returns:
        Movimientos separados por espacios.
    """
    rng = rng or make_rng()
    count = random_int(rng, 9, 11)
    seq = _axis_scramble(rng, FACES_2X2, count, HARD_PATTERNS_2X2, 3, 0.30, 0.65)
    logger.debug("2x2 scramble: %s", seq)
    return " ".join(seq)


def generate_pyraminx(rng: Optional[random.Random] = None) -> str:
    """Genera un scramble de Pyraminx: 8-10 movimientos base y 0-2 tips.

    Cada 3 iteraciones (si quedan al menos dos jugadas) intenta insertar un par
    de "patrón difícil"; si su primera cara no repite la anterior, el par
    consume dos jugadas de una vez. Los tips se agregan al final y cada uno
    aparece como máximo una vez.

    Args:
        rng: Generador aleatorio opcional.

    Returns:
        Movimientos separados por espacios (tips en minúscula al final).
    """
    rng = rng or make_rng()
    count = random_int(rng, 8, 10)

    seq: List[str] = []
    last = ""
    second_last = ""
    i = 0

    while i < count:
        if i % 3 == 0 and i + 1 < count:
            pattern = random_element(rng, HARD_PATTERNS_PYRAMINX)
            if pattern[0] != last:
                for face in pattern:
                    seq.append(face + random_element(rng, PYRAMINX_MODIFIERS))
                second_last, last = pattern[-2], pattern[-1]
                i += len(pattern)
                continue

        available = [m for m in FACES_PYRAMINX if m != last]
        # Evita reabrir una cancelación con la jugada de hace dos
        if last and second_last and second_last == ANTI_ROTATION[last]:
            available = [m for m in available if m != second_last]
        if not available:
            available = [m for m in FACES_PYRAMINX if m != last]

        face = random_element(rng, available)
        seq.append(face + ("'" if rng.random() < 0.6 else ""))
        second_last, last = last, face
        i += 1

    used_tips: Set[str] = set()
    for _ in range(random_int(rng, 0, 2)):
        tips = [t for t in TIPS_PYRAMINX if t not in used_tips]
        if not tips:
            break
        tip = random_element(rng, tips)
        seq.append(tip + random_element(rng, PYRAMINX_MODIFIERS))
        used_tips.add(tip)

    logger.debug("Pyraminx scramble: %s", seq)
    return " ".join(seq)


def generate_skewb(rng: Optional[random.Random] = None) -> str:
    """Genera un scramble de Skewb: exactamente 9 movimientos sobre R, U, L, B.

    Con 70% de probabilidad la siguiente esquina es adyacente a la anterior
    (sin volver a la de hace dos jugadas). El sufijo "'" sale el 55% de las veces.

    Args:
        rng: Generador aleatorio opcional.

    Returns:
        Movimientos separados por espacios.
    """
    rng = rng or make_rng()
    seq: List[str] = []
    last = ""
    second_last = ""

    for _ in range(MOVES_SKEWB):
        available = [c for c in CORNERS_SKEWB if c != last]

        corner: Optional[str] = None
        if last and last in ADJACENT_CORNERS and rng.random() < 0.7:
            options = [c for c in ADJACENT_CORNERS[last] if c != second_last]
            if options:
                corner = random_element(rng, options)

        if corner is None:
            corner = random_element(rng, available)

        seq.append(corner + ("'" if rng.random() < 0.55 else ""))
        second_last, last = last, corner

    logger.debug("Skewb scramble: %s", seq)
    return " ".join(seq)


def _dial_turns(rng: random.Random) -> List[str]:
    return [f"{pos}+{random_int(rng, 0, CLOCK_MAX_HOUR)}" for pos in DIAL_POSITIONS]


def generate_clock(rng: Optional[random.Random] = None) -> str:
    """Genera un scramble de Clock.

    Formato (12 tokens):
        (UR,DR,DL,UL) UL+h UR+h DR+h DL+h ALL+h y2 UL+h UR+h DR+h DL+h ALL+h

    Los pines (u=arriba, d=abajo) se eligen al azar, pero siempre quedan al menos
    dos abajo: se bajan pines al azar hasta cumplirlo. Las horas van de 0 a 6.

    Args:
        rng: Generador aleatorio opcional.

    Returns:
        Tokens separados por espacios.
    """
    rng = rng or make_rng()

    pins: Dict[str, str] = {pos: random_element(rng, PIN_STATES) for pos in PIN_POSITIONS}
    while sum(1 for p in pins.values() if p == "d") < 2:
        up = [pos for pos in PIN_POSITIONS if pins[pos] == "u"]
        pins[random_element(rng, up)] = "d"

    seq: List[str] = ["(" + ",".join(pins[pos] for pos in PIN_POSITIONS) + ")"]
    seq.extend(_dial_turns(rng))
    seq.append(CLOCK_FLIP)
    seq.extend(_dial_turns(rng))

    logger.debug("Clock scramble: %s", seq)
    return " ".join(seq)


def generate_3x3_bld(rng: Optional[random.Random] = None) -> str:
    """3x3 a ciegas: mismo scramble que el 3x3."""
    return generate_3x3(rng)


def generate_3x3_oh(rng: Optional[random.Random] = None) -> str:
    """3x3 a una mano: mismo scramble que el 3x3."""
    return generate_3x3(rng)
