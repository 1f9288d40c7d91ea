# scramble_sim/logic/validate.py
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from scramble_sim.core.puzzles import Difficulty, PuzzleType, THREE_FAMILY
from scramble_sim.logic.custom import (
    DEFAULT_MOVES_2X2,
    DEFAULT_MOVES_3X3,
    clamp_2x2_moves,
)
from scramble_sim.logic.dispatch import generate_scramble
from scramble_sim.logic.moves import (
    CLOCK_FLIP,
    CORNERS_SKEWB,
    CUSTOM_MODIFIERS,
    DIAL_POSITIONS,
    FACES_2X2,
    FACES_3X3,
    FACES_PYRAMINX,
    MODIFIERS,
    OPPOSITES,
    PYRAMINX_MODIFIERS,
    SAME_AXIS,
    SLICES,
    TIPS_PYRAMINX,
    split_token,
)

logger = logging.getLogger(__name__)

OnProgressCallback = Callable[[int, int], None]
ShouldCancelCallback = Callable[[], bool]


def _check_alphabet(
    tokens: Sequence[str], faces: Sequence[str], suffixes: Sequence[str]
) -> Tuple[List[str], List[str]]:
    errors: List[str] = []
    bases: List[str] = []
    for i, tok in enumerate(tokens):
        base, suf = split_token(tok)
        if base not in faces:
            errors.append(f"token {i} ({tok!r}): cara fuera del alfabeto")
        if suf not in suffixes:
            errors.append(f"token {i} ({tok!r}): sufijo inválido")
        bases.append(base)
    return errors, bases


def _check_length(tokens: Sequence[str], lo: int, hi: int, what: str = "movimientos") -> List[str]:
    if lo <= len(tokens) <= hi:
        return []
    expected = str(lo) if lo == hi else f"{lo}-{hi}"
    return [f"se esperaban {expected} {what}, hay {len(tokens)}"]


def _check_axis_moves(bases: Sequence[str]) -> List[str]:
    """Ejes consecutivos distintos y sin volver a la cara de hace dos jugadas."""
    errors: List[str] = []
    for i in range(1, len(bases)):
        prev, cur = bases[i - 1], bases[i]
        if prev in SAME_AXIS and cur in SAME_AXIS[prev]:
            errors.append(f"tokens {i - 1}-{i}: mismo eje ({prev} {cur})")
        if i >= 2 and bases[i - 2] == cur:
            errors.append(f"token {i}: repite la cara de hace dos jugadas ({cur})")
    return errors


def _check_no_repeat(bases: Sequence[str]) -> List[str]:
    return [
        f"tokens {i - 1}-{i}: cara repetida ({bases[i]})"
        for i in range(1, len(bases))
        if bases[i] == bases[i - 1]
    ]


def _check_pyraminx(tokens: Sequence[str]) -> List[str]:
    base_tokens = [t for t in tokens if t[:1] in FACES_PYRAMINX]
    tip_tokens = tokens[len(base_tokens):]

    errors = _check_length(base_tokens, 8, 10, "movimientos base")
    if len(tip_tokens) > 2:
        errors.append(f"como máximo 2 tips, hay {len(tip_tokens)}")

    alpha_errors, bases = _check_alphabet(base_tokens, FACES_PYRAMINX, PYRAMINX_MODIFIERS)
    errors += alpha_errors + _check_no_repeat(bases)

    tip_errors, tips = _check_alphabet(tip_tokens, TIPS_PYRAMINX, PYRAMINX_MODIFIERS)
    errors += tip_errors
    if len(set(tips)) != len(tips):
        errors.append(f"tips repetidos: {' '.join(tip_tokens)}")
    return errors


def _check_clock(tokens: Sequence[str]) -> List[str]:
    errors = _check_length(tokens, 12, 12, "tokens")
    if errors:
        return errors

    pins = tokens[0]
    if not (pins.startswith("(") and pins.endswith(")")):
        return [f"token de pines inválido: {pins!r}"]
    states = pins[1:-1].split(",")
    if len(states) != 4 or any(s not in ("u", "d") for s in states):
        errors.append(f"token de pines inválido: {pins!r}")
    elif states.count("d") < 2:
        errors.append(f"menos de dos pines abajo: {pins}")

    if tokens[6] != CLOCK_FLIP:
        errors.append(f"el token 6 debe ser {CLOCK_FLIP!r}, es {tokens[6]!r}")

    for offset in (1, 7):
        for pos, tok in zip(DIAL_POSITIONS, tokens[offset:offset + 5]):
            base, suf = split_token(tok)
            if base != pos or not suf.startswith("+") or not suf[1:].isdigit():
                errors.append(f"giro de dial inválido: {tok!r} (se esperaba {pos}+h)")
            elif not 0 <= int(suf[1:]) <= 6:
                errors.append(f"hora fuera de rango en {tok!r}")
    return errors


def check_scramble(puzzle: PuzzleType, text: str) -> List[str]:
    """Verifica la forma de un scramble estándar.

    Comprueba largo, alfabeto y las restricciones de cada puzzle (ejes en 3x3/2x2,
    repetición en Skewb/Pyraminx, tips únicos, pines de Clock).

    Args:
        puzzle: Evento al que pertenece el scramble.
        text: Scramble separado por espacios.

    Returns:
        Lista de problemas encontrados; vacía si el scramble es válido.
    """
    tokens = text.split()

    if puzzle in THREE_FAMILY:
        errors, bases = _check_alphabet(tokens, FACES_3X3, MODIFIERS)
        return _check_length(tokens, 20, 20) + errors + _check_axis_moves(bases)

    if puzzle == PuzzleType.TWO:
        errors, bases = _check_alphabet(tokens, FACES_2X2, MODIFIERS)
        return _check_length(tokens, 9, 11) + errors + _check_axis_moves(bases)

    if puzzle == PuzzleType.PYRAMINX:
        return _check_pyraminx(tokens)

    if puzzle == PuzzleType.SKEWB:
        errors, bases = _check_alphabet(tokens, CORNERS_SKEWB, ["", "'"])
        return _check_length(tokens, 9, 9) + errors + _check_no_repeat(bases)

    return _check_clock(tokens)


def check_custom_scramble(
    puzzle: PuzzleType,
    text: str,
    move_count: Optional[int] = None,
    difficulty: Difficulty = Difficulty.MEDIUM,
) -> List[str]:
    """Verifica un scramble personalizado de 3x3 o 2x2.

    Pyraminx, Skewb y Clock se validan como scrambles estándar.

    Returns:
        Lista de problemas encontrados; vacía si el scramble es válido.
    """
    tokens = text.split()

    if puzzle == PuzzleType.TWO:
        expected = clamp_2x2_moves(move_count or DEFAULT_MOVES_2X2, difficulty)
        mods = CUSTOM_MODIFIERS[Difficulty.EASY if difficulty == Difficulty.EASY else Difficulty.MEDIUM]
        errors, bases = _check_alphabet(tokens, FACES_2X2, mods)
        return _check_length(tokens, max(expected, 0), max(expected, 0)) + errors + _check_no_repeat(bases)

    if puzzle not in THREE_FAMILY:
        return check_scramble(puzzle, text)

    expected = max(move_count or DEFAULT_MOVES_3X3, 0)
    faces = FACES_3X3 + SLICES if difficulty == Difficulty.HARD else FACES_3X3
    errors, bases = _check_alphabet(tokens, faces, CUSTOM_MODIFIERS[difficulty])
    errors = _check_length(tokens, expected, expected) + errors

    last_axis = ""
    for i, cur in enumerate(bases):
        if i > 0:
            prev = bases[i - 1]
            if cur == prev or OPPOSITES.get(prev) == cur:
                errors.append(f"tokens {i - 1}-{i}: cara repetida u opuesta ({prev} {cur})")
        if last_axis and last_axis in SAME_AXIS.get(cur, ()):
            errors.append(f"token {i}: mismo eje que la última cara exterior ({cur})")
        if cur in SAME_AXIS:
            last_axis = cur
    return errors


def is_valid(puzzle: PuzzleType, text: str) -> bool:
    """True si `check_scramble` no encuentra problemas."""
    return not check_scramble(puzzle, text)


@dataclass
class AuditResult:
    """Resultado de auditar muchos scrambles de un mismo evento."""

    puzzle: PuzzleType
    samples: int = 0
    invalid: int = 0
    duplicates: int = 0
    first_errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.invalid == 0


def audit_scrambles(
    samples: int,
    puzzles: Optional[Iterable[PuzzleType]] = None,
    on_progress: Optional[OnProgressCallback] = None,
    should_cancel: Optional[ShouldCancelCallback] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Dict[PuzzleType, AuditResult]]:
    """Genera `samples` scrambles por evento y verifica cada uno.

    Cuenta los scrambles inválidos y los duplicados exactos (con 1000 muestras
    deberían ser prácticamente cero).

    Args:
        samples: Cantidad de scrambles por evento.
        puzzles: Eventos a auditar (por defecto, todos).
        on_progress: Callback opcional con (hechos, total).
        should_cancel: Callback opcional para cancelar (retorna True si se cancela).
        rng: Generador aleatorio opcional.

    Returns:
        Diccionario evento -> `AuditResult`, o None si se canceló.
    """
    targets = list(puzzles) if puzzles is not None else list(PuzzleType)
    total = samples * len(targets)
    done = 0
    results: Dict[PuzzleType, AuditResult] = {}

    for puzzle in targets:
        result = AuditResult(puzzle)
        seen: Set[str] = set()
        for _ in range(samples):
            if should_cancel is not None and should_cancel():
                return None

            scramble = generate_scramble(puzzle, rng=rng, strict=True)
            errors = check_scramble(puzzle, scramble)
            result.samples += 1
            if errors:
                result.invalid += 1
                if len(result.first_errors) < 5:
                    result.first_errors.append(f"{scramble}: {errors[0]}")
            if scramble in seen:
                result.duplicates += 1
            seen.add(scramble)

            done += 1
            if on_progress is not None:
                on_progress(done, total)

        logger.info(
            "Auditoría %s: %d muestras, %d inválidas, %d duplicadas",
            puzzle, result.samples, result.invalid, result.duplicates,
        )
        results[puzzle] = result

    return results
