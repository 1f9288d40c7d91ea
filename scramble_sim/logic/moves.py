# scramble_sim/logic/moves.py
from __future__ import annotations

import re
from typing import Dict, List, Set, Tuple

from scramble_sim.core.puzzles import Difficulty, PuzzleType, THREE_FAMILY

# --------------------------
# 3x3 (y variantes BLD / OH)
# --------------------------
FACES_3X3: List[str] = ["R", "L", "U", "D", "F", "B"]
SLICES: List[str] = ["M", "E", "S"]
MODIFIERS: List[str] = ["", "'", "2"]

OPPOSITES: Dict[str, str] = {
    "R": "L", "L": "R",
    "U": "D", "D": "U",
    "F": "B", "B": "F",
}

SAME_AXIS: Dict[str, List[str]] = {
    "R": ["R", "L"], "L": ["R", "L"],
    "U": ["U", "D"], "D": ["U", "D"],
    "F": ["F", "B"], "B": ["F", "B"],
}

# Caras adyacentes: combinaciones tipo "slice" más difíciles de leer
ADJACENT_PAIRS_3X3: List[Tuple[str, str]] = [
    ("R", "F"), ("R", "U"), ("U", "F"), ("L", "B"), ("L", "D"), ("D", "B"),
]

CUSTOM_MODIFIERS: Dict[Difficulty, List[str]] = {
    Difficulty.EASY: ["", "'"],
    Difficulty.MEDIUM: ["", "'", "2"],
    Difficulty.HARD: ["", "'", "2", "w", "w'", "w2"],
}

# --------------------------
# 2x2
# --------------------------
FACES_2X2: List[str] = ["R", "U", "F"]
HARD_PATTERNS_2X2: List[Tuple[str, str]] = [("R", "U"), ("R", "F"), ("U", "F")]

# --------------------------
# Pyraminx
# --------------------------
FACES_PYRAMINX: List[str] = ["R", "L", "U", "B"]
TIPS_PYRAMINX: List[str] = ["r", "l", "u", "b"]
PYRAMINX_MODIFIERS: List[str] = ["", "'"]

ANTI_ROTATION: Dict[str, str] = {
    "R": "L", "L": "R",
    "U": "B", "B": "U",
}

HARD_PATTERNS_PYRAMINX: List[Tuple[str, str]] = [
    ("R", "L"),
    ("U", "B"),
    ("R", "U"),
    ("L", "B"),
]

# --------------------------
# Skewb
# --------------------------
CORNERS_SKEWB: List[str] = ["R", "U", "L", "B"]

ADJACENT_CORNERS: Dict[str, List[str]] = {
    "R": ["U", "L", "B"],
    "U": ["R", "L", "B"],
    "L": ["R", "U", "B"],
    "B": ["R", "U", "L"],
}

# --------------------------
# Clock
# --------------------------
PIN_POSITIONS: List[str] = ["UR", "DR", "DL", "UL"]
PIN_STATES: List[str] = ["u", "d"]
DIAL_POSITIONS: List[str] = ["UL", "UR", "DR", "DL", "ALL"]
CLOCK_MAX_HOUR = 6
CLOCK_FLIP = "y2"

_DIAL_RE = re.compile(r"^(UL|UR|DR|DL|ALL)([+-])([0-6])$")
_PINS_RE = re.compile(r"^\(([ud]),([ud]),([ud]),([ud])\)$")

# --------------------------
# Gramática por puzzle
# --------------------------
_GRAMMAR: Dict[PuzzleType, Tuple[Set[str], Set[str]]] = {
    PuzzleType.TWO: (set(FACES_2X2), {"", "'", "2"}),
    PuzzleType.PYRAMINX: (set(FACES_PYRAMINX) | set(TIPS_PYRAMINX), {"", "'"}),
    PuzzleType.SKEWB: (set(CORNERS_SKEWB), {"", "'"}),
}
for _p in THREE_FAMILY:
    _GRAMMAR[_p] = (set(FACES_3X3) | set(SLICES), set(CUSTOM_MODIFIERS[Difficulty.HARD]))


def _clean(tok: str) -> str:
    return tok.strip().replace("’", "'").replace("‘", "'")


def split_token(tok: str) -> Tuple[str, str]:
    """Separa un token en (base, sufijo).

    Para los cubos, Pyraminx y Skewb la base es la primera letra. Para Clock la
    base es la posición del dial (ej: "ALL+3" -> ("ALL", "+3")); el token de
    pines y "y2" se devuelven enteros como base.

    Args:
        tok: Token de movimiento.

    Returns:
        Tupla `(base, sufijo)`.
    """
    tok = _clean(tok)
    m = _DIAL_RE.match(tok)
    if m:
        return m.group(1), m.group(2) + m.group(3)
    if tok == CLOCK_FLIP or _PINS_RE.match(tok):
        return tok, ""
    return tok[:1], tok[1:]


def normalize_token(tok: str, puzzle: PuzzleType = PuzzleType.THREE) -> str:
    """Normaliza un token de movimiento según la notación del puzzle.

    Reglas principales:
    - Elimina espacios y convierte comilla tipográfica (’ o ‘) a comilla simple (').
    - Corrige el caso típico "D2'" -> "D2" (y "Rw2'" -> "Rw2").
    - Valida base y sufijo contra la gramática de `puzzle`.

    Args:
        tok: Token de movimiento (por ejemplo: "R", "U'", "F2", "UL+3").
        puzzle: Puzzle cuya notación se usa para validar.

    Returns:
        Token normalizado. Un token vacío retorna "".

    Raises:
        ValueError: Si el token no pertenece a la notación del puzzle.
    """
    tok = _clean(tok)
    if not tok:
        return ""

    if puzzle == PuzzleType.CLOCK:
        if tok == CLOCK_FLIP or _PINS_RE.match(tok) or _DIAL_RE.match(tok):
            return tok
        raise ValueError(f"Movimiento inválido para {puzzle}: {tok}")

    bases, suffixes = _GRAMMAR[puzzle]
    base, suf = tok[0], tok[1:]

    if base not in bases:
        raise ValueError(f"Movimiento inválido para {puzzle}: {tok}")

    # Corrección: "D2'" -> "D2"
    if suf.endswith("2'"):
        suf = suf[:-1]

    if suf not in suffixes:
        raise ValueError(f"Sufijo inválido en: {tok}")

    return base + suf


def inverse_move(m: str, puzzle: PuzzleType = PuzzleType.THREE) -> str:
    """Devuelve el movimiento inverso de un token.

    Ejemplos:
        - "R"  -> "R'"
        - "R'" -> "R"
        - "R2" -> "R2"
        - "Rw" -> "Rw'"

    Args:
        m: Movimiento en la notación de `puzzle`.
        puzzle: Puzzle al que pertenece el movimiento.

    Returns:
        El movimiento inverso. Si `m` es un string vacío, retorna "".

    Raises:
        ValueError: Si `m` no es un token válido, o si el puzzle es Clock
            (los pines hacen que un token no tenga inverso por sí solo).
    """
    if puzzle == PuzzleType.CLOCK:
        raise ValueError("Los movimientos de Clock no tienen inverso individual.")

    m = normalize_token(m, puzzle)
    if not m:
        return m

    base, suf = m[0], m[1:]
    if suf.endswith("2"):
        return m
    if suf.endswith("'"):
        return base + suf[:-1]
    return base + suf + "'"


def parse_sequence(text: str, puzzle: PuzzleType = PuzzleType.THREE) -> List[str]:
    """Convierte una secuencia escrita como texto en una lista de tokens normalizados.

    Args:
        text: Secuencia separada por espacios (ej: "R U R' U'").
        puzzle: Notación usada para validar cada token.

    Returns:
        Lista de tokens normalizados, en el mismo orden.

    Raises:
        ValueError: Si algún token es inválido.
    """
    return [normalize_token(t, puzzle) for t in text.split() if t.strip()]


def invert_sequence(text: str, puzzle: PuzzleType = PuzzleType.THREE) -> str:
    """Secuencia que deshace `text`: orden inverso y cada movimiento invertido."""
    return " ".join(inverse_move(t, puzzle) for t in reversed(parse_sequence(text, puzzle)))
