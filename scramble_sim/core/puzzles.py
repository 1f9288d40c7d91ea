# scramble_sim/core/puzzles.py
from __future__ import annotations

from enum import Enum
from typing import Dict, List


class PuzzleType(str, Enum):
    """Eventos soportados por el generador de scrambles.

    El valor de cada miembro es la etiqueta canónica del evento (la misma que
    usan los comandos del bot y el panel de previsualización). BLD y OH son
    eventos distintos, pero se mezclan igual que el 3x3.
    """

    TWO = "2x2"
    THREE = "3x3"
    THREE_BLD = "3x3 BLD"
    THREE_OH = "3x3 OH"
    PYRAMINX = "Pyraminx"
    SKEWB = "Skewb"
    CLOCK = "Clock"

    def __str__(self) -> str:
        return self.value


class Difficulty(str, Enum):
    """Nivel de dificultad para los scrambles personalizados (3x3 y 2x2)."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    def __str__(self) -> str:
        return self.value


THREE_FAMILY = (PuzzleType.THREE, PuzzleType.THREE_BLD, PuzzleType.THREE_OH)

# Lunes = 0 (igual que date.weekday())
DAY_NAMES: List[str] = [
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
]

DAY_SCHEDULE: Dict[str, PuzzleType] = {
    "Monday": PuzzleType.SKEWB,
    "Tuesday": PuzzleType.THREE_BLD,
    "Wednesday": PuzzleType.TWO,
    "Thursday": PuzzleType.THREE,
    "Friday": PuzzleType.PYRAMINX,
    "Saturday": PuzzleType.THREE_OH,
    "Sunday": PuzzleType.CLOCK,
}

DEFAULT_EMOJI: Dict[PuzzleType, str] = {
    PuzzleType.SKEWB: "🔷",
    PuzzleType.THREE_BLD: "🧠",
    PuzzleType.TWO: "🟨",
    PuzzleType.THREE: "🟦",
    PuzzleType.PYRAMINX: "🔺",
    PuzzleType.THREE_OH: "🤚",
    PuzzleType.CLOCK: "🕙",
}
FALLBACK_EMOJI = "🧩"


class ScrambleError(ValueError):
    """Error base del generador (solo se lanza en modo estricto)."""


class InvalidPuzzleType(ScrambleError):
    """El identificador de evento no corresponde a ningún `PuzzleType`."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Tipo de puzzle no soportado: {value!r}")
        self.value = value


class InvalidDifficulty(ScrambleError):
    """La dificultad no es easy, medium ni hard."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Dificultad no soportada: {value!r}")
        self.value = value
