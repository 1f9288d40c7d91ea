# scramble_sim/logic/rng.py
from __future__ import annotations

import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Crea el generador de números aleatorios usado por los scrambles.

    Args:
        seed: Semilla opcional para obtener resultados reproducibles. Si es None,
            cada llamada produce una secuencia distinta.

    Returns:
        Una instancia independiente de `random.Random`.
    """
    return random.Random(seed)


def random_int(rng: random.Random, lo: int, hi: int) -> int:
    """Entero uniforme en el rango cerrado [lo, hi]."""
    return rng.randint(lo, hi)


def random_element(rng: random.Random, seq: Sequence[T]) -> T:
    """Elige un elemento uniforme de `seq`.

    Raises:
        IndexError: Si `seq` está vacía. Los generadores nunca la llaman así.
    """
    return seq[int(rng.random() * len(seq))]


def shuffle(rng: random.Random, seq: Sequence[T]) -> List[T]:
    """Devuelve una permutación aleatoria (Fisher-Yates) sin modificar `seq`."""
    out = list(seq)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out
