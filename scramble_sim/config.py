# scramble_sim/config.py
"""Carga de la configuración del proyecto (`config.toml`).

El archivo se busca, en este orden:

1. La ruta indicada en la variable de entorno `SCRAMBLE_SIM_CONFIG`.
2. `config.toml` en el directorio de trabajo actual.
3. `config.toml` en la raíz del repositorio (junto a `scramble_sim/`), que es
   donde queda en un checkout o en una instalación editable.

Si ninguno existe se usan los valores por defecto de cada llamada.
"""

from __future__ import annotations

import logging
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

_CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "SCRAMBLE_SIM_CONFIG"


def _candidate_paths() -> List[Path]:
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        # Una ruta explícita no cae a las demás aunque no exista
        return [Path(env)]
    return [
        Path.cwd() / _CONFIG_FILENAME,
        Path(__file__).resolve().parents[1] / _CONFIG_FILENAME,
    ]


def _config_path() -> Path:
    candidates = _candidate_paths()
    for path in candidates:
        if path.is_file():
            return path
    return candidates[-1]


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """Lee y cachea la configuración como diccionario.

    Si el archivo no existe se usa un diccionario vacío (todos los valores por
    defecto).
    """
    path = _config_path()
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError:
        logger.debug("Sin %s en %s; se usan valores por defecto", _CONFIG_FILENAME, path.parent)
        return {}
    logger.debug("Configuración cargada de %s", path)
    return data


def get_section(path: str, default: Any = None) -> Any:
    """Obtiene un valor anidado usando notación con puntos (ej: "dispatch.strict").

    Raises:
        KeyError: Si la ruta no existe y no se indicó `default`.
    """
    data: Any = get_config()
    for part in path.split("."):
        if isinstance(data, dict) and part in data:
            data = data[part]
        else:
            if default is not None:
                return default
            raise KeyError(f"Configuration path '{path}' not found")
    return data


def get_flag(path: str, default: bool = False) -> bool:
    """Lee un booleano de la configuración.

    Solo se aceptan `true` / `false` de TOML. Cualquier otro valor (por ejemplo
    la cadena "false") se ignora con un WARNING y se usa `default`.
    """
    value = get_section(path, default)
    if isinstance(value, bool):
        return value
    logger.warning("%s debe ser true o false, no %r; se usa %s", path, value, default)
    return default


__all__ = ["CONFIG_ENV_VAR", "get_config", "get_flag", "get_section"]
