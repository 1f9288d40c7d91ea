# scramble_sim/__main__.py
from __future__ import annotations

import logging
import sys
from typing import NoReturn

from PySide6.QtWidgets import QApplication

from scramble_sim.app.main_window import MainWindow
from scramble_sim.config import get_section


def main() -> NoReturn:
    """Punto de entrada del panel de previsualización.

    Configura el logging según `logging.level` del config (ver
    `scramble_sim.config` para saber dónde se busca `config.toml`), crea la
    instancia de `QApplication`, construye la ventana principal (`MainWindow`)
    y ejecuta el loop de eventos de Qt.

    Returns:
        No retorna (finaliza el proceso con `sys.exit`).
    """
    logging.basicConfig(
        level=get_section("logging.level", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    w = MainWindow()
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
