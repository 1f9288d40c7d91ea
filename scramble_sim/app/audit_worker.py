# scramble_sim/app/audit_worker.py
from __future__ import annotations

import logging
import traceback
from typing import Dict, List, Optional

from PySide6.QtCore import QThread, Signal

from scramble_sim.core.puzzles import PuzzleType
from scramble_sim.logic.validate import AuditResult, audit_scrambles

logger = logging.getLogger(__name__)


class AuditWorker(QThread):
    """Hilo de trabajo para auditar scrambles sin bloquear la UI.

    Genera `samples` scrambles por evento, los valida y emite el resumen.

    Signals:
        progress(int, int): Scrambles generados y total.
        finished_report(object): dict[PuzzleType, AuditResult] o None si se canceló.
        error(str): Se emite si ocurre una excepción durante la auditoría.
    """

    progress = Signal(int, int)
    finished_report = Signal(object)
    error = Signal(str)

    def __init__(self, samples: int, puzzles: Optional[List[PuzzleType]] = None) -> None:
        """Crea el worker.

        Args:
            samples: Cantidad de scrambles por evento.
            puzzles: Eventos a auditar (por defecto, todos).
        """
        super().__init__()
        self.samples: int = samples
        self.puzzles: Optional[List[PuzzleType]] = puzzles

    def run(self) -> None:
        """Punto de entrada del hilo."""
        try:
            report: Optional[Dict[PuzzleType, AuditResult]] = audit_scrambles(
                self.samples,
                self.puzzles,
                on_progress=self.progress.emit,
                should_cancel=self.isInterruptionRequested,
            )
            self.finished_report.emit(report)
        except Exception:
            msg = traceback.format_exc()
            logger.error("Fallo en la auditoría de scrambles:\n%s", msg)
            self.error.emit(msg)
