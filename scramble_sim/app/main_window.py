# scramble_sim/app/main_window.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from PySide6.QtCore import QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QProgressBar,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from scramble_sim.app.audit_worker import AuditWorker
from scramble_sim.core.puzzles import Difficulty, PuzzleType
from scramble_sim.logic.dispatch import generate_custom_scramble, generate_scramble
from scramble_sim.logic.moves import invert_sequence
from scramble_sim.logic.schedule import (
    daily_scramble,
    next_challenge,
    puzzle_emoji,
    thread_content,
)
from scramble_sim.logic.validate import AuditResult, check_custom_scramble, check_scramble

logger = logging.getLogger(__name__)

# Intervalo de actualización de la cuenta regresiva "Próximo reto"
NEXT_REFRESH_MS = 60_000


class MainWindow(QMainWindow):
    """Panel de previsualización de scrambles.

    Esta clase coordina:
    - La generación estándar y personalizada para cada evento
    - La vista previa del mensaje del reto diario
    - La validación del scramble mostrado
    - La auditoría masiva en segundo plano (`AuditWorker`)
    """

    def __init__(self) -> None:
        """Inicializa la ventana principal, crea la UI y conecta señales."""
        super().__init__()
        self.setWindowTitle("Daily Scramble - Preview")

        self.current_puzzle: PuzzleType = PuzzleType.THREE
        self.current_scramble: str = ""
        self.history: List[str] = []
        self._audit_worker: Optional[AuditWorker] = None

        # --- UI ---
        root = QWidget()
        root_layout = QHBoxLayout(root)

        left = QWidget()
        left_layout = QVBoxLayout(left)

        self.lbl_puzzle = QLabel("")
        left_layout.addWidget(self.lbl_puzzle)

        self.txt_output = QPlainTextEdit()
        self.txt_output.setReadOnly(True)
        left_layout.addWidget(self.txt_output, 1)

        self.lbl_valid = QLabel("")
        left_layout.addWidget(self.lbl_valid)

        self.lbl_next = QLabel("")
        left_layout.addWidget(self.lbl_next)

        root_layout.addWidget(left, 1)

        panel = QWidget()
        panel_layout = QVBoxLayout(panel)
        panel.setFixedWidth(320)

        # Evento y parámetros
        panel_layout.addWidget(QLabel("Evento"))
        self.cmb_puzzle = QComboBox()
        for p in PuzzleType:
            self.cmb_puzzle.addItem(f"{puzzle_emoji(p)} {p.value}", p.value)
        self.cmb_puzzle.setCurrentIndex(list(PuzzleType).index(PuzzleType.THREE))
        panel_layout.addWidget(self.cmb_puzzle)

        row_params = QHBoxLayout()
        self.cmb_difficulty = QComboBox()
        for d in Difficulty:
            self.cmb_difficulty.addItem(d.value.capitalize(), d.value)
        self.cmb_difficulty.setCurrentIndex(list(Difficulty).index(Difficulty.MEDIUM))
        self.spin_moves = QSpinBox()
        self.spin_moves.setRange(4, 30)
        self.spin_moves.setSpecialValueText("Moves: default")
        self.spin_moves.setValue(4)
        row_params.addWidget(self.cmb_difficulty, 1)
        row_params.addWidget(self.spin_moves, 1)
        panel_layout.addLayout(row_params)

        row_gen = QHBoxLayout()
        self.btn_generate = QPushButton("Generar")
        self.btn_custom = QPushButton("Personalizado")
        row_gen.addWidget(self.btn_generate)
        row_gen.addWidget(self.btn_custom)
        panel_layout.addLayout(row_gen)

        row_extra = QHBoxLayout()
        self.btn_daily = QPushButton("Reto del día")
        self.btn_invert = QPushButton("Invertir")
        row_extra.addWidget(self.btn_daily)
        row_extra.addWidget(self.btn_invert)
        panel_layout.addLayout(row_extra)

        # Auditoría
        panel_layout.addWidget(QLabel("Auditoría (scrambles por evento)"))
        row_audit = QHBoxLayout()
        self.spin_samples = QSpinBox()
        self.spin_samples.setRange(10, 5000)
        self.spin_samples.setValue(1000)
        self.btn_audit = QPushButton("Auditar")
        self.btn_cancel_audit = QPushButton("Cancelar")
        self.btn_cancel_audit.setEnabled(False)
        row_audit.addWidget(self.spin_samples, 1)
        row_audit.addWidget(self.btn_audit)
        row_audit.addWidget(self.btn_cancel_audit)
        panel_layout.addLayout(row_audit)

        self.audit_bar = QProgressBar()
        self.audit_bar.setRange(0, 1)
        self.audit_bar.setValue(0)
        panel_layout.addWidget(self.audit_bar)

        self.list_audit = QListWidget()
        panel_layout.addWidget(self.list_audit, 1)

        panel_layout.addWidget(QLabel("Historial"))
        self.list_history = QListWidget()
        panel_layout.addWidget(self.list_history, 1)

        root_layout.addWidget(panel)
        self.setCentralWidget(root)

        # --- Conexiones ---
        self.btn_generate.clicked.connect(self.on_generate)
        self.btn_custom.clicked.connect(self.on_custom)
        self.btn_daily.clicked.connect(self.on_daily)
        self.btn_invert.clicked.connect(self.on_invert)
        self.btn_audit.clicked.connect(self.on_audit)
        self.btn_cancel_audit.clicked.connect(self.cancel_audit)

        # Atajos
        self.btn_generate.setShortcut("Ctrl+G")
        self.btn_daily.setShortcut("Ctrl+D")

        self._refresh_next_label()
        self._next_timer = QTimer(self)
        self._next_timer.setInterval(NEXT_REFRESH_MS)
        self._next_timer.timeout.connect(self._refresh_next_label)
        self._next_timer.start()

    # -------------------
    # Helpers UI
    # -------------------
    def _selected_puzzle(self) -> PuzzleType:
        return PuzzleType(self.cmb_puzzle.currentData())

    def _selected_moves(self) -> Optional[int]:
        """Cantidad de movimientos elegida; None si está en "default"."""
        value = int(self.spin_moves.value())
        return None if value == self.spin_moves.minimum() else value

    def _show_scramble(self, puzzle: PuzzleType, scramble: str, errors: List[str], text: Optional[str] = None) -> None:
        """Muestra un scramble, su validación y lo agrega al historial.

        Args:
            puzzle: Evento del scramble.
            scramble: Movimientos separados por espacios.
            errors: Problemas encontrados por el validador.
            text: Texto a mostrar en lugar del scramble (ej: el mensaje del hilo).
        """
        self.current_puzzle = puzzle
        self.current_scramble = scramble
        self.lbl_puzzle.setText(f"{puzzle_emoji(puzzle)} {puzzle.value}")
        self.txt_output.setPlainText(text if text is not None else scramble)
        self.lbl_valid.setText(
            "Válido ✅" if not errors else "Inválido ❌: " + "; ".join(errors[:3])
        )

        self.history.append(scramble)
        self.list_history.addItem(f"{puzzle.value}: {scramble}")
        self.list_history.scrollToBottom()
        self._refresh_next_label()

    def _refresh_next_label(self) -> None:
        nxt = next_challenge()
        when = "hoy" if nxt.is_today else nxt.day
        self.lbl_next.setText(
            f"Próximo reto: {puzzle_emoji(nxt.puzzle)} {nxt.puzzle.value} ({when}, {nxt.next_time}) "
            f"en {nxt.time_until}"
        )

    def _set_controls_enabled(self, enabled: bool) -> None:
        """Habilita o deshabilita los controles mientras corre la auditoría."""
        self.btn_generate.setEnabled(enabled)
        self.btn_custom.setEnabled(enabled)
        self.btn_daily.setEnabled(enabled)
        self.btn_invert.setEnabled(enabled)
        self.btn_audit.setEnabled(enabled)
        self.spin_samples.setEnabled(enabled)

    # -------------------
    # Botones
    # -------------------
    def on_generate(self) -> None:
        """Genera el scramble estándar del evento seleccionado."""
        puzzle = self._selected_puzzle()
        scramble = generate_scramble(puzzle)
        self._show_scramble(puzzle, scramble, check_scramble(puzzle, scramble))

    def on_custom(self) -> None:
        """Genera un scramble personalizado con dificultad y cantidad elegidas."""
        puzzle = self._selected_puzzle()
        difficulty = Difficulty(self.cmb_difficulty.currentData())
        moves = self._selected_moves()
        scramble = generate_custom_scramble(puzzle, moves, difficulty)
        self._show_scramble(puzzle, scramble, check_custom_scramble(puzzle, scramble, moves, difficulty))

    def on_daily(self) -> None:
        """Muestra el mensaje del reto de hoy tal como se publicaría en el hilo."""
        daily = daily_scramble()
        self._show_scramble(
            daily.puzzle,
            daily.scramble,
            check_scramble(daily.puzzle, daily.scramble),
            text=thread_content(daily.scramble),
        )

    def on_invert(self) -> None:
        """Muestra la secuencia que deshace el scramble actual."""
        if not self.current_scramble:
            return
        try:
            inverse = invert_sequence(self.current_scramble, self.current_puzzle)
        except ValueError as exc:
            QMessageBox.warning(self, "Sin inverso", str(exc))
            return
        self.txt_output.setPlainText(inverse)
        self.lbl_valid.setText("Inverso del scramble actual")

    # -------------------
    # Auditoría (thread)
    # -------------------
    def on_audit(self) -> None:
        """Lanza la auditoría de todos los eventos en un hilo aparte."""
        if self._audit_worker is not None and self._audit_worker.isRunning():
            return

        self.list_audit.clear()
        self.audit_bar.setRange(0, 0)  # indeterminado hasta el primer progreso
        self.btn_cancel_audit.setEnabled(True)
        self._set_controls_enabled(False)

        self._audit_worker = AuditWorker(int(self.spin_samples.value()))
        self._audit_worker.progress.connect(self._on_audit_progress)
        self._audit_worker.finished_report.connect(self._on_audit_finished)
        self._audit_worker.error.connect(self._on_audit_error)
        self._audit_worker.finished.connect(self._on_audit_thread_finished)
        self._audit_worker.start()

    def _on_audit_progress(self, done: int, total: int) -> None:
        self.audit_bar.setRange(0, total)
        self.audit_bar.setValue(done)

    def _on_audit_finished(self, report: Optional[Dict[PuzzleType, AuditResult]]) -> None:
        """Muestra el resumen por evento (o nada si se canceló).

        Args:
            report: Resultado de `audit_scrambles`.
        """
        self.btn_cancel_audit.setEnabled(False)
        self._set_controls_enabled(True)

        if report is None:
            self.list_audit.addItem("Auditoría cancelada.")
            return

        for puzzle, result in report.items():
            mark = "✅" if result.ok else "❌"
            self.list_audit.addItem(
                f"{mark} {puzzle.value}: {result.invalid}/{result.samples} inválidos, "
                f"{result.duplicates} duplicados"
            )
            for err in result.first_errors:
                self.list_audit.addItem(f"    {err}")

    def _on_audit_error(self, msg: str) -> None:
        """Maneja errores emitidos por el hilo de auditoría.

        Args:
            msg: Traceback del error.
        """
        self.audit_bar.setRange(0, 1)
        self.audit_bar.setValue(0)
        self.list_audit.addItem("Error en la auditoría (revisa el log).")
        self.btn_cancel_audit.setEnabled(False)
        self._set_controls_enabled(True)

    def _on_audit_thread_finished(self) -> None:
        """Limpia el worker cuando el hilo finaliza."""
        if self._audit_worker is not None:
            self._audit_worker.deleteLater()
            self._audit_worker = None

    def cancel_audit(self) -> None:
        """Pide al hilo de auditoría que se detenga."""
        if self._audit_worker is not None and self._audit_worker.isRunning():
            self._audit_worker.requestInterruption()
            self._audit_worker.wait(300)
        self.btn_cancel_audit.setEnabled(False)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Evento de cierre de ventana: detiene la auditoría si está activa.

        Args:
            event: Evento de cierre de Qt.
        """
        self._next_timer.stop()
        if self._audit_worker is not None and self._audit_worker.isRunning():
            self._audit_worker.requestInterruption()
            self._audit_worker.wait(1500)
        event.accept()
