import os
import unittest
from unittest import mock

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:
    from PySide6.QtTest import QTest
    from PySide6.QtWidgets import QApplication

    from scramble_sim.app.main_window import NEXT_REFRESH_MS, MainWindow
except ImportError:  # PySide6 sin librerías gráficas del sistema
    QApplication = None

from scramble_sim.core.puzzles import PuzzleType
from scramble_sim.logic.schedule import NextChallenge


@unittest.skipIf(QApplication is None, "PySide6 no disponible")
class TestNextChallengeLabel(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance() or QApplication([])

    def setUp(self):
        self.window = MainWindow()
        self.addCleanup(self.window.close)

    def test_countdown_timer_is_running(self):
        self.assertTrue(self.window._next_timer.isActive())
        self.assertEqual(self.window._next_timer.interval(), NEXT_REFRESH_MS)

    def test_label_follows_timer_and_generate(self):
        later = NextChallenge("Sunday", PuzzleType.CLOCK, False, "16:00 Asia/Kolkata", "0h 5m")
        with mock.patch("scramble_sim.app.main_window.next_challenge", return_value=later):
            self.window._next_timer.setInterval(10)
            QTest.qWait(100)
        self.assertIn("0h 5m", self.window.lbl_next.text())

        sooner = NextChallenge("Sunday", PuzzleType.CLOCK, False, "16:00 Asia/Kolkata", "0h 1m")
        with mock.patch("scramble_sim.app.main_window.next_challenge", return_value=sooner):
            self.window.on_generate()
        self.assertIn("0h 1m", self.window.lbl_next.text())


if __name__ == "__main__":
    unittest.main()
