import unittest

from scramble_sim.core.puzzles import Difficulty, PuzzleType
from scramble_sim.logic.validate import check_custom_scramble, check_scramble, is_valid

GOOD_3X3 = "R U F L D B R' U' F' L' D' B' R2 U2 F2 L2 D2 B2 R U"
GOOD_CLOCK = "(u,d,d,u) UL+3 UR+0 DR+6 DL+1 ALL+2 y2 UL+4 UR+5 DR+0 DL+3 ALL+6"


class TestValidate(unittest.TestCase):
    def test_accepts_good_scrambles(self):
        self.assertTrue(is_valid(PuzzleType.THREE, GOOD_3X3))
        self.assertTrue(is_valid(PuzzleType.CLOCK, GOOD_CLOCK))
        self.assertTrue(is_valid(PuzzleType.SKEWB, "R U' L B R' U L' B R"))
        self.assertTrue(is_valid(PuzzleType.PYRAMINX, "R L' U B R' U L B' r u'"))

    def test_detects_same_axis(self):
        bad = GOOD_3X3.replace("R U F", "R L F", 1)
        errors = check_scramble(PuzzleType.THREE, bad)
        self.assertTrue(any("mismo eje" in e for e in errors))

    def test_detects_wrong_length(self):
        self.assertFalse(is_valid(PuzzleType.THREE, "R U F"))
        self.assertFalse(is_valid(PuzzleType.SKEWB, "R U L B R U L B"))
        self.assertFalse(is_valid(PuzzleType.TWO, "R U F R U F R U"))

    def test_detects_foreign_letters(self):
        self.assertFalse(is_valid(PuzzleType.TWO, "R U F R U F L U F"))
        self.assertFalse(is_valid(PuzzleType.SKEWB, "R U L B R U L B F"))

    def test_detects_pin_floor(self):
        bad = GOOD_CLOCK.replace("(u,d,d,u)", "(u,u,d,u)")
        errors = check_scramble(PuzzleType.CLOCK, bad)
        self.assertTrue(any("pines" in e for e in errors))

    def test_detects_missing_y2(self):
        bad = GOOD_CLOCK.replace("y2", "x2")
        self.assertFalse(is_valid(PuzzleType.CLOCK, bad))

    def test_detects_repeated_tip(self):
        errors = check_scramble(PuzzleType.PYRAMINX, "R L' U B R' U L B' r r'")
        self.assertTrue(any("tips" in e for e in errors))

    def test_custom_checks_modifiers_per_difficulty(self):
        s = "R U F L D B R' U' F' L'"
        self.assertEqual(check_custom_scramble(PuzzleType.THREE, s, 10, Difficulty.EASY), [])
        self.assertNotEqual(check_custom_scramble(PuzzleType.THREE, s + " D2", 10, Difficulty.EASY), [])
        self.assertNotEqual(check_custom_scramble(PuzzleType.THREE, "R M U", 3, Difficulty.MEDIUM), [])
        self.assertEqual(check_custom_scramble(PuzzleType.THREE, "R M U", 3, Difficulty.HARD), [])

    def test_custom_tracks_last_outer_axis(self):
        # M no cambia el último eje exterior (R), así que L queda prohibida
        errors = check_custom_scramble(PuzzleType.THREE, "R M L", 3, Difficulty.HARD)
        self.assertTrue(any("mismo eje" in e for e in errors))


if __name__ == "__main__":
    unittest.main()
