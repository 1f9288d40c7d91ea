import unittest

from scramble_sim.core.puzzles import Difficulty, InvalidDifficulty, InvalidPuzzleType, PuzzleType
from scramble_sim.logic.custom import clamp_2x2_moves, generate_custom_2x2, generate_custom_3x3
from scramble_sim.logic.dispatch import generate_custom_scramble, generate_scramble
from scramble_sim.logic.rng import make_rng
from scramble_sim.logic.validate import check_custom_scramble, check_scramble


class TestCustom3x3(unittest.TestCase):
    def setUp(self):
        self.rng = make_rng(5)

    def test_move_count_is_respected(self):
        s = generate_custom_scramble("3x3", 15, "medium", rng=self.rng)
        self.assertEqual(len(s.split()), 15)

    def test_default_move_count(self):
        self.assertEqual(len(generate_custom_scramble(PuzzleType.THREE, rng=self.rng).split()), 20)
        self.assertEqual(len(generate_custom_scramble(PuzzleType.THREE_OH, 0, rng=self.rng).split()), 20)

    def test_constraints_hold_for_every_difficulty(self):
        for difficulty in Difficulty:
            for n in (5, 20, 30):
                for _ in range(100):
                    s = generate_custom_3x3(n, difficulty, self.rng)
                    self.assertEqual(check_custom_scramble(PuzzleType.THREE, s, n, difficulty), [], s)

    def test_easy_uses_quarter_turns_only(self):
        for _ in range(100):
            for tok in generate_custom_3x3(20, Difficulty.EASY, self.rng).split():
                self.assertIn(tok[1:], ("", "'"))

    def test_hard_adds_slices_and_wide_moves(self):
        tokens = []
        for _ in range(100):
            tokens += generate_custom_3x3(20, Difficulty.HARD, self.rng).split()
        self.assertTrue(any(t[0] in "MES" for t in tokens))
        self.assertTrue(any("w" in t for t in tokens))

    def test_negative_count_gives_empty_scramble(self):
        self.assertEqual(generate_custom_3x3(-3, Difficulty.MEDIUM, self.rng), "")


class TestCustom2x2(unittest.TestCase):
    def setUp(self):
        self.rng = make_rng(6)

    def test_clamping_by_difficulty(self):
        self.assertEqual(clamp_2x2_moves(5, Difficulty.EASY), 5)
        self.assertEqual(clamp_2x2_moves(12, Difficulty.EASY), 8)
        self.assertEqual(clamp_2x2_moves(5, Difficulty.MEDIUM), 9)
        self.assertEqual(clamp_2x2_moves(20, Difficulty.MEDIUM), 11)
        self.assertEqual(clamp_2x2_moves(5, Difficulty.HARD), 11)
        self.assertEqual(clamp_2x2_moves(15, Difficulty.HARD), 15)

    def test_dispatch_applies_clamp(self):
        self.assertEqual(len(generate_custom_scramble("2x2", 12, "easy", rng=self.rng).split()), 8)
        self.assertEqual(len(generate_custom_scramble("2x2", 5, "medium", rng=self.rng).split()), 9)
        self.assertEqual(len(generate_custom_scramble("2x2", 5, "hard", rng=self.rng).split()), 11)
        self.assertEqual(len(generate_custom_scramble("2x2", rng=self.rng).split()), 10)

    def test_alphabet_and_no_repeat(self):
        for difficulty in Difficulty:
            for _ in range(100):
                s = generate_custom_2x2(10, difficulty, self.rng)
                self.assertEqual(check_custom_scramble(PuzzleType.TWO, s, 10, difficulty), [], s)

    def test_easy_has_no_double_turns(self):
        for _ in range(100):
            self.assertNotIn("2", generate_custom_2x2(8, Difficulty.EASY, self.rng))


class TestCustomDispatch(unittest.TestCase):
    def test_other_puzzles_ignore_parameters(self):
        rng = make_rng(8)
        for puzzle in (PuzzleType.PYRAMINX, PuzzleType.SKEWB, PuzzleType.CLOCK):
            s = generate_custom_scramble(puzzle, 25, "hard", rng=rng)
            self.assertEqual(check_scramble(puzzle, s), [], s)

    def test_same_seed_matches_standard_generator_for_other_puzzles(self):
        a = generate_custom_scramble(PuzzleType.SKEWB, 25, "easy", rng=make_rng(3))
        b = generate_scramble(PuzzleType.SKEWB, rng=make_rng(3))
        self.assertEqual(a, b)

    def test_unknown_type_uses_custom_3x3(self):
        rng = make_rng(4)
        tokens = []
        with self.assertLogs("scramble_sim.logic.dispatch", level="WARNING"):
            for _ in range(100):
                s = generate_custom_scramble("unknown-type", 12, "hard", rng=rng, strict=False)
                self.assertEqual(check_custom_scramble(PuzzleType.THREE, s, 12, Difficulty.HARD), [], s)
                tokens += s.split()
        # Solo el alfabeto hard tiene capas centrales y giros anchos
        self.assertTrue(any(t[0] in "MES" for t in tokens))
        self.assertTrue(any("w" in t for t in tokens))

    def test_unknown_difficulty_falls_back_to_medium(self):
        with self.assertLogs("scramble_sim.logic.dispatch", level="WARNING"):
            s = generate_custom_scramble("3x3", 20, "extreme", rng=make_rng(4), strict=False)
        self.assertEqual(check_custom_scramble(PuzzleType.THREE, s, 20, Difficulty.MEDIUM), [])


class TestStrictMode(unittest.TestCase):
    def test_unknown_type_raises(self):
        with self.assertRaises(InvalidPuzzleType):
            generate_scramble("3X3", strict=True)
        with self.assertRaises(InvalidPuzzleType):
            generate_custom_scramble("Megaminx", 10, "easy", strict=True)

    def test_unknown_difficulty_raises(self):
        with self.assertRaises(InvalidDifficulty):
            generate_custom_scramble("2x2", 10, "extreme", strict=True)

    def test_errors_are_value_errors(self):
        with self.assertRaises(ValueError):
            generate_scramble("nope", strict=True)

    def test_fixed_puzzles_ignore_unknown_difficulty(self):
        rng = make_rng(11)
        for puzzle in (PuzzleType.PYRAMINX, PuzzleType.SKEWB, PuzzleType.CLOCK):
            s = generate_custom_scramble(puzzle, 10, "extreme", rng=rng, strict=True)
            self.assertEqual(check_scramble(puzzle, s), [], s)

    def test_valid_input_is_unaffected(self):
        s = generate_custom_scramble("3x3 BLD", 18, "easy", strict=True)
        self.assertEqual(len(s.split()), 18)


if __name__ == "__main__":
    unittest.main()
