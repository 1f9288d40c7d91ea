import unittest
from collections import Counter

from scramble_sim.core.puzzles import PuzzleType
from scramble_sim.logic.moves import (
    invert_sequence,
    inverse_move,
    normalize_token,
    parse_sequence,
    split_token,
)
from scramble_sim.logic.rng import make_rng, random_element, random_int, shuffle


class TestMoves(unittest.TestCase):
    def test_normalize_fixes_double_prime(self):
        self.assertEqual(normalize_token("D2'"), "D2")
        self.assertEqual(normalize_token("Rw2'"), "Rw2")

    def test_normalize_typographic_quote(self):
        self.assertEqual(normalize_token(" U’ "), "U'")

    def test_normalize_rejects_foreign_moves(self):
        with self.assertRaises(ValueError):
            normalize_token("L", PuzzleType.TWO)
        with self.assertRaises(ValueError):
            normalize_token("R2", PuzzleType.SKEWB)
        with self.assertRaises(ValueError):
            normalize_token("X")

    def test_inverse(self):
        self.assertEqual(inverse_move("R"), "R'")
        self.assertEqual(inverse_move("R'"), "R")
        self.assertEqual(inverse_move("R2"), "R2")
        self.assertEqual(inverse_move("Uw"), "Uw'")
        self.assertEqual(inverse_move("u'", PuzzleType.PYRAMINX), "u")

    def test_invert_sequence(self):
        self.assertEqual(invert_sequence("R U2 F'"), "F U2 R'")
        self.assertEqual(invert_sequence("R L' b", PuzzleType.PYRAMINX), "b' L R'")

    def test_clock_has_no_inverse(self):
        with self.assertRaises(ValueError):
            inverse_move("UL+3", PuzzleType.CLOCK)

    def test_parse_clock_tokens(self):
        seq = "(u,d,d,u) UL+3 UR+0 DR+6 DL+1 ALL+2 y2 UL+4 UR+5 DR+0 DL+3 ALL+6"
        self.assertEqual(len(parse_sequence(seq, PuzzleType.CLOCK)), 12)
        with self.assertRaises(ValueError):
            parse_sequence("UL+9", PuzzleType.CLOCK)

    def test_split_token(self):
        self.assertEqual(split_token("ALL+3"), ("ALL", "+3"))
        self.assertEqual(split_token("Rw'"), ("R", "w'"))
        self.assertEqual(split_token("y2"), ("y2", ""))


class TestRandomPrimitives(unittest.TestCase):
    def test_random_int_is_inclusive(self):
        rng = make_rng(1)
        values = {random_int(rng, 0, 6) for _ in range(500)}
        self.assertEqual(values, set(range(7)))

    def test_random_element_empty_raises(self):
        with self.assertRaises(IndexError):
            random_element(make_rng(1), [])

    def test_random_element_covers_sequence(self):
        rng = make_rng(2)
        counts = Counter(random_element(rng, "RUF") for _ in range(3000))
        self.assertEqual(set(counts), set("RUF"))
        for c in counts.values():
            self.assertGreater(c, 800)

    def test_shuffle_is_non_destructive_permutation(self):
        data = list(range(10))
        out = shuffle(make_rng(3), data)
        self.assertEqual(data, list(range(10)))
        self.assertEqual(sorted(out), data)


if __name__ == "__main__":
    unittest.main()
