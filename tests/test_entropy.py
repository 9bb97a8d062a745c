from __future__ import annotations

import math
import unittest

from pwscore.core import entropy as calc


class BinomTests(unittest.TestCase):
    def test_binom_edge_cases(self) -> None:
        self.assertEqual(calc.binom(3, 5), 0.0)
        self.assertEqual(calc.binom(7, 0), 1.0)
        self.assertEqual(calc.binom(0, 0), 1.0)

    def test_binom_matches_math_comb(self) -> None:
        for n in range(0, 25):
            for k in range(0, n + 1):
                self.assertAlmostEqual(calc.binom(n, k), float(math.comb(n, k)), delta=1e-6 * math.comb(n, k))


class CardinalityTests(unittest.TestCase):
    def test_cardinality_is_union_of_classes(self) -> None:
        self.assertEqual(calc.bruteforce_cardinality(""), 0)
        self.assertEqual(calc.bruteforce_cardinality("abc"), 26)
        self.assertEqual(calc.bruteforce_cardinality("aB"), 52)
        self.assertEqual(calc.bruteforce_cardinality("a1"), 36)
        self.assertEqual(calc.bruteforce_cardinality("easy password2"), 69)
        self.assertEqual(calc.bruteforce_cardinality("aA1!"), 95)

    def test_non_ascii_counts_as_symbol_class(self) -> None:
        self.assertEqual(calc.bruteforce_cardinality("é"), 33)
        self.assertEqual(calc.bruteforce_cardinality("a\U0001f510"), 59)


class PatternEntropyTests(unittest.TestCase):
    def test_bruteforce_entropy(self) -> None:
        self.assertAlmostEqual(calc.bruteforce_entropy(4, 26), 4 * math.log2(26))
        self.assertEqual(calc.bruteforce_entropy(0, 26), 0.0)

    def test_repeat_entropy(self) -> None:
        self.assertAlmostEqual(calc.repeat_entropy("aaaaaaaa"), math.log2(26 * 8))
        self.assertAlmostEqual(calc.repeat_entropy("!!!"), math.log2(33 * 3))

    def test_sequence_entropy_obvious_starts_cost_one_bit(self) -> None:
        self.assertAlmostEqual(calc.sequence_entropy("abc", True), 1 + math.log2(3))
        self.assertAlmostEqual(calc.sequence_entropy("1234", True), 1 + math.log2(4))

    def test_sequence_entropy_by_class_and_direction(self) -> None:
        self.assertAlmostEqual(calc.sequence_entropy("rstuvwx", True), math.log2(26) + math.log2(7))
        self.assertAlmostEqual(calc.sequence_entropy("cba", False), math.log2(26) + 1 + math.log2(3))
        self.assertAlmostEqual(calc.sequence_entropy("XYZ", True), math.log2(26) + 1 + math.log2(3))
        self.assertAlmostEqual(calc.sequence_entropy("987", False), math.log2(10) + 1 + math.log2(3))

    def test_digits_and_year_entropy(self) -> None:
        self.assertAlmostEqual(calc.digits_entropy("394595"), math.log2(10**6))
        self.assertAlmostEqual(calc.year_entropy(), math.log2(129))

    def test_date_entropy(self) -> None:
        self.assertAlmostEqual(calc.date_entropy(False, "-"), math.log2(31 * 12 * 129) + 2)
        self.assertAlmostEqual(calc.date_entropy(True, ""), math.log2(31 * 12 * 100))

    def test_spatial_entropy_single_turn(self) -> None:
        # qwerty: 94 starting keys, average degree truncated to 4
        bits = calc.spatial_entropy("qwerty", turns=1, shifted_count=0, starting_positions=94, average_degree=4.5957)
        self.assertAlmostEqual(bits, math.log2(5 * 94 * 4))

    def test_spatial_entropy_turns_and_shifts(self) -> None:
        base = calc.spatial_entropy("4595", turns=3, shifted_count=0, starting_positions=15, average_degree=5.0667)
        self.assertAlmostEqual(base, math.log2(7725))
        shifted = calc.spatial_entropy("4595", turns=3, shifted_count=1, starting_positions=15, average_degree=5.0667)
        self.assertAlmostEqual(shifted - base, math.log2(1 + 4))

    def test_spatial_entropy_never_negative(self) -> None:
        self.assertEqual(calc.spatial_entropy("qw", 0, 0, 94, 4.0), 0.0)


class DictionaryEntropyTests(unittest.TestCase):
    def test_base_entropy_is_log_rank(self) -> None:
        self.assertEqual(calc.dictionary_base_entropy(1), 0.0)
        self.assertAlmostEqual(calc.dictionary_base_entropy(444), math.log2(444))

    def test_uppercase_entropy_common_schemes(self) -> None:
        self.assertEqual(calc.extra_uppercase_entropy("password"), 0.0)
        self.assertEqual(calc.extra_uppercase_entropy("Password"), 1.0)
        self.assertEqual(calc.extra_uppercase_entropy("passworD"), 1.0)
        self.assertEqual(calc.extra_uppercase_entropy("PASSWORD"), 1.0)

    def test_uppercase_entropy_mixed_case(self) -> None:
        # U=3, L=1: C(4,0) + C(4,1)
        self.assertAlmostEqual(calc.extra_uppercase_entropy("P455w0RD"), math.log2(5))
        # U=2, L=6: C(8,0) + C(8,1) + C(8,2)
        self.assertAlmostEqual(calc.extra_uppercase_entropy("pAssWord"), math.log2(1 + 8 + 28))

    def test_l33t_entropy(self) -> None:
        sub = (("4", "a"), ("5", "s"), ("0", "o"))
        self.assertAlmostEqual(calc.extra_l33t_entropy("P455w0RD", sub), math.log2(3))
        # one substitution among unsubstituted copies: C(2,0) + C(2,1)
        self.assertAlmostEqual(calc.extra_l33t_entropy("p4ssa", (("4", "a"),)), math.log2(3))

    def test_l33t_entropy_has_one_bit_floor(self) -> None:
        self.assertEqual(calc.extra_l33t_entropy("b4d", (("4", "a"),)), 1.0)


if __name__ == "__main__":
    unittest.main()
