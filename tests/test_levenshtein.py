from __future__ import annotations

import unittest

import pytest
from hypothesis import given, settings, strategies as st

from levdist.levenshtein import (
    compute_distance,
    compute_distance_result,
    trim_common_affixes,
)


def _reference(a, b) -> int:
    # full-table DP, no trimming or pruning
    m, n = len(a), len(b)
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            dp[i][j] = min(dp[i - 1][j] + 1, dp[i][j - 1] + 1, dp[i - 1][j - 1] + cost)
    return dp[m][n]


ALPHABET = list("abcxyz") + list("éþЯ།་") + ["\U0001535e"]

# small alphabet so pairs often share prefixes/suffixes, plus arbitrary text
words = st.text(alphabet=st.sampled_from(ALPHABET), max_size=12) | st.text(max_size=8)
thresholds = st.integers(min_value=-3, max_value=10)


class CountingToken:
    def __init__(self, value, counter):
        self.value = value
        self.counter = counter

    def __eq__(self, other):
        self.counter[0] += 1
        return self.value == other.value


def _tokens(values, counter):
    return [CountingToken(v, counter) for v in values]


@pytest.mark.parametrize(
    "a,b,max_dist,want",
    [
        ("", "", None, 0),
        ("hello", "hello", None, 0),
        ("kitten", "sitting", None, 3),
        ("", "abc", None, 3),
        ("kitten", "sitting", 5, 3),
        ("kitten", "sittenX", 2, 2),
        ("kitten", "sitting", 2, 3),
        ("abcdef", "uvwxyz", 2, 3),
        ("abcXYZ", "abcWXY", None, 2),
        ("abcXYZ", "abcWXY", 1, 2),
        ("kitten", "sitting", -1, 3),
        ("abc", "", 1, 2),
        ("abc", "abd", 0, 1),
        ("same", "same", 0, 0),
    ],
)
def test_known_distances(a, b, max_dist, want):
    assert compute_distance(a, b, max_dist) == want


@pytest.mark.parametrize(
    "a,b,want",
    [
        ("resumé and café", "resumés and cafés", 2),
        ("resume and cafe", "resumé and café", 2),
        ("Hafþór Júlíus Björnsson", "Hafþor Julius Bjornsson", 4),
        ("།་གམ་འས་པ་་མ།", "།་གམའས་པ་་མ", 2),
        (
            "Я был на этой планете бесконечным множеством",
            "Я был на этой паланете бесконечным моножеством",
            2,
        ),
        ("café", "cafés", 1),
    ],
)
def test_counts_code_points_not_bytes(a, b, want):
    assert compute_distance(a, b) == want


def test_bytes_are_decoded_as_utf8():
    assert compute_distance("café".encode("utf-8"), "cafés".encode("utf-8")) == 1
    assert compute_distance(bytearray("naïve", "utf-8"), "naive") == 1


def test_invalid_utf8_becomes_replacement_char():
    assert compute_distance(b"ab\xff", "ab\ufffd") == 0
    assert compute_distance(b"\xff\xfe", b"") == 2


def test_generic_sequences():
    assert compute_distance(["the", "cat", "sat"], ["the", "dog", "sat"]) == 1
    assert compute_distance((1, 2, 3), [1, 2, 3, 4]) == 1
    assert compute_distance(iter("kitten"), iter("sitting")) == 3


def test_trim_handles_contained_sequences():
    assert trim_common_affixes("abc", "xabc") == ("", "x")
    assert trim_common_affixes("abc", "abcx") == ("", "x")
    assert trim_common_affixes("abcXYZ", "abcWXY") == ("XYZ", "WXY")
    assert trim_common_affixes("aXa", "aYa") == ("X", "Y")
    assert compute_distance("abc", "xabc") == 1


def test_final_cell_above_bound_is_clamped():
    # last row minimum stays within the bound while the corner cell does not
    assert _reference("ab", "ba") == 2
    assert compute_distance("ab", "ba", 1) == 2
    assert compute_distance("xaby", "xbay", 1) == 2


@settings(max_examples=300, deadline=None)
@given(words, words)
def test_matches_reference(a, b):
    assert compute_distance(a, b) == _reference(a, b)


@settings(max_examples=300, deadline=None)
@given(words, words, thresholds)
def test_symmetry_and_bounds(a, b, t):
    d = compute_distance(a, b)
    assert d == compute_distance(b, a)
    assert abs(len(a) - len(b)) <= d <= max(len(a), len(b))
    assert compute_distance(a, b, t) == compute_distance(b, a, t)


@settings(max_examples=300, deadline=None)
@given(words, words, thresholds)
def test_threshold_correctness(a, b, t):
    d = _reference(a, b)
    got = compute_distance(a, b, t)
    if t < 0 or d <= t:
        assert got == d
    else:
        assert got == t + 1


@settings(max_examples=200, deadline=None)
@given(st.text(max_size=60), thresholds)
def test_identity(a, t):
    assert compute_distance(a, a) == 0
    assert compute_distance(a, a, t) == 0


def test_row_minimum_stops_the_sweep():
    # same length, nothing in common: only the row-level exit can stop early
    unbounded = [0]
    assert compute_distance(_tokens(range(200), unbounded), _tokens(range(200, 400), unbounded)) == 200
    bounded = [0]
    assert compute_distance(_tokens(range(200), bounded), _tokens(range(200, 400), bounded), 2) == 3
    assert unbounded[0] > 200 * 200
    assert bounded[0] < unbounded[0] // 20


def test_length_gap_skips_the_sweep():
    counter = [0]
    assert compute_distance(_tokens(range(5), counter), _tokens(range(10, 20), counter), 2) == 3
    # one suffix and one prefix comparison, no DP cells
    assert counter[0] <= 2


def test_long_inputs_have_no_cell_ceiling():
    # one-column sweep over 70000 rows; cells climb past 65535
    long = "a" * 70000
    assert compute_distance("b", long) == 70000
    assert compute_distance(long, "b", 70000) == 70000
    assert compute_distance(long, "b", 69999) == 70000


class TestDistanceResult(unittest.TestCase):
    def test_exact_within_bound(self):
        res = compute_distance_result("kitten", "sittenX", 2)
        self.assertEqual(res.distance, 2)
        self.assertFalse(res.exceeded)
        self.assertEqual(res.max_dist, 2)

    def test_exceeded_has_no_distance(self):
        res = compute_distance_result("kitten", "sitting", 2)
        self.assertIsNone(res.distance)
        self.assertTrue(res.exceeded)

    def test_negative_bound_is_unbounded(self):
        res = compute_distance_result("kitten", "sitting", -5)
        self.assertEqual(res.distance, 3)
        self.assertFalse(res.exceeded)
        self.assertIsNone(res.max_dist)

    def test_empty_input_over_bound(self):
        res = compute_distance_result("", "abcd", 3)
        self.assertTrue(res.exceeded)


if __name__ == "__main__":
    unittest.main()
