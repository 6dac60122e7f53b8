from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

Text = Union[str, bytes, bytearray, Sequence]


@dataclass
class DistanceResult:
    distance: Optional[int]  # None when the bound was exceeded
    exceeded: bool
    max_dist: Optional[int]


def as_code_points(value: Text) -> Sequence:
    """
    Bring an input into a sliceable sequence of code points.
    Bytes are decoded as UTF-8; invalid sequences become U+FFFD instead of raising.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (str, list, tuple)):
        return value
    return list(value)


def normalize_threshold(max_dist: Optional[int]) -> Optional[int]:
    # negative means "no limit"
    if max_dist is None or max_dist < 0:
        return None
    return int(max_dist)


def _clamp(dist: int, max_dist: Optional[int]) -> Tuple[int, bool]:
    if max_dist is not None and dist > max_dist:
        return max_dist + 1, True
    return dist, False


def trim_common_affixes(s1: Sequence, s2: Sequence) -> Tuple[Sequence, Sequence]:
    """
    Drop the shared suffix, then the shared prefix, of both sequences.
    A shared prefix/suffix is always aligned for free, so the distance is unchanged.
    """
    limit = min(len(s1), len(s2))

    suffix = 0
    while suffix < limit and s1[-1 - suffix] == s2[-1 - suffix]:
        suffix += 1
    if suffix:
        s1 = s1[: len(s1) - suffix]
        s2 = s2[: len(s2) - suffix]
        limit -= suffix

    prefix = 0
    while prefix < limit and s1[prefix] == s2[prefix]:
        prefix += 1
    if prefix:
        s1 = s1[prefix:]
        s2 = s2[prefix:]

    return s1, s2


def _sweep(short: Sequence, long: Sequence, max_dist: Optional[int]) -> Tuple[int, bool]:
    # x[j] holds the previous DP row; it is overwritten in place one cell behind
    len_short = len(short)
    x = list(range(len_short + 1))

    for i, cl in enumerate(long, 1):
        prev = i
        min_in_row = prev

        for j, cs in enumerate(short, 1):
            if cs == cl:
                current = x[j - 1]
            else:
                current = min(x[j - 1], prev, x[j]) + 1

            x[j - 1] = prev
            prev = current

            if current < min_in_row:
                min_in_row = current

        x[len_short] = prev

        # row minima never decrease, so no later cell can get back under the bound
        if max_dist is not None and min_in_row > max_dist:
            return max_dist + 1, True

    return _clamp(x[len_short], max_dist)


def _compute(a: Text, b: Text, max_dist: Optional[int]) -> Tuple[int, bool]:
    max_dist = normalize_threshold(max_dist)
    a = as_code_points(a)
    b = as_code_points(b)

    if len(a) == 0:
        return _clamp(len(b), max_dist)
    if len(b) == 0:
        return _clamp(len(a), max_dist)

    if a == b:
        return 0, False

    s1, s2 = trim_common_affixes(a, b)
    if len(s1) > len(s2):
        s1, s2 = s2, s1

    if max_dist is not None and len(s2) - len(s1) > max_dist:
        return max_dist + 1, True

    return _sweep(s1, s2, max_dist)


def compute_distance(a: Text, b: Text, max_dist: Optional[int] = None) -> int:
    """
    Levenshtein distance between two sequences of Unicode code points.
    Costs: ins=1, del=1, sub=1. Strings are compared code point by code point,
    bytes are decoded as UTF-8 first. No normalization is applied.

    If max_dist is given and non-negative, computation stops as soon as the
    distance is known to exceed it and max_dist + 1 is returned. A result of
    max_dist + 1 therefore means "greater than max_dist"; it does not tell an
    exact distance of max_dist + 1 apart from a larger one. Use
    compute_distance_result() when that matters.

    max_dist=None or a negative value computes the exact distance.
    """
    dist, _ = _compute(a, b, max_dist)
    return dist


def compute_distance_result(a: Text, b: Text, max_dist: Optional[int] = None) -> DistanceResult:
    """Same as compute_distance(), but reports an exceeded bound explicitly."""
    bound = normalize_threshold(max_dist)
    dist, exceeded = _compute(a, b, bound)
    return DistanceResult(
        distance=None if exceeded else dist,
        exceeded=exceeded,
        max_dist=bound,
    )
