import random
from collections import Counter

import pytest

from bookrec.recommendations.shuffle import Mulberry32, make_rng, parse_seed, shuffle


def test_mulberry32_same_seed_same_stream():
    a = Mulberry32(12345)
    b = Mulberry32(12345)
    assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]


def test_mulberry32_different_seeds_differ():
    a = Mulberry32(1)
    b = Mulberry32(2)
    assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]


def test_mulberry32_draws_in_unit_interval():
    rng = Mulberry32(987654321)
    for _ in range(1000):
        value = rng.random()
        assert 0.0 <= value < 1.0


def test_mulberry32_negative_seed_known_values():
    rng = Mulberry32(-7)
    assert [rng.random(), rng.random()] == [0.43306733411736786, 0.32539576734416187]


def test_mulberry32_reduces_seed_to_32_bits():
    a = Mulberry32(2**32 + 7)
    b = Mulberry32(7)
    assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]


@pytest.mark.parametrize(
    "raw, expected",
    [
        (12345, 12345),
        ("12345", 12345),
        (" 42 ", 42),
        (3.9, 3),
        (-2.5, -3),
        ("1.7e3", 1700),
        (None, None),
        ("", 0),
        ("   ", 0),
        ("abc", None),
        (float("nan"), None),
        (float("inf"), None),
        ("Infinity", None),
        (True, 1),
        (False, 0),
    ],
)
def test_parse_seed(raw, expected):
    assert parse_seed(raw) == expected


def test_make_rng_without_seed_is_random():
    assert isinstance(make_rng(None), random.Random)
    assert isinstance(make_rng("not a number"), random.Random)
    assert isinstance(make_rng(7), Mulberry32)


def test_shuffle_is_reproducible_with_seed():
    items = list(range(10))
    first = shuffle(items, make_rng(12345))
    second = shuffle(items, make_rng("12345"))
    assert first == second


def test_shuffle_is_a_permutation():
    items = ["a", "b", "b", "c", "d", "e"]
    for seed in (None, 0, 1, 12345, "99"):
        out = shuffle(items, make_rng(seed))
        assert Counter(out) == Counter(items)


def test_shuffle_does_not_mutate_input():
    items = [1, 2, 3, 4, 5]
    shuffle(items, make_rng(3))
    assert items == [1, 2, 3, 4, 5]


def test_shuffle_short_lists():
    assert shuffle([], make_rng(1)) == []
    assert shuffle(["only"], make_rng(1)) == ["only"]


def test_shuffle_swaps_with_drawn_index():
    class FixedSource:
        def random(self) -> float:
            return 0.0

    # j is always 0: each step swaps position i with the head.
    assert shuffle([1, 2, 3, 4], FixedSource()) == [2, 3, 4, 1]
