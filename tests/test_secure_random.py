"""
Tests for the Secure RNG Primitive
==================================
Tests unbiased bounded draws, shuffling, sampling and failure of the
entropy source in passg/generators/entropy.py.
"""

import pytest
import sys
from collections import Counter
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from passg.errors import RandomUnavailable
from passg.generators import entropy
from passg.generators.entropy import SecureRandom, WORD_SPACE, system_bytes


def scripted(*words):
    """Byte source that replays the given 32-bit words in order."""
    data = iter(words)

    def source(count):
        return next(data).to_bytes(count, 'big')
    return source


def chi_square(counts, n, draws):
    expected = draws / n
    return sum((counts.get(i, 0) - expected) ** 2 / expected for i in range(n))


class TestRandbelow:
    """Tests for bounded integer draws."""

    @pytest.mark.parametrize("n,draws,critical", [
        (3, 3000, 20.0),
        (7, 7000, 30.0),
        (37, 7400, 80.0),
    ])
    def test_uniform_distribution(self, n, draws, critical):
        """Chi-square over many draws stays well under the 0.1% critical value."""
        rng = SecureRandom()
        counts = Counter(rng.randbelow(n) for _ in range(draws))
        assert set(counts) <= set(range(n))
        assert chi_square(counts, n, draws) < critical

    def test_rejects_word_above_limit(self):
        """Words at or above the largest multiple of n are redrawn."""
        # limit for n=3 is 2**32 - 1, so the all-ones word is rejected
        rng = SecureRandom(scripted(0xFFFFFFFF, 5))
        assert rng.randbelow(3) == 2

    def test_rejects_every_word_in_tail(self):
        """All four tail words for n=6 are rejected before a valid one."""
        limit = (WORD_SPACE // 6) * 6
        tail = [limit, limit + 1, limit + 2, limit + 3]
        rng = SecureRandom(scripted(*tail, 13))
        assert rng.randbelow(6) == 1

    def test_accepts_word_below_limit(self):
        rng = SecureRandom(scripted(41))
        assert rng.randbelow(10) == 1

    def test_power_of_two_never_rejects(self):
        rng = SecureRandom(scripted(0xFFFFFFFF))
        assert rng.randbelow(256) == 255

    @pytest.mark.parametrize("n", [0, -1, -100])
    def test_non_positive_bound(self, n):
        with pytest.raises(ValueError):
            SecureRandom().randbelow(n)

    def test_randint_inclusive(self):
        rng = SecureRandom()
        values = {rng.randint(1, 3) for _ in range(300)}
        assert values == {1, 2, 3}


class TestFloatAndChance:
    """Tests for random() and chance()."""

    def test_random_bounds(self):
        assert SecureRandom(scripted(0)).random() == 0.0
        assert SecureRandom(scripted(0xFFFFFFFF)).random() < 1.0

    def test_chance_extremes(self):
        rng = SecureRandom()
        assert not any(rng.chance(0.0) for _ in range(50))
        assert all(rng.chance(1.0) for _ in range(50))


class TestSourceFailure:
    """The RNG must fail loudly when no secure source is available."""

    def test_not_implemented(self):
        def broken(count):
            raise NotImplementedError("no urandom")

        with pytest.raises(RandomUnavailable):
            SecureRandom(broken).randbelow(10)

    def test_os_error(self):
        def broken(count):
            raise OSError("device gone")

        with pytest.raises(RandomUnavailable):
            SecureRandom(broken).random()

    def test_short_read(self):
        with pytest.raises(RandomUnavailable):
            SecureRandom(lambda count: b"\x00").randbelow(10)

    def test_system_bytes_unsupported(self, monkeypatch):
        def broken(count):
            raise NotImplementedError

        monkeypatch.setattr(entropy.os, "urandom", broken)
        with pytest.raises(RandomUnavailable):
            system_bytes(4)

    def test_error_is_runtime_error(self):
        assert issubclass(RandomUnavailable, RuntimeError)


class TestPick:
    """Tests for single-element picks."""

    def test_empty_pool_returns_empty_string(self):
        # no randomness is consumed for an empty pool
        rng = SecureRandom(scripted())
        assert rng.pick("") == ""
        assert rng.pick([]) == ""

    def test_pick_from_pool(self):
        rng = SecureRandom()
        for _ in range(50):
            assert rng.pick("xyz") in "xyz"

    def test_scripted_pick(self):
        assert SecureRandom(scripted(4)).pick(["a", "b", "c"]) == "b"


class TestShuffle:
    """Tests for the Fisher-Yates shuffle."""

    @pytest.mark.parametrize("size", [0, 1, 2, 10, 100])
    def test_shuffle_is_permutation(self, size):
        items = list(range(size))
        result = SecureRandom().shuffle(items)
        assert sorted(result) == items

    def test_input_untouched(self):
        items = list("abcdefgh")
        SecureRandom().shuffle(items)
        assert items == list("abcdefgh")

    def test_accepts_strings_and_ranges(self):
        rng = SecureRandom()
        assert sorted(rng.shuffle("cab")) == ["a", "b", "c"]
        assert sorted(rng.shuffle(range(5))) == [0, 1, 2, 3, 4]

    def test_single_element_consumes_nothing(self):
        assert SecureRandom(scripted()).shuffle(["only"]) == ["only"]

    def test_all_orders_reachable(self):
        rng = SecureRandom()
        orders = Counter(tuple(rng.shuffle("abc")) for _ in range(1200))
        assert len(orders) == 6


class TestSample:
    """Tests for k-of-n sampling."""

    def test_k_at_least_n_is_full_shuffle(self):
        result = SecureRandom().sample("abcd", 10)
        assert sorted(result) == ["a", "b", "c", "d"]

    def test_sparse_branch_distinct(self):
        population = list(range(1000))
        result = SecureRandom().sample(population, 5)
        assert len(result) == 5
        assert len(set(result)) == 5

    def test_sparse_branch_redraws_collisions(self):
        population = list(range(100))
        rng = SecureRandom(scripted(7, 7, 9))
        assert rng.sample(population, 2) == [7, 9]

    def test_dense_branch_distinct(self):
        population = list(range(10))
        result = SecureRandom().sample(population, 5)
        assert len(result) == 5
        assert len(set(result)) == 5
        assert set(result) <= set(population)

    def test_dense_branch_leaves_input(self):
        population = list(range(10))
        SecureRandom().sample(population, 7)
        assert population == list(range(10))

    def test_empty_and_zero(self):
        rng = SecureRandom()
        assert rng.sample([], 3) == []
        assert rng.sample("abc", 0) == []


class TestModuleFunctions:
    """Module-level helpers share the process-wide RNG."""

    def test_get_rng_singleton(self):
        assert entropy.get_rng() is entropy.get_rng()

    def test_helpers(self):
        assert 0 <= entropy.randbelow(5) < 5
        assert 0.0 <= entropy.random() < 1.0
        assert 1 <= entropy.randint(1, 2) <= 2
        assert entropy.pick("q") == "q"
        assert sorted(entropy.shuffle([3, 1, 2])) == [1, 2, 3]
        assert len(entropy.sample(range(20), 3)) == 3
