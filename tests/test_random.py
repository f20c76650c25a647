"""Tests for seeding, the Alea generator and integer ranges."""

import pytest

from py_terra.core.alea_prng import AleaPRNG
from py_terra.utils.random import create_prng, generate_seed, hash_seed, resolve_seed
from py_terra.utils.ranges import IntRange


class TestAleaPRNG:
    """Test the seeded generator."""

    def test_same_seed_same_sequence(self):
        first = AleaPRNG("seed")
        second = AleaPRNG("seed")
        assert [first.random() for _ in range(20)] == [second.random() for _ in range(20)]

    def test_different_seeds_differ(self):
        assert AleaPRNG("a").random() != AleaPRNG("b").random()

    def test_values_in_unit_interval(self):
        prng = AleaPRNG(123)
        for _ in range(1000):
            value = prng.random()
            assert 0.0 <= value < 1.0

    def test_call_count(self):
        prng = AleaPRNG(1)
        prng.random()
        prng.randint(0, 5)
        assert prng.call_count == 2

    def test_randint_is_inclusive(self):
        prng = AleaPRNG("dice")
        values = {prng.randint(1, 3) for _ in range(500)}
        assert values == {1, 2, 3}

    def test_randint_empty_range(self):
        with pytest.raises(ValueError):
            AleaPRNG(1).randint(3, 1)

    def test_chance_extremes_do_not_draw(self):
        prng = AleaPRNG(1)
        assert prng.chance(1.0)
        assert not prng.chance(0.0)
        assert prng.call_count == 0

    def test_choice(self):
        prng = AleaPRNG(1)
        assert prng.choice(["only"]) == "only"
        with pytest.raises(IndexError):
            prng.choice([])

    def test_slop_bounds(self):
        prng = AleaPRNG("slop")
        for _ in range(200):
            assert 6 <= prng.slop(10, 4) <= 14


class TestSeeds:
    """Test seed resolution."""

    def test_integer_passes_through(self):
        assert resolve_seed(42) == 42

    def test_numeric_string(self):
        assert resolve_seed("42") == 42
        assert resolve_seed(" 42 ") == 42

    def test_text_is_hashed(self):
        assert resolve_seed("hello") == hash_seed("hello")
        assert resolve_seed("hello") != resolve_seed("world")

    def test_hash_is_stable_and_non_negative(self):
        assert hash_seed("terra") == hash_seed("terra")
        assert 0 <= hash_seed("terra") < 2 ** 63

    def test_none_generates_a_seed(self):
        seed = resolve_seed(None)
        assert isinstance(seed, int)
        assert seed >= 0

    def test_generated_seeds_differ(self):
        assert generate_seed() != generate_seed()

    def test_invalid_seed_type(self):
        with pytest.raises(TypeError):
            resolve_seed(1.5)
        with pytest.raises(TypeError):
            resolve_seed(True)

    def test_create_prng_is_reproducible(self):
        assert create_prng(7).random() == create_prng(7).random()


class TestIntRange:
    """Test inclusive ranges."""

    def test_contains(self):
        elevations = IntRange(-25, 50)
        assert -25 in elevations
        assert 50 in elevations
        assert 51 not in elevations

    def test_validate(self):
        assert IntRange(1, 1).validate() == IntRange(1, 1)
        with pytest.raises(ValueError):
            IntRange(2, 1).validate()

    def test_coerce(self):
        elevations = IntRange(-25, 50)
        assert elevations.coerce(100) == 50
        assert elevations.coerce(-100) == -25
        assert elevations.coerce(3) == 3

    def test_random_in(self):
        prng = AleaPRNG("range")
        assert all(IntRange(7, 10).random_in(prng) in IntRange(7, 10) for _ in range(100))
