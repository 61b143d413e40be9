# pylint: disable=protected-access,missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import secrets

import pytest
import sympy

from rsalab import primality
from rsalab.primality import PrimalityResult
from rsalab.primality import PrimalityStrategy

base_primetest_cases = [
    # Edge Cases (neither)
    (-7, PrimalityResult.INDETERMINATE),
    (0, PrimalityResult.INDETERMINATE),
    (1, PrimalityResult.INDETERMINATE),
    # Known Primes
    (2, PrimalityResult.PRIME),
    (3, PrimalityResult.PRIME),
    (5, PrimalityResult.PRIME),
    (101, PrimalityResult.PRIME),
    (3571, PrimalityResult.PRIME),
    (9973, PrimalityResult.PRIME),
    (2**61 - 1, PrimalityResult.PRIME),
    (2**127 - 1, PrimalityResult.PRIME),
    # Composite
    (4, PrimalityResult.COMPOSITE),
    (9, PrimalityResult.COMPOSITE),
    (25, PrimalityResult.COMPOSITE),
    (2**64 + 1, PrimalityResult.COMPOSITE),
    # Fermat Pseudoprimes (numbers that fool naive tests)
    (341, PrimalityResult.COMPOSITE),  # 11 * 31
    (561, PrimalityResult.COMPOSITE),  # 3 * 11 * 17 (Carmichael number)
    (1105, PrimalityResult.COMPOSITE),  # 5 * 13 * 17 (Carmichael number)
    (41041, PrimalityResult.COMPOSITE),  # Carmichael number
    # Pseudo-prime (PsP)
    (121, PrimalityResult.COMPOSITE),
    (703, PrimalityResult.COMPOSITE),
    (781, PrimalityResult.COMPOSITE),
    (1541, PrimalityResult.COMPOSITE),
    (2047, PrimalityResult.COMPOSITE),
    (52633, PrimalityResult.COMPOSITE),
]


@pytest.fixture(params=list(PrimalityStrategy))
def oracle(request) -> primality.PrimalityTest:
    return primality.get_primality_test(request.param)


@pytest.mark.parametrize("value, expected", base_primetest_cases)
def test_known_values(oracle, value, expected):
    assert oracle.is_prime(value, 0.999999) is expected


def test_matches_reference(oracle):
    for value in range(2, 3000):
        expected = PrimalityResult.PRIME if sympy.isprime(value) else PrimalityResult.COMPOSITE
        assert oracle.is_prime(value, 0.999999) is expected, value


def test_large_random(oracle):
    for _ in range(20):
        prime = sympy.randprime(2**255, 2**256)
        assert oracle.is_prime(prime, 0.999) is PrimalityResult.PRIME
        composite = prime * sympy.nextprime(secrets.randbits(64))
        assert oracle.is_prime(composite, 0.999) is PrimalityResult.COMPOSITE


@pytest.mark.parametrize("probability", [0.0, 0.49, 1.0, 1.5, -0.2])
def test_rejects_probability(oracle, probability):
    with pytest.raises(ValueError):
        oracle.is_prime(101, probability)


def test_rejects_probability_before_fast_paths(oracle):
    with pytest.raises(ValueError):
        oracle.is_prime(1, 1.0)


@pytest.mark.parametrize("target, error, expected", [
    (0.5, 0.5, 1),
    (0.75, 0.5, 2),
    (0.999, 0.5, 10),
    (0.999, 0.25, 5),
    (0.999, primality.MillerRabinTest.error_probability, 10),
    (0.999, primality.SolovayStrassenTest.error_probability, 5),
    (0.9375, 0.25, 2),
])
def test_iterations_count(target, error, expected):
    assert primality.iterations_count(target, error) == expected


def test_iterations_count_rejects():
    with pytest.raises(ValueError):
        primality.iterations_count(1, 0.25)


@pytest.mark.parametrize("strategy, expected", [
    (PrimalityStrategy.FERMAT, primality.FermatTest),
    (PrimalityStrategy.MILLER_RABIN, primality.MillerRabinTest),
    (PrimalityStrategy.SOLOVAY_STRASSEN, primality.SolovayStrassenTest),
    ("fermat", primality.FermatTest),
    ("miller-rabin", primality.MillerRabinTest),
    ("solovay-strassen", primality.SolovayStrassenTest),
])
def test_factory(strategy, expected):
    assert isinstance(primality.get_primality_test(strategy), expected)


def test_factory_rejects():
    with pytest.raises(ValueError):
        primality.get_primality_test("trial-division")


@pytest.mark.parametrize("strategy", list(PrimalityStrategy))
def test_round_count_follows_error_bound(mocker, strategy):
    oracle = primality.get_primality_test(strategy)
    witness = mocker.patch.object(oracle, "_witness", return_value=True)
    assert oracle.is_prime(1000003, 0.999) is PrimalityResult.PRIME
    assert witness.call_count == primality.iterations_count(0.999, oracle.error_probability)


def test_single_failed_round_is_composite(mocker):
    oracle = primality.MillerRabinTest()
    witness = mocker.patch.object(oracle, "_witness", side_effect=[True, False, True])
    assert oracle.is_prime(1000003, 0.999) is PrimalityResult.COMPOSITE
    assert witness.call_count == 2


def test_bases_in_range(mocker):
    oracle = primality.SolovayStrassenTest()
    witness = mocker.patch.object(oracle, "_witness", return_value=True)
    for _ in range(200):
        oracle.is_prime(7, 0.99)
    for call in witness.call_args_list:
        value, a = call.args
        assert 2 <= a < value


def test_fermat_carmichael_table():
    oracle = primality.FermatTest()
    for number in oracle.CARMICHAEL_NUMBERS:
        assert not sympy.isprime(number)
        assert not oracle._witness(number, 2)


def test_miller_rabin_strong_liar():
    # 2047 = 23 * 89 is a strong pseudoprime to base 2 but not to base 3.
    oracle = primality.MillerRabinTest()
    assert oracle._witness(2047, 2)
    assert not oracle._witness(2047, 3)


def test_solovay_strassen_witness():
    oracle = primality.SolovayStrassenTest()
    assert oracle._witness(13, 2)
    # 5^280 is neither 1 nor -1 modulo 561 = 3 * 11 * 17.
    assert not oracle._witness(561, 5)


@pytest.mark.parametrize("strategy, rounds", [
    (PrimalityStrategy.FERMAT, 10),
    (PrimalityStrategy.MILLER_RABIN, 10),
    (PrimalityStrategy.SOLOVAY_STRASSEN, 5),
])
def test_rounds_at_default_probability(mocker, strategy, rounds):
    oracle = primality.get_primality_test(strategy)
    witness = mocker.patch.object(oracle, "_witness", return_value=True)
    oracle.is_prime(1000003, 0.999)
    assert witness.call_count == rounds


@pytest.mark.parametrize("probability", [0.5, 0.9, 0.999999])
@pytest.mark.parametrize("value", [1105, 2465, 41041, 62745, 15882613])
def test_fermat_carmichael_any_probability(value, probability):
    assert primality.FermatTest().is_prime(value, probability) is PrimalityResult.COMPOSITE
