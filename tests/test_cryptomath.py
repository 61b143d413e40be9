# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import secrets

import pytest
import sympy

from rsalab import cryptomath

SMALL_PRIMES = list(sympy.primerange(3, 200))


@pytest.mark.parametrize("base, exponent, modulus", [
    (19, 123, 2000),
    (2, 0, 7),
    (0, 5, 13),
    (-3, 7, 11),
    (123456789, 987654321, 1000000007),
    (5, 10, 1),
])
def test_mod_pow(base, exponent, modulus):
    assert cryptomath.mod_pow(base, exponent, modulus) == pow(base, exponent, modulus)


def test_mod_pow_random():
    for _ in range(50):
        mod = secrets.randbits(256) | 1
        base, exponent = secrets.randbits(300), secrets.randbits(256)
        assert cryptomath.mod_pow(base, exponent, mod) == pow(base, exponent, mod)


@pytest.mark.parametrize("exponent, modulus", [(-1, 7), (3, 0), (3, -5)])
def test_mod_pow_rejects(exponent, modulus):
    with pytest.raises(ValueError):
        cryptomath.mod_pow(3, exponent, modulus)


@pytest.mark.parametrize("a, b, expected", [
    (-14124, -3951, 3),
    (14124, 3951, 3),
    (0, 5, 5),
    (5, 0, 5),
    (17, 31, 1),
    (0, 0, 0),
])
def test_gcd(a, b, expected):
    assert cryptomath.gcd(a, b) == expected


@pytest.mark.parametrize("a, b", [(-14124, 3951), (14124, 3951), (240, 46), (17, 31), (-5, -15), (7, 0)])
def test_gcd_extended(a, b):
    g, x, y = cryptomath.gcd_extended(a, b)
    assert g == cryptomath.gcd(a, b)
    assert g >= 0
    assert a * x + b * y == g


@pytest.mark.parametrize("a, modulus", [(3, 11), (10, 17), (65537, 3120), (-3, 11), (1, 2)])
def test_mod_inverse(a, modulus):
    inv = cryptomath.mod_inverse(a, modulus)
    assert 0 <= inv < modulus
    assert inv == pow(a, -1, modulus)


@pytest.mark.parametrize("a, modulus", [(2, 4), (6, 9), (3, 1), (3, 0)])
def test_mod_inverse_rejects(a, modulus):
    with pytest.raises(ValueError):
        cryptomath.mod_inverse(a, modulus)


@pytest.mark.parametrize("a, p, expected", [
    (3, 5, -1),
    (7, 23, -1),
    (-7, 23, 1),
    (-9, 23, -1),
    (4, 7, 1),
    (14, 7, 0),
])
def test_legendre_known(a, p, expected):
    assert cryptomath.legendre_symbol(a, p) == expected


@pytest.mark.parametrize("p", SMALL_PRIMES)
def test_legendre_matches_reference(p):
    for a in range(0, 2 * p):
        assert cryptomath.legendre_symbol(a, p) == sympy.legendre_symbol(a, p)


@pytest.mark.parametrize("p", [2, 1, 0, -3])
def test_legendre_rejects_small(p):
    with pytest.raises(ValueError):
        cryptomath.legendre_symbol(3, p)


def test_legendre_rejects_composite():
    # 2^7 mod 15 = 8, neither 1 nor 14.
    with pytest.raises(ArithmeticError):
        cryptomath.legendre_symbol(2, 15)


@pytest.mark.parametrize("a, n, expected", [
    (1, 23, 1),
    (17, 21, 1),
    (19, 25, 1),
    (3, 5, -1),
    (5, 15, 0),
    (18, 21, 0),
    (-1, 23, -1),
    (-1, 5, 1),
    (0, 9, 0),
])
def test_jacobi_known(a, n, expected):
    assert cryptomath.jacobi_symbol(a, n) == expected


@pytest.mark.parametrize("n", range(3, 120, 2))
def test_jacobi_matches_reference(n):
    for a in range(0, 2 * n):
        assert cryptomath.jacobi_symbol(a, n) == sympy.jacobi_symbol(a, n)


@pytest.mark.parametrize("n", [10, 1, 0, -7])
def test_jacobi_rejects(n):
    with pytest.raises(ValueError):
        cryptomath.jacobi_symbol(5, n)
