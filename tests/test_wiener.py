# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest
import sympy

from rsalab import keygen
from rsalab import wiener
from rsalab.keys import RSAKey


def test_known_key():
    assert wiener.WienersAttack().factor(RSAKey(17993, 90581)) == (5, 379, 239)
    assert wiener.perform_wiener_attack(RSAKey(17993, 90581)) == 5


@pytest.mark.parametrize("size", [64, 256, 512, 1024])
def test_recovers_weak_keys(size):
    pub, priv = keygen.generate_weak_keys(size)
    d, p, q = wiener.WienersAttack().factor(pub)
    assert d == priv.exponent
    assert p * q == pub.modulus
    assert p > q > 1
    assert wiener.perform_wiener_attack(pub) == priv.exponent


@pytest.mark.slow
def test_recovers_weak_keys_2048():
    pub, priv = keygen.generate_weak_keys(2048)
    assert wiener.perform_wiener_attack(pub) == priv.exponent


def test_strong_generated_key():
    pub, _ = keygen.RSAKeyGenerator(512).generate_keys()
    with pytest.raises(wiener.ExponentNotFoundError):
        wiener.perform_wiener_attack(pub)


def test_standard_exponent_key():
    p = sympy.nextprime(2**255 + 1234567)
    q = sympy.nextprime(2**254 + 7654321)
    pub = RSAKey(65537, p * q)
    with pytest.raises(wiener.ExponentNotFoundError):
        wiener.WienersAttack().perform(pub)


def test_not_found_is_lookup_error():
    assert issubclass(wiener.ExponentNotFoundError, LookupError)


def test_rejects_non_coprime_key():
    with pytest.raises(ValueError):
        wiener.perform_wiener_attack(RSAKey(379, 90581))
