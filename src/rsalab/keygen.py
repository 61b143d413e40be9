"""RSA key pair generation on top of the configurable primality oracle.

Primes are grown from random bits with the two top bits fixed, so the product of two of them has exactly the requested
bit length, and are then walked forward along the wheel of 6 until the oracle accepts one. The private exponent must
clear a safety margin of `n // 3`. That margin is a loose simplification: Wiener's attack is only known to succeed
for `d < n**(1/4) / 3` (see `wiener_bound()`), so it should not be read as a rigorous bound.

Typical usage example:

    pub, priv = generate_keys(2048, PrimalityStrategy.MILLER_RABIN, 0.999)
    gen = RSAKeyGenerator(512, PrimalityStrategy.FERMAT, 0.99, max_attempts=10000)
    p, q = gen.generate_primes()
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import enum
import itertools
import logging
import secrets
from typing import Iterable

from rsalab.attackmath import integer_root
from rsalab.cryptomath import gcd
from rsalab.cryptomath import mod_inverse
from rsalab.keys import RSAKey
from rsalab.primality import get_primality_test
from rsalab.primality import PrimalityResult
from rsalab.primality import PrimalityStrategy
from rsalab.primality import validate_probability

logger = logging.getLogger(__name__)

DEFAULT_TARGET_PROBABILITY: float = 0.999
DEFAULT_STRATEGY: PrimalityStrategy = PrimalityStrategy.MILLER_RABIN
_MINIMUM_KEY_SIZE: int = 16
_SAFETY_DIVISOR: int = 3
# Exponent draws tried against one prime pair before new primes are generated.
_DRAWS_PER_PRIME_PAIR: int = 64


class RSAKeySize(enum.IntEnum):
    """Key sizes accepted by the public entry points."""
    BITS_1024 = 1024
    BITS_2048 = 2048
    BITS_3072 = 3072
    BITS_4096 = 4096


def validate_key_size(key_size: int) -> RSAKeySize:
    """Checks `key_size` against the supported sizes.

    Raises:
        ValueError: If the size is not one of `RSAKeySize`.
    """
    try:
        return RSAKeySize(key_size)
    except ValueError:
        raise ValueError(f"Unsupported key size {key_size}, use one of {[s.value for s in RSAKeySize]}.") from None


def wiener_bound(modulus: int) -> int:
    """Private exponents below this value are recoverable through Wiener's attack."""
    return integer_root(modulus, 4) // 3


def _attempts(cap: int | None) -> Iterable[int]:
    return itertools.count() if cap is None else range(cap)


class RSAKeyGenerator:
    """Generates RSA key pairs of a fixed size with a fixed primality test.

    Attributes:
        key_size: The bit length of the modulus.
        strategy: The primality test in use.
        target_probability: The confidence required from the primality oracle.
        exponent_bits: Exact bit length of the public exponent, or None for a random exponent below phi(n).
        max_attempts: Cap on each search loop, or None to search until success.
    """

    def __init__(self,
                 key_size: int,
                 strategy: PrimalityStrategy | str = DEFAULT_STRATEGY,
                 target_probability: float = DEFAULT_TARGET_PROBABILITY,
                 exponent_bits: int | None = None,
                 max_attempts: int | None = None) -> None:
        """Initialize the generator, validating the configuration.

        Args:
            key_size: The bit length of the modulus. Must be even and at least 16.
            strategy: The primality test to use.
            target_probability: Confidence for the primality oracle, in [0.5, 1).
            exponent_bits: Exact bit length of the public exponent. Optional, must be in [2, key_size).
            max_attempts: Cap on prime candidates and exponent draws. Optional, unbounded if not provided.

        Raises:
            ValueError: If any parameter is out of range.
        """
        validate_probability(target_probability)
        if key_size < _MINIMUM_KEY_SIZE or key_size % 2 != 0:
            raise ValueError(f"Key size must be an even number of at least {_MINIMUM_KEY_SIZE} bits.")
        if exponent_bits is not None and not 2 <= exponent_bits < key_size:
            raise ValueError("Exponent bit length must be in range [2, key_size).")
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("Attempt cap must be positive.")
        self.key_size = key_size
        self.strategy = PrimalityStrategy(strategy)
        self.target_probability = target_probability
        self.exponent_bits = exponent_bits
        self.max_attempts = max_attempts
        self._oracle = get_primality_test(self.strategy)

    @staticmethod
    def _random_start(bits: int) -> int:
        """A random odd value of exactly `bits` bits, top two bits set, not divisible by 3."""
        msk = (1 << bits - 1) | (1 << bits - 2) | 1
        while True:
            candidate = secrets.randbits(bits) | msk
            if candidate % 3:
                return candidate

    def generate_prime(self, bits: int) -> int:
        """Generate a probable prime of exactly `bits` bits.

        Args:
            bits: The bit length of the prime. Must be >= 3.

        Returns:
            A probable prime with its two top bits set.

        Raises:
            ValueError: If `bits` is below 3.
            RuntimeError: If `max_attempts` candidates were tested with no prime found.
        """
        if bits < 3:
            raise ValueError("Primes need at least 3 bits to carry both top bits and an odd low bit.")
        candidate = self._random_start(bits)
        for _ in _attempts(self.max_attempts):
            if candidate.bit_length() > bits:
                logger.debug("Prime walk overflowed %d bits, restarting.", bits)
                candidate = self._random_start(bits)
            if self._oracle.is_prime(candidate, self.target_probability) is PrimalityResult.PRIME:
                return candidate
            # Odd non-multiples of 3 are 1 or 5 mod 6, reached by alternating steps of 2 and 4.
            candidate += 2 if candidate % 6 == 5 else 4
        raise RuntimeError(f"Tested an improbable {self.max_attempts} candidates with no prime found.")

    def generate_primes(self) -> tuple[int, int]:
        """Generates two distinct primes of half the key size."""
        half = self.key_size // 2
        p = self.generate_prime(half)
        q = self.generate_prime(half)
        while p == q:  # (Un)Likely story.
            q = self.generate_prime(half)
        return p, q

    def _random_exponent(self, totient: int) -> int:
        if self.exponent_bits is None:
            return secrets.randbelow(totient - 3) + 3
        return secrets.randbits(self.exponent_bits) | (1 << self.exponent_bits - 1) | 1

    def generate_keys(self) -> tuple[RSAKey, RSAKey]:
        """Generates a fresh RSA key pair.

        Redraws the public exponent until it is invertible modulo phi(n) and the private exponent clears the
        safety margin. A prime pair is kept across redraws and only replaced after a long run of rejections, which
        only happens when the exponent is restricted to very few values.

        Returns:
            Tuple of (public key, private key).

        Raises:
            RuntimeError: If `max_attempts` exponents were drawn with no acceptable pair found.
        """
        n = totient = margin = 0
        for attempt in _attempts(self.max_attempts):
            if attempt % _DRAWS_PER_PRIME_PAIR == 0:
                p, q = self.generate_primes()
                n, totient = p * q, (p - 1) * (q - 1)
                margin = n // _SAFETY_DIVISOR
                del p, q
            e = self._random_exponent(totient)
            if e >= totient or gcd(e, totient) != 1:
                continue
            d = mod_inverse(e, totient)
            if d <= margin:
                logger.debug("Private exponent below the safety margin, redrawing.")
                continue
            logger.info("Generated %d-bit RSA key pair using the %s test.", n.bit_length(), self.strategy.value)
            return RSAKey(e, n), RSAKey(d, n)
        raise RuntimeError(f"Drew an improbable {self.max_attempts} exponents with no valid key pair.")


def generate_keys(key_size: int,
                  strategy: PrimalityStrategy | str = DEFAULT_STRATEGY,
                  target_probability: float = DEFAULT_TARGET_PROBABILITY) -> tuple[RSAKey, RSAKey]:
    """Generates an RSA key pair of one of the supported sizes.

    Args:
        key_size: The key size, one of `RSAKeySize`.
        strategy: The primality test to use.
        target_probability: Confidence for the primality oracle, in [0.5, 1).

    Returns:
        Tuple of (public key, private key).

    Raises:
        ValueError: If the configuration is invalid.
    """
    return RSAKeyGenerator(validate_key_size(key_size), strategy, target_probability).generate_keys()


def generate_weak_keys(key_size: int,
                       strategy: PrimalityStrategy | str = DEFAULT_STRATEGY,
                       target_probability: float = DEFAULT_TARGET_PROBABILITY,
                       exponent_bits: int | None = None,
                       max_attempts: int | None = None) -> tuple[RSAKey, RSAKey]:
    """Generates a key pair deliberately vulnerable to Wiener's attack.

    A pair with a short public exponent is generated and the roles of the exponents are swapped, so the private
    exponent ends up below `wiener_bound()`. For demonstration only.

    Args:
        key_size: The bit length of the modulus. Any size accepted by `RSAKeyGenerator`.
        strategy: The primality test to use.
        target_probability: Confidence for the primality oracle, in [0.5, 1).
        exponent_bits: Bit length of the private exponent. Defaults to `key_size // 4 - 2`.
        max_attempts: Cap on the search loops. Optional, unbounded if not provided.

    Returns:
        Tuple of (public key, private key) with a small private exponent.

    Raises:
        ValueError: If the configuration is invalid.
        RuntimeError: If a capped search ran out of attempts.
    """
    if exponent_bits is None:
        exponent_bits = max(2, key_size // 4 - 2)
    gen = RSAKeyGenerator(key_size, strategy, target_probability, exponent_bits, max_attempts)
    for _ in _attempts(max_attempts):
        small, large = gen.generate_keys()
        if small.exponent < wiener_bound(small.modulus):
            return large, small
        logger.debug("Exponent %d is not below the Wiener bound, regenerating.", small.exponent)
    raise RuntimeError(f"Generated an improbable {max_attempts} pairs with no weak exponent.")
