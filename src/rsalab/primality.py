"""Probabilistic primality oracle, with Fermat, Miller-Rabin and Solovay-Strassen strategies.

The shared driver lives in `PrimalityTest`: it rejects trivial inputs, derives the number of rounds needed for the
requested confidence and draws a random witness base for each round. Concrete strategies only provide the
per-round witness check and their per-round error bound. A strategy is picked once through `get_primality_test()`.

Typical usage example:

    oracle = get_primality_test(PrimalityStrategy.MILLER_RABIN)
    oracle.is_prime(561, 0.999)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import abc
import enum
import math
import secrets

from rsalab.cryptomath import gcd
from rsalab.cryptomath import jacobi_symbol
from rsalab.cryptomath import mod_pow


class PrimalityResult(enum.Enum):
    """Possible outcomes of a primality test."""
    PRIME = 1
    COMPOSITE = 0
    INDETERMINATE = -1


class PrimalityStrategy(enum.Enum):
    """Available probabilistic primality tests."""
    FERMAT = "fermat"
    MILLER_RABIN = "miller-rabin"
    SOLOVAY_STRASSEN = "solovay-strassen"


def validate_probability(target_probability: float) -> None:
    """Rejects confidence levels outside of [0.5, 1).

    Raises:
        ValueError: If `target_probability` is out of range.
    """
    if not 0.5 <= target_probability < 1:
        raise ValueError("Probability must be between 0.5 and less than 1.")


def iterations_count(target_probability: float, error_probability: float) -> int:
    """Number of rounds needed so the overall error drops below `1 - target_probability`.

    Args:
        target_probability: The desired confidence, in [0.5, 1).
        error_probability: Upper bound on the error of a single round.

    Returns:
        The number of rounds to perform, at least 1.
    """
    validate_probability(target_probability)
    return max(1, math.ceil(math.log(1 - target_probability) / math.log(error_probability)))


class PrimalityTest(abc.ABC):
    """Base class for the randomised compositeness tests.

    Attributes:
        error_probability: Upper bound on the probability that one round lets a composite through.
    """
    error_probability: float = 0.5

    def is_prime(self, value: int, target_probability: float) -> PrimalityResult:
        """Decides whether `value` is a probable prime.

        Args:
            value: The integer to test.
            target_probability: The desired confidence, in [0.5, 1).

        Returns:
            INDETERMINATE for values below 2, COMPOSITE if any round found a witness, PRIME otherwise.

        Raises:
            ValueError: If `target_probability` is out of range.
        """
        rounds = iterations_count(target_probability, self.error_probability)
        if value < 2:
            return PrimalityResult.INDETERMINATE
        if value in (2, 3):
            return PrimalityResult.PRIME
        if value % 2 == 0 or value % 3 == 0:
            return PrimalityResult.COMPOSITE
        for _ in range(rounds):
            a = secrets.randbelow(value - 2) + 2
            if gcd(value, a) != 1 or not self._witness(value, a):
                return PrimalityResult.COMPOSITE
        return PrimalityResult.PRIME

    @abc.abstractmethod
    def _witness(self, value: int, a: int) -> bool:
        """Runs one round of the test with base `a`.

        Args:
            value: Odd integer >= 5, coprime to 6, under test.
            a: Base in [2, value), coprime to `value`.

        Returns:
            True if `value` survives this round, False if `a` proves it composite.
        """


class FermatTest(PrimalityTest):
    """Fermat's little theorem test, guarded by a table of Carmichael numbers that would otherwise always pass."""
    error_probability = 0.5
    CARMICHAEL_NUMBERS = frozenset({
        561, 1105, 1729, 2465, 2821, 6601, 8911, 10585, 15841, 29341, 41041, 46657, 52633, 62745, 63973, 75361,
        101101, 115921, 126217, 162401, 172081, 188461, 252601, 278545, 294409, 314821, 334153, 340561, 399001,
        410041, 449065, 488881, 512461, 530881, 552721, 656601, 658801, 670033, 748657, 825265, 838201, 852841,
        997633, 1024651, 1033669, 1050985, 1058197, 1062341, 1078901, 1152271, 1193221, 1461241, 1588261, 1615681,
        1773289, 1857241, 1909001, 1929601, 2056321, 2090881, 2113921, 2433601, 2455921, 2508017, 2628073, 2704801,
        2722501, 2785453, 2944091, 3148213, 3341537, 3405611, 3990013, 4100413, 4490653, 4888813, 5124613, 5308813,
        5527213, 6566011, 6588013, 6700337, 7486571, 8252657, 8382013, 8528417, 9976331, 10246513, 10336691,
        10509853, 10581973, 10623413, 10789013, 11522713, 11932213, 14612413, 15882613
    })

    def _witness(self, value: int, a: int) -> bool:
        if value in self.CARMICHAEL_NUMBERS:
            return False
        return mod_pow(a, value - 1, value) == 1


class MillerRabinTest(PrimalityTest):
    """Miller-Rabin strong pseudoprime test."""
    # Conservative 0.5 per round rather than the textbook 0.25.
    error_probability = 0.5

    def _witness(self, value: int, a: int) -> bool:
        tw = value - 1
        s = (tw & -tw).bit_length() - 1
        d = tw >> s
        z = mod_pow(a, d, value)
        if z == 1 or z == tw:
            return True
        for _ in range(1, s):
            z = z * z % value
            if z == tw:
                return True
            if z == 1:
                return False
        return False


class SolovayStrassenTest(PrimalityTest):
    """Solovay-Strassen test comparing Euler's criterion with the Jacobi symbol."""
    error_probability = 0.25

    def _witness(self, value: int, a: int) -> bool:
        jacobi = jacobi_symbol(a, value)
        if jacobi == 0:
            return False
        euler = mod_pow(a, (value - 1) // 2, value)
        if euler == value - 1:
            euler = -1
        return euler == jacobi


_STRATEGIES: dict[PrimalityStrategy, type[PrimalityTest]] = {
    PrimalityStrategy.FERMAT: FermatTest,
    PrimalityStrategy.MILLER_RABIN: MillerRabinTest,
    PrimalityStrategy.SOLOVAY_STRASSEN: SolovayStrassenTest,
}


def get_primality_test(strategy: PrimalityStrategy | str) -> PrimalityTest:
    """Constructs the primality test for `strategy`.

    Args:
        strategy: A `PrimalityStrategy` or its value (e.g. "miller-rabin").

    Returns:
        A new instance of the concrete test.

    Raises:
        ValueError: If the strategy is unknown.
    """
    return _STRATEGIES[PrimalityStrategy(strategy)]()
