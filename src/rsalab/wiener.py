"""Wiener's low private exponent attack on RSA.

When `d < n**(1/4) / 3` the fraction k/d, with `e*d - k*phi(n) = 1`, is one of the convergents of `e/n`. Each
convergent is therefore tried as a candidate: it yields a candidate phi(n), which is only accepted if it makes
`x^2 - (n - phi + 1)x + n` split into two natural roots, the primes of the modulus.

Typical usage example:

    d = perform_wiener_attack(pub)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from rsalab.attackmath import fraction_convergents
from rsalab.attackmath import solve_quadratic
from rsalab.keys import RSAKey

logger = logging.getLogger(__name__)


class ExponentNotFoundError(LookupError):
    """No convergent of e/n recovered the private exponent. Expected for keys with a large private exponent."""


class WienersAttack:
    """Recovers small private exponents from a public key alone."""

    def factor(self, public_key: RSAKey) -> tuple[int, int, int]:
        """Runs the attack, returning the factorisation alongside the exponent.

        Args:
            public_key: The public key under attack.

        Returns:
            Tuple of (private exponent, p, q).

        Raises:
            ExponentNotFoundError: If every convergent was rejected.
            ValueError: If the exponent and modulus are not coprime.
        """
        e, n = public_key
        # The first two convergents are the (1, 0) seed and (e // n, 1).
        for k, d in fraction_convergents(e, n)[2:]:
            if k == 0 or (e * d - 1) % k:
                continue
            phi = (e * d - 1) // k
            roots = solve_quadratic(1, phi - n - 1, n)
            if len(roots) == 2:
                logger.info("Recovered a %d-bit private exponent.", d.bit_length())
                return d, roots[0], roots[1]
            logger.debug("Convergent denominator %d rejected.", d)
        raise ExponentNotFoundError("Decryption exponent not found.")

    def perform(self, public_key: RSAKey) -> int:
        """Runs the attack.

        Args:
            public_key: The public key under attack.

        Returns:
            The private exponent.

        Raises:
            ExponentNotFoundError: If every convergent was rejected.
        """
        return self.factor(public_key)[0]


def perform_wiener_attack(public_key: RSAKey) -> int:
    """Recovers the private exponent of `public_key`, see `WienersAttack.perform()`."""
    return WienersAttack().perform(public_key)
