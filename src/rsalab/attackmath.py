"""Arithmetic used by the RSA attacks: continued fractions, convergents, integer roots and natural-root quadratics.

Typical usage example:

    continued_fraction(77, 13)
    convergents([5, 1, 12])
    solve_quadratic(2, -10, 12)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsalab.cryptomath import gcd


def continued_fraction(numerator: int, denominator: int) -> list[int]:
    """Expands `numerator / denominator` into its continued fraction.

    Standard Euclidean extraction of the partial quotients.

    Args:
        numerator: The numerator of the ratio. If negative, only the first term is negated.
        denominator: The denominator. Must be positive.

    Returns:
        The partial quotients [a0, a1, ...].

    Raises:
        ValueError: If the denominator is not positive or the terms are not coprime.
    """
    if denominator <= 0:
        raise ValueError("Denominator must be positive.")
    if gcd(numerator, denominator) != 1:
        raise ValueError("Numerator and denominator must be coprime.")
    negative = numerator < 0
    numerator = abs(numerator)
    result = []
    while denominator:
        result.append(numerator // denominator)
        numerator, denominator = denominator, numerator % denominator
    if negative:
        result[0] = -result[0]
    return result


def convergents(coefficients: list[int]) -> list[tuple[int, int]]:
    """Builds the convergents of a continued fraction.

    Args:
        coefficients: The partial quotients. Must not be empty.

    Returns:
        (numerator, denominator) pairs, starting with the seeds (1, 0) and (a0, 1).

    Raises:
        ValueError: If no coefficients are given.
    """
    if not coefficients:
        raise ValueError("At least one coefficient is required.")
    result = [(1, 0), (coefficients[0], 1)]
    for a in coefficients[1:]:
        (p1, q1), (p2, q2) = result[-1], result[-2]
        result.append((a * p1 + p2, a * q1 + q2))
    return result


def fraction_convergents(numerator: int, denominator: int) -> list[tuple[int, int]]:
    """Convergents of the continued fraction of `numerator / denominator`."""
    return convergents(continued_fraction(numerator, denominator))


def integer_root(n: int, k: int) -> int:
    """Floor of the `k`-th root of `n`, by integer Newton iteration.

    Args:
        n: The radicand. Must be >= 0.
        k: The degree of the root. Must be >= 1.

    Returns:
        The largest `r` such that `r**k <= n`.

    Raises:
        ValueError: If `n` is negative or `k` is not positive.
    """
    if n < 0:
        raise ValueError("Cannot take the root of a negative number.")
    if k < 1:
        raise ValueError("Root degree must be positive.")
    if n < 2 or k == 1:
        return n
    # Initial guess above the root so the iteration descends monotonically.
    x = 1 << (n.bit_length() + k - 1) // k
    while True:
        y = ((k - 1) * x + n // x**(k - 1)) // k
        if y >= x:
            return x
        x = y


def integer_sqrt(n: int) -> tuple[int, bool]:
    """Integer square root by Newton iteration.

    Args:
        n: The radicand. Must be >= 0.

    Returns:
        Tuple of (floor of the square root, whether `n` is a perfect square).
    """
    root = integer_root(n, 2)
    return root, root * root == n


def solve_quadratic(a: int, b: int, c: int) -> list[int]:
    """Solves ax^2 + bx + c = 0 in the natural numbers.

    Both roots are returned only when the discriminant is a positive perfect square and both roots are positive
    integers. Anything else, including a double root or a degenerate (linear) equation, gives no roots at all.

    Args:
        a: Coefficient of x^2.
        b: Coefficient of x.
        c: Constant term.

    Returns:
        [x1, x2] with x1 from the + branch, or an empty list.
    """
    if a == 0:
        return []
    discriminant = b * b - 4 * a * c
    # A double root cannot be a pair of distinct RSA primes.
    if discriminant <= 0:
        return []
    root, exact = integer_sqrt(discriminant)
    if not exact:
        return []
    denominator = 2 * a
    numerator1 = -b + root
    numerator2 = -b - root
    if numerator1 % denominator or numerator2 % denominator:
        return []
    x1 = numerator1 // denominator
    x2 = numerator2 // denominator
    if x1 <= 0 or x2 <= 0:
        return []
    return [x1, x2]
