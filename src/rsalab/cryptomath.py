"""Number-theoretic primitives underpinning key generation, primality testing and the attacks.

Every function here is pure and deterministic. Python integers already carry arbitrary precision, so the functions
operate on plain `int` values and hold no state of their own.

Typical usage example:

    mod_pow(19, 123, 2000)
    g, x, y = gcd_extended(14124, 3951)
    jacobi_symbol(17, 21)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Performs modular exponentiation using binary square-and-multiply.

    Args:
        base: The base integer. Reduced modulo `modulus` before exponentiation.
        exponent: The exponent. Must be >= 0.
        modulus: The modulus. Must be > 0.

    Returns:
        `base**exponent mod modulus`.

    Raises:
        ValueError: If the exponent is negative or the modulus is not positive.
    """
    if exponent < 0:
        raise ValueError("Exponent must be non-negative.")
    if modulus <= 0:
        raise ValueError("Modulus must be positive.")
    result = 1 % modulus
    base %= modulus
    while exponent:
        if exponent & 1:
            result = result * base % modulus
        base = base * base % modulus
        exponent >>= 1
    return result


def gcd(a: int, b: int) -> int:
    """Euclidean greatest common divisor, always non-negative."""
    while b:
        a, b = b, a % b
    return abs(a)


def gcd_extended(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*x + b*y = g = gcd(a, b).

    Args:
        a: The first integer.
        b: The second integer.

    Returns:
        Greatest common divisor of two integers (non-negative).
        As well as the Bezout coefficients.
    """
    r0, r1 = a, b
    x0, x1, y0, y1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        x0, x1 = x1, x0 - q * x1
        y0, y1 = y1, y0 - q * y1
    if r0 < 0:
        return -r0, -x0, -y0
    return r0, x0, y0


def mod_inverse(a: int, modulus: int) -> int:
    """Computes the modular multiplicative inverse of `a`.

    Args:
        a: The value to invert.
        modulus: The modulus. Must be > 1.

    Returns:
        The inverse in range [0, modulus).

    Raises:
        ValueError: If the modulus is too small or `a` is not invertible.
    """
    if modulus <= 1:
        raise ValueError("Modulus must be greater than 1.")
    g, x, _ = gcd_extended(a, modulus)
    if g != 1:
        raise ValueError(f"{a} has no inverse modulo {modulus}.")
    if x < 0:
        x += modulus
    return x % modulus


def legendre_symbol(a: int, p: int) -> int:
    """Calculates the Legendre symbol (a/p) using Euler's criterion.

    Args:
        a: The integer whose quadratic residuosity is evaluated.
        p: An odd prime.

    Returns:
        1 if `a` is a quadratic residue modulo `p`, -1 if it is a non-residue, 0 if `p` divides `a`.

    Raises:
        ValueError: If `p` is not greater than 2.
        ArithmeticError: If Euler's criterion yields anything but 1 or p-1, i.e. `p` is not prime.
    """
    if p <= 2:
        raise ValueError("The Legendre symbol is defined only for odd primes.")
    if gcd(a, p) != 1:
        return 0
    powered = mod_pow(a, (p - 1) // 2, p)
    if powered == 1:
        return 1
    if powered == p - 1:
        return -1
    raise ArithmeticError(f"Unexpected Legendre symbol value {powered}. Ensure that {p} is prime.")


def jacobi_symbol(a: int, n: int) -> int:
    """Calculates the Jacobi symbol (a/n), the generalisation of the Legendre symbol to odd moduli.

    Args:
        a: Any integer. Negative values are reduced modulo `n`.
        n: An odd integer greater than 1.

    Returns:
        The Jacobi symbol value: 1, -1 or 0.

    Raises:
        ValueError: If `n` is even or not greater than 1.
    """
    if n <= 1 or n % 2 == 0:
        raise ValueError("n must be an odd integer greater than 1.")
    result = 1
    a %= n
    while a != 0:
        while a % 2 == 0:
            a //= 2
            if n % 8 in (3, 5):
                result = -result
        # Quadratic reciprocity.
        a, n = n, a
        if a % 4 == 3 and n % 4 == 3:
            result = -result
        a %= n
    return result if n == 1 else 0
