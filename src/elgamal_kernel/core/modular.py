from elgamal_kernel.core.errors import NoInverseExists


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Computes `base ** exponent % modulus` by square-and-multiply.

    Args:
        base: The base. Negative values are reduced modulo `modulus`.
        exponent: The exponent. Must be non-negative.
        modulus: The modulus. Must be positive.

    Returns:
        The residue in the range [0, modulus).
    """
    if exponent < 0:
        errmsg = "The exponent must be non-negative."
        raise ValueError(errmsg)
    if modulus <= 0:
        errmsg = "The modulus must be positive."
        raise ValueError(errmsg)

    result = 1 % modulus
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        exponent >>= 1
        base = (base * base) % modulus
    return result


def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """Runs the extended Euclidean algorithm.

    The coefficients are carried through a loop, so the call stack
    does not grow with the bit length of the operands.

    Returns:
        A tuple `(g, x, y)` such that `a * x + b * y == g`, where `g`
        is the greatest common divisor of `a` and `b`.
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_x, x = x, old_x - quotient * x
        old_y, y = y, old_y - quotient * y
    return old_r, old_x, old_y


def mod_inverse(a: int, m: int) -> int:
    """Computes the multiplicative inverse of `a` modulo `m`.

    Args:
        a: The integer to invert.
        m: The modulus. Must be positive.

    Returns:
        The integer `x` in the range [0, m) with `a * x % m == 1 % m`.

    Raises:
        NoInverseExists: `a` and `m` are not coprime.
    """
    if m <= 0:
        errmsg = "The modulus must be positive."
        raise ValueError(errmsg)

    g, x, _ = extended_gcd(a % m, m)
    if g != 1:
        errmsg = f"No inverse of {a} modulo {m}: gcd is {g}."
        raise NoInverseExists(errmsg)
    return x % m
